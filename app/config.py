
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

from core.errors import ConfigError

ENV_PREFIX = "SKYMAP_"
DISPLAY_MODES = ("pov", "allsky")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Runtime settings for the star map."""
    catalog_path: Path = Path("data/hygdata_v40.csv")
    magnitude_limit: float = 6.0
    csv_separator: str = ";"
    mode: str = "pov"             # "pov" perspective camera, "allsky" azimuthal disk
    width: int = 1280
    height: int = 800
    fps: int = 60
    refresh_interval: float = 1.0  # seconds between sky recomputes
    session_file: Path = Path("skymap_session.json")
    log_level: str = "INFO"

    def __post_init__(self):
        self.catalog_path = Path(self.catalog_path)
        self.session_file = Path(self.session_file)
        self.mode = self.mode.lower()
        self.log_level = self.log_level.upper()
        if self.mode not in DISPLAY_MODES:
            raise ConfigError(f"mode must be one of {DISPLAY_MODES}, got {self.mode!r}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"window size must be positive, got {self.width}x{self.height}")
        if self.refresh_interval <= 0:
            raise ConfigError("refresh_interval must be > 0")
        if not self.csv_separator:
            raise ConfigError("csv_separator must not be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build a config from SKYMAP_* environment variables.

        e.g. SKYMAP_MODE=allsky SKYMAP_MAGNITUDE_LIMIT=5.5
        Unset variables keep their defaults.
        """
        environ = os.environ if environ is None else environ
        kwargs = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            kind = type(f.default)
            try:
                kwargs[f.name] = kind(raw) if kind in (int, float) else raw
            except ValueError as e:
                raise ConfigError(f"{ENV_PREFIX}{f.name.upper()}={raw!r}: {e}") from e
        return cls(**kwargs)
