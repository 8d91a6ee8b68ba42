"""
Sky Viewport

Common interface for the two ways of looking at the sky:
  - PerspectiveCamera   point-of-view gnomonic projection ("pov")
  - AzimuthalViewport   full-sky azimuthal-equidistant disk ("allsky")

The interaction controller and the scene builder only talk to this
interface; the variant is chosen once at start-up by create_viewport().
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .types import ScreenPoint

# Edge margin (px) used when deciding if a projected point is on screen
SCREEN_MARGIN = 10.0


class SkyViewport(ABC):
    """Abstract projection + interaction target."""

    mode: str = ""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    @abstractmethod
    def project(self, azimuth: float, altitude: float) -> Optional[ScreenPoint]:
        """Horizontal coordinates (degrees) -> screen point, or None if hidden."""

    @abstractmethod
    def get_state(self) -> Dict[str, float]:
        """Plain JSON-serialisable snapshot."""

    @abstractmethod
    def set_state(self, state: Dict[str, Any]):
        """Restore a snapshot produced by get_state(); missing keys are kept."""

    @abstractmethod
    def reset(self):
        """Back to the default view."""

    @abstractmethod
    def zoom_level(self) -> float:
        """Relative magnification, 1.0 = default."""

    @abstractmethod
    def apply_drag(self, baseline: Dict[str, float], dx: float, dy: float):
        """Single-pointer drag of (dx, dy) px measured from the gesture start."""

    @abstractmethod
    def apply_pinch(self, baseline: Dict[str, float], scale: float):
        """Pinch with scale = current / baseline finger distance."""

    @abstractmethod
    def apply_wheel(self, direction: int, x: float, y: float):
        """Wheel notch; direction > 0 is scroll up. (x, y) is the cursor."""

    @abstractmethod
    def apply_keys(self, dx: int, dy: int):
        """Arrow-key step; dx, dy in {-1, 0, 1}."""

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height

    def is_on_screen(self, x: float, y: float, margin: float = SCREEN_MARGIN) -> bool:
        return (-margin <= x <= self.width + margin and
                -margin <= y <= self.height + margin)

    def describe(self) -> str:
        return f"{self.zoom_level():.1f}x"


def create_viewport(mode: str, width: int, height: int) -> SkyViewport:
    """Build the viewport variant for a display mode ("pov" or "allsky")."""
    from .azimuthal_viewport import AzimuthalViewport
    from .perspective_camera import PerspectiveCamera

    variants = {
        PerspectiveCamera.mode: PerspectiveCamera,
        AzimuthalViewport.mode: AzimuthalViewport,
    }
    try:
        cls = variants[mode]
    except KeyError:
        raise ValueError(f"Unknown display mode {mode!r}; expected one of {sorted(variants)}") from None
    return cls(width, height)
