"""
Sky State Manager

Owns the application state and is the single place where it changes:
  - catalog and the visible-star list for the current instant
  - the viewport (one variant, chosen at start-up)
  - the simulated clock
  - session persistence (viewport state as JSON)

Core math modules stay stateless; they are called with fields of AppState.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from core.celestial_math import DEFAULT_OBSERVER, visible_stars
from core.scene import build_frame, cardinal_labels
from core.time_controller import TimeController
from core.types import CardinalLabel, ObserverLocation, RenderedStar, Star, VisibleStar
from core.viewport import SkyViewport, create_viewport
from ui.interaction import InteractionController

logger = logging.getLogger(__name__)

SESSION_VERSION = 1


@dataclass
class AppState:
    """Everything the star map knows at one moment."""
    viewport: SkyViewport
    observer: ObserverLocation = DEFAULT_OBSERVER
    catalog: List[Star] = field(default_factory=list)
    visible: List[VisibleStar] = field(default_factory=list)
    timestamp: Optional[datetime] = None


class SkyController:
    """
    Top-level controller for the star map.

    Responsibilities:
    - Recompute visible stars from one timestamp per refresh
    - Forward input to the interaction controller
    - Build render frames on demand
    - Save / restore the viewport between runs
    """

    def __init__(self, catalog: Iterable[Star], mode: str = "pov",
                 width: int = 1280, height: int = 800,
                 observer: ObserverLocation = DEFAULT_OBSERVER,
                 clock: Optional[TimeController] = None):
        self.state = AppState(viewport=create_viewport(mode, width, height),
                              observer=observer, catalog=list(catalog))
        self.clock = clock or TimeController()
        self.interaction = InteractionController(self.state.viewport)
        self.needs_render = True

    @property
    def viewport(self) -> SkyViewport:
        return self.state.viewport

    @property
    def mode(self) -> str:
        return self.state.viewport.mode

    # -----------------------------------------------------------------------
    # Time
    # -----------------------------------------------------------------------

    def refresh(self, when: Optional[datetime] = None):
        """Recompute horizontal positions for the whole catalog at one instant."""
        when = self.clock.utc if when is None else when
        self.state.timestamp = when
        self.state.visible = visible_stars(self.state.catalog, when, self.state.observer)
        self.needs_render = True
        logger.debug("%d of %d stars above the horizon at %s",
                     len(self.state.visible), len(self.state.catalog), when.isoformat())

    def tick(self, dt: float) -> bool:
        """Advance the clock; recompute when the refresh interval has elapsed."""
        if self.clock.step(dt):
            self.refresh()
            return True
        return False

    # -----------------------------------------------------------------------
    # Input / output
    # -----------------------------------------------------------------------

    def handle_events(self, events) -> bool:
        changed = self.interaction.handle_events(events)
        if changed:
            self.needs_render = True
        return changed

    def resize(self, width: int, height: int):
        self.state.viewport.resize(width, height)
        self.needs_render = True

    def frame(self) -> List[RenderedStar]:
        self.needs_render = False
        return build_frame(self.state.visible, self.state.viewport)

    def labels(self) -> List[CardinalLabel]:
        return cardinal_labels(self.state.viewport)

    # -----------------------------------------------------------------------
    # Session persistence
    # -----------------------------------------------------------------------

    def save_session(self, filepath: str | Path) -> bool:
        """
        Save the viewport state to a JSON file

        Returns:
            True if written successfully
        """
        session = {
            "version": SESSION_VERSION,
            "mode": self.mode,
            "viewport": self.state.viewport.get_state(),
        }
        try:
            Path(filepath).write_text(json.dumps(session, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to save session to %s: %s", filepath, e)
            return False
        logger.info("Session saved to %s", filepath)
        return True

    def load_session(self, filepath: str | Path) -> bool:
        """
        Restore a viewport state saved by save_session()

        A session saved in another display mode is ignored.

        Returns:
            True if the state was restored
        """
        try:
            session = json.loads(Path(filepath).read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info("No session file at %s", filepath)
            return False
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load session %s: %s", filepath, e)
            return False

        if not isinstance(session, dict) or not isinstance(session.get("viewport"), dict):
            logger.warning("Ignoring malformed session file %s", filepath)
            return False
        if session.get("mode") != self.mode:
            logger.info("Session %s is for mode %r, current mode is %r",
                        filepath, session.get("mode"), self.mode)
            return False

        try:
            self.state.viewport.set_state(session["viewport"])
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring invalid viewport state in %s: %s", filepath, e)
            return False

        self.needs_render = True
        logger.info("Session loaded from %s", filepath)
        return True
