"""
Azimuthal Viewport

All-sky chart using an azimuthal-equidistant projection:
  centre = zenith, edge = horizon (alt = 0), North = top.
Zoom scales the disk and pan shifts it; the projection itself never
depends on a viewing direction.
"""

from __future__ import annotations
import math
from typing import Any, Dict, Optional

from .coords import clamp, to_radians
from .types import ScreenPoint
from .viewport import SkyViewport

MIN_ZOOM, MAX_ZOOM = 0.5, 10.0
RADIUS_MARGIN = 20.0         # px between the horizon circle and the surface edge
WHEEL_ZOOM_IN = 1.1
WHEEL_ZOOM_OUT = 0.9
KEY_PAN_STEP = 40.0          # px per arrow key press


class AzimuthalViewport(SkyViewport):

    mode = "allsky"

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.min_zoom = MIN_ZOOM
        self.max_zoom = MAX_ZOOM
        self.zoom = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0
        self._update_geometry()

    def _update_geometry(self):
        self.center_x = self.width / 2.0
        self.center_y = self.height / 2.0
        self.projection_radius = min(self.width, self.height) / 2.0 - RADIUS_MARGIN

    def resize(self, width: int, height: int):
        super().resize(width, height)
        self._update_geometry()

    # -----------------------------------------------------------------------
    # Projection
    # -----------------------------------------------------------------------

    def world_to_screen(self, azimuth: float, altitude: float) -> Optional[ScreenPoint]:
        """
        (az, alt) -> screen point; None below the horizon.

        Radius grows linearly with zenith distance: zenith at the centre,
        horizon at projection_radius * zoom.
        """
        if altitude < 0:
            return None

        zenith_distance = (90.0 - altitude) / 90.0
        r = zenith_distance * self.projection_radius * self.zoom
        angle = to_radians(azimuth - 90.0)   # az 0 (North) -> screen up

        return ScreenPoint(
            x=self.center_x + r * math.cos(angle) + self.offset_x,
            y=self.center_y + r * math.sin(angle) + self.offset_y,
            visible=True,
            distance_from_center=zenith_distance,
            angular_distance=90.0 - altitude,
        )

    def project(self, azimuth: float, altitude: float) -> Optional[ScreenPoint]:
        return self.world_to_screen(azimuth, altitude)

    def horizon_circle(self) -> tuple[float, float, float]:
        """(centre_x, centre_y, radius) of the horizon on screen."""
        return (self.center_x + self.offset_x, self.center_y + self.offset_y,
                self.projection_radius * self.zoom)

    def altitude_circle_radius(self, altitude: float) -> float:
        return ((90.0 - altitude) / 90.0) * self.projection_radius * self.zoom

    # -----------------------------------------------------------------------
    # Mutators
    # -----------------------------------------------------------------------

    def zoom_at(self, factor: float, pivot_x: float, pivot_y: float):
        """
        Zoom by `factor` keeping the sky point under (pivot_x, pivot_y) fixed.

        The new zoom is clamped to [min_zoom, max_zoom]; the offset is
        corrected with the factor that was actually applied.
        """
        old_zoom = self.zoom
        new_zoom = clamp(old_zoom * factor, self.min_zoom, self.max_zoom)
        if new_zoom == old_zoom:
            return
        applied = new_zoom / old_zoom

        rel_x = pivot_x - self.center_x - self.offset_x
        rel_y = pivot_y - self.center_y - self.offset_y
        self.zoom = new_zoom
        self.offset_x -= rel_x * (applied - 1.0)
        self.offset_y -= rel_y * (applied - 1.0)

    def set_zoom(self, zoom: float):
        self.zoom = clamp(zoom, self.min_zoom, self.max_zoom)

    def pan(self, delta_x: float, delta_y: float):
        self.offset_x += delta_x
        self.offset_y += delta_y

    def reset_view(self):
        self.zoom = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    def reset(self):
        self.reset_view()

    def zoom_level(self) -> float:
        return self.zoom

    # -----------------------------------------------------------------------
    # Session state
    # -----------------------------------------------------------------------

    def get_state(self) -> Dict[str, float]:
        return {"zoom_level": self.zoom, "offset_x": self.offset_x, "offset_y": self.offset_y}

    def set_state(self, state: Dict[str, Any]):
        if state.get("zoom_level") is not None:
            self.set_zoom(float(state["zoom_level"]))
        if state.get("offset_x") is not None:
            self.offset_x = float(state["offset_x"])
        if state.get("offset_y") is not None:
            self.offset_y = float(state["offset_y"])

    # -----------------------------------------------------------------------
    # Gestures
    # -----------------------------------------------------------------------

    def apply_drag(self, baseline: Dict[str, float], dx: float, dy: float):
        self.offset_x = baseline["offset_x"] + dx
        self.offset_y = baseline["offset_y"] + dy

    def apply_pinch(self, baseline: Dict[str, float], scale: float):
        if scale <= 0:
            return
        self.set_zoom(baseline["zoom_level"] * scale)

    def apply_wheel(self, direction: int, x: float, y: float):
        # Scroll up shrinks the disk (zoom out)
        self.zoom_at(WHEEL_ZOOM_OUT if direction > 0 else WHEEL_ZOOM_IN, x, y)

    def apply_keys(self, dx: int, dy: int):
        # Arrow moves the view, so the sky slides the other way
        self.pan(-dx * KEY_PAN_STEP, dy * KEY_PAN_STEP)
