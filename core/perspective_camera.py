"""
Perspective Camera

Point-of-view gnomonic projection centred on a look direction (az, alt),
as if standing on the ground and looking at the sky: straight lines stay
straight and the horizon is a horizontal line on screen.

Coordinate system
-----------------
- Horizon frame:  X = East, Y = North, Z = Zenith
- Screen centre = (azimuth, altitude) of the camera
- Screen +X     = right, screen +Y = down
- `fov` is the full *horizontal* field of view in degrees; the vertical
  FOV follows from the aspect ratio.
"""

from __future__ import annotations
import math
from typing import Any, Dict, Optional

from .coords import altaz_to_vector, clamp, normalize_angle, to_degrees, to_radians
from .types import ScreenPoint
from .viewport import SkyViewport

DEFAULT_AZIMUTH = 180.0
DEFAULT_ALTITUDE = 30.0
DEFAULT_ALTITUDE_PORTRAIT = 50.0
DEFAULT_FOV = 90.0

MIN_FOV, MAX_FOV = 20.0, 140.0
MIN_ALTITUDE, MAX_ALTITUDE = -5.0, 90.0

ROTATION_SENSITIVITY = 0.3   # degrees per dragged pixel
WHEEL_STEP = 0.1             # FOV change per wheel notch
KEY_STEP_FRACTION = 0.15     # arrow key rotation as a fraction of the FOV

_COMPASS = ("North", "North-East", "East", "South-East",
            "South", "South-West", "West", "North-West")


class PerspectiveCamera(SkyViewport):
    """
    Camera state (azimuth, altitude, fov) plus the gnomonic projection.

    Every mutator leaves azimuth in [0, 360) and altitude / fov inside
    their ranges; out-of-range requests are clamped to the nearest bound.
    """

    mode = "pov"

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.min_fov = MIN_FOV
        self.max_fov = MAX_FOV
        self.min_altitude = MIN_ALTITUDE
        self.max_altitude = MAX_ALTITUDE

        # Taller-than-wide surfaces (phones) look higher up by default
        portrait = width < height
        self.default_azimuth = DEFAULT_AZIMUTH
        self.default_altitude = DEFAULT_ALTITUDE_PORTRAIT if portrait else DEFAULT_ALTITUDE
        self.default_fov = DEFAULT_FOV

        self.azimuth = self.default_azimuth
        self.altitude = self.default_altitude
        self.fov = self.default_fov

    # -----------------------------------------------------------------------
    # Projection
    # -----------------------------------------------------------------------

    def get_vertical_fov(self) -> float:
        return self.fov / (self.width / self.height)

    def project(self, azimuth: float, altitude: float) -> Optional[ScreenPoint]:
        """
        Project (az, alt) -> screen point.

        Returns None when the star is behind the camera (>= 90 deg away)
        or outside the half-diagonal of the field of view.
        """
        sx, sy, sz = altaz_to_vector(altitude, azimuth)
        cx, cy, cz = altaz_to_vector(self.altitude, self.azimuth)

        dot = sx * cx + sy * cy + sz * cz
        if dot <= 0:
            return None

        separation = to_degrees(math.acos(clamp(dot, -1.0, 1.0)))
        half_diagonal = math.hypot(self.fov / 2.0, self.get_vertical_fov() / 2.0)
        if separation > half_diagonal:
            return None

        # Local tangent frame: right is horizontal, up completes the basis
        cam_az = to_radians(self.azimuth)
        cam_alt = to_radians(self.altitude)
        rx, ry = math.cos(cam_az), -math.sin(cam_az)
        ux = -math.sin(cam_alt) * math.sin(cam_az)
        uy = -math.sin(cam_alt) * math.cos(cam_az)
        uz = math.cos(cam_alt)

        # Component orthogonal to the view direction, scaled by 1/dot
        px, py, pz = sx - dot * cx, sy - dot * cy, sz - dot * cz
        plane_x = (px * rx + py * ry) / dot
        plane_y = (px * ux + py * uy + pz * uz) / dot

        pixel_scale = self.width / (2.0 * math.tan(to_radians(self.fov) / 2.0))
        return ScreenPoint(
            x=self.width / 2.0 + plane_x * pixel_scale,
            y=self.height / 2.0 - plane_y * pixel_scale,
            visible=True,
            distance_from_center=separation / (self.fov / 2.0),
            angular_distance=separation,
        )

    def project_cardinal_point(self, cardinal_azimuth: float) -> Optional[ScreenPoint]:
        return self.project(cardinal_azimuth, 0.0)

    # -----------------------------------------------------------------------
    # Horizon
    # -----------------------------------------------------------------------

    def is_horizon_visible(self) -> bool:
        return (self.altitude - self.get_vertical_fov() / 2.0) <= 0

    def get_horizon_y(self) -> Optional[float]:
        """Screen Y of the horizon line, or None when it is below the view."""
        if not self.is_horizon_visible():
            return None
        return (0.5 + self.altitude / self.get_vertical_fov()) * self.height

    # -----------------------------------------------------------------------
    # Mutators
    # -----------------------------------------------------------------------

    def rotate(self, delta_az: float, delta_alt: float):
        """Turn the view; azimuth wraps, altitude is clamped (no flip over the zenith)."""
        self.azimuth = normalize_angle(self.azimuth + delta_az)
        self.altitude = clamp(self.altitude + delta_alt, self.min_altitude, self.max_altitude)

    def zoom(self, factor: float):
        """factor < 1 zooms in (narrower FOV), > 1 zooms out."""
        self.set_fov(self.fov * factor)

    def set_fov(self, fov: float):
        self.fov = clamp(fov, self.min_fov, self.max_fov)

    def look_at(self, azimuth: float, altitude: float):
        self.azimuth = normalize_angle(azimuth)
        self.altitude = clamp(altitude, self.min_altitude, self.max_altitude)

    def reset(self):
        self.azimuth = self.default_azimuth
        self.altitude = self.default_altitude
        self.fov = self.default_fov

    # -----------------------------------------------------------------------
    # Read-outs
    # -----------------------------------------------------------------------

    def get_direction_name(self) -> str:
        # Sector i covers [45i - 22.5, 45i + 22.5)
        sector = int(normalize_angle(self.azimuth + 22.5) // 45.0) % 8
        return _COMPASS[sector]

    def get_direction_description(self) -> str:
        return f"{self.get_direction_name()} {round(self.altitude)}°"

    def get_zoom_level(self) -> float:
        return self.default_fov / self.fov

    def zoom_level(self) -> float:
        return self.get_zoom_level()

    def describe(self) -> str:
        return f"{self.get_direction_description()}  FOV {round(self.fov)}°  {self.get_zoom_level():.1f}x"

    # -----------------------------------------------------------------------
    # Session state
    # -----------------------------------------------------------------------

    def get_state(self) -> Dict[str, float]:
        return {"azimuth": self.azimuth, "altitude": self.altitude, "fov": self.fov}

    def set_state(self, state: Dict[str, Any]):
        if state.get("azimuth") is not None:
            self.azimuth = normalize_angle(float(state["azimuth"]))
        if state.get("altitude") is not None:
            self.altitude = clamp(float(state["altitude"]), self.min_altitude, self.max_altitude)
        if state.get("fov") is not None:
            self.set_fov(float(state["fov"]))

    # -----------------------------------------------------------------------
    # Gestures
    # -----------------------------------------------------------------------

    def apply_drag(self, baseline: Dict[str, float], dx: float, dy: float):
        # Dragging right turns left; dragging down looks up
        self.azimuth = normalize_angle(baseline["azimuth"] - dx * ROTATION_SENSITIVITY)
        self.altitude = clamp(baseline["altitude"] + dy * ROTATION_SENSITIVITY,
                              self.min_altitude, self.max_altitude)

    def apply_pinch(self, baseline: Dict[str, float], scale: float):
        if scale <= 0:
            return
        # Fingers apart -> larger scale -> narrower FOV
        self.set_fov(baseline["fov"] / scale)

    def apply_wheel(self, direction: int, x: float, y: float):
        # Scroll up widens the view
        self.zoom(1.0 + WHEEL_STEP if direction > 0 else 1.0 - WHEEL_STEP)

    def apply_keys(self, dx: int, dy: int):
        step = self.fov * KEY_STEP_FRACTION
        self.rotate(dx * step, dy * step)
