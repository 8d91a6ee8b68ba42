"""
Core sky math: time, coordinates, projections.

Usage:
    from core import visible_stars, create_viewport
    visible = visible_stars(catalog, datetime.now(timezone.utc))
    viewport = create_viewport("pov", 1280, 800)
    frame = build_frame(visible, viewport)
"""

from .astro_time import julian_day, greenwich_sidereal_time, local_sidereal_time
from .azimuthal_viewport import AzimuthalViewport
from .celestial_math import (
    DEFAULT_OBSERVER,
    calculate_star_size,
    equatorial_to_horizontal,
    is_star_visible,
    visible_stars,
)
from .coords import normalize_angle, to_degrees, to_radians
from .perspective_camera import PerspectiveCamera
from .scene import build_frame, cardinal_labels
from .types import (
    CardinalLabel,
    HorizontalPosition,
    ObserverLocation,
    RenderedStar,
    ScreenPoint,
    Star,
    VisibleStar,
)
from .viewport import SkyViewport, create_viewport

__all__ = [
    "julian_day",
    "greenwich_sidereal_time",
    "local_sidereal_time",
    "AzimuthalViewport",
    "DEFAULT_OBSERVER",
    "calculate_star_size",
    "equatorial_to_horizontal",
    "is_star_visible",
    "visible_stars",
    "normalize_angle",
    "to_degrees",
    "to_radians",
    "PerspectiveCamera",
    "build_frame",
    "cardinal_labels",
    "CardinalLabel",
    "HorizontalPosition",
    "ObserverLocation",
    "RenderedStar",
    "ScreenPoint",
    "Star",
    "VisibleStar",
    "SkyViewport",
    "create_viewport",
]
