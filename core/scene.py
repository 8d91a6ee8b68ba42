
from __future__ import annotations
from typing import Iterable, List

from .celestial_math import calculate_star_size
from .types import CardinalLabel, RenderedStar, VisibleStar
from .viewport import SkyViewport

CARDINAL_POINTS = (("N", 0.0), ("NE", 45.0), ("E", 90.0), ("SE", 135.0),
                   ("S", 180.0), ("SW", 225.0), ("W", 270.0), ("NW", 315.0))


def build_frame(visible: Iterable[VisibleStar], viewport: SkyViewport) -> List[RenderedStar]:
    """
    Project the current visible stars for one frame.

    Keeps the incoming (dimmest first) order and drops anything the
    viewport hides or that lands outside the surface.
    """
    zoom = viewport.zoom_level()
    frame: List[RenderedStar] = []
    for v in visible:
        pt = viewport.project(v.azimuth, v.altitude)
        if pt is None or not pt.visible or not viewport.is_on_screen(pt.x, pt.y):
            continue
        frame.append(RenderedStar(
            screen_x=pt.x,
            screen_y=pt.y,
            magnitude=v.star.mag,
            color_index=v.star.color_index,
            altitude=v.altitude,
            size=calculate_star_size(v.star.mag, zoom),
            distance_from_center=pt.distance_from_center,
            name=v.star.name,
        ))
    return frame


def cardinal_labels(viewport: SkyViewport) -> List[CardinalLabel]:
    """Compass labels on the horizon that fall on screen."""
    labels = []
    for label, az in CARDINAL_POINTS:
        pt = viewport.project(az, 0.0)
        if pt is not None and viewport.is_on_screen(pt.x, pt.y, margin=20):
            labels.append(CardinalLabel(screen_x=pt.x, screen_y=pt.y, label=label))
    return labels
