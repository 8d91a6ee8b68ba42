
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Star:
    id: str
    ra: float            # right ascension, decimal hours (0-24), J2000
    dec: float           # declination, degrees
    mag: float
    color_index: float = 0.0
    name: Optional[str] = None
    constellation: Optional[str] = None
    distance: Optional[float] = None
    spectral_type: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ObserverLocation:
    latitude: float      # positive North
    longitude: float     # positive East
    name: str = ""


@dataclass(frozen=True, slots=True)
class HorizontalPosition:
    altitude: float      # degrees above the horizon
    azimuth: float       # degrees from North, clockwise


@dataclass(frozen=True, slots=True)
class VisibleStar:
    star: Star
    altitude: float
    azimuth: float

    @property
    def mag(self) -> float:
        return self.star.mag


@dataclass(frozen=True, slots=True)
class ScreenPoint:
    x: float
    y: float
    visible: bool = True
    # 0 at the view centre, 1 at the edge of the horizontal half-FOV
    distance_from_center: float = 0.0
    angular_distance: float = 0.0


@dataclass(frozen=True, slots=True)
class RenderedStar:
    screen_x: float
    screen_y: float
    magnitude: float
    color_index: float
    altitude: float
    size: float
    distance_from_center: float = 0.0
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CardinalLabel:
    screen_x: float
    screen_y: float
    label: str
