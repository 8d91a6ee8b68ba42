"""
Celestial Mathematics

Coordinate conversions for the star map:
- RA/Dec (J2000) -> Altitude/Azimuth for the fixed observer
- Horizon filtering of a whole catalog at one instant
- Display helpers (star size, opacity, B-V colour)
"""

import math
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .astro_time import local_sidereal_time
from .coords import clamp, normalize_angle, to_degrees, to_radians
from .types import HorizontalPosition, ObserverLocation, Star, VisibleStar

# Default observer: Lyon, France
DEFAULT_OBSERVER = ObserverLocation(latitude=45.757814, longitude=4.832011,
                                    name="Lyon, France")

# Below this |cos(alt)| the star is at the zenith and azimuth is undefined
ZENITH_EPSILON = 1e-4

HOURS_TO_DEGREES = 15.0

STAR_BASE_SIZE = 0.5
STAR_MIN_SIZE = 0.5
STAR_MAX_SIZE = 8.0


def equatorial_to_horizontal(ra_deg: float, dec_deg: float, lst_deg: float,
                             latitude: Optional[float] = None) -> HorizontalPosition:
    """
    Convert RA/Dec to Altitude/Azimuth

    Args:
        ra_deg: Right Ascension in degrees
        dec_deg: Declination in degrees
        lst_deg: Local Sidereal Time in degrees
        latitude: Observer latitude in degrees (default observer if None)

    Returns:
        HorizontalPosition - alt in [-90, 90], az in [0, 360), 0 = North
    """
    if latitude is None:
        latitude = DEFAULT_OBSERVER.latitude

    ha = to_radians(lst_deg - ra_deg)
    dec = to_radians(dec_deg)
    lat = to_radians(latitude)

    sin_alt = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    alt = math.asin(clamp(sin_alt, -1.0, 1.0))

    az_deg = 0.0
    cos_alt = math.cos(alt)
    if abs(cos_alt) > ZENITH_EPSILON:
        cos_az = (math.sin(dec) - math.sin(alt) * math.sin(lat)) / (cos_alt * math.cos(lat))
        az_deg = to_degrees(math.acos(clamp(cos_az, -1.0, 1.0)))
        # acos only covers [0, 180]; west of the meridian is the other half
        if math.sin(ha) > 0:
            az_deg = 360.0 - az_deg

    return HorizontalPosition(altitude=to_degrees(alt), azimuth=normalize_angle(az_deg))


def equatorial_to_horizontal_array(ra_deg, dec_deg, lst_deg: float,
                                   latitude: Optional[float] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorised equatorial_to_horizontal over numpy arrays.

    Returns:
        (altitude_deg, azimuth_deg) arrays, same shape as the inputs
    """
    if latitude is None:
        latitude = DEFAULT_OBSERVER.latitude

    ra = np.asarray(ra_deg, dtype=np.float64)
    dec = np.radians(np.asarray(dec_deg, dtype=np.float64))
    ha = np.radians(lst_deg - ra)
    lat = math.radians(latitude)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)

    sin_alt = np.clip(np.sin(dec) * sin_lat + np.cos(dec) * cos_lat * np.cos(ha), -1.0, 1.0)
    alt = np.arcsin(sin_alt)

    cos_alt = np.cos(alt)
    regular = np.abs(cos_alt) > ZENITH_EPSILON
    denom = np.where(regular, cos_alt * cos_lat, 1.0)
    cos_az = np.clip((np.sin(dec) - np.sin(alt) * sin_lat) / denom, -1.0, 1.0)
    az = np.degrees(np.arccos(cos_az))
    az = np.where(np.sin(ha) > 0, 360.0 - az, az)
    az = np.where(regular, np.mod(az, 360.0), 0.0)

    return np.degrees(alt), az


def is_star_visible(altitude: float) -> bool:
    """Strictly above the horizon; a star at exactly 0 deg is not visible."""
    return altitude > 0


def visible_stars(stars: Iterable[Star], when: datetime,
                  observer: ObserverLocation = DEFAULT_OBSERVER) -> List[VisibleStar]:
    """
    Horizontal positions for every star above the horizon at `when`.

    LST is sampled once for the whole catalog. The result is ordered
    dimmest first so that bright stars are drawn last (on top).
    """
    stars = list(stars)
    if not stars:
        return []

    lst = local_sidereal_time(when, observer.longitude)
    ra = np.fromiter((s.ra for s in stars), dtype=np.float64, count=len(stars)) * HOURS_TO_DEGREES
    dec = np.fromiter((s.dec for s in stars), dtype=np.float64, count=len(stars))
    alt, az = equatorial_to_horizontal_array(ra, dec, lst, observer.latitude)

    result = [
        VisibleStar(star=star, altitude=float(a), azimuth=float(z))
        for star, a, z in zip(stars, alt, az)
        if is_star_visible(a)
    ]
    result.sort(key=lambda v: v.star.mag, reverse=True)
    return result


def calculate_star_size(mag: float, zoom: float = 1.0) -> float:
    """
    Pixel radius for a star of magnitude `mag` at zoom level `zoom`.

    Brighter (lower magnitude) stars are larger; always within
    [STAR_MIN_SIZE, STAR_MAX_SIZE].
    """
    size = STAR_BASE_SIZE * math.pow(10.0, (6.0 - mag) / 5.0) * math.sqrt(max(zoom, 0.0))
    return clamp(size, STAR_MIN_SIZE, STAR_MAX_SIZE)


def star_opacity(mag: float, floor: float = 0.4) -> float:
    return clamp((6.0 - mag) / 6.0, floor, 1.0)


def bv_to_rgb(bv: float) -> Tuple[int, int, int]:
    """Convert B-V color index to RGB for star rendering."""
    bv = clamp(bv, -0.4, 2.0)
    if bv < 0.0:
        r = g = 155 + int(-bv * 100)
        b = 255
    elif bv < 0.4:
        t = bv / 0.4
        r, g, b = int(155 + t * 100), int(155 + t * 55), 255
    elif bv < 0.8:
        t = (bv - 0.4) / 0.4
        r, g, b = 255, int(210 - t * 10), int(255 - t * 255)
    elif bv < 1.4:
        t = (bv - 0.8) / 0.6
        r, g, b = 255, int(200 - t * 60), int(max(0.0, 50 - t * 50))
    else:
        t = min(1.0, (bv - 1.4) / 0.6)
        r, g, b = 255, int(140 - t * 60), 0
    return (int(clamp(r, 0, 255)), int(clamp(g, 0, 255)), int(clamp(b, 0, 255)))
