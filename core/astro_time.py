
from __future__ import annotations
import math
from datetime import datetime, timezone

from .coords import normalize_angle

# Lightweight time utilities (no external deps).
# We use UTC internally; naive datetimes are taken as UTC.

J2000_JD = 2451545.0
DAYS_PER_CENTURY = 36525.0


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def julian_day(dt: datetime) -> float:
    """Convert a datetime (timezone-aware recommended) to Julian Day."""
    dt = _as_utc(dt)

    year = dt.year
    month = dt.month
    day_fraction = (dt.hour + dt.minute / 60.0 + dt.second / 3600.0) / 24.0

    if month <= 2:
        year -= 1
        month += 12

    A = math.floor(year / 100)
    B = 2 - A + math.floor(A / 4)

    return (math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1))
            + dt.day + day_fraction + B - 1524.5)


def greenwich_sidereal_time(dt: datetime) -> float:
    """
    Greenwich Mean Sidereal Time in degrees [0, 360).

    IAU 1982 polynomial; good to well under a second of time for the
    display horizons we care about.
    """
    jd = julian_day(dt)
    d = jd - J2000_JD
    T = d / DAYS_PER_CENTURY
    gst = 280.46061837 + 360.98564736629 * d + 0.000387933 * T * T - (T * T * T) / 38710000.0
    return normalize_angle(gst)


def local_sidereal_time(dt: datetime, longitude: float | None = None) -> float:
    """Local Sidereal Time in degrees; longitude positive East."""
    if longitude is None:
        from .celestial_math import DEFAULT_OBSERVER
        longitude = DEFAULT_OBSERVER.longitude
    return normalize_angle(greenwich_sidereal_time(dt) + longitude)


def format_datetime(dt: datetime) -> str:
    return _as_utc(dt).strftime("%A %d %B %Y, %H:%M:%S UTC")
