from __future__ import annotations
import math

DEG_PER_RAD = 180.0 / math.pi
RAD_PER_DEG = math.pi / 180.0


def to_radians(deg: float) -> float:
    return deg * RAD_PER_DEG


def to_degrees(rad: float) -> float:
    return rad * DEG_PER_RAD


def normalize_angle(angle: float) -> float:
    """Wrap any angle into [0, 360) with a single modulo."""
    angle = math.fmod(angle, 360.0)
    if angle < 0:
        angle += 360.0
    # -1e-15 + 360 rounds to 360.0
    return 0.0 if angle >= 360.0 else angle


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def altaz_to_vector(alt_deg: float, az_deg: float) -> tuple[float, float, float]:
    """Unit vector in the horizon frame (East, North, Up)."""
    alt = to_radians(alt_deg)
    az = to_radians(az_deg)
    c = math.cos(alt)
    return (c * math.sin(az), c * math.cos(az), math.sin(alt))
