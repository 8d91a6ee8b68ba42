from datetime import datetime, timedelta, timezone

import pytest

from core.astro_time import (
    J2000_JD,
    format_datetime,
    greenwich_sidereal_time,
    julian_day,
    local_sidereal_time,
)
from core.celestial_math import DEFAULT_OBSERVER
from core.coords import normalize_angle

UTC = timezone.utc


def ang_diff_deg(a, b):
    """Smallest signed difference a-b in degrees in [-180,180)."""
    return (a - b + 180.0) % 360.0 - 180.0


def test_julian_day_reference_epochs():
    assert julian_day(datetime(2000, 1, 1, 12, tzinfo=UTC)) == pytest.approx(J2000_JD, abs=0.01)
    assert julian_day(datetime(2020, 1, 1, 0, tzinfo=UTC)) == pytest.approx(2458849.5, abs=0.01)


def test_julian_day_advances_one_per_day():
    # Crosses a leap day, a month boundary and a year boundary
    start = datetime(2023, 12, 25, 6, 30, tzinfo=UTC)
    prev = julian_day(start)
    for i in range(1, 80):
        jd = julian_day(start + timedelta(days=i))
        assert jd - prev == pytest.approx(1.0, abs=0.001)
        prev = jd


def test_julian_day_fraction_of_day():
    midnight = julian_day(datetime(2021, 6, 1, tzinfo=UTC))
    six_am = julian_day(datetime(2021, 6, 1, 6, tzinfo=UTC))
    assert six_am - midnight == pytest.approx(0.25, abs=1e-9)


def test_naive_datetime_is_utc():
    naive = datetime(2022, 8, 12, 22, 15)
    assert julian_day(naive) == julian_day(naive.replace(tzinfo=UTC))


def test_aware_datetime_converted_to_utc():
    paris = timezone(timedelta(hours=2))
    local = datetime(2022, 8, 13, 0, 15, tzinfo=paris)
    assert julian_day(local) == pytest.approx(julian_day(datetime(2022, 8, 12, 22, 15, tzinfo=UTC)))


def test_gst_at_j2000():
    assert greenwich_sidereal_time(datetime(2000, 1, 1, 12, tzinfo=UTC)) == pytest.approx(280.46061837, abs=1e-6)


@pytest.mark.parametrize("start", [
    datetime(2000, 1, 1, 12, tzinfo=UTC),     # 280.46 -> wraps past 360
    datetime(2024, 3, 20, 3, 0, tzinfo=UTC),
    datetime(2035, 11, 2, 21, 45, tzinfo=UTC),
])
def test_gst_advances_sidereal_rate_over_six_hours(start):
    # Slightly more than 90 degrees: a sidereal day is shorter than a solar day
    delta = ang_diff_deg(greenwich_sidereal_time(start + timedelta(hours=6)),
                         greenwich_sidereal_time(start))
    assert delta == pytest.approx(90.246, abs=0.01)


@pytest.mark.parametrize("dt", [
    datetime(1999, 12, 31, 23, 59, tzinfo=UTC),
    datetime(2024, 3, 20, 21, 0, tzinfo=UTC),
    datetime(2031, 7, 4, 4, 44, 44, tzinfo=UTC),
])
def test_lst_at_greenwich_equals_gst(dt):
    gst = greenwich_sidereal_time(dt)
    assert 0.0 <= gst < 360.0
    assert local_sidereal_time(dt, 0.0) == pytest.approx(gst, abs=0.01)


@pytest.mark.parametrize("lon", [-179.5, -74.0, 0.0, 4.832011, 139.7, 400.0])
def test_lst_offset_is_longitude(lon):
    dt = datetime(2024, 3, 20, 21, 0, tzinfo=UTC)
    offset = local_sidereal_time(dt, lon) - local_sidereal_time(dt, 0.0)
    assert ang_diff_deg(offset, normalize_angle(lon)) == pytest.approx(0.0, abs=0.01)


def test_lst_defaults_to_observer_longitude():
    dt = datetime(2024, 3, 20, 21, 0, tzinfo=UTC)
    assert local_sidereal_time(dt) == local_sidereal_time(dt, DEFAULT_OBSERVER.longitude)


def test_format_datetime():
    assert format_datetime(datetime(2024, 3, 20, 21, 5, 9, tzinfo=UTC)) == \
        "Wednesday 20 March 2024, 21:05:09 UTC"
