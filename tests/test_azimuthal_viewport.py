import pytest

from core.azimuthal_viewport import MAX_ZOOM, MIN_ZOOM, AzimuthalViewport


def test_geometry(allsky):
    assert (allsky.center_x, allsky.center_y) == (400.0, 300.0)
    assert allsky.projection_radius == 280.0
    allsky.resize(1000, 400)
    assert (allsky.center_x, allsky.center_y, allsky.projection_radius) == (500.0, 200.0, 180.0)


def test_zenith_at_centre(allsky):
    pt = allsky.project(123.0, 90.0)
    assert (pt.x, pt.y) == pytest.approx((400.0, 300.0))
    assert pt.distance_from_center == 0.0


@pytest.mark.parametrize("az, expected", [
    (0.0, (400.0, 20.0)),      # North up
    (90.0, (680.0, 300.0)),    # East right
    (180.0, (400.0, 580.0)),
    (270.0, (120.0, 300.0)),
])
def test_horizon_points(allsky, az, expected):
    pt = allsky.project(az, 0.0)
    assert (pt.x, pt.y) == pytest.approx(expected, abs=1e-9)
    assert pt.distance_from_center == 1.0


def test_radius_is_linear_in_zenith_distance(allsky):
    assert allsky.project(0.0, 45.0).y == pytest.approx(300.0 - 140.0)
    assert allsky.altitude_circle_radius(45.0) == pytest.approx(140.0)
    allsky.set_zoom(2.0)
    assert allsky.project(0.0, 45.0).y == pytest.approx(300.0 - 280.0)


def test_below_horizon_is_hidden(allsky):
    assert allsky.project(0.0, -0.1) is None


def test_horizon_circle_follows_pan_and_zoom(allsky):
    allsky.pan(10.0, -5.0)
    allsky.set_zoom(1.5)
    assert allsky.horizon_circle() == pytest.approx((410.0, 295.0, 420.0))


@pytest.mark.parametrize("factor", [1.5, 0.7, 3.0])
def test_zoom_at_keeps_pivot_fixed(allsky, factor):
    allsky.pan(25.0, -40.0)
    before = allsky.project(60.0, 35.0)
    allsky.zoom_at(factor, before.x, before.y)
    after = allsky.project(60.0, 35.0)
    assert (after.x, after.y) == pytest.approx((before.x, before.y))


def test_zoom_at_uses_clamped_factor(allsky):
    allsky.set_zoom(9.0)
    before = allsky.project(200.0, 70.0)
    allsky.zoom_at(2.0, before.x, before.y)
    assert allsky.zoom == MAX_ZOOM
    after = allsky.project(200.0, 70.0)
    assert (after.x, after.y) == pytest.approx((before.x, before.y))


def test_zoom_at_limit_is_noop(allsky):
    allsky.set_zoom(MIN_ZOOM)
    allsky.zoom_at(0.5, 10.0, 10.0)
    assert allsky.get_state() == {"zoom_level": MIN_ZOOM, "offset_x": 0.0, "offset_y": 0.0}


def test_state_round_trip_and_reset(allsky):
    state = {"zoom_level": 2.5, "offset_x": -12.0, "offset_y": 33.5}
    allsky.set_state(state)
    assert allsky.get_state() == state
    assert allsky.zoom_level() == 2.5
    allsky.reset()
    assert allsky.get_state() == {"zoom_level": 1.0, "offset_x": 0.0, "offset_y": 0.0}


def test_set_state_clamps_zoom(allsky):
    allsky.set_state({"zoom_level": 50})
    assert allsky.zoom == MAX_ZOOM


def test_drag_and_pinch_from_baseline(allsky):
    allsky.set_state({"zoom_level": 2.0, "offset_x": 5.0, "offset_y": 5.0})
    baseline = allsky.get_state()
    allsky.apply_drag(baseline, 30, -20)
    allsky.apply_drag(baseline, 40, -10)
    assert (allsky.offset_x, allsky.offset_y) == (45.0, -5.0)

    allsky.apply_pinch(baseline, 1.5)
    assert allsky.zoom == pytest.approx(3.0)
    allsky.apply_pinch(baseline, 100.0)
    assert allsky.zoom == MAX_ZOOM


def test_wheel(allsky):
    allsky.apply_wheel(1, 400, 300)
    assert allsky.zoom == pytest.approx(0.9)
    allsky.reset()
    allsky.apply_wheel(-1, 400, 300)
    assert allsky.zoom == pytest.approx(1.1)
    # Zooming on the centre does not move the disk
    assert (allsky.offset_x, allsky.offset_y) == pytest.approx((0.0, 0.0))


def test_arrow_keys_pan(allsky):
    allsky.apply_keys(1, 1)
    assert (allsky.offset_x, allsky.offset_y) == (-40.0, 40.0)


def test_mode_and_describe():
    vp = AzimuthalViewport(640, 480)
    assert vp.mode == "allsky"
    assert vp.describe() == "1.0x"
