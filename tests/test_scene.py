import pytest

from core.celestial_math import calculate_star_size
from core.scene import build_frame, cardinal_labels
from core.types import Star, VisibleStar


def _visible(az, alt, mag, name=None, ci=0.0):
    star = Star(id=f"{az}/{alt}", ra=0.0, dec=0.0, mag=mag, color_index=ci, name=name)
    return VisibleStar(star=star, altitude=alt, azimuth=az)


def test_build_frame_perspective(camera):
    visible = [
        _visible(180.0, 30.0, 4.0, ci=0.65),   # dead centre
        _visible(0.0, 30.0, 3.0),              # behind the camera
        _visible(185.0, 35.0, -1.0, name="Bright"),
    ]
    frame = build_frame(visible, camera)
    assert [s.magnitude for s in frame] == [4.0, -1.0]

    centre = frame[0]
    assert (centre.screen_x, centre.screen_y) == pytest.approx((640.0, 400.0))
    assert centre.color_index == 0.65
    assert centre.altitude == 30.0
    assert centre.distance_from_center == pytest.approx(0.0, abs=1e-6)
    assert centre.size == calculate_star_size(4.0, 1.0)
    assert frame[1].name == "Bright"


def test_build_frame_uses_zoom_for_size(camera):
    camera.set_fov(45.0)
    (star,) = build_frame([_visible(180.0, 30.0, 4.0)], camera)
    assert star.size == pytest.approx(calculate_star_size(4.0, 2.0))


def test_build_frame_drops_off_surface_points(allsky):
    allsky.pan(-500.0, 0.0)   # West half of the disk is now off screen
    frame = build_frame([_visible(270.0, 1.0, 2.0), _visible(90.0, 1.0, 2.0)], allsky)
    assert len(frame) == 1
    assert frame[0].screen_x == pytest.approx(680.0 - 500.0, abs=5.0)


def test_cardinal_labels_allsky(allsky):
    labels = {lbl.label: (lbl.screen_x, lbl.screen_y) for lbl in cardinal_labels(allsky)}
    assert set(labels) == {"N", "NE", "E", "SE", "S", "SW", "W", "NW"}
    assert labels["N"] == pytest.approx((400.0, 20.0))


def test_cardinal_labels_follow_camera(camera):
    names = [lbl.label for lbl in cardinal_labels(camera)]
    assert "S" in names
    assert "N" not in names
    camera.look_at(0.0, 10.0)
    names = [lbl.label for lbl in cardinal_labels(camera)]
    assert "N" in names and "S" not in names
