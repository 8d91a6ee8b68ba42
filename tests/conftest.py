from datetime import datetime, timezone

import pytest

from core.azimuthal_viewport import AzimuthalViewport
from core.perspective_camera import PerspectiveCamera
from core.types import Star


@pytest.fixture
def when():
    return datetime(2024, 3, 20, 21, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def polar_catalog():
    """Two stars that are always up / always down from mid-northern latitudes."""
    return [
        Star(id="polaris-ish", ra=0.0, dec=89.0, mag=2.0, name="North"),
        Star(id="octans-ish", ra=12.0, dec=-89.0, mag=2.0, name="South"),
    ]


@pytest.fixture
def camera():
    return PerspectiveCamera(1280, 800)


@pytest.fixture
def allsky():
    return AzimuthalViewport(800, 600)
