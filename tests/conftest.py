import numpy as np
import pytest

from climbase import Dim, climarray

LONS = np.array([0.0, 90.0, 180.0, 270.0])
LATS = np.array([-90.0, -60.0, -30.0, 0.0, 30.0, 60.0, 90.0])

# sorted by latitude, symmetric about the equator
POINTS = [
    (0.0, -60.0), (120.0, -60.0), (240.0, -60.0),
    (0.0, -20.0), (180.0, -20.0),
    (0.0, 0.0),
    (0.0, 20.0), (180.0, 20.0),
    (0.0, 60.0), (120.0, 60.0), (240.0, 60.0),
]


def point_value(lon, lat, t=0):
    return 10.0 * lat + lon / 1000.0 + 100.0 * t


@pytest.fixture
def grid():
    """(lon, lat, time) field whose value encodes its position."""
    lon, lat, t = np.meshgrid(LONS, LATS, np.arange(3), indexing="ij")
    return climarray(
        point_value(lon, lat, t),
        [(Dim.LON, LONS), (Dim.LAT, LATS), (Dim.TIME, np.arange(3))],
        name="tas",
        attrib={"units": "K"},
    )


@pytest.fixture
def grid2d():
    return climarray(
        np.ones((len(LONS), len(LATS))),
        [(Dim.LON, LONS), (Dim.LAT, LATS)],
    )


@pytest.fixture
def eqarea():
    """(coord, time) field whose value encodes its position."""
    data = np.array([[point_value(lo, la, t) for t in range(2)] for lo, la in POINTS])
    return climarray(
        data,
        [(Dim.COORD, POINTS), (Dim.TIME, np.arange(2))],
        name="tas",
    )


@pytest.fixture
def eqarea1d():
    return climarray(
        [point_value(lo, la) for lo, la in POINTS],
        [(Dim.COORD, POINTS)],
    )
