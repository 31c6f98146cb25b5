import itertools

import numpy as np
import pytest
import xarray as xr

from climbase import spatialidxs, wrap_lon, lon_distance

from conftest import LONS, LATS, POINTS, point_value


def test_spatialidxs_grid(grid):
    idxs = spatialidxs(grid)
    assert len(idxs) == len(LONS) * len(LATS)
    expected = [{"lon": i, "lat": j}
                for i, j in itertools.product(range(len(LONS)), range(len(LATS)))]
    assert list(idxs) == expected
    assert list(idxs) == expected


def test_spatialidxs_grid_slices(grid):
    for idx in spatialidxs(grid):
        series = grid.isel(idx)
        assert series.dims == ("time",)
        lon, lat = float(series["lon"]), float(series["lat"])
        np.testing.assert_allclose(series.values,
                                   [point_value(lon, lat, t) for t in range(3)])


def test_spatialidxs_eqarea(eqarea):
    idxs = list(spatialidxs(eqarea))
    assert idxs == [{"coord": i} for i in range(len(POINTS))]
    assert eqarea.isel(idxs[3]).dims == ("time",)


def test_spatialidxs_no_space():
    with pytest.raises(ValueError):
        spatialidxs(xr.DataArray(np.zeros(3), dims=("time",)))


@pytest.mark.parametrize("x, expected", [
    (0.0, 0.0),
    (190.0, -170.0),
    (180.0, -180.0),
    (-180.0, -180.0),
    (359.0, -1.0),
    (540.0, -180.0),
    (-190.0, 170.0),
])
def test_wrap_lon(x, expected):
    assert wrap_lon(x) == pytest.approx(expected)


@pytest.mark.parametrize("x", [-725.5, -10.0, 0.0, 45.25, 179.5, 1000.0])
def test_wrap_lon_properties(x):
    w = wrap_lon(x)
    assert -180.0 <= w < 180.0
    assert wrap_lon(w) == pytest.approx(w)
    for k in range(-3, 4):
        assert wrap_lon(x + 360.0 * k) == pytest.approx(w)


@pytest.mark.parametrize("x", [
    np.nextafter(-180.0, -np.inf),
    np.nextafter(180.0, -np.inf),
    -1e-14 - 180.0,
])
def test_wrap_lon_rounding_edge(x):
    w = wrap_lon(x)
    assert -180.0 <= w < 180.0
    assert -180.0 <= wrap_lon(w) < 180.0


def test_wrap_lon_array():
    out = wrap_lon(np.array([0.0, 270.0, -270.0]))
    np.testing.assert_allclose(out, [0.0, -90.0, 90.0])


def test_lon_distance():
    assert lon_distance(-170, 170) == pytest.approx(20.0)
    assert lon_distance(10, 350) == pytest.approx(20.0)
    assert lon_distance(0, 180) == pytest.approx(180.0)
    assert lon_distance(1, 2, 4) == pytest.approx(1.0)


@pytest.mark.parametrize("a", [-300.0, -170.0, 0.0, 45.0, 359.0])
@pytest.mark.parametrize("b", [-90.0, 0.0, 170.0, 720.5])
def test_lon_distance_properties(a, b):
    d = lon_distance(a, b)
    assert 0.0 <= d <= 180.0
    assert d == pytest.approx(lon_distance(b, a))
    assert lon_distance(a, a) == 0.0
