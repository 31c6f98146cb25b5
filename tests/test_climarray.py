import numpy as np
import pandas as pd
import pytest

import climbase
from climbase import Dim, SpatialStructure, Coordinate, climarray, coordinates, refdims

from conftest import LONS, LATS, POINTS


def test_climarray_grid(grid):
    assert grid.dims == ("lon", "lat", "time")
    assert grid.shape == (4, 7, 3)
    assert grid.name == "tas"
    assert grid.attrs == {"units": "K"}
    np.testing.assert_array_equal(grid["lat"].values, LATS)


def test_climarray_defaults():
    A = climarray(np.zeros((2, 3)), [Dim.TIME, ("latitude", [0.0, 10.0, 20.0])])
    assert A.dims == ("time", "lat")
    assert A.name is None
    assert A.clim.name == ""
    assert A.attrs == {}
    np.testing.assert_array_equal(A["time"].values, [0, 1])


def test_climarray_datetime_axis():
    t = pd.date_range("2000-03-15", periods=4, freq="MS")
    A = climarray(np.zeros(4), [(Dim.TIME, t)])
    assert np.issubdtype(A["time"].dtype, np.datetime64)


def test_climarray_coord(eqarea):
    assert eqarea.dims == ("coord", "time")
    assert eqarea.clim.spacestructure is SpatialStructure.EQAREA
    np.testing.assert_array_equal(eqarea["lat"].values, [p[1] for p in POINTS])
    c = coordinates(eqarea)
    assert c[0] == Coordinate(0.0, -60.0)
    assert c[-1].lon == 240.0
    assert eqarea.clim.coordinates() == c


def test_coordinates_need_coord(grid):
    with pytest.raises(ValueError):
        coordinates(grid)


@pytest.mark.parametrize("data, dims", [
    (np.zeros((2, 3)), [(Dim.LON, [0.0, 1.0])]),                           # rank
    (np.zeros((2, 3)), [(Dim.LON, [0.0, 1.0]), (Dim.LAT, [0.0, 1.0])]),    # length
    (np.zeros((2, 2)), [(Dim.LON, [0.0, 1.0]), ("longitude", [0.0, 1.0])]),  # duplicate
    (np.zeros((2, 2)), [(Dim.COORD, [(0, 0), (1, 1)]), (Dim.LAT, [0.0, 1.0])]),
    (np.zeros(2), [(Dim.COORD, [0.0, 1.0])]),                              # not pairs
])
def test_climarray_invalid(data, dims):
    with pytest.raises(ValueError):
        climarray(data, dims)


def test_refdims(grid):
    A = climarray(np.zeros(len(LONS)), [(Dim.LON, LONS)], refdims={"time": 5})
    assert refdims(A) == {"time": 5}
    sliced = grid.isel(time=1)
    assert sliced.clim.refdims == {"time": 1}


def test_inplace_assignment(grid):
    grid[{"lon": 1, "lat": 2}] = 7.0
    np.testing.assert_array_equal(grid.isel(lon=1, lat=2).values, [7.0, 7.0, 7.0])


def test_accessor(grid):
    assert grid.clim.dims == (Dim.LON, Dim.LAT, Dim.TIME)
    assert grid.clim.size(Dim.LAT) == 7
    assert grid.clim.size("longitude") == 4
    assert grid.clim.dimindex(Dim.TIME) == 2
    assert grid.clim.hasdim("lat")
    assert grid.clim.otherdims(Dim.TIME) == ("lon", "lat")
    assert len(grid.clim.otheridxs(Dim.LON, Dim.LAT)) == 3
    assert grid.clim.attrib["units"] == "K"


def test_accessor_operations(grid, eqarea):
    assert grid.clim.zonalmean().dims == ("lat", "time")
    assert grid.clim.spacemean().dims == ("time",)
    assert grid.clim.latmean().dims == ("lon", "time")
    north, south = grid.clim.hemispheric_functions()
    assert north.sizes["lat"] == south.sizes["lat"] == 4
    idxs, lats = eqarea.clim.uniquelats()
    assert len(idxs) == len(lats) == 5
    assert len(eqarea.clim.spatialidxs()) == len(POINTS)
    np.testing.assert_array_equal(eqarea.clim.latitudes(), [-60, -20, 0, 20, 60])


def test_exports():
    for name in climbase.__all__:
        assert hasattr(climbase, name)
