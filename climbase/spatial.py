"""
climbase.spatial
================
Traversal of spatial points and longitude periodicity.

Functions
---------
spatialidxs   — every spatial point of an array, for grid and equal-area space
wrap_lon      — wrap longitudes to [-180, 180)
lon_distance  — shortest distance between two longitudes on the circle
"""

from __future__ import annotations

import itertools

import numpy as np
import xarray as xr

from climbase.dims import Dim, SpatialStructure, no_space_error, spacestructure

LON_PERIOD = 360.0


# ── Spatial indexing ──────────────────────────────────────────────────

class SpatialIndices:
    """Restartable iterable over the spatial points of an array.

    Each item is a ``{dim: position}`` dict accepted by ``DataArray.isel``:

    >>> for idx in spatialidxs(A):
    ...     series_at_point = A.isel(idx)
    """

    def __init__(self, structure: SpatialStructure, sizes: dict):
        self.structure = structure
        self.sizes = sizes

    def __iter__(self):
        if self.structure is SpatialStructure.GRID:
            lons = range(self.sizes[Dim.LON.short])
            lats = range(self.sizes[Dim.LAT.short])
            for i, j in itertools.product(lons, lats):
                yield {Dim.LON.short: i, Dim.LAT.short: j}
        else:
            for i in range(self.sizes[Dim.COORD.short]):
                yield {Dim.COORD.short: i}

    def __len__(self) -> int:
        if self.structure is SpatialStructure.GRID:
            return self.sizes[Dim.LON.short] * self.sizes[Dim.LAT.short]
        return self.sizes[Dim.COORD.short]


def spatialidxs(da: xr.DataArray) -> SpatialIndices:
    """Return an iterable that visits every spatial point of ``da``.

    Grid space: all (lon, lat) positions, longitude outer and latitude
    inner. Equal-area space: every Coordinate position in axis order.
    """
    structure = spacestructure(da)
    if structure is SpatialStructure.NONE:
        raise no_space_error(da)
    if structure is SpatialStructure.GRID:
        missing = [d for d in (Dim.LON.short, Dim.LAT.short) if d not in da.dims]
        if missing:
            raise ValueError(f"Grid array is missing dimension(s) {missing}.")
    return SpatialIndices(structure, dict(da.sizes))


# ── Periodicity of longitude ──────────────────────────────────────────

def wrap_lon(x):
    """Wrap longitude(s) ``x`` to the range [-180, 180)."""
    # second mod: np.mod rounds to exactly 360.0 just below -180
    w = np.mod(np.asarray(x, dtype=float) + 180.0, LON_PERIOD)
    return -180.0 + np.mod(w, LON_PERIOD)


def lon_distance(a, b, period: float = LON_PERIOD):
    """Distance between longitudes ``a`` and ``b`` on a ring of ``period`` degrees.

    Always in ``[0, period / 2]``; ``lon_distance(-170, 170) == 20``.
    """
    moddis = np.mod(np.abs(np.asarray(a, dtype=float) - b), period)
    return np.minimum(moddis, period - moddis)
