"""
climbase.hemispheres
====================
Splitting climate arrays into their northern and southern hemispheres.

Functions
---------
hemisphere_indices     — south/north positions of a sorted Coordinate axis
hemispheric_functions  — north and south arrays on a common latitude axis
hemispheric_means      — proper averages over each hemisphere
latitudes              — latitude values of grid or equal-area space
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import xarray as xr

from climbase.aggregation import (
    check_lat_sorted, latmean, point_lats, zonalmean,
)
from climbase.climarray import coord_lats
from climbase.dims import Dim, SpatialStructure, no_space_error, spacestructure

logger = logging.getLogger(__name__)

LON, LAT, COORD = Dim.LON.short, Dim.LAT.short, Dim.COORD.short

NORTH_BOUNDS = (0.0, 90.0)
SOUTH_BOUNDS = (-90.0, 0.0)


def _select_lat(da: xr.DataArray, bounds: tuple) -> xr.DataArray:
    """Grid points with bounds[0] <= lat <= bounds[1], whatever the lat order."""
    lat = da[LAT].values
    keep = np.nonzero((lat >= bounds[0]) & (lat <= bounds[1]))[0]
    return da.isel({LAT: keep})


def hemisphere_indices(c) -> tuple[range, range]:
    """Split a latitude-sorted Coordinate axis at the equator.

    Parameters
    ----------
    c : xr.DataArray with a ``coord`` dimension, or a sequence of
        (lon, lat) points sorted by latitude.

    Returns
    -------
    (south, north) : ranges of positions with lat < 0 and lat >= 0.
    """
    lats = point_lats(c)
    check_lat_sorted(lats)
    split = int(np.searchsorted(lats, 0.0, side="left"))
    return range(0, split), range(split, len(lats))


def _isel_range(da: xr.DataArray, r: range) -> xr.DataArray:
    return da.isel({COORD: slice(r.start, r.stop)})


# ── Hemispheric split ─────────────────────────────────────────────────

def hemispheric_functions(da: xr.DataArray) -> tuple[xr.DataArray, xr.DataArray]:
    """Split ``da`` into its northern and southern hemispheres.

    The latitudes of ``south`` are translated so that both arrays share the
    same latitude axis: the value at -60 in ``da`` sits at +60 in ``south``,
    next to the value at +60 in ``north``.

    Returns
    -------
    (north, south)

    Example
    -------
    >>> north, south = hemispheric_functions(tas)
    >>> asymmetry = north - south
    """
    structure = spacestructure(da)
    if structure is SpatialStructure.GRID:
        return _hemispheric_functions_grid(da)
    if structure is SpatialStructure.EQAREA:
        return _hemispheric_functions_eqarea(da)
    raise no_space_error(da)


def _hemispheric_functions_grid(da):
    if LAT not in da.dims:
        raise ValueError(f"Array with dims {da.dims} has no latitude dimension.")
    nh = _select_lat(da, NORTH_BOUNDS)
    sh = _select_lat(da, SOUTH_BOUNDS)
    sh = sh.isel({LAT: slice(None, None, -1)})
    sh = sh.assign_coords({LAT: nh[LAT].values})
    return nh, sh


def _hemispheric_functions_eqarea(da):
    shi, nhi = hemisphere_indices(da)
    logger.debug("hemispheric split: %d south, %d north points", len(shi), len(nhi))
    nh = _isel_range(da, nhi)
    sh = _isel_range(da, shi)

    # Descending latitude, longitude order within a ring kept. Data and
    # coordinates take the same permutation so every value keeps its point;
    # a plain reversal of the data would flip longitudes inside each ring.
    order = np.argsort(-coord_lats(sh), kind="stable")
    sh = sh.isel({COORD: order})
    sh = sh.assign_coords({LAT: (COORD, np.abs(coord_lats(sh)))})
    return nh, sh


# ── Hemispheric means ─────────────────────────────────────────────────

def hemispheric_means(da: xr.DataArray):
    """Return the (proper) averages of ``da`` over the two hemispheres.

    Grid space does both zonal and cos(lat)-weighted meridional averaging.
    Equal-area space takes the plain mean over each hemisphere's points.
    Use :func:`hemispheric_functions` to just split ``da``.

    Returns
    -------
    (north, south) — floats, or xr.DataArrays over the non-spatial dims.
    """
    structure = spacestructure(da)
    if structure is SpatialStructure.GRID:
        if LAT not in da.dims:
            raise ValueError(f"Array with dims {da.dims} has no latitude dimension.")
        B = zonalmean(da) if LON in da.dims else da
        nh = latmean(_select_lat(B, NORTH_BOUNDS))
        sh = latmean(_select_lat(B, SOUTH_BOUNDS))
        return nh, sh
    if structure is SpatialStructure.EQAREA:
        shi, nhi = hemisphere_indices(da)
        nh = _isel_range(da, nhi).mean(COORD, keep_attrs=True)
        sh = _isel_range(da, shi).mean(COORD, keep_attrs=True)
        if da.ndim == 1:
            return nh.item(), sh.item()
        return nh, sh
    raise no_space_error(da)


def latitudes(da: xr.DataArray) -> np.ndarray:
    """Latitudes of ``da``: the ``lat`` axis, or the unique latitudes of its points."""
    structure = spacestructure(da)
    if structure is SpatialStructure.GRID:
        if LAT not in da.dims:
            raise ValueError(f"Array with dims {da.dims} has no latitude dimension.")
        return da[LAT].values
    if structure is SpatialStructure.EQAREA:
        return pd.unique(coord_lats(da))
    raise no_space_error(da)
