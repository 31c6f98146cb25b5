"""
climbase.aggregation
====================
Zonal, meridional and spatial averaging of climate arrays.

All functions work for grid space (separate ``lon`` and ``lat``
dimensions) as well as equal-area space (a single ``coord`` dimension of
(lon, lat) points, sorted by latitude). The algorithm is chosen from the
spatial structure of the input, see :func:`climbase.dims.spacestructure`.

Functions
---------
uniquelats  — unique latitudes of a Coordinate axis and the ranges they cover
latmean     — cos(lat)-weighted mean over latitude
zonalmean   — mean over longitude (or over each latitude ring)
spaceagg    — area-weighted aggregation over all space with any function
spacemean   — spaceagg with the weighted mean
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

import numpy as np
import pandas as pd
import xarray as xr

from climbase.climarray import coord_lats
from climbase.dims import (
    Dim, SpatialStructure, dimindex, no_space_error, spacestructure,
)

logger = logging.getLogger(__name__)

LON, LAT, COORD = Dim.LON.short, Dim.LAT.short, Dim.COORD.short

ZONAL_SUFFIX    = ", zonally averaged"
SPACEAGG_SUFFIX = ", spatially aggregated with {}"


def mean(a, axis=None, weights=None):
    """Weighted mean with the calling convention expected by :func:`spaceagg`."""
    return np.average(a, axis=axis, weights=weights)


def _annotated(da: xr.DataArray, suffix: str) -> Optional[str]:
    return f"{da.name}{suffix}" if da.name else None


# ── Unique latitudes ──────────────────────────────────────────────────

def check_lat_sorted(lats: np.ndarray) -> None:
    """Raise ValueError unless ``lats`` is non-empty, finite and ascending."""
    if len(lats) == 0:
        raise ValueError("Coordinate axis is empty.")
    if not np.all(np.isfinite(lats)):
        raise ValueError("Coordinate latitudes must be finite.")
    if np.any(np.diff(lats) < 0):
        raise ValueError("Coordinates must be sorted by latitude (ascending).")


def point_lats(c) -> np.ndarray:
    if isinstance(c, xr.DataArray):
        return coord_lats(c)
    points = np.asarray(c, dtype=float)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError("Expected a sequence of (lon, lat) points.")
    return points[:, 1]


def uniquelats(c) -> tuple[list, np.ndarray]:
    """Find the unique latitudes of a Coordinate axis.

    Parameters
    ----------
    c : xr.DataArray with a ``coord`` dimension, or a sequence of
        (lon, lat) points. Must be sorted by latitude.

    Returns
    -------
    (idxs, lats)
        idxs : list of ``range`` — the positions each latitude covers.
        lats : np.ndarray — the unique latitudes, ascending.

    Example
    -------
    >>> idxs, lats = uniquelats([(0, 1), (90, 1), (0, 2), (120, 2), (240, 2), (0, 3)])
    >>> idxs
    [range(0, 2), range(2, 5), range(5, 6)]
    """
    lats = point_lats(c)
    check_lat_sorted(lats)

    idxs  = []
    ulats = []
    start = 0
    for i in range(1, len(lats)):
        if lats[i] != lats[i - 1]:
            ulats.append(lats[i - 1])
            idxs.append(range(start, i))
            start = i
    ulats.append(lats[-1])
    idxs.append(range(start, len(lats)))
    return idxs, np.asarray(ulats)


# ── Latitude mean ─────────────────────────────────────────────────────

def _latweights(da: xr.DataArray) -> xr.DataArray:
    # Normalised to sum 1: meant to be combined with a sum, not a mean.
    we = np.cos(np.deg2rad(da[LAT])).clip(0.0, 1.0)
    return we / we.sum()


def latmean(
    da: xr.DataArray,
    r: Union[None, range, slice, np.ndarray] = None,
) -> Union[xr.DataArray, float]:
    """Latitude mean of ``da``, properly weighted by cos(lat).

    Parameters
    ----------
    da : xr.DataArray with a ``lat`` dimension.
    r  : positions along ``lat`` to average over (range, slice or index
         array). Default: the whole axis.

    Returns
    -------
    xr.DataArray without ``lat`` if other dimensions remain, else a float.

    Example
    -------
    >>> tropics = latmean(A.sel(lat=slice(-30, 30)))
    >>> polar_cap = latmean(A, range(0, 5))
    """
    if LAT not in da.dims:
        raise ValueError(f"Array with dims {da.dims} has no latitude dimension.")
    if r is not None:
        if isinstance(r, range):
            r = np.asarray(r)
        da = da.isel({LAT: r})

    weighted = da * _latweights(da)
    if da.ndim > 1:
        out = weighted.sum(LAT, skipna=False)
        out.attrs = dict(da.attrs)
        return out.rename(da.name)
    return float(weighted.sum(skipna=False))


# ── Zonal mean ────────────────────────────────────────────────────────

def zonalmean(da: xr.DataArray) -> xr.DataArray:
    """Zonal mean of ``da``: the mean over all longitudes at fixed latitude.

    Grid space averages over the ``lon`` dimension. Equal-area space
    averages every latitude ring of the Coordinate axis and returns an
    array with dimensions ``(lat, *other)``.
    """
    structure = spacestructure(da)
    if structure is SpatialStructure.GRID:
        if LON not in da.dims:
            raise ValueError(f"Array with dims {da.dims} has no longitude dimension.")
        return da.mean(LON, keep_attrs=True)
    if structure is SpatialStructure.EQAREA:
        return _zonalmean_eqarea(da)
    raise no_space_error(da)


def _zonalmean_eqarea(da: xr.DataArray) -> xr.DataArray:
    idxs, lats = uniquelats(da)
    logger.debug("zonal mean over %d latitude rings", len(lats))
    rings = [
        da.isel({COORD: slice(r.start, r.stop)}).mean(COORD, keep_attrs=True)
        for r in idxs
    ]
    out = xr.concat(rings, dim=pd.Index(lats, name=LAT))
    return out.rename(_annotated(da, ZONAL_SUFFIX))


# ── Spatial aggregation ───────────────────────────────────────────────

def _check_coords(w: xr.DataArray, da: xr.DataArray, dims: tuple) -> None:
    for d in dims:
        if w.sizes[d] != da.sizes[d]:
            raise ValueError(
                f"Weights have {w.sizes[d]} values along '{d}', array has {da.sizes[d]}."
            )
        if d in w.coords and d in da.coords and not np.array_equal(
            w[d].values, da[d].values
        ):
            raise ValueError(f"Weights and array have different '{d}' coordinates.")


def _grid_weights(da: xr.DataArray, w) -> tuple[str, Optional[xr.DataArray]]:
    """Classify external weights: "none", "space" (lon × lat) or "full"."""
    if w is None:
        return "none", None

    if isinstance(w, xr.DataArray):
        if w.dims == (LON, LAT):
            _check_coords(w, da, (LON, LAT))
            return "space", w
        if w.dims == da.dims:
            _check_coords(w, da, da.dims)
            return "full", w
        raise ValueError(
            f"Weights with dims {w.dims} match neither {(LON, LAT)} "
            f"nor the array dims {da.dims}."
        )

    w = np.asarray(w, dtype=float)
    if w.shape == (da.sizes[LON], da.sizes[LAT]):
        return "space", xr.DataArray(w, dims=(LON, LAT))
    if w.shape == da.shape:
        return "full", xr.DataArray(w, dims=da.dims)
    raise ValueError(
        f"Weights of shape {w.shape} match neither the (lon, lat) shape "
        f"{(da.sizes[LON], da.sizes[LAT])} nor the array shape {da.shape}."
    )


def spaceagg(
    f: Callable,
    da: xr.DataArray,
    weights=None,
):
    """Aggregate ``da`` with ``f`` over all of its space, weighted by area.

    Parameters
    ----------
    f       : callable ``f(a, axis=None, weights=None)``, following the
              convention of ``np.average`` (e.g. :func:`mean`). On a grid
              ``axis`` is ``(-2, -1)`` and ``weights`` has the shape of ``a``.
    da      : xr.DataArray on a grid (``lon`` before ``lat``) or on an
              equal-area Coordinate axis.
    weights : xr.DataArray or np.ndarray, optional — extra weights for every
              spatial point. Either of (lon, lat) shape, or of exactly the
              shape of ``da``. Grid space only.

    Returns
    -------
    A single value when ``da`` has no dimensions besides space, otherwise
    an xr.DataArray over the remaining dimensions.

    Example
    -------
    >>> gm = spaceagg(mean, tas)                       # (time,)
    >>> ocean = spaceagg(mean, sst, weights=ocean_fraction)
    """
    structure = spacestructure(da)
    if structure is SpatialStructure.GRID:
        return _spaceagg_grid(f, da, weights)
    if structure is SpatialStructure.EQAREA:
        return _spaceagg_eqarea(f, da, weights)
    raise no_space_error(da)


def _spaceagg_grid(f: Callable, da: xr.DataArray, weights):
    missing = [d for d in (LON, LAT) if d not in da.dims]
    if missing:
        raise ValueError(f"Grid array is missing dimension(s) {missing}.")
    if dimindex(da, Dim.LON) > dimindex(da, Dim.LAT):
        raise ValueError("Longitude must precede latitude in the array dimensions.")

    kind, w = _grid_weights(da, weights)

    # (lon, lat) matrix of cos(lat)
    coslat = np.cos(np.deg2rad(da[LAT].values)).clip(0.0, 1.0)
    cosweights = np.tile(coslat, (da.sizes[LON], 1))
    if kind == "none":
        W = cosweights
    elif kind == "space":
        W = cosweights * w.values
    else:
        W = None

    # only space: a single number. Full-shape weights are (lon, lat) here.
    if da.ndim == 2:
        return f(da.values, weights=W)

    # every other-dims slice at once, space on the last two axes
    template = da.isel({LON: 0, LAT: 0}, drop=True)
    order = (*template.dims, LON, LAT)
    values = da.transpose(*order).values
    if kind != "full":
        W = np.broadcast_to(W, values.shape)
    else:
        W = w.transpose(*order).values * cosweights
    name = getattr(f, "__name__", str(f))
    logger.debug("spaceagg %s over %d slices (weights: %s)",
                 name, template.size, kind)

    r = f(values, axis=(-2, -1), weights=W)
    out = template.copy(data=np.asarray(r).reshape(template.shape))
    return out.rename(_annotated(da, SPACEAGG_SUFFIX.format(name)))


def _spaceagg_eqarea(f: Callable, da: xr.DataArray, weights):
    if weights is not None:
        raise NotImplementedError(
            "Weighted spatial aggregation is not implemented for equal-area space."
        )
    out = da.reduce(f, dim=COORD, keep_attrs=True)
    if out.ndim == 0:
        return out.item()
    name = getattr(f, "__name__", str(f))
    return out.rename(_annotated(da, SPACEAGG_SUFFIX.format(name)))


def spacemean(da: xr.DataArray, weights=None):
    """Average ``da`` over its spatial coordinates: ``spaceagg(mean, da, weights)``."""
    return spaceagg(mean, da, weights)
