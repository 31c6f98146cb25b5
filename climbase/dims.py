"""
climbase.dims
=============
Dimension vocabulary and spatial-structure classification.

Every array handled by climbase is an ``xarray.DataArray`` whose dimensions
are named after the members of :class:`Dim`. The spatial structure of an
array is never stored; it is derived from its dimension names on demand.

Functions
---------
to_dim            — resolve a Dim or a common name to a Dim
dimname           — xarray dimension name of a Dim or common name
standardise_dims  — rename common dimension names to the canonical ones
spacestructure    — GRID, EQAREA or NONE, from the dimension names
hasdim / dimindex — dimension introspection
otherdims         — dimensions not among the given ones
otheridxs         — iterate over every combination of the other dimensions
"""

from __future__ import annotations

import itertools
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Union

import xarray as xr


# ── Dimension vocabulary ──────────────────────────────────────────────

class Dim(Enum):
    """Axis tags of a climate field: ``(short, long_name)``."""

    LON      = ("lon", "Longitude")
    LAT      = ("lat", "Latitude")
    TIME     = ("time", "Time")
    HEIGHT   = ("height", "Height")
    PRESSURE = ("pressure", "Pressure")
    COORD    = ("coord", "Coordinates (spatial)")

    def __init__(self, short: str, long_name: str):
        self.short = short
        self.long_name = long_name

    def __str__(self) -> str:
        return self.short


STANDARD_DIMS = tuple(Dim)

COMMON_NAMES = MappingProxyType({
    "lat"       : Dim.LAT,
    "latitude"  : Dim.LAT,
    "lon"       : Dim.LON,
    "long"      : Dim.LON,
    "longitude" : Dim.LON,
    "time"      : Dim.TIME,
    "height"    : Dim.HEIGHT,
    "altitude"  : Dim.HEIGHT,
    "pressure"  : Dim.PRESSURE,
    "coord"     : Dim.COORD,
})

DimLike = Union[Dim, str]


def to_dim(d: DimLike) -> Dim:
    """Resolve a :class:`Dim` or a (case-insensitive) common name to a Dim."""
    if isinstance(d, Dim):
        return d
    try:
        return COMMON_NAMES[str(d).lower()]
    except KeyError:
        raise KeyError(
            f"Unknown dimension '{d}'. Known names: {sorted(COMMON_NAMES)}"
        ) from None


def dimname(d: DimLike) -> str:
    """Name of the xarray dimension that carries ``d``."""
    return to_dim(d).short


def standardise_dims(obj: Union[xr.DataArray, xr.Dataset]):
    """Rename dimensions and coordinates with a common name to the canonical one.

    ``latitude`` → ``lat``, ``longitude``/``long`` → ``lon``,
    ``altitude`` → ``height`` and so on. Names that are not in
    :data:`COMMON_NAMES` are left untouched.
    """
    names = set(obj.dims) | set(obj.coords)
    rename = {}
    for name in names:
        canonical = COMMON_NAMES.get(str(name).lower())
        if canonical is not None and name != canonical.short:
            rename[name] = canonical.short
    if rename:
        obj = obj.rename(rename)
    return obj


# ── Spatial structure ─────────────────────────────────────────────────

class SpatialStructure(Enum):
    """How the space of an array is sampled."""

    GRID   = "grid"     # separate lon and lat dimensions
    EQAREA = "eqarea"   # single coord dimension of (lon, lat) points
    NONE   = "none"


def _dimnames(obj) -> tuple:
    if isinstance(obj, (xr.DataArray, xr.Dataset)):
        return tuple(obj.dims)
    return tuple(str(d) for d in obj)


def spacestructure(obj) -> SpatialStructure:
    """Classify the spatial structure of ``obj``.

    Parameters
    ----------
    obj : xr.DataArray, xr.Dataset, or an iterable of dimension names / Dims.

    Returns
    -------
    SpatialStructure.EQAREA if a ``coord`` dimension exists, otherwise
    SpatialStructure.GRID if ``lon`` or ``lat`` exists, otherwise
    SpatialStructure.NONE.
    """
    names = _dimnames(obj)
    if Dim.COORD.short in names:
        return SpatialStructure.EQAREA
    if Dim.LON.short in names or Dim.LAT.short in names:
        return SpatialStructure.GRID
    return SpatialStructure.NONE


def no_space_error(da: xr.DataArray) -> ValueError:
    return ValueError(f"Array with dims {da.dims} has no spatial dimensions.")


# ── Dimension introspection ───────────────────────────────────────────

def hasdim(da: xr.DataArray, d: DimLike) -> bool:
    return dimname(d) in da.dims


def dimindex(da: xr.DataArray, d: DimLike) -> int:
    """Axis position of ``d`` in ``da``."""
    return da.get_axis_num(dimname(d))


def otherdims(da: xr.DataArray, *dims: DimLike) -> tuple:
    """Dimension names of ``da`` that are not among ``dims``, in order."""
    drop = {dimname(d) for d in dims}
    return tuple(name for name in da.dims if name not in drop)


class OtherIndices:
    """Restartable iterable of ``{dim: position}`` dicts.

    One dict per combination of positions along ``names``, last name
    varying fastest. An empty ``names`` gives a single empty dict.
    """

    def __init__(self, names: Iterable[str], sizes: Iterable[int]):
        self.names = tuple(names)
        self.sizes = tuple(sizes)

    def __iter__(self):
        for pos in itertools.product(*(range(n) for n in self.sizes)):
            yield dict(zip(self.names, pos))

    def __len__(self) -> int:
        n = 1
        for s in self.sizes:
            n *= s
        return n


def otheridxs(da: xr.DataArray, *dims: DimLike) -> OtherIndices:
    """Iterate over every combination of the dimensions not among ``dims``.

    Example
    -------
    >>> for idx in otheridxs(da, Dim.LON, Dim.LAT):
    ...     field = da.isel(idx)        # (lon, lat) slice
    """
    names = otherdims(da, *dims)
    return OtherIndices(names, (da.sizes[n] for n in names))
