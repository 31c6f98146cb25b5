"""
climbase.accessor
=================
The ``.clim`` accessor on ``xarray.DataArray``.

Importing :mod:`climbase` registers it:

>>> import climbase
>>> A.clim.spacestructure
<SpatialStructure.GRID: 'grid'>
>>> north, south = A.clim.hemispheric_functions()
>>> gm = A.clim.spacemean()
"""

from __future__ import annotations

import xarray as xr

from climbase import aggregation, hemispheres
from climbase.climarray import coordinates, refdims
from climbase.dims import (
    DimLike, SpatialStructure, dimindex, dimname, hasdim, otherdims, otheridxs,
    spacestructure, to_dim,
)
from climbase.spatial import spatialidxs


@xr.register_dataarray_accessor("clim")
class ClimAccessor:
    """Climate metadata and operations of a DataArray."""

    def __init__(self, xarray_obj: xr.DataArray):
        self._obj = xarray_obj

    # ── Metadata ──────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._obj.name or ""

    @property
    def attrib(self) -> dict:
        return self._obj.attrs

    @property
    def refdims(self) -> dict:
        return refdims(self._obj)

    @property
    def dims(self) -> tuple:
        """Dimensions as :class:`~climbase.dims.Dim` (KeyError for unknown names)."""
        return tuple(to_dim(d) for d in self._obj.dims)

    @property
    def spacestructure(self) -> SpatialStructure:
        return spacestructure(self._obj)

    def hasdim(self, d: DimLike) -> bool:
        return hasdim(self._obj, d)

    def size(self, d: DimLike) -> int:
        return self._obj.sizes[dimname(d)]

    def dimindex(self, d: DimLike) -> int:
        return dimindex(self._obj, d)

    def otherdims(self, *dims: DimLike) -> tuple:
        return otherdims(self._obj, *dims)

    def otheridxs(self, *dims: DimLike):
        return otheridxs(self._obj, *dims)

    def coordinates(self) -> list:
        return coordinates(self._obj)

    def spatialidxs(self):
        return spatialidxs(self._obj)

    def latitudes(self):
        return hemispheres.latitudes(self._obj)

    # ── Averaging ─────────────────────────────────────────────────────

    def zonalmean(self):
        return aggregation.zonalmean(self._obj)

    def latmean(self, r=None):
        return aggregation.latmean(self._obj, r)

    def spaceagg(self, f, weights=None):
        return aggregation.spaceagg(f, self._obj, weights)

    def spacemean(self, weights=None):
        return aggregation.spacemean(self._obj, weights)

    def uniquelats(self):
        return aggregation.uniquelats(self._obj)

    # ── Hemispheres ───────────────────────────────────────────────────

    def hemispheric_functions(self):
        return hemispheres.hemispheric_functions(self._obj)

    def hemispheric_means(self):
        return hemispheres.hemispheric_means(self._obj)
