"""
climbase
========
Climate-specific operations on labelled arrays: spatial and temporal
aggregation, zonal and latitude-weighted means, hemispheric splitting.

Arrays are ``xarray.DataArray`` objects whose dimensions are named after
:class:`climbase.Dim`. Two spatial representations share one API:

* grid space — separate ``lon`` and ``lat`` dimensions;
* equal-area space — a single ``coord`` dimension of (lon, lat) points,
  sorted by latitude.

Quick start
-----------
>>> import numpy as np
>>> import climbase
>>> from climbase import Dim

# 1. Build an array
>>> A = climbase.climarray(
...     np.random.rand(36, 19, 12),
...     [(Dim.LON, np.arange(0, 360, 10.0)),
...      (Dim.LAT, np.arange(-90, 91, 10.0)),
...      (Dim.TIME, np.arange(12))],
...     name="tas",
... )

# 2. Average
>>> zm = climbase.zonalmean(A)          # (lat, time)
>>> gm = climbase.spacemean(A)          # (time,)
>>> north, south = climbase.hemispheric_means(A)

# 3. Or through the accessor
>>> nh, sh = A.clim.hemispheric_functions()
"""

import logging

# ── Dimensions ────────────────────────────────────────────────────────
from .dims import (
    Dim,
    STANDARD_DIMS,
    COMMON_NAMES,
    SpatialStructure,
    to_dim,
    dimname,
    standardise_dims,
    spacestructure,
    hasdim,
    dimindex,
    otherdims,
    otheridxs,
)

# ── Arrays ────────────────────────────────────────────────────────────
from .climarray import (
    climarray,
    Coordinate,
    coordinates,
    refdims,
)

# ── Space ─────────────────────────────────────────────────────────────
from .spatial import (
    spatialidxs,
    wrap_lon,
    lon_distance,
)

# ── Averaging ─────────────────────────────────────────────────────────
from .aggregation import (
    mean,
    uniquelats,
    latmean,
    zonalmean,
    spaceagg,
    spacemean,
)

# ── Hemispheres ───────────────────────────────────────────────────────
from .hemispheres import (
    hemisphere_indices,
    hemispheric_functions,
    hemispheric_means,
    latitudes,
)

# registers DataArray.clim
from .accessor import ClimAccessor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Dimensions
    "Dim", "STANDARD_DIMS", "COMMON_NAMES", "SpatialStructure",
    "to_dim", "dimname", "standardise_dims", "spacestructure",
    "hasdim", "dimindex", "otherdims", "otheridxs",
    # Arrays
    "climarray", "Coordinate", "coordinates", "refdims",
    # Space
    "spatialidxs", "wrap_lon", "lon_distance",
    # Averaging
    "mean", "uniquelats", "latmean", "zonalmean", "spaceagg", "spacemean",
    # Hemispheres
    "hemisphere_indices", "hemispheric_functions", "hemispheric_means",
    "latitudes",
    # Accessor
    "ClimAccessor",
]
