"""
climbase.climarray
==================
Construction of named, attributed climate arrays.

A climate array is a plain ``xarray.DataArray`` following two conventions:

* dimensions are named after :class:`climbase.dims.Dim` (``lon``, ``lat``,
  ``time``, ``height``, ``pressure``, ``coord``);
* an equal-area field has a single ``coord`` dimension, with ``lon`` and
  ``lat`` as non-index coordinates along it.

Reference dimensions (the provenance of earlier slicing or reductions) are
the scalar coordinates xarray already keeps after ``isel``/``sel``.

Example
-------
>>> import numpy as np, pandas as pd
>>> from climbase import climarray, Dim
>>> lons = np.arange(0, 360, 10.0)
>>> lats = np.arange(-90, 91, 5.0)
>>> t = pd.date_range("2000-03-15", periods=241, freq="MS")
>>> A = climarray(np.random.rand(36, 37, 241),
...               [(Dim.LON, lons), (Dim.LAT, lats), (Dim.TIME, t)],
...               name="tas", attrib={"units": "K"})
"""

from __future__ import annotations

from typing import Mapping, NamedTuple, Optional, Sequence

import numpy as np
import xarray as xr

from climbase.dims import Dim, to_dim, dimname


class Coordinate(NamedTuple):
    """A point of an equal-area Coordinate axis."""

    lon: float
    lat: float


def _split_dim(entry):
    # (dim, values) pair or a bare dim
    if isinstance(entry, (Dim, str)):
        return to_dim(entry), None
    d, values = entry
    return to_dim(d), values


def climarray(
    data,
    dims: Sequence,
    name: str = "",
    attrib: Optional[Mapping] = None,
    refdims: Optional[Mapping] = None,
) -> xr.DataArray:
    """Bundle numeric data with its dimensions, a name and attributes.

    Parameters
    ----------
    data    : array-like of rank N.
    dims    : sequence of N entries, each ``(dim, values)`` or a bare ``dim``
              (values default to positions). ``dim`` is a :class:`Dim` or a
              common name such as ``"latitude"``. For ``Dim.COORD`` the
              values are ``(lon, lat)`` points.
    name    : str — display name (default "").
    attrib  : mapping, optional — arbitrary metadata, stored as ``attrs``.
    refdims : mapping, optional — reduced dimensions and their scalar value.

    Returns
    -------
    xr.DataArray
    """
    data = np.asarray(data)
    dims = list(dims)
    if data.ndim != len(dims):
        raise ValueError(
            f"Data has rank {data.ndim} but {len(dims)} dimensions were given."
        )

    names  = []
    coords = {}
    for axis, entry in enumerate(dims):
        d, values = _split_dim(entry)
        if d.short in names:
            raise ValueError(f"Dimension '{d.short}' given more than once.")
        names.append(d.short)

        if values is None:
            values = np.arange(data.shape[axis])

        if d is Dim.COORD:
            points = np.asarray(values, dtype=float)
            if points.ndim != 2 or points.shape[1] != 2:
                raise ValueError("Coordinate values must be (lon, lat) pairs.")
            coords[Dim.LON.short] = (d.short, points[:, 0])
            coords[Dim.LAT.short] = (d.short, points[:, 1])
            n = len(points)
        else:
            coords[d.short] = values
            n = len(values)

        if n != data.shape[axis]:
            raise ValueError(
                f"Dimension '{d.short}' has {n} values but data axis {axis} "
                f"has length {data.shape[axis]}."
            )

    if Dim.COORD.short in names and (
        Dim.LON.short in names or Dim.LAT.short in names
    ):
        raise ValueError("A Coordinate dimension cannot coexist with lon/lat dimensions.")

    da = xr.DataArray(
        data,
        dims=names,
        coords=coords,
        name=name or None,
        attrs=dict(attrib) if attrib is not None else {},
    )
    if refdims:
        da = da.assign_coords({dimname(k): v for k, v in refdims.items()})
    return da


# ── Coordinate axis access ────────────────────────────────────────────

def _require_coord(da: xr.DataArray) -> None:
    if Dim.COORD.short not in da.dims:
        raise ValueError("Array has no Coordinate ('coord') dimension.")


def coord_lats(da: xr.DataArray) -> np.ndarray:
    """Latitude component of every point of the Coordinate axis."""
    _require_coord(da)
    return np.asarray(da[Dim.LAT.short].values)


def coordinates(da: xr.DataArray) -> list:
    """The Coordinate axis of ``da`` as a list of :class:`Coordinate`."""
    _require_coord(da)
    lons = da[Dim.LON.short].values
    lats = da[Dim.LAT.short].values
    return [Coordinate(float(x), float(y)) for x, y in zip(lons, lats)]


def refdims(da: xr.DataArray) -> dict:
    """Scalar coordinates of ``da``: the dimensions it was reduced from."""
    return {name: c.values[()] for name, c in da.coords.items() if c.ndim == 0}
