"""
example_averaging.py
====================
Demonstrates climbase on a synthetic temperature field: zonal means,
global means, and the north/south hemispheric comparison, for both
a regular grid and an equal-area point set.

All parameters are set at the top of the script — no interactive input().
"""

import numpy as np
import pandas as pd

import climbase
from climbase import Dim

# ── 1. Configuration (edit these) ────────────────────────────────────

RESOLUTION = 5.0                # degrees
N_MONTHS   = 24
START      = "2000-01-01"
SEED       = 42

rng = np.random.default_rng(SEED)

lons = np.arange(0, 360, RESOLUTION)
lats = np.arange(-90, 90 + RESOLUTION, RESOLUTION)
time = pd.date_range(START, periods=N_MONTHS, freq="MS")


# ── 2. Grid field: warm tropics, seasonal cycle, warmer north ────────

lon2d, lat2d = np.meshgrid(lons, lats, indexing="ij")
base   = 300.0 - 40.0 * np.sin(np.deg2rad(lat2d)) ** 2 + 2.0 * (lat2d > 0)
season = 5.0 * np.sin(2 * np.pi * np.arange(N_MONTHS) / 12)
tas = (base[..., np.newaxis]
       + season[np.newaxis, np.newaxis, :] * np.sign(lat2d)[..., np.newaxis]
       + rng.normal(0, 0.5, (len(lons), len(lats), N_MONTHS)))

A = climbase.climarray(
    tas,
    [(Dim.LON, lons), (Dim.LAT, lats), (Dim.TIME, time)],
    name="tas",
    attrib={"units": "K"},
)

zm = climbase.zonalmean(A)
gm = climbase.spacemean(A)
nh, sh = climbase.hemispheric_means(A)

print(f"Zonal mean:         {zm.dims}  {dict(zm.sizes)}")
print(f"Global mean:        {gm.name}  {float(gm.mean()):.2f} K")
print(f"NH - SH (mean):     {float((nh - sh).mean()):.2f} K")

north, south = climbase.hemispheric_functions(A)
asym = climbase.zonalmean(north - south)
print(f"Asymmetry at 45°:   {float(asym.sel(lat=45.0).mean()):.2f} K")


# ── 3. Equal-area field: points sorted by latitude ───────────────────

points = []
for lat in np.arange(-87.5, 90, RESOLUTION):
    n = max(1, int(round(len(lons) * np.cos(np.deg2rad(lat)))))
    points.extend((lon, lat) for lon in np.linspace(0, 360, n, endpoint=False))

B = climbase.climarray(
    [300.0 - 40.0 * np.sin(np.deg2rad(lat)) ** 2 for _, lat in points],
    [(Dim.COORD, points)],
    name="tas",
)

print(f"Equal-area points:  {B.sizes['coord']}, "
      f"{len(climbase.latitudes(B))} latitude rings")
print(f"Global mean (EqA):  {climbase.spacemean(B):.2f} K")
print(f"Hemispheric means:  {climbase.hemispheric_means(B)}")
