"""
Evaluation strategies for a distance column.

Every strategy computes the same great-circle distance for each row of a coordinate
table; they only differ in how the rows are driven through `geodist.core.geo`:

- `loop`:     positional Python loop, scalar call per row
- `iterrows`: `DataFrame.iterrows()`, scalar call per row
- `apply`:    `DataFrame.apply(axis=1)`, scalar call per row
- `series`:   one batch call on the two pandas Series
- `numpy`:    one batch call on the raw numpy arrays
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np
import pandas as pd

from geodist.catalog.loader import require_columns
from geodist.core.errors import InvalidInputError
from geodist.core.geo import GeoPoint, distance, distance_batch, distance_scalar

logger = logging.getLogger(__name__)

STRATEGIES: tuple[str, ...] = ("loop", "iterrows", "apply", "series", "numpy")


def _by_loop(frame: pd.DataFrame, ref: GeoPoint, lat_col: str, lon_col: str, unit: str, strict: bool) -> pd.Series:
    out = []
    for i in range(len(frame)):
        out.append(
            distance_scalar(ref.lat, ref.lon, frame[lat_col].iloc[i], frame[lon_col].iloc[i], unit, strict=strict)
        )
    return pd.Series(out, index=frame.index, dtype=float)


def _by_iterrows(frame: pd.DataFrame, ref: GeoPoint, lat_col: str, lon_col: str, unit: str, strict: bool) -> pd.Series:
    out = []
    for _, row in frame.iterrows():
        out.append(distance_scalar(ref.lat, ref.lon, row[lat_col], row[lon_col], unit, strict=strict))
    return pd.Series(out, index=frame.index, dtype=float)


def _by_apply(frame: pd.DataFrame, ref: GeoPoint, lat_col: str, lon_col: str, unit: str, strict: bool) -> pd.Series:
    if frame.empty:
        return pd.Series([], index=frame.index, dtype=float)
    out = frame.apply(
        lambda row: distance_scalar(ref.lat, ref.lon, row[lat_col], row[lon_col], unit, strict=strict),
        axis=1,
    )
    return out.astype(float)


def _by_series(frame: pd.DataFrame, ref: GeoPoint, lat_col: str, lon_col: str, unit: str, strict: bool) -> pd.Series:
    return distance(ref.lat, ref.lon, frame[lat_col], frame[lon_col], unit, strict=strict)


def _by_numpy(frame: pd.DataFrame, ref: GeoPoint, lat_col: str, lon_col: str, unit: str, strict: bool) -> pd.Series:
    values = distance_batch(
        ref.lat,
        ref.lon,
        frame[lat_col].to_numpy(dtype=float),
        frame[lon_col].to_numpy(dtype=float),
        unit,
        strict=strict,
    )
    return pd.Series(values, index=frame.index, dtype=float)


_STRATEGY_FUNCS: dict[str, Callable[..., pd.Series]] = {
    "loop": _by_loop,
    "iterrows": _by_iterrows,
    "apply": _by_apply,
    "series": _by_series,
    "numpy": _by_numpy,
}


def distance_column(
    frame: pd.DataFrame,
    reference: GeoPoint,
    *,
    strategy: str = "numpy",
    unit: str = "miles",
    lat_column: str = "latitude",
    lon_column: str = "longitude",
    strict: bool = False,
) -> pd.Series:
    """Distance from `reference` to every row of `frame`, aligned to `frame.index`."""
    func = _STRATEGY_FUNCS.get(strategy)
    if func is None:
        raise InvalidInputError(f"Unknown strategy '{strategy}'; expected one of: {', '.join(STRATEGIES)}")
    require_columns(frame, lat_column, lon_column)

    logger.debug("Computing %d distances with strategy=%s unit=%s", len(frame), strategy, unit)
    out = func(frame, reference, lat_column, lon_column, unit, strict)
    out.name = None
    return out


def annotate_distances(
    frame: pd.DataFrame,
    reference: GeoPoint,
    *,
    column: str = "distance",
    **kwargs,
) -> pd.DataFrame:
    """Return a copy of `frame` with a distance column added (see `distance_column`)."""
    out = frame.copy()
    out[column] = distance_column(frame, reference, **kwargs)
    return out


def within_radius(
    frame: pd.DataFrame,
    reference: GeoPoint,
    radius: float,
    *,
    unit: str = "miles",
    lat_column: str = "latitude",
    lon_column: str = "longitude",
    strict: bool = False,
) -> pd.DataFrame:
    """Rows of `frame` no farther than `radius` (in `unit`) from `reference`."""
    r = float(radius)
    if not np.isfinite(r):
        raise InvalidInputError("radius must be a finite number")
    if r < 0:
        return frame.iloc[0:0]
    d = distance_column(
        frame, reference, strategy="numpy", unit=unit, lat_column=lat_column, lon_column=lon_column, strict=strict
    )
    return frame[d.to_numpy() <= r]
