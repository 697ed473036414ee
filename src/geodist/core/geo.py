"""
Great-circle (haversine) distance.

One formula serves both calling conventions:
- `distance_scalar()` evaluates a single reference/target pair,
- `distance_batch()` evaluates whole aligned coordinate arrays in one numpy pass,
- `distance()` picks the right one from the shape of the targets.

The formula is written with numpy ufuncs so that a scalar call and a batch call
go through the same arithmetic and agree to floating-point precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
import pandas as pd

from geodist.core.errors import InvalidInputError, InvalidValueError, ShapeMismatchError

DistanceUnit = Literal["miles", "kilometers"]

EARTH_RADIUS: dict[str, float] = {
    "miles": 3959.0,
    "kilometers": 6371.0,
}


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def radius_for(unit: str) -> float:
    """Return the Earth radius for a unit name (case-insensitive)."""
    key = str(unit).strip().lower()
    if key not in EARTH_RADIUS:
        raise InvalidInputError(
            f"Unknown distance unit '{unit}'; expected one of: {', '.join(sorted(EARTH_RADIUS))}"
        )
    return EARTH_RADIUS[key]


def _is_collection(value: Any) -> bool:
    return np.ndim(value) > 0


def _as_degrees(value: Any, *, name: str) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidValueError(f"{name} must be numeric degrees") from exc
    if not np.all(np.isfinite(arr)):
        raise InvalidValueError(f"{name} contains a non-finite value (NaN or infinity)")
    return arr


def _check_range(arr: np.ndarray, *, name: str, limit: float) -> None:
    if np.any(np.abs(arr) > limit):
        raise InvalidValueError(f"{name} is outside [-{limit:g}, {limit:g}]")


def _reference(lat: Any, lon: Any, *, strict: bool) -> tuple[np.ndarray, np.ndarray]:
    if _is_collection(lat) or _is_collection(lon):
        raise InvalidValueError("reference_lat/reference_lon must be single values")
    lat1 = _as_degrees(lat, name="reference_lat")
    lon1 = _as_degrees(lon, name="reference_lon")
    if strict:
        _check_range(lat1, name="reference_lat", limit=90)
        _check_range(lon1, name="reference_lon", limit=180)
    return lat1, lon1


def haversine_term(lat1: Any, lon1: Any, lat2: Any, lon2: Any) -> Any:
    """Return the haversine of the central angle for degree inputs (scalar or element-wise)."""
    lat1, lon1, lat2, lon2 = map(np.radians, (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    return np.sin(dlat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2.0) ** 2


def central_angle(h: Any) -> Any:
    """Turn a haversine term into a central angle in radians.

    Rounding can push `h` a hair above 1 for near-antipodal points, where arcsine is
    undefined; `h` is clamped to [0, 1] so the result tops out at pi instead of NaN.
    """
    return 2.0 * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))


def distance_scalar(
    reference_lat: float,
    reference_lon: float,
    target_lat: float,
    target_lon: float,
    unit: str = "miles",
    *,
    strict: bool = False,
) -> float:
    """Distance between the reference point and one target point."""
    radius = radius_for(unit)
    if _is_collection(target_lat) or _is_collection(target_lon):
        raise ShapeMismatchError("distance_scalar expects single target_lat/target_lon values")
    lat1, lon1 = _reference(reference_lat, reference_lon, strict=strict)
    lat2 = _as_degrees(target_lat, name="target_lat")
    lon2 = _as_degrees(target_lon, name="target_lon")
    if strict:
        _check_range(lat2, name="target_lat", limit=90)
        _check_range(lon2, name="target_lon", limit=180)
    return float(radius * central_angle(haversine_term(lat1, lon1, lat2, lon2)))


def distance_batch(
    reference_lat: float,
    reference_lon: float,
    target_lat: Any,
    target_lon: Any,
    unit: str = "miles",
    *,
    strict: bool = False,
) -> np.ndarray:
    """Distances from the reference point to every aligned target, as a 1-D array.

    Targets are paired by position. Every step runs once over the whole arrays.
    """
    radius = radius_for(unit)
    lat1, lon1 = _reference(reference_lat, reference_lon, strict=strict)
    lat2 = _as_degrees(target_lat, name="target_lat")
    lon2 = _as_degrees(target_lon, name="target_lon")
    if lat2.ndim != 1 or lon2.ndim != 1:
        raise ShapeMismatchError(
            f"target_lat/target_lon must be 1-D collections (got ndim={lat2.ndim} and ndim={lon2.ndim})"
        )
    if lat2.shape[0] != lon2.shape[0]:
        raise ShapeMismatchError(
            f"target_lat has {lat2.shape[0]} values but target_lon has {lon2.shape[0]}"
        )
    if strict:
        _check_range(lat2, name="target_lat", limit=90)
        _check_range(lon2, name="target_lon", limit=180)
    return radius * central_angle(haversine_term(lat1, lon1, lat2, lon2))


def distance(
    reference_lat: float,
    reference_lon: float,
    target_lat: Any,
    target_lon: Any,
    unit: str = "miles",
    *,
    strict: bool = False,
) -> Any:
    """Great-circle distance from a reference point to one or many targets.

    Scalar targets return a float. Collection targets return a numpy array of the
    same length and order, or a Series on the latitude index when given a Series.
    """
    lat_is_collection = _is_collection(target_lat)
    if lat_is_collection != _is_collection(target_lon):
        raise ShapeMismatchError("target_lat and target_lon must both be scalars or both be collections")
    if not lat_is_collection:
        return distance_scalar(reference_lat, reference_lon, target_lat, target_lon, unit, strict=strict)

    out = distance_batch(reference_lat, reference_lon, target_lat, target_lon, unit, strict=strict)
    if isinstance(target_lat, pd.Series):
        return pd.Series(out, index=target_lat.index, dtype=float)
    return out


def haversine(a: GeoPoint, b: GeoPoint, unit: str = "miles") -> float:
    """Compute great-circle distance between two points in the given unit."""
    return distance_scalar(a.lat, a.lon, b.lat, b.lon, unit)
