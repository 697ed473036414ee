"""
Domain models (Pydantic).

These types are the JSON-facing contract of the CLI: a coordinate pair and the
report produced for a single reference/target distance query.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from geodist.core.geo import DistanceUnit


class Coordinate(BaseModel):
    """A geographic point in decimal degrees (range is not enforced here)."""

    lat: float = Field(..., allow_inf_nan=False)
    lon: float = Field(..., allow_inf_nan=False)


class DistanceReport(BaseModel):
    """Great-circle distance between a reference point and one target."""

    reference: Coordinate
    target: Coordinate
    unit: DistanceUnit
    distance: float = Field(..., ge=0)
