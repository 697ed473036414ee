"""
Coordinate table loader.

A dataset is a local CSV file with one row per place and (at least) a latitude and a
longitude column. We hand the rest of the package a DataFrame whose coordinate
columns are guaranteed to be float, so distance code never sees raw strings.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from geodist.core.errors import InvalidInputError, InvalidValueError

logger = logging.getLogger(__name__)


def require_columns(frame: pd.DataFrame, *columns: str) -> None:
    """Raise `InvalidInputError` listing any of `columns` missing from `frame`."""
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise InvalidInputError(
            f"Missing coordinate column(s): {', '.join(missing)} (available: {', '.join(map(str, frame.columns))})"
        )


def load_coordinates(path: str | Path, *, lat_column: str, lon_column: str) -> pd.DataFrame:
    """Load a CSV coordinate table and coerce its coordinate columns to float."""
    resolved = Path(path).expanduser()
    if not resolved.is_file():
        raise InvalidInputError(f"Coordinate file not found: {resolved}")
    frame = pd.read_csv(resolved)
    require_columns(frame, lat_column, lon_column)

    for col in (lat_column, lon_column):
        numeric = pd.to_numeric(frame[col], errors="coerce")
        bad = numeric.isna() & frame[col].notna()
        if bad.any():
            first = frame.index[bad.to_numpy()][0]
            raise InvalidValueError(
                f"Column '{col}' has a non-numeric value at row {first}: {frame.at[first, col]!r}"
            )
        frame[col] = numeric.astype(float)

    logger.info("Loaded %d rows from %s", len(frame), resolved)
    return frame
