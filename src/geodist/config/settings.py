# src/geodist/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/geodist/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `GEODIST_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (`GEODIST_LOG_LEVEL`, `GEODIST_DEFAULT_UNIT`)

Design rule:
- Defaults for the CLI (unit, column names, strategy) live in YAML, not in argparse.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal
from geodist.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field

StrategyName = Literal["loop", "iterrows", "apply", "series", "numpy"]


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `geodist.config`."""
    text = resources.files("geodist.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "geodist"
    log_level: str = "INFO"


class DistanceSettings(BaseModel):
    default_unit: Literal["miles", "kilometers"] = "miles"
    strict: bool = False


class DatasetSettings(BaseModel):
    lat_column: str = Field("latitude", min_length=1)
    lon_column: str = Field("longitude", min_length=1)
    distance_column: str = Field("distance", min_length=1)


class EvaluationSettings(BaseModel):
    default_strategy: StrategyName = "numpy"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    distance: DistanceSettings = Field(default_factory=DistanceSettings)
    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    evaluation: EvaluationSettings = Field(default_factory=EvaluationSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("GEODIST_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    unit = os.getenv("GEODIST_DEFAULT_UNIT")
    if unit:
        data.setdefault("distance", {})["default_unit"] = unit.strip().lower()

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GEODIST_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
