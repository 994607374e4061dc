"""
Configuration management with typed Pydantic models.

Provides file locations, map views and rendering parameters with
environment-aware YAML loading.
"""

from covidatlas.config.loader import load_config
from covidatlas.config.settings import (
    DataPathsConfig,
    GlobeConfig,
    MapsConfig,
    MapViewConfig,
    MetricStyleConfig,
    OutputConfig,
    PipelineConfig,
    RankingConfig,
)

__all__ = [
    "DataPathsConfig",
    "GlobeConfig",
    "MapViewConfig",
    "MapsConfig",
    "MetricStyleConfig",
    "OutputConfig",
    "PipelineConfig",
    "RankingConfig",
    "load_config",
]
