"""
Schema registry for versioning and discovery.

Provides centralized access to all schema definitions with version tracking.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import pandera.pandas as pa

from covidatlas.schemas.globe import GlobeDataSchema, GlobeMarkerSchema
from covidatlas.schemas.maps import CategoryPointSchema
from covidatlas.schemas.states import StateDailySchema
from covidatlas.schemas.timeseries import (
    AggregatedSeriesSchema,
    GlobalTimeSeriesSchema,
    USTimeSeriesSchema,
)

if TYPE_CHECKING:
    import pandas as pd


class DataRole(Enum):
    """Classification of tables by their role in the pipeline."""

    SOURCE = "source"  # Raw external data
    INTERMEDIATE = "intermediate"  # Normalized and aggregated
    OUTPUT = "output"  # Render-ready


@dataclass(frozen=True)
class SchemaInfo:
    """Metadata about a registered schema."""

    name: str
    schema: type[pa.DataFrameModel]
    version: str
    role: DataRole
    description: str


class SchemaRegistry:
    """
    Centralized registry for all data schemas.

    Provides version tracking and schema discovery.
    """

    _version = "1.0.0"

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        "global_time_series": SchemaInfo(
            name="global_time_series",
            schema=GlobalTimeSeriesSchema,
            version="1.0.0",
            role=DataRole.SOURCE,
            description="JHU global confirmed/deaths time series",
        ),
        "us_time_series": SchemaInfo(
            name="us_time_series",
            schema=USTimeSeriesSchema,
            version="1.0.0",
            role=DataRole.SOURCE,
            description="JHU US county-level confirmed time series",
        ),
        "state_daily": SchemaInfo(
            name="state_daily",
            schema=StateDailySchema,
            version="1.0.0",
            role=DataRole.SOURCE,
            description="NYT per-state cumulative cases and deaths",
        ),
        "globe_data": SchemaInfo(
            name="globe_data",
            schema=GlobeDataSchema,
            version="1.0.0",
            role=DataRole.SOURCE,
            description="Per-country totals for the 3D globe",
        ),
        "aggregated_series": SchemaInfo(
            name="aggregated_series",
            schema=AggregatedSeriesSchema,
            version="1.0.0",
            role=DataRole.INTERMEDIATE,
            description="One row per canonical entity with summed date columns",
        ),
        "category_points": SchemaInfo(
            name="category_points",
            schema=CategoryPointSchema,
            version="1.0.0",
            role=DataRole.OUTPUT,
            description="Two-class bubble map points of one time slice",
        ),
        "globe_markers": SchemaInfo(
            name="globe_markers",
            schema=GlobeMarkerSchema,
            version="1.0.0",
            role=DataRole.OUTPUT,
            description="Layered globe markers in draw order",
        ),
    }

    @classmethod
    def registry_version(cls) -> str:
        """Get the registry version."""
        return cls._version

    @classmethod
    def get(cls, name: str) -> type[pa.DataFrameModel]:
        """
        Get a schema by name.

        Raises:
            KeyError: If schema not found.
        """
        return cls.get_info(name).schema

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """
        Get full schema info by name.

        Args:
            name: Schema identifier.

        Returns:
            SchemaInfo with metadata.
        """
        if name not in cls._schemas:
            available = ", ".join(cls._schemas.keys())
            msg = f"Unknown schema '{name}'. Available: {available}"
            raise KeyError(msg)
        return cls._schemas[name]

    @classmethod
    def list_schemas(cls) -> list[str]:
        """List all registered schema names."""
        return list(cls._schemas.keys())

    @classmethod
    def list_by_role(cls, role: DataRole) -> list[str]:
        """List schemas filtered by their data role."""
        return [name for name, info in cls._schemas.items() if info.role == role]

    @classmethod
    def validate(cls, df: "pd.DataFrame", schema_name: str) -> "pd.DataFrame":
        """
        Validate a DataFrame against a registered schema.

        Raises:
            pandera.errors.SchemaError: If validation fails.
        """
        return cls.get(schema_name).validate(df)
