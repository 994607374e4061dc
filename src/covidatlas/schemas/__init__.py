"""
Schema definitions using Pandera for data validation.

Every table crossing a stage boundary has an explicit contract here.
"""

from covidatlas.schemas.globe import GlobeDataSchema, GlobeMarkerSchema
from covidatlas.schemas.maps import CategoryPointSchema
from covidatlas.schemas.registry import DataRole, SchemaRegistry
from covidatlas.schemas.states import StateDailySchema
from covidatlas.schemas.timeseries import (
    AggregatedSeriesSchema,
    GlobalTimeSeriesSchema,
    USTimeSeriesSchema,
)

__all__ = [
    "AggregatedSeriesSchema",
    "CategoryPointSchema",
    "DataRole",
    "GlobalTimeSeriesSchema",
    "GlobeDataSchema",
    "GlobeMarkerSchema",
    "SchemaRegistry",
    "StateDailySchema",
    "USTimeSeriesSchema",
]
