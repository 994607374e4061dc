"""
Pandera schemas for wide JHU time-series tables.

Wide tables carry one column per date. Only the fixed identifier and
coordinate columns are declared; date columns pass through (strict=False).
"""

import pandera.pandas as pa
from pandera.typing import Series


class GlobalTimeSeriesSchema(pa.DataFrameModel):
    """
    Schema for the JHU global confirmed/deaths files after column normalization.

    One row per country or province; some rows (ships, repatriated
    travellers) have no coordinates.
    """

    country: Series[str] = pa.Field(
        description="Country/Region label as published",
    )
    lat: Series[float] = pa.Field(
        ge=-90.0,
        le=90.0,
        nullable=True,
        description="Latitude in WGS84",
    )
    lon: Series[float] = pa.Field(
        ge=-180.0,
        le=180.0,
        nullable=True,
        description="Longitude in WGS84",
    )

    class Config:
        """Schema configuration."""

        name = "GlobalTimeSeriesSchema"
        strict = False  # Date columns vary per release
        coerce = True


class USTimeSeriesSchema(pa.DataFrameModel):
    """
    Schema for the JHU US county-level file after column normalization.

    One row per county (Admin2); aggregation groups on the state column.
    """

    state: Series[str] = pa.Field(
        description="US state or territory (Province_State)",
    )
    lat: Series[float] = pa.Field(
        ge=-90.0,
        le=90.0,
        nullable=True,
        description="County centroid latitude",
    )
    lon: Series[float] = pa.Field(
        ge=-180.0,
        le=180.0,
        nullable=True,
        description="County centroid longitude",
    )

    class Config:
        """Schema configuration."""

        name = "USTimeSeriesSchema"
        strict = False
        coerce = True


class AggregatedSeriesSchema(pa.DataFrameModel):
    """
    Schema for aggregated per-entity series.

    Exactly one row per canonical entity, with the mean coordinate of
    its contributing rows followed by one summed column per date.
    """

    entity: Series[str] = pa.Field(
        unique=True,
        description="Canonical entity key",
    )
    lat: Series[float] = pa.Field(
        ge=-90.0,
        le=90.0,
        nullable=True,
        description="Mean latitude of contributing rows",
    )
    lon: Series[float] = pa.Field(
        ge=-180.0,
        le=180.0,
        nullable=True,
        description="Mean longitude of contributing rows",
    )

    class Config:
        """Schema configuration."""

        name = "AggregatedSeriesSchema"
        strict = False
        coerce = True
