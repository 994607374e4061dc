"""
Pandera schemas for the 3D globe input and its layered marker output.
"""

import pandera.pandas as pa
from pandera.typing import Series


class GlobeDataSchema(pa.DataFrameModel):
    """
    Schema for the preprocessed per-country totals (CovidDataFor3DPlots.csv).

    Flat table without a time dimension.
    """

    entity: Series[str] = pa.Field(
        unique=True,
        description="Country label used for focus selection",
    )
    lat: Series[float] = pa.Field(ge=-90.0, le=90.0, description="Latitude")
    lon: Series[float] = pa.Field(ge=-180.0, le=180.0, description="Longitude")
    total_cases: Series[float] = pa.Field(
        ge=0,
        description="Cumulative confirmed cases",
    )
    total_deaths: Series[float] = pa.Field(
        ge=0,
        description="Cumulative deaths",
    )

    class Config:
        """Schema configuration."""

        name = "GlobeDataSchema"
        strict = False
        coerce = True


class GlobeMarkerSchema(pa.DataFrameModel):
    """
    Schema for layered globe markers in draw order.

    Halo rows precede the real marker they belong to.
    """

    lat: Series[float] = pa.Field(ge=-90.0, le=90.0)
    lon: Series[float] = pa.Field(ge=-180.0, le=180.0)
    value: Series[float] = pa.Field(description="Metric value of the point")
    bucket: Series[int] = pa.Field(
        in_range={"min_value": 1, "max_value": 6},
        description="Severity bucket",
    )
    size: Series[float] = pa.Field(gt=0, description="Marker render size")
    altitude: Series[float] = pa.Field(gt=0, description="Display altitude in meters")
    opacity: Series[float] = pa.Field(gt=0, le=1)
    halo: Series[bool] = pa.Field(description="True for halo markers")

    class Config:
        """Schema configuration."""

        name = "GlobeMarkerSchema"
        strict = False
        coerce = True
