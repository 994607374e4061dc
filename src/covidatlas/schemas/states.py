"""
Pandera schema for the NYT per-state daily table.
"""

import pandera.pandas as pa
from pandera.typing import Series


class StateDailySchema(pa.DataFrameModel):
    """
    Schema for us-states.csv (long format).

    One row per (date, state) with cumulative counts.
    """

    date: Series[pa.DateTime] = pa.Field(
        description="Report date",
    )
    state: Series[str] = pa.Field(
        description="US state or territory name",
    )
    cases: Series[int] = pa.Field(
        ge=0,
        description="Cumulative confirmed cases",
    )
    deaths: Series[int] = pa.Field(
        ge=0,
        description="Cumulative deaths",
    )

    class Config:
        """Schema configuration."""

        name = "StateDailySchema"
        strict = False  # fips is optional
        coerce = True
