"""
Pandera schema for 2D categorical map points.
"""

import pandera.pandas as pa
from pandera.typing import Series


class CategoryPointSchema(pa.DataFrameModel):
    """
    Schema for render-ready bubble map points of one time slice.

    Zero-valued entities never appear.
    """

    entity: Series[str] = pa.Field(description="Canonical entity key")
    lat: Series[float] = pa.Field(ge=-90.0, le=90.0, nullable=True)
    lon: Series[float] = pa.Field(ge=-180.0, le=180.0, nullable=True)
    value: Series[float] = pa.Field(
        ne=0,
        description="Metric value at the chosen date column",
    )
    category: Series[str] = pa.Field(
        str_matches=r"^(<|>=)\d",
        description="Threshold class, e.g. '<100' or '>=100'",
    )

    class Config:
        """Schema configuration."""

        name = "CategoryPointSchema"
        strict = False  # geometry and color columns
        coerce = True
