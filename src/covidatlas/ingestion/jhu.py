"""
JHU CSSE time-series ingestion.

Loads the wide global confirmed/deaths files and the US county file.
Date columns are kept as published; only identifier and coordinate
headers are renamed.
"""

from typing import Literal

import pandas as pd

from covidatlas.config.settings import PipelineConfig
from covidatlas.ingestion.base import DataLoader
from covidatlas.normalization.columns import validate_required_columns
from covidatlas.schemas.timeseries import GlobalTimeSeriesSchema, USTimeSeriesSchema

GlobalDataset = Literal["confirmed_global", "deaths_global"]

# Identifier columns read as text so that blank provinces stay NaN
# and codes are not parsed as floats
_TEXT_COLUMNS = {
    "Province/State": str,
    "Country/Region": str,
    "Province_State": str,
    "Country_Region": str,
    "Admin2": str,
    "Combined_Key": str,
    "iso2": str,
    "iso3": str,
}


class GlobalTimeSeriesLoader(DataLoader[GlobalTimeSeriesSchema]):
    """Loader for time_series_covid19_{confirmed,deaths}_global.csv."""

    def __init__(
        self, config: PipelineConfig, dataset: GlobalDataset = "confirmed_global"
    ) -> None:
        """
        Initialize global time series loader.

        Args:
            config: Pipeline configuration.
            dataset: Which configured global file to read.
        """
        super().__init__(config, GlobalTimeSeriesSchema)
        self.path_attr = dataset

    def _load_raw(self) -> pd.DataFrame:
        """Load the global CSV with normalized identifier columns."""
        df = self._read_csv(dtype=_TEXT_COLUMNS)
        validate_required_columns(df, ["country", "lat", "lon"])
        return df


class USTimeSeriesLoader(DataLoader[USTimeSeriesSchema]):
    """Loader for time_series_covid19_confirmed_US.csv."""

    path_attr = "confirmed_us"

    def __init__(self, config: PipelineConfig) -> None:
        """Initialize US time series loader."""
        super().__init__(config, USTimeSeriesSchema)

    def _load_raw(self) -> pd.DataFrame:
        """Load the US county CSV with normalized identifier columns."""
        df = self._read_csv(dtype=_TEXT_COLUMNS)
        validate_required_columns(df, ["state", "lat", "lon"])
        return df


def load_global_time_series(
    config: PipelineConfig,
    dataset: GlobalDataset = "confirmed_global",
    *,
    validate: bool = True,
) -> pd.DataFrame:
    """
    Convenience function to load a global time series file.

    Args:
        config: Pipeline configuration.
        dataset: 'confirmed_global' or 'deaths_global'.
        validate: Whether to validate against schema.

    Returns:
        Wide DataFrame, one row per country/province.
    """
    return GlobalTimeSeriesLoader(config, dataset).load(validate=validate)


def load_us_time_series(config: PipelineConfig, *, validate: bool = True) -> pd.DataFrame:
    """
    Convenience function to load the US county time series.

    Args:
        config: Pipeline configuration.
        validate: Whether to validate against schema.

    Returns:
        Wide DataFrame, one row per county.
    """
    return USTimeSeriesLoader(config).load(validate=validate)
