"""
Ingestion of the preprocessed 3D globe dataset.

CovidDataFor3DPlots.csv has one row per country with flat totals:
lat, long, total_cases, total_deaths and usually a location label.
"""

import pandas as pd

from covidatlas.config.settings import PipelineConfig
from covidatlas.ingestion.base import DataLoader
from covidatlas.normalization.columns import validate_required_columns
from covidatlas.normalization.names import canonicalize
from covidatlas.schemas.globe import GlobeDataSchema
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)


class GlobeDataLoader(DataLoader[GlobeDataSchema]):
    """Loader for the per-country globe totals."""

    path_attr = "globe"

    def __init__(self, config: PipelineConfig) -> None:
        """Initialize globe data loader."""
        super().__init__(config, GlobeDataSchema)

    def _load_raw(self) -> pd.DataFrame:
        """Load globe totals with one entity label per row."""
        df = self._read_csv()
        validate_required_columns(df, ["lat", "lon", "total_cases", "total_deaths"])

        if "entity" in df.columns:
            df["entity"] = [canonicalize(str(label)) for label in df["entity"]]
        else:
            log.warning("Globe data has no location column, using positional labels")
            df["entity"] = [f"Country {i}" for i in range(1, len(df) + 1)]

        df = df.dropna(subset=["lat", "lon"]).reset_index(drop=True)
        for col in ("total_cases", "total_deaths"):
            df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)

        return df[["entity", "lat", "lon", "total_cases", "total_deaths"]]


def load_globe_data(config: PipelineConfig, *, validate: bool = True) -> pd.DataFrame:
    """
    Convenience function to load the globe dataset.

    Args:
        config: Pipeline configuration.
        validate: Whether to validate against schema.

    Returns:
        DataFrame with entity, lat, lon, total_cases, total_deaths.
    """
    return GlobeDataLoader(config).load(validate=validate)
