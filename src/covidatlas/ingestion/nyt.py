"""
NYT us-states.csv ingestion.

The file is already in long format: one row per (date, state).
"""

import pandas as pd

from covidatlas.config.settings import PipelineConfig
from covidatlas.ingestion.base import DataLoader
from covidatlas.normalization.columns import validate_required_columns
from covidatlas.schemas.states import StateDailySchema


class StateDailyLoader(DataLoader[StateDailySchema]):
    """Loader for per-state cumulative counts."""

    path_attr = "us_states"

    def __init__(self, config: PipelineConfig) -> None:
        """Initialize state daily loader."""
        super().__init__(config, StateDailySchema)

    def _load_raw(self) -> pd.DataFrame:
        """Load us-states.csv with parsed dates."""
        df = self._read_csv(dtype={"state": str, "fips": str})
        validate_required_columns(df, ["date", "state", "cases", "deaths"])

        df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d")
        df["cases"] = pd.to_numeric(df["cases"], errors="coerce").fillna(0)
        df["deaths"] = pd.to_numeric(df["deaths"], errors="coerce").fillna(0)
        return df


def load_state_daily(config: PipelineConfig, *, validate: bool = True) -> pd.DataFrame:
    """
    Convenience function to load the per-state daily table.

    Args:
        config: Pipeline configuration.
        validate: Whether to validate against schema.

    Returns:
        Long DataFrame with date, state, cases, deaths.
    """
    return StateDailyLoader(config).load(validate=validate)
