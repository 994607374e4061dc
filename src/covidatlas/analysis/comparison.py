"""
Country growth comparison.

Builds single-entity and side-by-side time series from an aggregated
table, on the time axis parsed from its date headers.
"""

import pandas as pd

from covidatlas.normalization.temporal import series_for_entity
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)


def country_series(table: pd.DataFrame, entity: str) -> pd.Series:
    """
    Time series of one entity.

    Args:
        table: Aggregated series table.
        entity: Canonical entity key.

    Returns:
        Series indexed by date, named after the entity.

    Raises:
        KeyError: If the entity is not in the table.
    """
    timestamps, values = series_for_entity(table, entity)
    return pd.Series(values, index=timestamps, name=entity)


def compare_countries(table: pd.DataFrame, first: str, second: str) -> pd.DataFrame:
    """
    Two entities on a shared time axis.

    Args:
        table: Aggregated series table.
        first: First entity key.
        second: Second entity key.

    Returns:
        DataFrame indexed by date with one column per entity.
    """
    frame = pd.concat(
        [country_series(table, first), country_series(table, second)], axis=1
    )
    log.info("Compared countries", first=first, second=second, points=len(frame))
    return frame
