"""
Per-entity aggregation of wide time-series tables.

Collapses all rows sharing a canonical entity key into one row:
coordinates are averaged, every date column is summed. The output
schema is exactly entity, lat, lon followed by the date columns.
"""

from collections.abc import Iterable, Sequence

import pandas as pd

from covidatlas.normalization.columns import (
    COORDINATE_COLUMNS,
    validate_required_columns,
    value_columns,
)
from covidatlas.schemas.timeseries import AggregatedSeriesSchema
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)


def aggregate_by_entity(
    df: pd.DataFrame,
    key: str,
    metric_columns: Sequence[str] | None = None,
    *,
    validate: bool = True,
) -> pd.DataFrame:
    """
    Aggregate rows into one row per entity.

    Args:
        df: Wide table with normalized columns and canonicalized keys.
        key: Column holding the canonical entity key.
        metric_columns: Date columns to sum. Defaults to every column that
            is neither an identifier nor a coordinate, in file order.
        validate: Whether to validate the result against
            AggregatedSeriesSchema.

    Returns:
        DataFrame sorted by entity with columns entity, lat, lon, *metrics.
    """
    validate_required_columns(df, [key, *COORDINATE_COLUMNS])
    metrics = list(metric_columns) if metric_columns is not None else value_columns(df)

    work = df[[key, *COORDINATE_COLUMNS]].copy()
    work[list(COORDINATE_COLUMNS)] = work[list(COORDINATE_COLUMNS)].apply(
        pd.to_numeric, errors="coerce"
    )
    # Placeholder blanks count as zero
    values = df[metrics].apply(pd.to_numeric, errors="coerce").fillna(0)
    work = pd.concat([work, values], axis=1)

    reducers = {col: "mean" for col in COORDINATE_COLUMNS}
    reducers.update({col: "sum" for col in metrics})

    aggregated = (
        work.groupby(key, sort=True).agg(reducers).reset_index().rename(columns={key: "entity"})
    )
    aggregated["entity"] = aggregated["entity"].astype(str)
    aggregated = aggregated[["entity", *COORDINATE_COLUMNS, *metrics]]

    log.info(
        "Aggregated by entity",
        key=key,
        rows_before=len(df),
        entities=len(aggregated),
        metric_columns=len(metrics),
    )

    if validate:
        aggregated = AggregatedSeriesSchema.validate(aggregated)

    return aggregated


def exclude_entities(table: pd.DataFrame, entities: Iterable[str]) -> pd.DataFrame:
    """
    Drop the given entities from an aggregated table.

    Args:
        table: Aggregated series table.
        entities: Entity keys to leave out.

    Returns:
        New DataFrame without those entities.
    """
    excluded = set(entities)
    mask = ~table["entity"].isin(excluded)
    if excluded:
        log.debug("Excluding entities", entities=sorted(excluded), dropped=int((~mask).sum()))
    return table[mask].reset_index(drop=True)
