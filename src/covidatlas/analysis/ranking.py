"""
Ranking and growth curves.

Ranks entities by their latest cumulative count and keeps the full
per-date series of the top entities for overlaid growth charts.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from covidatlas.normalization.columns import validate_required_columns
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Ranking:
    """
    Top-K ranking of entities.

    Attributes:
        rows: DataFrame with entity, value, rank (1 = largest), descending.
        growth: Long DataFrame with entity, date, value for the ranked
            entities, ordered by rank then date.
        as_of: Latest date in the input, if the input had dates.
        metric: Name of the ranked value column.
    """

    rows: pd.DataFrame
    growth: pd.DataFrame
    as_of: pd.Timestamp | None
    metric: str

    @property
    def entities(self) -> list[str]:
        """Ranked entity keys, largest first."""
        return self.rows["entity"].tolist()

    def growth_curve(self, entity: str) -> pd.Series:
        """Per-date series of one ranked entity."""
        curve = self.growth[self.growth["entity"] == entity]
        if curve.empty:
            msg = f"Entity not in ranking: {entity!r}"
            raise KeyError(msg)
        return pd.Series(
            curve["value"].to_numpy(),
            index=pd.DatetimeIndex(curve["date"], name="date"),
            name=entity,
        )


def rank_entities(
    entities: Sequence[str],
    values: Sequence[float],
    top_k: int = 20,
) -> pd.DataFrame:
    """
    Sort entities by value, descending, and keep the top K.

    Ties keep the input order. Asking for more entities than exist
    returns all of them.

    Args:
        entities: Entity keys in input order.
        values: Value per entity.
        top_k: Number of entities to keep.

    Returns:
        DataFrame with entity, value, rank.
    """
    if top_k < 1:
        msg = f"top_k must be at least 1, got {top_k}"
        raise ValueError(msg)
    if len(entities) != len(values):
        msg = f"Got {len(entities)} entities but {len(values)} values"
        raise ValueError(msg)

    clean = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce").fillna(0)
    records = list(zip(entities, clean.tolist()))
    # sorted() is stable, also with reverse=True
    ordered = sorted(records, key=lambda r: r[1], reverse=True)[:top_k]

    return pd.DataFrame(
        {
            "entity": [str(e) for e, _ in ordered],
            "value": [float(v) for _, v in ordered],
            "rank": list(range(1, len(ordered) + 1)),
        }
    )


def daily_totals(
    daily: pd.DataFrame,
    entity_column: str = "state",
    value_column: str = "cases",
    date_column: str = "date",
) -> pd.DataFrame:
    """
    Sum duplicate (date, entity) rows.

    Entities keep the order of their first appearance.

    Returns:
        Long DataFrame with entity, date, value.
    """
    validate_required_columns(daily, [entity_column, value_column, date_column])

    totals = (
        daily.groupby([entity_column, date_column], sort=False)[value_column]
        .sum()
        .reset_index()
        .rename(columns={entity_column: "entity", date_column: "date", value_column: "value"})
    )
    return totals


def latest_values(totals: pd.DataFrame) -> pd.DataFrame:
    """
    Value of each entity at its latest date.

    Args:
        totals: Output of daily_totals.

    Returns:
        DataFrame with entity, value in first-appearance order.
    """
    order = pd.unique(totals["entity"])
    latest_idx = totals.groupby("entity", sort=False)["date"].idxmax()
    latest = totals.loc[latest_idx, ["entity", "value"]].set_index("entity")
    return latest.reindex(order).reset_index()


def build_ranking(
    daily: pd.DataFrame,
    top_k: int = 20,
    *,
    entity_column: str = "state",
    value_column: str = "cases",
    date_column: str = "date",
) -> Ranking:
    """
    Rank entities by latest cumulative value and collect growth curves.

    Args:
        daily: Long table with one row per (date, entity).
        top_k: Number of entities to rank.
        entity_column: Column holding entity keys.
        value_column: Cumulative count to rank by.
        date_column: Date column.

    Returns:
        Ranking with bar rows and growth curves.
    """
    totals = daily_totals(daily, entity_column, value_column, date_column)
    latest = latest_values(totals)
    rows = rank_entities(latest["entity"].tolist(), latest["value"].tolist(), top_k)

    rank_of = dict(zip(rows["entity"], rows["rank"]))
    growth = totals[totals["entity"].isin(rank_of)].copy()
    growth["_rank"] = growth["entity"].map(rank_of)
    growth = (
        growth.sort_values(["_rank", "date"], kind="stable")
        .drop(columns="_rank")
        .reset_index(drop=True)
    )

    as_of = pd.Timestamp(totals["date"].max()) if len(totals) else None

    log.info(
        "Built ranking",
        metric=value_column,
        entities=len(latest),
        top_k=top_k,
        ranked=len(rows),
        as_of=str(as_of.date()) if as_of is not None else None,
    )

    return Ranking(rows=rows, growth=growth, as_of=as_of, metric=value_column)
