"""
Time axis extraction from date-labeled columns.

The wide source tables carry one column per day, headed in the compact
JHU format (e.g. "1/22/20"). This module turns those headers into a typed
time axis paired with the numeric values of one entity.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from covidatlas.normalization.columns import value_columns
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)

# Compact month/day/two-digit-year format of the JHU column headers
DATE_HEADER_FORMAT = "%m/%d/%y"


def parse_date_header(header: str, fmt: str = DATE_HEADER_FORMAT) -> pd.Timestamp | None:
    """
    Parse one date column header.

    Args:
        header: Column header, e.g. "3/15/21".
        fmt: strptime format of the header.

    Returns:
        Parsed timestamp, or None if the header is not a date.
    """
    parsed = pd.to_datetime(str(header).strip(), format=fmt, errors="coerce")
    return None if pd.isna(parsed) else pd.Timestamp(parsed)


def parse_date_headers(
    headers: Sequence[str], fmt: str = DATE_HEADER_FORMAT
) -> pd.DatetimeIndex:
    """Parse many date headers at once; failures become NaT."""
    cleaned = pd.Index([str(h).strip() for h in headers], dtype=object)
    return pd.DatetimeIndex(
        pd.to_datetime(cleaned, format=fmt, errors="coerce"), name="date"
    )


def date_columns(table: pd.DataFrame) -> list[str]:
    """
    Value columns whose header parses as a date, in file order.

    Columns with an unparseable header are reported and left out, so
    they never reach a map or a size scale.
    """
    columns = value_columns(table)
    parsed = parse_date_headers(columns)
    for header in [c for c, ts in zip(columns, parsed) if pd.isna(ts)]:
        log.warning("Ignoring column with unparseable date header", header=header)
    return [c for c, ts in zip(columns, parsed) if pd.notna(ts)]


def coerce_numeric(values: Sequence[object] | pd.Series) -> np.ndarray:
    """
    Coerce cell values to floats, mapping blanks and junk to zero.

    Args:
        values: Raw cell values.

    Returns:
        Float array of the same length.
    """
    series = pd.Series(list(values), dtype=object)
    return pd.to_numeric(series, errors="coerce").fillna(0).to_numpy(dtype=float)


def extract_time_series(
    headers: Sequence[str],
    values: Sequence[object] | pd.Series,
) -> tuple[pd.DatetimeIndex, np.ndarray]:
    """
    Pair date headers with one entity's values.

    Headers that fail to parse are reported and dropped together with
    their value, so timestamps and values stay aligned one to one.

    Args:
        headers: Date column headers in file order.
        values: The entity's values, one per header.

    Returns:
        Tuple of (timestamps, values) of equal length.

    Raises:
        ValueError: If headers and values differ in length.
    """
    if len(headers) != len(values):
        msg = f"Got {len(headers)} headers but {len(values)} values"
        raise ValueError(msg)

    numeric = coerce_numeric(values)
    parsed = parse_date_headers(headers)
    valid = parsed.notna()

    for i in np.flatnonzero(~valid):
        log.warning("Skipping unparseable date header", header=str(headers[i]), position=int(i))

    return parsed[valid], numeric[valid]


def series_for_entity(
    table: pd.DataFrame,
    entity: str,
    entity_column: str = "entity",
) -> tuple[pd.DatetimeIndex, np.ndarray]:
    """
    Extract the time series of one row of an aggregated table.

    Args:
        table: Aggregated series table.
        entity: Canonical entity key.
        entity_column: Column holding entity keys.

    Returns:
        Tuple of (timestamps, values).

    Raises:
        KeyError: If the entity is not in the table.
    """
    rows = table[table[entity_column] == entity]
    if rows.empty:
        msg = f"Unknown entity: {entity!r}"
        raise KeyError(msg)

    headers = value_columns(table)
    return extract_time_series(headers, rows.iloc[0][headers].tolist())
