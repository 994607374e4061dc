"""
Column name normalization.

The JHU global and US files spell the same fields differently
("Province/State" vs "Province_State", "Long" vs "Long_"). Everything is
mapped to canonical internal names so later stages address columns by
name only and never by position.
"""

import pandas as pd

from covidatlas.utils.logging import get_logger

log = get_logger(__name__)

# Maps various source names to standardized internal names
COLUMN_MAPPING: dict[str, str] = {
    # Region identifiers
    "Province/State": "province",
    "Country/Region": "country",
    "Province_State": "state",
    "Country_Region": "country",
    "Admin2": "county",
    "Combined_Key": "combined_key",
    # Coordinates
    "Lat": "lat",
    "lat": "lat",
    "Latitude": "lat",
    "Long": "lon",
    "Long_": "lon",
    "long": "lon",
    "Longitude": "lon",
    # US lookup codes
    "UID": "uid",
    "iso2": "iso2",
    "iso3": "iso3",
    "code3": "code3",
    "FIPS": "fips",
    "Population": "population",
    # Globe dataset
    "location": "entity",
    "Country": "entity",
}

# Identifier columns: grouped on or discarded, never summed
IDENTIFIER_COLUMNS: frozenset[str] = frozenset(
    {
        "province",
        "country",
        "state",
        "county",
        "combined_key",
        "uid",
        "iso2",
        "iso3",
        "code3",
        "fips",
        "population",
        "entity",
    }
)

COORDINATE_COLUMNS: tuple[str, str] = ("lat", "lon")


def normalize_columns(
    df: pd.DataFrame,
    mapping: dict[str, str] | None = None,
) -> pd.DataFrame:
    """
    Normalize column names to canonical form.

    Args:
        df: DataFrame to normalize.
        mapping: Optional custom mapping (defaults to COLUMN_MAPPING).

    Returns:
        DataFrame with normalized column names.
    """
    mapping = mapping or COLUMN_MAPPING

    rename_dict = {k: v for k, v in mapping.items() if k in df.columns}

    if rename_dict:
        log.debug("Normalizing columns", renamed=list(rename_dict.keys()))
        df = df.rename(columns=rename_dict)

    return df


def value_columns(df: pd.DataFrame) -> list[str]:
    """
    List the metric (date) columns of a wide time-series table.

    A column is a value column when it is neither an identifier nor a
    coordinate. File order is preserved.

    Args:
        df: Table with normalized column names.

    Returns:
        Value column names in their original left-to-right order.
    """
    excluded = IDENTIFIER_COLUMNS | set(COORDINATE_COLUMNS)
    return [str(col) for col in df.columns if col not in excluded]


def validate_required_columns(
    df: pd.DataFrame,
    required: list[str],
    *,
    raise_on_missing: bool = True,
) -> list[str]:
    """
    Check that required columns are present.

    Args:
        df: DataFrame to check.
        required: List of required column names.
        raise_on_missing: Whether to raise error if columns missing.

    Returns:
        List of missing columns.

    Raises:
        ValueError: If raise_on_missing and columns are missing.
    """
    missing = [col for col in required if col not in df.columns]

    if missing and raise_on_missing:
        msg = f"Missing required columns: {missing}"
        raise ValueError(msg)

    if missing:
        log.warning("Missing columns", missing=missing)

    return missing
