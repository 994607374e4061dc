"""
Entity name canonicalization.

Source files disagree on how countries are spelled ("Taiwan*",
"Viet Nam", "Russian Federation"). Every row is mapped to a single
canonical key before aggregation so that all variants of one region
end up in the same group.
"""

import pandas as pd

from covidatlas.utils.logging import get_logger

log = get_logger(__name__)

# Country-level aliases: source spelling -> canonical key
COUNTRY_ALIASES: dict[str, str] = {
    "China": "Mainland China",
    "Czechia": "Czech Republic",
    "Iran (Islamic Republic of)": "Iran",
    "Republic of Korea": "Korea, South",
    "Republic of Moldova": "Moldova",
    "Russian Federation": "Russia",
    "Taipei and environs": "Taiwan",
    "Taiwan*": "Taiwan",
    "United Kingdom": "UK",
    "Viet Nam": "Vietnam",
}

# Territories listed as a sub-region of another country that are
# reported as entities of their own. Keyed by sub-region label.
TERRITORY_OVERRIDES: dict[str, str] = {
    "St Martin": "St Martin",
    "Saint Barthelemy": "Saint Barthelemy",
}


def canonicalize(label: str, sub_region: str | None = None) -> str:
    """
    Map a raw entity label to its canonical key.

    A territory override matched on the sub-region label wins over the
    country alias table. Unknown labels are returned unchanged.

    Args:
        label: Raw country/region label.
        sub_region: Optional province/state label of the same row.

    Returns:
        Canonical entity key.
    """
    if sub_region is not None and sub_region in TERRITORY_OVERRIDES:
        return TERRITORY_OVERRIDES[sub_region]
    return COUNTRY_ALIASES.get(label, label)


def canonicalize_frame(
    df: pd.DataFrame,
    column: str = "country",
    sub_region_column: str | None = "province",
) -> pd.DataFrame:
    """
    Canonicalize the entity column of every row.

    Args:
        df: Table with normalized column names.
        column: Column holding the entity label.
        sub_region_column: Column used for territory overrides, if present.

    Returns:
        New DataFrame with the entity column canonicalized.
    """
    result = df.copy()
    labels = result[column].astype(str)

    if sub_region_column is not None and sub_region_column in result.columns:
        # Blank sub-regions come through as NaN
        sub_regions = [
            sub if isinstance(sub, str) else None for sub in result[sub_region_column]
        ]
    else:
        sub_regions = [None] * len(result)

    canonical = [
        canonicalize(label, sub) for label, sub in zip(labels, sub_regions)
    ]
    result[column] = canonical

    n_renamed = int((labels != result[column]).sum())
    log.debug("Canonicalized entity names", column=column, renamed=n_renamed)

    return result
