"""
2D categorical bubble maps.

For one date column of an aggregated table, keeps the entities with a
non-zero value and splits them into two classes around a fixed
threshold ("no meaningful spread yet" vs "spread underway"). Marker
sizes are scaled against the maximum of the whole table so that maps of
different dates can be compared side by side.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import geopandas as gpd
import pandas as pd

from covidatlas.config.settings import RGB, MapsConfig, MapViewConfig
from covidatlas.normalization.temporal import date_columns
from covidatlas.schemas.maps import CategoryPointSchema
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)


def categorize(value: float, threshold: float = 100) -> str:
    """
    Two-class label of a value.

    Returns:
        '<100' below the threshold, '>=100' at or above it (for threshold 100).
    """
    if value >= threshold:
        return f">={threshold:g}"
    return f"<{threshold:g}"


@dataclass(frozen=True)
class CategoryMap:
    """
    Render-ready bubble map of one time slice.

    Attributes:
        points: GeoDataFrame (EPSG:4326) with entity, lat, lon, value,
            category, color and point geometry.
        date_column: Header of the mapped date column.
        title: Map title.
        size_limits: (0, maximum value over the whole table).
        view: Fixed center and zoom.
        basemap: Basemap token.
        colors: Color per category label.
    """

    points: gpd.GeoDataFrame
    date_column: str
    title: str
    size_limits: tuple[float, float]
    view: MapViewConfig
    basemap: str
    colors: dict[str, RGB]


def category_note(dataset: str, threshold: float = 100) -> str:
    """
    Subtitle naming the highlighted class of a bubble map.

    Example: "Countries with <100 cases highlighted in Magenta".
    """
    region = "States" if dataset.endswith("_us") else "Countries"
    unit = "deaths" if dataset.startswith("deaths") else "cases"
    return f"{region} with <{threshold:g} {unit} highlighted in Magenta"


def size_limits(table: pd.DataFrame) -> tuple[float, float]:
    """
    Bubble size limits across every date column of a table.

    Returns:
        Tuple (0, max value); (0, 0) for a table without values.
    """
    columns = date_columns(table)
    if not columns or table.empty:
        return (0.0, 0.0)
    values = table[columns].apply(pd.to_numeric, errors="coerce")
    maximum = values.max().max()
    return (0.0, float(maximum) if pd.notna(maximum) else 0.0)


def _resolve_column(table: pd.DataFrame, date_column: int | str) -> str:
    """Resolve a date column given by position among the date columns or by name."""
    columns = date_columns(table)
    if isinstance(date_column, str):
        if date_column not in columns:
            msg = f"Unknown date column: {date_column!r}"
            raise KeyError(msg)
        return date_column
    return columns[date_column]


def build_category_map(
    table: pd.DataFrame,
    date_column: int | str,
    view: MapViewConfig,
    basemap: str,
    maps: MapsConfig | None = None,
) -> CategoryMap:
    """
    Build the bubble map of one date column.

    Args:
        table: Aggregated series table.
        date_column: Position among the date columns (negative counts
            from the end) or the header itself.
        view: Fixed center/zoom of the dataset.
        basemap: Basemap token.
        maps: Map settings (threshold and colors); defaults apply if None.

    Returns:
        CategoryMap without zero-valued entities.

    Raises:
        IndexError: If the position is out of range.
        KeyError: If the header is unknown.
    """
    maps = maps or MapsConfig()
    column = _resolve_column(table, date_column)

    values = pd.to_numeric(table[column], errors="coerce").fillna(0)
    subset = pd.DataFrame(
        {
            "entity": table["entity"].astype(str),
            "lat": table["lat"],
            "lon": table["lon"],
            "value": values.astype(float),
        }
    )
    subset = subset[subset["value"] != 0].reset_index(drop=True)

    below = categorize(0, maps.category_threshold) if maps.category_threshold > 0 else None
    above = categorize(maps.category_threshold, maps.category_threshold)
    colors: dict[str, RGB] = {above: maps.above_color}
    if below is not None:
        colors[below] = maps.below_color

    subset["category"] = [categorize(v, maps.category_threshold) for v in subset["value"]]
    subset = CategoryPointSchema.validate(subset)
    subset["color"] = subset["category"].map(colors)

    points = gpd.GeoDataFrame(
        subset,
        geometry=gpd.points_from_xy(subset["lon"], subset["lat"]),
        crs="EPSG:4326",
    )

    limits = size_limits(table)
    log.info(
        "Built category map",
        date_column=column,
        entities=len(table),
        plotted=len(points),
        above=int((points["category"] == above).sum()),
        max_value=limits[1],
    )

    return CategoryMap(
        points=points,
        date_column=column,
        title=f"As of {column}",
        size_limits=limits,
        view=view,
        basemap=basemap,
        colors=colors,
    )


def build_category_maps(
    table: pd.DataFrame,
    view: MapViewConfig,
    basemap: str,
    maps: MapsConfig | None = None,
    columns: Sequence[int | str] = (0, -1),
) -> list[CategoryMap]:
    """
    Build several bubble maps, by default the first and the latest date.

    Returns:
        One CategoryMap per requested column, in request order.
    """
    return [build_category_map(table, col, view, basemap, maps) for col in columns]
