"""
Bubble map figures.

Draws CategoryMap slices on plain longitude/latitude axes; the basemap
token picks the background palette of the globe surfaces.
"""

import math
from collections.abc import Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from covidatlas.maps.category import CategoryMap
from covidatlas.maps.surface import BASEMAP_PALETTES, DEFAULT_PALETTE

# Marker area range (points^2) for values between the size limits
BUBBLE_AREA = (4.0, 400.0)


def bubble_sizes(
    values: pd.Series,
    size_limits: tuple[float, float],
    area: tuple[float, float] = BUBBLE_AREA,
) -> np.ndarray:
    """
    Scale values to marker areas within the size limits.

    Values are clipped to the limits, so a slice never outgrows the
    largest bubble of the whole series.
    """
    low, high = size_limits
    if high <= low:
        return np.full(len(values), area[0])
    fraction = (np.clip(values.to_numpy(dtype=float), low, high) - low) / (high - low)
    return area[0] + fraction * (area[1] - area[0])


def view_extent(
    center: tuple[float, float], zoom: float
) -> tuple[tuple[float, float], tuple[float, float]]:
    """
    Longitude and latitude limits shown at a web-map zoom level.

    Zoom 0 shows the whole world; every level halves the span.
    """
    lat, lon = center
    half_lon = min(180.0, 180.0 / 2**zoom)
    half_lat = min(90.0, 90.0 / 2**zoom)
    return (
        (max(-180.0, lon - half_lon), min(180.0, lon + half_lon)),
        (max(-90.0, lat - half_lat), min(90.0, lat + half_lat)),
    )


def draw_category_map(ax: Axes, category_map: CategoryMap) -> None:
    """Draw one bubble map slice into an axes."""
    face, _ = BASEMAP_PALETTES.get(category_map.basemap, DEFAULT_PALETTE)
    ax.set_facecolor(face)

    points = category_map.points
    if not points.empty:
        sizes = bubble_sizes(points["value"], category_map.size_limits)
        ax.scatter(
            points["lon"],
            points["lat"],
            s=sizes,
            c=list(points["color"]),
            alpha=0.7,
            edgecolors="none",
        )

    lon_limits, lat_limits = view_extent(
        category_map.view.center, category_map.view.zoom
    )
    ax.set_xlim(*lon_limits)
    ax.set_ylim(*lat_limits)
    ax.set_title(category_map.title, fontsize=11)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.grid(True, alpha=0.3)


def plot_category_maps(maps: Sequence[CategoryMap], title: str = "") -> Figure:
    """
    Tile several bubble map slices in one figure.

    Args:
        maps: Slices, usually the earliest and the latest date.
        title: Figure title.

    Returns:
        The matplotlib figure.
    """
    n = max(1, len(maps))
    ncols = min(2, n)
    nrows = math.ceil(n / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(8 * ncols, 5 * nrows), squeeze=False)

    for ax, category_map in zip(axes.flat, maps):
        draw_category_map(ax, category_map)
    for ax in list(axes.flat)[len(maps):]:
        ax.set_visible(False)

    fig.suptitle(title, fontsize=13)
    fig.tight_layout()
    return fig
