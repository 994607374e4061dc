"""
Matplotlib figures for bubble maps, rankings and growth curves.
"""

from covidatlas.plots.charts import (
    plot_comparison,
    plot_country,
    plot_growth_curves,
    plot_ranking_bars,
    save_figure,
)
from covidatlas.plots.maps import plot_category_maps

__all__ = [
    "plot_category_maps",
    "plot_comparison",
    "plot_country",
    "plot_growth_curves",
    "plot_ranking_bars",
    "save_figure",
]
