"""
Ranking, growth and comparison charts.
"""

from pathlib import Path

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from covidatlas.analysis.ranking import Ranking
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)


def _as_of(ranking: Ranking) -> str:
    return f"As of {ranking.as_of:%d-%b-%Y}" if ranking.as_of is not None else ""


def plot_ranking_bars(ranking: Ranking, label: str = "State") -> Figure:
    """
    Horizontal bar chart of the ranked entities.

    The largest entity is drawn at the top.
    """
    rows = ranking.rows.iloc[::-1]
    fig, ax = plt.subplots(figsize=(10, max(6, len(rows) * 0.4)))

    ax.barh(range(len(rows)), rows["value"], color="steelblue", edgecolor="none")
    ax.set_yticks(range(len(rows)))
    ax.set_yticklabels(rows["entity"], fontsize=10)
    ax.set_xlabel(f"Total Confirmed {ranking.metric.title()}", fontsize=11)
    ax.set_ylabel(label, fontsize=11)
    ax.set_title(
        f"COVID-19 Confirmed {ranking.metric.title()} - Top {len(rows)}\n{_as_of(ranking)}",
        fontsize=12,
    )
    ax.grid(axis="x", alpha=0.3)

    fig.tight_layout()
    return fig


def plot_growth_curves(ranking: Ranking) -> Figure:
    """Overlaid per-date curves of the ranked entities."""
    fig, ax = plt.subplots(figsize=(12, 8))

    for entity in ranking.entities:
        curve = ranking.growth_curve(entity)
        ax.plot(curve.index, curve.to_numpy(), linewidth=1.5, label=entity)

    ax.set_title(
        f"COVID-19 Confirmed {ranking.metric.title()}\nTop {len(ranking.entities)}",
        fontsize=12,
    )
    ax.set_xlabel(_as_of(ranking), fontsize=11)
    ax.set_ylabel(f"Confirmed {ranking.metric.title()}", fontsize=11)
    ax.legend(loc="upper left", fontsize=8, ncol=2)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def _format_time_axis(ax: plt.Axes) -> None:
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%b-%y"))
    ax.set_xlabel("Date since 2020", fontsize=12)
    ax.set_ylabel("Number of Cases", fontsize=12)
    ax.grid(True, alpha=0.3)


def plot_country(series: pd.Series) -> Figure:
    """Time series of one country."""
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(series.index, series.to_numpy(), linewidth=2.5)
    ax.set_title(str(series.name), fontsize=15)
    _format_time_axis(ax)
    fig.tight_layout()
    return fig


def plot_comparison(frame: pd.DataFrame) -> Figure:
    """
    Country time series side by side: the first alone, then both overlaid.
    """
    first, second = frame.columns[0], frame.columns[1]
    fig, (left, right) = plt.subplots(1, 2, figsize=(16, 6))

    left.plot(frame.index, frame[first].to_numpy(), linewidth=2.5)
    left.set_title(str(first), fontsize=15)
    _format_time_axis(left)

    right.plot(frame.index, frame[first].to_numpy(), linewidth=2.5, label=str(first))
    right.plot(frame.index, frame[second].to_numpy(), linewidth=2.5, label=str(second))
    right.set_title(f"{first} vs {second}", fontsize=15)
    right.legend()
    right.autoscale(enable=True, axis="x", tight=True)
    _format_time_axis(right)

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: Path) -> Path:
    """
    Save a figure as PNG and close it.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    log.info("Saved figure", path=str(path))
    return path
