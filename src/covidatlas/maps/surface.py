"""
Render surfaces.

A surface is the drawing capability the globe depends on: it draws
markers given geographic coordinates and style, and supports recenter
(set limits) and rebase (set basemap). The core never reasons about
pixels.

MatplotlibGlobeSurface draws markers into a 3D axes with longitude,
latitude and altitude as axes; basemap tokens select a background
palette.
"""

from pathlib import Path
from typing import Protocol

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from covidatlas.utils.logging import get_logger

log = get_logger(__name__)

# Background (axes face, figure face) per basemap token
BASEMAP_PALETTES: dict[str, tuple[str, str]] = {
    "satellite": ("#0b1d2e", "#050d16"),
    "darkwater": ("#10202b", "#000000"),
    "colorterrain": ("#dfe8d0", "#ffffff"),
    "landcover": ("#d4e6c3", "#ffffff"),
    "streets": ("#f2efe9", "#ffffff"),
}
DEFAULT_PALETTE = ("#1f2a36", "#0f151b")


class GlobeSurface(Protocol):
    """Drawing capability used by GlobeRenderer."""

    def set_basemap(self, basemap: str) -> None:
        """Switch the basemap style."""
        ...

    def set_limits(
        self, lat_limits: tuple[float, float], lon_limits: tuple[float, float]
    ) -> None:
        """Recenter on a geographic bounding window."""
        ...

    def set_label(self, text: str) -> None:
        """Show the current view description."""
        ...

    def draw_markers(self, markers: pd.DataFrame, color: str) -> None:
        """Draw markers in the given row order."""
        ...


class MatplotlibGlobeSurface:
    """GlobeSurface backed by a matplotlib 3D axes."""

    def __init__(self, title: str = "", figsize: tuple[float, float] = (12, 9)) -> None:
        self.figure: Figure = plt.figure(figsize=figsize)
        # Draw order must follow call order, not projected depth
        self.ax = self.figure.add_subplot(projection="3d", computed_zorder=False)
        self.ax.set_xlabel("Longitude")
        self.ax.set_ylabel("Latitude")
        self.ax.set_zlabel("Altitude (m)")
        self.figure.suptitle(title, fontsize=14, fontweight="bold")
        self._label = self.ax.text2D(0.02, 0.02, "", transform=self.ax.transAxes)
        self.basemap: str | None = None

    def set_basemap(self, basemap: str) -> None:
        """Apply the palette of a basemap token."""
        face, background = BASEMAP_PALETTES.get(basemap, DEFAULT_PALETTE)
        if basemap not in BASEMAP_PALETTES:
            log.warning("Unknown basemap token, using default palette", basemap=basemap)
        self.ax.set_facecolor(face)
        self.figure.set_facecolor(background)
        self.basemap = basemap

    def set_limits(
        self, lat_limits: tuple[float, float], lon_limits: tuple[float, float]
    ) -> None:
        """Set the longitude/latitude axis limits."""
        self.ax.set_xlim(*lon_limits)
        self.ax.set_ylim(*lat_limits)

    def set_label(self, text: str) -> None:
        """Update the view label in the lower left corner."""
        self._label.set_text(text)

    def draw_markers(self, markers: pd.DataFrame, color: str) -> None:
        """
        Draw markers one layer at a time.

        Each (bucket, halo) run becomes its own collection with an
        increasing zorder, so later layers always paint over earlier ones.
        """
        if markers.empty:
            return

        # Consecutive runs of identical (bucket, halo) keep the draw order
        run_id = (
            (markers["bucket"] != markers["bucket"].shift())
            | (markers["halo"] != markers["halo"].shift())
        ).cumsum()

        for zorder, (_, layer) in enumerate(markers.groupby(run_id, sort=True), start=1):
            self.ax.scatter(
                layer["lon"],
                layer["lat"],
                layer["altitude"],
                s=layer["size"] ** 2,
                c=color,
                alpha=float(layer["opacity"].iloc[0]),
                edgecolors="none",
                depthshade=False,
                zorder=zorder,
            )

    def save(self, path: Path) -> None:
        """Write the figure to disk and close it."""
        path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(self.figure)
