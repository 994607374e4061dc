"""
Layered 3D globe.

Markers are grouped into severity buckets and drawn smallest bucket
first, so large markers are never hidden behind small ones in dense
regions. Each marker's altitude is jittered inside a narrow band around
the metric's base altitude to break exact overlaps; latitude and
longitude are never touched.

The view is a small immutable value (GlobeView) that moves between
Global and Focused(entity) through focus/reset transitions.
"""

from collections.abc import Mapping, Sequence
from enum import Enum

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict

from covidatlas.analysis.magnitude import MetricKind, classify_many, metric_kind
from covidatlas.analysis.ranking import rank_entities
from covidatlas.config.settings import GlobeConfig
from covidatlas.maps.surface import GlobeSurface
from covidatlas.schemas.globe import GlobeMarkerSchema
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)

# Dropdown sentinel meaning "nothing selected"
NO_SELECTION = "Select a country to focus"

FULL_LAT_LIMITS = (-90.0, 90.0)
FULL_LON_LIMITS = (-180.0, 180.0)

MARKER_COLUMNS = [
    "entity",
    "lat",
    "lon",
    "value",
    "bucket",
    "size",
    "altitude",
    "opacity",
    "halo",
]


class ViewMode(str, Enum):
    """Observable globe view states."""

    GLOBAL = "global"
    FOCUSED = "focused"


class GlobeView(BaseModel):
    """Serializable view state of the globe."""

    model_config = ConfigDict(frozen=True)

    mode: ViewMode = ViewMode.GLOBAL
    entity: str | None = None
    lat_limits: tuple[float, float] = FULL_LAT_LIMITS
    lon_limits: tuple[float, float] = FULL_LON_LIMITS
    basemap: str
    label: str = "Global View"


def global_view(basemap: str) -> GlobeView:
    """Full-earth view with the given basemap."""
    return GlobeView(basemap=basemap)


def focus_view(
    view: GlobeView,
    entity: str | None,
    coordinates: Mapping[str, tuple[float, float]],
    config: GlobeConfig,
    values: Mapping[str, float] | None = None,
) -> GlobeView:
    """
    Focus the view on one entity.

    The sentinel selection and unknown entities leave the view unchanged.

    Args:
        view: Current view.
        entity: Selected entity key, None or NO_SELECTION.
        coordinates: Entity key -> (lat, lon).
        config: Globe settings (focus window and basemap).
        values: Optional entity key -> metric value, for the view label.

    Returns:
        The focused view, or the current view for a no-op.
    """
    if entity is None or entity == NO_SELECTION:
        return view

    if entity not in coordinates:
        log.warning("Focus target not found, view unchanged", entity=entity)
        return view

    lat, lon = coordinates[entity]
    label = f"Viewing: {entity}"
    if values is not None and entity in values:
        label += f" ({values[entity] / 1_000_000:.1f}M)"

    return GlobeView(
        mode=ViewMode.FOCUSED,
        entity=entity,
        lat_limits=(lat - config.focus_lat_window, lat + config.focus_lat_window),
        lon_limits=(lon - config.focus_lon_window, lon + config.focus_lon_window),
        basemap=config.focus_basemap,
        label=label,
    )


def reset_view(basemap: str) -> GlobeView:
    """Back to the full-earth view with the metric's default basemap."""
    return global_view(basemap)


def layer_markers(
    points: pd.DataFrame,
    metric: MetricKind | str,
    config: GlobeConfig,
    rng: np.random.Generator,
) -> pd.DataFrame:
    """
    Classify points and order their markers for drawing.

    Buckets are emitted in ascending order (1 first, 6 last); inside a
    bucket the input order is kept. A point whose size exceeds the halo
    threshold is preceded by its halo marker.

    Args:
        points: DataFrame with entity, lat, lon, value.
        metric: Metric kind.
        config: Globe settings.
        rng: Random generator for the altitude jitter.

    Returns:
        Markers in draw order with MARKER_COLUMNS.

    Raises:
        ValueError: For an unknown metric kind.
    """
    kind = metric_kind(metric)
    style = config.style_for(kind.value)

    classified = pd.concat(
        [
            points[["entity", "lat", "lon", "value"]].reset_index(drop=True),
            classify_many(points["value"], kind),
        ],
        axis=1,
    ).sort_values("bucket", kind="stable")

    low = 1.0 - config.jitter_band
    span = 2.0 * config.jitter_band
    rows: list[dict[str, object]] = []

    for point in classified.itertuples(index=False):
        altitude = style.base_altitude * (low + span * rng.random())
        marker = {
            "entity": point.entity,
            "lat": float(point.lat),
            "lon": float(point.lon),
            "value": float(point.value),
            "bucket": int(point.bucket),
            "size": float(point.size),
            "altitude": altitude,
            "opacity": config.marker_opacity,
            "halo": False,
        }
        if point.size > config.halo_threshold:
            rows.append(
                {
                    **marker,
                    "size": point.size * config.halo_scale,
                    "altitude": altitude * config.halo_altitude_factor,
                    "opacity": config.halo_opacity,
                    "halo": True,
                }
            )
        rows.append(marker)

    return GlobeMarkerSchema.validate(pd.DataFrame(rows, columns=MARKER_COLUMNS))


class GlobeRenderer:
    """
    Renders one metric on a globe surface and owns its view state.

    One renderer per globe session; focus and reset push the new view to
    the surface.
    """

    def __init__(
        self,
        surface: GlobeSurface,
        metric: MetricKind | str,
        config: GlobeConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Initialize renderer.

        Args:
            surface: Drawing capability.
            metric: Metric kind; unknown kinds raise ValueError.
            config: Globe settings.
            rng: Random generator; seeded from config if None.
        """
        self.metric = metric_kind(metric)
        self.config = config or GlobeConfig()
        self.style = self.config.style_for(self.metric.value)
        self.surface = surface
        self.rng = rng or np.random.default_rng(self.config.random_state)
        self.view = global_view(self.style.basemap)
        self.markers: pd.DataFrame = pd.DataFrame(columns=MARKER_COLUMNS)
        self._coordinates: dict[str, tuple[float, float]] = {}
        self._values: dict[str, float] = {}

    def render(self, points: pd.DataFrame) -> pd.DataFrame:
        """
        Draw all points in bucket order.

        Args:
            points: DataFrame with entity, lat, lon, value.

        Returns:
            Markers in the order they were drawn.
        """
        markers = layer_markers(points, self.metric, self.config, self.rng)

        self._coordinates = {
            str(e): (float(lat), float(lon))
            for e, lat, lon in zip(points["entity"], points["lat"], points["lon"])
        }
        self._values = {str(e): float(v) for e, v in zip(points["entity"], points["value"])}

        self._apply_view()
        self.surface.draw_markers(markers, color=self.style.color)
        self.markers = markers

        log.info(
            "Rendered globe",
            metric=self.metric.value,
            points=len(points),
            markers=len(markers),
            halos=int(markers["halo"].sum()) if len(markers) else 0,
        )
        return markers

    def render_arrays(
        self,
        latitude: Sequence[float],
        longitude: Sequence[float],
        values: Sequence[float],
        entities: Sequence[str] | None = None,
    ) -> pd.DataFrame:
        """
        Draw parallel arrays of coordinates and values.

        Entities default to positional labels ("Country 1", ...).
        """
        if not len(latitude) == len(longitude) == len(values):
            msg = "latitude, longitude and values must have equal length"
            raise ValueError(msg)
        if entities is None:
            entities = [f"Country {i}" for i in range(1, len(values) + 1)]

        points = pd.DataFrame(
            {
                "entity": list(entities),
                "lat": np.asarray(latitude, dtype=float),
                "lon": np.asarray(longitude, dtype=float),
                "value": np.asarray(values, dtype=float),
            }
        )
        return self.render(points)

    def focus_candidates(self, top_n: int | None = None) -> pd.DataFrame:
        """
        Entities offered for focusing, largest value first.

        Returns:
            DataFrame with entity, value, rank.
        """
        return rank_entities(
            list(self._values.keys()),
            list(self._values.values()),
            top_n or self.config.focus_top_n,
        )

    def focus(self, entity: str | None) -> GlobeView:
        """Focus on an entity; no-op for the sentinel or unknown entities."""
        new_view = focus_view(
            self.view, entity, self._coordinates, self.config, self._values
        )
        if new_view is not self.view:
            self.view = new_view
            self._apply_view()
            log.info("Focused globe", entity=entity, basemap=new_view.basemap)
        return self.view

    def reset(self) -> GlobeView:
        """Restore the full-earth view and the default basemap."""
        self.view = reset_view(self.style.basemap)
        self._apply_view()
        log.info("Reset globe view", basemap=self.view.basemap)
        return self.view

    def _apply_view(self) -> None:
        self.surface.set_basemap(self.view.basemap)
        self.surface.set_limits(self.view.lat_limits, self.view.lon_limits)
        self.surface.set_label(self.view.label)
