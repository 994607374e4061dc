"""
Typed configuration models using Pydantic.

All tunable constants of the atlas live here: file names, map views,
category colors, ranking size and the globe's layering parameters.
Processing code receives these models and never hardcodes them.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

RGB = tuple[float, float, float]


class DataPathsConfig(BaseModel):
    """Input file locations.

    All paths are relative to data_root. Use resolve() to get full paths.
    Defaults follow the file names published by JHU CSSE and the NYT.
    """

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("./data"), description="Root directory for all data files"
    )
    confirmed_global: Path = Field(
        default=Path("time_series_covid19_confirmed_global.csv"),
        description="JHU global confirmed cases time series",
    )
    deaths_global: Path = Field(
        default=Path("time_series_covid19_deaths_global.csv"),
        description="JHU global deaths time series",
    )
    confirmed_us: Path = Field(
        default=Path("time_series_covid19_confirmed_US.csv"),
        description="JHU US county-level confirmed cases time series",
    )
    us_states: Path = Field(
        default=Path("us-states.csv"),
        description="NYT per-state daily cumulative cases and deaths",
    )
    globe: Path = Field(
        default=Path("CovidDataFor3DPlots.csv"),
        description="Preprocessed per-country totals for the 3D globe",
    )

    def resolve(self, path_attr: str) -> Path:
        """Resolve a configured path against data_root."""
        rel_path = getattr(self, path_attr)
        if rel_path is None:
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path


class MapViewConfig(BaseModel):
    """Fixed view parameters for one bubble map dataset."""

    model_config = ConfigDict(frozen=True)

    center: tuple[float, float] = Field(description="Map center as (lat, lon)")
    zoom: float = Field(gt=0, description="Zoom level")

    @field_validator("center")
    @classmethod
    def validate_center(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Ensure the center is a valid WGS84 coordinate."""
        lat, lon = v
        if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
            msg = f"Map center out of range: {v}"
            raise ValueError(msg)
        return v


def _default_basemaps() -> dict[str, str]:
    return {
        "confirmed_global": "satellite",
        "deaths_global": "colorterrain",
        "confirmed_us": "landcover",
    }


class MapsConfig(BaseModel):
    """2D categorical bubble map configuration."""

    model_config = ConfigDict(frozen=True)

    category_threshold: float = Field(
        default=100, ge=0, description="Boundary between '<100' and '>=100' classes"
    )
    below_color: RGB = Field(default=(1.0, 0.0, 1.0), description="Magenta")
    above_color: RGB = Field(default=(1.0, 0.0, 0.0), description="Red")
    global_view: MapViewConfig = Field(
        default_factory=lambda: MapViewConfig(center=(21.6385, 36.1666), zoom=0.3606)
    )
    us_view: MapViewConfig = Field(
        default_factory=lambda: MapViewConfig(center=(44.9669, -113.6201), zoom=1.7678)
    )
    basemaps: dict[str, str] = Field(
        default_factory=_default_basemaps,
        description="Basemap token per dataset",
    )
    exclude_entities: list[str] = Field(
        default_factory=lambda: ["Mainland China"],
        description="Entities left out of the global maps",
    )

    def basemap_for(self, dataset: str) -> str:
        """Basemap token for a dataset, falling back to satellite."""
        return self.basemaps.get(dataset, "satellite")


class RankingConfig(BaseModel):
    """Ranking & growth chart configuration."""

    model_config = ConfigDict(frozen=True)

    top_k: int = Field(default=20, ge=1, description="Number of ranked entities")


class MetricStyleConfig(BaseModel):
    """Per-metric globe styling."""

    model_config = ConfigDict(frozen=True)

    color: str = Field(description="Marker color")
    base_altitude: float = Field(gt=0, description="Base marker altitude in meters")
    basemap: str = Field(description="Default basemap token")


class GlobeConfig(BaseModel):
    """Layered 3D globe configuration."""

    model_config = ConfigDict(frozen=True)

    cases: MetricStyleConfig = Field(
        default_factory=lambda: MetricStyleConfig(
            color="yellow", base_altitude=100_000, basemap="satellite"
        )
    )
    deaths: MetricStyleConfig = Field(
        default_factory=lambda: MetricStyleConfig(
            color="red", base_altitude=120_000, basemap="darkwater"
        )
    )
    jitter_band: float = Field(
        default=0.05,
        ge=0,
        lt=1,
        description="Altitude varies within base * [1 - band, 1 + band)",
    )
    halo_threshold: float = Field(
        default=10, description="Render sizes above this get a halo marker"
    )
    halo_scale: float = Field(default=1.3, gt=1)
    halo_altitude_factor: float = Field(default=0.98, gt=0, le=1)
    halo_opacity: float = Field(default=0.35, gt=0, le=1)
    marker_opacity: float = Field(default=0.9, gt=0, le=1)
    focus_basemap: str = Field(default="satellite")
    focus_lat_window: float = Field(default=10, gt=0)
    focus_lon_window: float = Field(default=15, gt=0)
    focus_top_n: int = Field(default=20, ge=1)
    random_state: int = Field(default=1337)

    def style_for(self, metric: str) -> MetricStyleConfig:
        """Style block for a metric kind value ('cases' or 'deaths')."""
        if metric == "cases":
            return self.cases
        if metric == "deaths":
            return self.deaths
        msg = f"Unknown metric kind: {metric!r}"
        raise ValueError(msg)


class OutputConfig(BaseModel):
    """Output paths configuration.

    Structure: ./output/{project}/plots
    """

    model_config = ConfigDict(frozen=True)

    output_root: Path = Field(
        default=Path("./output"), description="Root directory for all outputs"
    )


class PipelineConfig(BaseModel):
    """Complete atlas configuration."""

    model_config = ConfigDict(frozen=True)

    project: str = Field(description="Project identifier (e.g., 'covid-2023')")

    data_paths: DataPathsConfig = Field(default_factory=DataPathsConfig)
    maps: MapsConfig = Field(default_factory=MapsConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    globe: GlobeConfig = Field(default_factory=GlobeConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def plots_dir(self) -> Path:
        """Path to plots output directory."""
        return self.output.output_root / self.project / "plots"
