"""Tests for configuration models and YAML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from covidatlas.config import (
    DataPathsConfig,
    GlobeConfig,
    MapsConfig,
    MapViewConfig,
    PipelineConfig,
    RankingConfig,
    load_config,
)


class TestDataPathsConfig:
    """Tests for DataPathsConfig."""

    def test_defaults_use_published_file_names(self) -> None:
        """Test that defaults match the source file names."""
        config = DataPathsConfig()
        assert config.confirmed_global == Path("time_series_covid19_confirmed_global.csv")
        assert config.us_states == Path("us-states.csv")
        assert config.globe == Path("CovidDataFor3DPlots.csv")

    def test_resolve_against_root(self) -> None:
        """Test that resolve() joins the data root."""
        config = DataPathsConfig(data_root=Path("/srv/covid"))
        assert config.resolve("deaths_global") == Path(
            "/srv/covid/time_series_covid19_deaths_global.csv"
        )


class TestMapsConfig:
    """Tests for MapsConfig and MapViewConfig."""

    def test_default_views(self) -> None:
        """Test the fixed map views."""
        config = MapsConfig()
        assert config.global_view.center == (21.6385, 36.1666)
        assert config.us_view.zoom == pytest.approx(1.7678)

    def test_invalid_center(self) -> None:
        """Test that an out-of-range center is rejected."""
        with pytest.raises(ValidationError, match="out of range"):
            MapViewConfig(center=(95.0, 0.0), zoom=1.0)

    def test_basemap_fallback(self) -> None:
        """Test that unknown datasets fall back to satellite."""
        config = MapsConfig()
        assert config.basemap_for("deaths_global") == "colorterrain"
        assert config.basemap_for("unknown") == "satellite"

    def test_negative_threshold_rejected(self) -> None:
        """Test that the category threshold cannot be negative."""
        with pytest.raises(ValidationError):
            MapsConfig(category_threshold=-1)


class TestRankingConfig:
    """Tests for RankingConfig."""

    def test_top_k_must_be_positive(self) -> None:
        """Test that top_k below 1 is rejected."""
        with pytest.raises(ValidationError):
            RankingConfig(top_k=0)


class TestGlobeConfig:
    """Tests for GlobeConfig."""

    def test_metric_styles(self) -> None:
        """Test per-metric colors, altitudes and basemaps."""
        config = GlobeConfig()
        assert config.style_for("cases").color == "yellow"
        assert config.style_for("cases").base_altitude == 100_000
        assert config.style_for("deaths").color == "red"
        assert config.style_for("deaths").basemap == "darkwater"

    def test_unknown_metric(self) -> None:
        """Test that style_for rejects unknown metrics."""
        with pytest.raises(ValueError, match="Unknown metric kind"):
            GlobeConfig().style_for("recovered")

    def test_jitter_band_range(self) -> None:
        """Test that the jitter band must stay below 1."""
        with pytest.raises(ValidationError):
            GlobeConfig(jitter_band=1.0)

    def test_config_is_frozen(self) -> None:
        """Test that config models are immutable."""
        config = GlobeConfig()
        with pytest.raises(ValidationError):
            config.halo_threshold = 5


class TestLoadConfig:
    """Tests for config loading."""

    def test_load_minimal_config(self, tmp_path: Path) -> None:
        """Test that a project name alone is a valid config."""
        path = tmp_path / "minimal.yaml"
        path.write_text("project: test-project\n", encoding="utf-8")

        config = load_config(path)

        assert config.project == "test-project"
        assert config.ranking.top_k == 20
        assert config.maps.exclude_entities == ["Mainland China"]

    def test_missing_project(self, tmp_path: Path) -> None:
        """Test that a config without project is rejected."""
        path = tmp_path / "broken.yaml"
        path.write_text("ranking:\n  top_k: 5\n", encoding="utf-8")

        with pytest.raises(ValueError, match="project"):
            load_config(path)

    def test_sections_override_defaults(self, tmp_path: Path) -> None:
        """Test that YAML sections reach the typed models."""
        path = tmp_path / "full.yaml"
        path.write_text(
            """
project: full
data:
  root: /srv/covid
  us_states: states.csv
maps:
  category_threshold: 50
  above_color: [0.0, 0.0, 1.0]
  us_view:
    center: [40.0, -100.0]
    zoom: 2.5
  basemaps:
    confirmed_us: streets
ranking:
  top_k: 10
globe:
  halo_threshold: 12
  deaths:
    color: orange
    base_altitude: 150000
    basemap: darkwater
""",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.data_paths.resolve("us_states") == Path("/srv/covid/states.csv")
        assert config.maps.category_threshold == 50
        assert config.maps.above_color == (0.0, 0.0, 1.0)
        assert config.maps.us_view == MapViewConfig(center=(40.0, -100.0), zoom=2.5)
        assert config.maps.basemap_for("confirmed_us") == "streets"
        assert config.maps.basemap_for("deaths_global") == "colorterrain"
        assert config.ranking.top_k == 10
        assert config.globe.halo_threshold == 12
        assert config.globe.style_for("deaths").base_altitude == 150_000

    def test_base_yaml_is_merged(self, tmp_path: Path) -> None:
        """Test inheritance from a sibling base.yaml."""
        (tmp_path / "base.yaml").write_text(
            "ranking:\n  top_k: 7\nglobe:\n  random_state: 42\n", encoding="utf-8"
        )
        path = tmp_path / "project.yaml"
        path.write_text("project: child\nglobe:\n  random_state: 99\n", encoding="utf-8")

        config = load_config(path)

        assert config.ranking.top_k == 7
        assert config.globe.random_state == 99

    def test_env_var_interpolation(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test environment variable interpolation with defaults."""
        monkeypatch.setenv("TEST_COVID_DATA", "/mnt/jhu")
        path = tmp_path / "env.yaml"
        path.write_text(
            "project: env\ndata:\n  root: ${TEST_COVID_DATA:./data}\n"
            "output:\n  root: ${TEST_COVID_UNSET:./out}\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.data_paths.data_root == Path("/mnt/jhu")
        assert config.output.output_root == Path("./out")

    def test_plots_dir_derived_from_project(self) -> None:
        """Test that the plots folder is derived from the project name."""
        config = PipelineConfig(project="my-project")
        assert config.plots_dir == Path("./output/my-project/plots")

    def test_shipped_configs_load(self, project_root: Path) -> None:
        """Test that the example configs in configs/ are valid."""
        config = load_config(project_root / "configs" / "covid-2023.yaml")
        assert config.project == "covid-2023"
        assert config.maps.global_view.zoom == pytest.approx(0.3606)
