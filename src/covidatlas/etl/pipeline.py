"""
Atlas pipeline implementation.

Turns the raw source files into the render-ready tables: aggregated
global and US series, the state ranking and the globe totals.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

import pandas as pd

from covidatlas.analysis.ranking import Ranking, build_ranking
from covidatlas.config.settings import PipelineConfig
from covidatlas.etl.aggregate import aggregate_by_entity, exclude_entities
from covidatlas.ingestion.globe import load_globe_data
from covidatlas.ingestion.jhu import (
    GlobalDataset,
    load_global_time_series,
    load_us_time_series,
)
from covidatlas.ingestion.nyt import load_state_daily
from covidatlas.normalization.names import canonicalize_frame
from covidatlas.utils.logging import get_logger, log_context

log = get_logger(__name__)

RankedMetric = Literal["cases", "deaths"]


@dataclass
class AtlasResult:
    """
    Result of a full pipeline run.

    Attributes:
        confirmed_global: Aggregated global confirmed cases.
        deaths_global: Aggregated global deaths.
        confirmed_us: Aggregated US confirmed cases per state.
        ranking: Top states by cumulative cases.
        globe: Per-country totals for the 3D globe.
        skipped: Datasets whose source file was missing.
    """

    confirmed_global: pd.DataFrame | None = None
    deaths_global: pd.DataFrame | None = None
    confirmed_us: pd.DataFrame | None = None
    ranking: Ranking | None = None
    globe: pd.DataFrame | None = None
    skipped: list[str] = field(default_factory=list)


class AtlasPipeline:
    """
    Pipeline producing every table the maps and charts draw from.

    Each dataset can be built on its own; run() builds all of them and
    tolerates missing source files.
    """

    def __init__(self, config: PipelineConfig) -> None:
        """
        Initialize atlas pipeline.

        Args:
            config: Pipeline configuration.
        """
        self.config = config

    def global_series(
        self, dataset: GlobalDataset = "confirmed_global", *, exclude: bool = True
    ) -> pd.DataFrame:
        """
        Aggregated global series, one row per canonical country.

        Args:
            dataset: 'confirmed_global' or 'deaths_global'.
            exclude: Whether to drop the configured excluded entities.

        Returns:
            Aggregated series table.
        """
        with log_context(dataset=dataset):
            raw = load_global_time_series(self.config, dataset)
            canonical = canonicalize_frame(raw, column="country", sub_region_column="province")
            table = aggregate_by_entity(canonical, key="country")
            if exclude:
                table = exclude_entities(table, self.config.maps.exclude_entities)
            return table

    def us_series(self) -> pd.DataFrame:
        """Aggregated US confirmed cases, one row per state."""
        with log_context(dataset="confirmed_us"):
            raw = load_us_time_series(self.config)
            canonical = canonicalize_frame(raw, column="state", sub_region_column=None)
            return aggregate_by_entity(canonical, key="state")

    def state_ranking(
        self, top_k: int | None = None, metric: RankedMetric = "cases"
    ) -> Ranking:
        """
        Top states by their latest cumulative count.

        Args:
            top_k: Number of states; defaults to the configured value.
            metric: 'cases' or 'deaths'.
        """
        with log_context(dataset="us_states"):
            daily = load_state_daily(self.config)
            return build_ranking(
                daily,
                top_k or self.config.ranking.top_k,
                entity_column="state",
                value_column=metric,
            )

    def globe_data(self) -> pd.DataFrame:
        """Per-country totals for the globe."""
        with log_context(dataset="globe"):
            return load_globe_data(self.config)

    def run(self) -> AtlasResult:
        """
        Build every dataset, one after another.

        Datasets whose source file does not exist are skipped and listed
        in the result; any other error propagates.

        Returns:
            AtlasResult with the built tables.
        """
        log.info(
            "Starting atlas pipeline",
            project=self.config.project,
            data_root=str(self.config.data_paths.data_root),
        )

        steps = {
            "confirmed_global": lambda: self.global_series("confirmed_global"),
            "deaths_global": lambda: self.global_series("deaths_global"),
            "confirmed_us": self.us_series,
            "ranking": self.state_ranking,
            "globe": self.globe_data,
        }

        result = AtlasResult()
        for i, (name, step) in enumerate(steps.items(), start=1):
            log.info(f"Step {i}: Building {name}")
            self._collect(result, name, step)

        log.info(
            "Atlas pipeline complete",
            built=[name for name in steps if name not in result.skipped],
            skipped=result.skipped,
        )
        return result

    @staticmethod
    def _collect(result: AtlasResult, name: str, step: Callable[[], object]) -> None:
        try:
            value = step()
        except FileNotFoundError as e:
            log.warning("Skipping dataset, source file missing", dataset=name, error=str(e))
            result.skipped.append(name)
            return
        setattr(result, name, value)
