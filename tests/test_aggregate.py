"""Tests for per-entity aggregation."""

import pandas as pd
import pandera as pa
import pytest

from covidatlas.etl.aggregate import aggregate_by_entity, exclude_entities
from covidatlas.normalization.names import canonicalize_frame


@pytest.fixture
def provinces() -> pd.DataFrame:
    """Wide table with three provinces of one country."""
    return pd.DataFrame(
        {
            "province": ["Anhui", "Beijing", "Hubei", None],
            "country": ["China", "China", "China", "Italy"],
            "lat": [30.0, 40.0, 35.0, 41.9],
            "lon": [110.0, 120.0, 115.0, 12.6],
            "1/22/20": [1, 14, 444, 0],
            "1/23/20": [9, 22, 444, 2],
        }
    )


class TestAggregateByEntity:
    """Tests for aggregate_by_entity."""

    def test_sums_values_and_averages_coordinates(self, provinces: pd.DataFrame) -> None:
        """Test sum/mean with more than two rows per entity."""
        result = aggregate_by_entity(provinces, key="country").set_index("entity")

        assert result.loc["China", "1/22/20"] == 459
        assert result.loc["China", "1/23/20"] == 475
        assert result.loc["China", "lat"] == pytest.approx(35.0)
        assert result.loc["China", "lon"] == pytest.approx(115.0)
        assert result.loc["Italy", "1/23/20"] == 2

    def test_output_schema(self, provinces: pd.DataFrame) -> None:
        """Test that only entity, coordinates and metrics remain."""
        result = aggregate_by_entity(provinces, key="country")

        assert list(result.columns) == ["entity", "lat", "lon", "1/22/20", "1/23/20"]
        assert "GroupCount" not in result.columns
        assert "province" not in result.columns
        assert result["entity"].is_unique

    def test_blank_metric_counts_as_zero(self) -> None:
        """Test that blank cells do not poison the sum."""
        df = pd.DataFrame(
            {
                "country": ["Peru", "Peru"],
                "lat": [-9.0, -10.0],
                "lon": [-75.0, -76.0],
                "1/22/20": [None, 3],
            }
        )
        result = aggregate_by_entity(df, key="country")
        assert result["1/22/20"].tolist() == [3]

    def test_explicit_metric_columns(self, provinces: pd.DataFrame) -> None:
        """Test restricting the summed columns."""
        result = aggregate_by_entity(provinces, key="country", metric_columns=["1/23/20"])
        assert list(result.columns) == ["entity", "lat", "lon", "1/23/20"]

    def test_missing_key_column(self, provinces: pd.DataFrame) -> None:
        """Test that a missing key column is reported."""
        with pytest.raises(ValueError, match="Missing required columns"):
            aggregate_by_entity(provinces, key="state")

    def test_china_and_taiwan_end_to_end(self) -> None:
        """Test alias variants collapsing into single entities."""
        raw = pd.DataFrame(
            {
                "province": ["Hubei", "Beijing", "Anhui", None, None],
                "country": ["China", "China", "China", "Taiwan*", "Taipei and environs"],
                "lat": [30.9, 40.1, 31.8, 23.7, 25.0],
                "lon": [112.2, 116.4, 117.2, 121.0, 121.5],
                "1/22/20": [444, 14, 1, 1, 0],
            }
        )

        result = aggregate_by_entity(canonicalize_frame(raw), key="country")

        assert sorted(result["entity"]) == ["Mainland China", "Taiwan"]
        totals = result.set_index("entity")["1/22/20"]
        assert totals["Mainland China"] == 459
        assert totals["Taiwan"] == 1

    def test_validation_rejects_bad_coordinates(self) -> None:
        """Test that the aggregated output is schema-checked."""
        df = pd.DataFrame(
            {"country": ["Nowhere"], "lat": [200.0], "lon": [0.0], "1/22/20": [1]}
        )
        with pytest.raises(pa.errors.SchemaError):
            aggregate_by_entity(df, key="country")


class TestExcludeEntities:
    """Tests for exclude_entities."""

    def test_drops_listed_entities(self, aggregated_table: pd.DataFrame) -> None:
        """Test removing entities from a table."""
        result = exclude_entities(aggregated_table, ["Japan", "Atlantis"])
        assert result["entity"].tolist() == ["Brazil", "Italy", "Peru"]

    def test_no_exclusions(self, aggregated_table: pd.DataFrame) -> None:
        """Test that an empty list keeps every row."""
        assert len(exclude_entities(aggregated_table, [])) == len(aggregated_table)
