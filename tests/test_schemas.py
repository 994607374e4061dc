"""Tests for Pandera schema definitions."""

import pandas as pd
import pandera as pa
import pytest

from covidatlas.schemas import (
    AggregatedSeriesSchema,
    CategoryPointSchema,
    GlobalTimeSeriesSchema,
    GlobeDataSchema,
    GlobeMarkerSchema,
    StateDailySchema,
)
from covidatlas.schemas.registry import DataRole, SchemaRegistry


class TestGlobalTimeSeriesSchema:
    """Tests for GlobalTimeSeriesSchema."""

    def test_date_columns_pass_through(self) -> None:
        """Test that date columns are allowed next to the declared ones."""
        df = pd.DataFrame(
            {
                "province": [None, "Hubei"],
                "country": ["Italy", "China"],
                "lat": [41.87, 30.97],
                "lon": [12.56, 112.27],
                "1/22/20": [0, 444],
            }
        )
        result = GlobalTimeSeriesSchema.validate(df)
        assert list(result.columns) == list(df.columns)

    def test_missing_coordinates_allowed(self) -> None:
        """Test that rows without coordinates are valid."""
        df = pd.DataFrame(
            {"country": ["Diamond Princess"], "lat": [None], "lon": [None]}
        )
        assert len(GlobalTimeSeriesSchema.validate(df)) == 1

    def test_invalid_latitude(self) -> None:
        """Test that invalid latitude fails validation."""
        df = pd.DataFrame({"country": ["Nowhere"], "lat": [100.0], "lon": [0.0]})
        with pytest.raises(pa.errors.SchemaError):
            GlobalTimeSeriesSchema.validate(df)


class TestAggregatedSeriesSchema:
    """Tests for AggregatedSeriesSchema."""

    def test_duplicate_entity_rejected(self) -> None:
        """Test that each entity may appear only once."""
        df = pd.DataFrame(
            {"entity": ["Taiwan", "Taiwan"], "lat": [23.7, 23.7], "lon": [121.0, 121.0]}
        )
        with pytest.raises(pa.errors.SchemaError):
            AggregatedSeriesSchema.validate(df)


class TestStateDailySchema:
    """Tests for StateDailySchema."""

    def test_valid_data(self) -> None:
        """Test that valid data passes and counts are coerced."""
        df = pd.DataFrame(
            {
                "date": pd.to_datetime(["2020-03-01", "2020-03-02"]),
                "state": ["Washington", "Washington"],
                "cases": [10.0, 18.0],
                "deaths": [1.0, 6.0],
            }
        )
        result = StateDailySchema.validate(df)
        assert result["cases"].tolist() == [10, 18]

    def test_negative_counts_rejected(self) -> None:
        """Test that negative cumulative counts fail validation."""
        df = pd.DataFrame(
            {
                "date": pd.to_datetime(["2020-03-01"]),
                "state": ["Washington"],
                "cases": [-1],
                "deaths": [0],
            }
        )
        with pytest.raises(pa.errors.SchemaError):
            StateDailySchema.validate(df)


class TestGlobeSchemas:
    """Tests for the globe input and marker schemas."""

    def test_globe_data_requires_coordinates(self) -> None:
        """Test that globe rows need a latitude."""
        df = pd.DataFrame(
            {
                "entity": ["Italy"],
                "lat": [None],
                "lon": [12.56],
                "total_cases": [1.0],
                "total_deaths": [0.0],
            }
        )
        with pytest.raises(pa.errors.SchemaError):
            GlobeDataSchema.validate(df)

    def test_bucket_out_of_range(self) -> None:
        """Test that buckets outside 1..6 are rejected."""
        df = pd.DataFrame(
            {
                "lat": [0.0],
                "lon": [0.0],
                "value": [1.0],
                "bucket": [7],
                "size": [4.0],
                "altitude": [100_000.0],
                "opacity": [0.9],
                "halo": [False],
            }
        )
        with pytest.raises(pa.errors.SchemaError):
            GlobeMarkerSchema.validate(df)


class TestCategoryPointSchema:
    """Tests for CategoryPointSchema."""

    def test_zero_value_rejected(self) -> None:
        """Test that zero-valued points never validate."""
        df = pd.DataFrame(
            {"entity": ["Peru"], "lat": [-9.2], "lon": [-75.0], "value": [0.0], "category": ["<100"]}
        )
        with pytest.raises(pa.errors.SchemaError):
            CategoryPointSchema.validate(df)

    def test_category_label_pattern(self) -> None:
        """Test that only threshold labels are accepted."""
        df = pd.DataFrame(
            {"entity": ["Peru"], "lat": [-9.2], "lon": [-75.0], "value": [5.0], "category": ["low"]}
        )
        with pytest.raises(pa.errors.SchemaError):
            CategoryPointSchema.validate(df)


class TestSchemaRegistry:
    """Tests for SchemaRegistry."""

    def test_list_schemas(self) -> None:
        """Test listing all registered schemas."""
        schemas = SchemaRegistry.list_schemas()
        assert "global_time_series" in schemas
        assert "state_daily" in schemas
        assert "globe_markers" in schemas

    def test_get_schema(self) -> None:
        """Test getting a schema by name."""
        assert SchemaRegistry.get("aggregated_series") is AggregatedSeriesSchema

    def test_get_unknown_schema(self) -> None:
        """Test that unknown schema raises KeyError."""
        with pytest.raises(KeyError, match="Unknown schema"):
            SchemaRegistry.get("unknown_schema")

    def test_list_by_role(self) -> None:
        """Test filtering schemas by role."""
        sources = SchemaRegistry.list_by_role(DataRole.SOURCE)
        assert "globe_data" in sources
        assert "category_points" in SchemaRegistry.list_by_role(DataRole.OUTPUT)

    def test_validate_by_name(self) -> None:
        """Test validating a DataFrame through the registry."""
        df = pd.DataFrame({"entity": ["Italy"], "lat": [41.87], "lon": [12.56]})
        result = SchemaRegistry.validate(df, "aggregated_series")
        assert len(result) == 1
