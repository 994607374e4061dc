"""Tests for date header parsing and time series extraction."""

import numpy as np
import pandas as pd
import pytest

from covidatlas.normalization.columns import normalize_columns, value_columns
from covidatlas.normalization.temporal import (
    coerce_numeric,
    extract_time_series,
    date_columns,
    parse_date_header,
    parse_date_headers,
    series_for_entity,
)


class TestParseDateHeader:
    """Tests for parse_date_header."""

    def test_compact_format(self) -> None:
        """Test the month/day/two-digit-year format."""
        assert parse_date_header("1/22/20") == pd.Timestamp("2020-01-22")
        assert parse_date_header("12/31/21") == pd.Timestamp("2021-12-31")

    def test_not_a_date(self) -> None:
        """Test that non-date headers return None."""
        assert parse_date_header("Lat") is None
        assert parse_date_header("13/45/20") is None


class TestExtractTimeSeries:
    """Tests for extract_time_series."""

    def test_aligned_output(self) -> None:
        """Test that timestamps and values have equal length."""
        timestamps, values = extract_time_series(["1/22/20", "1/23/20"], [1, 5])
        assert len(timestamps) == len(values) == 2
        assert timestamps.name == "date"
        np.testing.assert_array_equal(values, [1.0, 5.0])

    def test_bad_header_skipped(self) -> None:
        """Test that an unparseable header is dropped with its value."""
        timestamps, values = extract_time_series(
            ["1/22/20", "garbage", "1/24/20"], [1, 99, 3]
        )
        assert list(timestamps) == [pd.Timestamp("2020-01-22"), pd.Timestamp("2020-01-24")]
        np.testing.assert_array_equal(values, [1.0, 3.0])

    def test_blank_values_become_zero(self) -> None:
        """Test that blanks and junk coerce to zero."""
        _, values = extract_time_series(["1/22/20", "1/23/20", "1/24/20"], ["", None, "7"])
        np.testing.assert_array_equal(values, [0.0, 0.0, 7.0])

    def test_length_mismatch(self) -> None:
        """Test that mismatched inputs are rejected."""
        with pytest.raises(ValueError, match="headers"):
            extract_time_series(["1/22/20"], [1, 2])

    def test_coerce_numeric(self) -> None:
        """Test the numeric coercion helper."""
        np.testing.assert_array_equal(coerce_numeric(["3", "x", 4.5]), [3.0, 0.0, 4.5])


class TestSeriesForEntity:
    """Tests for series_for_entity."""

    def test_extracts_row(self, aggregated_table: pd.DataFrame) -> None:
        """Test extracting one entity of an aggregated table."""
        timestamps, values = series_for_entity(aggregated_table, "Japan")
        assert len(timestamps) == 3
        np.testing.assert_array_equal(values, [2.0, 50.0, 99.0])

    def test_unknown_entity(self, aggregated_table: pd.DataFrame) -> None:
        """Test that an unknown entity raises KeyError."""
        with pytest.raises(KeyError, match="Atlantis"):
            series_for_entity(aggregated_table, "Atlantis")


class TestDateColumns:
    """Tests for date column selection."""

    def test_vectorised_parsing(self) -> None:
        """Test that failures become NaT and the rest parse."""
        parsed = parse_date_headers(["1/22/20", "Notes", " 2/1/21 "])
        assert parsed[0] == pd.Timestamp("2020-01-22")
        assert pd.isna(parsed[1])
        assert parsed[2] == pd.Timestamp("2021-02-01")

    def test_drops_unparseable_headers(self) -> None:
        """Test that only parseable date headers are kept, in file order."""
        df = pd.DataFrame(columns=["entity", "lat", "lon", "1/22/20", "13/45/20", "1/24/20"])
        assert date_columns(df) == ["1/22/20", "1/24/20"]


class TestColumns:
    """Tests for column normalization helpers."""

    def test_global_and_us_headers_normalize(self) -> None:
        """Test that both JHU header spellings map to the same names."""
        global_df = normalize_columns(
            pd.DataFrame(columns=["Province/State", "Country/Region", "Lat", "Long", "1/22/20"])
        )
        us_df = normalize_columns(
            pd.DataFrame(columns=["UID", "Admin2", "Province_State", "Lat", "Long_", "1/22/20"])
        )
        assert list(global_df.columns) == ["province", "country", "lat", "lon", "1/22/20"]
        assert list(us_df.columns) == ["uid", "county", "state", "lat", "lon", "1/22/20"]

    def test_value_columns_in_file_order(self) -> None:
        """Test that only date columns count as values."""
        df = pd.DataFrame(
            columns=["uid", "state", "lat", "lon", "population", "1/22/20", "1/23/20"]
        )
        assert value_columns(df) == ["1/22/20", "1/23/20"]
