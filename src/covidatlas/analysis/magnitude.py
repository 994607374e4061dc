"""
Magnitude classification for globe markers.

Maps a metric value to one of six ordered severity buckets and the
marker size drawn for that bucket. Cases and deaths use separate
threshold tables; lower bounds are inclusive.
"""

from enum import Enum

import numpy as np
import pandas as pd


class MetricKind(str, Enum):
    """Metric shown on the globe."""

    CASES = "cases"
    DEATHS = "deaths"


# (inclusive lower bound, render size); bucket id = position + 1
THRESHOLDS: dict[MetricKind, tuple[tuple[float, float], ...]] = {
    MetricKind.DEATHS: (
        (0, 4),
        (1_000, 8),
        (10_000, 12),
        (100_000, 20),
        (500_000, 35),
        (1_000_000, 50),
    ),
    MetricKind.CASES: (
        (0, 4),
        (300_000, 8),
        (1_000_000, 12),
        (10_000_000, 20),
        (25_000_000, 35),
        (100_000_000, 50),
    ),
}

N_BUCKETS = 6


def metric_kind(metric: "MetricKind | str") -> MetricKind:
    """
    Resolve a metric kind.

    Raises:
        ValueError: If the metric is neither 'cases' nor 'deaths'.
    """
    if isinstance(metric, str):
        metric = metric.lower()
    try:
        return MetricKind(metric)
    except ValueError:
        msg = f"Unknown metric kind: {metric!r}"
        raise ValueError(msg) from None


def classify(value: float, metric: "MetricKind | str") -> tuple[int, float]:
    """
    Classify a value into a severity bucket.

    Negative values (and NaN) fall into bucket 1.

    Args:
        value: Metric value.
        metric: Metric kind selecting the threshold table.

    Returns:
        Tuple of (bucket id 1..6, render size).

    Raises:
        ValueError: For an unknown metric kind.
    """
    table = THRESHOLDS[metric_kind(metric)]
    for bucket in range(N_BUCKETS, 1, -1):
        lower, size = table[bucket - 1]
        if value >= lower:
            return bucket, size
    return 1, table[0][1]


def classify_many(
    values: "np.ndarray | pd.Series | list[float]", metric: "MetricKind | str"
) -> pd.DataFrame:
    """
    Classify many values at once.

    Returns:
        DataFrame with 'bucket' and 'size' columns, one row per value.
    """
    kind = metric_kind(metric)
    pairs = [classify(float(v), kind) for v in np.asarray(values, dtype=float)]
    return pd.DataFrame(
        {
            "bucket": np.array([p[0] for p in pairs], dtype=int),
            "size": np.array([p[1] for p in pairs], dtype=float),
        }
    )


def scale_reference(metric: "MetricKind | str") -> list[str]:
    """
    Legend lines for the six buckets, largest first.

    Example for deaths: "Large: >=1,000,000 deaths", ..., "Very small: <1,000 deaths".
    """
    kind = metric_kind(metric)
    table = THRESHOLDS[kind]
    names = ["Very small", "Small", "Medium-small", "Medium", "Medium-large", "Large"]
    unit = kind.value

    lines = []
    for bucket in range(N_BUCKETS, 0, -1):
        lower = table[bucket - 1][0]
        if bucket == N_BUCKETS:
            text = f">={lower:,.0f} {unit}"
        elif bucket == 1:
            text = f"<{table[1][0]:,.0f} {unit}"
        else:
            text = f"{lower:,.0f}-{table[bucket][0]:,.0f} {unit}"
        lines.append(f"{names[bucket - 1]}: {text}")
    return lines
