"""Polars frame construction and reusable expressions for daily series."""

from collections.abc import Sequence

import numpy as np
import polars as pl

from ..models.account import DailyMetrics

DAILY_SCHEMA: dict[str, pl.DataType] = {
    "date": pl.Date,
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "spend": pl.Float64,
    "results": pl.Int64,
    "roas": pl.Float64,
    "subscriptions": pl.Int64,
}

# Metrics summed for week-over-week comparison, in report order
WOW_METRICS = ["spend", "results", "impressions", "clicks"]

# Metrics scanned for anomalies, in detection order
ANOMALY_METRICS = ["spend", "results", "clicks", "impressions"]


def daily_frame(daily: Sequence[DailyMetrics]) -> pl.DataFrame:
    """Build a typed frame from a chronological daily series.

    Row order is preserved; the frame is positional like the input.
    """
    return pl.DataFrame(
        {name: [getattr(day, name) for day in daily] for name in DAILY_SCHEMA},
        schema=DAILY_SCHEMA,
    )


def window_totals_expr(metrics: Sequence[str] = WOW_METRICS) -> list[pl.Expr]:
    """Sum of each metric over the selected window, nulls counted as 0."""
    return [pl.col(m).fill_null(0).sum().alias(m) for m in metrics]


def window_totals(frame: pl.DataFrame, offset: int, length: int) -> dict[str, float]:
    """Totals of the WoW metrics over ``frame[offset:offset + length]``.

    Negative offsets count from the end of the frame.
    """
    return frame.slice(offset, length).select(window_totals_expr()).to_dicts()[0]


def column_values(frame: pl.DataFrame, metric: str) -> np.ndarray:
    """Metric column as a float array with missing values as 0."""
    return frame[metric].fill_null(0).cast(pl.Float64).to_numpy()


def results_growth_rate(frame: pl.DataFrame) -> float:
    """Results of the last 3 days vs. the 4 days before them, in percent.

    Returns 0 when the earlier window has no results.
    """
    recent = frame.tail(3)["results"].sum()
    earlier = frame.slice(-7, 4)["results"].sum()
    if earlier <= 0:
        return 0.0
    return (recent - earlier) / earlier * 100


def spend_variation_pct(frame: pl.DataFrame) -> float:
    """Coefficient of variation of daily spend, in percent (population std)."""
    stats = frame.select(
        pl.col("spend").mean().alias("avg"),
        pl.col("spend").std(ddof=0).alias("std"),
    ).to_dicts()[0]
    avg = stats["avg"] or 0.0
    if avg <= 0:
        return 0.0
    return (stats["std"] or 0.0) / avg * 100
