"""Industry benchmark comparison.

Percentiles are a linear heuristic, not a distribution lookup: matching the
industry average places an account at the 50th percentile, twice as good at
the 100th (capped).
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import ConfigLoadError
from ..models.account import AccountSnapshot
from ..settings import DEFAULT_BENCHMARKS_PATH
from .models import Benchmark, BenchmarkStatus

FALLBACK_TYPE = "leadgen"

BenchmarkTable = dict[str, dict[str, float]]


def load_benchmark_table(path: Path) -> BenchmarkTable:
    """Load the industry benchmark table from YAML."""
    try:
        with open(path) as f:
            table = yaml.safe_load(f)
    except Exception as e:
        raise ConfigLoadError(f"Failed to load benchmarks from {path}: {e}") from e

    if not isinstance(table, dict) or FALLBACK_TYPE not in table:
        raise ConfigLoadError(f"Benchmark table at {path} has no '{FALLBACK_TYPE}' entry")
    return table


@lru_cache
def default_benchmark_table() -> BenchmarkTable:
    """Bundled benchmark table, read once per process."""
    return load_benchmark_table(DEFAULT_BENCHMARKS_PATH)


def benchmark_status(percentile: float) -> BenchmarkStatus:
    if percentile >= 75:
        return BenchmarkStatus.EXCELLENT
    if percentile >= 50:
        return BenchmarkStatus.GOOD
    if percentile >= 25:
        return BenchmarkStatus.AVERAGE
    return BenchmarkStatus.POOR


def higher_is_better_percentile(value: float, benchmark: float) -> float:
    return min(100.0, value / benchmark * 50)


def lower_is_better_percentile(value: float, benchmark: float, floor: float) -> float:
    return min(100.0, benchmark / max(value, floor) * 50)


def _benchmark(metric: str, value: float, industry_avg: float, percentile: float) -> Benchmark:
    return Benchmark(
        metric=metric,
        value=value,
        industry_avg=industry_avg,
        percentile=percentile,
        status=benchmark_status(percentile),
    )


def calculate_benchmarks(
    snapshot: AccountSnapshot,
    table: BenchmarkTable | None = None,
) -> list[Benchmark]:
    """Compare current-period metrics with the industry averages.

    Args:
        snapshot: Account snapshot
        table: Benchmark table keyed by account type (default: bundled YAML)

    Returns:
        CTR and CPC benchmarks, plus ROAS (ecommerce) or cost per
        subscription (gym).
    """
    table = table or default_benchmark_table()
    config, metrics = snapshot.config, snapshot.metrics
    industry: dict[str, Any] = table.get(config.type) or table[FALLBACK_TYPE]

    benchmarks = [
        _benchmark(
            "CTR",
            metrics.ctr,
            industry["ctr"],
            higher_is_better_percentile(metrics.ctr, industry["ctr"]),
        ),
        _benchmark(
            "CPC",
            metrics.cpc,
            industry["cpc"],
            lower_is_better_percentile(metrics.cpc, industry["cpc"], floor=0.01),
        ),
    ]

    roas_avg = industry.get("roas")
    if config.type == "ecommerce" and metrics.kind == "ecommerce" and roas_avg:
        benchmarks.append(
            _benchmark(
                "ROAS",
                metrics.roas,
                roas_avg,
                higher_is_better_percentile(metrics.roas, roas_avg),
            )
        )

    cps_avg = industry.get("cost_per_subscription")
    if config.type == "leadgen-gym" and metrics.kind == "gym" and cps_avg:
        benchmarks.append(
            _benchmark(
                "Cost Per Sub",
                metrics.cost_per_subscription,
                cps_avg,
                lower_is_better_percentile(
                    metrics.cost_per_subscription, cps_avg, floor=1.0
                ),
            )
        )

    return benchmarks
