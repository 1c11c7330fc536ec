"""Analytics engine for ad account performance data."""

from .alerts import generate_alerts
from .anomalies import detect_anomalies
from .benchmarks import calculate_benchmarks
from .forecast import forecast_spend, predict_month_end_results
from .health import calculate_health_score
from .insights import InsightEngine, InsightThresholds, generate_insights
from .models import (
    Alert,
    AlertSeverity,
    AlertType,
    Anomaly,
    AnomalySeverity,
    AnomalyType,
    Benchmark,
    BenchmarkStatus,
    FactorImpact,
    ForecastPoint,
    Grade,
    HealthFactor,
    HealthScore,
    Insight,
    InsightPriority,
    InsightType,
    Prediction,
    ThresholdColor,
    TrendDirection,
    TrendResult,
)
from .thresholds import get_primary_kpi_color, get_threshold_color, is_ctr_low
from .trends import calculate_trend, calculate_wow_trends

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertType",
    "Anomaly",
    "AnomalySeverity",
    "AnomalyType",
    "Benchmark",
    "BenchmarkStatus",
    "FactorImpact",
    "ForecastPoint",
    "Grade",
    "HealthFactor",
    "HealthScore",
    "Insight",
    "InsightEngine",
    "InsightPriority",
    "InsightThresholds",
    "InsightType",
    "Prediction",
    "ThresholdColor",
    "TrendDirection",
    "TrendResult",
    "calculate_benchmarks",
    "calculate_health_score",
    "calculate_trend",
    "calculate_wow_trends",
    "detect_anomalies",
    "forecast_spend",
    "generate_alerts",
    "generate_insights",
    "get_primary_kpi_color",
    "get_threshold_color",
    "is_ctr_low",
    "predict_month_end_results",
]
