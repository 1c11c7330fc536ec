"""AccountReport - consolidated analytics output for the presentation layer."""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ..analytics.insights import InsightEngine
from ..analytics.models import (
    Alert,
    Anomaly,
    Benchmark,
    ForecastPoint,
    HealthScore,
    Insight,
    Prediction,
    ThresholdColor,
    TrendResult,
)


@dataclass
class AccountReport:
    """Every engine result for one account, computed from a single snapshot.

    All data is pre-computed; ``to_dict`` produces the camelCase JSON shape
    the dashboard consumes.
    """

    # Metadata
    generated_at: datetime
    account_id: str
    account_name: str
    account_type: str
    as_of: date

    # Scores
    health: HealthScore
    primary_kpi_color: ThresholdColor

    # Temporal analysis
    wow_trends: dict[str, TrendResult]
    spend_forecast: list[ForecastPoint]
    month_end_results: Prediction

    # Diagnostics
    anomalies: list[Anomaly] = field(default_factory=list)
    insights: list[Insight] = field(default_factory=list)
    benchmarks: list[Benchmark] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "meta": {
                "generatedAt": self.generated_at.isoformat(),
                "accountId": self.account_id,
                "accountName": self.account_name,
                "accountType": self.account_type,
                "asOf": self.as_of.isoformat(),
            },
            "healthScore": {
                "overall": self.health.overall,
                "efficiency": self.health.efficiency,
                "growth": self.health.growth,
                "consistency": self.health.consistency,
                "risk": self.health.risk,
                "grade": self.health.grade.value,
                "factors": [
                    {
                        "name": f.name,
                        "score": f.score,
                        "impact": f.impact.value,
                        "description": f.description,
                    }
                    for f in self.health.factors
                ],
            },
            "primaryKpiColor": self.primary_kpi_color.value,
            "trends": {
                metric: {
                    "direction": t.direction.value,
                    "percentage": round(t.percentage, 2),
                    "isSignificant": t.is_significant,
                    "confidence": round(t.confidence, 4),
                }
                for metric, t in self.wow_trends.items()
            },
            "forecast": [
                {
                    "date": p.date.isoformat(),
                    "predicted": round(p.predicted, 2),
                    "lowerBound": round(p.lower_bound, 2),
                    "upperBound": round(p.upper_bound, 2),
                }
                for p in self.spend_forecast
            ],
            "monthEndResults": {
                "value": self.month_end_results.value,
                "lowerBound": self.month_end_results.lower_bound,
                "upperBound": self.month_end_results.upper_bound,
                "confidence": round(self.month_end_results.confidence, 4),
            },
            "anomalies": [
                {
                    "id": a.id,
                    "metric": a.metric,
                    "date": a.date.isoformat(),
                    "value": a.value,
                    "expected": round(a.expected, 2),
                    "deviation": round(a.deviation, 2),
                    "severity": a.severity.value,
                    "type": a.type.value,
                    "description": a.description,
                }
                for a in self.anomalies
            ],
            "insights": InsightEngine.to_dict(self.insights),
            "benchmarks": [
                {
                    "metric": b.metric,
                    "value": b.value,
                    "industryAvg": b.industry_avg,
                    "percentile": round(b.percentile, 1),
                    "status": b.status.value,
                }
                for b in self.benchmarks
            ],
            "alerts": [
                {
                    "id": a.id,
                    "accountId": a.account_id,
                    "accountName": a.account_name,
                    "type": a.type.value,
                    "severity": a.severity.value,
                    "message": a.message,
                    "value": a.value,
                    "threshold": a.threshold,
                    "timestamp": a.timestamp.isoformat(),
                }
                for a in self.alerts
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def get_summary(self) -> dict[str, Any]:
        """Condensed values for an account card header."""
        spend_trend = self.wow_trends.get("spend")
        return {
            "account_id": self.account_id,
            "health_score": self.health.overall,
            "grade": self.health.grade.value,
            "kpi_color": self.primary_kpi_color.value,
            "spend_wow_pct": round(spend_trend.percentage, 2) if spend_trend else None,
            "anomaly_count": len(self.anomalies),
            "high_priority_insights": sum(
                1 for i in self.insights if i.priority.value == "high"
            ),
            "alert_count": len(self.alerts),
            "top_insight": self.insights[0].title if self.insights else None,
        }
