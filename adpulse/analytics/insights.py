"""Rule-based insight generation for ad account analysis."""

from dataclasses import dataclass
from typing import Any

from ..models.account import AccountSnapshot
from .anomalies import detect_anomalies
from .health import calculate_health_score
from .models import (
    AnomalySeverity,
    Grade,
    HealthScore,
    Insight,
    InsightPriority,
    InsightType,
)

PRIORITY_ORDER = {
    InsightPriority.HIGH: 0,
    InsightPriority.MEDIUM: 1,
    InsightPriority.LOW: 2,
}


@dataclass
class InsightThresholds:
    """Configurable cut-offs for insight rules.

    CTR and shares are percentages (1.0 = 1%), ROAS a multiplier.
    """

    # E-commerce: ROAS at or above this suggests scaling budget
    roas_scale: float = 5.0

    # E-commerce: ROAS below this is a warning
    roas_minimum: float = 3.0

    # Gym: subscriptions / applications below this % needs follow-up work
    gym_conversion_pct: float = 30.0

    # CTR below this % is weak engagement
    ctr_low: float = 1.0

    # CTR above this % is excellent engagement
    ctr_high: float = 3.0

    # Top active campaign above this % of period spend is concentrated
    spend_concentration_pct: float = 70.0


class InsightEngine:
    """Rule-based insight generator.

    Each rule runs independently; several may fire for one account.

    Usage:
        engine = InsightEngine(snapshot, thresholds=InsightThresholds())
        insights = engine.generate_all_insights()
    """

    def __init__(
        self,
        snapshot: AccountSnapshot,
        thresholds: InsightThresholds | None = None,
        health: HealthScore | None = None,
    ):
        self.snapshot = snapshot
        self.thresholds = thresholds or InsightThresholds()
        self.health = health or calculate_health_score(snapshot)

    def generate_all_insights(self) -> list[Insight]:
        """Run all insight rules, ordered high, medium, low priority."""
        insights: list[Insight] = []

        insights.extend(self._check_top_performer())
        insights.extend(self._check_roas())
        insights.extend(self._check_gym_conversion())
        insights.extend(self._check_ctr())
        insights.extend(self._check_spend_concentration())
        insights.extend(self._check_anomalies())

        return sorted(insights, key=lambda i: PRIORITY_ORDER[i.priority])

    def _check_top_performer(self) -> list[Insight]:
        if self.health.grade is not Grade.A:
            return []
        return [
            Insight(
                id="achievement-grade-a",
                type=InsightType.ACHIEVEMENT,
                priority=InsightPriority.LOW,
                title="Top Performer",
                description=(
                    f"This account is performing in the top tier with a health "
                    f"score of {self.health.overall}%"
                ),
                actionable=False,
            )
        ]

    def _check_roas(self) -> list[Insight]:
        """E-commerce scale opportunity or low-ROAS warning."""
        config, metrics = self.snapshot.config, self.snapshot.metrics
        if config.type != "ecommerce" or metrics.kind != "ecommerce":
            return []

        if metrics.roas >= self.thresholds.roas_scale:
            return [
                Insight(
                    id="ecom-high-roas",
                    type=InsightType.OPPORTUNITY,
                    priority=InsightPriority.HIGH,
                    title="Scale Opportunity",
                    description=(
                        f"ROAS of {metrics.roas:.2f}x suggests room for budget scaling"
                    ),
                    actionable=True,
                    action="Consider increasing daily budget by 20-30% incrementally",
                    impact="Potential to increase revenue while maintaining efficiency",
                )
            ]

        if metrics.roas < self.thresholds.roas_minimum:
            return [
                Insight(
                    id="ecom-low-roas",
                    type=InsightType.WARNING,
                    priority=InsightPriority.HIGH,
                    title="ROAS Below Target",
                    description=(
                        f"ROAS of {metrics.roas:.2f}x is below the "
                        f"{self.thresholds.roas_minimum:g}x minimum threshold"
                    ),
                    actionable=True,
                    action="Review audience targeting and creative performance",
                    impact="Improving ROAS could significantly increase profitability",
                )
            ]

        return []

    def _check_gym_conversion(self) -> list[Insight]:
        """Gym accounts: applications that never become subscriptions."""
        config, metrics = self.snapshot.config, self.snapshot.metrics
        if config.type != "leadgen-gym" or metrics.kind != "gym":
            return []
        if metrics.submit_application == 0:
            return []

        conversion_rate = metrics.subscriptions / metrics.submit_application * 100
        if conversion_rate >= self.thresholds.gym_conversion_pct:
            return []

        return [
            Insight(
                id="gym-low-conversion",
                type=InsightType.OPTIMIZATION,
                priority=InsightPriority.MEDIUM,
                title="Improve Lead-to-Subscription Rate",
                description=(
                    f"Only {conversion_rate:.1f}% of applications convert to "
                    f"subscriptions"
                ),
                actionable=True,
                action="Review follow-up process and trial experience",
                impact="Improving conversion by 10% could add 20+ subscriptions per month",
            )
        ]

    def _check_ctr(self) -> list[Insight]:
        ctr = self.snapshot.metrics.ctr

        if ctr < self.thresholds.ctr_low:
            return [
                Insight(
                    id="low-ctr",
                    type=InsightType.WARNING,
                    priority=InsightPriority.MEDIUM,
                    title="Improve Ad Engagement",
                    description=(
                        f"CTR of {ctr:.2f}% is below the "
                        f"{self.thresholds.ctr_low:g}% benchmark"
                    ),
                    actionable=True,
                    action="Test new ad creatives and headlines to improve engagement",
                    impact="Higher CTR typically leads to lower CPCs and better results",
                )
            ]

        if ctr > self.thresholds.ctr_high:
            return [
                Insight(
                    id="high-ctr",
                    type=InsightType.ACHIEVEMENT,
                    priority=InsightPriority.LOW,
                    title="Excellent Engagement",
                    description=f"CTR of {ctr:.2f}% indicates highly engaging ads",
                    actionable=False,
                )
            ]

        return []

    def _check_spend_concentration(self) -> list[Insight]:
        """Check if one active campaign holds most of the period spend."""
        active = [c for c in self.snapshot.campaigns if c.status == "ACTIVE"]
        if len(active) < 2:
            return []

        total_spend = sum(day.spend for day in self.snapshot.daily_data)
        if total_spend <= 0:
            return []

        top_campaign = max(active, key=lambda c: c.metrics.amount_spent)
        top_share = top_campaign.metrics.amount_spent / total_spend * 100

        if top_share <= self.thresholds.spend_concentration_pct:
            return []

        return [
            Insight(
                id="concentrated-spend",
                type=InsightType.WARNING,
                priority=InsightPriority.LOW,
                title="Concentrated Ad Spend",
                description=f"{top_share:.0f}% of spend is in a single campaign",
                actionable=True,
                action=(
                    "Consider diversifying spend across multiple campaigns for "
                    "risk mitigation"
                ),
            )
        ]

    def _check_anomalies(self) -> list[Insight]:
        high = [
            a
            for a in detect_anomalies(self.snapshot.daily_data)
            if a.severity is AnomalySeverity.HIGH
        ]
        if not high:
            return []

        return [
            Insight(
                id="anomalies-detected",
                type=InsightType.WARNING,
                priority=InsightPriority.HIGH,
                title="Unusual Activity Detected",
                description=(
                    f"{len(high)} significant anomaly(ies) found in recent data"
                ),
                actionable=True,
                action="Review recent changes and verify data accuracy",
            )
        ]

    @staticmethod
    def to_dict(insights: list[Insight]) -> list[dict[str, Any]]:
        """Convert insights list to JSON-serializable format."""
        return [
            {
                "id": i.id,
                "type": i.type.value,
                "priority": i.priority.value,
                "title": i.title,
                "description": i.description,
                "actionable": i.actionable,
                "action": i.action,
                "impact": i.impact,
            }
            for i in insights
        ]


def generate_insights(
    snapshot: AccountSnapshot,
    thresholds: InsightThresholds | None = None,
) -> list[Insight]:
    """Generate prioritised insights for one account."""
    return InsightEngine(snapshot, thresholds).generate_all_insights()
