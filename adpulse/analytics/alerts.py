"""Portfolio alerts raised from account snapshots."""

from collections.abc import Iterable
from datetime import datetime, timezone

from ..models.account import AccountSnapshot
from .models import Alert, AlertSeverity, AlertType
from .thresholds import is_ctr_low

ROAS_ALERT = 3.0
ROAS_CRITICAL = 2.0
COST_PER_SUB_ALERT = 80.0
COST_PER_SUB_CRITICAL = 100.0
CTR_ALERT = 1.0

# Today vs. the 7-day daily average, as a fraction
SPEND_PACING_TOLERANCE = 0.5

SEVERITY_ORDER = {
    AlertSeverity.CRITICAL: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.INFO: 2,
}


def _account_alerts(snapshot: AccountSnapshot, now: datetime) -> list[Alert]:
    config, metrics = snapshot.config, snapshot.metrics
    stamp = int(now.timestamp() * 1000)
    alerts: list[Alert] = []

    def alert(kind: str, alert_type: AlertType, severity: AlertSeverity, message: str,
              value: float | None = None, threshold: float | None = None) -> Alert:
        return Alert(
            id=f"{config.id}-{kind}-{stamp}",
            account_id=config.id,
            account_name=config.name,
            type=alert_type,
            severity=severity,
            message=message,
            timestamp=now,
            value=value,
            threshold=threshold,
        )

    if config.type == "ecommerce" and metrics.kind == "ecommerce":
        if metrics.roas < ROAS_ALERT:
            alerts.append(
                alert(
                    "roas",
                    AlertType.DECLINING_ROAS,
                    AlertSeverity.CRITICAL if metrics.roas < ROAS_CRITICAL else AlertSeverity.WARNING,
                    f"ROAS is {metrics.roas:.2f}x (below {ROAS_ALERT:g}x threshold)",
                    value=metrics.roas,
                    threshold=ROAS_ALERT,
                )
            )

    if config.type == "leadgen-gym" and metrics.kind == "gym":
        cps = metrics.cost_per_subscription
        if cps > COST_PER_SUB_ALERT:
            alerts.append(
                alert(
                    "cps",
                    AlertType.HIGH_COST_PER_SUB,
                    AlertSeverity.CRITICAL if cps > COST_PER_SUB_CRITICAL else AlertSeverity.WARNING,
                    f"Cost per subscription is ${cps:.2f} "
                    f"(above ${COST_PER_SUB_ALERT:g} threshold)",
                    value=cps,
                    threshold=COST_PER_SUB_ALERT,
                )
            )

    if is_ctr_low(metrics.ctr):
        alerts.append(
            alert(
                "ctr",
                AlertType.LOW_CTR,
                AlertSeverity.WARNING,
                f"CTR is {metrics.ctr:.2f}% (below {CTR_ALERT:g}% threshold)",
                value=metrics.ctr,
                threshold=CTR_ALERT,
            )
        )

    if snapshot.seven_day_spend > 0:
        daily_average = snapshot.seven_day_spend / 7
        drift = (snapshot.today_spend - daily_average) / daily_average
        if abs(drift) > SPEND_PACING_TOLERANCE:
            direction = "above" if drift > 0 else "below"
            alerts.append(
                alert(
                    "pacing",
                    AlertType.SPEND_PACING,
                    AlertSeverity.INFO,
                    f"Today's spend of ${snapshot.today_spend:.2f} is {abs(drift) * 100:.0f}% "
                    f"{direction} the 7-day daily average",
                    value=snapshot.today_spend,
                    threshold=daily_average,
                )
            )

    if snapshot.daily_data:
        latest = snapshot.daily_data[-1]
        if latest.results == 0 and latest.spend > 0:
            alerts.append(
                alert(
                    "no-results",
                    AlertType.NO_RESULTS,
                    AlertSeverity.CRITICAL,
                    f"No results in the last 24 hours with ${latest.spend:.2f} spent",
                    value=0,
                )
            )

    return alerts


def generate_alerts(
    snapshots: Iterable[AccountSnapshot],
    now: datetime | None = None,
) -> list[Alert]:
    """Alerts across accounts, critical first.

    Args:
        snapshots: Account snapshots to check
        now: Timestamp stamped on every alert (default: current UTC time)
    """
    now = now or datetime.now(timezone.utc)
    alerts: list[Alert] = []
    for snapshot in snapshots:
        alerts.extend(_account_alerts(snapshot, now))
    return sorted(alerts, key=lambda a: SEVERITY_ORDER[a.severity])
