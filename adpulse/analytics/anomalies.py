"""Z-score anomaly detection on the most recent days."""

import logging
from collections.abc import Sequence

from ..models.account import DailyMetrics
from .expressions import ANOMALY_METRICS, column_values, daily_frame
from .models import Anomaly, AnomalySeverity, AnomalyType
from .stats import calculate_z_scores, mean, round_half_up, standard_deviation

logger = logging.getLogger(__name__)

ANOMALY_MIN_DAYS = 7
RECENT_DAYS = 3
FLAG_Z = 2.0
MEDIUM_Z = 2.5
HIGH_Z = 3.0

SEVERITY_ORDER = {
    AnomalySeverity.HIGH: 0,
    AnomalySeverity.MEDIUM: 1,
    AnomalySeverity.LOW: 2,
}


def _severity(z_score: float) -> AnomalySeverity:
    magnitude = abs(z_score)
    if magnitude > HIGH_Z:
        return AnomalySeverity.HIGH
    if magnitude > MEDIUM_Z:
        return AnomalySeverity.MEDIUM
    return AnomalySeverity.LOW


def _format_value(value: float) -> str:
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def detect_anomalies(daily: Sequence[DailyMetrics]) -> list[Anomaly]:
    """Flag outliers among the last 3 days of each tracked metric.

    Mean and population std-dev come from the whole series. A day is flagged
    when |z| > 2; metrics with zero variance are skipped.

    Returns:
        Anomalies ordered high, medium, low (detection order within a tier),
        or [] with fewer than 7 days.
    """
    if len(daily) < ANOMALY_MIN_DAYS:
        logger.debug("Anomaly detection needs %d days, got %d", ANOMALY_MIN_DAYS, len(daily))
        return []

    frame = daily_frame(daily)
    anomalies: list[Anomaly] = []

    for metric in ANOMALY_METRICS:
        values = column_values(frame, metric)
        if standard_deviation(values) == 0:
            continue

        avg = mean(values)
        z_scores = calculate_z_scores(values)
        offset = len(daily) - RECENT_DAYS
        for day, value, z in zip(daily[offset:], values[offset:], z_scores[offset:]):
            z_score = float(z)
            if abs(z_score) <= FLAG_Z:
                continue

            kind = AnomalyType.SPIKE if z_score > 0 else AnomalyType.DROP
            verb = "spiked" if kind is AnomalyType.SPIKE else "dropped"
            anomalies.append(
                Anomaly(
                    id=f"{day.date.isoformat()}-{metric}",
                    metric=metric,
                    date=day.date,
                    value=float(value),
                    expected=avg,
                    deviation=z_score,
                    severity=_severity(z_score),
                    type=kind,
                    description=(
                        f"{metric.capitalize()} {verb} to {_format_value(value)} "
                        f"(expected ~{round_half_up(avg):,})"
                    ),
                )
            )

    return sorted(anomalies, key=lambda a: SEVERITY_ORDER[a.severity])
