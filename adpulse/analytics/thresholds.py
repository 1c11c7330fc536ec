"""Green/yellow/red colouring of KPIs against account thresholds."""

from ..models.account import AccountConfig, AccountMetrics, Threshold
from .models import ThresholdColor

# Universal CTR thresholds (percent)
CTR_THRESHOLDS = Threshold(green=1.5, yellow=1.0)


def get_threshold_color(
    value: float,
    thresholds: Threshold,
    higher_is_better: bool = True,
) -> ThresholdColor:
    """Colour a value against green/yellow cut-offs.

    For higher-is-better metrics (ROAS) the cut-offs are floors, for
    lower-is-better metrics (cost per subscription) they are ceilings.
    """
    if higher_is_better:
        if value >= thresholds.green:
            return ThresholdColor.GREEN
        if value >= thresholds.yellow:
            return ThresholdColor.YELLOW
        return ThresholdColor.RED

    if value <= thresholds.green:
        return ThresholdColor.GREEN
    if value <= thresholds.yellow:
        return ThresholdColor.YELLOW
    return ThresholdColor.RED


def get_primary_kpi_color(config: AccountConfig, metrics: AccountMetrics) -> ThresholdColor:
    """Colour of the account's primary KPI; green when nothing applies."""
    if not config.thresholds:
        return ThresholdColor.GREEN

    if config.primary_kpi == "roas":
        threshold = config.thresholds.get("roas")
        if metrics.kind == "ecommerce" and threshold:
            return get_threshold_color(metrics.roas, threshold, higher_is_better=True)
    elif config.primary_kpi == "costPerSubscription":
        threshold = config.thresholds.get("costPerSubscription")
        if metrics.kind == "gym" and threshold:
            return get_threshold_color(
                metrics.cost_per_subscription, threshold, higher_is_better=False
            )

    return ThresholdColor.GREEN


def is_ctr_low(ctr: float) -> bool:
    """CTR below the universal yellow cut-off."""
    return ctr < CTR_THRESHOLDS.yellow
