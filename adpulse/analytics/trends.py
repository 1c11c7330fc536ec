"""Period-over-period trend analysis."""

import logging
from collections.abc import Sequence

from ..models.account import DailyMetrics
from .expressions import WOW_METRICS, daily_frame, window_totals
from .models import TrendDirection, TrendResult

logger = logging.getLogger(__name__)

WOW_MIN_DAYS = 14


def calculate_trend(
    current: float,
    previous: float,
    significance_threshold: float = 5,
) -> TrendResult:
    """Compare two period values.

    Args:
        current: Value for the current period
        previous: Value for the comparison period
        significance_threshold: Minimum absolute % change to be significant

    Returns:
        TrendResult. A zero baseline reports 100% up for any positive current
        value and a flat 0% otherwise.
    """
    if previous == 0:
        grew = current > 0
        return TrendResult(
            direction=TrendDirection.UP if grew else TrendDirection.STABLE,
            percentage=100.0 if grew else 0.0,
            is_significant=grew,
            confidence=1.0 if grew else 0.0,
        )

    pct_change = (current - previous) / previous * 100
    if pct_change > 0:
        direction = TrendDirection.UP
    elif pct_change < 0:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.STABLE

    return TrendResult(
        direction=direction,
        percentage=float(pct_change),
        is_significant=abs(pct_change) >= significance_threshold,
        confidence=min(abs(pct_change) / 100, 1.0),
    )


def calculate_wow_trends(
    daily: Sequence[DailyMetrics],
    significance_threshold: float = 5,
) -> dict[str, TrendResult]:
    """Week-over-week trends for spend, results, impressions and clicks.

    The last 7 entries are "this week", the 7 before them "last week".
    Needs at least 14 entries, otherwise returns an empty mapping.
    """
    if len(daily) < WOW_MIN_DAYS:
        logger.debug("WoW trends need %d days, got %d", WOW_MIN_DAYS, len(daily))
        return {}

    frame = daily_frame(daily)
    this_week = window_totals(frame, -7, 7)
    last_week = window_totals(frame, -14, 7)

    return {
        metric: calculate_trend(
            this_week[metric], last_week[metric], significance_threshold
        )
        for metric in WOW_METRICS
    }
