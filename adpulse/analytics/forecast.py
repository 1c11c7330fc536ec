"""Short-horizon spend forecasting and month-end results projection."""

import calendar
import logging
from collections.abc import Sequence
from datetime import date, timedelta

from ..models.account import DailyMetrics
from .expressions import column_values, daily_frame
from .models import ForecastPoint, Prediction
from .stats import (
    exponential_moving_average,
    linear_regression,
    round_half_up,
    standard_deviation,
)

logger = logging.getLogger(__name__)

FORECAST_MIN_DAYS = 7
Z_95 = 1.96
BAND_GROWTH_PER_DAY = 0.1


def forecast_spend(
    daily: Sequence[DailyMetrics],
    days_ahead: int = 7,
) -> list[ForecastPoint]:
    """Project daily spend for the next ``days_ahead`` days.

    The linear-regression projection is averaged with the EMA of the series
    to damp pure trend extrapolation. The band half-width is
    ``std * (1 + 0.1 * i) * 1.96`` so it widens with the horizon.

    Returns:
        One ForecastPoint per future day, or [] with fewer than 7 days.
    """
    if len(daily) < FORECAST_MIN_DAYS:
        logger.debug("Spend forecast needs %d days, got %d", FORECAST_MIN_DAYS, len(daily))
        return []

    spend = column_values(daily_frame(daily), "spend")
    n = len(spend)
    slope, intercept = linear_regression(spend)
    std = standard_deviation(spend)
    ema = exponential_moving_average(spend)
    last_date = daily[-1].date

    forecasts: list[ForecastPoint] = []
    for i in range(1, days_ahead + 1):
        linear_prediction = intercept + slope * (n + i - 1)
        predicted = max(0.0, (linear_prediction + ema) / 2)
        half_width = std * (1 + i * BAND_GROWTH_PER_DAY) * Z_95

        forecasts.append(
            ForecastPoint(
                date=last_date + timedelta(days=i),
                predicted=predicted,
                lower_bound=max(0.0, predicted - half_width),
                upper_bound=predicted + half_width,
            )
        )

    return forecasts


def predict_month_end_results(
    daily: Sequence[DailyMetrics],
    as_of: date | None = None,
) -> Prediction:
    """Extrapolate the results total to the end of the calendar month.

    Args:
        daily: Month-to-date daily series
        as_of: Reference day (default: today)

    Returns:
        Prediction; zeroed with confidence 0 when fewer than 7 days exist.
    """
    if len(daily) < FORECAST_MIN_DAYS:
        return Prediction(value=0, lower_bound=0, upper_bound=0, confidence=0.0)

    as_of = as_of or date.today()
    results = column_values(daily_frame(daily), "results")

    days_in_month = calendar.monthrange(as_of.year, as_of.month)[1]
    days_remaining = days_in_month - as_of.day

    current_results = float(results.sum())
    avg_daily = current_results / len(results)
    std = standard_deviation(results)

    total_predicted = current_results + avg_daily * days_remaining
    spread = std * days_remaining * 0.5
    # Confidence decreases with more days left to predict
    confidence = max(0.5, 1 - (days_remaining / days_in_month) * 0.5)

    return Prediction(
        value=round_half_up(total_predicted),
        lower_bound=round_half_up(total_predicted - spread),
        upper_bound=round_half_up(total_predicted + spread),
        confidence=confidence,
    )
