"""Statistical primitives over plain numeric sequences.

Degenerate inputs (empty sequences, zero variance) return 0 rather than
raising or producing NaN.
"""

from collections.abc import Sequence

import numpy as np
from scipy import stats


def mean(values: Sequence[float] | np.ndarray) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def standard_deviation(values: Sequence[float] | np.ndarray) -> float:
    """Population standard deviation: sqrt(mean squared deviation).

    Returns:
        Standard deviation, 0 for an empty sequence.
    """
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float)))


def simple_moving_average(values: Sequence[float] | np.ndarray, window: int) -> float:
    """Mean of the last ``window`` values (all values if fewer)."""
    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=float)
    return float(np.mean(arr[-window:]))


def exponential_moving_average(
    values: Sequence[float] | np.ndarray,
    alpha: float = 0.3,
) -> float:
    """Recursive smoothing seeded with the first value.

    Formula: ema_i = alpha * x_i + (1 - alpha) * ema_{i-1}
    """
    if len(values) == 0:
        return 0.0
    ema = float(values[0])
    for value in values[1:]:
        ema = alpha * float(value) + (1 - alpha) * ema
    return ema


def linear_regression(values: Sequence[float] | np.ndarray) -> tuple[float, float]:
    """Ordinary least squares of ``values`` against their index 0..n-1.

    Args:
        values: Ordered metric values (e.g., daily spend)

    Returns:
        (slope, intercept). (0, 0) for no data; a single point gives a flat
        line through it.
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0
    if n == 1:
        return 0.0, float(values[0])

    result = stats.linregress(np.arange(n), np.asarray(values, dtype=float))
    return float(result.slope), float(result.intercept)


def calculate_z_scores(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Calculate z-scores for a list of values.

    Returns:
        Array of z-scores (0 if std is 0).
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return arr

    std = standard_deviation(arr)
    if std == 0:
        return np.zeros_like(arr)

    return (arr - mean(arr)) / std


def round_half_up(value: float) -> int:
    """Round .5 upward, matching the dashboard's display rounding."""
    return int(np.floor(value + 0.5))
