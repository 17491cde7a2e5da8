"""
Correlation utilities.
Pure functions for the Pearson correlation of two paired numeric series.
"""

import logging
import math
from typing import Any, List, Sequence

import numpy as np

from app_analytics.calculations.sample import is_missing

logger = logging.getLogger(__name__)


class CorrelationError(Exception):
    """Raised when correlation calculation fails."""
    pass


def pearson(x: List[float], y: List[float]) -> float:
    """
    Calculate the Pearson correlation coefficient of two clean series.

    Formula: r = Σ(dx·dy) / √(Σdx² · Σdy²), with dx = x - mean(x), dy = y - mean(y)

    Args:
        x: First series, no holes
        y: Second series, no holes, same length as x

    Returns:
        Correlation coefficient in [-1, 1]

    Raises:
        CorrelationError: If lengths differ, fewer than 2 points, zero variance
            or a floating point error occurs
    """
    if len(x) != len(y):
        raise CorrelationError(f"Series must have same length: {len(x)} != {len(y)}")

    if len(x) < 2:
        raise CorrelationError("Insufficient data: need at least 2 pairs")

    try:
        with np.errstate(over='raise', invalid='raise'):
            x_arr = np.asarray(x, dtype=float)
            y_arr = np.asarray(y, dtype=float)

            dx = x_arr - np.mean(x_arr)
            dy = y_arr - np.mean(y_arr)

            numerator = float(np.sum(dx * dy))
            sum_x_squared = float(np.sum(dx * dx))
            sum_y_squared = float(np.sum(dy * dy))
    except FloatingPointError as e:
        raise CorrelationError(f"Floating point error: {e}")

    denominator = math.sqrt(sum_x_squared * sum_y_squared)
    if denominator == 0:
        raise CorrelationError("Zero variance in at least one series")

    r = numerator / denominator
    if not math.isfinite(r):
        raise CorrelationError(f"Non-finite correlation: {r}")

    # Rounding can push |r| a hair past 1
    return max(-1.0, min(1.0, r))


def correlate(x: Sequence[Any], y: Sequence[Any]) -> float:
    """
    Correlate two positionally paired series that may contain holes.

    Pairs with a hole on either side are dropped before calculating.

    Args:
        x: First series
        y: Second series

    Returns:
        Pearson correlation, or 0.0 for mismatched lengths, empty input,
        fewer than 2 valid pairs, zero variance or any numerical failure
    """
    try:
        x = list(x)
        y = list(y)

        if len(x) != len(y) or len(x) == 0:
            logger.debug(f"Correlation skipped: series lengths {len(x)} and {len(y)}")
            return 0.0

        pairs = [
            (xi, yi) for xi, yi in zip(x, y)
            if not is_missing(xi) and not is_missing(yi)
        ]

        if len(pairs) < 2:
            return 0.0

        return pearson([p[0] for p in pairs], [p[1] for p in pairs])

    except CorrelationError as e:
        logger.debug(f"Correlation unavailable: {e}")
        return 0.0
    except Exception as e:
        logger.warning(f"Correlation calculation failed: {e}")
        return 0.0
