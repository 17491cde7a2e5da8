"""
Trend utilities.
Least-squares slope of a date-ordered series and its direction.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

import numpy as np
import pandas as pd

from app_analytics.calculations.correlation import correlate
from app_analytics.calculations.sample import is_missing

logger = logging.getLogger(__name__)

# Slopes within ±SLOPE_THRESHOLD per step count as flat
SLOPE_THRESHOLD = 0.1


class TrendError(Exception):
    """Raised when trend calculation fails."""
    pass


def linear_slope(values: List[float]) -> float:
    """
    Ordinary least-squares slope of values against their index 0..n-1.

    Formula: slope = (nΣxy - ΣxΣy) / (nΣx² - (Σx)²)

    Raises:
        TrendError: If fewer than 2 values
    """
    n = len(values)
    if n < 2:
        raise TrendError("Insufficient data: need at least 2 points")

    x = np.arange(n, dtype=float)
    y = np.asarray(values, dtype=float)

    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))

    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def classify_slope(slope: float) -> str:
    """Map a slope to increasing, decreasing or stable."""
    if slope > SLOPE_THRESHOLD:
        return 'increasing'
    elif slope < -SLOPE_THRESHOLD:
        return 'decreasing'
    else:
        return 'stable'


def _valid_points(points: Iterable[Mapping[str, Any]]) -> List[Tuple[pd.Timestamp, float]]:
    """Keep points with a parseable date and numeric value, sorted by date."""
    valid = []
    for point in points:
        if not isinstance(point, Mapping):
            continue

        value = point.get('value')
        raw_date = point.get('date')
        if is_missing(value) or raw_date is None or raw_date == '':
            continue

        try:
            # Naive dates are taken as UTC so they compare with aware ones
            timestamp = pd.to_datetime(raw_date, utc=True)
        except (ValueError, TypeError, OverflowError):
            logger.debug(f"Skipping point with unparseable date: {raw_date!r}")
            continue

        if pd.isna(timestamp):
            continue

        valid.append((timestamp, value))

    # sorted() is stable, so equal dates keep input order
    return sorted(valid, key=lambda p: p[0])


def insufficient_trend(data_points: int = 0) -> Dict[str, Union[str, float, int]]:
    """Return the trend result for fewer than 2 usable points."""
    return {
        'trend': 'insufficient_data',
        'slope': 0.0,
        'correlation': 0.0,
        'dataPoints': data_points
    }


def analyze_trend(points: Iterable[Mapping[str, Any]]) -> Dict[str, Union[str, float, int]]:
    """
    Fit a linear trend to a series of {date, value} points.

    The position in date order is the independent variable.

    Args:
        points: Iterable of dictionaries with 'date' and 'value'

    Returns:
        Dictionary with trend, slope, correlation (index vs value) and dataPoints
    """
    try:
        valid = _valid_points(points or [])

        if len(valid) < 2:
            return insufficient_trend(len(valid))

        values = [value for _, value in valid]
        slope = linear_slope(values)

        return {
            'trend': classify_slope(slope),
            'slope': slope,
            'correlation': correlate(list(range(len(values))), values),
            'dataPoints': len(values)
        }

    except TrendError as e:
        logger.debug(f"Trend unavailable: {e}")
        return insufficient_trend()
    except Exception as e:
        logger.warning(f"Trend analysis failed: {e}")
        return insufficient_trend()
