"""
Outlier detection using Tukey's IQR fence.
"""

import logging
from typing import Any, Dict, Iterable, Union

from app_analytics.calculations.sample import clean_numeric
from app_analytics.calculations.summary import summarize

logger = logging.getLogger(__name__)

# Fewer values than this give a meaningless fence
MIN_VALUES = 4
FENCE_MULTIPLIER = 1.5


def empty_outliers() -> Dict[str, Any]:
    """Return the outlier result for insufficient data."""
    return {
        'outliers': [],
        'lowerBound': 0.0,
        'upperBound': 0.0,
        'outlierCount': 0,
        'outlierPercentage': 0.0
    }


def detect_outliers(values: Iterable[Any]) -> Dict[str, Union[list, float, int]]:
    """
    Flag values outside [q1 - 1.5·IQR, q3 + 1.5·IQR].

    Args:
        values: Numeric sample that may contain holes

    Returns:
        Dictionary with outliers (original order), lowerBound, upperBound,
        outlierCount and outlierPercentage (relative to the clean count)
    """
    try:
        clean = clean_numeric(values)

        if len(clean) < MIN_VALUES:
            return empty_outliers()

        stats = summarize(clean)
        lower_bound = stats['q1'] - FENCE_MULTIPLIER * stats['iqr']
        upper_bound = stats['q3'] + FENCE_MULTIPLIER * stats['iqr']

        outliers = [v for v in clean if v < lower_bound or v > upper_bound]

        return {
            'outliers': outliers,
            'lowerBound': lower_bound,
            'upperBound': upper_bound,
            'outlierCount': len(outliers),
            'outlierPercentage': (len(outliers) / len(clean)) * 100
        }

    except Exception as e:
        logger.warning(f"Outlier detection failed: {e}")
        return empty_outliers()
