"""
Summary statistics utilities.
Pure functions for central tendency, dispersion and quartiles of a numeric sample.
"""

import logging
import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Union

import numpy as np

from app_analytics.calculations.sample import clean_numeric

logger = logging.getLogger(__name__)


class SummaryError(Exception):
    """Raised when summary statistics cannot be calculated."""
    pass


def empty_stats() -> Dict[str, Union[float, int, None]]:
    """Return the summary of an empty sample."""
    return {
        'count': 0,
        'mean': 0.0,
        'median': 0.0,
        'mode': None,
        'min': 0.0,
        'max': 0.0,
        'std': 0.0,
        'variance': 0.0,
        'q1': 0.0,
        'q3': 0.0,
        'iqr': 0.0
    }


def median(sorted_values: np.ndarray) -> float:
    """
    Median of an ascending-sorted array.

    Even length averages the two middle elements, odd length takes index n // 2.

    Raises:
        SummaryError: If the array is empty
    """
    n = len(sorted_values)
    if n == 0:
        raise SummaryError("Median of empty sample is undefined")

    if n % 2 == 0:
        return float((sorted_values[n // 2 - 1] + sorted_values[n // 2]) / 2)
    return float(sorted_values[n // 2])


def mode(values: List[float]) -> Optional[float]:
    """
    Most frequent value of a sample.

    Returns None when every value occurs exactly once. Ties between values
    sharing the highest frequency resolve to the smallest value.
    """
    if not values:
        return None

    frequencies = Counter(values)
    max_freq = max(frequencies.values())

    if max_freq == 1:
        return None

    return float(min(value for value, freq in frequencies.items() if freq == max_freq))


def basic_stats(values: List[float]) -> Dict[str, Union[float, int, None]]:
    """
    Calculate summary statistics for a clean, non-empty sample.

    Variance is the population variance (divide by n). Quartiles use the
    nearest-rank method: q1 = sorted[floor(n * 0.25)], q3 = sorted[floor(n * 0.75)].

    Args:
        values: Numeric values with holes already removed

    Returns:
        BasicStats dictionary

    Raises:
        SummaryError: If the sample is empty
    """
    if not values:
        raise SummaryError("Insufficient data: need at least 1 value")

    data = np.asarray(values, dtype=float)
    sorted_data = np.sort(data)
    n = len(sorted_data)

    mean = float(np.mean(data))
    variance = float(np.mean((data - mean) ** 2))

    q1 = float(sorted_data[math.floor(n * 0.25)])
    q3 = float(sorted_data[math.floor(n * 0.75)])

    return {
        'count': n,
        'mean': mean,
        'median': median(sorted_data),
        'mode': mode(values),
        'min': float(sorted_data[0]),
        'max': float(sorted_data[-1]),
        'std': math.sqrt(variance),
        'variance': variance,
        'q1': q1,
        'q3': q3,
        'iqr': q3 - q1
    }


def summarize(values: Iterable[Any]) -> Dict[str, Union[float, int, None]]:
    """
    Summarize a numeric sample that may contain holes.

    Args:
        values: Sample values; None, NaN and non-numeric entries are ignored

    Returns:
        BasicStats dictionary (all zeros with mode None for an empty sample)
    """
    try:
        clean = clean_numeric(values)
        if not clean:
            return empty_stats()

        stats = basic_stats(clean)

        if not all(math.isfinite(stats[k]) for k in ('mean', 'variance', 'std')):
            raise SummaryError("Non-finite result")

        return stats

    except SummaryError as e:
        logger.debug(f"Summary statistics unavailable: {e}")
        return empty_stats()
    except Exception as e:
        logger.warning(f"Summary statistics failed, returning empty result: {e}")
        return empty_stats()
