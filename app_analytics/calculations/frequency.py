"""
Frequency ranking for categorical samples.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from app_analytics.calculations.sample import clean_categorical

logger = logging.getLogger(__name__)


def analyze_frequency(values: Iterable[Any], top_n: Optional[int] = 10) -> List[Dict[str, Any]]:
    """
    Rank the distinct values of a categorical sample by frequency.

    Args:
        values: Labels; None, NaN and empty strings are ignored
        top_n: Maximum entries to return (None for all)

    Returns:
        List of {value, count, percentage} sorted by count descending. Ties keep
        the order in which values were first seen. Percentages are relative to
        the cleaned total.
    """
    try:
        clean = clean_categorical(values)
        total = len(clean)

        if total == 0:
            return []

        if top_n is not None and top_n <= 0:
            return []

        # Counter keeps first-seen order and sorted() is stable
        ranked = sorted(Counter(clean).items(), key=lambda item: item[1], reverse=True)
        if top_n is not None:
            ranked = ranked[:top_n]

        return [
            {
                'value': value,
                'count': count,
                'percentage': (count / total) * 100
            }
            for value, count in ranked
        ]

    except Exception as e:
        logger.warning(f"Frequency analysis failed: {e}")
        return []
