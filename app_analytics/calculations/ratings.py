"""
Rating distribution utilities.
Buckets app ratings on the 1-5 star scale.
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple

from app_analytics.calculations.sample import clean_ratings
from app_analytics.calculations.summary import empty_stats, summarize

logger = logging.getLogger(__name__)

MIN_RATING = 1.0
MAX_RATING = 5.0

# (label, lower inclusive, upper exclusive); the top bucket also takes 5.0
RATING_BUCKETS: List[Tuple[str, float, float]] = [
    ('1.0-1.9', 1.0, 2.0),
    ('2.0-2.9', 2.0, 3.0),
    ('3.0-3.9', 3.0, 4.0),
    ('4.0-4.4', 4.0, 4.5),
    ('4.5-5.0', 4.5, 5.0),
]


def rating_bucket(rating: float) -> str:
    """
    Find the bucket label for a rating.

    Raises:
        ValueError: If the rating is outside [1.0, 5.0]
    """
    if rating == MAX_RATING:
        return RATING_BUCKETS[-1][0]

    for label, lower, upper in RATING_BUCKETS:
        if lower <= rating < upper:
            return label

    raise ValueError(f"Rating outside {MIN_RATING}-{MAX_RATING}: {rating}")


def analyze_rating_distribution(ratings: Iterable[Any]) -> Dict[str, Any]:
    """
    Histogram of ratings over fixed star buckets.

    Unrated (0), missing and out-of-range ratings are excluded, so the bucket
    counts always add up to total.

    Args:
        ratings: Rating values that may contain holes

    Returns:
        Dictionary with total, distribution (bucket label -> count) and the
        BasicStats of the rated values
    """
    try:
        clean = [r for r in clean_ratings(ratings) if MIN_RATING <= r <= MAX_RATING]

        if not clean:
            return {
                'total': 0,
                'distribution': {},
                'stats': empty_stats()
            }

        distribution = {label: 0 for label, _, _ in RATING_BUCKETS}
        for rating in clean:
            distribution[rating_bucket(rating)] += 1

        return {
            'total': len(clean),
            'distribution': distribution,
            'stats': summarize(clean)
        }

    except Exception as e:
        logger.warning(f"Rating distribution failed: {e}")
        return {
            'total': 0,
            'distribution': {},
            'stats': empty_stats()
        }
