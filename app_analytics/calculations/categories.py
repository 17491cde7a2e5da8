"""
Category performance aggregation.
Groups app records by category and summarizes ratings, installs and reviews.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping

from app_analytics.calculations.sample import clean_ratings, group_by, safe_mean, total
from app_analytics.calculations.summary import summarize

logger = logging.getLogger(__name__)


def category_performance(category: Any, apps: List[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Summarize the apps of a single category.

    Rating figures only use rated apps; counts and install/review figures use
    every app in the group.

    Args:
        category: Category label
        apps: App records belonging to the category

    Returns:
        CategoryPerformance dictionary
    """
    rating_stats = summarize(clean_ratings(app.get('rating') for app in apps))
    installs = [app.get('installsNumber', 0) for app in apps]
    reviews = [app.get('reviews', 0) for app in apps]

    return {
        'category': category,
        'appCount': len(apps),
        'avgRating': rating_stats['mean'],
        'medianRating': rating_stats['median'],
        'totalInstalls': total(installs),
        'avgInstalls': safe_mean(installs),
        'totalReviews': total(reviews),
        'avgReviews': safe_mean(reviews),
        'paidAppsCount': sum(1 for app in apps if app.get('isPaid')),
        'popularAppsCount': sum(1 for app in apps if app.get('isPopular')),
        'ratingStats': rating_stats
    }


def analyze_category_performance(apps: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Calculate per-category statistics for a collection of apps.

    Categories are matched exactly (case-sensitive).

    Args:
        apps: App records with category, rating, installsNumber, reviews,
            isPaid and isPopular

    Returns:
        List of CategoryPerformance dictionaries ordered by appCount descending,
        ties in order of first appearance
    """
    try:
        groups = group_by(apps or [], 'category')

        performance = [
            category_performance(category, category_apps)
            for category, category_apps in groups.items()
        ]

        return sorted(performance, key=lambda cat: cat['appCount'], reverse=True)

    except Exception as e:
        logger.warning(f"Category performance failed: {e}")
        return []
