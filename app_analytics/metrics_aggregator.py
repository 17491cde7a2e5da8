"""
Metrics aggregator - composes all app calculations into one analytics document.
Pure function that combines category, rating, install, sentiment and correlation analysis.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from app_analytics import __version__
from app_analytics.calculations.categories import analyze_category_performance
from app_analytics.calculations.correlation import correlate
from app_analytics.calculations.frequency import analyze_frequency
from app_analytics.calculations.market_share import calculate_market_share
from app_analytics.calculations.outliers import detect_outliers
from app_analytics.calculations.ratings import analyze_rating_distribution
from app_analytics.calculations.sample import clean_ratings, is_missing, total
from app_analytics.calculations.sentiment import analyze_sentiment, empty_sentiment
from app_analytics.calculations.summary import summarize

logger = logging.getLogger(__name__)

# (output key, first field, second field)
CORRELATION_PAIRS = [
    ('ratingVsReviews', 'rating', 'reviews'),
    ('ratingVsInstalls', 'rating', 'installsNumber'),
    ('reviewsVsInstalls', 'reviews', 'installsNumber'),
    ('sizeVsInstalls', 'size', 'installsNumber'),
    ('priceVsRating', 'price', 'rating'),
    ('priceVsInstalls', 'price', 'installsNumber'),
]


def compose_analytics(
    apps: Sequence[Mapping[str, Any]],
    reviews: Optional[Sequence[Mapping[str, Any]]] = None,
    top_n: int = 10
) -> Dict[str, Any]:
    """
    Compose every app metric into a single analytics dictionary.

    Args:
        apps: Cleaned app records
        reviews: Cleaned review records (optional)
        top_n: Size of the top categories and top rated apps lists

    Returns:
        Dictionary with overview, categories, ratings, installs, sentiment,
        correlations and metadata sections
    """
    try:
        apps = list(apps or [])
        reviews = list(reviews) if reviews else []

        market_share = calculate_market_share(apps)
        category_performance = analyze_category_performance(apps)
        top_categories = analyze_frequency([app.get('category') for app in apps], top_n=top_n)

        installs = [app.get('installsNumber') for app in apps]

        return {
            'overview': _calculate_overview(apps, len(category_performance)),
            'categories': {
                'totalCategories': len(category_performance),
                'topCategories': top_categories,
                'categoryPerformance': category_performance,
                'marketShare': market_share
            },
            'ratings': {
                'ratingDistribution': analyze_rating_distribution([app.get('rating') for app in apps]),
                'topRatedApps': top_rated_apps(apps, limit=top_n)
            },
            'installs': {
                'stats': summarize(installs),
                'outliers': detect_outliers(installs)
            },
            'sentiment': analyze_sentiment(reviews) if reviews else empty_sentiment(),
            'correlations': calculate_correlations(apps),
            'metadata': {
                'calculated_at': datetime.now().isoformat(),
                'calculation_version': __version__,
                'apps_analyzed': len(apps),
                'reviews_analyzed': len(reviews)
            }
        }

    except Exception as e:
        logger.warning(f"Analytics composition failed: {e}")
        return compose_analytics([])


def _calculate_overview(apps: List[Mapping[str, Any]], total_categories: int) -> Dict[str, Any]:
    """Calculate headline counts and totals."""
    paid = sum(1 for app in apps if app.get('isPaid'))

    return {
        'totalApps': len(apps),
        'totalCategories': total_categories,
        'avgRating': summarize(clean_ratings(app.get('rating') for app in apps))['mean'],
        'totalInstalls': total(app.get('installsNumber', 0) for app in apps),
        'totalReviews': total(app.get('reviews', 0) for app in apps),
        'paidAppsCount': paid,
        'freeAppsCount': len(apps) - paid,
        'popularAppsCount': sum(1 for app in apps if app.get('isPopular'))
    }


def _field(apps: List[Mapping[str, Any]], name: str) -> List[Any]:
    """Extract a field for correlation; unrated apps become holes."""
    values = [app.get(name) for app in apps]
    if name == 'rating':
        values = [None if is_missing(v) or v <= 0 else v for v in values]
    return values


def calculate_correlations(apps: Sequence[Mapping[str, Any]]) -> Dict[str, float]:
    """
    Correlate the numeric app fields against each other.

    Args:
        apps: App records

    Returns:
        Dictionary mapping pair name (e.g. ratingVsInstalls) to Pearson correlation
    """
    apps = list(apps or [])
    return {
        key: correlate(_field(apps, first), _field(apps, second))
        for key, first, second in CORRELATION_PAIRS
    }


def top_rated_apps(apps: Sequence[Mapping[str, Any]], limit: int = 10) -> List[Dict[str, Any]]:
    """
    Rank rated apps by rating, breaking ties by review count.

    Args:
        apps: App records
        limit: Maximum number of apps returned

    Returns:
        List of {app, category, rating, reviews, installsNumber}
    """
    if limit <= 0:
        return []

    rated = [
        app for app in apps
        if not is_missing(app.get('rating')) and app.get('rating') > 0
    ]

    def sort_key(app):
        reviews = app.get('reviews')
        return (app.get('rating'), 0 if is_missing(reviews) else reviews)

    ranked = sorted(rated, key=sort_key, reverse=True)

    return [
        {
            'app': app.get('app'),
            'category': app.get('category'),
            'rating': app.get('rating'),
            'reviews': app.get('reviews'),
            'installsNumber': app.get('installsNumber')
        }
        for app in ranked[:limit]
    ]
