"""
Market share utilities.
Each category's share of total apps and total installs.
"""

import logging
from typing import Any, Dict, Iterable, Mapping

from app_analytics.calculations.categories import analyze_category_performance
from app_analytics.calculations.sample import total

logger = logging.getLogger(__name__)


def share_pct(part: float, whole: float) -> float:
    """Percentage of whole represented by part, 0.0 when whole is zero."""
    if not whole:
        return 0.0
    return (part / whole) * 100


def calculate_market_share(apps: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Calculate app-count and install market share per category.

    Args:
        apps: App records

    Returns:
        Dictionary with totalApps, totalInstalls and categoryBreakdown (category
        performance entries extended with appMarketShare and installMarketShare)
    """
    try:
        apps = list(apps or [])
        total_apps = len(apps)
        total_installs = total(app.get('installsNumber', 0) for app in apps)

        breakdown = []
        for cat in analyze_category_performance(apps):
            entry = dict(cat)
            entry['appMarketShare'] = share_pct(cat['appCount'], total_apps)
            entry['installMarketShare'] = share_pct(cat['totalInstalls'], total_installs)
            breakdown.append(entry)

        return {
            'totalApps': total_apps,
            'totalInstalls': total_installs,
            'categoryBreakdown': breakdown
        }

    except Exception as e:
        logger.warning(f"Market share calculation failed: {e}")
        return {
            'totalApps': 0,
            'totalInstalls': 0,
            'categoryBreakdown': []
        }
