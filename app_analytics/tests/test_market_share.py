"""
Tests for market share calculation.
"""

from app_analytics.calculations.market_share import calculate_market_share, share_pct


def make_app(category, installs):
    return {
        'category': category,
        'rating': 4.0,
        'installsNumber': installs,
        'reviews': 10,
        'isPaid': False,
        'isPopular': False
    }


class TestCalculateMarketShare:
    """Tests for calculate_market_share."""

    def test_shares(self):
        """Test app and install shares per category."""
        apps = [make_app('GAME', 100), make_app('GAME', 200), make_app('TOOLS', 100)]

        result = calculate_market_share(apps)

        assert result['totalApps'] == 3
        assert result['totalInstalls'] == 400

        game, tools = result['categoryBreakdown']
        assert game['category'] == 'GAME'
        assert abs(game['appMarketShare'] - 200 / 3) < 1e-9
        assert abs(game['installMarketShare'] - 75.0) < 1e-9
        assert abs(tools['appMarketShare'] - 100 / 3) < 1e-9
        assert abs(tools['installMarketShare'] - 25.0) < 1e-9

    def test_shares_sum_to_100(self):
        """Test app and install shares add to 100 across categories."""
        apps = [
            make_app(cat, installs)
            for cat, installs in [('A', 10), ('B', 250), ('C', 7), ('A', 33), ('D', 1), ('B', 99)]
        ]

        breakdown = calculate_market_share(apps)['categoryBreakdown']

        assert abs(sum(c['appMarketShare'] for c in breakdown) - 100.0) < 1e-9
        assert abs(sum(c['installMarketShare'] for c in breakdown) - 100.0) < 1e-9

    def test_zero_installs(self):
        """Test zero total installs forces install share to 0."""
        apps = [make_app('GAME', 0), make_app('TOOLS', 0)]

        result = calculate_market_share(apps)

        assert result['totalInstalls'] == 0
        for cat in result['categoryBreakdown']:
            assert cat['installMarketShare'] == 0
            assert cat['appMarketShare'] == 50.0

    def test_empty(self):
        """Test empty input."""
        result = calculate_market_share([])

        assert result == {'totalApps': 0, 'totalInstalls': 0, 'categoryBreakdown': []}

    def test_breakdown_extends_category_performance(self):
        """Test breakdown entries keep the category performance fields."""
        result = calculate_market_share([make_app('GAME', 10)])
        entry = result['categoryBreakdown'][0]

        assert entry['appCount'] == 1
        assert entry['totalInstalls'] == 10
        assert 'ratingStats' in entry


class TestSharePct:
    """Tests for share_pct."""

    def test_share_pct(self):
        """Test basic percentage and zero denominator."""
        assert share_pct(1, 4) == 25.0
        assert share_pct(5, 0) == 0.0
