"""
Tests for the orchestrated analysis job - cleaned CSV to analytics JSON.
Uses the small CSV fixtures; one app row and one review row are invalid.
"""

import json
from pathlib import Path

import pytest

from app_analytics.analysis_job import (
    run_analysis,
    load_app_records,
    load_review_records,
    AnalysisJobError
)

FIXTURES = Path(__file__).parent.parent.parent / 'tests/fixtures'


class TestLoadRecords:
    """Tests for CSV loading."""

    def test_load_app_records(self):
        """Test valid rows load and the invalid one is skipped."""
        records, skipped = load_app_records(FIXTURES / 'apps_small.csv')

        assert len(records) == 6
        assert skipped == 1
        assert [r['app'] for r in records][:2] == ['Puzzle Quest', 'Block Blast']

    def test_app_record_types(self):
        """Test cells are coerced to plain Python values."""
        records, _ = load_app_records(FIXTURES / 'apps_small.csv')
        by_name = {r['app']: r for r in records}

        chess = by_name['Chess Master']
        assert chess['isPaid'] is True
        assert chess['isPopular'] is False
        assert chess['installsNumber'] == 100000
        assert isinstance(chess['installsNumber'], int)
        assert chess['price'] == 2.99

        flashlight = by_name['Flashlight']
        assert flashlight['rating'] is None
        assert by_name['Note Pad']['size'] is None

    def test_load_review_records(self):
        """Test review loading skips the out-of-range polarity row."""
        records, skipped = load_review_records(FIXTURES / 'reviews_small.csv')

        assert len(records) == 5
        assert skipped == 1
        assert records[4]['sentiment'] is None

    def test_missing_file(self, tmp_path):
        """Test a missing file raises."""
        with pytest.raises(AnalysisJobError, match="File not found"):
            load_app_records(tmp_path / 'nope.csv')

    def test_missing_columns(self, tmp_path):
        """Test required columns are enforced."""
        csv_path = tmp_path / 'apps.csv'
        csv_path.write_text("category,rating\nGAME,4.0\n")

        with pytest.raises(AnalysisJobError, match="missing required columns"):
            load_app_records(csv_path)

    def test_optional_columns_default(self, tmp_path):
        """Test absent optional columns produce holes and False flags."""
        csv_path = tmp_path / 'apps.csv'
        csv_path.write_text("category,installsNumber,reviews\nGAME,100,5\n")

        records, skipped = load_app_records(csv_path)

        assert skipped == 0
        assert records[0]['rating'] is None
        assert records[0]['isPaid'] is False
        assert records[0]['isPopular'] is False


class TestRunAnalysis:
    """Tests for run_analysis."""

    def test_run_analysis_writes_json(self, tmp_path):
        """Test a complete run writes the analytics document."""
        output_path = tmp_path / 'out' / 'analytics.json'

        result = run_analysis(
            apps_path=FIXTURES / 'apps_small.csv',
            output_path=output_path,
            reviews_path=FIXTURES / 'reviews_small.csv',
            top_n=5
        )

        assert result['status'] == 'completed'
        assert result['apps_loaded'] == 6
        assert result['apps_skipped'] == 1
        assert result['reviews_loaded'] == 5
        assert result['total_categories'] == 3
        assert output_path.exists()

        with open(output_path) as f:
            analytics = json.load(f)

        assert analytics['overview']['totalApps'] == 6
        assert analytics['sentiment']['sentimentCounts'] == {'positive': 2, 'neutral': 1, 'negative': 1}
        assert analytics['categories']['categoryPerformance'][0]['category'] == 'GAME'

    def test_run_analysis_without_reviews(self, tmp_path):
        """Test reviews are optional."""
        result = run_analysis(FIXTURES / 'apps_small.csv', tmp_path / 'a.json')

        assert result['status'] == 'completed'
        assert result['reviews_loaded'] == 0

    def test_run_analysis_missing_file(self, tmp_path):
        """Test failures are reported, not raised."""
        result = run_analysis(tmp_path / 'missing.csv', tmp_path / 'a.json')

        assert result['status'] == 'failed'
        assert 'File not found' in result['error_message']
        assert result['output_path'] is None

    def test_run_analysis_no_valid_rows(self, tmp_path):
        """Test a file with only invalid rows fails."""
        csv_path = tmp_path / 'apps.csv'
        csv_path.write_text("category,installsNumber,reviews\nGAME,-1,5\n")

        result = run_analysis(csv_path, tmp_path / 'a.json')

        assert result['status'] == 'failed'
        assert 'No valid app records' in result['error_message']
