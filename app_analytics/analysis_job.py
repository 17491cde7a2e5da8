"""
Orchestrated analysis job - cleaned CSV to analytics JSON.
Loads records, calls the pure aggregator, persists the analytics document.
"""

import json
import logging
import numbers
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from app_analytics.metrics_aggregator import compose_analytics
from app_analytics.validators import ValidationError, validate_app_row, validate_review_row

logger = logging.getLogger(__name__)

APP_REQUIRED_COLUMNS = {'category', 'installsNumber', 'reviews'}
REVIEW_REQUIRED_COLUMNS = {'sentiment'}

TRUE_STRINGS = {'true', '1', 'yes', 'y', 'paid'}


class AnalysisJobError(Exception):
    """Raised when analysis job fails."""
    pass


def run_analysis(
    apps_path: Path,
    output_path: Path,
    reviews_path: Optional[Path] = None,
    top_n: int = 10
) -> Dict[str, Any]:
    """
    Run the complete analysis and save results to JSON.

    Args:
        apps_path: Cleaned apps CSV
        output_path: Path to save the analytics JSON
        reviews_path: Cleaned reviews CSV (optional)
        top_n: Size of ranked lists in the output

    Returns:
        Dictionary with job results and summary
    """
    start_time = datetime.now()

    try:
        apps, apps_skipped = load_app_records(Path(apps_path))

        reviews: List[Dict[str, Any]] = []
        reviews_skipped = 0
        if reviews_path is not None:
            reviews, reviews_skipped = load_review_records(Path(reviews_path))

        if not apps:
            raise AnalysisJobError(f"No valid app records in {apps_path}")

        analytics = compose_analytics(apps, reviews, top_n=top_n)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            json.dump(analytics, f, indent=2, default=str)

        logger.info(f"Wrote analytics for {len(apps)} apps to {output_path}")

        return {
            'status': 'completed',
            'output_path': str(output_path),
            'apps_loaded': len(apps),
            'apps_skipped': apps_skipped,
            'reviews_loaded': len(reviews),
            'reviews_skipped': reviews_skipped,
            'total_categories': analytics['categories']['totalCategories'],
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }

    except Exception as e:
        logger.error(f"Analysis failed: {e}")
        return {
            'status': 'failed',
            'error_message': str(e),
            'output_path': None,
            'apps_loaded': 0,
            'reviews_loaded': 0,
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }


def load_app_records(csv_path: Path) -> Tuple[List[Dict[str, Any]], int]:
    """
    Load cleaned app rows from CSV.

    Args:
        csv_path: Path to CSV with category, installsNumber and reviews columns
            (rating, isPaid, isPopular, app, price and size are optional)

    Returns:
        Tuple of (valid app records, number of skipped rows)

    Raises:
        AnalysisJobError: If the file is missing or lacks required columns
    """
    rows = _read_rows(csv_path, APP_REQUIRED_COLUMNS)

    records = []
    skipped = 0
    for i, row in enumerate(rows):
        record = {
            'app': _as_text(row.get('app')),
            'category': _as_text(row.get('category')),
            'rating': _as_number(row.get('rating')),
            'installsNumber': _as_number(row.get('installsNumber')),
            'reviews': _as_number(row.get('reviews')),
            'isPaid': _as_bool(row.get('isPaid')),
            'isPopular': _as_bool(row.get('isPopular')),
            'price': _as_number(row.get('price')),
            'size': _as_number(row.get('size'))
        }

        try:
            validate_app_row(record)
        except ValidationError as e:
            logger.warning(f"Skipping app row {i}: {e}")
            skipped += 1
            continue

        records.append(record)

    logger.info(f"Loaded {len(records)} app records from {csv_path} ({skipped} skipped)")
    return records, skipped


def load_review_records(csv_path: Path) -> Tuple[List[Dict[str, Any]], int]:
    """
    Load cleaned review rows from CSV.

    Args:
        csv_path: Path to CSV with a sentiment column (app, sentimentPolarity and
            sentimentSubjectivity are optional)

    Returns:
        Tuple of (valid review records, number of skipped rows)

    Raises:
        AnalysisJobError: If the file is missing or lacks required columns
    """
    rows = _read_rows(csv_path, REVIEW_REQUIRED_COLUMNS)

    records = []
    skipped = 0
    for i, row in enumerate(rows):
        record = {
            'app': _as_text(row.get('app')),
            'sentiment': _as_text(row.get('sentiment')),
            'sentimentPolarity': _as_number(row.get('sentimentPolarity')),
            'sentimentSubjectivity': _as_number(row.get('sentimentSubjectivity'))
        }

        try:
            validate_review_row(record)
        except ValidationError as e:
            logger.warning(f"Skipping review row {i}: {e}")
            skipped += 1
            continue

        records.append(record)

    logger.info(f"Loaded {len(records)} review records from {csv_path} ({skipped} skipped)")
    return records, skipped


def _read_rows(csv_path: Path, required_columns: set) -> List[Dict[str, Any]]:
    """Read a CSV into row dictionaries with empty cells as None."""
    if not csv_path.exists():
        raise AnalysisJobError(f"File not found: {csv_path}")

    df = pd.read_csv(csv_path)

    missing = required_columns - set(df.columns)
    if missing:
        raise AnalysisJobError(f"{csv_path} is missing required columns: {sorted(missing)}")

    df = df.astype(object).where(df.notna(), None)
    return df.to_dict('records')


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_number(value: Any) -> Optional[float]:
    """Convert a CSV cell to int/float; None when empty or non-numeric."""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, numbers.Real):
        return None if np.isnan(value) else float(value)

    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_bool(value: Any) -> bool:
    """Convert a CSV cell to bool; empty cells are False."""
    if value is None:
        return False

    if isinstance(value, (bool, np.bool_)):
        return bool(value)

    if isinstance(value, numbers.Real):
        return bool(not np.isnan(value) and value != 0)

    return str(value).strip().lower() in TRUE_STRINGS
