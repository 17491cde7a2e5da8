"""
Validators for cleaned app and review rows.
Pure functions - no IO, network, or side effects.
"""

import math
from typing import Any, Dict


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_hole(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _check_optional_range(row: Dict[str, Any], field: str, low: float, high: float) -> None:
    """Validate an optional numeric field that must lie in [low, high]."""
    value = row.get(field)
    if _is_hole(value):
        return

    if not _is_number(value):
        raise ValidationError(f"{field} must be numeric, got {type(value)}")

    if not low <= value <= high:
        raise ValidationError(f"{field} must be between {low} and {high}, got {value}")


def validate_app_row(row: Dict[str, Any]) -> None:
    """
    Validate a cleaned app row.

    Args:
        row: Dictionary with category, rating, installsNumber, reviews, isPaid, isPopular

    Raises:
        ValidationError: If validation fails
    """
    required_keys = {'category', 'rating', 'installsNumber', 'reviews', 'isPaid', 'isPopular'}

    missing = required_keys - set(row.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {sorted(missing)}")

    if not isinstance(row['category'], str) or not row['category']:
        raise ValidationError(f"category must be non-empty string, got {row['category']!r}")

    for field in ['installsNumber', 'reviews']:
        value = row[field]
        if not _is_number(value):
            raise ValidationError(f"{field} must be numeric, got {type(value)}")

        if not math.isfinite(value):
            raise ValidationError(f"{field} must be finite, got {value}")

        if value < 0:
            raise ValidationError(f"{field} must be non-negative, got {value}")

    for field in ['isPaid', 'isPopular']:
        if not isinstance(row[field], bool):
            raise ValidationError(f"{field} must be boolean, got {type(row[field])}")

    _check_optional_range(row, 'rating', 0.0, 5.0)

    price = row.get('price')
    if not _is_hole(price):
        if not _is_number(price) or price < 0:
            raise ValidationError(f"price must be non-negative number, got {price!r}")

    size = row.get('size')
    if not _is_hole(size):
        if not _is_number(size) or size < 0:
            raise ValidationError(f"size must be non-negative number, got {size!r}")


def validate_review_row(row: Dict[str, Any]) -> None:
    """
    Validate a cleaned review row.

    Args:
        row: Dictionary with sentiment, sentimentPolarity, sentimentSubjectivity

    Raises:
        ValidationError: If validation fails
    """
    required_keys = {'sentiment', 'sentimentPolarity', 'sentimentSubjectivity'}

    missing = required_keys - set(row.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {sorted(missing)}")

    sentiment = row['sentiment']
    if not _is_hole(sentiment) and not isinstance(sentiment, str):
        raise ValidationError(f"sentiment must be string, got {type(sentiment)}")

    _check_optional_range(row, 'sentimentPolarity', -1.0, 1.0)
    _check_optional_range(row, 'sentimentSubjectivity', 0.0, 1.0)
