"""
Sample cleaning and aggregation helpers.
Shared by every calculation module so holes are stripped the same way everywhere.
"""

import math
import numbers
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Sequence


def is_missing(value: Any) -> bool:
    """
    Check whether a value is a hole in a numeric sample.

    Holes are None, booleans, non-numeric objects, NaN and infinities.

    Args:
        value: Candidate sample value

    Returns:
        True if the value must be excluded from numeric calculations
    """
    if value is None or isinstance(value, bool):
        return True

    if not isinstance(value, numbers.Real):
        return True

    return not math.isfinite(value)


def clean_numeric(values: Iterable[Any]) -> List[float]:
    """Return the numeric values of a sample in their original order."""
    if values is None:
        return []
    return [_as_python_number(v) for v in values if not is_missing(v)]


def _as_python_number(value: numbers.Real) -> float:
    """Unwrap numpy scalars so results stay JSON serializable."""
    if isinstance(value, numbers.Integral):
        return int(value)
    return float(value)


def clean_categorical(values: Iterable[Any]) -> List[Hashable]:
    """Return the labels of a categorical sample without None, NaN or empty strings."""
    if values is None:
        return []

    clean = []
    for value in values:
        if value is None or value == '':
            continue
        # pandas reads empty cells as float NaN
        if isinstance(value, float) and math.isnan(value):
            continue
        clean.append(value)
    return clean


def clean_ratings(values: Iterable[Any]) -> List[float]:
    """Return usable ratings; a rating of 0 means the app is unrated."""
    return [v for v in clean_numeric(values) if v > 0]


def total(values: Iterable[Any]) -> float:
    """Sum a sample, counting holes as zero."""
    return sum(0 if is_missing(v) else v for v in values)


def safe_mean(values: Sequence[Any]) -> float:
    """Arithmetic mean of a sample (holes count as zero), 0.0 when empty."""
    if not values:
        return 0.0
    return float(total(values) / len(values))


def group_by(records: Iterable[Mapping[str, Any]], key: str) -> Dict[Any, List[Mapping[str, Any]]]:
    """
    Group records by the value stored under key in a single pass.

    Args:
        records: Iterable of record dictionaries
        key: Field to group on (compared exactly, no normalization)

    Returns:
        Dictionary mapping key value to its records, in order of first appearance
    """
    groups: Dict[Any, List[Mapping[str, Any]]] = {}
    for record in records:
        groups.setdefault(record.get(key), []).append(record)
    return groups
