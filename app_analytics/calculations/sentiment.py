"""
Review sentiment breakdown.
Counts sentiment labels and summarizes polarity/subjectivity scores.
"""

import logging
from typing import Any, Dict, Iterable, Mapping

from app_analytics.calculations.sample import clean_numeric
from app_analytics.calculations.summary import empty_stats, summarize

logger = logging.getLogger(__name__)

SENTIMENT_LABELS = ('positive', 'neutral', 'negative')


def empty_sentiment(total_reviews: int = 0) -> Dict[str, Any]:
    """Return the sentiment result when no review carries a label."""
    return {
        'totalReviews': total_reviews,
        'labeledReviews': 0,
        'sentimentCounts': {label: 0 for label in SENTIMENT_LABELS},
        'sentimentPercentages': {label: 0.0 for label in SENTIMENT_LABELS},
        'avgPolarity': 0.0,
        'avgSubjectivity': 0.0,
        'polarityStats': empty_stats(),
        'subjectivityStats': empty_stats()
    }


def normalize_label(label: Any) -> str:
    """Lower-case a sentiment label; anything unrecognised maps to ''."""
    if not isinstance(label, str):
        return ''
    label = label.strip().lower()
    return label if label in SENTIMENT_LABELS else ''


def analyze_sentiment(reviews: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Break reviews down by sentiment label.

    Args:
        reviews: Review records with sentiment, sentimentPolarity and
            sentimentSubjectivity

    Returns:
        Dictionary with totalReviews, labeledReviews, sentimentCounts,
        sentimentPercentages (relative to labeled reviews), avgPolarity,
        avgSubjectivity and BasicStats for both scores
    """
    try:
        reviews = list(reviews or [])
        counts = {label: 0 for label in SENTIMENT_LABELS}

        for review in reviews:
            label = normalize_label(review.get('sentiment'))
            if label:
                counts[label] += 1

        labeled = sum(counts.values())
        if labeled == 0:
            return empty_sentiment(len(reviews))

        polarity_stats = summarize(clean_numeric(r.get('sentimentPolarity') for r in reviews))
        subjectivity_stats = summarize(clean_numeric(r.get('sentimentSubjectivity') for r in reviews))

        return {
            'totalReviews': len(reviews),
            'labeledReviews': labeled,
            'sentimentCounts': counts,
            'sentimentPercentages': {
                label: (count / labeled) * 100 for label, count in counts.items()
            },
            'avgPolarity': polarity_stats['mean'],
            'avgSubjectivity': subjectivity_stats['mean'],
            'polarityStats': polarity_stats,
            'subjectivityStats': subjectivity_stats
        }

    except Exception as e:
        logger.warning(f"Sentiment analysis failed: {e}")
        return empty_sentiment()
