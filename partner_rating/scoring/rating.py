"""
Rating Classifier
partner_rating/scoring/rating.py

Maps a 0-100 score to one of four ordinal bands. Thresholds are checked
top-down and boundary values belong to the higher band:

    score >= 80  -> GOOD
    score >= 60  -> OK
    score >= 40  -> CAUTION
    otherwise    -> UNTRUSTWORTHY

No clamping: negative or >100 inputs classify through the same rule.
"""

from typing import Dict, Tuple

from partner_rating.models.enumerations import Rating

RATING_THRESHOLDS: Tuple[Tuple[float, Rating], ...] = (
    (80.0, Rating.GOOD),
    (60.0, Rating.OK),
    (40.0, Rating.CAUTION),
)

RATING_LABELS: Dict[Rating, str] = {
    Rating.GOOD: "Good partner",
    Rating.OK: "Fair partner",
    Rating.CAUTION: "Partner needing caution",
    Rating.UNTRUSTWORTHY: "Untrustworthy partner",
}

_RANKS: Dict[Rating, int] = {
    Rating.UNTRUSTWORTHY: 0,
    Rating.CAUTION: 1,
    Rating.OK: 2,
    Rating.GOOD: 3,
}


def classify(score: float) -> Rating:
    for threshold, rating in RATING_THRESHOLDS:
        if score >= threshold:
            return rating
    return Rating.UNTRUSTWORTHY


def rank(rating: Rating) -> int:
    """Ordinal position, UNTRUSTWORTHY (0) < CAUTION < OK < GOOD (3)."""
    return _RANKS[Rating(rating)]


def rating_label(rating) -> str:
    """Display label for a stored rating value; unknown values pass through."""
    if rating is None:
        return ""
    try:
        return RATING_LABELS[Rating(rating)]
    except ValueError:
        return str(rating)
