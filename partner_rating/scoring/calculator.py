"""
Scoring Engine
partner_rating/scoring/calculator.py

Converts per-question answers (0-5 each) into a 0-100 score.

Formula:
    score = round_half_up( Σ answers / (item_count × MAX_PER_ITEM) × 100, 1 )

    item_count = 15 for domestic partners, 15 + 8 = 23 for overseas partners.

Common answers are truncated to the common catalog length; overseas answers
are used only for overseas partners and truncated to the overseas catalog
length. Missing or non-finite answers count as 0, so a partially answered
form still yields a (lower) preview score. This function never raises; the
strict gate for persisted evaluations lives in scoring/validation.py.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import structlog

from partner_rating.models.enumerations import PartnerScope, Rating
from partner_rating.scoring.questions import (
    COMMON_QUESTIONS,
    MAX_PER_ITEM,
    OVERSEAS_QUESTIONS,
    item_count,
)
from partner_rating.scoring.rating import classify
from partner_rating.scoring.utils import finite_or_zero, is_finite_number, round_half_up

logger = structlog.get_logger(__name__)


@dataclass
class ScorePreview:
    """Output of preview()."""
    total_score: float   # [0, 100], one decimal place
    rating: Rating
    answered: int        # finite answers among the included items
    item_count: int      # 15 (domestic) or 23 (overseas)


def _included_answers(
    scope: PartnerScope,
    answers_common: Sequence[Any],
    answers_overseas: Optional[Sequence[Any]],
) -> list:
    used = list(answers_common or [])[: len(COMMON_QUESTIONS)]
    if scope == PartnerScope.OVERSEAS:
        used += list(answers_overseas or [])[: len(OVERSEAS_QUESTIONS)]
    return used


def compute_score(
    scope: PartnerScope,
    answers_common: Sequence[Any],
    answers_overseas: Optional[Sequence[Any]] = None,
) -> float:
    """
    Calculate the 0-100 score for an answer set.

    Args:
        scope: Partner scope; overseas adds the overseas question set
        answers_common: Answers aligned with COMMON_QUESTIONS
        answers_overseas: Answers aligned with OVERSEAS_QUESTIONS, ignored
            for domestic partners

    Returns:
        Score in [0, 100] with at most one decimal digit

    Examples:
        >>> compute_score(PartnerScope.DOMESTIC, [5] * 15)
        100.0
        >>> compute_score(PartnerScope.OVERSEAS, [3] * 15, [3] * 8)
        60.0
    """
    used = _included_answers(scope, answers_common, answers_overseas)
    total = sum(finite_or_zero(v) for v in used)

    count = item_count(scope)
    max_total = count * MAX_PER_ITEM
    if max_total == 0:
        return 0.0

    return round_half_up(total / max_total * 100, 1)


def preview(
    scope: PartnerScope,
    answers_common: Sequence[Any],
    answers_overseas: Optional[Sequence[Any]] = None,
) -> ScorePreview:
    """Lenient live-preview score for a possibly incomplete form."""
    used = _included_answers(scope, answers_common, answers_overseas)
    answered = sum(1 for v in used if is_finite_number(v))
    score = compute_score(scope, answers_common, answers_overseas)

    result = ScorePreview(
        total_score=score,
        rating=classify(score),
        answered=answered,
        item_count=item_count(scope),
    )
    logger.debug(
        "score_preview",
        scope=PartnerScope(scope).value,
        total_score=result.total_score,
        rating=result.rating.value,
        answered=result.answered,
        item_count=result.item_count,
    )
    return result
