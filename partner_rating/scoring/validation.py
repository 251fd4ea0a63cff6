"""
Answer Validator
partner_rating/scoring/validation.py

Strict save-time gate. An evaluation is only persisted when every required
answer is present and is an integer in [MIN_PER_ITEM, MAX_PER_ITEM].
compute_score() is the lenient counterpart that tolerates gaps for the
live preview.
"""

from typing import Any, List, Optional, Sequence, Tuple

from partner_rating.core.exceptions import AnswerValidationError
from partner_rating.models.enumerations import PartnerScope
from partner_rating.scoring.questions import (
    COMMON_QUESTIONS,
    MAX_PER_ITEM,
    MIN_PER_ITEM,
    OVERSEAS_QUESTIONS,
    Question,
)


def _check_set(
    label: str,
    answers: Optional[Sequence[Any]],
    questions: Sequence[Question],
    errors: List[str],
) -> List[int]:
    answers = list(answers or [])
    if len(answers) != len(questions):
        errors.append(
            f"{label}: expected {len(questions)} answers, got {len(answers)}"
        )

    cleaned: List[int] = []
    for question, value in zip(questions, answers):
        if value is None:
            errors.append(f"{label}: question {question.id} is not answered")
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            # 3.0 is accepted as 3; 2.5 is not
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            else:
                errors.append(f"{label}: question {question.id} must be an integer, got {value!r}")
                continue
        if not MIN_PER_ITEM <= value <= MAX_PER_ITEM:
            errors.append(
                f"{label}: question {question.id} must be between "
                f"{MIN_PER_ITEM} and {MAX_PER_ITEM}, got {value}"
            )
            continue
        cleaned.append(value)
    return cleaned


def validate_answers(
    scope: PartnerScope,
    answers_common: Optional[Sequence[Any]],
    answers_overseas: Optional[Sequence[Any]] = None,
) -> Tuple[List[int], Optional[List[int]]]:
    """
    Validate a complete answer set before it is saved.

    Args:
        scope: Partner scope at evaluation time
        answers_common: Must hold exactly one answer per common question
        answers_overseas: Must hold exactly one answer per overseas question
            when scope is overseas; discarded for domestic partners

    Returns:
        (answers_common, answers_overseas or None), normalised to ints

    Raises:
        AnswerValidationError: listing every problem found
    """
    errors: List[str] = []
    common = _check_set("answers_common", answers_common, COMMON_QUESTIONS, errors)

    overseas: Optional[List[int]] = None
    if scope == PartnerScope.OVERSEAS:
        overseas = _check_set("answers_overseas", answers_overseas, OVERSEAS_QUESTIONS, errors)

    if errors:
        raise AnswerValidationError(errors)
    return common, overseas
