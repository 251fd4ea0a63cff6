# tests/test_validation.py

"""
Answer Validator Tests - strict gate applied before an evaluation is saved
"""

import pytest

from partner_rating.core.exceptions import AnswerValidationError
from partner_rating.models.enumerations import PartnerScope
from partner_rating.scoring.validation import validate_answers

DOMESTIC = PartnerScope.DOMESTIC
OVERSEAS = PartnerScope.OVERSEAS


class TestValidAnswers:

    def test_domestic_complete(self):
        common, overseas = validate_answers(DOMESTIC, [3] * 15)
        assert common == [3] * 15
        assert overseas is None

    def test_domestic_discards_overseas_answers(self):
        _, overseas = validate_answers(DOMESTIC, [3] * 15, [9] * 2)
        assert overseas is None

    def test_overseas_complete(self):
        common, overseas = validate_answers(OVERSEAS, [0] * 15, [5] * 8)
        assert common == [0] * 15
        assert overseas == [5] * 8

    def test_integral_floats_are_normalised(self):
        common, _ = validate_answers(DOMESTIC, [3.0] * 15)
        assert common == [3] * 15
        assert all(type(v) is int for v in common)


class TestInvalidAnswers:

    def test_too_few_common_answers(self):
        with pytest.raises(AnswerValidationError) as exc_info:
            validate_answers(DOMESTIC, [3] * 14)
        assert any("expected 15 answers, got 14" in e for e in exc_info.value.errors)

    def test_too_many_common_answers(self):
        with pytest.raises(AnswerValidationError):
            validate_answers(DOMESTIC, [3] * 16)

    def test_missing_answer(self):
        answers = [3] * 15
        answers[4] = None
        with pytest.raises(AnswerValidationError) as exc_info:
            validate_answers(DOMESTIC, answers)
        assert any("c2b" in e and "not answered" in e for e in exc_info.value.errors)

    @pytest.mark.parametrize("bad", [6, -1, 2.5, "3", True])
    def test_out_of_range_or_wrong_type(self, bad):
        answers = [3] * 15
        answers[0] = bad
        with pytest.raises(AnswerValidationError):
            validate_answers(DOMESTIC, answers)

    def test_overseas_requires_overseas_answers(self):
        with pytest.raises(AnswerValidationError) as exc_info:
            validate_answers(OVERSEAS, [3] * 15)
        assert any("answers_overseas" in e for e in exc_info.value.errors)

    def test_reports_every_problem(self):
        common = [3] * 15
        common[0] = None
        common[1] = 7
        with pytest.raises(AnswerValidationError) as exc_info:
            validate_answers(OVERSEAS, common, [3] * 7)
        assert len(exc_info.value.errors) == 3

    def test_none_answer_list(self):
        with pytest.raises(AnswerValidationError):
            validate_answers(DOMESTIC, None)
