# tests/test_calculator.py

"""
Scoring Engine + Rating Classifier Tests
"""

import math

import pytest

from partner_rating.models.enumerations import PartnerScope, Rating
from partner_rating.scoring.calculator import compute_score, preview
from partner_rating.scoring.questions import (
    COMMON_QUESTIONS,
    OVERSEAS_QUESTIONS,
    item_count,
)
from partner_rating.scoring.rating import classify, rank, rating_label
from partner_rating.scoring.utils import round_half_up

DOMESTIC = PartnerScope.DOMESTIC
OVERSEAS = PartnerScope.OVERSEAS



# QUESTION CATALOG


class TestQuestionCatalog:

    def test_catalog_sizes(self):
        assert len(COMMON_QUESTIONS) == 15
        assert len(OVERSEAS_QUESTIONS) == 8

    def test_question_ids_unique(self):
        ids = [q.id for q in COMMON_QUESTIONS + OVERSEAS_QUESTIONS]
        assert len(ids) == len(set(ids))

    def test_item_count_by_scope(self):
        assert item_count(DOMESTIC) == 15
        assert item_count(OVERSEAS) == 23



# COMPUTE SCORE


class TestComputeScore:

    def test_domestic_all_fives_is_100(self):
        assert compute_score(DOMESTIC, [5] * 15) == 100.0

    def test_domestic_all_zeros_is_0(self):
        assert compute_score(DOMESTIC, [0] * 15) == 0.0

    def test_overseas_all_fives_is_100(self):
        assert compute_score(OVERSEAS, [5] * 15, [5] * 8) == 100.0

    def test_overseas_all_threes_is_60(self):
        assert compute_score(OVERSEAS, [3] * 15, [3] * 8) == 60.0

    def test_domestic_ignores_overseas_answers(self):
        common = [4, 3, 5, 2, 1, 0, 5, 5, 3, 4, 2, 1, 3, 4, 5]
        assert compute_score(DOMESTIC, common, [0] * 8) == compute_score(DOMESTIC, common, None)
        assert compute_score(DOMESTIC, common, [5] * 8) == compute_score(DOMESTIC, common)

    def test_overseas_without_overseas_answers_counts_them_as_zero(self):
        # 75 of 115 possible points
        assert compute_score(OVERSEAS, [5] * 15) == 65.2

    def test_extra_answers_are_truncated(self):
        assert compute_score(DOMESTIC, [5] * 20) == 100.0
        assert compute_score(OVERSEAS, [5] * 15, [5] * 12) == 100.0

    def test_missing_and_non_finite_answers_count_as_zero(self):
        answers = [5] * 12 + [None, float("nan"), float("inf")]
        assert compute_score(DOMESTIC, answers) == 80.0

    def test_short_answer_list(self):
        assert compute_score(DOMESTIC, [5] * 3) == 20.0

    def test_rounding_is_half_up_to_one_decimal(self):
        # 1 / 75 * 100 = 1.333...
        assert compute_score(DOMESTIC, [1] + [0] * 14) == 1.3
        # 2 / 75 * 100 = 2.666...
        assert compute_score(DOMESTIC, [2] + [0] * 14) == 2.7

    def test_deterministic(self):
        common = [3, 4, 2, 5, 1, 0, 3, 3, 4, 2, 5, 1, 2, 3, 4]
        assert compute_score(DOMESTIC, common) == compute_score(DOMESTIC, common)

    def test_accepts_plain_strings_for_scope(self):
        assert compute_score("overseas", [3] * 15, [3] * 8) == 60.0


class TestRoundHalfUp:

    @pytest.mark.parametrize(
        "value, expected",
        [(0.05, 0.1), (0.25, 0.3), (2.45, 2.5), (60.0, 60.0), (99.95, 100.0)],
    )
    def test_half_rounds_up(self, value, expected):
        assert round_half_up(value, 1) == expected



# PREVIEW


class TestPreview:

    def test_incomplete_form(self):
        result = preview(DOMESTIC, [5, 5, None, 4])
        assert result.answered == 3
        assert result.item_count == 15
        assert result.total_score == 18.7
        assert result.rating == Rating.UNTRUSTWORTHY

    def test_nan_not_counted_as_answered(self):
        result = preview(DOMESTIC, [float("nan")] * 15)
        assert result.answered == 0
        assert result.total_score == 0.0

    def test_complete_overseas_form(self):
        result = preview(OVERSEAS, [4] * 15, [4] * 8)
        assert result.answered == result.item_count == 23
        assert result.total_score == 80.0
        assert result.rating == Rating.GOOD

    def test_overseas_answers_ignored_for_domestic(self):
        result = preview(DOMESTIC, [1] * 15, [5] * 8)
        assert result.answered == 15
        assert result.item_count == 15



# RATING CLASSIFIER


class TestClassify:

    @pytest.mark.parametrize(
        "score, expected",
        [
            (100.0, Rating.GOOD),
            (80.0, Rating.GOOD),
            (79.9, Rating.OK),
            (60.0, Rating.OK),
            (59.9, Rating.CAUTION),
            (40.0, Rating.CAUTION),
            (39.9, Rating.UNTRUSTWORTHY),
            (0.0, Rating.UNTRUSTWORTHY),
        ],
    )
    def test_boundaries(self, score, expected):
        assert classify(score) == expected

    def test_no_clamping(self):
        assert classify(150.0) == Rating.GOOD
        assert classify(-5.0) == Rating.UNTRUSTWORTHY

    def test_nan_is_untrustworthy(self):
        assert classify(math.nan) == Rating.UNTRUSTWORTHY

    def test_rank_order(self):
        ordered = [Rating.UNTRUSTWORTHY, Rating.CAUTION, Rating.OK, Rating.GOOD]
        assert [rank(r) for r in ordered] == [0, 1, 2, 3]

    def test_end_to_end_overseas_threes_is_ok(self):
        assert classify(compute_score(OVERSEAS, [3] * 15, [3] * 8)) == Rating.OK


class TestRatingLabel:

    def test_known_labels(self):
        assert rating_label(Rating.GOOD) == "Good partner"
        assert rating_label("UNTRUSTWORTHY") == "Untrustworthy partner"

    def test_none_is_empty(self):
        assert rating_label(None) == ""

    def test_unknown_value_passes_through(self):
        assert rating_label("LEGACY") == "LEGACY"
