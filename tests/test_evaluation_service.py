# tests/test_evaluation_service.py

"""
Evaluation Service Tests - validation, scoring and version assignment
"""

import pytest

from partner_rating.core.exceptions import (
    AnswerValidationError,
    EntityArchivedException,
    EntityNotFoundException,
)
from partner_rating.models.enumerations import PartnerScope, Rating
from partner_rating.services import evaluation_service as evaluation_service_module
from partner_rating.services.evaluation_service import EvaluationService


class EventRecorder:
    """Stands in for the structlog logger to capture events."""

    def __init__(self):
        self.warnings = []
        self.infos = []

    def warning(self, event, **kw):
        self.warnings.append((event, kw))

    def info(self, event, **kw):
        self.infos.append((event, kw))


@pytest.fixture
def service(partner_repo, evaluation_repo):
    return EvaluationService(partner_repo, evaluation_repo)


@pytest.fixture
def overseas_partner(partner_repo):
    return partner_repo.create(PartnerScope.OVERSEAS, "Vietnam", "Nguyen", "Saigon Media")


@pytest.fixture
def domestic_partner(partner_repo):
    return partner_repo.create(PartnerScope.DOMESTIC, "Korea", "Kim", "Hanbit")


class TestEvaluate:

    def test_overseas_all_threes(self, service, overseas_partner):
        evaluation = service.evaluate(overseas_partner["id"], [3] * 15, [3] * 8)
        assert evaluation["total_score"] == 60.0
        assert evaluation["rating"] == Rating.OK
        assert evaluation["version"] == 1
        assert evaluation["scope"] == PartnerScope.OVERSEAS

    def test_versions_increment(self, service, domestic_partner):
        first = service.evaluate(domestic_partner["id"], [2] * 15)
        second = service.evaluate(domestic_partner["id"], [5] * 15, note="re-checked")
        assert first["version"] == 1
        assert second["version"] == 2
        assert second["note"] == "re-checked"

    def test_versions_are_per_partner(self, service, domestic_partner, overseas_partner):
        service.evaluate(domestic_partner["id"], [2] * 15)
        service.evaluate(domestic_partner["id"], [2] * 15)
        evaluation = service.evaluate(overseas_partner["id"], [2] * 15, [2] * 8)
        assert evaluation["version"] == 1

    def test_domestic_drops_overseas_answers(self, service, domestic_partner):
        evaluation = service.evaluate(domestic_partner["id"], [4] * 15, [0] * 8)
        assert evaluation["answers_overseas"] is None
        assert evaluation["total_score"] == 80.0

    def test_invalid_answers_write_nothing(self, service, overseas_partner, evaluation_repo):
        with pytest.raises(AnswerValidationError):
            service.evaluate(overseas_partner["id"], [3] * 15, [3] * 7)
        assert evaluation_repo.rows == []

    def test_unknown_partner(self, service):
        with pytest.raises(EntityNotFoundException):
            service.evaluate("missing", [3] * 15)

    def test_archived_partner(self, service, domestic_partner, partner_repo):
        partner_repo.set_archived(domestic_partner["id"], True)
        with pytest.raises(EntityArchivedException):
            service.evaluate(domestic_partner["id"], [3] * 15)

    def test_scope_frozen_at_evaluation_time(self, service, domestic_partner, partner_repo):
        first = service.evaluate(domestic_partner["id"], [3] * 15)
        partner_repo.update(domestic_partner["id"], scope=PartnerScope.OVERSEAS)
        second = service.evaluate(domestic_partner["id"], [3] * 15, [3] * 8)
        assert first["scope"] == PartnerScope.DOMESTIC
        assert second["scope"] == PartnerScope.OVERSEAS

    def test_duplicate_version_is_logged(self, service, domestic_partner, evaluation_repo, monkeypatch):
        recorder = EventRecorder()
        monkeypatch.setattr(evaluation_service_module, "logger", recorder)

        # a concurrent writer takes the same version between our read and insert
        original_create = evaluation_repo.create

        def racing_create(**kwargs):
            original_create(**kwargs)
            return original_create(**kwargs)

        monkeypatch.setattr(evaluation_repo, "create", racing_create)
        service.evaluate(domestic_partner["id"], [3] * 15)

        assert recorder.warnings[0][0] == "duplicate_evaluation_version"
        assert recorder.warnings[0][1]["version"] == 1
        assert recorder.warnings[0][1]["occurrences"] == 2

    def test_no_warning_without_race(self, service, domestic_partner, monkeypatch):
        recorder = EventRecorder()
        monkeypatch.setattr(evaluation_service_module, "logger", recorder)
        service.evaluate(domestic_partner["id"], [3] * 15)
        service.evaluate(domestic_partner["id"], [3] * 15)
        assert recorder.warnings == []
        assert [e for e, _ in recorder.infos] == ["evaluation_saved", "evaluation_saved"]


class TestReads:

    def test_history_newest_first(self, service, domestic_partner):
        for value in (1, 2, 3):
            service.evaluate(domestic_partner["id"], [value] * 15)
        history = service.history(domestic_partner["id"])
        assert [e["version"] for e in history] == [3, 2, 1]

    def test_history_unknown_partner(self, service):
        with pytest.raises(EntityNotFoundException):
            service.history("missing")

    def test_latest_for(self, service, domestic_partner):
        assert service.latest_for(domestic_partner["id"]) is None
        service.evaluate(domestic_partner["id"], [1] * 15)
        service.evaluate(domestic_partner["id"], [5] * 15)
        assert service.latest_for(domestic_partner["id"])["total_score"] == 100.0

    def test_latest_map_restricted(self, service, domestic_partner, overseas_partner):
        service.evaluate(domestic_partner["id"], [1] * 15)
        service.evaluate(overseas_partner["id"], [1] * 15, [1] * 8)
        result = service.latest_map([domestic_partner["id"]])
        assert list(result) == [domestic_partner["id"]]
        assert len(service.latest_map()) == 2
