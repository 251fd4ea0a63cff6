"""
Evaluation Service - Partner Rating Platform
partner_rating/services/evaluation_service.py

Orchestrates saving a new evaluation:
    partner lookup -> strict answer validation -> score + rating
    -> version assignment -> insert -> duplicate-version check

Versions are assigned read-then-write. Two concurrent saves for the same
partner can both read the same maximum; the duplicate is detected after the
insert and logged, not prevented.
"""

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Sequence

import structlog

from partner_rating.core.exceptions import EntityArchivedException, EntityNotFoundException
from partner_rating.models.enumerations import PartnerScope
from partner_rating.repositories.evaluation_repository import EvaluationRepository
from partner_rating.repositories.partner_repository import PartnerRepository
from partner_rating.scoring.calculator import compute_score
from partner_rating.scoring.rating import classify
from partner_rating.scoring.validation import validate_answers
from partner_rating.scoring.versioning import latest, latest_by_partner, next_version

logger = structlog.get_logger(__name__)


class EvaluationService:
    """Create and read versioned partner evaluations."""

    def __init__(self, partner_repo: PartnerRepository, evaluation_repo: EvaluationRepository):
        self.partner_repo = partner_repo
        self.evaluation_repo = evaluation_repo

    def _active_partner(self, partner_id: str) -> Dict[str, Any]:
        partner = self.partner_repo.get_by_id(partner_id)
        if partner is None:
            raise EntityNotFoundException("Partner", partner_id)
        if partner["archived"]:
            raise EntityArchivedException("Partner", partner_id)
        return partner

    def evaluate(
        self,
        partner_id: str,
        answers_common: Sequence[Any],
        answers_overseas: Optional[Sequence[Any]] = None,
        note: Optional[str] = None,
        evaluated_by: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Validate, score and persist a new evaluation version.

        The partner's current scope is frozen into the record.

        Raises:
            EntityNotFoundException: partner does not exist
            EntityArchivedException: partner is in the trash
            AnswerValidationError: answers incomplete or out of range
        """
        partner = self._active_partner(partner_id)
        scope = PartnerScope(partner["scope"])

        common, overseas = validate_answers(scope, answers_common, answers_overseas)
        total_score = compute_score(scope, common, overseas)
        rating = classify(total_score)

        version = next_version(self.evaluation_repo.list_versions(partner_id))
        evaluation = self.evaluation_repo.create(
            partner_id=partner_id,
            scope=scope,
            version=version,
            answers_common=common,
            answers_overseas=overseas,
            total_score=total_score,
            rating=rating,
            note=note,
        )

        self._check_duplicate_version(partner_id, version)

        logger.info(
            "evaluation_saved",
            partner_id=partner_id,
            evaluation_id=evaluation["id"],
            version=version,
            scope=scope.value,
            total_score=total_score,
            rating=rating.value,
            evaluated_by=evaluated_by,
        )
        return evaluation

    def _check_duplicate_version(self, partner_id: str, version: int) -> None:
        counts = Counter(self.evaluation_repo.list_versions(partner_id))
        if counts[version] > 1:
            logger.warning(
                "duplicate_evaluation_version",
                partner_id=partner_id,
                version=version,
                occurrences=counts[version],
            )

    def history(self, partner_id: str) -> List[Dict[str, Any]]:
        """All evaluations of a partner, newest version first."""
        if self.partner_repo.get_by_id(partner_id) is None:
            raise EntityNotFoundException("Partner", partner_id)
        return self.evaluation_repo.list_by_partner(partner_id)

    def latest_for(self, partner_id: str) -> Optional[Dict[str, Any]]:
        return latest(self.evaluation_repo.list_by_partner(partner_id))

    def latest_map(self, partner_ids: Optional[Iterable[str]] = None) -> Dict[str, Dict[str, Any]]:
        """Latest evaluation per partner, optionally restricted to `partner_ids`."""
        by_partner = latest_by_partner(self.evaluation_repo.list_all())
        if partner_ids is None:
            return by_partner
        wanted = set(partner_ids)
        return {pid: ev for pid, ev in by_partner.items() if pid in wanted}
