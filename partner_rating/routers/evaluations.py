"""
Evaluation Router - Partner Rating Platform
partner_rating/routers/evaluations.py

Save a new evaluation version and read evaluation history.
"""

import logging
from typing import Any, Mapping

from fastapi import APIRouter, Depends, status

from partner_rating.config import settings
from partner_rating.core.dependencies import (
    CurrentUser,
    get_evaluation_repository,
    get_evaluation_service,
    require_permission,
)
from partner_rating.core.errors import raise_not_found
from partner_rating.models.evaluation import (
    EvaluationCreate,
    EvaluationHistoryResponse,
    EvaluationResponse,
)
from partner_rating.repositories.evaluation_repository import EvaluationRepository
from partner_rating.services.cache import invalidate_partner_cache
from partner_rating.services.evaluation_service import EvaluationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Evaluations"])


def row_to_response(row: Mapping[str, Any]) -> EvaluationResponse:
    return EvaluationResponse(
        id=row["id"],
        partner_id=row["partner_id"],
        scope=row["scope"],
        version=row["version"],
        answers_common=row["answers_common"] or [],
        answers_overseas=row.get("answers_overseas"),
        total_score=row["total_score"],
        rating=row["rating"],
        note=row.get("note"),
        created_at=row["created_at"],
    )


@router.post(
    "/partners/{partner_id}/evaluations",
    response_model=EvaluationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Evaluate a partner",
    description=(
        "Every question must be answered with an integer from 0 to 5. "
        "Each save creates a new version; earlier versions are kept."
    ),
)
async def create_evaluation(
    partner_id: str,
    evaluation: EvaluationCreate,
    user: CurrentUser = Depends(require_permission("can_evaluate_partners")),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationResponse:
    row = evaluation_service.evaluate(
        partner_id,
        evaluation.answers_common,
        evaluation.answers_overseas,
        note=evaluation.note,
        evaluated_by=user.email,
    )
    invalidate_partner_cache(partner_id)
    return row_to_response(row)


@router.get(
    "/partners/{partner_id}/evaluations",
    response_model=EvaluationHistoryResponse,
    summary="Evaluation history",
    description="All evaluation versions of a partner, newest version first.",
)
async def list_partner_evaluations(
    partner_id: str,
    user: CurrentUser = Depends(require_permission("can_view_evaluations")),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationHistoryResponse:
    rows = evaluation_service.history(partner_id)
    return EvaluationHistoryResponse(
        partner_id=partner_id,
        items=[row_to_response(r) for r in rows],
        total=len(rows),
    )


@router.get(
    "/evaluations/{evaluation_id}",
    response_model=EvaluationResponse,
    summary="Get an evaluation",
)
async def get_evaluation(
    evaluation_id: str,
    user: CurrentUser = Depends(require_permission("can_view_evaluations")),
    evaluation_repo: EvaluationRepository = Depends(get_evaluation_repository),
) -> EvaluationResponse:
    row = evaluation_repo.get_by_id(evaluation_id)
    if row is None:
        raise_not_found("evaluation")
    return row_to_response(row)
