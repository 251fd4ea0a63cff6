"""
Admin Router - Partner Rating Platform
partner_rating/routers/admin.py

Evaluation criteria administration and data backup.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, Response

from partner_rating.config import settings
from partner_rating.core.dependencies import (
    CurrentUser,
    get_criteria_repository,
    get_evaluation_repository,
    get_partner_repository,
    require_permission,
)
from partner_rating.core.errors import raise_error, raise_not_found
from partner_rating.models.criteria import (
    CriterionCreate,
    CriterionResponse,
    CriterionUpdate,
    SeedCriteriaResponse,
)
from partner_rating.models.enumerations import BackupFormat, QuestionSet
from partner_rating.repositories.criteria_repository import CriteriaRepository
from partner_rating.repositories.evaluation_repository import EvaluationRepository
from partner_rating.repositories.partner_repository import PartnerRepository
from partner_rating.scoring.questions import questions_for
from partner_rating.services.export import backup_to_csv, build_backup

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/admin", tags=["Admin"])



#  Criteria


@router.get(
    "/criteria",
    response_model=list[CriterionResponse],
    summary="List evaluation criteria",
    description="Ordered by question set, category and display order.",
)
async def list_criteria(
    admin: CurrentUser = Depends(require_permission("can_view_admin")),
    criteria_repo: CriteriaRepository = Depends(get_criteria_repository),
) -> list[CriterionResponse]:
    return [CriterionResponse(**c) for c in criteria_repo.list_all()]


@router.post(
    "/criteria/seed",
    response_model=SeedCriteriaResponse,
    summary="Seed criteria from the built-in catalog",
    description=(
        "Refuses when criteria already exist unless force=true, "
        "in which case only questions not yet stored are added."
    ),
)
async def seed_criteria(
    force: bool = Query(False),
    admin: CurrentUser = Depends(require_permission("can_view_admin")),
    criteria_repo: CriteriaRepository = Depends(get_criteria_repository),
) -> SeedCriteriaResponse:
    if criteria_repo.count() > 0 and not force:
        raise_error(
            status.HTTP_409_CONFLICT,
            "CRITERIA_ALREADY_SEEDED",
            "Criteria already exist; pass force=true to add missing questions",
        )

    stored = {(c["scope"], c["question_id"]) for c in criteria_repo.list_all()}
    added = 0
    existing = 0
    for question_set in QuestionSet:
        order_in_category: dict = {}
        for question in questions_for(question_set):
            order = order_in_category.get(question.category, 0) + 1
            order_in_category[question.category] = order
            if (question_set, question.id) in stored:
                existing += 1
                continue
            criteria_repo.create(
                scope=question_set,
                category=question.category,
                question_id=question.id,
                text=question.text,
                order=order,
            )
            added += 1

    logger.info("Criteria seeded by %s: %d added, %d existing", admin.email, added, existing)
    return SeedCriteriaResponse(added=added, existing=existing)


@router.post(
    "/criteria",
    response_model=CriterionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a criterion",
)
async def create_criterion(
    criterion: CriterionCreate,
    admin: CurrentUser = Depends(require_permission("can_view_admin")),
    criteria_repo: CriteriaRepository = Depends(get_criteria_repository),
) -> CriterionResponse:
    row = criteria_repo.create(**criterion.model_dump())
    return CriterionResponse(**row)


@router.get(
    "/criteria/{criterion_id}",
    response_model=CriterionResponse,
    summary="Get a criterion",
)
async def get_criterion(
    criterion_id: str,
    admin: CurrentUser = Depends(require_permission("can_view_admin")),
    criteria_repo: CriteriaRepository = Depends(get_criteria_repository),
) -> CriterionResponse:
    row = criteria_repo.get_by_id(criterion_id)
    if row is None:
        raise_not_found("criterion")
    return CriterionResponse(**row)


@router.patch(
    "/criteria/{criterion_id}",
    response_model=CriterionResponse,
    summary="Update a criterion",
)
async def update_criterion(
    criterion_id: str,
    changes: CriterionUpdate,
    admin: CurrentUser = Depends(require_permission("can_view_admin")),
    criteria_repo: CriteriaRepository = Depends(get_criteria_repository),
) -> CriterionResponse:
    if criteria_repo.get_by_id(criterion_id) is None:
        raise_not_found("criterion")
    row = criteria_repo.update(criterion_id, **changes.model_dump(exclude_unset=True))
    return CriterionResponse(**row)


@router.delete(
    "/criteria/{criterion_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a criterion",
)
async def delete_criterion(
    criterion_id: str,
    admin: CurrentUser = Depends(require_permission("can_view_admin")),
    criteria_repo: CriteriaRepository = Depends(get_criteria_repository),
) -> Response:
    if not criteria_repo.delete(criterion_id):
        raise_not_found("criterion")
    return Response(status_code=status.HTTP_204_NO_CONTENT)



#  Backup


@router.get(
    "/backup",
    summary="Back up partners and evaluations",
    description="Every partner (archived included) and every evaluation, as JSON or sectioned CSV.",
)
async def backup(
    format: BackupFormat = Query(BackupFormat.JSON),
    admin: CurrentUser = Depends(require_permission("can_backup_data")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_repo: EvaluationRepository = Depends(get_evaluation_repository),
):
    partners = partner_repo.list_active() + partner_repo.list_archived()
    evaluations = evaluation_repo.list_all()
    payload = build_backup(partners, evaluations, exported_by=admin.email)
    logger.info(
        "Backup (%s) of %d partners and %d evaluations by %s",
        format.value, len(partners), len(evaluations), admin.email,
    )

    stamp = f"{datetime.now(timezone.utc):%Y%m%d}"
    if format == BackupFormat.CSV:
        return Response(
            content=backup_to_csv(payload),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="backup_{stamp}.csv"'},
        )
    return JSONResponse(
        content=payload,
        headers={"Content-Disposition": f'attachment; filename="backup_{stamp}.json"'},
    )
