"""
Partner Router - Partner Rating Platform
partner_rating/routers/partners.py

Partner CRUD, archive (trash) and restore, filtered listing and CSV export,
with Redis caching of partner lookups and listings.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from partner_rating.config import settings
from partner_rating.core.dependencies import (
    CurrentUser,
    get_evaluation_service,
    get_partner_repository,
    require_permission,
)
from partner_rating.core.errors import raise_not_found
from partner_rating.core.exceptions import EntityArchivedException
from partner_rating.models.enumerations import (
    PartnerFilter,
    PartnerScope,
    PartnerSearchField,
    Rating,
)
from partner_rating.models.partner import (
    LatestEvaluationSummary,
    PartnerCreate,
    PartnerListResponse,
    PartnerResponse,
    PartnerUpdate,
)
from partner_rating.repositories.partner_repository import PartnerRepository
from partner_rating.services.cache import (
    CACHE_KEY_PARTNERS_PREFIX,
    TTL_PARTNER,
    TTL_PARTNER_LIST,
    cache_get,
    cache_set,
    invalidate_partner_cache,
    partner_cache_key,
)
from partner_rating.services.evaluation_service import EvaluationService
from partner_rating.services.export import to_csv
from partner_rating.services.partner_service import filter_partners

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Partners"])



#  Helper Functions


def row_to_response(row: Mapping[str, Any], latest: Optional[Mapping[str, Any]] = None) -> PartnerResponse:
    summary = None
    if latest:
        summary = LatestEvaluationSummary(
            id=latest["id"],
            version=latest["version"],
            total_score=latest["total_score"],
            rating=latest["rating"],
            note=latest.get("note"),
            created_at=latest["created_at"],
        )
    return PartnerResponse(
        id=row["id"],
        scope=row["scope"],
        country=row["country"],
        name=row["name"],
        org=row["org"],
        email=row.get("email"),
        phone=row.get("phone"),
        archived=row.get("archived", False),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
        latest_evaluation=summary,
    )


def get_partners_list_cache_key(
    filter_by: Optional[PartnerFilter],
    scope: Optional[PartnerScope],
    rating: Optional[Rating],
    search: Optional[str],
    search_field: PartnerSearchField,
) -> str:
    parts = [
        f"filter:{filter_by.value if filter_by else ''}",
        f"scope:{scope.value if scope else ''}",
        f"rating:{rating.value if rating else ''}",
        f"field:{search_field.value}",
        f"q:{(search or '').strip().lower()}",
    ]
    return CACHE_KEY_PARTNERS_PREFIX + ":".join(parts)


def _load_partner(partner_repo: PartnerRepository, partner_id: str) -> dict:
    partner = partner_repo.get_by_id(partner_id)
    if partner is None:
        raise_not_found("partner")
    return partner



#  Routes


@router.get(
    "/partners",
    response_model=PartnerListResponse,
    summary="List partners",
    description=(
        "Active partners, newest first, each with its latest evaluation. "
        "Filter by evaluation state, scope, latest rating or a search term. Cached for 60 seconds."
    ),
)
async def list_partners(
    filter_by: Optional[PartnerFilter] = Query(None, alias="filter"),
    scope: Optional[PartnerScope] = Query(None),
    rating: Optional[Rating] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    search_field: PartnerSearchField = Query(PartnerSearchField.ALL),
    user: CurrentUser = Depends(require_permission("can_view_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> PartnerListResponse:
    cache_key = get_partners_list_cache_key(filter_by, scope, rating, search, search_field)
    cached = cache_get(cache_key, PartnerListResponse)
    if cached:
        return cached

    partners = partner_repo.list_active()
    latest_map = evaluation_service.latest_map(str(p["id"]) for p in partners)
    selected = filter_partners(
        partners,
        latest_map,
        filter_by=filter_by,
        scope=scope,
        rating=rating,
        search=search,
        search_field=search_field,
    )

    response = PartnerListResponse(
        items=[row_to_response(p, latest_map.get(str(p["id"]))) for p in selected],
        total=len(selected),
    )
    cache_set(cache_key, response, TTL_PARTNER_LIST)
    return response


@router.get(
    "/partners/trash",
    response_model=PartnerListResponse,
    summary="List archived partners",
    description="Partners moved to the trash, most recently archived first.",
)
async def list_archived_partners(
    user: CurrentUser = Depends(require_permission("can_delete_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
) -> PartnerListResponse:
    partners = partner_repo.list_archived()
    return PartnerListResponse(items=[row_to_response(p) for p in partners], total=len(partners))


@router.get(
    "/partners/export.csv",
    summary="Export partners as CSV",
    description="Active partners with their latest score, rating and memo.",
    response_class=Response,
)
async def export_partners_csv(
    user: CurrentUser = Depends(require_permission("can_export_data")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> Response:
    partners = partner_repo.list_active()
    latest_map = evaluation_service.latest_map(str(p["id"]) for p in partners)
    body = to_csv(partners, latest_map)

    filename = f"partners_{datetime.now(timezone.utc):%Y%m%d}.csv"
    logger.info("CSV export of %d partners by %s", len(partners), user.email)
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/partners",
    response_model=PartnerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a partner",
)
async def create_partner(
    partner: PartnerCreate,
    user: CurrentUser = Depends(require_permission("can_create_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
) -> PartnerResponse:
    row = partner_repo.create(
        scope=partner.scope,
        country=partner.country,
        name=partner.name,
        org=partner.org,
        email=partner.email,
        phone=partner.phone,
    )
    invalidate_partner_cache()
    logger.info("Partner %s created by %s", row["id"], user.email)
    return row_to_response(row)


@router.get(
    "/partners/{partner_id}",
    response_model=PartnerResponse,
    summary="Get a partner",
    description="Returns a partner (archived or not) with its latest evaluation. Cached for 5 minutes.",
)
async def get_partner(
    partner_id: str,
    user: CurrentUser = Depends(require_permission("can_view_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> PartnerResponse:
    cache_key = partner_cache_key(partner_id)
    cached = cache_get(cache_key, PartnerResponse)
    if cached:
        return cached

    partner = _load_partner(partner_repo, partner_id)
    response = row_to_response(partner, evaluation_service.latest_for(partner_id))
    cache_set(cache_key, response, TTL_PARTNER)
    return response


@router.patch(
    "/partners/{partner_id}",
    response_model=PartnerResponse,
    summary="Update a partner",
    description="Only supplied fields change. Archived partners must be restored first.",
)
async def update_partner(
    partner_id: str,
    changes: PartnerUpdate,
    user: CurrentUser = Depends(require_permission("can_edit_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> PartnerResponse:
    partner = _load_partner(partner_repo, partner_id)
    if partner["archived"]:
        raise EntityArchivedException("Partner", partner_id)

    row = partner_repo.update(partner_id, **changes.model_dump(exclude_unset=True))
    if row is None:
        raise_not_found("partner")

    invalidate_partner_cache(partner_id)
    return row_to_response(row, evaluation_service.latest_for(partner_id))


@router.post(
    "/partners/{partner_id}/archive",
    response_model=PartnerResponse,
    summary="Move a partner to the trash",
    description="Archived partners are hidden from listings and cannot be evaluated. Evaluations are kept.",
)
async def archive_partner(
    partner_id: str,
    user: CurrentUser = Depends(require_permission("can_delete_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
) -> PartnerResponse:
    _load_partner(partner_repo, partner_id)
    row = partner_repo.set_archived(partner_id, True)
    invalidate_partner_cache(partner_id)
    logger.info("Partner %s archived by %s", partner_id, user.email)
    return row_to_response(row)


@router.post(
    "/partners/{partner_id}/restore",
    response_model=PartnerResponse,
    summary="Restore a partner from the trash",
)
async def restore_partner(
    partner_id: str,
    user: CurrentUser = Depends(require_permission("can_delete_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> PartnerResponse:
    _load_partner(partner_repo, partner_id)
    row = partner_repo.set_archived(partner_id, False)
    invalidate_partner_cache(partner_id)
    logger.info("Partner %s restored by %s", partner_id, user.email)
    return row_to_response(row, evaluation_service.latest_for(partner_id))
