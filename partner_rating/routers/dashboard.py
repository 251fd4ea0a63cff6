"""
Dashboard Router - Partner Rating Platform
partner_rating/routers/dashboard.py
"""

from fastapi import APIRouter, Depends

from partner_rating.config import settings
from partner_rating.core.dependencies import (
    CurrentUser,
    get_evaluation_repository,
    get_partner_repository,
    require_permission,
)
from partner_rating.models.partner import DashboardStats
from partner_rating.repositories.evaluation_repository import EvaluationRepository
from partner_rating.repositories.partner_repository import PartnerRepository
from partner_rating.services.partner_service import dashboard_stats

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Dashboard"])


@router.get(
    "/dashboard",
    response_model=DashboardStats,
    summary="Dashboard statistics",
    description="Partner counts by scope and evaluation state, rating distribution and recent registrations.",
)
async def get_dashboard(
    user: CurrentUser = Depends(require_permission("can_view_partners")),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_repo: EvaluationRepository = Depends(get_evaluation_repository),
) -> DashboardStats:
    stats = dashboard_stats(partner_repo.list_active(), evaluation_repo.list_all())
    return DashboardStats(**stats)
