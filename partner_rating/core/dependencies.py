"""
Dependencies - Partner Rating Platform
partner_rating/core/dependencies.py

FastAPI dependency injection for repositories, services and the caller.

Authentication itself is external: the fronting identity layer passes the
verified email in the X-User-Email header. Each request resolves it into an
explicit CurrentUser; there is no process-wide session.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, Request, status

from partner_rating.config import settings
from partner_rating.core.errors import raise_error
from partner_rating.core.permissions import (
    CAPABILITIES,
    Permission,
    has_permission,
    permissions_for,
)
from partner_rating.models.enumerations import UserRole, UserStatus
from partner_rating.repositories.criteria_repository import CriteriaRepository
from partner_rating.repositories.evaluation_repository import EvaluationRepository
from partner_rating.repositories.partner_repository import PartnerRepository
from partner_rating.repositories.user_repository import UserRepository
from partner_rating.services.evaluation_service import EvaluationService

logger = logging.getLogger(__name__)


@lru_cache()
def get_partner_repository() -> PartnerRepository:
    """Get cached PartnerRepository instance."""
    return PartnerRepository()


@lru_cache()
def get_evaluation_repository() -> EvaluationRepository:
    """Get cached EvaluationRepository instance."""
    return EvaluationRepository()


@lru_cache()
def get_user_repository() -> UserRepository:
    """Get cached UserRepository instance."""
    return UserRepository()


@lru_cache()
def get_criteria_repository() -> CriteriaRepository:
    """Get cached CriteriaRepository instance."""
    return CriteriaRepository()


def get_evaluation_service(
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    evaluation_repo: EvaluationRepository = Depends(get_evaluation_repository),
) -> EvaluationService:
    return EvaluationService(partner_repo, evaluation_repo)


@dataclass(frozen=True)
class CurrentUser:
    """Resolved caller identity passed explicitly to permission checks."""
    email: str
    role: UserRole
    status: UserStatus

    @property
    def permissions(self) -> Permission:
        return permissions_for(self.role)


def _caller_email(request: Request) -> Optional[str]:
    email = request.headers.get(settings.USER_EMAIL_HEADER)
    if not email or not email.strip():
        return None
    return email.strip().lower()


def get_current_user(
    request: Request,
    user_repo: UserRepository = Depends(get_user_repository),
) -> CurrentUser:
    """Resolve the caller and require an approved account."""
    email = _caller_email(request)
    if email is None:
        raise_error(status.HTTP_401_UNAUTHORIZED, "NOT_AUTHENTICATED", "Authentication required")

    user = user_repo.get_by_email(email)
    if user is None:
        raise_error(status.HTTP_403_FORBIDDEN, "USER_NOT_REGISTERED", "Sign up before using the service")

    if user["status"] != UserStatus.APPROVED:
        raise_error(
            status.HTTP_403_FORBIDDEN,
            "USER_NOT_APPROVED",
            f"Account status is '{UserStatus(user['status']).value}'",
        )

    return CurrentUser(email=user["email"], role=user["role"], status=user["status"])


def require_permission(capability: str) -> Callable[..., CurrentUser]:
    """
    Build a dependency that admits only callers holding `capability`.

    Example:
        @router.post("/partners")
        def create(user: CurrentUser = Depends(require_permission("can_create_partners"))): ...
    """
    if capability not in CAPABILITIES:
        raise ValueError(f"Unknown capability: {capability}")

    def _dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not has_permission(user.permissions, capability):
            logger.info("Permission %s denied for %s (%s)", capability, user.email, user.role.value)
            raise_error(
                status.HTTP_403_FORBIDDEN,
                "PERMISSION_DENIED",
                f"Permission '{capability}' required",
            )
        return user

    return _dependency
