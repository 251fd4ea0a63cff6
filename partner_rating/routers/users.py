"""
User Router - Partner Rating Platform
partner_rating/routers/users.py

Signup, approval workflow and role management. Notifications to applicants
and administrators are written to the log only.
"""

import logging
from collections import Counter
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from partner_rating.config import settings
from partner_rating.core.dependencies import (
    CurrentUser,
    get_current_user,
    get_user_repository,
    require_permission,
)
from partner_rating.core.errors import raise_not_found
from partner_rating.core.permissions import is_admin, is_manager
from partner_rating.models.enumerations import UserStatus
from partner_rating.models.user import (
    ApproveRequest,
    CurrentUserResponse,
    RejectRequest,
    RoleUpdate,
    SignupRequest,
    UserListResponse,
    UserResponse,
)
from partner_rating.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Users"])


def _normalise(email: str) -> str:
    return email.strip().lower()


def _load_user(user_repo: UserRepository, email: str) -> dict:
    user = user_repo.get_by_email(_normalise(email))
    if user is None:
        raise_not_found("user")
    return user


@router.post(
    "/users/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request access",
    description="Creates a pending account. Signing up again returns the existing record unchanged.",
)
async def signup(
    request: SignupRequest,
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    existing = user_repo.get_by_email(request.email)
    if existing:
        return UserResponse(**existing)

    user = user_repo.create(request.email, display_name=request.display_name)
    logger.info("Signup pending approval: %s (notify administrators)", request.email)
    return UserResponse(**user)


@router.get(
    "/users/me",
    response_model=CurrentUserResponse,
    summary="Current user",
    description="The caller's role, status and resolved permissions.",
)
async def get_me(
    user: CurrentUser = Depends(get_current_user),
    user_repo: UserRepository = Depends(get_user_repository),
) -> CurrentUserResponse:
    user_repo.touch_last_login(user.email)
    return CurrentUserResponse(
        email=user.email,
        role=user.role,
        status=user.status,
        permissions=user.permissions.as_dict(),
    )


@router.get(
    "/users",
    response_model=UserListResponse,
    summary="List users",
    description="All users, optionally filtered by status. status_counts always covers every user.",
)
async def list_users(
    status_filter: Optional[UserStatus] = Query(None, alias="status"),
    admin: CurrentUser = Depends(require_permission("can_manage_users")),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    users = user_repo.list_users()
    counts = Counter(UserStatus(u["status"]).value for u in users)
    if status_filter is not None:
        users = [u for u in users if u["status"] == status_filter]
    return UserListResponse(
        items=[UserResponse(**u) for u in users],
        total=len(users),
        status_counts={s.value: counts.get(s.value, 0) for s in UserStatus},
    )


@router.get(
    "/users/pending",
    response_model=UserListResponse,
    summary="Pending signups",
)
async def list_pending_users(
    admin: CurrentUser = Depends(require_permission("can_manage_users")),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    users = user_repo.list_users(UserStatus.PENDING)
    return UserListResponse(
        items=[UserResponse(**u) for u in users],
        total=len(users),
        status_counts={UserStatus.PENDING.value: len(users)},
    )


@router.post(
    "/users/{email}/approve",
    response_model=UserResponse,
    summary="Approve a signup",
)
async def approve_user(
    email: str,
    request: ApproveRequest,
    admin: CurrentUser = Depends(require_permission("can_manage_users")),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    user = _load_user(user_repo, email)
    updated = user_repo.approve(user["email"], approved_by=admin.email, role=request.role)
    logger.info(
        "User %s approved as %s by %s (notify applicant)",
        user["email"], request.role.value, admin.email,
    )
    if is_manager(request.role):
        logger.warning("User %s granted elevated role %s by %s", user["email"], request.role.value, admin.email)
    return UserResponse(**updated)


@router.post(
    "/users/{email}/reject",
    response_model=UserResponse,
    summary="Reject a signup",
)
async def reject_user(
    email: str,
    request: RejectRequest,
    admin: CurrentUser = Depends(require_permission("can_manage_users")),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    user = _load_user(user_repo, email)
    updated = user_repo.reject(user["email"], request.reason.strip())
    logger.info("User %s rejected by %s (notify applicant)", user["email"], admin.email)
    return UserResponse(**updated)


@router.patch(
    "/users/{email}/role",
    response_model=UserResponse,
    summary="Change a user's role",
    description="Creates a pending record when the email is unknown.",
)
async def update_user_role(
    email: str,
    request: RoleUpdate,
    admin: CurrentUser = Depends(require_permission("can_manage_users")),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    previous = user_repo.get_by_email(_normalise(email))
    updated = user_repo.update_role(_normalise(email), request.role)
    logger.info("Role of %s set to %s by %s", updated["email"], request.role.value, admin.email)
    if previous is not None and is_admin(previous["role"]) and not is_admin(request.role):
        logger.warning("Administrator %s demoted to %s by %s", updated["email"], request.role.value, admin.email)
    return UserResponse(**updated)


@router.delete(
    "/users/{email}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    description="Marks the user deleted; with permanent=true the record is removed.",
)
async def delete_user(
    email: str,
    permanent: bool = Query(False),
    admin: CurrentUser = Depends(require_permission("can_manage_users")),
    user_repo: UserRepository = Depends(get_user_repository),
) -> Response:
    user = _load_user(user_repo, email)
    if permanent:
        user_repo.hard_delete(user["email"])
    else:
        user_repo.soft_delete(user["email"], deleted_by=admin.email)
    logger.info(
        "User %s %s by %s",
        user["email"], "permanently deleted" if permanent else "deleted", admin.email,
    )
    if is_admin(user["role"]):
        logger.warning("Administrator account %s removed by %s", user["email"], admin.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
