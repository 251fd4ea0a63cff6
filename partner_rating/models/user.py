from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List, Dict

from partner_rating.models.enumerations import UserRole, UserStatus


def _normalise_email(value: str) -> str:
    value = value.strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("must be a valid email address")
    return value


class SignupRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    display_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, value: str) -> str:
        return _normalise_email(value)


class ApproveRequest(BaseModel):
    role: UserRole = Field(default=UserRole.USER, description="Role granted on approval")


class RejectRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=1000)


class RoleUpdate(BaseModel):
    role: UserRole


class UserResponse(BaseModel):
    """
    Model returned in API responses.
    """

    email: str
    role: UserRole
    status: UserStatus
    display_name: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    deleted_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int
    status_counts: Dict[str, int]


class CurrentUserResponse(BaseModel):
    email: str
    role: UserRole
    status: UserStatus
    permissions: Dict[str, bool]
