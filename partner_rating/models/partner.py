from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List, Dict

from partner_rating.models.enumerations import PartnerScope, Rating


class PartnerBase(BaseModel):
    """
    Base Pydantic model for Partner.
    """

    scope: PartnerScope = Field(
        ...,
        description="domestic or overseas; overseas partners answer the extra question set"
    )

    country: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Country of the partner"
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Partner (contact) name"
    )

    org: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Organisation the partner belongs to"
    )

    email: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Optional contact email"
    )

    phone: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Optional contact phone"
    )

    @field_validator("country", "name", "org")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class PartnerCreate(PartnerBase):
    """
    Model for creating a new partner.
    """
    pass


class PartnerUpdate(BaseModel):
    """
    Model for updating an existing partner. Omitted fields are left unchanged.
    """

    scope: Optional[PartnerScope] = None
    country: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    org: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)

    @field_validator("country", "name", "org")
    @classmethod
    def strip_required(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class LatestEvaluationSummary(BaseModel):
    """Current (highest version) evaluation of a partner."""

    id: str
    version: int
    total_score: float
    rating: Rating
    note: Optional[str] = None
    created_at: datetime


class PartnerResponse(PartnerBase):
    """
    Model returned in API responses.
    """

    id: str
    archived: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    latest_evaluation: Optional[LatestEvaluationSummary] = None

    class Config:
        from_attributes = True


class PartnerListResponse(BaseModel):
    items: List[PartnerResponse]
    total: int


class DashboardStats(BaseModel):
    total_partners: int
    domestic_partners: int
    overseas_partners: int
    evaluated_partners: int
    unevaluated_partners: int
    recent_partners: int
    rating_counts: Dict[str, int]
