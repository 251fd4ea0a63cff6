from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from partner_rating.models.enumerations import QuestionSet


class QuestionResponse(BaseModel):
    id: str
    text: str
    category: str
    category_label: str


class QuestionCatalogResponse(BaseModel):
    max_per_item: int
    common: List[QuestionResponse]
    overseas: List[QuestionResponse]


class CriterionBase(BaseModel):
    """
    Base Pydantic model for a stored evaluation criterion.
    """

    scope: QuestionSet = Field(..., description="common or overseas question set")
    category: str = Field(..., min_length=1, max_length=10, description="Category code, e.g. c1 or oA")
    question_id: str = Field(..., min_length=1, max_length=20)
    text: str = Field(..., min_length=1, max_length=500)
    order: int = Field(default=1, ge=1, le=100)
    active: bool = True


class CriterionCreate(CriterionBase):
    pass


class CriterionUpdate(BaseModel):
    scope: Optional[QuestionSet] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=10)
    question_id: Optional[str] = Field(default=None, min_length=1, max_length=20)
    text: Optional[str] = Field(default=None, min_length=1, max_length=500)
    order: Optional[int] = Field(default=None, ge=1, le=100)
    active: Optional[bool] = None


class CriterionResponse(CriterionBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SeedCriteriaResponse(BaseModel):
    added: int
    existing: int
