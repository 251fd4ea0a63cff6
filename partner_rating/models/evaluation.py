from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Optional, List

from partner_rating.models.enumerations import PartnerScope, Rating


class EvaluationCreate(BaseModel):
    """
    Answers submitted for a new evaluation.

    Items are nullable so that unanswered questions reach the answer
    validator, which reports every gap at once.
    """

    answers_common: List[Optional[int]] = Field(
        ...,
        description="One answer (0-5) per common question, in catalog order"
    )

    answers_overseas: Optional[List[Optional[int]]] = Field(
        default=None,
        description="One answer (0-5) per overseas question; required for overseas partners"
    )

    note: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Free-text memo"
    )


class EvaluationResponse(BaseModel):
    """
    Model returned in API responses.
    """

    id: str
    partner_id: str
    scope: PartnerScope = Field(..., description="Partner scope frozen at evaluation time")
    version: int = Field(..., ge=1)
    answers_common: List[int]
    answers_overseas: Optional[List[int]] = None
    total_score: float = Field(..., ge=0, le=100)
    rating: Rating
    note: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class EvaluationHistoryResponse(BaseModel):
    partner_id: str
    items: List[EvaluationResponse]
    total: int


PreviewAnswer = Annotated[float, Field(ge=0, le=5)]


class ScorePreviewRequest(BaseModel):
    """
    Live calculator input. Answers may be incomplete; gaps count as 0.
    """

    scope: PartnerScope
    answers_common: List[Optional[PreviewAnswer]] = Field(default_factory=list)
    answers_overseas: Optional[List[Optional[PreviewAnswer]]] = None


class ScorePreviewResponse(BaseModel):
    total_score: float
    rating: Rating
    rating_label: str
    answered: int
    item_count: int
    complete: bool


class ClassifyResponse(BaseModel):
    score: float
    rating: Rating
    rating_label: str
