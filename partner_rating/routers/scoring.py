"""
Scoring Router - Partner Rating Platform
partner_rating/routers/scoring.py

Question catalog, live score preview and score classification. None of
these touch stored data, so no identity is required.
"""

from fastapi import APIRouter, Query

from partner_rating.config import settings
from partner_rating.models.criteria import QuestionCatalogResponse, QuestionResponse
from partner_rating.models.evaluation import (
    ClassifyResponse,
    ScorePreviewRequest,
    ScorePreviewResponse,
)
from partner_rating.scoring.calculator import preview
from partner_rating.scoring.questions import (
    CATEGORY_LABELS,
    COMMON_QUESTIONS,
    MAX_PER_ITEM,
    OVERSEAS_QUESTIONS,
)
from partner_rating.scoring.rating import classify, rating_label
from partner_rating.services.cache import CACHE_KEY_QUESTIONS, TTL_QUESTIONS, cache_get, cache_set

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Scoring"])


def _question_response(question) -> QuestionResponse:
    return QuestionResponse(
        id=question.id,
        text=question.text,
        category=question.category,
        category_label=CATEGORY_LABELS.get(question.category, question.category),
    )


@router.get(
    "/questions",
    response_model=QuestionCatalogResponse,
    summary="Question catalog",
    description="Common and overseas rubric questions in answer order. Cached for 24 hours.",
)
async def get_questions() -> QuestionCatalogResponse:
    cached = cache_get(CACHE_KEY_QUESTIONS, QuestionCatalogResponse)
    if cached:
        return cached

    response = QuestionCatalogResponse(
        max_per_item=MAX_PER_ITEM,
        common=[_question_response(q) for q in COMMON_QUESTIONS],
        overseas=[_question_response(q) for q in OVERSEAS_QUESTIONS],
    )
    cache_set(CACHE_KEY_QUESTIONS, response, TTL_QUESTIONS)
    return response


@router.post(
    "/scoring/preview",
    response_model=ScorePreviewResponse,
    summary="Preview a score",
    description="Score a possibly incomplete answer set. Unanswered items count as 0; nothing is saved.",
)
async def preview_score(request: ScorePreviewRequest) -> ScorePreviewResponse:
    result = preview(request.scope, request.answers_common, request.answers_overseas)
    return ScorePreviewResponse(
        total_score=result.total_score,
        rating=result.rating,
        rating_label=rating_label(result.rating),
        answered=result.answered,
        item_count=result.item_count,
        complete=result.answered == result.item_count,
    )


@router.get(
    "/scoring/classify",
    response_model=ClassifyResponse,
    summary="Classify a score",
)
async def classify_score(score: float = Query(..., description="Score to classify")) -> ClassifyResponse:
    rating = classify(score)
    return ClassifyResponse(score=score, rating=rating, rating_label=rating_label(rating))
