"""
Review Analysis API endpoints.

Stateless: every request runs the whole pipeline and nothing is stored.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.dependencies import get_orchestrator_dep
from src.api.rate_limit import limiter
from src.api.schemas import ErrorResponse
from src.config import settings
from src.modules.review_analysis import (
    AnalysisError,
    AnalysisRequest,
    AnalysisResult,
    Orchestrator,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={
        200: {"description": "Sentiment breakdown and ranked keywords"},
        400: {"model": ErrorResponse, "description": "No usable reviews"},
        500: {"model": ErrorResponse, "description": "Inference service not configured"},
        502: {"model": ErrorResponse, "description": "Inference failed or returned unusable output"},
        504: {"model": ErrorResponse, "description": "Inference timed out"},
    },
    summary="Analyze a batch of reviews",
    description="""
    Classifies every review as positive or negative and extracts aspect
    keywords, each linked to the 0-based indices of the reviews behind it.

    **Strategy by locale:**
    - `ko`: two calls, sentiment first, then keywords conditioned on it
    - anything else: one combined call with English instructions

    Keywords are grouped by sentiment (positive first) and ranked by
    descending count. Percentages missing from the model output are
    computed from the counts.
    """,
)
@limiter.limit(settings.rate_limit)
async def analyze_reviews(
    request: Request,
    payload: AnalysisRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator_dep),
):
    """
    Analyze a batch of reviews.

    Returns:
        AnalysisResult, or ErrorResponse with the status of the failure
    """
    review_count = len(payload.reviews) if isinstance(payload.reviews, list) else 0
    logger.info(f"Analysis request: {review_count} reviews, locale={payload.locale}")

    try:
        result = await orchestrator.analyze(payload.reviews, payload.locale)
    except AnalysisError as e:
        logger.error(f"Analysis failed ({e.kind.value}): {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    return result
