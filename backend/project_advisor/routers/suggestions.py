"""
Suggestions Router - ranked project ideas from resume and/or Scholar data
"""
import logging

from fastapi import APIRouter, Depends, Request, status

from ..schemas.suggestion import SuggestionRequest, SuggestionResponse
from ..services.rate_limit import RateLimit
from ..services.security import check_brute_force, reject, sanitize_input
from ..services.suggestion_engine import generate_suggestions as rank_suggestions

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Suggestions"],
    dependencies=[Depends(check_brute_force), Depends(RateLimit("suggestions"))],
)


@router.post("/generate-suggestions", response_model=SuggestionResponse)
async def generate_suggestions(payload: SuggestionRequest, request: Request):
    if payload.resume_data is None and payload.scholar_data is None:
        raise reject(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Either resume data or scholar data is required",
            "Missing required data",
        )

    cleaned = SuggestionRequest(**sanitize_input(payload.model_dump(exclude_none=True)))
    suggestions = rank_suggestions(cleaned.resume_data, cleaned.scholar_data)
    return SuggestionResponse(suggestions=suggestions)
