"""
Scholar Router - Google Scholar profile lookup
"""
import logging

from fastapi import APIRouter, Depends, Request, status

from ..config import get_settings
from ..exceptions import ProjectAdvisorError
from ..schemas.scholar import ScholarProfileRequest, ScholarProfileResponse
from ..services.rate_limit import RateLimit
from ..services.scholar_scraper import (
    ScholarScraper, fallback_profile, get_scholar_scraper, is_valid_scholar_url
)
from ..services.security import check_brute_force, reject, sanitize_input

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Scholar"],
    dependencies=[Depends(check_brute_force), Depends(RateLimit("scholar"))],
)


@router.post(
    "/fetch-scholar-profile",
    response_model=ScholarProfileResponse,
    response_model_exclude_none=True,
)
async def fetch_scholar_profile(
    payload: ScholarProfileRequest,
    request: Request,
    scraper: ScholarScraper = Depends(get_scholar_scraper),
):
    """
    Fetch a public Scholar profile.

    Scraping failures (blocking, network errors, unreadable pages) never
    surface as errors: the caller gets a placeholder profile plus a warning.
    """
    settings = get_settings()
    profile_url = sanitize_input(payload.profile_url)

    if not profile_url:
        raise reject(request, status.HTTP_400_BAD_REQUEST, "Profile URL is required", "Missing profile URL")

    if len(profile_url) > settings.max_profile_url_length:
        raise reject(request, status.HTTP_400_BAD_REQUEST, "Invalid URL format", "Invalid URL format")

    if not is_valid_scholar_url(profile_url):
        raise reject(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Invalid Google Scholar profile URL format. Please provide a valid Scholar profile URL.",
            "Invalid Scholar URL",
        )

    try:
        profile = await scraper.scrape_profile(profile_url)
    except ProjectAdvisorError as e:
        logger.warning(f"Scraping failed, using fallback data: {e}")
        return fallback_profile()

    return ScholarProfileResponse(**sanitize_input(profile.model_dump()))
