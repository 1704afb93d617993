"""
Google Scholar profile scraper.
Fetches a public citations page with retry/backoff and extracts profile
fields from the HTML. Each field degrades to a default on its own; only an
unresolvable name rejects the whole page.
"""
import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup

from ..config import get_settings
from ..exceptions import (
    InvalidScholarUrlError,
    ProfileUnresolvableError,
    ScholarBlockedError,
    ScholarFetchError,
)
from ..schemas.resume import NAME_NOT_FOUND
from ..schemas.scholar import ScholarProfile, ScholarProfileResponse, ScholarPublication

logger = logging.getLogger(__name__)

MAX_PUBLICATIONS = 20
MIN_PAGE_LENGTH = 1000
BLOCK_MARKERS = ("Our systems have detected unusual traffic", "blocked")

SCHOLAR_URL_RE = re.compile(r"scholar\.google\.(com|co\.[a-z]{2}|[a-z]{2})/citations.*user=")
USER_ID_RE = re.compile(r"user=([^&]+)")
VERIFIED_EMAIL_RE = re.compile(r"verified email at (.+)", re.IGNORECASE)
LEADING_INT_RE = re.compile(r"^\s*(\d+)")

FALLBACK_WARNING = (
    "Unable to fetch live data from Google Scholar. This may be due to rate limiting "
    "or privacy settings. The profile URL appears valid."
)


# ============================================================================
# URL helpers
# ============================================================================

def is_valid_scholar_url(url: str) -> bool:
    return bool(SCHOLAR_URL_RE.search(url or ""))


def extract_user_id(url: str) -> Optional[str]:
    match = USER_ID_RE.search(url or "")
    return match.group(1) if match else None


def _parse_int(text: str) -> int:
    """Leading integer of a cell such as "1,234" or "57*"; 0 when absent."""
    match = LEADING_INT_RE.match((text or "").replace(",", ""))
    return int(match.group(1)) if match else 0


# ============================================================================
# Field extractors
# ============================================================================

def extract_name(soup: BeautifulSoup) -> str:
    try:
        element = soup.select_one("#gsc_prf_in")
        name = element.get_text().strip() if element else ""
    except Exception as e:
        logger.warning(f"Error extracting profile name: {e}")
        name = ""
    return name or NAME_NOT_FOUND


def extract_affiliation(soup: BeautifulSoup) -> str:
    try:
        element = soup.select_one(".gsc_prf_il")
        affiliation = element.get_text().strip() if element else ""
    except Exception as e:
        logger.warning(f"Error extracting affiliation: {e}")
        affiliation = ""
    return affiliation or "Affiliation not found"


def extract_email(soup: BeautifulSoup) -> Optional[str]:
    """Domain from the "Verified email at ..." line, when public."""
    try:
        info_lines = soup.select(".gsc_prf_il")
        if len(info_lines) < 2:
            return None
        match = VERIFIED_EMAIL_RE.search(info_lines[1].get_text().strip())
        return match.group(1).strip() if match else None
    except Exception as e:
        logger.warning(f"Error extracting email: {e}")
        return None


def extract_citation_stats(soup: BeautifulSoup) -> Dict[str, int]:
    stats = {"total_citations": 0, "h_index": 0, "i10_index": 0}
    try:
        for row in soup.select("#gsc_rsb_st tr"):
            cells = row.find_all("td")
            if len(cells) < 2:
                continue
            label = cells[0].get_text().lower()
            value = _parse_int(cells[1].get_text())
            if "citations" in label:
                stats["total_citations"] = value
            elif "h-index" in label:
                stats["h_index"] = value
            elif "i10-index" in label:
                stats["i10_index"] = value
    except Exception as e:
        logger.warning(f"Error extracting citation stats: {e}")
    logger.debug(f"Citation stats: {stats}")
    return stats


def extract_research_interests(soup: BeautifulSoup) -> List[str]:
    interests: List[str] = []
    try:
        for element in soup.select("#gsc_prf_int a.gs_ibl"):
            interest = element.get_text().strip()
            if interest:
                interests.append(interest)
    except Exception as e:
        logger.warning(f"Error extracting research interests: {e}")
    return interests


def _text_of(row, selector: str) -> str:
    element = row.select_one(selector)
    return element.get_text().strip() if element else ""


def extract_publications(soup: BeautifulSoup) -> List[ScholarPublication]:
    """First 20 publication rows, in listing order. Rows without a title are skipped."""
    publications: List[ScholarPublication] = []
    try:
        for row in soup.select(".gsc_a_tr")[:MAX_PUBLICATIONS]:
            title = _text_of(row, ".gsc_a_at")
            if not title:
                continue

            authors_journal = _text_of(row, ".gs_gray")
            authors, journal = "Authors not specified", "Journal not specified"
            if authors_journal:
                parts = authors_journal.split(" - ")
                if len(parts) >= 2:
                    authors = parts[0].strip()
                    journal = " - ".join(parts[1:]).strip()
                else:
                    authors = authors_journal

            publications.append(ScholarPublication(
                title=title,
                authors=authors,
                journal=journal,
                year=_text_of(row, ".gsc_a_y .gs_ibl") or "Year not specified",
                citations=_parse_int(_text_of(row, ".gsc_a_c .gs_ibl")),
            ))
    except Exception as e:
        logger.warning(f"Error extracting publications: {e}")
    logger.debug(f"Publications found: {len(publications)}")
    return publications


def parse_profile_html(html: str) -> ScholarProfile:
    """
    Build a ScholarProfile from a citations page.

    Raises:
        ProfileUnresolvableError: no profile name on the page
    """
    soup = BeautifulSoup(html, "lxml")

    name = extract_name(soup)
    if not name or name == NAME_NOT_FOUND:
        raise ProfileUnresolvableError(
            "Could not extract profile data. The profile might be private "
            "or the URL might be incorrect."
        )

    stats = extract_citation_stats(soup)
    profile = ScholarProfile(
        name=name,
        affiliation=extract_affiliation(soup),
        email=extract_email(soup),
        total_citations=stats["total_citations"],
        h_index=stats["h_index"],
        i10_index=stats["i10_index"],
        research_interests=extract_research_interests(soup),
        publications=extract_publications(soup),
    )
    logger.info(
        f"Extracted Scholar profile '{profile.name}': "
        f"{len(profile.publications)} publications, {profile.total_citations} citations"
    )
    return profile


def is_blocked_page(html: str) -> bool:
    return len(html) < MIN_PAGE_LENGTH or any(marker in html for marker in BLOCK_MARKERS)


def fallback_profile() -> ScholarProfileResponse:
    """Placeholder record returned to users when live data is unavailable."""
    return ScholarProfileResponse(
        name="Scholar Profile",
        affiliation="Institution not available",
        research_interests=["Research interests not available"],
        publications=[
            ScholarPublication(
                title="Publications data temporarily unavailable",
                authors="Please try again later or check if the profile is public",
                journal="Note: Some profiles may be private or restricted",
                year=str(datetime.now(timezone.utc).year),
                citations=0,
            )
        ],
        warning=FALLBACK_WARNING,
    )


# ============================================================================
# Fetching
# ============================================================================

class ScholarScraper:
    """
    Fetches and parses Google Scholar profiles.

    Attempts are sequential: a 429 waits ``rate_limit_delay`` before the next
    try, any other failure waits ``retry_delay``.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        max_attempts: Optional[int] = None,
        request_delay: Optional[float] = None,
        retry_delay: Optional[float] = None,
        rate_limit_delay: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        settings = get_settings()
        self.client = client
        self.base_url = (base_url or settings.scholar_base_url).rstrip("/")
        self.max_attempts = max_attempts or settings.scholar_max_attempts
        self.request_delay = (
            settings.scholar_request_delay_seconds if request_delay is None else request_delay
        )
        self.retry_delay = (
            settings.scholar_retry_delay_seconds if retry_delay is None else retry_delay
        )
        self.rate_limit_delay = (
            settings.scholar_rate_limit_delay_seconds
            if rate_limit_delay is None else rate_limit_delay
        )
        self.timeout = settings.scholar_timeout_seconds
        self.headers = {
            "User-Agent": settings.scholar_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }
        self._sleep = sleep

    async def _get_with_retries(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        last_message = ""
        last_exc: Optional[httpx.HTTPError] = None

        for attempt in range(1, self.max_attempts + 1):
            delay = self.retry_delay
            try:
                response = await client.get(url, headers=self.headers)
            except httpx.HTTPError as e:
                logger.warning(f"Scholar attempt {attempt}/{self.max_attempts} failed: {e}")
                last_message, last_exc = f"Failed to fetch profile: {e}", e
            else:
                if response.is_success:
                    return response
                logger.warning(
                    f"Scholar attempt {attempt}/{self.max_attempts} returned {response.status_code}"
                )
                last_message = (
                    f"Failed to fetch profile: {response.status_code} {response.reason_phrase}"
                )
                last_exc = None
                if response.status_code == 429:
                    delay = self.rate_limit_delay

            if attempt < self.max_attempts:
                await self._sleep(delay)

        raise ScholarFetchError(last_message) from last_exc

    async def fetch_html(self, url: str) -> str:
        if self.client is not None:
            response = await self._get_with_retries(self.client, url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await self._get_with_retries(client, url)
        return response.text

    async def scrape_profile(self, profile_url: str) -> ScholarProfile:
        """
        Fetch and parse one Scholar profile.

        Args:
            profile_url: Any Scholar URL carrying ``user=<id>``

        Returns:
            ScholarProfile with every optional field defaulted when missing

        Raises:
            InvalidScholarUrlError: no user id in the URL (nothing is fetched)
            ScholarFetchError: every attempt failed
            ScholarBlockedError: Scholar served a block/captcha page
            ProfileUnresolvableError: page has no resolvable profile name
        """
        user_id = extract_user_id(profile_url)
        if not user_id:
            raise InvalidScholarUrlError("Invalid Google Scholar profile URL format")

        url = f"{self.base_url}/citations?user={user_id}&hl=en"

        # Politeness pause before hitting Scholar
        if self.request_delay:
            await self._sleep(self.request_delay)

        html = await self.fetch_html(url)
        if is_blocked_page(html):
            logger.warning(f"Scholar blocked request for user {user_id}")
            raise ScholarBlockedError(
                "Google Scholar temporarily blocked this request. Please try again later."
            )

        return parse_profile_html(html)


async def fetch_scholar_profile(profile_url: str) -> ScholarProfile:
    """One-off scrape with a scraper configured from settings."""
    return await ScholarScraper().scrape_profile(profile_url)


def get_scholar_scraper() -> ScholarScraper:
    """FastAPI dependency returning a scraper configured from settings."""
    return ScholarScraper()
