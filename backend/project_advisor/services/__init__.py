from .document_reader import (
    decode_document,
    ensure_supported,
    SUPPORTED_MIME_TYPES
)
from .resume_parser import (
    parse_resume_document,
    extract_information,
    segment_lines
)
from .scholar_scraper import (
    ScholarScraper,
    get_scholar_scraper,
    is_valid_scholar_url,
    extract_user_id,
    fallback_profile,
    fetch_scholar_profile
)
from .profile_analyzer import (
    analyze_skills,
    analyze_research_focus,
    determine_academic_level
)
from .suggestion_engine import (
    generate_suggestions,
    calculate_match_score
)
from .security import (
    get_client_id,
    sanitize_input,
    validate_filename,
    BruteForceGuard,
    brute_force_guard,
    check_brute_force
)
from .rate_limit import (
    RateLimit,
    RateLimiter,
    KeyedCounter,
    InMemoryKeyedCounter,
    rate_limiter
)

__all__ = [
    # Documents
    "decode_document",
    "ensure_supported",
    "SUPPORTED_MIME_TYPES",
    # Resume parsing
    "parse_resume_document",
    "extract_information",
    "segment_lines",
    # Google Scholar
    "ScholarScraper",
    "get_scholar_scraper",
    "is_valid_scholar_url",
    "extract_user_id",
    "fallback_profile",
    "fetch_scholar_profile",
    # Suggestions
    "analyze_skills",
    "analyze_research_focus",
    "determine_academic_level",
    "generate_suggestions",
    "calculate_match_score",
    # Security
    "get_client_id",
    "sanitize_input",
    "validate_filename",
    "BruteForceGuard",
    "brute_force_guard",
    "check_brute_force",
    "RateLimit",
    "RateLimiter",
    "KeyedCounter",
    "InMemoryKeyedCounter",
    "rate_limiter",
]
