from pydantic_settings import BaseSettings
from functools import lru_cache
import os

from dotenv import load_dotenv

load_dotenv()  # DEBUG is read from the environment at import time


class Settings(BaseSettings):
    app_name: str = "Research Project Advisor API"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = "INFO"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,https://localhost:3000"

    # Request limits
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB resumes
    max_request_bytes: int = 10 * 1024 * 1024
    max_profile_url_length: int = 500

    # Google Scholar fetching
    scholar_base_url: str = "https://scholar.google.com"
    scholar_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    scholar_timeout_seconds: float = 30.0
    scholar_max_attempts: int = 3
    scholar_request_delay_seconds: float = 1.0
    scholar_retry_delay_seconds: float = 2.0
    scholar_rate_limit_delay_seconds: float = 5.0

    # Rate limiting (requests per window, per client)
    rate_limit_parse: int = 10
    rate_limit_scholar: int = 3  # external site, keep it low
    rate_limit_suggestions: int = 20
    rate_limit_default: int = 50
    rate_limit_window_seconds: int = 60

    # Brute force protection
    brute_force_threshold: int = 5
    brute_force_window_seconds: int = 15 * 60

    class Config:
        env_file = ".env"
        extra = "ignore"
        # Make field names case-insensitive for environment variables
        case_sensitive = False

    def get_cors_origins(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def rate_limit_for(self, tier: str) -> int:
        """Requests allowed per window for a named tier."""
        return getattr(self, f"rate_limit_{tier}", self.rate_limit_default)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
