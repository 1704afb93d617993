"""
Request hygiene: client identification, input sanitisation, filename checks
and brute-force tracking.
"""
import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fastapi import HTTPException, Request, status

from ..config import get_settings

logger = logging.getLogger(__name__)

MAX_STRING_LENGTH = 10000
MAX_LIST_ITEMS = 100
MAX_MAPPING_KEYS = 50
MAX_KEY_LENGTH = 100
MAX_FILENAME_LENGTH = 255

SCRIPT_TAG_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
JAVASCRIPT_URI_RE = re.compile(r"javascript:", re.IGNORECASE)
EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)
UNSAFE_KEY_CHARS_RE = re.compile(r"[^\w-]")
FILENAME_RE = re.compile(r"^[a-zA-Z0-9\-_.\s]+$")


def get_client_id(request: Request) -> str:
    """First forwarded hop, then proxy headers, else "anonymous"."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return (
        request.headers.get("x-real-ip")
        or request.headers.get("cf-connecting-ip")
        or "anonymous"
    )


def sanitize_input(value: Any) -> Any:
    """
    Recursively scrub user-controlled data.

    Strings lose script blocks, ``javascript:`` and inline ``on*=`` handlers,
    and are trimmed and truncated. Lists and mappings are size-capped; mapping
    keys are reduced to word characters and dashes (empty keys are dropped).
    """
    if isinstance(value, str):
        cleaned = SCRIPT_TAG_RE.sub("", value)
        cleaned = JAVASCRIPT_URI_RE.sub("", cleaned)
        cleaned = EVENT_HANDLER_RE.sub("", cleaned)
        return cleaned.strip()[:MAX_STRING_LENGTH]

    if isinstance(value, (list, tuple)):
        return [sanitize_input(item) for item in value[:MAX_LIST_ITEMS]]

    if isinstance(value, dict):
        sanitized: Dict[str, Any] = {}
        for key, item in value.items():
            if len(sanitized) >= MAX_MAPPING_KEYS:
                break
            clean_key = UNSAFE_KEY_CHARS_RE.sub("", str(key))[:MAX_KEY_LENGTH]
            if clean_key:
                sanitized[clean_key] = sanitize_input(item)
        return sanitized

    return value


def validate_filename(filename: Optional[str]) -> bool:
    if not filename or len(filename) > MAX_FILENAME_LENGTH:
        return False
    return bool(FILENAME_RE.match(filename))


# ============================================================================
# Brute force protection
# ============================================================================

@dataclass
class _FailureRecord:
    failed_attempts: int = 0
    last_failure: float = 0.0
    blocked_until: Optional[float] = None


class BruteForceGuard:
    """
    Counts validation failures per client.

    Reaching the threshold blocks the client for one window. Clients whose
    last failure is older than the window are forgotten.
    """

    def __init__(
        self,
        threshold: Optional[int] = None,
        window_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        settings = get_settings()
        self.threshold = threshold or settings.brute_force_threshold
        self.window_seconds = window_seconds or settings.brute_force_window_seconds
        self._clock = clock
        self._records: Dict[str, _FailureRecord] = {}
        self._lock = threading.Lock()

    def _expire(self, now: float) -> None:
        cutoff = now - self.window_seconds
        stale = [
            client_id
            for client_id, record in self._records.items()
            if record.last_failure < cutoff and not (record.blocked_until and record.blocked_until > now)
        ]
        for client_id in stale:
            del self._records[client_id]

    def record_failure(self, client_id: str, reason: str) -> None:
        with self._lock:
            now = self._clock()
            self._expire(now)
            record = self._records.setdefault(client_id, _FailureRecord())
            record.failed_attempts += 1
            record.last_failure = now
            if record.failed_attempts >= self.threshold:
                record.blocked_until = now + self.window_seconds
            attempts = record.failed_attempts

        logger.warning(f"Security event: {reason} from {client_id} (failed attempts: {attempts})")

    def is_blocked(self, client_id: str) -> bool:
        with self._lock:
            now = self._clock()
            record = self._records.get(client_id)
            if record is None:
                return False
            if record.blocked_until and record.blocked_until > now:
                return True
            if record.last_failure < now - self.window_seconds:
                del self._records[client_id]
            return False

    def reset(self) -> None:
        with self._lock:
            self._records.clear()


brute_force_guard = BruteForceGuard()


def get_brute_force_guard() -> BruteForceGuard:
    return brute_force_guard


def reject(request: Request, status_code: int, detail: str, reason: str) -> HTTPException:
    """Record a validation failure for the caller and build the HTTP error to raise."""
    get_brute_force_guard().record_failure(get_client_id(request), reason)
    return HTTPException(status_code=status_code, detail=detail)


def check_brute_force(request: Request) -> None:
    """Route dependency turning away clients blocked for repeated failures."""
    if get_brute_force_guard().is_blocked(get_client_id(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many failed attempts. Please try again later",
        )
