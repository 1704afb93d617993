"""
Domain errors raised by the parsing, scraping and suggestion services.
Routers translate these into HTTP responses.
"""


class ProjectAdvisorError(Exception):
    """Base class for all service-level errors."""


class UnsupportedFileTypeError(ProjectAdvisorError):
    """Uploaded document is neither PDF nor DOCX."""


class DocumentDecodeError(ProjectAdvisorError):
    """Document bytes could not be turned into text (corrupt file)."""


class InvalidScholarUrlError(ProjectAdvisorError):
    """Profile URL does not carry a ``user=`` identifier."""


class ScholarBlockedError(ProjectAdvisorError):
    """Google Scholar answered with a captcha/block page."""


class ScholarFetchError(ProjectAdvisorError):
    """Profile page could not be fetched after all retries."""


class ProfileUnresolvableError(ProjectAdvisorError):
    """Page was fetched but no profile name could be extracted."""
