from .resume import router as resume_router
from .scholar import router as scholar_router
from .suggestions import router as suggestions_router

__all__ = ["resume_router", "scholar_router", "suggestions_router"]
