from .resume import ParsedResume, ExperienceEntry, EducationEntry, NAME_NOT_FOUND
from .scholar import (
    ScholarProfile, ScholarPublication,
    ScholarProfileRequest, ScholarProfileResponse
)
from .suggestion import (
    Difficulty, AcademicLevel, SkillProfile, ResearchFocus,
    ProjectSuggestion, SuggestionRequest, SuggestionResponse
)

__all__ = [
    "ParsedResume", "ExperienceEntry", "EducationEntry", "NAME_NOT_FOUND",
    "ScholarProfile", "ScholarPublication",
    "ScholarProfileRequest", "ScholarProfileResponse",
    "Difficulty", "AcademicLevel", "SkillProfile", "ResearchFocus",
    "ProjectSuggestion", "SuggestionRequest", "SuggestionResponse",
]
