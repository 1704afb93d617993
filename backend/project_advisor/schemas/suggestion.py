"""
Schemas for the project suggestion engine: analyzer outputs, candidates
and the request/response bodies of the suggestions endpoint.
"""
import enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .resume import ParsedResume
from .scholar import ScholarProfile


class Difficulty(str, enum.Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


# Academic level tiers share the difficulty scale
AcademicLevel = Difficulty


class SkillProfile(BaseModel):
    """Capability flags derived from a flat skill list"""
    model_config = ConfigDict(frozen=True)

    has_ml: bool = False
    has_web: bool = False
    has_data_science: bool = False
    has_mobile: bool = False
    has_cloud: bool = False
    has_database: bool = False
    programming_languages: List[str] = Field(default_factory=list)


class ResearchFocus(BaseModel):
    """Domain flags derived from research interests and publication titles"""
    model_config = ConfigDict(frozen=True)

    is_ml_focused: bool = False
    is_data_focused: bool = False
    is_hci_focused: bool = False
    is_security_focused: bool = False
    is_bio_focused: bool = False
    primary_domains: List[str] = Field(default_factory=list)


class ProjectSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    skills_required: List[str]
    research_areas: List[str]
    difficulty: Difficulty
    estimated_duration: str
    category: str
    match_score: int = Field(default=0, ge=0, le=100)


class SuggestionRequest(BaseModel):
    resume_data: Optional[ParsedResume] = None
    scholar_data: Optional[ScholarProfile] = None


class SuggestionResponse(BaseModel):
    suggestions: List[ProjectSuggestion] = Field(default_factory=list)
