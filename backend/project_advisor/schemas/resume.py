"""
Resume schemas produced by the rule-based resume parser
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


NAME_NOT_FOUND = "Name not found"


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: str = "Position not specified"
    company: str = "Company not specified"
    duration: str = "Duration not specified"
    description: Optional[str] = None


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    degree: str = "Degree not specified"
    institution: str = "Institution not specified"
    year: str = "Year not specified"
    gpa: Optional[str] = None


class ParsedResume(BaseModel):
    """Structured facts extracted from one uploaded resume"""
    model_config = ConfigDict(frozen=True)

    name: str = NAME_NOT_FOUND
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
