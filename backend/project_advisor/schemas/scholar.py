"""
Google Scholar profile schemas
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ScholarPublication(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    authors: str = "Authors not specified"
    journal: str = "Journal not specified"
    year: str = "Year not specified"
    citations: int = Field(default=0, ge=0)


class ScholarProfile(BaseModel):
    """Structured facts scraped from one public Scholar profile"""
    model_config = ConfigDict(frozen=True)

    name: str
    affiliation: str = "Affiliation not found"
    email: Optional[str] = None
    total_citations: int = Field(default=0, ge=0)
    h_index: int = Field(default=0, ge=0)
    i10_index: int = Field(default=0, ge=0)
    research_interests: List[str] = Field(default_factory=list)
    publications: List[ScholarPublication] = Field(default_factory=list)


class ScholarProfileRequest(BaseModel):
    profile_url: Optional[str] = None


class ScholarProfileResponse(ScholarProfile):
    # Set when live data could not be fetched and placeholder data is returned
    warning: Optional[str] = None
