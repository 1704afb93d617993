"""
Skill and research-domain analysis feeding the suggestion engine.
"""
from typing import Sequence

from ..schemas.resume import EducationEntry
from ..schemas.scholar import ScholarPublication
from ..schemas.suggestion import AcademicLevel, ResearchFocus, SkillProfile

ML_KEYWORDS = ("machine learning", "tensorflow", "pytorch", "scikit-learn", "deep learning", "neural")
WEB_KEYWORDS = (
    "javascript", "react", "vue", "angular", "html", "css", "web", "frontend", "backend"
)
DATA_SCIENCE_KEYWORDS = (
    "python", "r", "pandas", "numpy", "data analysis", "statistics", "visualization"
)
MOBILE_KEYWORDS = ("react native", "flutter", "swift", "kotlin", "mobile")
CLOUD_KEYWORDS = ("aws", "azure", "gcp", "docker", "kubernetes")
DATABASE_KEYWORDS = ("sql", "mongodb", "postgresql", "database")
PROGRAMMING_LANGUAGES = (
    "JavaScript", "Python", "Java", "C++", "C#", "Go", "Rust", "TypeScript", "R"
)

ML_FOCUS_KEYWORDS = (
    "machine learning", "artificial intelligence", "deep learning", "neural network"
)
DATA_FOCUS_KEYWORDS = ("data", "analytics", "statistics")
HCI_FOCUS_KEYWORDS = ("human", "interface", "interaction")
SECURITY_FOCUS_KEYWORDS = ("security", "privacy", "cryptography")
BIO_FOCUS_KEYWORDS = ("bio", "medical", "health")


def _any_skill_matches(skills_lower: Sequence[str], keywords: Sequence[str]) -> bool:
    return any(kw in skill for skill in skills_lower for kw in keywords)


def analyze_skills(skills: Sequence[str]) -> SkillProfile:
    """Capability flags by case-insensitive substring match on each skill."""
    skills_lower = [s.lower() for s in skills]
    languages_lower = [lang.lower() for lang in PROGRAMMING_LANGUAGES]
    return SkillProfile(
        has_ml=_any_skill_matches(skills_lower, ML_KEYWORDS),
        has_web=_any_skill_matches(skills_lower, WEB_KEYWORDS),
        has_data_science=_any_skill_matches(skills_lower, DATA_SCIENCE_KEYWORDS),
        has_mobile=_any_skill_matches(skills_lower, MOBILE_KEYWORDS),
        has_cloud=_any_skill_matches(skills_lower, CLOUD_KEYWORDS),
        has_database=_any_skill_matches(skills_lower, DATABASE_KEYWORDS),
        programming_languages=[
            s for s in skills if any(lang in s.lower() for lang in languages_lower)
        ],
    )


def determine_academic_level(
    education: Sequence[EducationEntry],
    experience_count: int,
    publication_count: int,
    citations: int,
) -> AcademicLevel:
    degrees = [e.degree.lower() for e in education if e.degree]
    has_phd = any("phd" in d or "doctorate" in d for d in degrees)
    has_masters = any("master" in d for d in degrees)

    if has_phd or publication_count > 10 or citations > 100:
        return AcademicLevel.ADVANCED
    if has_masters or experience_count > 3 or publication_count > 3:
        return AcademicLevel.INTERMEDIATE
    return AcademicLevel.BEGINNER


def analyze_research_focus(
    interests: Sequence[str],
    publications: Sequence[ScholarPublication],
) -> ResearchFocus:
    """Domain flags from interests and publication titles taken together."""
    all_text = " ".join(
        [i.lower() for i in interests] + [(p.title or "").lower() for p in publications]
    )

    def mentions(keywords):
        return any(kw in all_text for kw in keywords)

    return ResearchFocus(
        is_ml_focused=mentions(ML_FOCUS_KEYWORDS),
        is_data_focused=mentions(DATA_FOCUS_KEYWORDS),
        is_hci_focused=mentions(HCI_FOCUS_KEYWORDS),
        is_security_focused=mentions(SECURITY_FOCUS_KEYWORDS),
        is_bio_focused=mentions(BIO_FOCUS_KEYWORDS),
        primary_domains=list(interests[:3]),
    )
