"""
Project Suggestion Engine.

Turns parsed resume and Scholar facts into a ranked list of project ideas:
analyze skills/research focus, run the category generators, score every
candidate, then keep the 12 best (stable on ties, so generator order wins).
"""
import logging
import math
from typing import List, Optional, Sequence

from ..schemas.resume import ParsedResume
from ..schemas.scholar import ScholarProfile
from ..schemas.suggestion import (
    AcademicLevel, Difficulty, ProjectSuggestion, ResearchFocus, SkillProfile
)
from .profile_analyzer import (
    analyze_research_focus, analyze_skills, determine_academic_level
)

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 12
BASE_SCORE = 40


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _mentions(values: Sequence[str], *needles: str) -> bool:
    return any(needle in v.lower() for v in values for needle in needles)


# ============================================================================
# Generators
# ============================================================================

def generate_ml_projects(
    level: AcademicLevel,
    focus: ResearchFocus,
    interests: Sequence[str],
) -> List[ProjectSuggestion]:
    projects: List[ProjectSuggestion] = []
    primary = focus.primary_domains[0] if focus.primary_domains else ""
    prefix = f"{primary} " if primary else ""

    if _mentions(interests, "language", "text", "nlp"):
        projects.append(ProjectSuggestion(
            title=f"{prefix}Natural Language Processing System",
            description=(
                f"Develop an advanced NLP system specifically for {primary or 'research'} domain "
                "that can process, analyze, and extract insights from textual data relevant to your field."
            ),
            skills_required=["Python", "NLP", "Transformers", "BERT", "spaCy"],
            research_areas=["Natural Language Processing", primary or "Text Analysis"],
            difficulty=level,
            estimated_duration="3-4 months" if level == AcademicLevel.ADVANCED else "2-3 months",
            category="AI/ML - NLP",
        ))

    if _mentions(interests, "vision", "image"):
        projects.append(ProjectSuggestion(
            title=f"{prefix}Computer Vision Application",
            description=(
                f"Build a computer vision system tailored for {primary or 'your research domain'} "
                "that can analyze, classify, and extract patterns from visual data."
            ),
            skills_required=["Python", "Computer Vision", "OpenCV", "CNN", "PyTorch"],
            research_areas=["Computer Vision", primary or "Image Analysis"],
            difficulty=level,
            estimated_duration="2-4 months",
            category="AI/ML - Computer Vision",
        ))

    if focus.is_bio_focused:
        projects.append(ProjectSuggestion(
            title="AI-Powered Biomedical Research Assistant",
            description=(
                "Create an intelligent system that assists in biomedical research by analyzing "
                "medical literature, predicting drug interactions, and identifying potential "
                "research directions."
            ),
            skills_required=["Python", "Bioinformatics", "Machine Learning", "Medical Data", "Research"],
            research_areas=["Bioinformatics", "Medical AI", "Healthcare Technology"],
            difficulty=Difficulty.ADVANCED,
            estimated_duration="4-6 months",
            category="AI/ML - Biomedical",
        ))

    if focus.is_security_focused:
        projects.append(ProjectSuggestion(
            title="ML-Based Cybersecurity Threat Detection",
            description=(
                "Develop machine learning models for real-time cybersecurity threat detection and "
                "response, incorporating privacy-preserving techniques."
            ),
            skills_required=["Python", "Cybersecurity", "Machine Learning", "Anomaly Detection", "Privacy"],
            research_areas=["Cybersecurity", "Machine Learning", "Privacy"],
            difficulty=level,
            estimated_duration="3-5 months",
            category="AI/ML - Security",
        ))

    if not projects:
        projects.append(ProjectSuggestion(
            title="Personalized Research Recommendation Engine",
            description=(
                "Build an AI system that analyzes academic papers, researcher profiles, and citation "
                "networks to recommend relevant research directions and collaborations."
            ),
            skills_required=["Python", "Machine Learning", "Graph Neural Networks", "Recommendation Systems"],
            research_areas=["Machine Learning", "Information Retrieval", "Academic Analytics"],
            difficulty=level,
            estimated_duration="3-4 months",
            category="AI/ML",
        ))

    return projects


def generate_web_projects(
    level: AcademicLevel,
    focus: ResearchFocus,
    interests: Sequence[str],
) -> List[ProjectSuggestion]:
    domain = focus.primary_domains[0] if focus.primary_domains else "research"
    projects = [ProjectSuggestion(
        title=f"{_capitalize(domain)} Collaboration Platform",
        description=(
            f"Create a specialized web platform for {domain} researchers that facilitates "
            "collaboration, project management, and knowledge sharing within your specific field."
        ),
        skills_required=["React", "Next.js", "Node.js", "Database Design", "API Development"],
        research_areas=["Human-Computer Interaction", "Social Computing", domain],
        difficulty=level,
        estimated_duration="2-4 months",
        category=f"Web Development - {domain}",
    )]

    if focus.is_data_focused or _mentions(interests, "data"):
        projects.append(ProjectSuggestion(
            title=f"Interactive {domain} Data Dashboard",
            description=(
                f"Build a dynamic web application that visualizes {domain} research data, trends, "
                "and patterns with real-time updates and interactive features."
            ),
            skills_required=["JavaScript", "D3.js", "React", "Data Visualization", "APIs"],
            research_areas=["Information Visualization", "Data Science", domain],
            difficulty=Difficulty.INTERMEDIATE,
            estimated_duration="2-3 months",
            category="Data Visualization",
        ))

    if level == AcademicLevel.ADVANCED:
        projects.append(ProjectSuggestion(
            title=f"{domain} Educational Platform",
            description=(
                f"Develop an e-learning platform specifically designed for {domain} education with "
                "adaptive learning paths, assessment tools, and progress tracking."
            ),
            skills_required=[
                "React", "Learning Management", "Database", "User Authentication", "Progressive Web Apps"
            ],
            research_areas=["Educational Technology", "Human-Computer Interaction", domain],
            difficulty=Difficulty.ADVANCED,
            estimated_duration="3-5 months",
            category="EdTech",
        ))

    return projects


def generate_data_science_projects(
    level: AcademicLevel,
    focus: ResearchFocus,
    interests: Sequence[str],
) -> List[ProjectSuggestion]:
    domain = focus.primary_domains[0] if focus.primary_domains else "research"
    projects = [ProjectSuggestion(
        title=f"{_capitalize(domain)} Data Analysis Pipeline",
        description=(
            f"Develop an automated pipeline specifically for processing and analyzing {domain} data, "
            "including domain-specific preprocessing, feature extraction, and statistical insights."
        ),
        skills_required=["Python", "Pandas", "Scikit-learn", "Data Analysis", "Statistics"],
        research_areas=["Data Science", "Statistical Analysis", domain],
        difficulty=level,
        estimated_duration="2-3 months",
        category=f"Data Science - {domain}",
    )]

    if focus.is_bio_focused:
        projects.append(ProjectSuggestion(
            title="Genomic Data Mining and Biomarker Discovery",
            description=(
                "Apply advanced data mining techniques to genomic and clinical datasets to discover "
                "potential biomarkers and predict treatment outcomes."
            ),
            skills_required=["Python", "R", "Bioinformatics", "Genomics", "Machine Learning", "Statistics"],
            research_areas=["Bioinformatics", "Genomics", "Precision Medicine"],
            difficulty=Difficulty.ADVANCED,
            estimated_duration="4-6 months",
            category="Biomedical Data Science",
        ))
    elif focus.is_security_focused:
        projects.append(ProjectSuggestion(
            title="Cybersecurity Analytics and Threat Intelligence",
            description=(
                "Develop data science solutions for analyzing security logs, network traffic, and "
                "threat intelligence to identify patterns and predict cyber attacks."
            ),
            skills_required=[
                "Python", "Security Analytics", "Network Analysis", "Machine Learning", "Threat Intelligence"
            ],
            research_areas=["Cybersecurity", "Data Science", "Network Security"],
            difficulty=Difficulty.ADVANCED,
            estimated_duration="3-5 months",
            category="Security Data Science",
        ))
    elif _mentions(interests, "social", "behavior"):
        projects.append(ProjectSuggestion(
            title="Social Media and Behavioral Data Analytics",
            description=(
                "Analyze social media data and user behavior patterns to understand trends, sentiment, "
                "and social dynamics in your research domain."
            ),
            skills_required=[
                "Python", "Social Network Analysis", "NLP", "Sentiment Analysis", "Data Visualization"
            ],
            research_areas=["Social Computing", "Behavioral Analytics", "Digital Humanities"],
            difficulty=Difficulty.INTERMEDIATE,
            estimated_duration="2-4 months",
            category="Social Data Science",
        ))

    return projects


def generate_research_projects(
    scholar: ScholarProfile,
    level: AcademicLevel,
    interests: Sequence[str],
) -> List[ProjectSuggestion]:
    projects: List[ProjectSuggestion] = []
    primary = interests[0] if interests else ""
    publications = scholar.publications

    if publications:
        projects.append(ProjectSuggestion(
            title=f"Advanced {primary or 'Research'} Analytics Platform",
            description=(
                f"Building on your publication history in {primary or 'your field'}, develop a "
                "comprehensive analytics platform that tracks research impact, collaboration networks, "
                "and emerging trends in your domain."
            ),
            skills_required=[
                "Data Analysis", "Machine Learning", "Network Analysis", "API Integration", "Research Methods"
            ],
            research_areas=["Bibliometrics", "Research Analytics", primary or "Information Science"],
            difficulty=level,
            estimated_duration="3-4 months",
            category=f"Research Analytics - {primary or 'General'}",
        ))

    if scholar.total_citations > 50 and len(publications) > 5:
        projects.append(ProjectSuggestion(
            title="AI-Powered Literature Review and Gap Analysis Tool",
            description=(
                "Leveraging your research expertise and publication record, create an advanced tool "
                f"that automatically surveys literature in {primary or 'your field'}, identifies "
                "research gaps, and suggests novel research directions."
            ),
            skills_required=[
                "NLP", "Machine Learning", "Information Retrieval", "Text Analysis", "Academic APIs"
            ],
            research_areas=[
                "Natural Language Processing", "Information Retrieval", primary or "Research Methods"
            ],
            difficulty=Difficulty.ADVANCED,
            estimated_duration="4-5 months",
            category="Research Tools",
        ))

    if scholar.h_index > 5:
        projects.append(ProjectSuggestion(
            title="Research Collaboration Recommendation Engine",
            description=(
                "Using your established research profile and network, build an intelligent system "
                "that recommends potential collaborators, funding opportunities, and research "
                f"partnerships in {primary or 'your field'}."
            ),
            skills_required=[
                "Graph Analytics", "Machine Learning", "Network Science", "Academic APIs",
                "Recommendation Systems",
            ],
            research_areas=[
                "Social Network Analysis", "Research Collaboration", primary or "Academic Networks"
            ],
            difficulty=Difficulty.ADVANCED,
            estimated_duration="3-5 months",
            category="Academic Networking",
        ))

    return projects


def generate_interdisciplinary_projects(
    level: AcademicLevel,
    focus: ResearchFocus,
    interests: Sequence[str],
) -> List[ProjectSuggestion]:
    projects: List[ProjectSuggestion] = []
    primary = focus.primary_domains
    secondary = list(interests[1:3])

    if primary and secondary:
        first, second = primary[0], secondary[0]
        projects.append(ProjectSuggestion(
            title=f"{first} and {second} Integration Platform",
            description=(
                f"Build a comprehensive system that bridges {first} and {second}, enabling "
                "cross-disciplinary research, collaboration, and knowledge discovery."
            ),
            skills_required=[
                "Knowledge Representation", "Data Integration", "API Development", "Cross-domain Analysis"
            ],
            research_areas=[first, second, "Interdisciplinary Studies"],
            difficulty=level,
            estimated_duration="3-5 months",
            category=f"Interdisciplinary - {first}/{second}",
        ))

    if focus.is_hci_focused or _mentions(interests, "interface", "user"):
        domain = primary[0] if primary else "research"
        projects.append(ProjectSuggestion(
            title=f"Adaptive {domain} Interface Design",
            description=(
                f"Design and develop adaptive user interfaces specifically for {domain} tools that "
                "automatically adjust based on user expertise, research context, and domain-specific "
                "workflows."
            ),
            skills_required=[
                "UX/UI Design", "JavaScript", "User Research", "Adaptive Systems", "Domain Knowledge"
            ],
            research_areas=["Human-Computer Interaction", "Adaptive Systems", domain],
            difficulty=Difficulty.INTERMEDIATE,
            estimated_duration="2-3 months",
            category=f"HCI - {domain}",
        ))

    if not projects:
        projects.append(ProjectSuggestion(
            title="Multi-Domain Knowledge Discovery System",
            description=(
                "Create a system that discovers connections and patterns across multiple research "
                "domains, facilitating interdisciplinary insights and collaboration opportunities."
            ),
            skills_required=[
                "Graph Databases", "Machine Learning", "Data Mining", "Semantic Web", "API Integration"
            ],
            research_areas=["Knowledge Management", "Information Systems", "Interdisciplinary Studies"],
            difficulty=level,
            estimated_duration="3-5 months",
            category="Knowledge Systems",
        ))

    return projects


def generate_open_source_projects(
    skill_profile: SkillProfile,
    level: AcademicLevel,
    interests: Sequence[str],
) -> List[ProjectSuggestion]:
    domain = interests[0] if interests else "research"
    projects = [ProjectSuggestion(
        title=f"Open Source {_capitalize(domain)} Toolkit",
        description=(
            f"Contribute to or create open-source tools specifically designed for {domain} researchers, "
            "including data collection, analysis, and visualization utilities tailored to your field."
        ),
        skills_required=[
            "Programming", "Software Engineering", "Documentation", "Testing", "Git",
            "Open Source Development",
        ],
        research_areas=["Software Engineering", "Research Methods", domain],
        difficulty=Difficulty.BEGINNER if level == AcademicLevel.BEGINNER else Difficulty.INTERMEDIATE,
        estimated_duration="1-3 months",
        category=f"Open Source - {domain}",
    )]

    if len(skill_profile.programming_languages) > 2 and level != AcademicLevel.BEGINNER:
        projects.append(ProjectSuggestion(
            title=f"{domain} Reproducibility and Collaboration Platform",
            description=(
                f"Develop an open-source platform specifically for {domain} research that ensures "
                "reproducibility through containerization, version control, and standardized workflows."
            ),
            skills_required=["Docker", "Git", "CI/CD", "Documentation", "Testing", "Research Workflows"],
            research_areas=["Open Science", "Reproducible Research", domain],
            difficulty=level,
            estimated_duration="2-4 months",
            category=f"Open Science - {domain}",
        ))

    if level == AcademicLevel.ADVANCED:
        projects.append(ProjectSuggestion(
            title=f"{domain} Education and Training Resources",
            description=(
                f"Create open educational resources, tutorials, and training materials for {domain} "
                "research methods, making advanced techniques accessible to the broader research community."
            ),
            skills_required=[
                "Educational Design", "Content Creation", "Web Development", "Video Production",
                "Community Building",
            ],
            research_areas=["Educational Technology", "Open Education", domain],
            difficulty=Difficulty.INTERMEDIATE,
            estimated_duration="2-4 months",
            category=f"Open Education - {domain}",
        ))

    return projects


# ============================================================================
# Scoring
# ============================================================================

def _overlap_fraction(wanted: Sequence[str], have: Sequence[str]) -> float:
    """Share of ``wanted`` items matching any ``have`` item by substring either way."""
    if not wanted:
        return 0.0
    wanted_lower = [w.lower() for w in wanted]
    have_lower = [h.lower() for h in have]
    matches = sum(
        1 for w in wanted_lower if any(h in w or w in h for h in have_lower)
    )
    return matches / len(wanted_lower)


def calculate_match_score(
    suggestion: ProjectSuggestion,
    skill_profile: SkillProfile,
    level: AcademicLevel,
    focus: ResearchFocus,
    user_skills: Sequence[str],
    user_interests: Sequence[str],
) -> int:
    """
    Heuristic 0-100 relevance of a candidate for this user.

    Bonuses are additive and only clamped at the end.
    """
    score = float(BASE_SCORE)

    score += _overlap_fraction(suggestion.skills_required, user_skills) * 35
    score += _overlap_fraction(suggestion.research_areas, user_interests) * 30

    # Personalisation: +5 per interest named in the candidate text
    haystacks = (
        suggestion.title.lower(), suggestion.description.lower(), suggestion.category.lower()
    )
    for interest in user_interests:
        interest_lower = interest.lower()
        if any(interest_lower in h for h in haystacks):
            score += 5

    if suggestion.difficulty == level:
        score += 15
    elif (
        (suggestion.difficulty == Difficulty.INTERMEDIATE and level == AcademicLevel.ADVANCED)
        or (suggestion.difficulty == Difficulty.BEGINNER and level == AcademicLevel.INTERMEDIATE)
    ):
        score += 8

    category = suggestion.category
    if "AI" in category and skill_profile.has_ml:
        score += 10
    if "Web" in category and skill_profile.has_web:
        score += 10
    if "Data" in category and skill_profile.has_data_science:
        score += 10
    if "Research" in category and user_interests:
        score += 8

    if focus.is_ml_focused and "AI" in category:
        score += 10
    if focus.is_data_focused and "Data" in category:
        score += 10
    if focus.is_hci_focused and "HCI" in category:
        score += 10
    if focus.is_bio_focused and "Bio" in category:
        score += 10
    if focus.is_security_focused and "Security" in category:
        score += 10

    # Half-up rounding
    return min(int(math.floor(score + 0.5)), 100)


# ============================================================================
# Pipeline
# ============================================================================

def generate_suggestions(
    resume: Optional[ParsedResume] = None,
    scholar: Optional[ScholarProfile] = None,
) -> List[ProjectSuggestion]:
    """
    Rank project ideas for a user.

    Args:
        resume: Parsed resume facts, if a resume was uploaded
        scholar: Scholar profile facts, if a profile was fetched

    Returns:
        At most 12 suggestions, highest match score first
    """
    skills = list(resume.skills) if resume else []
    experience = list(resume.experience) if resume else []
    education = list(resume.education) if resume else []
    interests = list(scholar.research_interests) if scholar else []
    publications = list(scholar.publications) if scholar else []
    citations = scholar.total_citations if scholar else 0

    skill_profile = analyze_skills(skills)
    level = determine_academic_level(education, len(experience), len(publications), citations)
    focus = analyze_research_focus(interests, publications)
    logger.debug(f"Skill profile: {skill_profile}, level: {level.value}, focus: {focus}")

    candidates: List[ProjectSuggestion] = []
    if skill_profile.has_ml or focus.is_ml_focused:
        candidates.extend(generate_ml_projects(level, focus, interests))
    if skill_profile.has_web:
        candidates.extend(generate_web_projects(level, focus, interests))
    if skill_profile.has_data_science or focus.is_data_focused:
        candidates.extend(generate_data_science_projects(level, focus, interests))
    if scholar and publications:
        candidates.extend(generate_research_projects(scholar, level, interests))
    candidates.extend(generate_interdisciplinary_projects(level, focus, interests))
    candidates.extend(generate_open_source_projects(skill_profile, level, interests))

    scored = [
        c.model_copy(update={
            "match_score": calculate_match_score(
                c, skill_profile, level, focus, skills, interests
            )
        })
        for c in candidates
    ]
    # sorted() is stable: equal scores keep generator order
    ranked = sorted(scored, key=lambda s: s.match_score, reverse=True)[:MAX_SUGGESTIONS]

    logger.info(
        f"Generated {len(ranked)} suggestions from {len(candidates)} candidates "
        f"(level={level.value})"
    )
    return ranked
