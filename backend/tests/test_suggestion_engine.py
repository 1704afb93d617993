import pytest

from project_advisor.schemas import (
    AcademicLevel,
    Difficulty,
    EducationEntry,
    ParsedResume,
    ProjectSuggestion,
    ResearchFocus,
    ScholarProfile,
    ScholarPublication,
    SkillProfile,
)
from project_advisor.services.profile_analyzer import (
    analyze_research_focus,
    analyze_skills,
    determine_academic_level,
)
from project_advisor.services.suggestion_engine import (
    calculate_match_score,
    generate_ml_projects,
    generate_open_source_projects,
    generate_research_projects,
    generate_suggestions,
)

NO_SKILLS = SkillProfile(
    has_ml=False, has_web=False, has_data_science=False,
    has_mobile=False, has_cloud=False, has_database=False,
    programming_languages=[],
)
NO_FOCUS = ResearchFocus(
    is_ml_focused=False, is_data_focused=False, is_hci_focused=False,
    is_security_focused=False, is_bio_focused=False, primary_domains=[],
)


def make_scholar(interests, publication_count=0, citations=0, h_index=0):
    return ScholarProfile(
        name="Ada Lovelace",
        total_citations=citations,
        h_index=h_index,
        i10_index=0,
        research_interests=interests,
        publications=[
            ScholarPublication(title=f"Paper {i}", citations=0) for i in range(publication_count)
        ],
    )


def make_suggestion(**overrides):
    fields = dict(
        title="Pipeline",
        description="Build it",
        skills_required=["Python", "SQL"],
        research_areas=["Data Science"],
        difficulty=Difficulty.INTERMEDIATE,
        estimated_duration="1 month",
        category="General",
    )
    fields.update(overrides)
    return ProjectSuggestion(**fields)


# ============================================================================
# Profile analysis
# ============================================================================

def test_analyze_skills_flags():
    profile = analyze_skills(["TensorFlow", "React", "PostgreSQL", "Docker", "Flutter"])

    assert profile.has_ml
    assert profile.has_web
    assert profile.has_database
    assert profile.has_cloud
    assert profile.has_mobile


def test_analyze_skills_programming_languages_keep_original_spelling():
    profile = analyze_skills(["Python", "Go", "Swift"])

    assert profile.programming_languages == ["Python", "Go"]
    assert not profile.has_web


def test_analyze_skills_empty():
    assert analyze_skills([]) == NO_SKILLS


@pytest.mark.parametrize("degree, experience, publications, citations, expected", [
    ("PhD in Physics", 0, 0, 0, AcademicLevel.ADVANCED),
    ("Doctorate", 0, 0, 0, AcademicLevel.ADVANCED),
    ("Master of Science", 0, 0, 0, AcademicLevel.INTERMEDIATE),
    ("Bachelor of Arts", 4, 0, 0, AcademicLevel.INTERMEDIATE),
    ("Bachelor of Arts", 0, 4, 0, AcademicLevel.INTERMEDIATE),
    ("Bachelor of Arts", 0, 11, 0, AcademicLevel.ADVANCED),
    ("Bachelor of Arts", 0, 0, 101, AcademicLevel.ADVANCED),
    ("Bachelor of Arts", 3, 3, 100, AcademicLevel.BEGINNER),
])
def test_determine_academic_level(degree, experience, publications, citations, expected):
    education = [EducationEntry(degree=degree)]
    assert determine_academic_level(education, experience, publications, citations) == expected


def test_analyze_research_focus():
    publications = [ScholarPublication(title="Medical Imaging at Scale", citations=1)]
    focus = analyze_research_focus(
        ["Human-Computer Interaction", "Privacy", "Robotics", "Ethics"], publications
    )

    assert focus.is_hci_focused
    assert focus.is_security_focused
    assert focus.is_bio_focused
    assert not focus.is_ml_focused
    assert focus.primary_domains == ["Human-Computer Interaction", "Privacy", "Robotics"]


# ============================================================================
# Generators
# ============================================================================

def test_ml_generator_fallback_when_nothing_specific():
    projects = generate_ml_projects(AcademicLevel.BEGINNER, NO_FOCUS, [])

    assert [p.title for p in projects] == ["Personalized Research Recommendation Engine"]


def test_ml_generator_nlp_title_uses_primary_domain():
    interests = ["Natural Language Processing"]
    focus = analyze_research_focus(interests, [])
    projects = generate_ml_projects(AcademicLevel.ADVANCED, focus, interests)

    assert projects[0].title == "Natural Language Processing Natural Language Processing System"
    assert projects[0].estimated_duration == "3-4 months"


def test_research_generator_thresholds():
    scholar = make_scholar(["Bibliometrics"], publication_count=6, citations=51, h_index=6)
    titles = [p.title for p in generate_research_projects(scholar, AcademicLevel.INTERMEDIATE, ["Bibliometrics"])]

    assert titles == [
        "Advanced Bibliometrics Analytics Platform",
        "AI-Powered Literature Review and Gap Analysis Tool",
        "Research Collaboration Recommendation Engine",
    ]


def test_open_source_difficulty_follows_level():
    beginner = generate_open_source_projects(NO_SKILLS, AcademicLevel.BEGINNER, [])
    advanced = generate_open_source_projects(NO_SKILLS, AcademicLevel.ADVANCED, ["genomics"])

    assert beginner[0].title == "Open Source Research Toolkit"
    assert beginner[0].difficulty == Difficulty.BEGINNER
    assert advanced[0].title == "Open Source Genomics Toolkit"
    assert advanced[0].difficulty == Difficulty.INTERMEDIATE
    assert advanced[-1].title == "genomics Education and Training Resources"


# ============================================================================
# Scoring
# ============================================================================

def test_score_rounds_half_up():
    suggestion = make_suggestion()
    score = calculate_match_score(
        suggestion, NO_SKILLS, AcademicLevel.INTERMEDIATE, NO_FOCUS, ["python"], []
    )
    # 40 + 35 * 1/2 + 15 = 72.5
    assert score == 73


def test_adjacent_difficulty_partial_credit():
    suggestion = make_suggestion(difficulty=Difficulty.BEGINNER, skills_required=[])
    assert calculate_match_score(
        suggestion, NO_SKILLS, AcademicLevel.INTERMEDIATE, NO_FOCUS, [], []
    ) == 48
    assert calculate_match_score(
        suggestion, NO_SKILLS, AcademicLevel.ADVANCED, NO_FOCUS, [], []
    ) == 40


def test_score_clamped_to_100():
    suggestion = make_suggestion(
        title="Machine Learning for Data",
        skills_required=["Python"],
        research_areas=["Machine Learning"],
        category="AI Data Research HCI Bio Security Web",
    )
    skills = SkillProfile(
        has_ml=True, has_web=True, has_data_science=True,
        has_mobile=False, has_cloud=False, has_database=False,
        programming_languages=["Python"],
    )
    focus = ResearchFocus(
        is_ml_focused=True, is_data_focused=True, is_hci_focused=True,
        is_security_focused=True, is_bio_focused=True, primary_domains=["Machine Learning"],
    )

    score = calculate_match_score(
        suggestion, skills, AcademicLevel.INTERMEDIATE, focus, ["Python"], ["Machine Learning"]
    )
    assert score == 100


def test_more_matching_skills_never_lowers_score():
    suggestion = make_suggestion(skills_required=["Python", "SQL", "Pandas"])
    scores = [
        calculate_match_score(suggestion, NO_SKILLS, AcademicLevel.BEGINNER, NO_FOCUS, user_skills, [])
        for user_skills in ([], ["Python"], ["Python", "SQL"], ["Python", "SQL", "Pandas"])
    ]
    assert scores == sorted(scores)


# ============================================================================
# Pipeline
# ============================================================================

def test_no_inputs_yields_generic_suggestions_in_generator_order():
    suggestions = generate_suggestions()

    assert [s.title for s in suggestions] == [
        "Multi-Domain Knowledge Discovery System",
        "Open Source Research Toolkit",
    ]
    assert [s.match_score for s in suggestions] == [55, 55]


def test_suggestions_sorted_and_personalised():
    resume = ParsedResume(name="Jane Doe", skills=["Python", "TensorFlow", "React"])
    scholar = make_scholar(
        ["Machine Learning", "Natural Language Processing", "Data Mining"],
        publication_count=6, citations=60, h_index=6,
    )

    suggestions = generate_suggestions(resume, scholar)
    scores = [s.match_score for s in suggestions]

    assert len(suggestions) <= 12
    assert scores == sorted(scores, reverse=True)
    assert all(0 <= s <= 100 for s in scores)
    assert any(s.title == "Machine Learning Natural Language Processing System" for s in suggestions)


def test_suggestions_capped_at_twelve():
    resume = ParsedResume(
        name="Jane Doe",
        skills=["Python", "TensorFlow", "React", "Java", "Go"],
        education=[EducationEntry(degree="PhD in Computer Science")],
    )
    scholar = make_scholar(
        ["Natural Language Processing", "Computer Vision", "Bioinformatics", "Security", "User Interface"],
        publication_count=12, citations=500, h_index=20,
    )

    assert len(generate_suggestions(resume, scholar)) == 12


def test_generation_is_deterministic():
    resume = ParsedResume(name="Jane Doe", skills=["Python", "Pandas"])
    assert generate_suggestions(resume) == generate_suggestions(resume)


def test_score_grows_with_research_area_overlap():
    suggestion = make_suggestion(
        skills_required=[],
        research_areas=["Robotics", "Computer Vision", "Planning", "Control"],
        difficulty=Difficulty.ADVANCED,
    )
    interest_sets = [
        [],
        ["Robotics"],
        ["Robotics", "Planning"],
        ["Robotics", "Planning", "Control", "Computer Vision"],
    ]
    scores = [
        calculate_match_score(
            suggestion, NO_SKILLS, AcademicLevel.INTERMEDIATE, NO_FOCUS, [], interests
        )
        for interests in interest_sets
    ]

    assert scores == sorted(scores)
    assert len(set(scores)) == len(scores)
    assert scores[0] == 40
    assert scores[-1] == 70
