"""
Rule-based Resume Parser Service.
Segments decoded resume text into lines and extracts contact details,
skills, work experience and education with regex heuristics.
"""
import logging
import re
from typing import Dict, List, Optional, Sequence

from ..schemas.resume import (
    NAME_NOT_FOUND, EducationEntry, ExperienceEntry, ParsedResume
)
from .document_reader import decode_document, ensure_supported

logger = logging.getLogger(__name__)


# ============================================================================
# Patterns and keyword tables
# ============================================================================

LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n| {2,}")

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
# Broad international phone pattern; the longest hit is taken as the number
PHONE_RE = re.compile(
    r"(?:\+?[1-9]\d{0,3}[-.\s]?)?(?:\(?[0-9]{1,4}\)?[-.\s]?)?[0-9]{3,4}[-.\s]?[0-9]{3,5}"
)
NAME_CHARS_RE = re.compile(r"[A-Za-z\s.'-]+")
NAME_LABEL_RE = re.compile(r"(?:name|full name)[:\s]+([A-Za-z\s.'-]+)", re.IGNORECASE)
POSTAL_CODE_RE = re.compile(r"\b\d{5}(-\d{4})?\b")

NAME_STOPWORDS = (
    "resume", "cv", "curriculum vitae", "profile", "objective", "summary", "contact"
)
LOCATION_KEYWORDS = (
    "street", "avenue", "drive", "road", "city", "state", "zip", "country"
)

SKILLS_KEYWORDS = [
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#",
    "React", "Vue", "Angular", "Node.js", "Express", "Next.js",
    "Django", "Flask", "Spring",
    "SQL", "MongoDB", "PostgreSQL", "MySQL", "Redis",
    "Docker", "Kubernetes", "AWS", "Azure", "GCP", "Git", "Linux",
    "HTML", "CSS", "Sass", "Less", "Webpack", "Vite",
    "Jest", "Cypress", "Selenium", "GraphQL", "REST", "API", "Microservices",
    "Machine Learning", "Deep Learning", "TensorFlow", "PyTorch", "Scikit-learn",
    "Pandas", "NumPy", "Data Analysis", "Data Science", "Artificial Intelligence",
    "Computer Vision", "Natural Language Processing", "NLP",
    "DevOps", "CI/CD", "Jenkins", "Terraform", "Ansible",
    "Agile", "Scrum", "Project Management",
]
MAX_SKILLS = 25

SKILLS_SECTION_START_RE = re.compile(
    r"(?:skills?|technologies?|technical skills?|competencies|expertise)[:\s\n]",
    re.IGNORECASE,
)
SKILLS_SECTION_END_RE = re.compile(
    r"\n\s*(?:experience|education|projects|awards|certifications)", re.IGNORECASE
)
SKILL_LIST_PATTERNS = [
    re.compile(
        r"(?:skills?|technologies?|programming languages?|frameworks?|tools?|databases?)"
        r"[:\s]+([^.]+?)(?:\n\n|\n[A-Z]|\Z)",
        re.IGNORECASE,
    ),
    re.compile(r"•\s*([A-Za-z][^•\n]+)"),
    re.compile(r"-\s*([A-Za-z][^-\n]+)"),
    re.compile(r"\*\s*([A-Za-z][^*\n]+)"),
]
SKILL_ITEM_SPLIT_RE = re.compile(r"[,;|\n]")
SKILL_ITEM_STRIP_RE = re.compile(r"[•\-*()]")

BULLET_MARKERS = ("•", "-", "*")
BULLET_PREFIX_RE = re.compile(r"^[•\-*]\s*")

EXPERIENCE_HEADERS = [
    "experience", "work experience", "professional experience", "employment", "work history"
]
EXPERIENCE_NEXT_HEADERS = [
    "education", "skills", "projects", "awards", "certifications", "references", "languages"
]
EXPERIENCE_BLOCK_RE = re.compile(
    r"(?:EXPERIENCE|WORK EXPERIENCE|PROFESSIONAL EXPERIENCE)[\s:]*([\s\S]*?)"
    r"(?:EDUCATION|SKILLS|PROJECTS|AWARDS|CERTIFICATES|\Z)",
    re.IGNORECASE,
)
JOB_DATE_RE = re.compile(
    r"(20\d{2}|19\d{2}|\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\b.*?20\d{2}"
    r"|\bpresent\b|\bcurrent\b)",
    re.IGNORECASE,
)
DURATION_TOKEN_RE = re.compile(
    r"(\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\s+\d{4}\b|\b\d{4}\b"
    r"|\bpresent\b|\bcurrent\b)",
    re.IGNORECASE,
)
COMPANY_INDICATORS = ("company", "corp", "inc", "ltd")
MAX_EXPERIENCE = 10

EDUCATION_HEADERS = [
    "education", "academic", "qualifications", "university", "college", "degree"
]
EDUCATION_NEXT_HEADERS = [
    "experience", "skills", "projects", "awards", "certifications", "references", "languages"
]
EDUCATION_BLOCK_RE = re.compile(
    r"(?:EDUCATION|QUALIFICATIONS|UNIVERSITY|COLLEGE)[\s:]*([\s\S]*?)"
    r"(?:EXPERIENCE|SKILLS|PROJECTS|AWARDS|CERTIFICATES|\Z)",
    re.IGNORECASE,
)
DEGREE_KEYWORDS = [
    "bachelor", "master", "phd", "doctorate", "associate", "diploma", "certificate",
    "b.s.", "b.a.", "m.s.", "m.a.", "b.tech", "m.tech", "b.e.", "m.e.",
]
INSTITUTION_KEYWORDS = ["university", "college", "institute", "school", "academy"]
YEAR_RE = re.compile(r"\b(20\d{2}|19\d{2})\b")
GPA_RE = re.compile(r"gpa[:\s]+(\d+\.?\d*)", re.IGNORECASE)
MAX_EDUCATION = 5


# ============================================================================
# Text segmentation and section lookup
# ============================================================================

def segment_lines(text: str) -> List[str]:
    """
    Split raw text into trimmed, non-empty lines.

    Runs of two or more spaces count as a break too, since multi-column PDFs
    often lose their newlines during extraction.
    """
    return [part.strip() for part in LINE_SPLIT_RE.split(text or "") if part.strip()]


def is_section_header(line: str, keywords: Sequence[str]) -> bool:
    clean = re.sub(r"[:\s]+$", "", line).strip().lower()
    return (
        any(clean == kw for kw in keywords)
        or any(line.upper() == kw.upper() for kw in keywords)
        or any(kw in clean for kw in keywords)
    )


def find_section(
    lines: Sequence[str],
    keywords: Sequence[str],
    next_keywords: Sequence[str],
) -> List[str]:
    """
    Lines after the first header matching ``keywords`` up to (not including)
    the next header matching ``next_keywords``. Empty if no header is found.
    """
    start = None
    for i, line in enumerate(lines):
        if is_section_header(line, keywords):
            start = i + 1
            break
    if start is None:
        return []

    for i in range(start, len(lines)):
        if is_section_header(lines[i], next_keywords):
            return list(lines[start:i])
    return list(lines[start:])


def _section_or_block(
    lines: Sequence[str],
    full_text: str,
    keywords: Sequence[str],
    next_keywords: Sequence[str],
    block_re: "re.Pattern[str]",
) -> List[str]:
    section = find_section(lines, keywords, next_keywords)
    if section:
        return section
    match = block_re.search(full_text or "")
    if match and match.group(1):
        return segment_lines(match.group(1))
    return []


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    lower = text.lower()
    return any(kw in lower for kw in keywords)


# ============================================================================
# Contact fields
# ============================================================================

def extract_name(lines: Sequence[str]) -> str:
    """First plausible 2-4 word name in the top 10 lines, else a "Name:" label."""
    if not lines:
        return NAME_NOT_FOUND

    for raw in lines[:10]:
        line = raw.strip()
        lower = line.lower()
        word_count = len(line.split(" "))
        if (
            2 < len(line) < 60
            and not EMAIL_RE.search(line)
            and not PHONE_RE.search(line)
            and not any(word in lower for word in NAME_STOPWORDS)
            and "http" not in line
            and "www" not in line
            and "@" not in line
            and 2 <= word_count <= 4
            and NAME_CHARS_RE.fullmatch(line)
        ):
            return line

    for line in lines:
        match = NAME_LABEL_RE.search(line)
        if match and len(match.group(1).strip()) > 2:
            return match.group(1).strip()

    return NAME_NOT_FOUND


def extract_email(text: str) -> Optional[str]:
    match = EMAIL_RE.search(text or "")
    return match.group(0) if match else None


def extract_phone(text: str) -> Optional[str]:
    """Longest phone-like match, taken as the most complete number."""
    matches = [m.group(0) for m in PHONE_RE.finditer(text or "")]
    if not matches:
        return None
    return max(matches, key=len).strip()


def extract_location(lines: Sequence[str]) -> Optional[str]:
    for line in lines:
        if _contains_any(line, LOCATION_KEYWORDS) or POSTAL_CODE_RE.search(line):
            return line
    return None


# ============================================================================
# Skills
# ============================================================================

def _skills_block(text: str) -> str:
    start = SKILLS_SECTION_START_RE.search(text)
    if not start:
        return text
    after = text[start.start():]
    end = SKILLS_SECTION_END_RE.search(after)
    return after[:end.start()] if end else after


def extract_skills(text: str) -> List[str]:
    """
    Known keywords found in the skills block, followed by free-form items
    from labelled, bulleted or dashed lists. Capped at 25.
    """
    text = text or ""
    skills_text = _skills_block(text)
    skills_lower = skills_text.lower()

    # dict keeps first-seen order
    found: Dict[str, None] = {}
    for skill in SKILLS_KEYWORDS:
        if skill.lower() in skills_lower:
            found[skill] = None

    for pattern in SKILL_LIST_PATTERNS:
        for match in pattern.finditer(skills_text):
            for item in SKILL_ITEM_SPLIT_RE.split(match.group(1)):
                clean = SKILL_ITEM_STRIP_RE.sub("", item.strip()).strip()
                lower = clean.lower()
                if (
                    1 < len(clean) < 30
                    and "experience" not in lower
                    and "years" not in lower
                ):
                    found[clean] = None

    return list(found)[:MAX_SKILLS]


# ============================================================================
# Experience
# ============================================================================

def extract_duration(line: str) -> Optional[str]:
    """Join all date tokens on a line, e.g. "Jan 2021 - Present"."""
    dates = DURATION_TOKEN_RE.findall(line)
    if dates:
        return " - ".join(dates)
    return None


def _starts_with_bullet(line: str) -> bool:
    return line.startswith(BULLET_MARKERS)


def _looks_like_job_start(line: str, next_line: str, has_date: bool) -> bool:
    if has_date:
        return True
    if not 5 < len(line) < 100 or _starts_with_bullet(line):
        return False
    return (
        _contains_any(next_line, COMPANY_INDICATORS)
        or "|" in next_line
        or "-" in next_line
    )


def _build_job(fields: Dict[str, str], description: List[str]) -> ExperienceEntry:
    text = " ".join(description).strip()
    return ExperienceEntry(
        position=fields["position"] or "Position not specified",
        company=fields["company"] or "Company not specified",
        duration=fields["duration"] or "Duration not specified",
        description=text or None,
    )


def extract_experience(lines: Sequence[str], full_text: str) -> List[ExperienceEntry]:
    """
    Walk the experience section and group lines into job entries.

    A dated line (or a title followed by a company-looking line) opens a new
    entry; bullets and long undated lines are collected as its description.
    """
    section = _section_or_block(
        lines or [], full_text, EXPERIENCE_HEADERS, EXPERIENCE_NEXT_HEADERS, EXPERIENCE_BLOCK_RE
    )

    jobs: List[ExperienceEntry] = []
    current: Optional[Dict[str, str]] = None
    description: List[str] = []

    i = 0
    while i < len(section):
        line = section[i].strip()
        if not line:
            i += 1
            continue

        has_date = bool(JOB_DATE_RE.search(line))
        next_line = section[i + 1] if i + 1 < len(section) else ""

        if _looks_like_job_start(line, next_line, has_date):
            if current:
                jobs.append(_build_job(current, description))
                description = []

            position = company = duration = ""
            if "|" in line:
                parts = [p.strip() for p in line.split("|")]
                position = parts[0]
                company = parts[1] if len(parts) > 1 else ""
                duration = extract_duration(line) or (parts[2] if len(parts) > 2 else "")
            elif " - " in line and has_date:
                parts = line.split(" - ")
                position = parts[0].strip()
                duration = extract_duration(line) or ""
                company = parts[1].replace(duration, "", 1).strip() if len(parts) > 1 else ""
            else:
                position = line
                if i + 1 < len(section):
                    company = section[i + 1].strip()
                    i += 1
                duration = extract_duration(f"{position} {company}") or ""

            current = {"position": position, "company": company, "duration": duration}
        elif current and (_starts_with_bullet(line) or (len(line) > 20 and not has_date)):
            description.append(BULLET_PREFIX_RE.sub("", line))

        i += 1

    if current:
        jobs.append(_build_job(current, description))

    logger.debug(f"Extracted {len(jobs)} experience entries")
    return jobs[:MAX_EXPERIENCE]


# ============================================================================
# Education
# ============================================================================

def extract_education(lines: Sequence[str], full_text: str) -> List[EducationEntry]:
    """
    Pick degree/institution/year records out of the education section.
    Duplicate (degree, institution) pairs are dropped, keeping the first.
    """
    section = _section_or_block(
        lines or [], full_text, EDUCATION_HEADERS, EDUCATION_NEXT_HEADERS, EDUCATION_BLOCK_RE
    )

    records: List[EducationEntry] = []
    i = 0
    while i < len(section):
        line = section[i].strip()
        if len(line) < 5:
            i += 1
            continue

        year_match = YEAR_RE.search(line)
        gpa_match = GPA_RE.search(line)
        has_degree = _contains_any(line, DEGREE_KEYWORDS)
        has_institution = _contains_any(line, INSTITUTION_KEYWORDS)

        if year_match or has_degree or has_institution:
            degree = institution = year = ""
            found_year = year_match.group(0) if year_match else ""

            if "|" in line or " - " in line:
                separator = "|" if "|" in line else " - "
                parts = [p.strip() for p in line.split(separator)]
                degree = parts[0]
                institution = parts[1] if len(parts) > 1 else ""
                year = found_year
            elif has_degree:
                degree = line
                year = found_year
                if i + 1 < len(section) and _contains_any(section[i + 1], INSTITUTION_KEYWORDS):
                    institution = section[i + 1].strip()
                    i += 1
            elif has_institution:
                institution = line
                year = found_year
                if i > 0 and _contains_any(section[i - 1], DEGREE_KEYWORDS):
                    degree = section[i - 1].strip()

            if degree or institution or year:
                records.append(EducationEntry(
                    degree=degree or "Degree not specified",
                    institution=institution or "Institution not specified",
                    year=year or "Year not specified",
                    gpa=gpa_match.group(1) if gpa_match else None,
                ))
        i += 1

    unique: List[EducationEntry] = []
    seen = set()
    for record in records:
        key = (record.degree, record.institution)
        if key not in seen:
            seen.add(key)
            unique.append(record)

    logger.debug(f"Extracted {len(unique)} education entries")
    return unique[:MAX_EDUCATION]


# ============================================================================
# Pipeline
# ============================================================================

def extract_information(text: str, lines: Optional[Sequence[str]] = None) -> ParsedResume:
    """Run every field extractor over already-decoded resume text."""
    if lines is None:
        lines = segment_lines(text)
    return ParsedResume(
        name=extract_name(lines),
        email=extract_email(text),
        phone=extract_phone(text),
        location=extract_location(lines),
        skills=extract_skills(text),
        experience=extract_experience(lines, text),
        education=extract_education(lines, text),
    )


def parse_resume_document(data: bytes, mime_type: str) -> ParsedResume:
    """
    Parse an uploaded PDF/DOCX resume.

    Args:
        data: Raw file bytes
        mime_type: Declared content type of the upload

    Returns:
        ParsedResume with every field resolved to a value or default

    Raises:
        UnsupportedFileTypeError: before any decoding for other mime types
        DocumentDecodeError: the file could not be decoded
    """
    ensure_supported(mime_type)
    text = decode_document(data, mime_type)
    lines = segment_lines(text)
    resume = extract_information(text, lines)
    logger.info(
        f"Parsed resume: {len(resume.skills)} skills, "
        f"{len(resume.experience)} jobs, {len(resume.education)} education entries"
    )
    return resume
