import io

import fitz
import pytest
from docx import Document
from fastapi.testclient import TestClient

from project_advisor.main import app
from project_advisor.services.rate_limit import rate_limiter
from project_advisor.services.security import brute_force_guard


SAMPLE_RESUME_TEXT = "\n".join([
    "Jane Doe",
    "jane.doe@example.com",
    "EXPERIENCE",
    "Software Engineer | Acme Corp | Jan 2020 - Present",
    "• Built APIs",
    "Data Analyst | Globex Inc | Jun 2017 - Dec 2019",
    "• Reported metrics",
    "EDUCATION",
    "Master of Science | Stanford University | 2017",
    "Bachelor of Science | MIT | 2015",
    "SKILLS",
    "Python, React, SQL",
])


@pytest.fixture(autouse=True)
def reset_request_guards():
    rate_limiter.reset()
    brute_force_guard.reset()
    app.dependency_overrides.clear()
    yield
    rate_limiter.reset()
    brute_force_guard.reset()
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_resume_text():
    return SAMPLE_RESUME_TEXT


@pytest.fixture
def pdf_bytes():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Jane Doe\njane.doe@example.com\nSKILLS\nPython, React, SQL")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes():
    document = Document()
    for line in SAMPLE_RESUME_TEXT.split("\n"):
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()
