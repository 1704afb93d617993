import httpx

from project_advisor.main import app
from project_advisor.services.document_reader import DOCX_MIME_TYPE, PDF_MIME_TYPE
from project_advisor.services.scholar_scraper import ScholarScraper, get_scholar_scraper

from .test_scholar_scraper import PROFILE_HTML, PROFILE_URL


def override_scraper(handler):
    async def no_sleep(seconds):
        return None

    def factory():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ScholarScraper(client=client, request_delay=0, sleep=no_sleep)

    app.dependency_overrides[get_scholar_scraper] = factory


# ============================================================================
# Health and headers
# ============================================================================

def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "Cache-Control" not in response.headers


def test_root(client):
    assert client.get("/").json()["status"] == "running"


# ============================================================================
# Resume upload
# ============================================================================

def test_parse_docx_resume(client, docx_bytes):
    response = client.post(
        "/api/parse-resume",
        files={"resume": ("resume.docx", docx_bytes, DOCX_MIME_TYPE)},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Jane Doe"
    assert body["email"] == "jane.doe@example.com"
    assert body["skills"] == ["Python", "React", "SQL"]
    assert len(body["experience"]) == 2
    assert response.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
    assert response.headers["X-RateLimit-Remaining"] == "9"


def test_parse_pdf_resume(client, pdf_bytes):
    response = client.post(
        "/api/parse-resume",
        files={"resume": ("resume.pdf", pdf_bytes, PDF_MIME_TYPE)},
    )

    assert response.status_code == 200
    assert response.json()["email"] == "jane.doe@example.com"


def test_missing_file(client):
    response = client.post("/api/parse-resume")
    assert response.status_code == 400
    assert response.json()["detail"] == "No file provided"


def test_unsupported_file_type(client):
    response = client.post(
        "/api/parse-resume",
        files={"resume": ("data.csv", b"name,email", "text/csv")},
    )
    assert response.status_code == 400


def test_corrupt_pdf(client):
    response = client.post(
        "/api/parse-resume",
        files={"resume": ("resume.pdf", b"not really a pdf", PDF_MIME_TYPE)},
    )
    assert response.status_code == 400
    assert "Failed to parse" in response.json()["detail"]


def test_file_too_large(client):
    payload = b"%PDF-1.4" + b"0" * (5 * 1024 * 1024)
    response = client.post(
        "/api/parse-resume",
        files={"resume": ("resume.pdf", payload, PDF_MIME_TYPE)},
    )
    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


def test_repeated_failures_block_client(client):
    headers = {"X-Forwarded-For": "203.0.113.5"}
    files = {"resume": ("data.csv", b"name,email", "text/csv")}

    for _ in range(5):
        assert client.post("/api/parse-resume", files=files, headers=headers).status_code == 400

    blocked = client.post("/api/parse-resume", files=files, headers=headers)
    assert blocked.status_code == 429

    other = client.post("/api/parse-resume", files=files, headers={"X-Forwarded-For": "203.0.113.6"})
    assert other.status_code == 400


# ============================================================================
# Scholar
# ============================================================================

def test_fetch_scholar_profile(client):
    override_scraper(lambda request: httpx.Response(200, text=PROFILE_HTML))

    response = client.post("/api/fetch-scholar-profile", json={"profile_url": PROFILE_URL})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Ada Lovelace"
    assert body["total_citations"] == 1234
    assert "warning" not in body


def test_scholar_failure_returns_fallback(client):
    override_scraper(lambda request: httpx.Response(429))

    response = client.post("/api/fetch-scholar-profile", json={"profile_url": PROFILE_URL})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Scholar Profile"
    assert body["affiliation"] == "Institution not available"
    assert body["warning"].startswith("Unable to fetch live data")


def test_scholar_invalid_url(client):
    response = client.post(
        "/api/fetch-scholar-profile", json={"profile_url": "https://example.com/profile"}
    )
    assert response.status_code == 400
    assert "Invalid Google Scholar" in response.json()["detail"]


def test_scholar_missing_and_oversized_url(client):
    assert client.post("/api/fetch-scholar-profile", json={}).status_code == 400

    long_url = PROFILE_URL + "&x=" + "a" * 500
    assert client.post("/api/fetch-scholar-profile", json={"profile_url": long_url}).status_code == 400


def test_scholar_rate_limit(client):
    override_scraper(lambda request: httpx.Response(200, text=PROFILE_HTML))

    for _ in range(3):
        assert client.post(
            "/api/fetch-scholar-profile", json={"profile_url": PROFILE_URL}
        ).status_code == 200

    response = client.post("/api/fetch-scholar-profile", json={"profile_url": PROFILE_URL})
    assert response.status_code == 429
    assert response.headers["X-RateLimit-Remaining"] == "0"
    assert "X-RateLimit-Reset" in response.headers


# ============================================================================
# Suggestions
# ============================================================================

def test_suggestions_require_some_input(client):
    response = client.post("/api/generate-suggestions", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "Either resume data or scholar data is required"


def test_generate_suggestions(client):
    payload = {
        "resume_data": {"name": "Jane Doe", "skills": ["Python", "TensorFlow"]},
        "scholar_data": {
            "name": "Jane Doe",
            "research_interests": ["Machine Learning", "Data Mining"],
            "publications": [{"title": "Learning to Rank", "citations": 3}],
        },
    }

    response = client.post("/api/generate-suggestions", json=payload)

    assert response.status_code == 200
    suggestions = response.json()["suggestions"]
    assert 0 < len(suggestions) <= 12
    scores = [s["match_score"] for s in suggestions]
    assert scores == sorted(scores, reverse=True)
    assert {"title", "description", "skills_required", "research_areas", "difficulty",
            "estimated_duration", "category", "match_score"} <= set(suggestions[0])


def test_suggestion_input_is_sanitised(client):
    payload = {"resume_data": {"name": "<script>alert(1)</script>Jane", "skills": ["Python"]}}

    response = client.post("/api/generate-suggestions", json=payload)

    assert response.status_code == 200
    assert all("<script>" not in s["description"] for s in response.json()["suggestions"])
