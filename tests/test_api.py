"""Tests for the HTTP boundary.

The FastAPI TestClient drives the app; ``respx`` mocks the upstream pages.
No real network calls are made.
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from seoaudit.api.app import create_app
from seoaudit.errors import AnalysisError

_PAGE_HTML = """\
<html><head><title>Coffee Guide</title>
<meta property="og:description" content="Brewing tips.">
</head><body>
<h1>Coffee</h1><h1>Brewing</h1>
<p>Learn to brew. <a href="/beans">Beans</a></p>
</body></html>
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    """TestClient over a fresh app instance."""
    with TestClient(create_app(), raise_server_exceptions=True) as c:
        yield c


@pytest.fixture()
def upstream():
    """respx router for the upstream pages the app fetches.

    The TestClient talks to the app in-process, so only the app's outbound
    httpx calls reach these routes.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestHealth:
    def test_health(self, client) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestSeoCheck:
    def test_missing_url_is_400(self, client) -> None:
        resp = client.get("/seo-check")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing url param"

    def test_report_for_schemeless_url(self, client, upstream) -> None:
        upstream.get("https://coffee.example/").mock(
            return_value=httpx.Response(200, text=_PAGE_HTML)
        )
        resp = client.get("/seo-check", params={"url": "coffee.example/", "keyword": "brew"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["targetUrl"] == "https://coffee.example/"
        assert data["metadata"]["descriptionSource"] == "openGraph"
        assert data["content"]["headingStats"]["h1"] == 2
        assert "Duplicate H1 tags" in data["issues"]
        assert data["intent"] == "Unknown"
        assert data["content"]["keyword"]["frequency"] == 1

    def test_upstream_error_is_502(self, client, upstream) -> None:
        upstream.get("https://coffee.example/").mock(return_value=httpx.Response(503))
        resp = client.get("/seo-check", params={"url": "https://coffee.example/"})

        assert resp.status_code == 502
        detail = resp.json()["detail"]
        assert detail["kind"] == "HttpError"
        assert detail["upstreamStatus"] == 503
        assert "503" in detail["error"]

    def test_network_error_is_502(self, client, upstream) -> None:
        upstream.get("https://coffee.example/").mock(side_effect=httpx.ConnectError)
        resp = client.get("/seo-check", params={"url": "https://coffee.example/"})

        assert resp.status_code == 502
        assert resp.json()["detail"]["kind"] == "NetworkError"

    def test_unencodable_user_agent_is_502(self, client, upstream) -> None:
        resp = client.get(
            "/seo-check", params={"url": "coffee.example", "user_agent": "Bötli/1.0"}
        )

        assert resp.status_code == 502
        detail = resp.json()["detail"]
        assert detail["kind"] == "NetworkError"
        assert "upstreamStatus" not in detail

    def test_analysis_failure_is_500(self, client, upstream) -> None:
        upstream.get("https://coffee.example/").mock(
            return_value=httpx.Response(200, text=_PAGE_HTML)
        )
        with patch(
            "seoaudit.api.routers.audit.audit_url",
            side_effect=AnalysisError("Analysis failed: kaboom"),
        ):
            resp = client.get("/seo-check", params={"url": "https://coffee.example/"})

        assert resp.status_code == 500
        detail = resp.json()["detail"]
        assert detail["error"] == "Internal error while analyzing the page"
        assert "kaboom" in detail["detail"]


class TestAnalyzeHtml:
    def test_reports_without_network(self, client) -> None:
        resp = client.post(
            "/analyze-html",
            json={"html": _PAGE_HTML, "keyword": "coffee", "base_url": "https://coffee.example/"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["targetUrl"] == "https://coffee.example/"
        assert data["redirectChain"] == []
        assert data["links"]["internal"] == 1
        assert data["content"]["keyword"]["placement"]["inTitle"] is True

    def test_missing_html_is_validation_error(self, client) -> None:
        resp = client.post("/analyze-html", json={"keyword": "x"})
        assert resp.status_code == 422


class TestDetectIntent:
    def test_intent(self, client) -> None:
        resp = client.get("/detect-intent", params={"keyword": "coffee coupon"})
        assert resp.status_code == 200
        assert resp.json() == {"keyword": "coffee coupon", "intent": "Transactional"}

    def test_missing_keyword_is_400(self, client) -> None:
        resp = client.get("/detect-intent")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing keyword param"


class TestExtractSections:
    def test_sections_of_fetched_page(self, client, upstream) -> None:
        upstream.get("https://coffee.example/").mock(
            return_value=httpx.Response(200, text=_PAGE_HTML)
        )
        resp = client.get("/extract-sections", params={"url": "coffee.example/"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["url"] == "https://coffee.example/"
        assert [s["headingText"] for s in data["sections"]] == ["Coffee", "Brewing"]
        assert data["sections"][1]["content"] == "Learn to brew. Beans"

    def test_missing_url_is_400(self, client) -> None:
        assert client.get("/extract-sections").status_code == 400
