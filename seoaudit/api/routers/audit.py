"""Audit endpoints: the HTTP boundary of the pipeline.

Routes
------
GET  /seo-check?url=<url>&keyword=<kw>&user_agent=<ua>&robots=<bool>
POST /analyze-html        Body: {"html": "...", "keyword": "...", "base_url": "..."}
GET  /detect-intent?keyword=<kw>
GET  /extract-sections?url=<url>

Status mapping: 400 for missing input, 502 when the fetch fails, 500 when the
analyzer fails unexpectedly, 200 otherwise.
"""

from __future__ import annotations

import asyncio
from typing import Any, NoReturn, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from seoaudit.analysis.heuristics import classify_intent, extract_sections
from seoaudit.errors import AnalysisError
from seoaudit.observability import AuditObserver
from seoaudit.pipeline import audit_url, build_report, ensure_scheme, request_headers
from seoaudit.scraper.fetcher import fetch_with_redirects
from seoaudit.scraper.models import FetchFailure

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AnalyzeHtmlRequest(BaseModel):
    html: str
    keyword: Optional[str] = None
    base_url: Optional[str] = None


class IntentResponse(BaseModel):
    keyword: str
    intent: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail=f"Missing {name} param")
    return value.strip()


def _raise_fetch_failure(failure: FetchFailure) -> NoReturn:
    detail: dict[str, Any] = {"error": f"Fetch failed: {failure.error}", "kind": failure.kind}
    if failure.status_code is not None:
        detail["upstreamStatus"] = failure.status_code
    raise HTTPException(status_code=502, detail=detail)


def _raise_analysis_failure(exc: AnalysisError) -> NoReturn:
    raise HTTPException(
        status_code=500,
        detail={"error": "Internal error while analyzing the page", "detail": str(exc)},
    ) from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/seo-check")
async def seo_check(
    url: Optional[str] = None,
    keyword: Optional[str] = None,
    user_agent: Optional[str] = None,
    robots: Optional[bool] = None,
) -> dict[str, Any]:
    """Fetch *url* (redirects recorded) and return the full SEO report."""
    target = ensure_scheme(_require(url, "url"))
    try:
        result = await audit_url(
            target,
            keyword or None,
            user_agent=user_agent,
            discover_robots=robots,
        )
    except AnalysisError as exc:
        _raise_analysis_failure(exc)
    if isinstance(result, FetchFailure):
        _raise_fetch_failure(result)
    return result.to_dict()


@router.post("/analyze-html")
def analyze_html(body: AnalyzeHtmlRequest) -> dict[str, Any]:
    """Audit supplied markup without any network access."""
    observer = AuditObserver()
    target = body.base_url or "<html>"
    observer.request_started(target, body.keyword)
    try:
        report = build_report(
            body.html,
            keyword=body.keyword or None,
            target_url=body.base_url,
            observer=observer,
        )
    except AnalysisError as exc:
        _raise_analysis_failure(exc)
    observer.request_finished(target)
    return report.to_dict()


@router.get("/detect-intent", response_model=IntentResponse)
def detect_intent(keyword: Optional[str] = None) -> dict[str, Any]:
    """Classify the search intent of *keyword*."""
    value = _require(keyword, "keyword")
    return {"keyword": value, "intent": classify_intent(value)}


@router.get("/extract-sections")
async def sections(url: Optional[str] = None, user_agent: Optional[str] = None) -> dict[str, Any]:
    """Fetch *url* and return its heading → content sections."""
    target = ensure_scheme(_require(url, "url"))
    observer = AuditObserver()
    observer.request_started(target)
    result = await fetch_with_redirects(target, request_headers(user_agent))
    if isinstance(result, FetchFailure):
        observer.fetch_failed(target, result.kind, result.error)
        _raise_fetch_failure(result)
    found = await asyncio.to_thread(extract_sections, result.html)
    observer.request_finished(target, result.status_code)
    return {
        "url": result.final_url,
        "sections": [section.to_dict() for section in found],
    }
