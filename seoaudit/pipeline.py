"""Audit pipeline.

``audit_url`` orchestrates one request from a URL to a :class:`Report`:

    fetch (redirects recorded) → parse once → analyze → sections + intent
    → keyword metrics → suggestions / issues → [robots.txt, sitemaps] → Report

``build_report`` runs everything after the fetch, so the same HTML can be
re-audited without touching the network.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from seoaudit.analysis.analyzer import analyze
from seoaudit.analysis.document import PageDocument
from seoaudit.analysis.heuristics import classify_intent, extract_sections
from seoaudit.analysis.keywords import compute_keyword_metrics, keyword_placement
from seoaudit.analysis.suggestions import detect_issues, generate_suggestions, seo_score
from seoaudit.config import settings
from seoaudit.errors import AnalysisError, SeoAuditError
from seoaudit.observability import AuditObserver
from seoaudit.report import Report
from seoaudit.scraper.fetcher import fetch_with_redirects
from seoaudit.scraper.models import Crawlability, FetchFailure, RedirectHop
from seoaudit.scraper.robots import discover_crawlability


def ensure_scheme(url: str) -> str:
    """Prefix ``https://`` when *url* carries no http(s) scheme."""
    url = url.strip()
    if url.lower().startswith(("http://", "https://")):
        return url
    return "https://" + url


def request_headers(user_agent: Optional[str] = None) -> dict[str, str]:
    headers = dict(settings.default_headers)
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers


def build_report(
    html: str,
    *,
    keyword: Optional[str] = None,
    target_url: Optional[str] = None,
    final_url: Optional[str] = None,
    status_code: Optional[int] = None,
    redirect_chain: Iterable[RedirectHop] = (),
    crawlability: Optional[Crawlability] = None,
    observer: Optional[AuditObserver] = None,
) -> Report:
    """Analyze *html* and assemble the full report.

    Raises:
        AnalysisError: anything unexpected went wrong during analysis.  No
            partial report is ever returned.
    """
    page_url = final_url or target_url
    try:
        doc = PageDocument.parse(html)
        facts = analyze(doc, keyword=keyword, base_url=page_url, observer=observer)
        sections = extract_sections(doc)
        metrics = compute_keyword_metrics(facts.plain_text, facts.word_count, keyword)

        if metrics.analyzed:
            intent, intent_source = classify_intent(keyword), "keyword"
        else:
            page_topic = " ".join(filter(None, [facts.metadata.title, *facts.headings.h1s[:1]]))
            intent, intent_source = classify_intent(page_topic), "page"

        issues = detect_issues(facts)
        return Report(
            target_url=target_url,
            final_url=page_url,
            status_code=status_code,
            facts=facts,
            keyword=metrics,
            placement=keyword_placement(facts, keyword, page_url),
            intent=intent,
            intent_source=intent_source,
            sections=tuple(sections),
            redirect_chain=tuple(redirect_chain),
            crawlability=crawlability or Crawlability(),
            issues=tuple(issues),
            seo_score=seo_score(issues),
            suggestions=tuple(generate_suggestions(facts, metrics)),
        )
    except SeoAuditError:
        raise
    except Exception as exc:
        if observer is not None:
            observer.analysis_failed(page_url or "<html>", exc)
        raise AnalysisError(f"Analysis failed: {exc}") from exc


async def audit_url(
    url: str,
    keyword: Optional[str] = None,
    *,
    user_agent: Optional[str] = None,
    discover_robots: Optional[bool] = None,
    observer: Optional[AuditObserver] = None,
) -> Report | FetchFailure:
    """Fetch *url* and audit the final document.

    *url* must already be absolute (see :func:`ensure_scheme`).  Fetch
    failures come back as a :class:`FetchFailure` value; analysis failures
    raise :class:`AnalysisError`.
    """
    observer = observer or AuditObserver()
    discover_robots = settings.discover_robots if discover_robots is None else discover_robots
    headers = request_headers(user_agent)

    observer.request_started(url, keyword)
    result = await fetch_with_redirects(url, headers)
    if isinstance(result, FetchFailure):
        observer.fetch_failed(url, result.kind, result.error)
        return result

    crawlability = None
    if discover_robots:
        crawlability = await discover_crawlability(result.final_url, headers)

    # Parsing is CPU-bound; keep it off the event loop.
    report = await asyncio.to_thread(
        build_report,
        result.html,
        keyword=keyword,
        target_url=url,
        final_url=result.final_url,
        status_code=result.status_code,
        redirect_chain=result.redirect_chain,
        crawlability=crawlability,
        observer=observer,
    )
    observer.request_finished(url, result.status_code)
    return report
