"""SEO audit CLI: entry-point for running audits from a terminal.

Usage:
    seoaudit --help

Commands:
    audit         → fetch a URL and print its report
    analyze-file  → audit a local HTML file (no network)
    intent        → classify the search intent of a keyword
    sections      → list heading → content sections of a local HTML file
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from seoaudit.analysis.heuristics import classify_intent, extract_sections
from seoaudit.config import settings
from seoaudit.errors import AnalysisError
from seoaudit.observability import configure_logging
from seoaudit.pipeline import audit_url, build_report, ensure_scheme
from seoaudit.report import Report
from seoaudit.scraper.models import FetchFailure

app = typer.Typer(
    name="seoaudit",
    help="Single-page SEO audit CLI.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _print_summary(report: Report) -> None:
    data = report.to_dict()
    meta = data["metadata"]
    content = data["content"]
    links = data["links"]
    images = data["images"]["imageAltStats"]

    for hop in data["redirectChain"]:
        typer.echo(f"[hop] {hop['statusCode']}  {hop['url']}")
    typer.echo(f"[audit] Title       : {meta['title'] or '(none)'}")
    typer.echo(f"[audit] Description : {meta['description'] or '(none)'}  [{meta['descriptionSource']}]")
    typer.echo(f"[audit] Words       : {content['wordCount']}")
    typer.echo(f"[audit] H1s         : {content['headingStats']['h1']}")
    typer.echo(f"[audit] Links       : {links['total']} ({links['internal']} internal, {links['nofollow']} nofollow)")
    typer.echo(f"[audit] Images      : {images['totalImages']} ({images['missingAlt']} missing alt)")
    typer.echo(f"[audit] Intent      : {data['intent']} (from {data['intentSource']})")
    if content["keyword"]["analyzed"]:
        kw = content["keyword"]
        flag = "  STUFFED" if kw["stuffing"] else ""
        typer.echo(f"[audit] Keyword     : {kw['keyword']!r} x{kw['frequency']} ({kw['density']}%){flag}")
    typer.echo(f"[audit] SEO score   : {data['seoScore']}")
    for issue in data["issues"]:
        typer.echo(f"  ! {issue}")
    for suggestion in data["suggestions"]:
        typer.echo(f"  - {suggestion}")


def _emit(report: Report, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_summary(report)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("audit")
def audit(
    url: str = typer.Option(..., help="URL to audit (https:// is assumed when missing)."),
    keyword: Optional[str] = typer.Option(None, help="Focus keyword."),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User-Agent override."),
    robots: bool = typer.Option(False, "--robots", help="Also look up robots.txt and sitemaps."),
    as_json: bool = typer.Option(False, "--json", help="Print the full JSON report."),
) -> None:
    """Fetch a URL and print its SEO report."""
    configure_logging(settings.log_level)
    target = ensure_scheme(url)
    try:
        result = asyncio.run(
            audit_url(target, keyword, user_agent=user_agent, discover_robots=robots)
        )
    except AnalysisError as exc:
        typer.echo(f"[audit] {exc}", err=True)
        raise typer.Exit(code=1)

    if isinstance(result, FetchFailure):
        typer.echo(f"[audit] Fetch failed ({result.kind}): {result.error}", err=True)
        raise typer.Exit(code=1)
    _emit(result, as_json)


@app.command("analyze-file")
def analyze_file(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local HTML file."),
    keyword: Optional[str] = typer.Option(None, help="Focus keyword."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="URL the page is served from."),
    as_json: bool = typer.Option(False, "--json", help="Print the full JSON report."),
) -> None:
    """Audit a saved HTML file without touching the network."""
    html = path.read_text(encoding="utf-8", errors="replace")
    try:
        report = build_report(html, keyword=keyword, target_url=base_url)
    except AnalysisError as exc:
        typer.echo(f"[analyze-file] {exc}", err=True)
        raise typer.Exit(code=1)
    _emit(report, as_json)


@app.command("intent")
def intent(text: str = typer.Argument(..., help="Keyword or phrase.")) -> None:
    """Classify the search intent of a keyword."""
    typer.echo(classify_intent(text))


@app.command("sections")
def sections(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local HTML file."),
) -> None:
    """Print heading → content sections of a local HTML file."""
    html = path.read_text(encoding="utf-8", errors="replace")
    found = extract_sections(html)
    if not found:
        typer.echo("[sections] No headings found.")
        return
    for section in found:
        typer.echo(f"[{section.heading_tag}] {section.heading_text}")
        if section.content:
            typer.echo(f"    {section.content}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
