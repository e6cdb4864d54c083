"""Suggestion generator and on-page issue checks.

``generate_suggestions`` is a pure function over the analyzer facts and the
keyword metrics.  Each rule fires independently; the output keeps rule order:

    1. keyword stuffing
    2. buzzword / cliché phrases
    3. images missing alt text
    4. no H1
    5. no internal links
"""

from __future__ import annotations

from typing import List

from seoaudit.analysis.models import AnalysisFacts, KeywordMetrics

BUZZWORDS = (
    "cutting-edge technology",
    "unlock the power of",
    "in today's fast-paced world",
    "game-changer",
    "game changer",
    "take it to the next level",
    "revolutionize the way",
    "best-in-class",
    "world-class",
    "state-of-the-art",
    "seamless integration",
    "paradigm shift",
    "synergy",
    "one-stop shop",
)

BASE_SCORE = 85
ISSUE_PENALTY = 5

DESCRIPTION_TAGS = {
    "openGraph": "og:description",
    "twitter": "twitter:description",
}


def find_buzzwords(text: str) -> List[str]:
    """Buzzword phrases present in *text*, in :data:`BUZZWORDS` order."""
    folded = " ".join(text.casefold().replace("’", "'").split())
    return [phrase for phrase in BUZZWORDS if phrase in folded]


def generate_suggestions(facts: AnalysisFacts, metrics: KeywordMetrics) -> List[str]:
    suggestions: List[str] = []

    if metrics.stuffing:
        suggestions.append(
            f'Keyword "{metrics.keyword}" appears {metrics.frequency} times; '
            "reduce its usage to avoid keyword stuffing."
        )

    buzzwords = find_buzzwords(facts.plain_text)
    if buzzwords:
        suggestions.append(
            "Replace generic marketing phrases: " + ", ".join(f'"{b}"' for b in buzzwords) + "."
        )

    if facts.images.missing_alt > 0:
        suggestions.append(
            f"Add descriptive alt text to {facts.images.missing_alt} image(s) missing it."
        )

    if facts.headings.h1_count == 0:
        suggestions.append("Add an H1 heading that states the page topic.")

    if facts.links.internal == 0:
        suggestions.append("Add internal links to related pages on your site.")

    return suggestions


def detect_issues(facts: AnalysisFacts) -> List[str]:
    """On-page problems that lower the SEO score, in a fixed order."""
    issues: List[str] = []
    metadata = facts.metadata

    if not metadata.title:
        issues.append("Missing title tag")

    if metadata.description_source == "missing":
        issues.append("Missing meta description")
    elif metadata.description_source != "meta":
        tag = DESCRIPTION_TAGS[metadata.description_source]
        issues.append(
            f'Description found via {tag}, not standard <meta name="description"> tag'
        )

    h1_count = facts.headings.h1_count
    if h1_count > 1:
        issues.append("Duplicate H1 tags")
    elif h1_count == 0:
        issues.append("Missing H1 tag")

    return issues


def seo_score(issues: List[str]) -> int:
    return max(0, BASE_SCORE - ISSUE_PENALTY * len(issues))
