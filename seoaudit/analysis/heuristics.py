"""Content heuristics: search-intent classification and section extraction."""

from __future__ import annotations

import re
from typing import List, Optional

from bs4.element import NavigableString, PreformattedString, Tag

from seoaudit.analysis.document import HEADING_TAGS, PageDocument, collapse_whitespace
from seoaudit.analysis.models import ContentSection, Intent

# Ordered rule chain: the first matching rule decides.  Patterns are plain
# substring alternations over case-folded text.
INTENT_RULES: tuple[tuple[Intent, re.Pattern[str]], ...] = (
    ("Transactional", re.compile(r"buy|purchase|order|discount|coupon|deal")),
    ("Informational", re.compile(r"how to|what is|guide|tutorial|tips|learn")),
    ("Navigational", re.compile(r"login|sign in|homepage|official site")),
    ("Commercial Investigation", re.compile(r"best|compare|review|top|vs|alternative")),
)

_NON_CONTENT_SIBLINGS = frozenset({"script", "style", "noscript", "template"})


def classify_intent(text: Optional[str]) -> Intent:
    """Map *text* (usually a keyword) to a coarse search-intent label."""
    folded = (text or "").casefold()
    for label, pattern in INTENT_RULES:
        if pattern.search(folded):
            return label
    return "Unknown"


def _sibling_text(node: object) -> str:
    if isinstance(node, Tag):
        if node.name in _NON_CONTENT_SIBLINGS:
            return ""
        return node.get_text()
    if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
        return str(node)
    return ""


def extract_sections(source: str | PageDocument) -> List[ContentSection]:
    """Group each heading with the sibling content that follows it.

    For every h1–h6 in document order, the section content is the text of
    all following siblings up to (not including) the next heading element.
    A heading with nothing after it yields empty content.  Duplicate
    heading texts are kept.
    """
    doc = source if isinstance(source, PageDocument) else PageDocument.parse(source)
    sections: List[ContentSection] = []
    for heading in doc.iter_heading_elements():
        parts: List[str] = []
        for sibling in heading.next_siblings:
            if isinstance(sibling, Tag) and sibling.name in HEADING_TAGS:
                break
            parts.append(_sibling_text(sibling))
        sections.append(
            ContentSection(
                heading_tag=heading.name,
                heading_text=collapse_whitespace(heading.get_text()),
                content=collapse_whitespace(" ".join(parts)),
            )
        )
    return sections
