"""Keyword metrics engine: frequency, density and stuffing classification.

Text and keyword are normalised the same way (lower-cased, punctuation
replaced by whitespace) before matching, so ``"SEO-tips"`` in the page
matches the keyword ``"seo tips"``.  Multi-word keywords match across any
run of whitespace.
"""

from __future__ import annotations

import re
from typing import Optional

from seoaudit.analysis.models import AnalysisFacts, KeywordMetrics, KeywordPlacement
from seoaudit.config import settings

_PUNCTUATION = re.compile(r"[^\w\s]+")


def normalize_text(text: str) -> str:
    """Lower-case *text* and turn punctuation into whitespace."""
    return _PUNCTUATION.sub(" ", text.lower())


def count_words(text: str) -> int:
    return len(normalize_text(text).split())


def keyword_pattern(keyword: Optional[str]) -> Optional[re.Pattern[str]]:
    """Whole-word / whole-phrase pattern for *keyword*, or ``None`` if blank."""
    words = normalize_text(keyword or "").split()
    if not words:
        return None
    body = r"\s+".join(re.escape(word) for word in words)
    return re.compile(rf"(?<!\w){body}(?!\w)")


def is_stuffing(
    frequency: int,
    total_word_count: int,
    max_count: Optional[int] = None,
    max_ratio: Optional[float] = None,
) -> bool:
    """Stuffing when the count exceeds *max_count* or the ratio exceeds *max_ratio*."""
    max_count = settings.stuffing_max_count if max_count is None else max_count
    max_ratio = settings.stuffing_max_ratio if max_ratio is None else max_ratio
    if frequency <= 0:
        return False
    if frequency > max_count:
        return True
    return total_word_count > 0 and frequency / total_word_count > max_ratio


def compute_keyword_metrics(
    plain_text: str,
    total_word_count: int,
    keyword: Optional[str],
    *,
    max_count: Optional[int] = None,
    max_ratio: Optional[float] = None,
) -> KeywordMetrics:
    """Count whole-word occurrences of *keyword* in *plain_text*.

    ``density`` is ``frequency / total_word_count * 100`` rounded to two
    decimals (``0`` for an empty page).  A blank keyword yields an
    un-analyzed zero result.
    """
    pattern = keyword_pattern(keyword)
    if pattern is None:
        return KeywordMetrics()

    frequency = len(pattern.findall(normalize_text(plain_text)))
    density = 0.0
    if total_word_count > 0:
        density = min(100.0, round(frequency / total_word_count * 100, 2))

    return KeywordMetrics(
        keyword=(keyword or "").strip(),
        frequency=frequency,
        density=density,
        stuffing=is_stuffing(frequency, total_word_count, max_count, max_ratio),
        analyzed=True,
    )


def keyword_placement(
    facts: AnalysisFacts, keyword: Optional[str], url: Optional[str] = None
) -> KeywordPlacement:
    """Where the keyword shows up outside the body text."""
    pattern = keyword_pattern(keyword)
    if pattern is None:
        return KeywordPlacement()

    def found(text: Optional[str]) -> bool:
        return bool(text) and pattern.search(normalize_text(text)) is not None

    return KeywordPlacement(
        in_title=found(facts.metadata.title),
        in_description=found(facts.metadata.description),
        in_h1=any(found(h1) for h1 in facts.headings.h1s),
        in_url=found(url),
    )
