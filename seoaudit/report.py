"""The assembled audit report and its canonical JSON shape.

A :class:`Report` is built once per request and never mutated.  ``to_dict``
always emits every key; empty data renders as empty lists / maps, zeros or
``null``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from seoaudit.analysis.models import (
    AnalysisFacts,
    ContentSection,
    Intent,
    KeywordMetrics,
    KeywordPlacement,
)
from seoaudit.scraper.models import Crawlability, RedirectHop

SUCCESS_MESSAGE = "SEO analysis completed successfully"


@dataclass(frozen=True)
class Report:
    target_url: Optional[str]
    final_url: Optional[str]
    status_code: Optional[int]
    facts: AnalysisFacts
    keyword: KeywordMetrics
    placement: KeywordPlacement
    intent: Intent
    intent_source: str
    sections: Tuple[ContentSection, ...] = ()
    redirect_chain: Tuple[RedirectHop, ...] = ()
    crawlability: Crawlability = field(default_factory=Crawlability)
    issues: Tuple[str, ...] = ()
    seo_score: int = 0
    suggestions: Tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        facts = self.facts
        return {
            "targetUrl": self.target_url,
            "finalUrl": self.final_url,
            "statusCode": self.status_code,
            "message": SUCCESS_MESSAGE,
            "redirectChain": [hop.to_dict() for hop in self.redirect_chain],
            "metadata": facts.metadata.to_dict(),
            "openGraph": dict(facts.open_graph),
            "hreflang": [link.to_dict() for link in facts.hreflang],
            "structuredData": facts.structured_data.to_dict(),
            "content": {
                "wordCount": facts.word_count,
                "headingStats": dict(facts.headings.counts),
                "h1s": list(facts.headings.h1s),
                "keyword": {
                    "keyword": self.keyword.keyword,
                    "analyzed": self.keyword.analyzed,
                    "frequency": self.keyword.frequency,
                    "density": self.keyword.density,
                    "stuffing": self.keyword.stuffing,
                    "placement": self.placement.to_dict(),
                },
            },
            "links": facts.links.to_dict(),
            "images": facts.images.to_dict(),
            "intent": self.intent,
            "intentSource": self.intent_source,
            "contentSections": [section.to_dict() for section in self.sections],
            "crawlability": self.crawlability.to_dict(),
            "issues": list(self.issues),
            "seoScore": self.seo_score,
            "suggestions": list(self.suggestions),
        }
