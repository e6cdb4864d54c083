"""Frozen dataclasses describing everything derived from one page.

Absence is part of the type: optional facts are ``Optional[...]`` and are
``None`` when the page does not carry them.  Each model knows how to render
its slice of the canonical report JSON (camelCase keys).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

DescriptionSource = Literal["meta", "openGraph", "twitter", "missing"]

Intent = Literal[
    "Transactional",
    "Informational",
    "Navigational",
    "Commercial Investigation",
    "Unknown",
]


@dataclass(frozen=True)
class PageMetadata:
    title: Optional[str]
    description: Optional[str]
    description_source: DescriptionSource
    robots: Optional[str] = None
    canonical: Optional[str] = None
    viewport: Optional[str] = None
    lang: Optional[str] = None

    @property
    def title_length(self) -> int:
        return len(self.title or "")

    @property
    def description_length(self) -> int:
        return len(self.description or "")

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "titleLength": self.title_length,
            "description": self.description,
            "descriptionLength": self.description_length,
            "descriptionSource": self.description_source,
            "robots": self.robots,
            "canonical": self.canonical,
            "viewport": self.viewport,
            "lang": self.lang,
        }


@dataclass(frozen=True)
class HreflangLink:
    hreflang: str
    href: str

    def to_dict(self) -> dict[str, Any]:
        return {"hreflang": self.hreflang, "href": self.href}


@dataclass(frozen=True)
class StructuredDataFacts:
    json_ld_blocks: int = 0
    invalid_json_ld_blocks: int = 0
    types: Tuple[str, ...] = ()
    has_microdata: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonLdBlocks": self.json_ld_blocks,
            "invalidJsonLdBlocks": self.invalid_json_ld_blocks,
            "types": list(self.types),
            "hasMicrodata": self.has_microdata,
        }


@dataclass(frozen=True)
class HeadingFacts:
    """Per-level heading totals plus the full list of H1 texts."""

    counts: Dict[str, int]
    h1s: Tuple[str, ...] = ()

    @property
    def h1_count(self) -> int:
        return self.counts.get("h1", 0)


@dataclass(frozen=True)
class LinkRecord:
    href: str
    text: str
    internal: bool
    nofollow: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "href": self.href,
            "text": self.text,
            "internal": self.internal,
            "rel": "nofollow" if self.nofollow else "dofollow",
        }


@dataclass(frozen=True)
class LinkFacts:
    total: int = 0
    internal: int = 0
    external: int = 0
    dofollow: int = 0
    nofollow: int = 0
    paragraph_link_total: int = 0
    paragraph_links: Tuple[LinkRecord, ...] = ()
    paragraph_links_truncated: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "internal": self.internal,
            "external": self.external,
            "dofollow": self.dofollow,
            "nofollow": self.nofollow,
            "anchorsInParagraphs": {
                "total": self.paragraph_link_total,
                "detailedList": [link.to_dict() for link in self.paragraph_links],
                "truncated": self.paragraph_links_truncated,
            },
        }


@dataclass(frozen=True)
class ImageRecord:
    src: str
    alt: str

    @property
    def has_alt(self) -> bool:
        return bool(self.alt)

    def to_dict(self) -> dict[str, Any]:
        return {"src": self.src, "alt": self.alt, "hasAlt": self.has_alt}


@dataclass(frozen=True)
class ImageFacts:
    """Image alt statistics.

    Counts are always exact; ``details`` holds at most the configured limit
    and ``truncated`` tells whether records were dropped.
    """

    total: int = 0
    with_alt: int = 0
    missing_alt: int = 0
    details: Tuple[ImageRecord, ...] = ()
    truncated: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "imageAltStats": {
                "totalImages": self.total,
                "withAlt": self.with_alt,
                "missingAlt": self.missing_alt,
            },
            "detailedList": [image.to_dict() for image in self.details],
            "truncated": self.truncated,
        }


@dataclass(frozen=True)
class AnalysisFacts:
    """Single source of truth derived from one :class:`PageDocument`."""

    metadata: PageMetadata
    open_graph: Dict[str, str] = field(default_factory=dict)
    hreflang: Tuple[HreflangLink, ...] = ()
    structured_data: StructuredDataFacts = field(default_factory=StructuredDataFacts)
    headings: HeadingFacts = field(default_factory=lambda: HeadingFacts(counts={}))
    links: LinkFacts = field(default_factory=LinkFacts)
    images: ImageFacts = field(default_factory=ImageFacts)
    plain_text: str = ""
    word_count: int = 0
    base_url: Optional[str] = None
    keyword: Optional[str] = None


@dataclass(frozen=True)
class KeywordMetrics:
    """Frequency / density of the focus keyword.

    ``analyzed`` is ``False`` when no keyword was supplied, which means "no
    keyword analysis performed", not "keyword absent from the page".
    """

    keyword: str = ""
    frequency: int = 0
    density: float = 0.0
    stuffing: bool = False
    analyzed: bool = False


@dataclass(frozen=True)
class KeywordPlacement:
    in_title: bool = False
    in_description: bool = False
    in_h1: bool = False
    in_url: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "inTitle": self.in_title,
            "inDescription": self.in_description,
            "inH1": self.in_h1,
            "inUrl": self.in_url,
        }


@dataclass(frozen=True)
class ContentSection:
    heading_tag: str
    heading_text: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "headingTag": self.heading_tag,
            "headingText": self.heading_text,
            "content": self.content,
        }
