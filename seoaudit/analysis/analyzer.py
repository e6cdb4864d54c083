"""Single-pass document analyzer.

``analyze`` turns one :class:`PageDocument` into :class:`AnalysisFacts`:

    metadata (with description provenance) → Open Graph → hreflang
    → structured data → headings → links → images → plain text
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional
from urllib.parse import urlsplit

from seoaudit.analysis.document import HEADING_TAGS, PageDocument
from seoaudit.analysis.keywords import count_words
from seoaudit.analysis.models import (
    AnalysisFacts,
    HeadingFacts,
    HreflangLink,
    ImageFacts,
    ImageRecord,
    LinkFacts,
    LinkRecord,
    PageMetadata,
    StructuredDataFacts,
)
from seoaudit.config import settings
from seoaudit.errors import ParseError
from seoaudit.observability import AuditObserver, NullObserver

# Hrefs with these schemes are not content links and are never counted.
EXCLUDED_SCHEMES = ("javascript:", "mailto:", "tel:")

# Description sources in priority order: (provenance, meta name, meta property).
_DESCRIPTION_SOURCES = (
    ("meta", "description", None),
    ("openGraph", None, "og:description"),
    ("twitter", "twitter:description", "twitter:description"),
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _hostname(base_url: Optional[str]) -> Optional[str]:
    if not base_url:
        return None
    return urlsplit(base_url).hostname


def _extract_metadata(doc: PageDocument) -> PageMetadata:
    description: Optional[str] = None
    source = "missing"
    for provenance, name, prop in _DESCRIPTION_SOURCES:
        content = doc.meta_content(name=name, prop=prop)
        if content is not None:
            description, source = content, provenance
            break

    return PageMetadata(
        title=doc.title,
        description=description,
        description_source=source,  # type: ignore[arg-type]
        robots=doc.meta_content(name="robots"),
        canonical=doc.canonical,
        viewport=doc.meta_content(name="viewport"),
        lang=doc.lang,
    )


def _flatten_types(value: Any) -> Iterable[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, str):
                yield item


def _entities(data: Any) -> Iterable[dict]:
    """Top-level JSON-LD entities, expanding lists and ``@graph`` containers."""
    if isinstance(data, list):
        for item in data:
            yield from _entities(item)
    elif isinstance(data, dict):
        yield data
        graph = data.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                yield from _entities(item)


def _parse_json_ld(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON-LD block: {exc}") from exc


def _extract_structured_data(doc: PageDocument, observer: AuditObserver) -> StructuredDataFacts:
    types: list[str] = []
    parsed = invalid = 0
    for raw in doc.json_ld_blocks:
        try:
            data = _parse_json_ld(raw)
        except ParseError as exc:
            invalid += 1
            observer.parse_failed("JSON-LD block", str(exc))
            continue
        parsed += 1
        for entity in _entities(data):
            for type_name in _flatten_types(entity.get("@type")):
                if type_name not in types:
                    types.append(type_name)

    return StructuredDataFacts(
        json_ld_blocks=parsed,
        invalid_json_ld_blocks=invalid,
        types=tuple(types),
        has_microdata=doc.has_microdata,
    )


def _extract_headings(doc: PageDocument) -> HeadingFacts:
    counts = {tag: 0 for tag in HEADING_TAGS}
    h1s: list[str] = []
    for tag, text in doc.headings:
        counts[tag] += 1
        if tag == "h1":
            h1s.append(text)
    return HeadingFacts(counts=counts, h1s=tuple(h1s))


def classify_link(href: str, hostname: Optional[str]) -> Optional[bool]:
    """Return ``True`` for internal, ``False`` for external, ``None`` if excluded.

    Classification is textual only: an href is internal when it is
    root-relative (``/about``) or mentions the page's hostname.
    Protocol-relative hrefs (``//host/x``) are internal only when they name
    the page's host.  Fragment-only hrefs point inside the page and are
    excluded along with ``javascript:``, ``mailto:`` and ``tel:`` links.
    """
    value = href.strip()
    if not value or value.startswith("#"):
        return None
    if value.lower().startswith(EXCLUDED_SCHEMES):
        return None
    if hostname and hostname.lower() in value.lower():
        return True
    return value.startswith("/") and not value.startswith("//")


def _extract_links(doc: PageDocument, hostname: Optional[str], limit: int) -> LinkFacts:
    total = internal = nofollow = 0
    in_paragraph: list[LinkRecord] = []
    for anchor in doc.anchors:
        is_internal = classify_link(anchor.href, hostname)
        if is_internal is None:
            continue
        is_nofollow = "nofollow" in anchor.rel.split()
        total += 1
        internal += int(is_internal)
        nofollow += int(is_nofollow)
        if anchor.in_paragraph:
            in_paragraph.append(
                LinkRecord(
                    href=anchor.href,
                    text=anchor.text,
                    internal=is_internal,
                    nofollow=is_nofollow,
                )
            )

    return LinkFacts(
        total=total,
        internal=internal,
        external=total - internal,
        dofollow=total - nofollow,
        nofollow=nofollow,
        paragraph_link_total=len(in_paragraph),
        paragraph_links=tuple(in_paragraph[:limit]),
        paragraph_links_truncated=len(in_paragraph) > limit,
    )


def _extract_images(doc: PageDocument, limit: int) -> ImageFacts:
    records = [ImageRecord(src=image.src, alt=image.alt or "") for image in doc.images]
    with_alt = sum(1 for record in records if record.has_alt)
    return ImageFacts(
        total=len(records),
        with_alt=with_alt,
        missing_alt=len(records) - with_alt,
        details=tuple(records[:limit]),
        truncated=len(records) > limit,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze(
    source: str | PageDocument,
    *,
    keyword: Optional[str] = None,
    base_url: Optional[str] = None,
    detail_limit: Optional[int] = None,
    observer: Optional[AuditObserver] = None,
) -> AnalysisFacts:
    """Derive every report fact from one parsed document.

    Args:
        source: Raw HTML or an already-built :class:`PageDocument`.
        keyword: Focus keyword, carried through for downstream consumers.
        base_url: URL of the page; its hostname drives link internality.
        detail_limit: Maximum length of the detailed image / paragraph-link
            lists (``settings.detail_list_limit``).
        observer: Receives per-block JSON-LD parse failures.

    The result depends only on the document and the arguments, so re-running
    on the same markup yields identical facts.
    """
    doc = source if isinstance(source, PageDocument) else PageDocument.parse(source)
    limit = settings.detail_list_limit if detail_limit is None else detail_limit
    observer = observer or NullObserver()

    plain_text = doc.plain_text
    return AnalysisFacts(
        metadata=_extract_metadata(doc),
        open_graph=dict(doc.open_graph),
        hreflang=tuple(
            HreflangLink(hreflang=alt.hreflang, href=alt.href) for alt in doc.alternates
        ),
        structured_data=_extract_structured_data(doc, observer),
        headings=_extract_headings(doc),
        links=_extract_links(doc, _hostname(base_url), limit),
        images=_extract_images(doc, limit),
        plain_text=plain_text,
        word_count=count_words(plain_text),
        base_url=base_url,
        keyword=keyword or None,
    )
