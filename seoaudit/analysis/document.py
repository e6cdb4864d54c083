"""Immutable parsed view over a fetched HTML document.

A :class:`PageDocument` is built once per fetch.  Every derivation (facts,
sections, plain text) reads from it; nothing downstream re-parses markup.
Malformed or partial markup never raises: missing elements surface as
``None`` / empty collections.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# Elements whose text is never visible page content.
_NON_CONTENT_TAGS = frozenset({"script", "style", "noscript", "template", "title"})

_MICRODATA_ATTRS = ("itemscope", "itemtype", "itemprop")

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def _attr_text(value: object) -> str:
    # bs4 returns multi-valued attributes (rel, class) as lists.
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return "" if value is None else str(value)


def _ci(value: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*{re.escape(value)}\s*$", re.IGNORECASE)


# Media type match; parameters after ";" (charset=...) are ignored.
_JSON_LD_TYPE = re.compile(r"^\s*application/ld\+json\s*(?:;.*)?$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class AnchorElement:
    href: str
    text: str
    rel: str
    in_paragraph: bool


@dataclass(frozen=True)
class ImageElement:
    src: str
    alt: Optional[str]


@dataclass(frozen=True)
class AlternateLink:
    hreflang: str
    href: str


class PageDocument:
    """Read-only accessors over one parsed HTML document."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html or "", "html.parser")

    @classmethod
    def parse(cls, html: str) -> "PageDocument":
        return cls(html)

    # ------------------------------------------------------------------
    # Head metadata
    # ------------------------------------------------------------------
    @cached_property
    def title(self) -> Optional[str]:
        tag = self._soup.find("title")
        if tag is None:
            return None
        return collapse_whitespace(tag.get_text())

    def find_meta(self, *, name: str | None = None, prop: str | None = None) -> Optional[Tag]:
        """Return the first ``<meta>`` whose ``name`` or ``property`` matches.

        Matching is case-insensitive.  When both *name* and *prop* are given
        either attribute may match (Twitter tags appear under both).
        """
        if name is not None:
            tag = self._soup.find("meta", attrs={"name": _ci(name)})
            if tag is not None:
                return tag
        if prop is not None:
            return self._soup.find("meta", attrs={"property": _ci(prop)})
        return None

    def meta_content(self, *, name: str | None = None, prop: str | None = None) -> Optional[str]:
        """Trimmed ``content`` of the matching ``<meta>``, ``""`` if it has none,
        ``None`` if no such tag exists."""
        tag = self.find_meta(name=name, prop=prop)
        if tag is None:
            return None
        return _attr_text(tag.get("content")).strip()

    @cached_property
    def canonical(self) -> Optional[str]:
        tag = self._soup.find("link", attrs={"rel": _ci("canonical")})
        if tag is None or not tag.get("href"):
            return None
        return _attr_text(tag.get("href")).strip()

    @cached_property
    def lang(self) -> Optional[str]:
        html_tag = self._soup.find("html")
        if html_tag is None or not html_tag.get("lang"):
            return None
        return _attr_text(html_tag.get("lang")).strip()

    @cached_property
    def open_graph(self) -> dict[str, str]:
        """``og:*`` properties in document order; the first occurrence wins."""
        tags: dict[str, str] = {}
        for meta in self._soup.find_all("meta", attrs={"property": re.compile(r"^og:", re.I)}):
            key = _attr_text(meta.get("property")).strip().lower()
            if key not in tags:
                tags[key] = _attr_text(meta.get("content")).strip()
        return tags

    @cached_property
    def alternates(self) -> List[AlternateLink]:
        links: List[AlternateLink] = []
        for tag in self._soup.find_all("link", attrs={"hreflang": True}):
            rel = _attr_text(tag.get("rel")).lower().split()
            if "alternate" not in rel:
                continue
            links.append(
                AlternateLink(
                    hreflang=_attr_text(tag.get("hreflang")).strip(),
                    href=_attr_text(tag.get("href")).strip(),
                )
            )
        return links

    # ------------------------------------------------------------------
    # Structured data
    # ------------------------------------------------------------------
    @cached_property
    def json_ld_blocks(self) -> List[str]:
        """Raw text of every ``<script type="application/ld+json">``."""
        return [
            script.get_text()
            for script in self._soup.find_all("script", attrs={"type": _JSON_LD_TYPE})
        ]

    @cached_property
    def has_microdata(self) -> bool:
        found = self._soup.find(
            lambda tag: any(tag.has_attr(attr) for attr in _MICRODATA_ATTRS)
        )
        return found is not None

    # ------------------------------------------------------------------
    # Body elements
    # ------------------------------------------------------------------
    def iter_heading_elements(self) -> Iterator[Tag]:
        """Yield every h1–h6 element in document order."""
        yield from self._soup.find_all(list(HEADING_TAGS))

    @cached_property
    def headings(self) -> List[tuple[str, str]]:
        """``(tag, text)`` pairs for every heading, in document order."""
        return [
            (tag.name, collapse_whitespace(tag.get_text()))
            for tag in self.iter_heading_elements()
        ]

    @cached_property
    def anchors(self) -> List[AnchorElement]:
        """Every ``<a>`` carrying an ``href`` attribute."""
        anchors: List[AnchorElement] = []
        for tag in self._soup.find_all("a", href=True):
            anchors.append(
                AnchorElement(
                    href=_attr_text(tag.get("href")).strip(),
                    text=collapse_whitespace(tag.get_text()),
                    rel=_attr_text(tag.get("rel")).lower(),
                    in_paragraph=tag.find_parent("p") is not None,
                )
            )
        return anchors

    @cached_property
    def images(self) -> List[ImageElement]:
        images: List[ImageElement] = []
        for tag in self._soup.find_all("img"):
            src = tag.get("src") or tag.get("data-src") or ""
            alt = tag.get("alt")
            images.append(
                ImageElement(
                    src=_attr_text(src).strip(),
                    alt=None if alt is None else _attr_text(alt).strip(),
                )
            )
        return images

    @cached_property
    def plain_text(self) -> str:
        """Visible text of the document, whitespace-collapsed."""
        root = self._soup.body or self._soup
        pieces = [
            str(node)
            for node in root.find_all(string=True)
            if not isinstance(node, PreformattedString)
            and not any(parent.name in _NON_CONTENT_TAGS for parent in node.parents)
        ]
        return collapse_whitespace(" ".join(pieces))
