"""Auxiliary robots.txt and sitemap discovery.

Both lookups are best-effort: any failure degrades to a placeholder
(``ROBOTS_NOT_FOUND`` / an empty sitemap list) and never aborts an audit.
"""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlsplit

import httpx

from seoaudit.config import settings
from seoaudit.scraper.models import Crawlability

ROBOTS_NOT_FOUND = "robots.txt not found"

# Probed in order when robots.txt declares no Sitemap: entries.
SITEMAP_PROBES = ("/sitemap.xml", "/sitemap_index.xml")


def origin_of(url: str) -> str | None:
    """Return ``scheme://host[:port]`` for *url*, or ``None`` if it has no host."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def parse_sitemap_directives(robots_txt: str) -> list[str]:
    """Return the deduplicated ``Sitemap:`` URLs declared in *robots_txt*."""
    sitemaps: list[str] = []
    for line in robots_txt.splitlines():
        name, sep, value = line.partition(":")
        if not sep or name.strip().lower() != "sitemap":
            continue
        value = value.strip()
        if value and value not in sitemaps:
            sitemaps.append(value)
    return sitemaps


async def _get_text(client: httpx.AsyncClient, url: str) -> str | None:
    try:
        response = await client.get(url)
    except httpx.HTTPError:
        return None
    if response.status_code != 200:
        return None
    return response.text


async def _discover(client: httpx.AsyncClient, origin: str) -> Crawlability:
    robots_txt = await _get_text(client, f"{origin}/robots.txt")
    if robots_txt is None:
        robots_txt = ROBOTS_NOT_FOUND
        declared: list[str] = []
    else:
        declared = parse_sitemap_directives(robots_txt)

    if declared:
        return Crawlability(robots_txt=robots_txt, sitemaps=declared)

    found: list[str] = []
    for path in SITEMAP_PROBES:
        candidate = f"{origin}{path}"
        if await _get_text(client, candidate) is not None:
            found.append(candidate)
    return Crawlability(robots_txt=robots_txt, sitemaps=found)


async def discover_crawlability(
    page_url: str,
    headers: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> Crawlability:
    """Fetch ``{origin}/robots.txt`` for *page_url* and locate its sitemaps.

    Sitemaps come from ``Sitemap:`` directives when present, otherwise from
    whichever of :data:`SITEMAP_PROBES` answer 200.
    """
    origin = origin_of(page_url)
    if origin is None:
        return Crawlability(robots_txt=ROBOTS_NOT_FOUND, sitemaps=[])

    if client is not None:
        return await _discover(client, origin)

    headers = headers if headers is not None else settings.default_headers
    timeout = settings.request_timeout if timeout is None else timeout
    async with httpx.AsyncClient(
        headers=dict(headers), timeout=timeout, follow_redirects=True
    ) as own_client:
        return await _discover(own_client, origin)
