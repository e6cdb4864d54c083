"""Scraper package: redirect-following fetch & crawlability discovery."""

from seoaudit.scraper.fetcher import fetch_with_redirects
from seoaudit.scraper.models import (
    Crawlability,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    RedirectHop,
)
from seoaudit.scraper.robots import discover_crawlability

__all__ = [
    "fetch_with_redirects",
    "discover_crawlability",
    "Crawlability",
    "FetchFailure",
    "FetchResult",
    "FetchSuccess",
    "RedirectHop",
]
