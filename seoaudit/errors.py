"""Error taxonomy for the audit pipeline.

Fetch-layer errors (:class:`NetworkError`, :class:`HttpError`,
:class:`RedirectLoopError`) never leave the fetcher as exceptions; they are
converted to a :class:`~seoaudit.scraper.models.FetchFailure` value.
:class:`ParseError` is recovered per JSON-LD block.  :class:`AnalysisError`
is the only one expected to reach the HTTP boundary.
"""

from __future__ import annotations


class SeoAuditError(Exception):
    """Base class for every error raised by this package."""


class NetworkError(SeoAuditError):
    """The fetch could not complete (DNS, timeout, connection reset)."""


class HttpError(SeoAuditError):
    """The final response status was outside 2xx."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        detail = f"{status_code} {reason}".strip()
        super().__init__(f"Request failed with status: {detail}")


class RedirectLoopError(SeoAuditError):
    """More redirect hops were observed than the configured maximum."""

    def __init__(self, max_redirects: int, last_url: str) -> None:
        self.max_redirects = max_redirects
        self.last_url = last_url
        super().__init__(
            f"Exceeded {max_redirects} redirects (last location: {last_url})"
        )


class ParseError(SeoAuditError):
    """A single structured-data block could not be decoded."""


class AnalysisError(SeoAuditError):
    """Unexpected failure inside the document analyzer."""
