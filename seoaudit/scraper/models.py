"""Data models for the fetch stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Union


@dataclass(frozen=True)
class RedirectHop:
    """One HTTP response observed while following redirects."""

    url: str
    status_code: int

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "statusCode": self.status_code}


@dataclass(frozen=True)
class FetchSuccess:
    """The final 2xx response body and the chain that led to it."""

    html: str
    final_url: str
    status_code: int
    redirect_chain: List[RedirectHop] = field(default_factory=list)

    ok = True


@dataclass(frozen=True)
class FetchFailure:
    """A fetch that could not produce a 2xx body.

    ``kind`` is the name of the error class that ended the fetch
    (``NetworkError``, ``HttpError`` or ``RedirectLoopError``).  ``status_code``
    is the upstream status for ``HttpError`` and ``None`` otherwise.
    Serialised keys (``upstreamStatus``, ``partialChain``) differ from the
    success shape so a failure never reads as a partial success.
    """

    error: str
    kind: str
    status_code: int | None = None
    redirect_chain: List[RedirectHop] = field(default_factory=list)

    ok = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "kind": self.kind,
            "upstreamStatus": self.status_code,
            "partialChain": [hop.to_dict() for hop in self.redirect_chain],
        }


FetchResult = Union[FetchSuccess, FetchFailure]


@dataclass(frozen=True)
class Crawlability:
    """Best-effort robots.txt / sitemap discovery for the page's origin.

    ``robots_txt`` is ``None`` when discovery was not requested.
    """

    robots_txt: str | None = None
    sitemaps: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"robotsTxt": self.robots_txt, "sitemaps": list(self.sitemaps)}
