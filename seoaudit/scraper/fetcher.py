"""Redirect-following HTTP fetcher.

Redirects are followed by hand (``follow_redirects=False`` at the transport
level) so that every hop can be recorded.  The loop is bounded by
``max_redirects``; exceeding it ends the fetch with a ``RedirectLoopError``
failure.  The whole walk, every hop and body read included, shares one
``timeout`` budget.
"""

from __future__ import annotations

import asyncio
from typing import Mapping

import httpx

from seoaudit.config import settings
from seoaudit.errors import HttpError, NetworkError, RedirectLoopError, SeoAuditError
from seoaudit.scraper.models import FetchFailure, FetchResult, FetchSuccess, RedirectHop


def _is_redirect(status_code: int) -> bool:
    return 300 <= status_code < 400


async def _follow(
    client: httpx.AsyncClient,
    url: str,
    headers: Mapping[str, str],
    max_redirects: int,
    chain: list[RedirectHop],
) -> FetchSuccess:
    """Walk the redirect chain, appending to *chain* as hops are observed.

    Raises:
        NetworkError: transport failure, timeout or an unsendable request.
        HttpError: final status outside 2xx.
        RedirectLoopError: more than *max_redirects* redirects.
    """
    current = url
    while True:
        try:
            response = await client.get(current, headers=dict(headers))
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Timed out fetching {current}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Could not fetch {current}: {exc}") from exc
        except ValueError as exc:
            # httpx encodes header values as ASCII; UnicodeEncodeError lands here.
            raise NetworkError(f"Could not build request for {current}: {exc}") from exc

        chain.append(RedirectHop(url=current, status_code=response.status_code))

        location = response.headers.get("location")
        if _is_redirect(response.status_code) and location:
            if len(chain) > max_redirects:
                raise RedirectLoopError(max_redirects, location)
            # Handles relative locations ("/next", "../x", "//host/x").
            current = str(response.url.join(location))
            continue

        if not 200 <= response.status_code < 300:
            raise HttpError(response.status_code, response.reason_phrase)

        return FetchSuccess(
            html=response.text,
            final_url=current,
            status_code=response.status_code,
            redirect_chain=list(chain),
        )


async def fetch_with_redirects(
    url: str,
    headers: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
    max_redirects: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> FetchResult:
    """Fetch *url*, following redirects manually, and return a fetch result.

    *url* must already be absolute; no scheme defaulting happens here.  Every
    fetch-layer error is returned as a :class:`FetchFailure` instead of being
    raised.  ``asyncio.CancelledError`` is not caught: a cancelled caller
    stops awaiting and the client context closes the connection.

    Args:
        url: Absolute ``http://`` or ``https://`` URL.
        headers: Request headers; defaults to ``settings.default_headers``.
        timeout: Overall budget in seconds for the whole redirect walk
            (``settings.request_timeout``).  It also bounds each connect and
            read phase.
        max_redirects: Redirect hop limit (``settings.max_redirects``).
        client: Optional pre-built client, mainly for tests.  It must not
            follow redirects itself.
    """
    headers = headers if headers is not None else settings.default_headers
    timeout = settings.request_timeout if timeout is None else timeout
    max_redirects = settings.max_redirects if max_redirects is None else max_redirects

    chain: list[RedirectHop] = []
    try:
        if client is not None:
            return await asyncio.wait_for(
                _follow(client, url, headers, max_redirects, chain), timeout
            )
        async with httpx.AsyncClient(follow_redirects=False, timeout=timeout) as own_client:
            return await asyncio.wait_for(
                _follow(own_client, url, headers, max_redirects, chain), timeout
            )
    except asyncio.TimeoutError:
        return FetchFailure(
            error=f"Timed out fetching {url} after {timeout:g}s",
            kind=NetworkError.__name__,
            redirect_chain=chain,
        )
    except HttpError as exc:
        return FetchFailure(
            error=str(exc),
            kind=type(exc).__name__,
            status_code=exc.status_code,
            redirect_chain=chain,
        )
    except SeoAuditError as exc:
        return FetchFailure(error=str(exc), kind=type(exc).__name__, redirect_chain=chain)
    except httpx.InvalidURL as exc:
        return FetchFailure(
            error=f"Invalid URL {url!r}: {exc}",
            kind=NetworkError.__name__,
            redirect_chain=chain,
        )
