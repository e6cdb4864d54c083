"""Logging collaborator for the audit pipeline.

Analysis functions never log directly.  The pipeline and the HTTP layer call
an :class:`AuditObserver` at fixed points instead:

    request_started   → a URL (or raw HTML) is about to be audited
    request_finished  → a report was assembled
    fetch_failed      → the fetcher returned a failure value
    parse_failed      → a JSON-LD block was skipped
    analysis_failed   → the analyzer raised unexpectedly
"""

from __future__ import annotations

import logging
import time

LOGGER = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stderr handler at *level* (idempotent)."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)


class AuditObserver:
    """Receives lifecycle events for a single audit and logs them."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or LOGGER
        self._started_at: float | None = None

    def request_started(self, target: str, keyword: str | None = None) -> None:
        self._started_at = time.perf_counter()
        self.logger.info("Audit started: %s (keyword=%r)", target, keyword)

    def request_finished(self, target: str, status_code: int | None = None) -> None:
        elapsed = 0.0
        if self._started_at is not None:
            elapsed = time.perf_counter() - self._started_at
        self.logger.info(
            "Audit finished: %s (status=%s, %.2fs)", target, status_code, elapsed
        )

    def fetch_failed(self, target: str, kind: str, error: str) -> None:
        self.logger.warning("Fetch failed for %s [%s]: %s", target, kind, error)

    def parse_failed(self, what: str, error: str) -> None:
        self.logger.debug("Skipping unparseable %s: %s", what, error)

    def analysis_failed(self, target: str, error: BaseException) -> None:
        self.logger.error("Analysis failed for %s: %s", target, error, exc_info=error)


class NullObserver(AuditObserver):
    """Observer that discards every event."""

    def request_started(self, target: str, keyword: str | None = None) -> None:
        return None

    def request_finished(self, target: str, status_code: int | None = None) -> None:
        return None

    def fetch_failed(self, target: str, kind: str, error: str) -> None:
        return None

    def parse_failed(self, what: str, error: str) -> None:
        return None

    def analysis_failed(self, target: str, error: BaseException) -> None:
        return None
