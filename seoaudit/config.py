"""Centralised settings for the SEO audit service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SEOAUDIT_REQUEST_TIMEOUT", "15.0"))
    )
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("SEOAUDIT_MAX_REDIRECTS", "10"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "SEOAUDIT_USER_AGENT", "Mozilla/5.0 (compatible; SEOAudit/1.0)"
        )
    )

    # ------------------------------------------------------------------
    # Keyword stuffing policy
    # ------------------------------------------------------------------
    stuffing_max_count: int = field(
        default_factory=lambda: int(os.environ.get("SEOAUDIT_STUFFING_MAX_COUNT", "30"))
    )
    stuffing_max_ratio: float = field(
        default_factory=lambda: float(os.environ.get("SEOAUDIT_STUFFING_MAX_RATIO", "0.05"))
    )

    # ------------------------------------------------------------------
    # Report shaping
    # ------------------------------------------------------------------
    detail_list_limit: int = field(
        default_factory=lambda: int(os.environ.get("SEOAUDIT_DETAIL_LIST_LIMIT", "50"))
    )
    discover_robots: bool = field(
        default_factory=lambda: _env_bool("SEOAUDIT_DISCOVER_ROBOTS", "false")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("SEOAUDIT_LOG_LEVEL", "INFO")
    )

    @property
    def default_headers(self) -> dict[str, str]:
        """Request headers sent when the caller does not supply any."""
        return {"User-Agent": self.user_agent, "Accept": "text/html"}


# Module-level singleton, import this everywhere:
#   from seoaudit.config import settings
settings = Settings()
