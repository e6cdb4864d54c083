"""FastAPI application factory.

Routers
-------
The audit endpoints are mounted at the root:

    /seo-check         fetch + full report
    /analyze-html      report for supplied markup (no network)
    /detect-intent     keyword intent label
    /extract-sections  heading to content sections of a fetched page
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seoaudit.api.routers import audit as audit_router
from seoaudit.config import settings
from seoaudit.observability import configure_logging


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging(settings.log_level)

    app = FastAPI(
        title="SEO Audit API",
        description=(
            "Fetches a page (recording its redirect chain) and reports metadata, "
            "headings, links, images, structured data, keyword usage, search "
            "intent, content sections and remediation suggestions."
        ),
        version="1.0.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(audit_router.router, tags=["audit"])

    @app.get("/health", tags=["meta"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn seoaudit.api.app:app --reload
app = create_app()
