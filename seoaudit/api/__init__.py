"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from seoaudit.api import app

    uvicorn seoaudit.api:app --reload
"""

from seoaudit.api.app import app

__all__ = ["app"]
