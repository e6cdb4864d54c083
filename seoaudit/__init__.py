"""SEO page audit: redirect-following fetch plus single-pass HTML analysis.

Typical use::

    from seoaudit import audit_url, ensure_scheme

    report = await audit_url(ensure_scheme("example.com"), keyword="seo audit")
"""

from seoaudit.pipeline import audit_url, build_report, ensure_scheme
from seoaudit.report import Report

__all__ = ["audit_url", "build_report", "ensure_scheme", "Report"]
