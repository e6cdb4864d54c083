"""Analysis package: document facts, keyword metrics, heuristics, suggestions."""

from seoaudit.analysis.analyzer import analyze, classify_link
from seoaudit.analysis.document import PageDocument
from seoaudit.analysis.heuristics import classify_intent, extract_sections
from seoaudit.analysis.keywords import compute_keyword_metrics
from seoaudit.analysis.models import AnalysisFacts, ContentSection, KeywordMetrics
from seoaudit.analysis.suggestions import generate_suggestions

__all__ = [
    "analyze",
    "classify_link",
    "PageDocument",
    "classify_intent",
    "extract_sections",
    "compute_keyword_metrics",
    "generate_suggestions",
    "AnalysisFacts",
    "ContentSection",
    "KeywordMetrics",
]
