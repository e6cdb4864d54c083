"""Tests for the suggestion generator and the issue / score checks."""

from __future__ import annotations

from seoaudit.analysis.analyzer import analyze
from seoaudit.analysis.keywords import compute_keyword_metrics
from seoaudit.analysis.models import KeywordMetrics
from seoaudit.analysis.suggestions import (
    detect_issues,
    find_buzzwords,
    generate_suggestions,
    seo_score,
)

_CLEAN_HTML = """\
<html><head>
<title>Trail Running Guide</title>
<meta name="description" content="How to pick trail shoes.">
</head><body>
<h1>Trail Running</h1>
<p>Pick shoes with grip. See our <a href="/shoes">shoe list</a>.</p>
<img src="/trail.png" alt="A trail">
</body></html>
"""


class TestFindBuzzwords:
    def test_matches_in_list_order(self) -> None:
        text = "Unlock the power of our Cutting-Edge Technology today."
        assert find_buzzwords(text) == ["cutting-edge technology", "unlock the power of"]

    def test_curly_apostrophe_and_spacing(self) -> None:
        assert find_buzzwords("In  today’s fast-paced\nworld") == ["in today's fast-paced world"]

    def test_none_found(self) -> None:
        assert find_buzzwords("Plain, specific copy.") == []


class TestGenerateSuggestions:
    def test_clean_page_has_no_suggestions(self) -> None:
        facts = analyze(_CLEAN_HTML, base_url="https://example.com/")
        assert generate_suggestions(facts, KeywordMetrics()) == []

    def test_all_rules_fire_in_order(self) -> None:
        html = (
            "<body><p>" + "shoes " * 40 + "with cutting-edge technology</p>"
            '<img src="/a.png"><img src="/b.png" alt="">'
            '<a href="https://other.com/">elsewhere</a></body>'
        )
        facts = analyze(html, base_url="https://example.com/")
        metrics = compute_keyword_metrics(facts.plain_text, facts.word_count, "shoes")
        suggestions = generate_suggestions(facts, metrics)

        assert len(suggestions) == 5
        assert '"shoes"' in suggestions[0] and "40" in suggestions[0]
        assert "cutting-edge technology" in suggestions[1]
        assert "2 image(s)" in suggestions[2]
        assert "H1" in suggestions[3]
        assert "internal links" in suggestions[4]

    def test_only_triggered_rules_are_emitted(self) -> None:
        html = "<h1>Title</h1><p><a href='/x'>x</a></p><img src='/a.png'>"
        facts = analyze(html, base_url="https://example.com/")
        suggestions = generate_suggestions(facts, KeywordMetrics())
        assert suggestions == ["Add descriptive alt text to 1 image(s) missing it."]

    def test_unanalyzed_keyword_never_flags_stuffing(self) -> None:
        facts = analyze(_CLEAN_HTML, base_url="https://example.com/")
        metrics = compute_keyword_metrics(facts.plain_text, facts.word_count, None)
        assert not any("stuffing" in s for s in generate_suggestions(facts, metrics))


class TestDetectIssues:
    def test_clean_page(self) -> None:
        facts = analyze(_CLEAN_HTML)
        assert detect_issues(facts) == []
        assert seo_score([]) == 85

    def test_og_description_provenance_issue(self) -> None:
        facts = analyze(
            '<title>T</title><meta property="og:description" content="x"><h1>A</h1>'
        )
        assert detect_issues(facts) == [
            'Description found via og:description, not standard <meta name="description"> tag'
        ]

    def test_twitter_description_provenance_issue(self) -> None:
        facts = analyze(
            '<title>T</title><meta name="twitter:description" content="x"><h1>A</h1>'
        )
        assert "twitter:description" in detect_issues(facts)[0]

    def test_duplicate_h1(self) -> None:
        facts = analyze('<title>T</title><meta name="description" content="d"><h1>A</h1><h1>B</h1>')
        assert detect_issues(facts) == ["Duplicate H1 tags"]

    def test_everything_missing(self) -> None:
        issues = detect_issues(analyze("<p>bare</p>"))
        assert issues == ["Missing title tag", "Missing meta description", "Missing H1 tag"]
        assert seo_score(issues) == 70

    def test_score_floor(self) -> None:
        assert seo_score(["x"] * 40) == 0
