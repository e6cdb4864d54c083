"""Tests for intent classification and section extraction."""

from __future__ import annotations

import pytest

from seoaudit.analysis.document import PageDocument
from seoaudit.analysis.heuristics import classify_intent, extract_sections


class TestClassifyIntent:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("buy now", "Transactional"),
            ("Running shoes DISCOUNT code", "Transactional"),
            ("what is SEO", "Informational"),
            ("python tutorial for beginners", "Informational"),
            ("gmail login", "Navigational"),
            ("nike official site", "Navigational"),
            ("best running shoes", "Commercial Investigation"),
            ("iphone vs pixel", "Commercial Investigation"),
            ("blue widgets", "Unknown"),
            ("", "Unknown"),
        ],
    )
    def test_labels(self, text: str, expected: str) -> None:
        assert classify_intent(text) == expected

    def test_first_matching_rule_wins(self) -> None:
        # Matches Transactional ("buy") and Commercial Investigation ("best").
        assert classify_intent("best place to buy shoes") == "Transactional"
        # Matches Informational ("guide") and Commercial Investigation ("review").
        assert classify_intent("review guide") == "Informational"

    def test_none_is_unknown(self) -> None:
        assert classify_intent(None) == "Unknown"


class TestExtractSections:
    def test_groups_siblings_until_next_heading(self) -> None:
        html = (
            "<h1>Intro</h1><p>First para.</p><p>Second para.</p>"
            "<h2>Details</h2><p>More   text\n here</p>"
            "<h2>Empty</h2>"
        )
        sections = extract_sections(html)
        assert [(s.heading_tag, s.heading_text, s.content) for s in sections] == [
            ("h1", "Intro", "First para. Second para."),
            ("h2", "Details", "More text here"),
            ("h2", "Empty", ""),
        ]

    def test_any_heading_level_ends_a_section(self) -> None:
        html = "<h3>Deep</h3><p>a</p><h6>Deeper</h6><p>b</p><h1>Top</h1>"
        sections = extract_sections(html)
        assert [s.content for s in sections] == ["a", "b", ""]
        assert [s.heading_tag for s in sections] == ["h3", "h6", "h1"]

    def test_duplicate_headings_are_kept_in_order(self) -> None:
        html = "<h2>FAQ</h2><p>one</p><h2>FAQ</h2><p>two</p>"
        sections = extract_sections(html)
        assert [s.heading_text for s in sections] == ["FAQ", "FAQ"]
        assert [s.content for s in sections] == ["one", "two"]

    def test_loose_text_nodes_are_included(self) -> None:
        sections = extract_sections("<div><h2>Title</h2> loose <b>bold</b> words </div>")
        assert sections[0].content == "loose bold words"

    def test_scripts_are_not_content(self) -> None:
        sections = extract_sections("<h2>T</h2><script>var x = 1;</script><p>shown</p>")
        assert sections[0].content == "shown"

    def test_heading_text_is_trimmed(self) -> None:
        sections = extract_sections("<h1>\n   Spaced   out\n</h1>")
        assert sections[0].heading_text == "Spaced out"
        assert sections[0].content == ""

    def test_no_headings(self) -> None:
        assert extract_sections("<p>nothing</p>") == []
        assert extract_sections("") == []

    def test_accepts_prebuilt_document(self) -> None:
        doc = PageDocument.parse("<h1>A</h1><p>b</p>")
        assert extract_sections(doc)[0].to_dict() == {
            "headingTag": "h1",
            "headingText": "A",
            "content": "b",
        }
