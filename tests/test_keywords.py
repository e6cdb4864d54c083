"""Tests for the keyword metrics engine."""

from __future__ import annotations

import pytest

from seoaudit.analysis.analyzer import analyze
from seoaudit.analysis.keywords import (
    compute_keyword_metrics,
    count_words,
    is_stuffing,
    keyword_pattern,
    keyword_placement,
    normalize_text,
)


class TestNormalization:
    def test_lowercases_and_strips_punctuation(self) -> None:
        assert normalize_text("SEO-Tips, for ALL!").split() == ["seo", "tips", "for", "all"]

    def test_count_words_ignores_punctuation_tokens(self) -> None:
        assert count_words("Hello — world !! again") == 3

    def test_blank_keyword_has_no_pattern(self) -> None:
        assert keyword_pattern("") is None
        assert keyword_pattern(None) is None
        assert keyword_pattern("  ?! ") is None


class TestComputeKeywordMetrics:
    def test_density_is_rounded_percentage(self) -> None:
        text = "seo tips for seo beginners"
        metrics = compute_keyword_metrics(text, count_words(text), "seo")
        assert metrics.frequency == 2
        assert metrics.density == 40.0
        assert metrics.analyzed is True

    def test_density_rounds_to_two_decimals(self) -> None:
        text = "alpha " + "word " * 299
        metrics = compute_keyword_metrics(text, 300, "alpha")
        assert metrics.frequency == 1
        assert metrics.density == 0.33

    def test_whole_word_matching_only(self) -> None:
        text = "seo seoul overseo seo."
        assert compute_keyword_metrics(text, 4, "seo").frequency == 2

    def test_case_insensitive(self) -> None:
        assert compute_keyword_metrics("SEO Seo seo", 3, "sEo").frequency == 3

    def test_multi_word_phrase_with_flexible_whitespace(self) -> None:
        text = "Running  shoes are great. running\nshoes again; running-shoes too."
        metrics = compute_keyword_metrics(text, count_words(text), "running   shoes")
        assert metrics.frequency == 3
        assert metrics.keyword == "running   shoes"

    def test_no_keyword_means_not_analyzed(self) -> None:
        for keyword in (None, "", "   "):
            metrics = compute_keyword_metrics("some seo text", 3, keyword)
            assert metrics.frequency == 0
            assert metrics.density == 0
            assert metrics.stuffing is False
            assert metrics.analyzed is False

    def test_zero_word_count_gives_zero_density(self) -> None:
        metrics = compute_keyword_metrics("", 0, "seo")
        assert metrics.frequency == 0
        assert metrics.density == 0
        assert metrics.stuffing is False

    def test_keyword_absent(self) -> None:
        metrics = compute_keyword_metrics("nothing relevant here", 3, "seo")
        assert metrics.analyzed is True
        assert metrics.frequency == 0
        assert metrics.stuffing is False


class TestStuffing:
    def test_count_over_threshold_even_with_low_ratio(self) -> None:
        text = "seo " * 31 + "filler " * 969
        metrics = compute_keyword_metrics(text, 1000, "seo")
        assert metrics.frequency == 31
        assert metrics.density == 3.1
        assert metrics.stuffing is True

    def test_ratio_over_threshold_even_with_low_count(self) -> None:
        text = "seo " * 10 + "filler " * 90
        metrics = compute_keyword_metrics(text, 100, "seo")
        assert metrics.frequency == 10
        assert metrics.stuffing is True

    def test_exactly_thirty_at_low_ratio_is_not_stuffing(self) -> None:
        assert is_stuffing(30, 1000) is False

    def test_exactly_five_percent_is_not_stuffing(self) -> None:
        assert is_stuffing(5, 100) is False

    def test_zero_frequency_never_stuffing(self) -> None:
        assert is_stuffing(0, 0) is False
        assert is_stuffing(0, 10) is False

    def test_thresholds_are_tunable(self) -> None:
        assert is_stuffing(5, 1000, max_count=4) is True
        assert is_stuffing(2, 100, max_ratio=0.01) is True

    def test_settings_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("seoaudit.analysis.keywords.settings.stuffing_max_count", 3)
        assert is_stuffing(4, 10_000) is True


class TestKeywordPlacement:
    def test_placement_flags(self) -> None:
        facts = analyze(
            "<title>Running Shoes Guide</title>"
            '<meta name="description" content="All about trail shoes">'
            "<h1>Best running-shoes</h1>"
        )
        placement = keyword_placement(facts, "running shoes", "https://example.com/running-shoes")
        assert placement.in_title is True
        assert placement.in_description is False
        assert placement.in_h1 is True
        assert placement.in_url is True

    def test_no_keyword_all_false(self) -> None:
        facts = analyze("<title>Running Shoes</title>")
        assert keyword_placement(facts, None).to_dict() == {
            "inTitle": False,
            "inDescription": False,
            "inH1": False,
            "inUrl": False,
        }
