"""Tests for goal text comparison."""

from __future__ import annotations

import pytest

from sharedtree.goals import analyze_changes, levenshtein, similarity


class TestLevenshtein:
    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("kitten", "sitting", 3),
            ("", "", 0),
            ("", "abc", 3),
            ("abc", "", 3),
            ("abc", "abc", 0),
            ("flaw", "lawn", 2),
        ],
    )
    def test_distance(self, a: str, b: str, expected: int) -> None:
        assert levenshtein(a, b) == expected

    def test_symmetric(self) -> None:
        assert levenshtein("sunday", "saturday") == levenshtein("saturday", "sunday") == 3


class TestSimilarity:
    def test_identical(self) -> None:
        assert similarity("abc", "abc") == 1.0

    def test_disjoint(self) -> None:
        assert similarity("abc", "xyz") == 0.0

    def test_both_empty(self) -> None:
        assert similarity("", "") == 1.0

    def test_partial(self) -> None:
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_bounded(self) -> None:
        assert 0.0 <= similarity("a", "completely different") <= 1.0


class TestAnalyzeChanges:
    def test_first_goal(self) -> None:
        metrics = analyze_changes("", "Ship the beta.")
        assert metrics.length_change == 14
        assert metrics.word_change == 3
        assert metrics.added_words == ["ship", "the", "beta."]
        assert metrics.removed_words == []
        assert metrics.similarity == 0.0

    def test_word_diff(self) -> None:
        metrics = analyze_changes("Build the login page.", "Build the signup page now.")
        assert metrics.added_words == ["signup", "page", "now."]
        assert metrics.removed_words == ["login", "page."]
        assert metrics.word_change == 1

    def test_case_insensitive_and_deduplicated(self) -> None:
        metrics = analyze_changes("a", "New new NEW thing")
        assert metrics.added_words == ["new", "thing"]

    def test_word_sample_caps_lists(self) -> None:
        new = " ".join(f"w{i}" for i in range(20))
        assert len(analyze_changes("", new).added_words) == 10
        assert len(analyze_changes("", new, word_sample=3).added_words) == 3
        assert analyze_changes("", new, word_sample=0).added_words == []
