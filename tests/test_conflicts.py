"""Tests for conflict detection and task distribution."""

from __future__ import annotations

import logging

import pytest

from sharedtree.coordination import (
    SessionStatus,
    conflicts_involving,
    detect_conflicts,
    suggest_distribution,
)
from sharedtree.coordination.distribution import score_session
from tests.utils import make_session


class TestDetectConflicts:
    def test_no_sessions(self) -> None:
        assert detect_conflicts([]) == []

    def test_disjoint_files(self) -> None:
        sessions = [make_session("a", ["x.py"]), make_session("b", ["y.py"])]
        assert detect_conflicts(sessions) == []

    def test_shared_file(self) -> None:
        sessions = [
            make_session("frontend", ["src/App.tsx", "shared/types.ts"]),
            make_session("backend", ["api/server.py", "shared/types.ts"]),
        ]

        conflicts = detect_conflicts(sessions)

        assert len(conflicts) == 1
        assert conflicts[0].file == "shared/types.ts"
        assert conflicts[0].sessions == ["frontend", "backend"]
        assert conflicts[0].kind == "file"

    def test_three_way_and_multiple_files(self) -> None:
        sessions = [
            make_session("a", ["one.py", "two.py"]),
            make_session("b", ["two.py", "one.py"]),
            make_session("c", ["two.py"]),
        ]

        conflicts = detect_conflicts(sessions)

        assert [c.file for c in conflicts] == ["one.py", "two.py"]
        assert conflicts[1].sessions == ["a", "b", "c"]

    def test_paths_compared_normalized(self) -> None:
        sessions = [make_session("a", ["./src/x.py"]), make_session("b", ["src\\x.py"])]
        conflicts = detect_conflicts(sessions)
        assert [c.file for c in conflicts] == ["src/x.py"]

    def test_idle_counts_closed_does_not(self) -> None:
        sessions = [
            make_session("a", ["x.py"], status=SessionStatus.IDLE),
            make_session("b", ["x.py"]),
            make_session("c", ["x.py"], status=SessionStatus.CLOSED),
        ]
        assert detect_conflicts(sessions)[0].sessions == ["a", "b"]

    def test_deterministic(self) -> None:
        sessions = [make_session("a", ["x.py", "y.py"]), make_session("b", ["y.py", "x.py"])]
        assert detect_conflicts(sessions) == detect_conflicts(sessions)

    def test_unusable_path_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        sessions = [make_session("a", ["", "x.py"]), make_session("b", ["", "x.py"])]

        with caplog.at_level(logging.WARNING, logger="sharedtree"):
            conflicts = detect_conflicts(sessions)

        assert [c.file for c in conflicts] == ["x.py"]
        assert "unusable path" in caplog.text

    def test_conflicts_involving(self) -> None:
        sessions = [
            make_session("a", ["x.py"]),
            make_session("b", ["x.py", "y.py"]),
            make_session("c", ["y.py"]),
        ]
        conflicts = detect_conflicts(sessions)

        assert [c.file for c in conflicts_involving(conflicts, "a")] == ["x.py"]
        assert [c.file for c in conflicts_involving(conflicts, "b")] == ["x.py", "y.py"]
        assert conflicts_involving(conflicts, "zzz") == []


class TestSuggestDistribution:
    def test_focus_match_wins(self) -> None:
        sessions = [
            make_session("backend", focus=["api"]),
            make_session("frontend", ["a.tsx", "b.tsx"], focus=["ui"]),
        ]

        [suggestion] = suggest_distribution(["Polish the UI header"], sessions)

        assert suggestion.recommended == "frontend"
        assert suggestion.reason == "focus_match"
        assert suggestion.score == 8

    def test_lowest_workload_without_match(self) -> None:
        sessions = [
            make_session("busy", ["a.py", "b.py"]),
            make_session("free"),
        ]

        [suggestion] = suggest_distribution(["write release notes"], sessions)

        assert suggestion.recommended == "free"
        assert suggestion.reason == "lowest_workload"
        assert suggestion.score == 0

    def test_tie_goes_to_first(self) -> None:
        sessions = [make_session("first"), make_session("second")]
        [suggestion] = suggest_distribution(["anything"], sessions)
        assert suggestion.recommended == "first"

    def test_no_sessions(self) -> None:
        [suggestion] = suggest_distribution(["task"], [])
        assert suggestion.recommended is None
        assert suggestion.reason == "no_sessions"
        assert suggestion.to_dict()["recommended_session"] is None

    def test_one_suggestion_per_task(self) -> None:
        sessions = [make_session("api", focus=["api"]), make_session("docs", focus=["docs"])]
        suggestions = suggest_distribution(["fix api auth", "update docs"], sessions)
        assert [s.recommended for s in suggestions] == ["api", "docs"]

    def test_score_case_insensitive(self) -> None:
        session = make_session("x", ["f.py"], focus=["Database"])
        assert score_session("migrate the DATABASE schema", session) == 9
