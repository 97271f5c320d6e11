"""Tests for logging configuration helpers."""

from __future__ import annotations

import logging

import pytest

from sharedtree.config import LoggingConfig
from sharedtree.logging import TRACE, VERBOSE, get_logger, resolve_level, setup_logging


class TestResolveLevel:
    def test_default_is_info(self) -> None:
        assert resolve_level(None) == logging.INFO
        assert resolve_level(LoggingConfig()) == logging.INFO

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", logging.DEBUG),
            ("WARNING", logging.WARNING),
            ("warn", logging.WARNING),
            ("trace", TRACE),
            ("bogus", logging.INFO),
        ],
    )
    def test_named_levels(self, level: str, expected: int) -> None:
        assert resolve_level(LoggingConfig(level=level)) == expected

    @pytest.mark.parametrize(
        ("verbose", "expected"),
        [(0, logging.ERROR), (1, logging.WARNING), (2, logging.INFO), (3, VERBOSE), (4, TRACE)],
    )
    def test_verbosity(self, verbose: int, expected: int) -> None:
        assert resolve_level(LoggingConfig(verbose=verbose)) == expected

    def test_verbose_wins_over_level(self) -> None:
        assert resolve_level(LoggingConfig(level="ERROR", verbose=4)) == TRACE


class TestGetLogger:
    def test_root_logger(self) -> None:
        assert get_logger().name == "sharedtree"

    def test_child_logger(self) -> None:
        assert get_logger("registry").name == "sharedtree.registry"

    def test_custom_level_names(self) -> None:
        assert logging.getLevelName(TRACE) == "TRACE"
        assert logging.getLevelName(VERBOSE) == "VERBOSE"


class TestSetupLogging:
    @pytest.fixture
    def fresh_logger(self, monkeypatch: pytest.MonkeyPatch):
        """Allow setup_logging to run again and drop any handlers it adds."""
        root = get_logger()
        handlers = list(root.handlers)
        level = root.level
        monkeypatch.setattr("sharedtree.logging._initialized", False)
        yield root
        for handler in root.handlers[:]:
            if handler not in handlers:
                handler.close()
                root.removeHandler(handler)
        root.setLevel(level)

    def test_file_handler(self, fresh_logger: logging.Logger, tmp_path) -> None:
        log_file = tmp_path / "sharedtree.log"
        setup_logging(LoggingConfig(level="debug", file=str(log_file)))

        get_logger("registry").debug("Session '%s' created", "frontend")
        for handler in fresh_logger.handlers:
            handler.flush()

        assert fresh_logger.level == logging.DEBUG
        assert "debug: Session 'frontend' created" in log_file.read_text(encoding="utf-8")

    def test_second_call_is_noop(self, fresh_logger: logging.Logger, tmp_path) -> None:
        setup_logging(LoggingConfig(file=str(tmp_path / "a.log")))
        count = len(fresh_logger.handlers)
        setup_logging(LoggingConfig(file=str(tmp_path / "b.log")))

        assert len(fresh_logger.handlers) == count
        assert not (tmp_path / "b.log").exists()
