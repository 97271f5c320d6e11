"""Root pytest configuration for all tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from sharedtree.config import Config, reset_config
from sharedtree.project import Project
from tests.utils import FakeClock


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory):
    """Keep user config and environment overrides out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    monkeypatch.delenv("SHAREDTREE_LOG", raising=False)
    monkeypatch.delenv("SHAREDTREE_DIR", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def project(tmp_path: Path, clock: FakeClock) -> Project:
    """A fresh project rooted in tmp_path with default config."""
    return Project(tmp_path, Config(), clock=clock)
