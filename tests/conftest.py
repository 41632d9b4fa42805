"""Shared pytest fixtures."""

import os
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep YEDGRAPH_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("YEDGRAPH_"):
            monkeypatch.delenv(name)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def state_xgml() -> Path:
    """A yEd door state machine: 4 states, one group, 2 red and 2 green edges."""
    return FIXTURES_DIR / "state.xgml"


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """An empty working directory with no .yedgraph.toml above it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
