"""Shared test fixtures and factories."""

import logging
from collections.abc import Sequence
from pathlib import Path

import pytest

SAMPLE = "# Groceries\n- [ ] buy milk\n\n* [X] pay rent\n+ [>] write report\nnotes\n"


class FakeSelector:
    """Scriptable stand-in for the fuzzy finder."""

    def __init__(self, selections: Sequence[str] = ()) -> None:
        self.selections = list(selections)
        self.candidates: list[str] | None = None

    def select(self, candidates: Sequence[str]) -> list[str]:
        self.candidates = list(candidates)
        return list(self.selections)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the user's config and environment."""
    monkeypatch.setenv("CHOP_HOME", str(tmp_path / "chop-home"))
    monkeypatch.delenv("CHOP_SELECTOR", raising=False)
    monkeypatch.delenv("CHOP_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


# =============================================================================
# Todo Fixtures
# =============================================================================


@pytest.fixture
def sample_text() -> str:
    return SAMPLE


@pytest.fixture
def todo_file(tmp_path: Path) -> Path:
    """A todo file with mixed markers, statuses and passthrough lines."""
    path = tmp_path / "todos.md"
    path.write_text(SAMPLE)
    return path


@pytest.fixture
def selector_factory():
    """Build a FakeSelector returning the given lines."""
    return FakeSelector


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
log_level = "info"

[selector]
command = ["fzf", "--multi", "--reverse"]
"""
    )
    return config_path
