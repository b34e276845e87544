"""Fixtures for end-to-end tests of the ``mcptest`` command.

Provides a CliRunner, an isolated working directory per test, and a helper
that writes test files into it.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

# pylint: disable=redefined-outer-name


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated, empty working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def write_file(fs):
    """Return a helper writing a file relative to the isolated directory."""

    def _write(name: str, text: str) -> Path:
        path = Path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def no_patterns_env(monkeypatch):
    """Keep a developer's MCPTEST_PATTERNS from leaking into CLI runs."""
    monkeypatch.delenv("MCPTEST_PATTERNS", raising=False)
