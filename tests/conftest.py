"""Global pytest fixtures for mcptest."""

from __future__ import annotations

import pytest

from mcptest.service_layer.registry import SuiteRegistry, clear_suites

# pylint: disable=redefined-outer-name


@pytest.fixture(autouse=True)
def fresh_default_registry():
    """Start and finish every test with an empty default registry.

    The module-level ``describe``/``test`` primitives write to process-wide
    state; clearing it keeps suites from leaking between tests.
    """
    clear_suites()
    yield
    clear_suites()


@pytest.fixture
def registry() -> SuiteRegistry:
    """A private registry, independent of the default one."""
    return SuiteRegistry()
