"""Configuration utilities for mcptest.

This module centralizes small helpers and constants related to configuration.
"""

import os
import re

PATTERNS_ENV_VAR = "MCPTEST_PATTERNS"  # pragma: no mutate

DEFAULT_TEST_PATTERNS: tuple[str, ...] = ("**/*.test.py", "**/*_test.py")
"""Test files end in ``.test.py`` (or ``_test.py`` for importable names)."""

EXAMPLE_TEST_FILENAME = "example.test.py"


def get_test_patterns(cli_patterns: tuple[str, ...] | list[str] = ()) -> list[str]:
    """Resolve which glob patterns select test files.

    Precedence: patterns given on the command line, then the comma/space
    separated ``MCPTEST_PATTERNS`` environment variable, then
    `DEFAULT_TEST_PATTERNS`.

    Args:
        cli_patterns: Patterns or paths passed explicitly.

    Returns:
        list[str]: The patterns to expand.
    """
    if cli_patterns:
        return list(cli_patterns)
    if env := os.environ.get(PATTERNS_ENV_VAR, "").strip():
        return [p for p in re.split(r"[,\s]+", env) if p]
    return list(DEFAULT_TEST_PATTERNS)
