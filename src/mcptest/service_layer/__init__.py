"""Service layer for mcptest.

Registration of suites, loading of test files and the sequential runner.
This is the entrypoint for the CLI and for hosts embedding the harness.
"""

from .registry import (
    SuiteRegistry,
    after_all,
    after_each,
    before_all,
    before_each,
    clear_suites,
    describe,
    get_registry,
    it,
    test,
)
from .runner import run, run_all_tests, run_suite, run_test

__all__ = [
    "SuiteRegistry",
    "after_all",
    "after_each",
    "before_all",
    "before_each",
    "clear_suites",
    "describe",
    "get_registry",
    "it",
    "run",
    "run_all_tests",
    "run_suite",
    "run_test",
    "test",
]
