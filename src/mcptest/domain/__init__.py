"""Domain layer for mcptest.

Plain value objects describing what gets run (suites and tests) and what a
run produced (test and suite results), plus the harness error hierarchy.
No I/O and no dependency on the runner or the assertion library.
"""

from .errors import (
    HarnessError,
    MockError,
    RegistrationError,
    SuiteHookError,
    TestFileLoadError,
)
from .results import AssertionRecord, SuiteResult, TestResult
from .suite import Action, Suite, Test

__all__ = [
    "Action",
    "AssertionRecord",
    "HarnessError",
    "MockError",
    "RegistrationError",
    "Suite",
    "SuiteHookError",
    "SuiteResult",
    "Test",
    "TestFileLoadError",
    "TestResult",
]
