"""Result value objects produced by the runner."""

import traceback
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AssertionRecord:
    """Outcome of a single assertion.

    Reserved for granular reporting; the runner does not populate it yet.
    """

    description: str
    passed: bool
    expected: Any = None
    actual: Any = None
    error: BaseException | None = None


@dataclass
class TestResult:
    """Outcome of executing one test.

    Notes:
        Skipped tests are reported with ``passed=True``, ``duration=0`` and no
        failure; ``skipped`` tells them apart from executed tests.
    """

    __test__ = False  # keep pytest from collecting this class

    name: str
    passed: bool
    duration: float
    failure: BaseException | None = None
    assertions: list[AssertionRecord] = field(default_factory=list)
    skipped: bool = False
    suite: str = ""
    cleanup_errors: list[BaseException] = field(default_factory=list)

    @classmethod
    def skip(cls, name: str, suite: str = "") -> "TestResult":
        """Build the record of a skipped test."""
        return cls(name=name, passed=True, duration=0, skipped=True, suite=suite)

    @property
    def failure_message(self) -> str | None:
        """The failure's message, or None for passing tests."""
        if self.failure is None:
            return None
        return str(self.failure) or type(self.failure).__name__

    @property
    def failure_traceback(self) -> list[str]:
        """Formatted stack frames of the failure (empty for passing tests)."""
        if self.failure is None or self.failure.__traceback__ is None:
            return []
        return traceback.format_tb(self.failure.__traceback__)


@dataclass
class SuiteResult:
    """Aggregated outcome of one top-level suite.

    Results of nested suites are spliced into ``tests`` in declaration order.
    ``skipped`` only counts the suite's own direct tests.
    """

    name: str
    tests: list[TestResult]
    passed: int
    failed: int
    skipped: int
    duration: float

    @property
    def total(self) -> int:
        """Number of tests counted as passed or failed."""
        return self.passed + self.failed
