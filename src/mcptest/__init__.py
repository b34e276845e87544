"""MCPTEST

A Jest-like testing harness for Model Context Protocol servers.
Suites are declared with ``describe``/``test`` and hooks, run sequentially
on one event loop, and checked with chained ``expect()`` matchers against
call-recording mocks of tools, resources and prompts.
"""

__version__ = "1.0.0"

# pylint: disable=wrong-import-position
from mcptest.assertions import AssertionFailure, MatcherUsageError, expect
from mcptest.domain import (
    HarnessError,
    MockError,
    RegistrationError,
    SuiteHookError,
    SuiteResult,
    TestResult,
)
from mcptest.mocking import (
    CallRecord,
    MockFunction,
    MockOptions,
    MockRegistry,
    MockServer,
    Spy,
    clear_all_mocks,
    create_mock,
    create_mock_server,
    mock_prompt,
    mock_resource,
    mock_tool,
    reset_all_mocks,
    restore_spy,
    spy_on,
)
from mcptest.reporting import print_results
from mcptest.service_layer import (
    SuiteRegistry,
    after_all,
    after_each,
    before_all,
    before_each,
    clear_suites,
    describe,
    it,
    run,
    run_all_tests,
    test,
)

__all__ = [
    "__version__",
    "AssertionFailure",
    "CallRecord",
    "HarnessError",
    "MatcherUsageError",
    "MockError",
    "MockFunction",
    "MockOptions",
    "MockRegistry",
    "MockServer",
    "RegistrationError",
    "Spy",
    "SuiteHookError",
    "SuiteRegistry",
    "SuiteResult",
    "TestResult",
    "after_all",
    "after_each",
    "before_all",
    "before_each",
    "clear_all_mocks",
    "clear_suites",
    "create_mock",
    "create_mock_server",
    "describe",
    "expect",
    "it",
    "mock_prompt",
    "mock_resource",
    "mock_tool",
    "print_results",
    "reset_all_mocks",
    "restore_spy",
    "run",
    "run_all_tests",
    "spy_on",
    "test",
]
