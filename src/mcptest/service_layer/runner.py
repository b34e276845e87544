"""Sequential suite runner.

Walks the registered suite tree depth-first in declaration order and
executes one test at a time on the running event loop. Test bodies and hooks
may be plain functions or coroutine functions.

Failure policy:
- A failing before-each hook, test body or after-each hook fails that test
  only. After a failure the after-each hooks still run; errors they raise
  are kept on the result as ``cleanup_errors`` and never replace the
  original failure. `SystemExit` raised by a test counts as a failure too.
- A failing before-all or after-all hook is fatal: it is raised as
  `SuiteHookError` and aborts the whole run.
"""

import asyncio
import inspect
import logging
import time
from collections.abc import Iterable

from mcptest.domain.errors import SuiteHookError
from mcptest.domain.results import SuiteResult, TestResult
from mcptest.domain.suite import Action, Suite, Test

from .registry import SuiteRegistry, get_registry

logger = logging.getLogger(__name__)

TEST_ERRORS = (Exception, SystemExit)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


async def _call(action: Action) -> None:
    result = action()
    if inspect.isawaitable(result):
        await result


async def _run_hooks(hooks: Iterable[Action]) -> None:
    for hook in hooks:
        await _call(hook)


async def _run_cleanup(hooks: Iterable[Action], errors: list[BaseException]) -> None:
    """Run after-each hooks best-effort, collecting (not raising) their errors."""
    for hook in hooks:
        try:
            await _call(hook)
        except TEST_ERRORS as e:
            logger.debug("Discarding after_each error during cleanup: %r", e)
            errors.append(e)


async def _run_suite_hooks(suite: Suite, full_name: str, phase: str) -> None:
    try:
        await _run_hooks(getattr(suite, phase))
    except Exception as e:
        logger.exception("%s hook failed in suite %s", phase, full_name)
        raise SuiteHookError(full_name, phase, e) from e


async def run_test(test: Test, suite: Suite, suite_name: str = "") -> TestResult:
    """Run one test between its suite's before-each and after-each hooks.

    Args:
        test: The test to execute.
        suite: The suite that declares it (its hooks apply).
        suite_name: Composed suite name recorded on the result.

    Returns:
        TestResult: Passed, or failed with the first error raised.
    """
    start = time.perf_counter()
    cleanup_errors: list[BaseException] = []

    def failed(error: BaseException) -> TestResult:
        logger.debug("Test %s > %s failed: %r", suite_name, test.name, error)
        return TestResult(
            name=test.name,
            passed=False,
            failure=error,
            duration=_elapsed_ms(start),
            suite=suite_name,
            cleanup_errors=cleanup_errors,
        )

    try:
        await _run_hooks(suite.before_each)
        await _call(test.fn)
    except TEST_ERRORS as e:
        await _run_cleanup(suite.after_each, cleanup_errors)
        return failed(e)

    for index, hook in enumerate(suite.after_each):
        try:
            await _call(hook)
        except TEST_ERRORS as e:
            await _run_cleanup(suite.after_each[index + 1 :], cleanup_errors)
            return failed(e)

    logger.debug("Test %s > %s passed", suite_name, test.name)
    return TestResult(
        name=test.name,
        passed=True,
        duration=_elapsed_ms(start),
        suite=suite_name,
    )


async def run_suite(suite: Suite, parent_name: str = "") -> SuiteResult:
    """Run a suite and its nested suites.

    The caller is responsible for leaving out skipped suites.

    Args:
        suite: The suite to run.
        parent_name: Composed name of the enclosing suite, if any.

    Returns:
        SuiteResult: Flattened results, nested suites spliced in order.

    Raises:
        SuiteHookError: If a before-all or after-all hook fails.
    """
    full_name = f"{parent_name} > {suite.name}" if parent_name else suite.name
    start = time.perf_counter()
    results: list[TestResult] = []
    logger.debug("Running suite %s", full_name)

    await _run_suite_hooks(suite, full_name, "before_all")

    only_mode = suite.has_only

    for test in suite.tests:
        if test.skip:
            results.append(TestResult.skip(test.name, suite=full_name))
            continue
        if only_mode and not test.only:
            continue
        results.append(await run_test(test, suite, full_name))

    for nested in suite.suites:
        if nested.skip or (only_mode and not nested.only):
            continue
        nested_result = await run_suite(nested, full_name)
        results.extend(nested_result.tests)

    await _run_suite_hooks(suite, full_name, "after_all")

    passed = sum(1 for r in results if r.passed)
    return SuiteResult(
        name=full_name,
        tests=results,
        passed=passed,
        failed=len(results) - passed,
        skipped=sum(1 for t in suite.tests if t.skip),
        duration=_elapsed_ms(start),
    )


async def run_all_tests(registry: SuiteRegistry | None = None) -> list[SuiteResult]:
    """Run every non-skipped top-level suite, in registration order.

    Args:
        registry: Registry to run; defaults to the process-wide one.

    Raises:
        SuiteHookError: If a before-all or after-all hook fails anywhere.
    """
    registry = registry if registry is not None else get_registry()
    results: list[SuiteResult] = []
    for suite in registry.suites:
        if suite.skip:
            logger.debug("Skipping suite %s", suite.name)
            continue
        results.append(await run_suite(suite))
    return results


def run(registry: SuiteRegistry | None = None) -> list[SuiteResult]:
    """Synchronous entry point: run `run_all_tests` on a fresh event loop."""
    return asyncio.run(run_all_tests(registry))
