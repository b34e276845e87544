"""Console rendering of run results with Rich.

Pure presentation: consumes `SuiteResult` values and writes a report; it
never changes outcomes.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from mcptest.domain.results import SuiteResult, TestResult

TRACEBACK_FRAMES = 3
RULE_WIDTH = 50


@dataclass(frozen=True)
class RunSummary:
    """Totals over a whole run."""

    passed: int
    failed: int
    skipped: int
    pass_rate: int

    @property
    def total(self) -> int:
        return self.passed + self.failed


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def summarize(results: Sequence[SuiteResult]) -> RunSummary:
    """Aggregate suite counts; the pass rate only considers executed tests.

    The rate is the rounded percentage of non-skipped tests that passed, or
    0 when nothing was executed.
    """
    executed = [t for suite in results for t in suite.tests if not t.skipped]
    executed_passed = sum(1 for t in executed if t.passed)
    rate = _round_half_up(executed_passed * 100 / len(executed)) if executed else 0
    return RunSummary(
        passed=sum(s.passed for s in results),
        failed=sum(s.failed for s in results),
        skipped=sum(s.skipped for s in results),
        pass_rate=rate,
    )


def _print_test(console: Console, test: TestResult) -> None:
    duration = f"[dim] ({test.duration:.0f}ms)[/dim]"
    if test.skipped:
        console.print(f"[yellow]  ⊘ {escape(test.name)}[/yellow][dim] (skipped)[/dim]")
        return
    if test.passed:
        console.print(f"[green]  ✓ {escape(test.name)}[/green]{duration}")
        return
    console.print(f"[red]  ✗ {escape(test.name)}[/red]{duration}")
    if test.failure_message is not None:
        for line in test.failure_message.splitlines():
            console.print(f"[red]    {escape(line)}[/red]")
    frames = test.failure_traceback[-TRACEBACK_FRAMES:]
    if frames:
        console.print(escape("".join(frames).rstrip()), style="dim")


def print_results(
    results: Sequence[SuiteResult], console: Console | None = None
) -> RunSummary:
    """Print every suite's tests and a final summary.

    Args:
        results: Output of the runner.
        console: Where to print; defaults to a stdout console.

    Returns:
        RunSummary: The totals that were printed.
    """
    console = console or Console(highlight=False)
    console.print()

    for suite in results:
        console.print(f"\n[cyan]{escape(suite.name)}[/cyan]")
        for test in suite.tests:
            _print_test(console, test)

    summary = summarize(results)
    console.print("\n" + "=" * RULE_WIDTH)
    console.print("\n[bold]Test Summary:[/bold]")
    console.print(f"   Total: {summary.total}")
    console.print(f"[green]   ✓ Passed: {summary.passed}[/green]")
    if summary.failed > 0:
        console.print(f"[red]   ✗ Failed: {summary.failed}[/red]")
    if summary.skipped > 0:
        console.print(f"[yellow]   ⊘ Skipped: {summary.skipped}[/yellow]")
    console.print(f"   Pass Rate: {summary.pass_rate}%\n")
    return summary
