"""``mcptest run`` and ``mcptest init``.

Exit codes of ``run``:
- 0: every executed test passed.
- 1: at least one test failed, or a test file could not be loaded.
- 2: a before-all/after-all hook failed and aborted the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console

from mcptest import config
from mcptest.domain.errors import SuiteHookError
from mcptest.reporting import print_results
from mcptest.service_layer.loader import discover_test_files, load_test_files
from mcptest.service_layer.registry import clear_suites
from mcptest.service_layer.runner import run

from .helpers import error, success, warn

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_FATAL_HOOK = 2

EXAMPLE_TEST = '''\
from mcptest import describe, expect, mock_tool, test


@describe("My MCP Server")
def my_mcp_server():
    @test("should call read-file tool")
    async def calls_read_file():
        read_file = mock_tool(
            "read-file", {"return_value": {"content": "Hello World", "size": 11}}
        )

        result = await read_file.execute({"path": "/tmp/test.txt"})

        expect(result["content"]).to_be("Hello World")
        expect(read_file).to_have_been_called_times(1)
        expect(read_file).to_have_been_called_with({"path": "/tmp/test.txt"})

    @test("should handle errors")
    async def handles_errors():
        failing_tool = mock_tool("failing-tool", {"throw_error": "Tool failed"})

        await expect(failing_tool.execute()).rejects.to_throw("Tool failed")
'''


@click.command("run")
@click.argument("files", nargs=-1)
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory glob patterns are resolved against (default: current directory).",
)
@click.option(
    "--bail",
    is_flag=True,
    default=False,
    help="Stop at the first test file that fails to load.",
)
@click.pass_context
def run_command(
    ctx: click.Context, files: tuple[str, ...], root: Path | None, bail: bool
) -> None:
    """Run test files.

    FILES are paths or glob patterns; without them the patterns from
    MCPTEST_PATTERNS (or **/*.test.py and **/*_test.py) are used.
    """
    patterns = config.get_test_patterns(files)
    paths = discover_test_files(patterns, root)
    logger.info("Discovered %d test file(s)", len(paths))
    if not paths:
        warn(f"No test files matched: {', '.join(patterns)}")

    # Start from an empty registry so repeated invocations in one process
    # do not run suites twice.
    clear_suites()
    load_errors = load_test_files(paths, bail=bail)
    for load_error in load_errors:
        error(str(load_error))
    if load_errors and bail:
        ctx.exit(EXIT_FAILED)

    try:
        results = run()
    except SuiteHookError as e:
        logger.debug("Run aborted", exc_info=e)
        error(f"Run aborted: {e}")
        ctx.exit(EXIT_FATAL_HOOK)

    console = Console(highlight=False, no_color=ctx.color is False)
    summary = print_results(results, console=console)
    if summary.failed > 0 or load_errors:
        ctx.exit(EXIT_FAILED)


@click.command("init")
@click.option(
    "--path",
    "path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(config.EXAMPLE_TEST_FILENAME),
    show_default=True,
    help="Where to write the example test file.",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
@click.pass_context
def init_command(ctx: click.Context, path: Path, force: bool) -> None:
    """Write an example test file to get started."""
    if path.exists() and not force:
        warn(f"{path} already exists; use --force to overwrite it.")
        ctx.exit(EXIT_FAILED)
    path.write_text(EXAMPLE_TEST, encoding="utf-8")
    success(f"Created example test file: {path}")
    click.echo(f"Run tests with:\n   mcptest run {path}")
