"""mcptest CLI entry point.

Defines the top-level ``mcptest`` command (via Click-Extra), configures
logging for every subcommand and registers:

- ``mcptest run``  - discover, load and run test files, then print a report.
- ``mcptest init`` - write an example test file.

Examples
    $ mcptest --version
    $ mcptest run
    $ mcptest -v run tests/tools.test.py --bail
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from mcptest import __version__
from mcptest.logging import (
    config_console_handler,
    config_flight_recorder,
    default_log_path,
    log_startup,
)

from .commands import init_command, run_command
from .helpers import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """mcptest command-line interface.

    A Jest-like testing harness for Model Context Protocol servers: declare
    suites with describe/test, stand in for tools, resources and prompts with
    call-recording mocks, and run everything sequentially in one process.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (source locations and timestamps in log lines).",
    default=False,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last log records at DEBUG granularity in memory and write them "
        "to --log-path when a WARNING/ERROR occurs, or on exit with --force-flush."
    ),
    default=False,
    show_envvar=True,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Flight recorder file (default: latest.log in the user log directory).",
    default=None,
    envvar="MCPTEST_LOG_PATH",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit.",
    default=False,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum LEVEL of specific loggers (NAME=LEVEL). Repeatable "
        "(e.g. -L asyncio=INFO -L mcptest.service_layer=DEBUG)."
    ),
    default=("asyncio=WARNING",),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def mcptest(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    flight_recorder: bool,
    log_path: Path | None,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """mcptest command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    # 1) console handler
    handlers.append(
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    )

    # 2) flight recorder
    if flight_recorder:
        log_path = log_path or default_log_path()
        handlers.append(
            config_flight_recorder(path=log_path, flush_on_close=force_flush)
        )

    # 3) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 4) per-logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


mcptest.add_command(run_command)
mcptest.add_command(init_command)
