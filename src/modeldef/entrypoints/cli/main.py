"""modeldef CLI entry point.

Defines the top-level ``modeldef`` command (via Click-Extra) and registers
subcommands exposed by the project.

Currently available commands
- ``modeldef scaffold``: print a starter column/relationship spec for a model.

Notes
- The CLI version is sourced from `modeldef.__version__` and displayed
  automatically by Click-Extra (``--version``).
- Additional commands should be registered here via ``modeldef.add_command(...)``.

Examples
    $ modeldef --version
    $ modeldef -v scaffold shop.models:Order
"""

import logging

import click
import click_extra as clickx

from modeldef import __version__
from modeldef.logging import config_console_handler

from .helpers.log_level_parser import parse_log_level
from .scaffold import scaffold

HELP = """modeldef command-line interface.

    modeldef checks ORM model definitions against declarative specs: columns,
    defaults, validations, and mirrored relationships. The CLI helps author
    those specs; the checks themselves run inside your test suite.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vv).",
    default=False,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Repeatable "
        "(e.g. -L sqlalchemy=INFO) or via MODELDEF_LOGGER_LEVELS (comma/space list)."
    ),
    default=("sqlalchemy=WARNING",),
    envvar="MODELDEF_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def modeldef(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    logger_levels: dict[str, int],
) -> None:
    """modeldef command-line interface."""

    # 0) compute effective verbosity
    base_level = logging.WARNING
    level = base_level - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) configure console handler
    use_color = ctx.color is not False  # None or True => allow color
    handler = config_console_handler(level=level, debug_mode=debug, color=use_color)

    # 2) configure root logger
    logging.basicConfig(level=logging.DEBUG, handlers=[handler], force=True)

    # 3) set 3rd-party logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    ctx.call_on_close(logging.shutdown)


modeldef.add_command(scaffold)
