# topmark:header:start
#
#   project      : StampMark
#   file         : main.py
#   file_relpath : src/stampmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark Click entry point.

Group-level options are initialized once and placed into ``ctx.obj``;
subcommands read the console, verbosity and locale from there.
"""

from __future__ import annotations

import os

import click

from stampmark.cli.commands.check import check_command
from stampmark.cli.commands.dump_config import dump_config_command
from stampmark.cli.commands.init_config import init_config_command
from stampmark.cli.commands.new import new_command
from stampmark.cli.commands.set_fields import set_command
from stampmark.cli.commands.settings import settings_command
from stampmark.cli.commands.touch import touch_command
from stampmark.cli.commands.version import version_command
from stampmark.cli.commands.watch import watch_command
from stampmark.cli.console import ClickConsole
from stampmark.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_verbosity,
)
from stampmark.config.logging import get_logger, resolve_env_log_level, setup_logging
from stampmark.constants import ENV_FORCE_COLOR, ENV_NO_COLOR

logger = get_logger(__name__)


def resolve_color(console: ClickConsole, *, color_mode: ColorMode | None, no_color: bool) -> bool:
    """Decide whether ``console`` should emit ANSI color.

    ``--no-color`` wins over ``--color``. An explicit ``always`` or ``never``
    wins over the ``FORCE_COLOR`` and ``NO_COLOR`` environment variables; in
    ``auto`` mode color follows whether the console writes to a terminal.
    Machine-readable output formats turn color off later, per command
    (see `ClickConsole.use_output_format`).
    """
    mode: ColorMode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    if mode is not ColorMode.AUTO:
        return mode is ColorMode.ALWAYS

    force_color: str | None = os.getenv(ENV_FORCE_COLOR)
    if force_color and force_color != "0":
        return True
    if os.getenv(ENV_NO_COLOR) is not None:
        return False
    return console.is_terminal()


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    lang: str | None,
) -> None:
    """Initialize shared state (verbosity, color, locale) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        lang (str | None): Display locale from ``--lang``.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured via the environment only
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    console = ClickConsole(enable_color=False)
    console.enable_color = resolve_color(console, color_mode=color_mode, no_color=no_color)
    ctx.obj["color_enabled"] = console.enable_color
    ctx.color = console.enable_color

    ctx.obj["locale"] = lang
    ctx.obj["console"] = console


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="StampMark: keep created/modified timestamps in document front matter.",
)
@common_verbose_options
@common_color_options
@click.option(
    "--lang",
    "lang",
    default=None,
    metavar="LOCALE",
    help="Display language for labels (e.g. en, zh). Defaults to the environment.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    lang: str | None,
) -> None:
    """Entry point for the StampMark CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
        lang=lang,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'stampmark check [PATHS...]' to check document timestamps.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(init_config_command)

cli.add_command(dump_config_command)

cli.add_command(settings_command)

cli.add_command(check_command)

cli.add_command(touch_command)

cli.add_command(new_command)

cli.add_command(set_command)

cli.add_command(watch_command)

if __name__ == "__main__":
    cli()
