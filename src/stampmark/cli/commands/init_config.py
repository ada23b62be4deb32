# topmark:header:start
#
#   project      : StampMark
#   file         : init_config.py
#   file_relpath : src/stampmark/cli/commands/init_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark `init-config` command.

Prints the default configuration as TOML, as a starting point for a project's
``stampmark.toml`` (or, with ``--pyproject``, its ``[tool.stampmark]`` table).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stampmark.cli.cmd_common import get_effective_verbosity
from stampmark.cli.console import get_console_safely
from stampmark.cli.utils import render_toml_block
from stampmark.config.loaders import render_default_config_toml

if TYPE_CHECKING:
    from stampmark.cli.console import ClickConsole


@click.command(
    name="init-config",
    help="Display an initial StampMark configuration file.",
)
@click.option(
    "--pyproject",
    "for_pyproject",
    is_flag=True,
    help="Nest the configuration under [tool.stampmark] for pyproject.toml.",
)
def init_config_command(*, for_pyproject: bool) -> None:
    """Print a starter config file to stdout."""
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = get_console_safely()

    render_toml_block(
        console=console,
        title="Initial StampMark Configuration (TOML):",
        toml_text=render_default_config_toml(for_pyproject=for_pyproject),
        verbosity=get_effective_verbosity(ctx),
    )
