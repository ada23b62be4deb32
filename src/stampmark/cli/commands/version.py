# topmark:header:start
#
#   project      : StampMark
#   file         : version.py
#   file_relpath : src/stampmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark `version` command.

Prints the current StampMark version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from stampmark.cli.cmd_common import get_effective_verbosity
from stampmark.cli.console import get_console_safely
from stampmark.cli.options import EnumChoiceParam, OutputFormat
from stampmark.constants import STAMPMARK_VERSION

if TYPE_CHECKING:
    from stampmark.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of StampMark.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of StampMark.

    Args:
        output_format (OutputFormat | None): Plain text (default) or JSON/NDJSON.
    """
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = get_console_safely()
    vlevel: int = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    console.use_output_format(fmt)
    if fmt.is_machine:
        console.print(json.dumps({"version": STAMPMARK_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("StampMark version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(STAMPMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(STAMPMARK_VERSION, bold=True))
