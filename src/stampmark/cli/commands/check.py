# topmark:header:start
#
#   project      : StampMark
#   file         : check.py
#   file_relpath : src/stampmark/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default StampMark operation (check/apply).

Checks whether each document's header holds ``created`` and ``modified``
fields, and fills in the missing ones from the file's own clock values.
Existing values are never overwritten. Performs a dry-run by default and
writes changes when ``--apply`` is given.

Input modes supported:
  * **Paths mode (default)**: files and directories (``.`` when none given).
  * **Content on STDIN**: a single ``-`` as the sole PATH; the updated content
    is printed to STDOUT and both timestamps default to the current time.

Examples:
  Check documents and print a human summary:

    $ stampmark check --summary notes

  Add the missing fields and show diffs:

    $ stampmark check --apply --diff .

  Stamp content from STDIN:

    $ cat note.md | stampmark check -
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stampmark.cli.cmd_common import (
    build_config,
    check_output_flags,
    plan_inputs,
    run_stamp_command,
)
from stampmark.cli.options import (
    OutputFormat,
    common_config_options,
    common_filter_options,
    stamp_output_options,
    stamp_toggle_options,
)
from stampmark.config.logging import get_logger
from stampmark.stamper import EventKind, Stamper
from stampmark.timestamps import times_now

if TYPE_CHECKING:
    from stampmark.cli.cmd_common import InputPlan
    from stampmark.config import Config
    from stampmark.config.logging import StampmarkLogger

logger: StampmarkLogger = get_logger(__name__)


@click.command(
    name="check",
    help="Add missing created/modified fields (dry-run). Use --apply to write.",
    epilog="""\
Examples:

  # Preview which documents would change (dry-run)
  stampmark check notes

  # Apply: add missing timestamps in-place
  stampmark check --apply .
""",
)
@click.argument("paths", nargs=-1, type=str)
@common_config_options
@common_filter_options
@stamp_toggle_options
@stamp_output_options
def check_command(
    *,
    paths: tuple[str, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    enable_created: bool | None,
    enable_modified: bool | None,
    apply_changes: bool,
    diff: bool,
    summary_mode: bool,
    output_format: OutputFormat | None,
) -> None:
    """Run the check command.

    Exit Status:
        SUCCESS (0): No changes required or all requested changes were written.
        WOULD_CHANGE (2): Dry-run detected documents that would change with ``--apply``.
        USAGE_ERROR (64): Invalid invocation (e.g. ``-`` combined with other paths).
        ENCODING_ERROR (65): A document is not valid UTF-8.
        FILE_NOT_FOUND (66): A path given on the command line does not exist.
        IO_ERROR (74): A document could not be read or written.
    """
    ctx: click.Context = click.get_current_context()
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    plan: InputPlan = plan_inputs(paths)
    check_output_flags(ctx, plan=plan, diff=diff, output_format=fmt)

    config: Config = build_config(
        ctx,
        no_config=no_config,
        config_paths=config_paths,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        enable_created=enable_created,
        enable_modified=enable_modified,
    )
    stamper = Stamper(config)

    run_stamp_command(
        ctx,
        plan=plan,
        config=config,
        fields_for_text=lambda text: stamper.fields_for(EventKind.OPEN, text, times_now()),
        process=lambda path: stamper.handle(EventKind.OPEN, path, apply=apply_changes),
        apply_changes=apply_changes,
        diff=diff,
        summary_mode=summary_mode,
        output_format=fmt,
    )
