# topmark:header:start
#
#   project      : StampMark
#   file         : touch.py
#   file_relpath : src/stampmark/cli/commands/touch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark `touch` command.

Sets each document's ``modified`` field to the current time, adding a header
block when the document has none. Unlike ``watch``, the modify interval does
not apply: every document named is updated.

Performs a dry-run by default; ``-`` as the sole PATH stamps STDIN content.
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
from stampmark.stamper import EventKind, Stamper
from stampmark.timestamps import times_now

if TYPE_CHECKING:
    from stampmark.cli.cmd_common import InputPlan
    from stampmark.config import Config


@click.command(
    name="touch",
    help="Set the 'modified' field to the current time (dry-run). Use --apply to write.",
)
@click.argument("paths", nargs=-1, type=str)
@common_config_options
@common_filter_options
@stamp_toggle_options
@stamp_output_options
def touch_command(
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
    """Run the touch command (exit codes as for `check`)."""
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
        fields_for_text=lambda text: stamper.fields_for(EventKind.MODIFY, text, times_now()),
        process=lambda path: stamper.handle(EventKind.MODIFY, path, apply=apply_changes),
        apply_changes=apply_changes,
        diff=diff,
        summary_mode=summary_mode,
        output_format=fmt,
    )
