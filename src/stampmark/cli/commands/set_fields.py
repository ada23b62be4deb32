# topmark:header:start
#
#   project      : StampMark
#   file         : set_fields.py
#   file_relpath : src/stampmark/cli/commands/set_fields.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark `set` command.

Upserts arbitrary ``name: value`` fields into each document's header block:

    $ stampmark set -f status=draft -f author=ann --apply notes/

Values are written verbatim. Names may not contain ``:`` and neither part may
span several lines, since a field always occupies exactly one header line.
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
from stampmark.cli.errors import StampmarkUsageError
from stampmark.cli.options import (
    OutputFormat,
    common_config_options,
    common_filter_options,
    stamp_output_options,
)
from stampmark.runner import stamp_file

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stampmark.cli.cmd_common import InputPlan
    from stampmark.config import Config


def parse_field_assignments(values: Iterable[str]) -> dict[str, str]:
    """Parse ``NAME=VALUE`` strings into an ordered mapping (last one wins).

    Raises:
        StampmarkUsageError: On a missing ``=``, an empty or invalid name, or a
            multi-line value.
    """
    fields: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        name = name.strip()
        if not sep or not name:
            raise StampmarkUsageError(f"Invalid field assignment '{raw}': expected NAME=VALUE.")
        if ":" in name or any(c.isspace() for c in name):
            raise StampmarkUsageError(
                f"Invalid field name '{name}': names may not contain ':' or whitespace."
            )
        if "\n" in value or "\r" in value:
            raise StampmarkUsageError(f"Invalid value for field '{name}': must be a single line.")
        fields[name] = value
    return fields


@click.command(
    name="set",
    help="Set arbitrary header fields (dry-run). Use --apply to write.",
)
@click.argument("paths", nargs=-1, type=str)
@click.option(
    "--field",
    "-f",
    "assignments",
    multiple=True,
    required=True,
    metavar="NAME=VALUE",
    help="Field to set (repeatable).",
)
@common_config_options
@common_filter_options
@stamp_output_options
def set_command(
    *,
    paths: tuple[str, ...],
    assignments: tuple[str, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    apply_changes: bool,
    diff: bool,
    summary_mode: bool,
    output_format: OutputFormat | None,
) -> None:
    """Run the set command (exit codes as for `check`)."""
    ctx: click.Context = click.get_current_context()
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    fields: dict[str, str] = parse_field_assignments(assignments)
    plan: InputPlan = plan_inputs(paths)
    check_output_flags(ctx, plan=plan, diff=diff, output_format=fmt)

    config: Config = build_config(
        ctx,
        no_config=no_config,
        config_paths=config_paths,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
    )

    run_stamp_command(
        ctx,
        plan=plan,
        config=config,
        fields_for_text=lambda _text: fields,
        process=lambda path: stamp_file(
            path, planner=lambda _text, _times: fields, apply=apply_changes
        ),
        apply_changes=apply_changes,
        diff=diff,
        summary_mode=summary_mode,
        output_format=fmt,
    )
