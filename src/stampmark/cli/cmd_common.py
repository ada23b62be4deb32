# topmark:header:start
#
#   project      : StampMark
#   file         : cmd_common.py
#   file_relpath : src/stampmark/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

Helpers shared by the stamping commands (``check``, ``touch``, ``new``,
``set``): building the effective config, planning inputs (paths or STDIN),
rendering results and mapping outcomes to exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable

import click

from stampmark.cli.console import get_console_safely
from stampmark.cli.errors import StampmarkUsageError
from stampmark.cli.exit_codes import ExitCode, exit_code_for_error
from stampmark.cli.options import OutputFormat
from stampmark.cli.utils import (
    emit_diffs,
    emit_machine_output,
    render_per_file_lines,
    render_summary_counts,
)
from stampmark.config import MutableConfig
from stampmark.config.logging import get_logger
from stampmark.file_resolver import resolve_file_list
from stampmark.runner import StampResult, WriteStatus, run_for_text

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from stampmark.cli.console import ClickConsole
    from stampmark.config import Config
    from stampmark.config.logging import StampmarkLogger

logger: StampmarkLogger = get_logger(__name__)

STDIN_PATH: str = "-"


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored by the group callback (0 if unset)."""
    obj: object = ctx.obj
    if isinstance(obj, dict):
        return int(obj.get("verbosity_level", 0) or 0)
    return 0


@dataclass(frozen=True)
class InputPlan:
    """Where the documents of a stamping command come from.

    Attributes:
        paths (tuple[str, ...]): Positional paths (``"."`` when none were given).
        stdin_mode (bool): True when ``-`` was given: content is read from STDIN.
    """

    paths: tuple[str, ...]
    stdin_mode: bool


def plan_inputs(paths: Sequence[str]) -> InputPlan:
    """Classify positional arguments into paths mode or STDIN content mode.

    Raises:
        StampmarkUsageError: If ``-`` is combined with other paths.
    """
    if STDIN_PATH in paths:
        if len(paths) > 1:
            raise StampmarkUsageError(
                "'-' (content from STDIN) must be the only PATH argument."
            )
        return InputPlan(paths=(), stdin_mode=True)
    return InputPlan(paths=tuple(paths) or (".",), stdin_mode=False)


def build_config(
    ctx: click.Context,
    *,
    no_config: bool,
    config_paths: Sequence[str],
    include_patterns: Sequence[str] = (),
    exclude_patterns: Sequence[str] = (),
    enable_created: bool | None = None,
    enable_modified: bool | None = None,
) -> Config:
    """Merge defaults, config files and CLI overrides into a frozen `Config`.

    CLI include/exclude patterns extend the configured ones; the
    ``--created``/``--modified`` toggles and ``--lang`` override them.
    """
    draft: MutableConfig = MutableConfig.load_merged(
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    overrides = MutableConfig(
        enable_created=enable_created,
        enable_modified=enable_modified,
        include_patterns=[*(draft.include_patterns or []), *include_patterns]
        if include_patterns
        else None,
        exclude_patterns=[*(draft.exclude_patterns or []), *exclude_patterns]
        if exclude_patterns
        else None,
        locale=ctx.obj.get("locale") if isinstance(ctx.obj, dict) else None,
    )
    config: Config = draft.merge_with(overrides).freeze()
    logger.trace("Effective config: %s", config)
    return config


def resolve_files(plan: InputPlan, config: Config) -> tuple[list[Path], list[str]]:
    """Return (documents to process, positional paths that do not exist)."""
    missing: list[str] = [p for p in plan.paths if not Path(p).exists()]
    console: ClickConsole = get_console_safely()
    for p in missing:
        console.error(f"❌ No such file or directory: {p}")
    return resolve_file_list(plan.paths, config), missing


def exit_if_no_files(file_list: list[Path]) -> bool:
    """Echo a friendly message and return True if there is nothing to process."""
    if not file_list:
        console: ClickConsole = get_console_safely()
        console.print(console.styled("\nℹ️  No documents to process.\n", fg="blue"))
        return True
    return False


def read_stdin_text() -> str:
    """Read the whole STDIN through Click's text stream (works with CliRunner)."""
    return click.get_text_stream("stdin").read()


def emit_stdin_result(
    ctx: click.Context,
    fields_for_text: Callable[[str], Mapping[str, str]],
) -> None:
    """Stamp content read from STDIN and print the updated content to STDOUT."""
    text: str = read_stdin_text()
    result: StampResult = run_for_text(text, fields_for_text(text))
    logger.debug("STDIN content: %s", result.status.name)
    console: ClickConsole = get_console_safely()
    console.print(result.updated, nl=False)
    ctx.exit(ExitCode.SUCCESS)


def report_results(
    ctx: click.Context,
    results: list[StampResult],
    *,
    apply_changes: bool,
    diff: bool,
    summary_mode: bool,
    output_format: OutputFormat,
    missing: list[str],
) -> None:
    """Render results and exit with the code matching the outcome.

    Exit code policy:
        * the most specific error code of the first failed document, else
        * ``FILE_NOT_FOUND`` if a positional path did not exist, else
        * ``WOULD_CHANGE`` for a dry run with pending changes, else
        * ``SUCCESS``.
    """
    console: ClickConsole = get_console_safely()
    command_name: str = ctx.command.name or "check"
    vlevel: int = get_effective_verbosity(ctx)

    if output_format.is_machine:
        emit_machine_output(results, output_format, summary_mode)
    else:
        if summary_mode:
            render_summary_counts(results, total=len(results))
        else:
            render_per_file_lines(
                results,
                command_name=command_name,
                apply_changes=apply_changes,
                verbosity=vlevel,
            )
        if diff:
            emit_diffs(results)
        if apply_changes and vlevel >= 0:
            written: int = sum(1 for r in results if r.write is WriteStatus.WRITTEN)
            msg: str = (
                f"\n✅ Applied changes to {written} file(s)."
                if written
                else "\n✅ No changes to apply."
            )
            console.print(console.styled(msg, fg="green", bold=True))

    for r in results:
        if r.error is not None:
            ctx.exit(exit_code_for_error(r.error))
    if missing:
        ctx.exit(ExitCode.FILE_NOT_FOUND)
    if not apply_changes and any(r.changed for r in results):
        ctx.exit(ExitCode.WOULD_CHANGE)
    ctx.exit(ExitCode.SUCCESS)


def check_output_flags(
    ctx: click.Context,
    *,
    plan: InputPlan,
    diff: bool,
    output_format: OutputFormat,
) -> None:
    """Reject flag combinations that have no meaning for the selected output.

    Machine formats also switch the console to uncolored output.

    Raises:
        StampmarkUsageError: On ``--diff`` with a machine format, or on STDIN
            content mode combined with a machine format.
    """
    machine: bool = output_format.is_machine
    if machine and diff:
        raise StampmarkUsageError(
            f"{ctx.command.name}: --diff is not supported with machine-readable output formats."
        )
    if machine and plan.stdin_mode:
        raise StampmarkUsageError(
            f"{ctx.command.name}: '-' (content from STDIN) prints the updated content; "
            "--format is not supported."
        )
    get_console_safely().use_output_format(output_format)


def run_stamp_command(
    ctx: click.Context,
    *,
    plan: InputPlan,
    config: Config,
    fields_for_text: Callable[[str], Mapping[str, str]],
    process: Callable[[Path], StampResult],
    apply_changes: bool,
    diff: bool,
    summary_mode: bool,
    output_format: OutputFormat,
) -> None:
    """Shared body of the stamping commands.

    Args:
        ctx (click.Context): Current Click context.
        plan (InputPlan): Paths or STDIN content mode.
        config (Config): Effective configuration.
        fields_for_text (Callable[[str], Mapping[str, str]]): Fields to set on
            STDIN content.
        process (Callable[[Path], StampResult]): Stamps one document on disk.
        apply_changes (bool): Whether documents are written.
        diff (bool): Show unified diffs.
        summary_mode (bool): Show counts instead of per-file lines.
        output_format (OutputFormat): Human or machine output.
    """
    if plan.stdin_mode:
        emit_stdin_result(ctx, fields_for_text)
        return

    file_list, missing = resolve_files(plan, config)
    if not missing and exit_if_no_files(file_list):
        return

    results: list[StampResult] = [process(path) for path in file_list]
    report_results(
        ctx,
        results,
        apply_changes=apply_changes,
        diff=diff,
        summary_mode=summary_mode,
        output_format=output_format,
        missing=missing,
    )
