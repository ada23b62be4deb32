# topmark:header:start
#
#   project      : StampMark
#   file         : watch.py
#   file_relpath : src/stampmark/cli/commands/watch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark `watch` command.

Polls the documents under PATHS and keeps their timestamps current:

* on startup every document gets its missing ``created``/``modified`` fields;
* a new document gets both fields set to the current time;
* a modified document gets ``modified`` refreshed, at most once per
  ``modify_interval`` seconds.

Stop with Ctrl-C, or pass ``--max-cycles`` to stop after a number of polls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stampmark.cli.cmd_common import build_config, get_effective_verbosity, plan_inputs
from stampmark.cli.console import get_console_safely
from stampmark.cli.errors import StampmarkUsageError
from stampmark.cli.options import common_config_options, common_filter_options, stamp_toggle_options
from stampmark.config.logging import get_logger
from stampmark.file_resolver import resolve_file_list
from stampmark.runner import StampStatus, WriteStatus
from stampmark.stamper import Stamper
from stampmark.watcher import Watcher

if TYPE_CHECKING:
    from stampmark.cli.cmd_common import InputPlan
    from stampmark.cli.console import ClickConsole
    from stampmark.config import Config
    from stampmark.config.logging import StampmarkLogger
    from stampmark.runner import StampResult

logger: StampmarkLogger = get_logger(__name__)


@click.command(
    name="watch",
    help="Watch documents and keep their created/modified fields up to date.",
)
@click.argument("paths", nargs=-1, type=str)
@common_config_options
@common_filter_options
@stamp_toggle_options
@click.option(
    "--poll-interval",
    "poll_interval",
    type=click.FloatRange(min=0.0),
    default=1.0,
    show_default=True,
    help="Seconds between two polls.",
)
@click.option(
    "--max-cycles",
    "max_cycles",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many polls (default: run until interrupted).",
)
@click.option(
    "--dry-run", "dry_run", is_flag=True, help="Report what would change without writing."
)
def watch_command(
    *,
    paths: tuple[str, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    enable_created: bool | None,
    enable_modified: bool | None,
    poll_interval: float,
    max_cycles: int | None,
    dry_run: bool,
) -> None:
    """Run the watch loop."""
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = get_console_safely()
    vlevel: int = get_effective_verbosity(ctx)

    plan: InputPlan = plan_inputs(paths)
    if plan.stdin_mode:
        raise StampmarkUsageError("watch: '-' (content from STDIN) is not supported.")

    config: Config = build_config(
        ctx,
        no_config=no_config,
        config_paths=config_paths,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        enable_created=enable_created,
        enable_modified=enable_modified,
    )

    def _report(result: StampResult) -> None:
        if result.status is StampStatus.FAILED or result.write is WriteStatus.FAILED:
            console.error(f"❌ {result.label}: {result.error}")
        elif vlevel > 0 or (vlevel == 0 and result.changed):
            console.print(f"{result.label}: {result.status.colored()}")

    watcher = Watcher(
        lambda: resolve_file_list(plan.paths, config),
        Stamper(config),
        poll_interval=poll_interval,
        apply=not dry_run,
        on_result=_report,
    )

    if vlevel >= 0:
        console.print(
            console.styled(
                f"👀 Watching {', '.join(plan.paths)} (every {poll_interval:g}s, Ctrl-C to stop)",
                fg="blue",
            )
        )
    try:
        handled: int = watcher.run(max_cycles=max_cycles)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        console.print()
        return
    if vlevel > 0:
        console.print(f"Handled {handled} event(s).")
