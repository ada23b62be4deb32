# topmark:header:start
#
#   project      : StampMark
#   file         : utils.py
#   file_relpath : src/stampmark/cli/utils.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI rendering and machine-output helpers.

Human output covers per-file status lines, outcome counts, unified diffs and
TOML blocks. Machine output writes JSON or NDJSON payloads. All printing goes
through the console returned by `get_console_safely`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from stampmark.cli.console import get_console_safely
from stampmark.cli.options import OutputFormat
from stampmark.config.logging import get_logger
from stampmark.constants import STAMPMARK_VERSION
from stampmark.runner import StampStatus, WriteStatus
from stampmark.utils.diff import render_patch

if TYPE_CHECKING:
    from stampmark.cli.console import ClickConsole
    from stampmark.config.logging import StampmarkLogger
    from stampmark.runner import StampResult

logger: StampmarkLogger = get_logger(__name__)

TOML_BLOCK_START: str = "# === BEGIN ==="
TOML_BLOCK_END: str = "# === END ==="


def collect_outcome_counts(results: list[StampResult]) -> dict[StampStatus, int]:
    """Count results per `StampStatus`, in enum order, omitting zero counts."""
    counts: dict[StampStatus, int] = {}
    for status in StampStatus:
        n: int = sum(1 for r in results if r.status is status)
        if n:
            counts[status] = n
    return counts


def render_summary_counts(results: list[StampResult], *, total: int) -> None:
    """Print the human summary (aligned counts by outcome)."""
    console: ClickConsole = get_console_safely()
    console.print()
    console.print(console.styled("Summary by outcome:", bold=True, underline=True))

    counts: dict[StampStatus, int] = collect_outcome_counts(results)
    label_width: int = max((len(s.value) for s in counts), default=0) + 1
    num_width: int = len(str(total))
    for status, n in counts.items():
        console.print(status.color(f"  {status.value:<{label_width}}: {n:>{num_width}}"))


def render_per_file_lines(
    results: list[StampResult],
    *,
    command_name: str,
    apply_changes: bool,
    verbosity: int,
) -> None:
    """Print one status line per document.

    Up-to-date documents are only listed when ``verbosity > 0``; nothing but
    failures is listed when ``verbosity < 0``.
    """
    console: ClickConsole = get_console_safely()
    for r in results:
        if r.status is StampStatus.FAILED or r.write is WriteStatus.FAILED:
            console.error(f"❌ {r.label}: {r.error}")
            continue
        if verbosity < 0:
            continue
        if not r.changed:
            if verbosity > 0:
                console.print(f"{r.label}: {r.status.colored()}")
            continue
        if apply_changes:
            console.print(f"✏️  {r.label}: {r.status.colored()}")
        else:
            console.print(f"{r.label}: {r.status.colored()}")
            console.print(
                console.styled(
                    f"   🛠️  Run `stampmark {command_name} --apply {r.label}` to update this file.",
                    dim=True,
                )
            )
        if verbosity > 1:
            for name, value in r.fields.items():
                console.print(f"     {name}: {value}")


def emit_diffs(results: list[StampResult]) -> None:
    """Print colorized unified diffs for the changed documents."""
    console: ClickConsole = get_console_safely()
    for r in results:
        if r.diff:
            console.print(render_patch(r.diff))


def build_meta_payload() -> dict[str, Any]:
    """Return the ``meta`` object included in JSON output."""
    return {"tool": "stampmark", "version": STAMPMARK_VERSION}


def emit_machine_output(
    results: list[StampResult],
    fmt: OutputFormat,
    summary_mode: bool,
) -> None:
    """Print results as JSON (one document) or NDJSON (one object per line)."""
    console: ClickConsole = get_console_safely()
    if summary_mode:
        counts: dict[str, int] = {
            s.name.lower(): n for s, n in collect_outcome_counts(results).items()
        }
        if fmt == OutputFormat.NDJSON:
            for key, n in counts.items():
                console.print(json.dumps({"kind": "summary", "key": key, "count": n}))
        else:
            console.print(
                json.dumps({"meta": build_meta_payload(), "summary": counts}, indent=2)
            )
        return

    if fmt == OutputFormat.NDJSON:
        for r in results:
            console.print(json.dumps({"kind": "result", **r.to_dict()}))
    else:
        payload: dict[str, Any] = {
            "meta": build_meta_payload(),
            "results": [r.to_dict() for r in results],
        }
        console.print(json.dumps(payload, indent=2))


def render_toml_block(*, console: ClickConsole, title: str, toml_text: str, verbosity: int) -> None:
    """Print TOML text, framed by BEGIN/END markers and a title when verbose."""
    if verbosity > 0:
        console.print(console.styled(title, bold=True, underline=True))
        console.print(console.styled(TOML_BLOCK_START, fg="cyan", dim=True))
    console.print(console.styled(toml_text.rstrip("\n"), fg="cyan"))
    if verbosity > 0:
        console.print(console.styled(TOML_BLOCK_END, fg="cyan", dim=True))
