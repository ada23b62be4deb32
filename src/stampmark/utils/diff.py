# topmark:header:start
#
#   project      : StampMark
#   file         : diff.py
#   file_relpath : src/stampmark/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized preview for StampMark."""

from __future__ import annotations

import difflib
from typing import Sequence

from yachalk import chalk

from stampmark.config.logging import get_logger

logger = get_logger(__name__)


def unified_diff(original: str, updated: str, *, label: str) -> str | None:
    """Return a unified diff between two document texts, or None if they are equal.

    Args:
        original (str): Current document text.
        updated (str): Updated document text.
        label (str): Name used in the ``---``/``+++`` file headers.

    Returns:
        str | None: The diff text (lines keep their terminators), or None.
    """
    if original == updated:
        return None
    patch_lines: list[str] = list(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{label} (current)",
            tofile=f"{label} (updated)",
            n=3,
        )
    )
    # difflib leaves the last line unterminated when the document has no final newline
    text: str = "".join(line if line.endswith("\n") else f"{line}\n" for line in patch_lines)
    logger.trace("Diff for %s: %d line(s)", label, len(patch_lines))
    return text or None


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch: A unified diff as **either** a sequence of lines **or** a single
            multiline string.
        show_line_numbers: Whether to prefix output with line numbers.

    Returns:
        The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = [line.rstrip("\n") for line in patch]

    def process_line(line: str) -> str:
        content = line.replace("\r", "\\r")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
