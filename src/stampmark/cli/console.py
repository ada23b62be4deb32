# topmark:header:start
#
#   project      : StampMark
#   file         : console.py
#   file_relpath : src/stampmark/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console abstraction for user-facing program output.

Use `ClickConsole` for messages intended for end users and keep `logging` for
diagnostics.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, TextIO

import click

if TYPE_CHECKING:
    from stampmark.cli.options import OutputFormat


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, ANSI color codes are kept in the output.
        out (TextIO | None): Stream for standard output (defaults to `sys.stdout`).
        err (TextIO | None): Stream for error output (defaults to `sys.stderr`).
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout.

        Args:
            text (str): Message text.
            nl (bool): If True, append a newline.
        """
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style` (plain when color is disabled)."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)

    def is_terminal(self) -> bool:
        """Return True if standard output is an interactive terminal."""
        try:
            return self.out.isatty()
        except (OSError, ValueError):
            # Closed or detached stream
            return False

    def use_output_format(self, output_format: OutputFormat) -> None:
        """Drop ANSI styling when ``output_format`` is machine-readable."""
        if output_format.is_machine:
            self.enable_color = False


def get_console_safely() -> ClickConsole:
    """Return the console of the active Click context, or a plain `ClickConsole`.

    Commands always find the console created by the group callback; helpers
    called outside a Click context (e.g. from tests) get an uncolored default.
    """
    ctx: click.Context | None = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "console" in ctx.obj:
        console: ClickConsole = ctx.obj["console"]
        return console
    return ClickConsole(enable_color=False)
