# topmark:header:start
#
#   project      : StampMark
#   file         : errors.py
#   file_relpath : src/stampmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the StampMark CLI.

Raise these from commands to stop with a standardized message and exit code.
They are printed through the project console when one is present in the Click
context, and with Click's default styling otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from stampmark.cli.exit_codes import ExitCode


class StampmarkError(click.ClickException):
    """Base class for all StampMark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class StampmarkUsageError(StampmarkError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR

