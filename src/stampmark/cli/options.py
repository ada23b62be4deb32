# topmark:header:start
#
#   project      : StampMark
#   file         : options.py
#   file_relpath : src/stampmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI options and their resolution logic.

Reusable option groups (verbosity, color, config, filters, stamp toggles and
output) are defined here as decorators so commands stay thin.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Generic, NoReturn, ParamSpec, TypeVar, cast

import click

from stampmark.cli.errors import StampmarkUsageError
from stampmark.config.logging import get_logger

if TYPE_CHECKING:
    from stampmark.config.logging import StampmarkLogger

P = ParamSpec("P")
R = TypeVar("R")
E = TypeVar("E", bound=Enum)

logger: StampmarkLogger = get_logger(__name__)


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Attributes:
        DEFAULT: Human-friendly text output; may include ANSI color if enabled.
        JSON: A single JSON document (machine-readable).
        NDJSON: One JSON object per line (machine-readable).
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"

    @property
    def is_machine(self) -> bool:
        """Return True for the machine-readable formats (never colored)."""
        return self in (OutputFormat.JSON, OutputFormat.NDJSON)


class ColorMode(str, Enum):
    """Value of the ``--color`` option.

    Attributes:
        AUTO: Color when stdout is a terminal (and the environment allows it).
        ALWAYS: Always emit ANSI color.
        NEVER: Never emit ANSI color.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class EnumChoiceParam(click.ParamType, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", e.value) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: object,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string (case-insensitive) to a member of the Enum."""
        if value is None or isinstance(value, self.enum_cls):
            return cast("E | None", value)
        lookup: dict[str, E] = {cast("str", e.value).lower(): e for e in self.enum_cls}
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]
        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v`` and ``-q`` counts.

    Returns:
        int: ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        StampmarkUsageError: If both flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise StampmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count or -quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counting, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output. Specify up to twice for even less.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color auto|always|never`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and ``--config FILE`` (repeatable)."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore local project config files (only use defaults).",
    )(f)
    f = click.option(
        "--config",
        "-c",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_filter_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--include`` and ``--exclude`` gitignore-style pattern filters."""
    f = click.option(
        "--include",
        "-i",
        "include_patterns",
        multiple=True,
        help="Filter: keep only documents matching these patterns (intersection).",
    )(f)
    f = click.option(
        "--exclude",
        "-e",
        "exclude_patterns",
        multiple=True,
        help="Filter: remove documents matching these patterns (subtraction).",
    )(f)
    return f


def stamp_toggle_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--created/--no-created`` and ``--modified/--no-modified`` overrides."""
    f = click.option(
        "--created/--no-created",
        "enable_created",
        default=None,
        help="Maintain the 'created' field (overrides config).",
    )(f)
    f = click.option(
        "--modified/--no-modified",
        "enable_modified",
        default=None,
        help="Maintain the 'modified' field (overrides config).",
    )(f)
    return f


def stamp_output_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--apply``, ``--diff``, ``--summary`` and ``--format``."""
    f = click.option(
        "--apply", "apply_changes", is_flag=True, help="Write changes to files (off by default)."
    )(f)
    f = click.option("--diff", is_flag=True, help="Show unified diffs (human output only).")(f)
    f = click.option(
        "--summary",
        "summary_mode",
        is_flag=True,
        help="Show outcome counts instead of per-file details.",
    )(f)
    f = click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
    return f
