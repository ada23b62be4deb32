# topmark:header:start
#
#   project      : StampMark
#   file         : test_stdin_content.py
#   file_relpath : tests/cli/test_stdin_content.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Content on STDIN (``-``): the updated content is printed to STDOUT."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli_in
from tests.conftest import TIMESTAMP_RE, mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_check_stdin_prints_stamped_content(tmp_path: Path) -> None:
    """Both fields are set to the current time."""
    result: Result = run_cli_in(tmp_path, ["check", "-"], input_text="Body\n")

    assert_SUCCESS(result)
    m = re.fullmatch(
        rf"---\ncreated: ({TIMESTAMP_RE})\nmodified: ({TIMESTAMP_RE})\n---\n\nBody\n",
        result.output,
    )
    assert m is not None, result.output


@mark_cli
def test_check_stdin_keeps_existing_values(tmp_path: Path) -> None:
    """A complete header is echoed unchanged."""
    text = "---\ncreated: 2000-01-01 00:00:00\nmodified: 2000-01-02 00:00:00\n---\nBody\n"

    result: Result = run_cli_in(tmp_path, ["check", "-"], input_text=text)

    assert_SUCCESS(result)
    assert result.output == text


@mark_cli
def test_touch_stdin_updates_modified_only(tmp_path: Path) -> None:
    """``touch -`` refreshes ``modified`` and keeps ``created``."""
    text = "---\ncreated: 2000-01-01 00:00:00\nmodified: 2000-01-02 00:00:00\n---\nBody\n"

    result: Result = run_cli_in(tmp_path, ["touch", "-"], input_text=text)

    assert_SUCCESS(result)
    assert result.output.startswith("---\ncreated: 2000-01-01 00:00:00\nmodified: ")
    assert "2000-01-02" not in result.output


@mark_cli
def test_set_stdin(tmp_path: Path) -> None:
    """``set -`` upserts the given fields."""
    result: Result = run_cli_in(tmp_path, ["set", "-f", "status=draft", "-"], input_text="Body")

    assert_SUCCESS(result)
    assert result.output == "---\nstatus: draft\n---\n\nBody"


@mark_cli
def test_stdin_crlf_is_normalized(tmp_path: Path) -> None:
    """CRLF input is processed like LF input."""
    result: Result = run_cli_in(tmp_path, ["set", "-f", "a=1", "-"], input_text="---\r\nb: 2\r\n---\r\n")

    assert_SUCCESS(result)
    assert result.output.replace("\r\n", "\n") == "---\nb: 2\na: 1\n---\n"


@mark_cli
@parametrize(
    "argv",
    [
        ["check", "-", "note.md"],
        ["check", "--format", "json", "-"],
        ["watch", "-"],
    ],
)
def test_stdin_misuse_is_rejected(tmp_path: Path, argv: list[str]) -> None:
    """``-`` must be alone and cannot be combined with machine output or watch mode."""
    assert_USAGE_ERROR(run_cli_in(tmp_path, argv, input_text="Body\n"))
