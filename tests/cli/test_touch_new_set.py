# topmark:header:start
#
#   project      : StampMark
#   file         : test_touch_new_set.py
#   file_relpath : tests/cli/test_touch_new_set.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""`touch`, `new` and `set`: explicit timestamp and field updates."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import pytest

from stampmark.cli.commands.set_fields import parse_field_assignments
from stampmark.cli.errors import StampmarkUsageError
from tests.cli.conftest import (
    assert_SUCCESS,
    assert_USAGE_ERROR,
    assert_WOULD_CHANGE,
    run_cli_in,
)
from tests.conftest import TIMESTAMP_RE, mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

OLD = "---\ncreated: 2000-01-01 00:00:00\nmodified: 2000-01-02 00:00:00\n---\nBody\n"


def _doc(tmp_path: Path, text: str = OLD) -> Path:
    path: Path = tmp_path / "note.md"
    path.write_text(text, encoding="utf-8")
    return path


@mark_cli
def test_touch_refreshes_modified(tmp_path: Path) -> None:
    """``touch`` sets ``modified`` to now and keeps ``created``."""
    doc: Path = _doc(tmp_path)

    result: Result = run_cli_in(tmp_path, ["touch", "--apply", "note.md"])

    assert_SUCCESS(result)
    assert re.fullmatch(
        rf"---\ncreated: 2000-01-01 00:00:00\nmodified: {TIMESTAMP_RE}\n---\nBody\n",
        doc.read_text(encoding="utf-8"),
    )
    assert "2000-01-02" not in doc.read_text(encoding="utf-8")


@mark_cli
def test_touch_dry_run(tmp_path: Path) -> None:
    """Without ``--apply`` the hint names the touch command."""
    doc: Path = _doc(tmp_path)

    result: Result = run_cli_in(tmp_path, ["touch", "note.md"])

    assert_WOULD_CHANGE(result)
    assert "Run `stampmark touch --apply note.md`" in result.output
    assert doc.read_text(encoding="utf-8") == OLD


@mark_cli
def test_touch_with_modified_disabled(tmp_path: Path) -> None:
    """With ``modified`` disabled there is nothing to touch."""
    doc: Path = _doc(tmp_path)

    assert_SUCCESS(run_cli_in(tmp_path, ["touch", "--no-modified", "note.md"]))
    assert doc.read_text(encoding="utf-8") == OLD


@mark_cli
def test_new_resets_both_fields(tmp_path: Path) -> None:
    """``new`` overwrites both fields with the same current time."""
    doc: Path = _doc(tmp_path)

    assert_SUCCESS(run_cli_in(tmp_path, ["new", "--apply", "note.md"]))

    m = re.fullmatch(
        rf"---\ncreated: ({TIMESTAMP_RE})\nmodified: ({TIMESTAMP_RE})\n---\nBody\n",
        doc.read_text(encoding="utf-8"),
    )
    assert m is not None
    assert m.group(1) == m.group(2)
    assert not m.group(1).startswith("2000")


@mark_cli
def test_set_fields(tmp_path: Path) -> None:
    """``set`` appends new fields and replaces existing ones in place."""
    doc: Path = _doc(tmp_path, "---\ntitle: Old\n---\nBody\n")

    result: Result = run_cli_in(
        tmp_path,
        ["set", "-f", "title=New: improved", "-f", "status=draft", "--apply", "note.md"],
    )

    assert_SUCCESS(result)
    assert doc.read_text(encoding="utf-8") == (
        "---\ntitle: New: improved\nstatus: draft\n---\nBody\n"
    )


@mark_cli
def test_set_rejects_invalid_name(tmp_path: Path) -> None:
    """Field names with whitespace are a usage error."""
    _doc(tmp_path)

    assert_USAGE_ERROR(run_cli_in(tmp_path, ["set", "-f", "bad name=x", "note.md"]))


def test_parse_field_assignments_last_wins() -> None:
    """Repeated names keep the last value; values may contain ``=``."""
    assert parse_field_assignments(["a=1", "b=x=y", "a=2", "c="]) == {
        "a": "2",
        "b": "x=y",
        "c": "",
    }


@parametrize("raw", ["novalue", "=x", "a:b=1", "a b=1", "a=line\nbreak"])
def test_parse_field_assignments_errors(raw: str) -> None:
    """Malformed assignments raise a usage error."""
    with pytest.raises(StampmarkUsageError):
        parse_field_assignments([raw])
