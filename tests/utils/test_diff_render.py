# topmark:header:start
#
#   project      : StampMark
#   file         : test_diff_render.py
#   file_relpath : tests/utils/test_diff_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diff utils: unified diff generation and colorized rendering.

Covers `unified_diff` headers and terminators, and `render_patch` inputs and
output type guarantees.
"""

from __future__ import annotations

from stampmark.utils.diff import render_patch, unified_diff


def test_unified_diff_equal_texts() -> None:
    """Identical texts have no diff."""
    assert unified_diff("same\n", "same\n", label="note.md") is None


def test_unified_diff_headers_and_lines() -> None:
    """Headers carry the label; added header lines are marked with ``+``."""
    diff = unified_diff("Body\n", "---\ncreated: x\n---\n\nBody\n", label="note.md")

    assert diff is not None
    lines = diff.splitlines()
    assert lines[0] == "--- note.md (current)"
    assert lines[1] == "+++ note.md (updated)"
    assert "+created: x" in lines
    assert " Body" in lines


def test_unified_diff_terminates_last_line() -> None:
    """A document without final newline still yields newline-terminated lines."""
    diff = unified_diff("Body", "---\na: 1\n---\n\nBody", label="x")

    assert diff is not None
    assert diff.endswith("\n")
    assert all(line for line in diff.split("\n")[:-1])


def test_render_patch_accepts_str_and_list() -> None:
    """`render_patch` should accept both a diff string and an iterable of lines."""
    diff_text = "--- a\n+++ b\n-foo\n+bar\n"
    s1 = render_patch(diff_text)
    s2 = render_patch(diff_text.splitlines(False))

    # Both should render to non-empty strings.
    assert isinstance(s1, str) and isinstance(s2, str) and s1 and s2


def test_render_patch_line_numbers() -> None:
    """Line numbers are zero-padded prefixes."""
    rendered = render_patch("-a\n+b\n", show_line_numbers=True)

    assert rendered.splitlines()[0].startswith("0001|")
    assert rendered.splitlines()[1].startswith("0002|")


def test_render_patch_empty_input_is_safe() -> None:
    """Empty diff input should not raise and should return a string."""
    s = render_patch("")
    assert isinstance(s, str)
