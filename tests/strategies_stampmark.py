# topmark:header:start
#
#   project      : StampMark
#   file         : strategies_stampmark.py
#   file_relpath : tests/strategies_stampmark.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hypothesis strategies for documents with and without a front matter block.

Generated documents are LF-only (CRLF is handled at the I/O boundary, not by
the engine) and free of control characters.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from hypothesis import strategies as st

Draw = Callable[[st.SearchStrategy[Any]], Any]

EXCLUDED_CATEGORIES: tuple[Literal["Cs", "Cc"], ...] = ("Cs", "Cc")

MARKER: str = "---"

# Single-line text: control characters (including CR and LF) excluded
s_line: st.SearchStrategy[str] = st.text(
    alphabet=st.characters(exclude_categories=EXCLUDED_CATEGORIES, max_codepoint=0x2FFF),
    max_size=40,
)

s_field_name: st.SearchStrategy[str] = st.from_regex(r"[A-Za-z_][A-Za-z0-9_.\-]{0,11}", fullmatch=True)

s_field_value: st.SearchStrategy[str] = s_line


def s_fields(min_size: int = 1) -> st.SearchStrategy[dict[str, str]]:
    """Field mappings, including the two timestamp names now and then."""
    names: st.SearchStrategy[str] = st.one_of(
        st.sampled_from(("created", "modified")),
        s_field_name,
    )
    return st.dictionaries(keys=names, values=s_field_value, min_size=min_size, max_size=4)


@st.composite
def s_header_inner(draw: Draw) -> str:
    """Contents of an existing header block: field lines, free lines and blank padding."""
    field_lines: list[str] = [
        f"{name}: {value}" for name, value in draw(s_fields(min_size=0)).items()
    ]
    free_lines: list[str] = draw(st.lists(s_line.filter(lambda s: s != MARKER), max_size=3))
    lines: list[str] = draw(st.permutations(field_lines + free_lines))
    pad_top: list[str] = [""] * draw(st.integers(min_value=0, max_value=2))
    pad_bottom: list[str] = [""] * draw(st.integers(min_value=0, max_value=2))
    return "\n".join(pad_top + lines + pad_bottom)


@st.composite
def s_body(draw: Draw) -> str:
    """Body text: arbitrary lines, sometimes holding a ``---`` separator."""
    lines: list[str] = draw(st.lists(st.one_of(s_line, st.just(MARKER)), max_size=6))
    body: str = "\n".join(lines)
    if body and draw(st.booleans()):
        body += "\n"
    return body


@st.composite
def s_document(draw: Draw) -> str:
    """A document that starts with a header block, or a bare body."""
    body: str = draw(s_body())
    if draw(st.booleans()):
        inner: str = draw(s_header_inner())
        return f"{MARKER}\n{inner}\n{MARKER}\n{body}"
    return body
