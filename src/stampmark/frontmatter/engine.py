# topmark:header:start
#
#   project      : StampMark
#   file         : engine.py
#   file_relpath : src/stampmark/frontmatter/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Header field upsert engine.

The engine works on a document's raw text and knows exactly one structure: an
optional block delimited by ``---`` lines at the very start of the text,
holding ``name: value`` field lines. It is composed of three pure operations:

1. `extract_header_block` locates the block and returns its inner contents.
2. `has_field` tests whether a field line exists for a given name.
3. `upsert_fields` sets every field of a mapping (replace the first matching
   line, or append) and reassembles the document.

Field values are opaque strings: nothing is escaped or validated, and no
input makes these functions raise. Text outside the header block is never
touched.

Detection is deliberately non-greedy: the block ends at the *nearest* ``---``
line after the opening marker. A body containing ``---`` before the intended
closing marker therefore ends the block early.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from stampmark.config.logging import get_logger
from stampmark.constants import HEADER_MARKER
from stampmark.frontmatter.types import BlockKind, HeaderBlock

if TYPE_CHECKING:
    from collections.abc import Mapping

    from stampmark.config.logging import StampmarkLogger

logger: StampmarkLogger = get_logger(__name__)

# Opening marker on the first line; closing marker is the nearest whole `---` line.
_HEADER_BLOCK_RE: re.Pattern[str] = re.compile(
    rf"\A{re.escape(HEADER_MARKER)}\n(?P<inner>.*?)\n{re.escape(HEADER_MARKER)}(?=\n|\Z)",
    re.DOTALL,
)


def _field_pattern(name: str) -> re.Pattern[str]:
    """Return a line-anchored pattern matching the field line for ``name``."""
    return re.compile(rf"^{re.escape(name)}:.*$", re.MULTILINE)


def _trim_blank_lines(contents: str) -> str:
    """Drop leading and trailing blank (empty or whitespace-only) lines."""
    lines: list[str] = contents.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def extract_header_block(text: str) -> HeaderBlock:
    """Locate the header block at the start of ``text``.

    Args:
        text (str): The document text.

    Returns:
        HeaderBlock: ``SPAN`` with the inner contents and the offsets of the whole
            marker-delimited region, or ``NONE`` (empty inner contents) when the text
            does not begin with a header block.
    """
    m: re.Match[str] | None = _HEADER_BLOCK_RE.match(text)
    if m is None:
        return HeaderBlock(kind=BlockKind.NONE)
    return HeaderBlock(kind=BlockKind.SPAN, inner=m.group("inner"), start=m.start(), end=m.end())


def has_field(inner: str, name: str) -> bool:
    """Return True if the header contents hold a field line for ``name``.

    Matching is case-sensitive and anchored at the start of a line: ``created``
    does not match ``createdAt: ...`` nor ``# created: ...``.

    Args:
        inner (str): Header block contents (may be empty).
        name (str): Field name, taken literally.

    Returns:
        bool: Whether a ``name:`` line exists.
    """
    return _field_pattern(name).search(inner) is not None


def read_fields(inner: str) -> dict[str, str]:
    """Return the ``name: value`` pairs found in the header contents.

    The first occurrence of a name wins; lines without a colon are ignored.
    One space after the colon is treated as the separator, the rest of the
    line is the value verbatim.
    """
    fields: dict[str, str] = {}
    for line in inner.split("\n"):
        name, sep, value = line.partition(":")
        if not sep:
            continue
        fields.setdefault(name, value[1:] if value.startswith(" ") else value)
    return fields


def upsert_fields(text: str, fields: Mapping[str, str]) -> str:
    """Set every field of ``fields`` in the document's header block.

    Existing field lines are replaced in place (first match only); missing
    fields are appended in mapping order. Leading and trailing blank lines of
    the resulting contents are trimmed. Without an existing header block, a new
    block followed by one blank line is prepended to the original text. An
    empty mapping leaves a document without header block untouched.

    The result is a fixed point: calling this function again with the same
    mapping returns the same text.

    Args:
        text (str): The document text.
        fields (Mapping[str, str]): Field names mapped to their new values.

    Returns:
        str: The updated document text.
    """
    block: HeaderBlock = extract_header_block(text)
    if not fields and not block.exists:
        return text

    contents: str = block.inner
    for name, value in fields.items():
        line: str = f"{name}: {value}"
        pattern: re.Pattern[str] = _field_pattern(name)
        if pattern.search(contents):
            # Callable replacement: values are literal text, not templates
            contents = pattern.sub(lambda _m, line=line: line, contents, count=1)
            logger.trace("Replaced field line '%s'", name)
        else:
            contents = f"{contents}\n{line}"
            logger.trace("Appended field line '%s'", name)

    header: str = f"{HEADER_MARKER}\n{_trim_blank_lines(contents)}\n{HEADER_MARKER}"

    if block.exists:
        return header + text[block.end :]
    return f"{header}\n\n{text}"
