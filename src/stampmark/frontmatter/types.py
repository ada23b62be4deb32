# topmark:header:start
#
#   project      : StampMark
#   file         : types.py
#   file_relpath : src/stampmark/frontmatter/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type definitions for the front matter engine.

Structured results passed between header extraction and the upsert step, so
callers access offsets and contents by name instead of unpacking tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BlockKind(Enum):
    """Discriminant for header-block detection results.

    Members:
        SPAN: A marker-delimited header block starts at offset 0.
        NONE: The document has no header block (body only).
    """

    SPAN = "span"
    NONE = "none"


@dataclass(frozen=True)
class HeaderBlock:
    """Structured result of header-block extraction.

    This is a discriminated union controlled by ``kind``:

    * When ``kind is BlockKind.SPAN``:
        - ``start`` is always 0 (the opening marker is the first line).
        - ``end`` is the character offset just past the closing marker
          (its line terminator, if any, is *not* part of the block).
        - ``inner`` holds the text strictly between the marker lines.
    * When ``kind is BlockKind.NONE``:
        - ``inner`` is the empty string and ``start``/``end`` are ``None``.

    Attributes:
        kind (BlockKind): Discriminant of the result.
        inner (str): Contents between the opening and closing marker lines.
        start (int | None): Offset of the opening marker (inclusive).
        end (int | None): Offset after the closing marker (exclusive, slice-friendly).
    """

    kind: BlockKind
    inner: str = ""
    start: int | None = None  # inclusive
    end: int | None = None  # exclusive

    @property
    def exists(self) -> bool:
        """Return True when the document starts with a header block."""
        return self.kind is BlockKind.SPAN
