# topmark:header:start
#
#   project      : StampMark
#   file         : __init__.py
#   file_relpath : src/stampmark/frontmatter/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure front matter engine (header extraction, field presence test, upsert)."""

from __future__ import annotations

from stampmark.frontmatter.engine import (
    extract_header_block,
    has_field,
    read_fields,
    upsert_fields,
)
from stampmark.frontmatter.types import BlockKind, HeaderBlock

__all__ = [
    "BlockKind",
    "HeaderBlock",
    "extract_header_block",
    "has_field",
    "read_fields",
    "upsert_fields",
]
