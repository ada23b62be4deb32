# topmark:header:start
#
#   project      : StampMark
#   file         : documents.py
#   file_relpath : src/stampmark/documents.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document I/O at the boundary of the front matter engine.

The engine only understands ``\\n`` line terminators. Documents that use CRLF
consistently are normalized to LF when read and converted back when written,
so a round trip never changes the newline style of a file. Files with mixed
line endings are passed through as-is.

Writes are atomic: the new content goes to a temporary file in the same
directory, which then replaces the original.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from stampmark.config.logging import StampmarkLogger, get_logger

logger: StampmarkLogger = get_logger(__name__)


@dataclass(frozen=True)
class Document:
    """Text of a document, LF-normalized, plus the newline style to restore.

    Attributes:
        text (str): Document text. LF-only unless ``mixed_newlines`` is set.
        newline (str): Newline style used on disk (``"\\n"`` or ``"\\r\\n"``).
        mixed_newlines (bool): True when both CRLF and bare LF were found; ``text``
            is then the raw content.
    """

    text: str
    newline: str = "\n"
    mixed_newlines: bool = False


def detect_newline(text: str) -> str:
    """Return ``"\\r\\n"`` when ``text`` uses CRLF consistently, else ``"\\n"``."""
    crlf: int = text.count("\r\n")
    lf: int = text.count("\n") - crlf
    if crlf and not lf:
        return "\r\n"
    return "\n"


def decode_document(raw: str) -> Document:
    """Build a `Document` from raw text (as read with ``newline=""``)."""
    crlf: int = raw.count("\r\n")
    lf: int = raw.count("\n") - crlf
    if crlf and lf:
        logger.debug("Mixed line endings (LF=%d, CRLF=%d): text left as-is", lf, crlf)
        return Document(text=raw, newline="\n", mixed_newlines=True)
    newline: str = detect_newline(raw)
    text: str = raw.replace("\r\n", "\n") if newline == "\r\n" else raw
    return Document(text=text, newline=newline)


def encode_document(text: str, newline: str) -> str:
    """Return ``text`` with LF terminators converted back to ``newline``."""
    if newline == "\n":
        return text
    return text.replace("\n", newline)


def read_document(path: Path) -> Document:
    """Read a UTF-8 document from disk.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with open(path, encoding="utf-8", newline="") as fh:
        raw: str = fh.read()
    logger.trace("Read %d characters from %s", len(raw), path)
    return decode_document(raw)


def write_document(path: Path, text: str, newline: str = "\n") -> int:
    """Atomically replace the content of ``path``.

    Args:
        path (Path): Target file.
        text (str): LF-normalized text to write.
        newline (str): Newline style to restore on disk.

    Returns:
        int: Number of UTF-8 bytes written.

    Raises:
        OSError: If the temporary file cannot be written or moved into place.
    """
    data: str = encode_document(text, newline)
    target: Path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(data)
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
    except BaseException:
        # Leave the original untouched on any failure
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    bytes_written: int = len(data.encode("utf-8"))
    logger.debug("Wrote %d bytes to %s", bytes_written, target)
    return bytes_written
