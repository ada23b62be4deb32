# topmark:header:start
#
#   project      : StampMark
#   file         : runner.py
#   file_relpath : src/stampmark/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Batch stamping of documents.

The runner connects document I/O to the pure front matter engine. For each
document it asks a *planner* which fields to set, computes the updated text,
classifies the outcome and (when applying) writes the result back.

Errors never escape per-document processing: read, decode and write failures
are logged, recorded on the `StampResult` and the document is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Mapping

from yachalk import chalk

from stampmark.config.logging import get_logger
from stampmark.documents import Document, decode_document, read_document, write_document
from stampmark.frontmatter import extract_header_block, upsert_fields
from stampmark.rendering.colored_enum import ColoredStrEnum
from stampmark.timestamps import FileTimes, file_times
from stampmark.utils.diff import unified_diff

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from stampmark.config.logging import StampmarkLogger

logger: StampmarkLogger = get_logger(__name__)

#: Returns the fields to upsert for a document's text and clock values.
Planner = Callable[[str, FileTimes], Mapping[str, str]]

STDIN_LABEL: str = "<stdin>"


class StampStatus(ColoredStrEnum):
    """Outcome of stamping a single document.

    Attributes:
        UNCHANGED: The header already holds the requested values.
        INSERTED: A new header block was prepended.
        UPDATED: The existing header block was modified.
        SKIPPED: The document was not processed (re-entrant event, mixed newlines).
        FAILED: The document could not be read or planned.
    """

    UNCHANGED = ("up-to-date", chalk.green)
    INSERTED = ("header inserted", chalk.yellow)
    UPDATED = ("header updated", chalk.yellow_bright)
    SKIPPED = ("skipped", chalk.gray)
    FAILED = ("failed", chalk.red_bright)


class WriteStatus(ColoredStrEnum):
    """Write phase status of a single document.

    Attributes:
        PENDING: Nothing was written (no change, or processing stopped earlier).
        DRY_RUN: A change was computed but not written.
        WRITTEN: The updated text was written to disk.
        FAILED: Writing the updated text failed; the file is unchanged.
    """

    PENDING = ("pending", chalk.gray)
    DRY_RUN = ("would write", chalk.yellow)
    WRITTEN = ("written", chalk.green)
    FAILED = ("write failed", chalk.red_bright)


@dataclass
class StampResult:
    """Result of processing one document.

    Attributes:
        path (Path | None): Document path; None for content read from STDIN.
        status (StampStatus): Outcome of the stamping step.
        write (WriteStatus): Outcome of the write step.
        original (str): Original text (LF-normalized).
        updated (str): Updated text (equals ``original`` when nothing changed).
        fields (dict[str, str]): Fields that were upserted.
        error (Exception | None): The error that stopped processing, if any.
        diff (str | None): Unified diff between ``original`` and ``updated``.
        newline (str): Newline style of the document on disk.
    """

    path: Path | None
    status: StampStatus
    write: WriteStatus = WriteStatus.PENDING
    original: str = ""
    updated: str = ""
    fields: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None
    diff: str | None = None
    newline: str = "\n"

    @property
    def label(self) -> str:
        """Return a display name for the document."""
        return STDIN_LABEL if self.path is None else str(self.path)

    @property
    def changed(self) -> bool:
        """Return True if stamping produced a different text."""
        return self.status in (StampStatus.INSERTED, StampStatus.UPDATED)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable summary of this result."""
        return {
            "path": self.label,
            "status": self.status.name.lower(),
            "write": self.write.name.lower(),
            "changed": self.changed,
            "fields": dict(self.fields),
            "error": str(self.error) if self.error is not None else None,
        }


def compose_result(
    original: str,
    fields: Mapping[str, str],
    *,
    path: Path | None = None,
    newline: str = "\n",
) -> StampResult:
    """Upsert ``fields`` into ``original`` and classify the outcome (no I/O).

    Args:
        original (str): LF-normalized document text.
        fields (Mapping[str, str]): Fields to set.
        path (Path | None): Document path, for labelling.
        newline (str): Newline style to restore on write.

    Returns:
        StampResult: Result with status, updated text and diff filled in.
    """
    updated: str = upsert_fields(original, fields)
    if updated == original:
        status: StampStatus = StampStatus.UNCHANGED
    elif extract_header_block(original).exists:
        status = StampStatus.UPDATED
    else:
        status = StampStatus.INSERTED

    result = StampResult(
        path=path,
        status=status,
        original=original,
        updated=updated,
        fields=dict(fields),
        newline=newline,
    )
    result.diff = unified_diff(original, updated, label=result.label)
    return result


def write_result(result: StampResult) -> StampResult:
    """Write a changed result to disk, updating its write status in place."""
    if not result.changed or result.path is None:
        return result
    try:
        write_document(result.path, result.updated, result.newline)
    except OSError as e:
        logger.error("Failed to write %s: %s", result.path, e)
        result.write = WriteStatus.FAILED
        result.error = e
        return result
    result.write = WriteStatus.WRITTEN
    return result


def stamp_file(path: Path, *, planner: Planner, apply: bool) -> StampResult:
    """Stamp a single document on disk.

    Args:
        path (Path): Document to process.
        planner (Planner): Decides which fields to upsert.
        apply (bool): Write changes when True; otherwise mark them ``DRY_RUN``.

    Returns:
        StampResult: The outcome. Errors are recorded, never raised.
    """
    try:
        doc: Document = read_document(path)
        times: FileTimes = file_times(path)
    except UnicodeDecodeError as e:
        logger.error("Encoding error while reading %s: %s", path, e)
        return StampResult(path=path, status=StampStatus.FAILED, error=e)
    except OSError as e:
        logger.error("Filesystem error while reading %s: %s", path, e)
        return StampResult(path=path, status=StampStatus.FAILED, error=e)

    if doc.mixed_newlines:
        logger.warning("Skipping %s: mixed line endings", path)
        return StampResult(
            path=path, status=StampStatus.SKIPPED, original=doc.text, updated=doc.text
        )

    fields: Mapping[str, str] = planner(doc.text, times)
    logger.debug("Fields for %s: %s", path, dict(fields))
    result: StampResult = compose_result(doc.text, fields, path=path, newline=doc.newline)

    if not result.changed:
        return result
    if apply:
        return write_result(result)
    result.write = WriteStatus.DRY_RUN
    return result


def run_for_files(paths: Iterable[Path], *, planner: Planner, apply: bool) -> list[StampResult]:
    """Stamp each document in ``paths`` (in order) and collect the results."""
    results: list[StampResult] = []
    for path in paths:
        result: StampResult = stamp_file(path, planner=planner, apply=apply)
        logger.trace("%s: %s / %s", path, result.status.name, result.write.name)
        results.append(result)
    return results


def run_for_text(text: str, fields: Mapping[str, str]) -> StampResult:
    """Stamp text that does not live in a file (content read from STDIN).

    The write status stays ``PENDING``: the caller emits ``result.updated``.
    """
    doc: Document = decode_document(text)
    return compose_result(doc.text, fields, path=None, newline=doc.newline)
