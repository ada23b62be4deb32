# topmark:header:start
#
#   project      : StampMark
#   file         : stamper.py
#   file_relpath : src/stampmark/stamper.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Event policy: which timestamp fields to set for a document event.

`Stamper` turns host events into field mappings for the front matter engine:

* ``OPEN``: fill in missing ``created``/``modified`` fields from the file's own
  clock values. Existing values are never overwritten.
* ``CREATE``: set both fields to the current time.
* ``MODIFY``: set ``modified`` to the current time, at most once per
  ``modify_interval`` seconds for a given document.

Each field is only considered when enabled in the configuration.
"""

from __future__ import annotations

import time
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Callable

from stampmark.config.logging import get_logger
from stampmark.constants import FIELD_CREATED, FIELD_MODIFIED
from stampmark.frontmatter import extract_header_block, has_field, upsert_fields
from stampmark.runner import StampResult, StampStatus, WriteStatus, stamp_file
from stampmark.timestamps import format_timestamp

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from stampmark.config import Config
    from stampmark.config.logging import StampmarkLogger
    from stampmark.timestamps import FileTimes

logger: StampmarkLogger = get_logger(__name__)


class EventKind(Enum):
    """Document events a host can report."""

    OPEN = "open"
    CREATE = "create"
    MODIFY = "modify"


class Stamper:
    """Decide and apply timestamp updates for document events.

    Args:
        config (Config): Runtime configuration (enabled fields, modify interval).
        now (Callable[[], datetime]): Wall clock used for new timestamps.
        monotonic (Callable[[], float]): Clock used for the modify throttle.
    """

    def __init__(
        self,
        config: Config,
        *,
        now: Callable[[], datetime] = datetime.now,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self._now = now
        self._monotonic = monotonic
        self._last_modify: dict[str, float] = {}
        self._processing: bool = False

    @property
    def processing(self) -> bool:
        """Return True while a document is being handled."""
        return self._processing

    def _modify_due(self, key: str) -> bool:
        """Return True when ``key`` is outside the throttle window."""
        current: float = self._monotonic()
        last: float | None = self._last_modify.get(key)
        if last is not None and current - last <= self.config.modify_interval:
            logger.debug(
                "Throttled modify for %s (%.1fs since last update, interval %ds)",
                key,
                current - last,
                self.config.modify_interval,
            )
            return False
        return True

    def record_write(self, event: EventKind, key: str, at: float | None = None) -> None:
        """Update the modify throttle once ``event`` has been written for ``key``.

        A written ``MODIFY`` starts a new throttle window at ``at`` (default: now).
        A written ``CREATE`` clears the window so the next edit is stamped at once.
        Callers that persist text produced by `stamp` or `fields_for` must call
        this themselves; `handle` does it for successful writes.
        """
        if event is EventKind.MODIFY:
            self._last_modify[key] = self._monotonic() if at is None else at
        elif event is EventKind.CREATE:
            self._last_modify.pop(key, None)

    def fields_for(
        self,
        event: EventKind,
        text: str,
        times: FileTimes,
        *,
        key: str = "",
    ) -> dict[str, str]:
        """Return the fields to upsert for ``event`` on a document.

        Args:
            event (EventKind): The event being handled.
            text (str): Current document text.
            times (FileTimes): The document's clock values (used for ``OPEN``).
            key (str): Identity of the document for the modify throttle.

        Returns:
            dict[str, str]: Field names mapped to formatted timestamps (may be empty).
        """
        cfg: Config = self.config
        fields: dict[str, str] = {}

        if event is EventKind.OPEN:
            inner: str = extract_header_block(text).inner
            if cfg.enable_created and not has_field(inner, FIELD_CREATED):
                fields[FIELD_CREATED] = format_timestamp(times.created)
            if cfg.enable_modified and not has_field(inner, FIELD_MODIFIED):
                fields[FIELD_MODIFIED] = format_timestamp(times.modified)

        elif event is EventKind.CREATE:
            stamp: str = format_timestamp(self._now())
            if cfg.enable_created:
                fields[FIELD_CREATED] = stamp
            if cfg.enable_modified:
                fields[FIELD_MODIFIED] = stamp

        elif event is EventKind.MODIFY:
            if cfg.enable_modified and self._modify_due(key):
                fields[FIELD_MODIFIED] = format_timestamp(self._now())

        return fields

    def stamp(
        self,
        event: EventKind,
        text: str,
        times: FileTimes,
        *,
        key: str = "",
    ) -> str | None:
        """Return the updated text for ``event``, or None when nothing changes."""
        fields: Mapping[str, str] = self.fields_for(event, text, times, key=key)
        if not fields:
            return None
        updated: str = upsert_fields(text, fields)
        return None if updated == text else updated

    def handle(self, event: EventKind, path: Path, *, apply: bool = True) -> StampResult:
        """Read, stamp and (optionally) write back a document.

        Events that arrive while another document is being handled are ignored
        and reported as ``SKIPPED``.

        Args:
            event (EventKind): The event being handled.
            path (Path): Document path.
            apply (bool): Write the change when True.

        Returns:
            StampResult: The outcome for this document.
        """
        if self._processing:
            logger.debug("Ignoring %s event for %s: a document is being processed", event, path)
            return StampResult(path=path, status=StampStatus.SKIPPED)

        key: str = str(path)
        started: float = self._monotonic()
        self._processing = True
        try:
            result: StampResult = stamp_file(
                path,
                planner=lambda text, times: self.fields_for(event, text, times, key=key),
                apply=apply,
            )
        finally:
            self._processing = False

        # Dry runs and failed writes leave the throttle window untouched
        if result.write is WriteStatus.WRITTEN:
            self.record_write(event, key, at=started)

        logger.info(
            "%s %s: %s (%s)", event.value, path, result.status.value, result.write.value
        )
        return result
