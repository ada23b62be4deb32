# topmark:header:start
#
#   project      : StampMark
#   file         : watcher.py
#   file_relpath : src/stampmark/watcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polling event source for `stampmark watch`.

The watcher compares successive ``st_mtime_ns`` snapshots of the documents
returned by a provider callable and turns the differences into events:

* documents present in the first snapshot produce ``OPEN``;
* documents that appear later produce ``CREATE``;
* documents whose modification time changed produce ``MODIFY``.

Writes performed by StampMark itself update the snapshot, so they never come
back as ``MODIFY`` events. Processing is strictly sequential.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable, Iterable

from stampmark.config.logging import get_logger
from stampmark.runner import WriteStatus
from stampmark.stamper import EventKind

if TYPE_CHECKING:
    from pathlib import Path

    from stampmark.config.logging import StampmarkLogger
    from stampmark.runner import StampResult
    from stampmark.stamper import Stamper

logger: StampmarkLogger = get_logger(__name__)


class Watcher:
    """Poll documents and feed their events to a `Stamper`.

    Args:
        paths_provider (Callable[[], Iterable[Path]]): Returns the documents to
            watch; called once per poll so new files are picked up.
        stamper (Stamper): Handles the events.
        poll_interval (float): Seconds to sleep between polls.
        apply (bool): Write changes (False only reports them).
        on_result (Callable[[StampResult], None] | None): Called for every handled event.
        sleep (Callable[[float], None]): Sleep function.
    """

    def __init__(
        self,
        paths_provider: Callable[[], Iterable[Path]],
        stamper: Stamper,
        *,
        poll_interval: float = 1.0,
        apply: bool = True,
        on_result: Callable[[StampResult], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.paths_provider = paths_provider
        self.stamper = stamper
        self.poll_interval = poll_interval
        self.apply = apply
        self.on_result = on_result
        self._sleep = sleep
        self._snapshot: dict[Path, int] | None = None

    def _scan(self) -> dict[Path, int]:
        snapshot: dict[Path, int] = {}
        for path in self.paths_provider():
            try:
                snapshot[path] = path.stat().st_mtime_ns
            except OSError as e:
                # Vanished between listing and stat
                logger.debug("Cannot stat %s: %s", path, e)
        return snapshot

    def poll_once(self) -> list[tuple[EventKind, Path]]:
        """Take a new snapshot and return the events since the previous one."""
        current: dict[Path, int] = self._scan()
        events: list[tuple[EventKind, Path]] = []
        if self._snapshot is None:
            events = [(EventKind.OPEN, p) for p in sorted(current)]
        else:
            for path in sorted(current):
                previous: int | None = self._snapshot.get(path)
                if previous is None:
                    events.append((EventKind.CREATE, path))
                elif previous != current[path]:
                    events.append((EventKind.MODIFY, path))
        self._snapshot = current
        logger.trace("Poll: %d document(s), %d event(s)", len(current), len(events))
        return events

    def _remember_own_write(self, path: Path) -> None:
        if self._snapshot is None:
            return
        try:
            self._snapshot[path] = path.stat().st_mtime_ns
        except OSError as e:
            logger.debug("Cannot stat %s after write: %s", path, e)

    def dispatch(self, events: Iterable[tuple[EventKind, Path]]) -> list[StampResult]:
        """Hand ``events`` to the stamper, one at a time."""
        results: list[StampResult] = []
        for event, path in events:
            result: StampResult = self.stamper.handle(event, path, apply=self.apply)
            if result.write is WriteStatus.WRITTEN:
                self._remember_own_write(path)
            if self.on_result is not None:
                self.on_result(result)
            results.append(result)
        return results

    def run(self, max_cycles: int | None = None) -> int:
        """Poll and dispatch until interrupted or ``max_cycles`` polls were made.

        Returns:
            int: The number of events handled.
        """
        handled: int = 0
        cycles: int = 0
        while max_cycles is None or cycles < max_cycles:
            handled += len(self.dispatch(self.poll_once()))
            cycles += 1
            if max_cycles is None or cycles < max_cycles:
                self._sleep(self.poll_interval)
        logger.info("Watcher stopped after %d cycle(s), %d event(s)", cycles, handled)
        return handled
