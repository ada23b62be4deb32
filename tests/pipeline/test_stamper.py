# topmark:header:start
#
#   project      : StampMark
#   file         : test_stamper.py
#   file_relpath : tests/pipeline/test_stamper.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Event policy: open/create/modify fields, throttling and re-entrancy."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from stampmark import runner
from stampmark.runner import StampStatus, WriteStatus
from stampmark.stamper import EventKind, Stamper
from stampmark.timestamps import FileTimes
from tests.conftest import FakeClock, make_config, mark_pipeline

if TYPE_CHECKING:
    from pathlib import Path

    from stampmark.runner import StampResult

START = datetime(2024, 5, 1, 9, 0, 0)
FILE_TIMES = FileTimes(created=datetime(2023, 1, 2, 3, 4, 5), modified=datetime(2023, 6, 7, 8, 9, 10))


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clocks starting at ``START``."""
    return FakeClock(START)


def make_stamper(clock: FakeClock, **overrides: object) -> Stamper:
    """Return a stamper driven by ``clock``."""
    return Stamper(make_config(**overrides), now=clock.now, monotonic=clock.monotonic)


@mark_pipeline
def test_open_fills_missing_fields_from_file_times(clock: FakeClock) -> None:
    """``OPEN`` uses the document's own clock values."""
    stamper: Stamper = make_stamper(clock)

    assert stamper.fields_for(EventKind.OPEN, "Body", FILE_TIMES) == {
        "created": "2023-01-02 03:04:05",
        "modified": "2023-06-07 08:09:10",
    }


@mark_pipeline
def test_open_never_overwrites(clock: FakeClock) -> None:
    """Existing values stay; only the missing field is requested."""
    stamper: Stamper = make_stamper(clock)
    text = "---\ncreated: 2000-01-01 00:00:00\n---\nBody"

    assert stamper.fields_for(EventKind.OPEN, text, FILE_TIMES) == {
        "modified": "2023-06-07 08:09:10"
    }
    complete = "---\ncreated: a\nmodified: b\n---\n"
    assert stamper.fields_for(EventKind.OPEN, complete, FILE_TIMES) == {}


@mark_pipeline
def test_open_ignores_fields_in_body(clock: FakeClock) -> None:
    """A ``created:`` line outside the header does not count."""
    stamper: Stamper = make_stamper(clock, enable_modified=False)

    assert stamper.fields_for(EventKind.OPEN, "created: x\n", FILE_TIMES) == {
        "created": "2023-01-02 03:04:05"
    }


@mark_pipeline
def test_create_sets_both_to_now(clock: FakeClock) -> None:
    """``CREATE`` uses the same current instant for both fields."""
    stamper: Stamper = make_stamper(clock)

    assert stamper.fields_for(EventKind.CREATE, "", FILE_TIMES) == {
        "created": "2024-05-01 09:00:00",
        "modified": "2024-05-01 09:00:00",
    }


@mark_pipeline
@pytest.mark.parametrize("event", list(EventKind))
def test_disabled_fields_are_never_requested(clock: FakeClock, event: EventKind) -> None:
    """With both toggles off no event produces fields."""
    stamper: Stamper = make_stamper(clock, enable_created=False, enable_modified=False)

    assert stamper.fields_for(event, "Body", FILE_TIMES, key="a") == {}


@mark_pipeline
def test_modify_throttle(clock: FakeClock) -> None:
    """At most one ``modified`` update per interval, strictly after it elapsed."""
    stamper: Stamper = make_stamper(clock, modify_interval=10)

    first = stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a")
    assert first == {"modified": "2024-05-01 09:00:00"}
    stamper.record_write(EventKind.MODIFY, "a")

    clock.advance(5)
    assert stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a") == {}

    clock.advance(5)  # exactly the interval: still throttled
    assert stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a") == {}

    clock.advance(0.5)
    assert stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a") == {
        "modified": "2024-05-01 09:00:10"
    }


@mark_pipeline
def test_planning_alone_does_not_throttle(clock: FakeClock) -> None:
    """Only a recorded write starts the throttle window."""
    stamper: Stamper = make_stamper(clock, modify_interval=60)

    assert stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a")
    clock.advance(1)
    assert stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a")


@mark_pipeline
def test_modify_throttle_is_per_document(clock: FakeClock) -> None:
    """Throttling one document does not affect another."""
    stamper: Stamper = make_stamper(clock, modify_interval=60)
    stamper.record_write(EventKind.MODIFY, "a")

    assert not stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a")
    assert stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="b")


@mark_pipeline
def test_create_resets_throttle(clock: FakeClock) -> None:
    """The first modify after a written create is never throttled."""
    stamper: Stamper = make_stamper(clock, modify_interval=60)
    stamper.record_write(EventKind.MODIFY, "a")
    clock.advance(1)
    assert not stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a")

    stamper.record_write(EventKind.CREATE, "a")
    clock.advance(1)

    assert stamper.fields_for(EventKind.MODIFY, "", FILE_TIMES, key="a")


@mark_pipeline
def test_written_modify_throttles_next_event(tmp_path: Path, clock: FakeClock) -> None:
    """A successful write starts the window for the next ``MODIFY``."""
    path: Path = tmp_path / "note.md"
    path.write_text("---\nmodified: old\n---\nBody\n", encoding="utf-8")
    stamper: Stamper = make_stamper(clock, modify_interval=10)

    assert stamper.handle(EventKind.MODIFY, path).write is WriteStatus.WRITTEN
    clock.advance(1)
    path.write_text("---\nmodified: old\n---\nBody\n", encoding="utf-8")

    result: StampResult = stamper.handle(EventKind.MODIFY, path)

    assert result.status is StampStatus.UNCHANGED
    assert path.read_text(encoding="utf-8") == "---\nmodified: old\n---\nBody\n"


@mark_pipeline
def test_failed_write_keeps_modify_due(
    tmp_path: Path,
    clock: FakeClock,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A write that fails does not use up the throttle window."""
    caplog.set_level(logging.INFO, logger="stampmark.stamper")
    path: Path = tmp_path / "note.md"
    path.write_text("---\nmodified: old\n---\nBody\n", encoding="utf-8")
    stamper: Stamper = make_stamper(clock, modify_interval=10)
    write_document = runner.write_document

    def disk_full(*args: object, **kwargs: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(runner, "write_document", disk_full)
    assert stamper.handle(EventKind.MODIFY, path).write is WriteStatus.FAILED
    assert "header updated (write failed)" in caplog.text

    monkeypatch.setattr(runner, "write_document", write_document)
    clock.advance(1)
    result: StampResult = stamper.handle(EventKind.MODIFY, path)

    assert result.status is StampStatus.UPDATED
    assert result.write is WriteStatus.WRITTEN
    assert path.read_text(encoding="utf-8") == (
        "---\nmodified: 2024-05-01 09:00:01\n---\nBody\n"
    )


@mark_pipeline
def test_dry_run_keeps_modify_due(tmp_path: Path, clock: FakeClock) -> None:
    """Reporting a change without writing it does not throttle the next event."""
    path: Path = tmp_path / "note.md"
    path.write_text("Body\n", encoding="utf-8")
    stamper: Stamper = make_stamper(clock, modify_interval=10)

    assert stamper.handle(EventKind.MODIFY, path, apply=False).write is WriteStatus.DRY_RUN
    clock.advance(1)

    assert stamper.handle(EventKind.MODIFY, path).write is WriteStatus.WRITTEN


@mark_pipeline
def test_stamp_returns_none_without_change(clock: FakeClock) -> None:
    """No fields, or fields already holding the values, mean no new text."""
    stamper: Stamper = make_stamper(clock)
    complete = "---\ncreated: a\nmodified: b\n---\n"

    assert stamper.stamp(EventKind.OPEN, complete, FILE_TIMES) is None
    assert stamper.stamp(EventKind.CREATE, "Body", FILE_TIMES) == (
        "---\ncreated: 2024-05-01 09:00:00\nmodified: 2024-05-01 09:00:00\n---\n\nBody"
    )


@mark_pipeline
def test_handle_writes_document(tmp_path: Path, clock: FakeClock) -> None:
    """``handle`` reads, stamps and writes back the document."""
    path: Path = tmp_path / "note.md"
    path.write_text("---\ntitle: T\n---\nBody\n", encoding="utf-8")
    stamper: Stamper = make_stamper(clock)

    result: StampResult = stamper.handle(EventKind.MODIFY, path)

    assert result.status is StampStatus.UPDATED
    assert result.write is WriteStatus.WRITTEN
    assert path.read_text(encoding="utf-8") == (
        "---\ntitle: T\nmodified: 2024-05-01 09:00:00\n---\nBody\n"
    )
    assert not stamper.processing


@mark_pipeline
def test_handle_dry_run(tmp_path: Path, clock: FakeClock) -> None:
    """``apply=False`` leaves the file untouched."""
    path: Path = tmp_path / "note.md"
    path.write_text("Body\n", encoding="utf-8")

    result: StampResult = make_stamper(clock).handle(EventKind.CREATE, path, apply=False)

    assert result.write is WriteStatus.DRY_RUN
    assert path.read_text(encoding="utf-8") == "Body\n"


@mark_pipeline
def test_handle_ignores_reentrant_events(
    tmp_path: Path, clock: FakeClock, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Events raised while a document is processed are skipped."""
    outer: Path = tmp_path / "outer.md"
    inner: Path = tmp_path / "inner.md"
    outer.write_text("Body\n", encoding="utf-8")
    inner.write_text("Body\n", encoding="utf-8")
    stamper: Stamper = make_stamper(clock)
    nested: list[StampResult] = []
    original_fields_for = stamper.fields_for

    def fields_for_with_nested_event(
        event: EventKind, text: str, times: FileTimes, *, key: str = ""
    ) -> dict[str, str]:
        assert stamper.processing
        nested.append(stamper.handle(EventKind.MODIFY, inner))
        return original_fields_for(event, text, times, key=key)

    monkeypatch.setattr(stamper, "fields_for", fields_for_with_nested_event)

    result: StampResult = stamper.handle(EventKind.CREATE, outer)

    assert result.status is StampStatus.INSERTED
    assert [r.status for r in nested] == [StampStatus.SKIPPED]
    assert inner.read_text(encoding="utf-8") == "Body\n"
    assert not stamper.processing


@mark_pipeline
def test_handle_clears_flag_on_error(
    tmp_path: Path, clock: FakeClock, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The processing flag is released even when planning raises."""
    path: Path = tmp_path / "note.md"
    path.write_text("Body\n", encoding="utf-8")
    stamper: Stamper = make_stamper(clock)

    def boom(*args: object, **kwargs: object) -> dict[str, str]:
        raise RuntimeError("planner failed")

    monkeypatch.setattr(stamper, "fields_for", boom)

    with pytest.raises(RuntimeError):
        stamper.handle(EventKind.OPEN, path)
    assert not stamper.processing
