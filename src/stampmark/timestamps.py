# topmark:header:start
#
#   project      : StampMark
#   file         : timestamps.py
#   file_relpath : src/stampmark/timestamps.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Timestamp formatting and file clock helpers.

Timestamps are persisted in local time as ``YYYY-MM-DD HH:mm:ss``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable

from stampmark.constants import TIMESTAMP_FORMAT

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class FileTimes:
    """Creation and modification clock values of a document.

    Attributes:
        created (datetime): Creation time (birth time where the platform has one).
        modified (datetime): Last content modification time.
    """

    created: datetime
    modified: datetime


def format_timestamp(dt: datetime) -> str:
    """Render ``dt`` in the persisted ``YYYY-MM-DD HH:mm:ss`` layout."""
    return dt.strftime(TIMESTAMP_FORMAT)


def now_timestamp(clock: Callable[[], datetime] = datetime.now) -> str:
    """Return the current local time, formatted for a header field."""
    return format_timestamp(clock())


def file_times(path: Path) -> FileTimes:
    """Read the creation and modification times of ``path``.

    ``st_birthtime`` is used when the platform exposes it (macOS, BSD, recent
    Windows builds); otherwise ``st_ctime`` stands in for the creation time.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    st: os.stat_result = path.stat()
    birth: float = getattr(st, "st_birthtime", st.st_ctime)
    return FileTimes(
        created=datetime.fromtimestamp(birth),
        modified=datetime.fromtimestamp(st.st_mtime),
    )


def times_now(clock: Callable[[], datetime] = datetime.now) -> FileTimes:
    """Return `FileTimes` with both values set to the current time (STDIN content)."""
    now: datetime = clock()
    return FileTimes(created=now, modified=now)
