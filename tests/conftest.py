# topmark:header:start
#
#   project      : StampMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the StampMark test suite.

Sets up global fixtures and a verbose logging configuration for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `stampmark.config.MutableConfig`, then `freeze()` them into a
    `stampmark.config.Config`. Never mutate a frozen `Config`; call
    `Config.thaw()`, edit the copy and `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from stampmark.config import MutableConfig, logging

if TYPE_CHECKING:
    from pathlib import Path

    from stampmark.config import Config

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

#: Matches a persisted timestamp (``YYYY-MM-DD HH:mm:ss``).
TIMESTAMP_RE: str = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shell settings from leaking into the tests.

    Removes the StampMark log level and language overrides, the POSIX locale
    variables consulted for display strings, and the color forcing variables.
    """
    for name in (
        "STAMPMARK_LOG_LEVEL",
        "STAMPMARK_LANG",
        "LC_ALL",
        "LANG",
        "FORCE_COLOR",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for the whole test session."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test from an isolated project directory (``tmp_path/proj``).

    Returns:
        Path: The new working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


class FakeClock:
    """Deterministic wall and monotonic clocks for the stamper."""

    def __init__(self, start: datetime, monotonic_start: float = 1000.0) -> None:
        self.current: datetime = start
        self.mono: float = monotonic_start

    def now(self) -> datetime:
        """Return the current wall time."""
        return self.current

    def monotonic(self) -> float:
        """Return the current monotonic time."""
        return self.mono

    def advance(self, seconds: float) -> None:
        """Move both clocks forward."""
        self.current = self.current + timedelta(seconds=seconds)
        self.mono += seconds


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and keyword overrides."""
    return make_mutable_config(**overrides).freeze()


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a mutable builder populated with defaults and keyword overrides."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m
