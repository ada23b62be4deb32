# topmark:header:start
#
#   project      : StampMark
#   file         : colored_enum.py
#   file_relpath : src/stampmark/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-aware string enum for human-facing status labels.

`ColoredStrEnum` keeps the plain label as the enum value and stores a
colorizer (typically a `yachalk` style) next to it:

    ```python
    from yachalk import chalk

    class Outcome(ColoredStrEnum):
        OK = ("ok", chalk.green)

    Outcome.OK.value           # 'ok'
    Outcome.OK.color("done")   # green "done"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display (e.g. a ``ChalkBuilder``)."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Return the decorated concatenation of ``args``."""
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose value is a label string and that carries a colorizer."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Construct a member from its label and colorizer."""
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the label of the member."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the colorizer of the member."""
        return self._color

    def colored(self) -> str:
        """Return the label rendered with its colorizer."""
        return self._color(self._value_)
