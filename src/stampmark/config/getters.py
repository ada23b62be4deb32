# topmark:header:start
#
#   project      : StampMark
#   file         : getters.py
#   file_relpath : src/stampmark/config/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value getters for TOML config tables.

Each getter returns ``None`` when the key is absent so that layered merging can
tell "not set" apart from an explicit value. Values of the wrong type are
reported with a warning and treated as absent; a user mistake in a config file
never aborts a run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from stampmark.config.logging import get_logger

if TYPE_CHECKING:
    from stampmark.config.logging import StampmarkLogger
    from stampmark.config.types import TomlTable

logger: StampmarkLogger = get_logger(__name__)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key`` of ``table`` (empty dict when absent or not a table)."""
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    logger.warning("Expected a table for [%s], got %s: ignored", key, type(value).__name__)
    return {}


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        bool | None: The boolean value, or ``None`` when absent or not a boolean.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    logger.warning("Expected a boolean for '%s', got %r: ignored", key, value)
    return None


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Extract an optional integer value from a TOML table.

    Booleans are rejected even though ``bool`` subclasses ``int``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        int | None: The integer value, or ``None`` when absent or not an integer.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Expected an integer for '%s', got %r: ignored", key, value)
    return None


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Expected a string for '%s', got %r: ignored", key, value)
    return None


def get_list_value_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Extract an optional list of strings from a TOML table.

    Non-string items are dropped with a warning.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        list[str] | None: The string items, or ``None`` when absent or not a list.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Expected a list for '%s', got %r: ignored", key, value)
        return None
    items: list[str] = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
        else:
            logger.warning("Ignoring non-string item in '%s': %r", key, item)
    return items
