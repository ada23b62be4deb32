# topmark:header:start
#
#   project      : StampMark
#   file         : loaders.py
#   file_relpath : src/stampmark/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render TOML configuration.

Runtime defaults are defined in code (`load_defaults_dict`), so StampMark
works without any packaged resource. On-disk ``stampmark.toml`` and
``pyproject.toml`` files are parsed with `tomlkit` and returned as plain
`dict` structures.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from stampmark.config.keys import Toml
from stampmark.config.logging import get_logger
from stampmark.constants import PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from pathlib import Path

    from stampmark.config.logging import StampmarkLogger
    from stampmark.config.types import TomlTable

logger: StampmarkLogger = get_logger(__name__)

DEFAULT_MODIFY_INTERVAL: int = 10
DEFAULT_EXTENSIONS: tuple[str, ...] = (".md",)


def load_defaults_dict() -> TomlTable:
    """Return StampMark's **runtime defaults** as a Python dict.

    This function performs no I/O. The returned value is a new dict so callers
    can mutate it safely.
    """
    return {
        Toml.SECTION_STAMPS: {
            Toml.KEY_ENABLE_CREATED: True,
            Toml.KEY_ENABLE_MODIFIED: True,
            Toml.KEY_MODIFY_INTERVAL: DEFAULT_MODIFY_INTERVAL,
        },
        Toml.SECTION_FILES: {
            Toml.KEY_EXTENSIONS: list(DEFAULT_EXTENSIONS),
            Toml.KEY_INCLUDE: [],
            Toml.KEY_EXCLUDE: [],
        },
        # `locale` is unset by default: the environment decides.
    }


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings and lists."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out
    if isinstance(value, list):
        seq: list[object] = cast("list[object]", value)
        return [_strip_none_for_toml(v) for v in seq if v is not None]
    return value


def to_toml(data: TomlTable) -> str:
    """Serialize a TOML-compatible dict (``None`` entries are omitted)."""
    cleaned: Any = _strip_none_for_toml(data)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


def render_default_config_toml(*, for_pyproject: bool = False) -> str:
    """Render the runtime defaults as TOML text.

    Args:
        for_pyproject (bool): If True, nest the output under ``[tool.stampmark]``.

    Returns:
        str: TOML document text.
    """
    data: TomlTable = load_defaults_dict()
    if for_pyproject:
        data = {Toml.SECTION_TOOL: {PYPROJECT_TOOL_SECTION: data}}
    return to_toml(data)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``stampmark.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content; an empty dict when the file cannot be
            read or parsed (the error is logged).
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}
