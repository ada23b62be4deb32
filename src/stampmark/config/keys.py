# topmark:header:start
#
#   project      : StampMark
#   file         : keys.py
#   file_relpath : src/stampmark/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for StampMark configuration.

These constants are the external configuration schema as it appears in
``stampmark.toml`` and in ``[tool.stampmark]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by StampMark configuration.

    The ordering of constants mirrors the rendered default configuration.
    """

    # Top level
    KEY_ROOT: Final[str] = "root"
    KEY_LOCALE: Final[str] = "locale"

    # [stamps]
    SECTION_STAMPS: Final[str] = "stamps"

    KEY_ENABLE_CREATED: Final[str] = "enable_created"
    KEY_ENABLE_MODIFIED: Final[str] = "enable_modified"
    KEY_MODIFY_INTERVAL: Final[str] = "modify_interval"

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_EXTENSIONS: Final[str] = "extensions"
    KEY_INCLUDE: Final[str] = "include"
    KEY_EXCLUDE: Final[str] = "exclude"

    # pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
