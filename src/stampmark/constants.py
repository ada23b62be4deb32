# topmark:header:start
#
#   project      : StampMark
#   file         : constants.py
#   file_relpath : src/stampmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

STAMPMARK_VERSION: str = get_version("stampmark")

# Front matter block delimiter (a line of its own, opening and closing)
HEADER_MARKER: str = "---"

FIELD_CREATED: str = "created"
FIELD_MODIFIED: str = "modified"

# Persisted timestamp layout: YYYY-MM-DD HH:mm:ss
TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

# Configuration discovery
STAMPMARK_TOML_NAME: str = "stampmark.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "stampmark"

# Environment variables
ENV_LOG_LEVEL: str = "STAMPMARK_LOG_LEVEL"
ENV_LANG: str = "STAMPMARK_LANG"
ENV_FORCE_COLOR: str = "FORCE_COLOR"
ENV_NO_COLOR: str = "NO_COLOR"

VALUE_NOT_SET: str = "<not set>"
