# topmark:header:start
#
#   project      : StampMark
#   file         : __init__.py
#   file_relpath : src/stampmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark configuration (TOML layers, runtime snapshot, logging).

Build a `MutableConfig` (defaults, discovered files, CLI overrides), then
`freeze()` it into an immutable `Config` for processing.
"""

from __future__ import annotations

from stampmark.config.model import Config, MutableConfig

__all__ = [
    "Config",
    "MutableConfig",
]
