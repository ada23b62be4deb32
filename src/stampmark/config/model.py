# topmark:header:start
#
#   project      : StampMark
#   file         : model.py
#   file_relpath : src/stampmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model: a mutable builder and its immutable runtime snapshot.

`MutableConfig` collects layers (defaults, discovered project files, explicit
``--config`` files, CLI overrides). Every value is tri-state (``None`` means
"not set by this layer") so that a later layer only overrides what it sets.
`MutableConfig.freeze` produces the immutable `Config` used at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from stampmark.config.getters import (
    get_bool_value_or_none,
    get_int_value_or_none,
    get_list_value_or_none,
    get_string_value_or_none,
    get_table_value,
)
from stampmark.config.keys import Toml
from stampmark.config.loaders import load_defaults_dict, load_toml_dict
from stampmark.config.logging import get_logger
from stampmark.constants import PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION, STAMPMARK_TOML_NAME

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stampmark.config.logging import StampmarkLogger
    from stampmark.config.types import TomlTable

logger: StampmarkLogger = get_logger(__name__)


def _normalize_extension(ext: str) -> str:
    """Return ``ext`` lower-cased and with a leading dot (``"MD"`` -> ``".md"``)."""
    e: str = ext.strip().lower()
    return e if e.startswith(".") else f".{e}"


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for StampMark.

    Attributes:
        enable_created (bool): Whether ``created`` timestamps are maintained.
        enable_modified (bool): Whether ``modified`` timestamps are maintained.
        modify_interval (int): Minimum number of seconds between two ``modified``
            updates of the same document (watch mode).
        extensions (tuple[str, ...]): File suffixes considered documents.
        include_patterns (tuple[str, ...]): Gitignore-style patterns to keep.
        exclude_patterns (tuple[str, ...]): Gitignore-style patterns to drop.
        locale (str | None): Display locale; ``None`` lets the environment decide.
        config_files (tuple[str, ...]): Config sources merged into this snapshot.
    """

    enable_created: bool
    enable_modified: bool
    modify_interval: int
    extensions: tuple[str, ...]
    include_patterns: tuple[str, ...]
    exclude_patterns: tuple[str, ...]
    locale: str | None
    config_files: tuple[str, ...]

    def to_toml_dict(self) -> TomlTable:
        """Convert this snapshot into a TOML-serializable dict.

        The layout mirrors the config file schema, so the output of
        ``stampmark dump-config`` can be used as a ``stampmark.toml``.
        """
        return {
            Toml.KEY_LOCALE: self.locale,
            Toml.SECTION_STAMPS: {
                Toml.KEY_ENABLE_CREATED: self.enable_created,
                Toml.KEY_ENABLE_MODIFIED: self.enable_modified,
                Toml.KEY_MODIFY_INTERVAL: self.modify_interval,
            },
            Toml.SECTION_FILES: {
                Toml.KEY_EXTENSIONS: list(self.extensions),
                Toml.KEY_INCLUDE: list(self.include_patterns),
                Toml.KEY_EXCLUDE: list(self.exclude_patterns),
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            enable_created=self.enable_created,
            enable_modified=self.enable_modified,
            modify_interval=self.modify_interval,
            extensions=list(self.extensions),
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            locale=self.locale,
            config_files=list(self.config_files),
        )


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        enable_created (bool | None): ``[stamps].enable_created``.
        enable_modified (bool | None): ``[stamps].enable_modified``.
        modify_interval (int | None): ``[stamps].modify_interval`` in seconds.
        extensions (list[str] | None): ``[files].extensions``.
        include_patterns (list[str] | None): ``[files].include``.
        exclude_patterns (list[str] | None): ``[files].exclude``.
        locale (str | None): Top-level ``locale``.
        root (bool): Top-level ``root``; stops upward discovery.
        config_files (list[str]): Provenance of the merged layers.
    """

    enable_created: bool | None = None
    enable_modified: bool | None = None
    modify_interval: int | None = None
    extensions: list[str] | None = None
    include_patterns: list[str] | None = None
    exclude_patterns: list[str] | None = None
    locale: str | None = None
    root: bool = False
    config_files: list[str] = field(default_factory=lambda: [])

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft populated with the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML table (already unwrapped from
                ``[tool.stampmark]`` for ``pyproject.toml``).
            config_file (Path | None): Source file, recorded for provenance.

        Returns:
            MutableConfig: The resulting draft.
        """
        stamps_tbl: TomlTable = get_table_value(data, Toml.SECTION_STAMPS)
        logger.trace("TOML [stamps]: %s", stamps_tbl)
        files_tbl: TomlTable = get_table_value(data, Toml.SECTION_FILES)
        logger.trace("TOML [files]: %s", files_tbl)

        draft = cls(
            enable_created=get_bool_value_or_none(stamps_tbl, Toml.KEY_ENABLE_CREATED),
            enable_modified=get_bool_value_or_none(stamps_tbl, Toml.KEY_ENABLE_MODIFIED),
            modify_interval=get_int_value_or_none(stamps_tbl, Toml.KEY_MODIFY_INTERVAL),
            extensions=get_list_value_or_none(files_tbl, Toml.KEY_EXTENSIONS),
            include_patterns=get_list_value_or_none(files_tbl, Toml.KEY_INCLUDE),
            exclude_patterns=get_list_value_or_none(files_tbl, Toml.KEY_EXCLUDE),
            locale=get_string_value_or_none(data, Toml.KEY_LOCALE),
            root=bool(get_bool_value_or_none(data, Toml.KEY_ROOT)),
        )
        if config_file is not None:
            draft.config_files = [str(config_file)]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` only the ``[tool.stampmark]`` table is read.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or None when a ``pyproject.toml`` has no
                ``[tool.stampmark]`` table.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool_tbl: TomlTable = get_table_value(toml_data, Toml.SECTION_TOOL)
            section: TomlTable = get_table_value(tool_tbl, PYPROJECT_TOOL_SECTION)
            if not section:
                logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = section

        return cls.from_toml_dict(toml_data, config_file=path)

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found walking upward from ``start``.

        Files are returned root-most first. Within one directory
        ``pyproject.toml`` comes before ``stampmark.toml`` so that the tool file
        wins a nearest-last merge. Discovery stops after a directory whose
        config sets ``root = true``.
        """
        levels: list[list[Path]] = []
        current: Path = start.resolve()
        for directory in (current, *current.parents):
            found: list[Path] = []
            is_root: bool = False
            for name in (PYPROJECT_TOML_NAME, STAMPMARK_TOML_NAME):
                candidate: Path = directory / name
                if not candidate.is_file():
                    continue
                draft: MutableConfig | None = cls.from_toml_file(candidate)
                if draft is None:
                    continue
                found.append(candidate)
                is_root = is_root or draft.root
            if found:
                levels.append(found)
            if is_root:
                break
        ordered: list[Path] = [p for level in reversed(levels) for p in level]
        logger.debug("Discovered config files: %s", ordered)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Merge order (lowest to highest precedence):
            1) Built-in defaults
            2) Project configs discovered upward from ``anchor`` (root to nearest)
            3) Extra config files passed explicitly (in the order given)

        Args:
            anchor (Path | None): Discovery start directory (CWD if None; a file's
                parent directory if a file).
            extra_config_files (Iterable[Path] | None): Explicit files merged last.
            no_config (bool): If True, skip discovery.

        Returns:
            MutableConfig: A draft ready for CLI overrides and `freeze`.
        """
        draft: MutableConfig = cls.from_defaults()

        start: Path = anchor if anchor is not None else Path.cwd()
        if start.is_file():
            start = start.parent

        if not no_config:
            for cfg_path in cls.discover_local_config_files(start):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            extra_path = Path(extra)
            if not extra_path.is_file():
                logger.error("Config file not found: %s", extra_path)
                continue
            mc = cls.from_toml_file(extra_path)
            if mc is None:
                logger.error(
                    "[tool.%s] section missing or malformed in %s",
                    PYPROJECT_TOOL_SECTION,
                    extra_path,
                )
                continue
            draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The layer whose explicitly set values win.

        Returns:
            MutableConfig: A new draft representing the merged result.
        """
        return MutableConfig(
            enable_created=other.enable_created
            if other.enable_created is not None
            else self.enable_created,
            enable_modified=other.enable_modified
            if other.enable_modified is not None
            else self.enable_modified,
            modify_interval=other.modify_interval
            if other.modify_interval is not None
            else self.modify_interval,
            extensions=other.extensions if other.extensions is not None else self.extensions,
            include_patterns=other.include_patterns
            if other.include_patterns is not None
            else self.include_patterns,
            exclude_patterns=other.exclude_patterns
            if other.exclude_patterns is not None
            else self.exclude_patterns,
            locale=other.locale if other.locale is not None else self.locale,
            root=self.root or other.root,
            config_files=self.config_files + other.config_files,
        )

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`.

        Unset values fall back to the runtime defaults. A negative
        ``modify_interval`` is clamped to 0.
        """
        merged: MutableConfig = MutableConfig.from_defaults().merge_with(self)

        interval: int = merged.modify_interval or 0
        if interval < 0:
            logger.warning("modify_interval must not be negative (%d): using 0", interval)
            interval = 0

        extensions: dict[str, None] = dict.fromkeys(
            _normalize_extension(e) for e in merged.extensions or []
        )

        return Config(
            enable_created=bool(merged.enable_created),
            enable_modified=bool(merged.enable_modified),
            modify_interval=interval,
            extensions=tuple(extensions),
            include_patterns=tuple(merged.include_patterns or ()),
            exclude_patterns=tuple(merged.exclude_patterns or ()),
            locale=merged.locale,
            config_files=tuple(self.config_files),
        )
