# topmark:header:start
#
#   project      : StampMark
#   file         : file_resolver.py
#   file_relpath : src/stampmark/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve input documents for StampMark based on paths and config filters.

Positional paths are expanded (directories recursively), restricted to the
configured document extensions and filtered with gitignore-style include and
exclude patterns evaluated relative to the current working directory. The
result is a deterministic, sorted list of files to process.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from stampmark.config.logging import StampmarkLogger, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stampmark.config import Config


logger: StampmarkLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        rel: Path = path.resolve().relative_to(base.resolve())
        return rel.as_posix()
    except ValueError:
        return path.as_posix()


def expand_path(p: Path) -> list[Path]:
    """Expand a path into files: a directory recursively, a file as itself.

    Missing paths expand to an empty list.
    """
    if p.is_dir():
        return [f for f in p.rglob("*") if f.is_file()]
    if p.is_file():
        return [p]
    return []


def resolve_file_list(
    paths: Iterable[str | Path],
    config: Config,
    *,
    workspace_root: Path | None = None,
) -> list[Path]:
    """Return the list of documents to process.

    The resolver implements these semantics:
      1. **Candidate set**: expand positional paths (files, and directories
         recursively). Missing paths are logged and skipped.
      2. **Extensions**: keep files whose suffix (case-insensitive) is one of
         ``config.extensions``. Files named explicitly are subject to this filter too.
      3. **Include intersection**: if include patterns are configured, keep only
         files matching *any* of them.
      4. **Exclude subtraction**: remove files matching any exclude pattern.
      5. Return a **sorted** list of paths for deterministic output.

    Args:
        paths (Iterable[str | Path]): Positional inputs.
        config (Config): Configuration holding extensions and patterns.
        workspace_root (Path | None): Base for pattern matching (CWD if None).

    Returns:
        list[Path]: Sorted list of files selected for processing.
    """
    root: Path = workspace_root if workspace_root is not None else Path.cwd()
    extensions: frozenset[str] = frozenset(config.extensions)

    candidate_set: set[Path] = set()
    for raw in paths:
        p = Path(raw)
        if not p.exists():
            logger.warning("No such file or directory: %s", p)
            continue
        candidate_set.update(expand_path(p))

    candidate_set = {p for p in candidate_set if p.suffix.lower() in extensions}
    logger.debug("Candidates after extension filter (%s): %d", sorted(extensions), len(candidate_set))

    if config.include_patterns:
        spec_incl: PathSpec = PathSpec.from_lines(
            GitWildMatchPattern, list(config.include_patterns)
        )
        candidate_set = {
            p for p in candidate_set if spec_incl.match_file(_rel_for_match(p, root))
        }

    if config.exclude_patterns:
        spec_excl: PathSpec = PathSpec.from_lines(
            GitWildMatchPattern, list(config.exclude_patterns)
        )
        candidate_set = {
            p for p in candidate_set if not spec_excl.match_file(_rel_for_match(p, root))
        }

    files: list[Path] = sorted(candidate_set)
    logger.trace("Files to process: %d -- %s", len(files), files)
    return files
