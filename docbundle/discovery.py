"""Workspace scanning for files offered in the documentation picker."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import DEFAULT_EXCLUDE_GLOBS, DEFAULT_INCLUDE_SUFFIXES
from .errors import DirectoryNotFound
from .models import DiscoveredFile

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "__pycache__",
    ".pytest_cache",
    ".idea",
}


def _matches_exclude(rel_path: str, patterns: Sequence[str]) -> bool:
    # "**/x/**" should also match "x/..." at the scan root.
    candidates = (rel_path, f"/{rel_path}")
    for pattern in patterns:
        for candidate in candidates:
            if fnmatchcase(candidate, pattern):
                return True
        if pattern.startswith("**/") and fnmatchcase(rel_path, pattern[3:]):
            return True
    return False


def _iter_files(root: Path, exclude_globs: Sequence[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            # Probe with a trailing child so directory globs like "**/node_modules/**" prune early.
            if _matches_exclude(f"{rel_path}/_", exclude_globs):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _matches_exclude(rel_path, exclude_globs):
                continue
            yield current_dir / filename


def discover_files(
    root: Path | str,
    include_suffixes: Iterable[str] = DEFAULT_INCLUDE_SUFFIXES,
    exclude_globs: Sequence[str] = DEFAULT_EXCLUDE_GLOBS,
) -> List[DiscoveredFile]:
    """Return files under ``root`` whose names end with one of ``include_suffixes``."""
    root_path = Path(root).expanduser().resolve()
    if not root_path.is_dir():
        raise DirectoryNotFound(f"Workspace path not found: {root}")

    suffixes = tuple(suffix.lower() for suffix in include_suffixes)
    discovered: List[DiscoveredFile] = []
    for path in _iter_files(root_path, exclude_globs):
        if suffixes and not path.name.lower().endswith(suffixes):
            continue
        relative = path.relative_to(root_path)
        discovered.append(
            DiscoveredFile(path=path.as_posix(), relative_parts=tuple(relative.parts))
        )
    return discovered


__all__ = ["discover_files"]
