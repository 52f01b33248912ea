"""Find report files below a workspace root."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path

# Never descended into while looking for reports
SKIPPED_DIRS: frozenset[str] = frozenset({".git", ".svn", ".hg", ".bzr", ".covsync", "node_modules"})


def matches_pattern(path: Path, root: Path, pattern: str) -> bool:
    """Whether a file matches the report glob.

    A pattern containing a separator is matched against the root-relative
    POSIX path, otherwise against the file name alone.
    """
    if "/" not in pattern:
        return fnmatch.fnmatch(path.name, pattern)
    try:
        relative = path.relative_to(root).as_posix()
    except ValueError:
        return False
    return fnmatch.fnmatch(relative, pattern)


def find_reports(root: Path, pattern: str) -> list[Path]:
    """All files under root matching pattern, sorted."""
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIPPED_DIRS]
        for filename in filenames:
            path = Path(dirpath) / filename
            if matches_pattern(path, root, pattern):
                found.append(path)
    return sorted(found)
