"""Resolve report-relative class filenames to files on this machine.

Every (source root, class) pair produces one candidate path. Candidates that
do not exist are dropped. When several pairs land on the same path the later
source root wins, so the result is deterministic for a given report.

Path semantics are those of a path module (``os.path`` by default). Passing
``ntpath`` or ``posixpath`` explicitly resolves a report for another platform,
which is also how the tests pin behavior regardless of the host.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from types import ModuleType

import structlog

from covsync.report.models import Coverage, ResolvedFile

logger = structlog.get_logger()

ExistsFn = Callable[[str], bool]

# "C:", "c:\", "D:/" - a drive designator with nothing after it
_DRIVE_ROOT_RE = re.compile(r"^([A-Za-z]):[\\/]?$")


def is_drive_root(root: str) -> bool:
    """True when a source root is a bare drive designator such as ``C:``."""
    return _DRIVE_ROOT_RE.match(root.strip()) is not None


def _to_native_separators(path: str, pathmod: ModuleType) -> str:
    if pathmod.sep == "/":
        return path.replace("\\", "/")
    return path.replace("/", pathmod.sep)


def join_root(root: str, relative_filename: str, pathmod: ModuleType = os.path) -> str:
    """Join a declared source root and a class filename into one candidate path.

    A bare drive designator is treated as the root of that drive, so ``C:``
    joined with ``src\\a.cpp`` gives ``C:\\src\\a.cpp`` rather than the
    drive-relative ``C:src\\a.cpp``.
    """
    root = root.strip()
    match = _DRIVE_ROOT_RE.match(root)
    if match:
        root = f"{match.group(1)}:{pathmod.sep}"
    else:
        root = _to_native_separators(root, pathmod)
    filename = _to_native_separators(relative_filename, pathmod)
    return pathmod.normpath(pathmod.join(root, filename))


def index_key(path: str, pathmod: ModuleType = os.path) -> str:
    """Key used for resolved-file lookups. Case-folded where the platform is."""
    return pathmod.normcase(pathmod.normpath(path))


def resolve(
    coverage: Coverage,
    exists_fn: ExistsFn = os.path.exists,
    *,
    pathmod: ModuleType = os.path,
) -> dict[str, ResolvedFile]:
    """Map existing absolute paths to the report classes that describe them.

    Args:
        coverage: Parsed report.
        exists_fn: Existence predicate for candidate paths.
        pathmod: Path module providing join/normpath/normcase semantics.

    Returns:
        Index keyed by ``index_key(absolute_path)``. Empty when the report has
        no sources or no classes, or nothing matched.
    """
    classes = coverage.iter_classes()
    resolved: dict[str, ResolvedFile] = {}

    for source in coverage.sources:
        for cls in classes:
            candidate = join_root(source.root, cls.relative_filename, pathmod)
            if not exists_fn(candidate):
                continue
            resolved[index_key(candidate, pathmod)] = ResolvedFile(
                absolute_path=candidate,
                coverage_class=cls,
            )

    if not resolved and classes:
        logger.debug(
            "report_resolution_empty",
            sources=[s.root for s in coverage.sources],
            classes=len(classes),
        )
    return resolved
