"""Document language ids.

Maps file extensions to the language ids a host editor reports for a
document. Only needed where no host supplies the id itself (the CLI).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Language:
    """A language id and the extensions that imply it (lowercase, with dot)."""

    name: str
    extensions: frozenset[str]


LANGUAGES: tuple[Language, ...] = (
    Language(name="c", extensions=frozenset({".c", ".h"})),
    Language(
        name="cpp",
        extensions=frozenset({".cpp", ".cc", ".cxx", ".c++", ".hpp", ".hh", ".hxx", ".inl"}),
    ),
    Language(name="csharp", extensions=frozenset({".cs"})),
    Language(name="java", extensions=frozenset({".java"})),
    Language(name="python", extensions=frozenset({".py", ".pyi"})),
    Language(name="go", extensions=frozenset({".go"})),
)

_EXTENSION_TO_NAME: dict[str, str] = {
    ext: lang.name for lang in LANGUAGES for ext in lang.extensions
}


def detect_language(path: str | Path) -> str | None:
    """Language id for a path, or None for unknown extensions."""
    return _EXTENSION_TO_NAME.get(Path(path).suffix.lower())
