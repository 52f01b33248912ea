"""Coverage report data model.

Class-centric model mirroring the Cobertura layout: a report declares source
roots and packages, packages hold classes, classes hold lines. Everything is
immutable once parsed; a reload builds a new model instead of mutating this one.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Line:
    """One instrumented line. Numbers are 1-based, as written in the report."""

    number: int
    hit_count: int

    @property
    def covered(self) -> bool:
        return self.hit_count > 0


@dataclass(frozen=True, slots=True)
class CoverageClass:
    """Coverage for one class entry of the report.

    Lines keep report order. Duplicate line numbers are preserved, not merged.
    """

    name: str
    relative_filename: str
    lines: tuple[Line, ...] = ()

    def hit_lines(self) -> list[int]:
        """Line numbers executed at least once."""
        return [line.number for line in self.lines if line.hit_count > 0]

    def miss_lines(self) -> list[int]:
        """Line numbers never executed."""
        return [line.number for line in self.lines if line.hit_count <= 0]


@dataclass(frozen=True, slots=True)
class Package:
    name: str
    classes: tuple[CoverageClass, ...] = ()


@dataclass(frozen=True, slots=True)
class Source:
    """A declared base path: drive letter, absolute directory, or prefix."""

    root: str


@dataclass(frozen=True, slots=True)
class Coverage:
    """The full parsed report."""

    sources: tuple[Source, ...] = ()
    packages: tuple[Package, ...] = ()

    def iter_classes(self) -> list[CoverageClass]:
        """All classes in document order, across packages."""
        return [cls for package in self.packages for cls in package.classes]


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """A report class proven to exist at ``absolute_path`` on this machine."""

    absolute_path: str
    coverage_class: CoverageClass
