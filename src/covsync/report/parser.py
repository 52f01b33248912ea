"""Cobertura XML report parser.

Cobertura XML is used by many coverage tools across languages:
- C/C++: gcovr, OpenCppCoverage
- Python: coverage.py
- .NET: coverlet

Consumed structure:
<coverage line-rate="0.85" ...>
  <sources>
    <source>C:</source>
    <source>/home/user/repo</source>
  </sources>
  <packages>
    <package name="...">
      <classes>
        <class name="..." filename="src/a.cpp" line-rate="...">
          <lines>
            <line number="1" hits="1"/>
            <line number="2" hits="0"/>
          </lines>
        </class>
      </classes>
    </package>
  </packages>
</coverage>

Unknown elements and attributes are ignored. Method-level ``<line>`` entries
are skipped; only the class-level ``<lines>`` block is read so lines are not
counted twice.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import structlog

from covsync.core.errors import ReportParseError
from covsync.report.attributes import extract_attributes, local_name, parse_int
from covsync.report.models import Coverage, CoverageClass, Line, Package, Source

logger = structlog.get_logger()

# How much of a file to sniff when deciding whether it looks like Cobertura
_SNIFF_BYTES = 2048


def _strip_namespaces(root: ET.Element) -> None:
    for elem in root.iter():
        if isinstance(elem.tag, str):
            elem.tag = local_name(elem.tag)


def _parse_sources(root: ET.Element) -> tuple[Source, ...]:
    sources: list[Source] = []
    for node in root.iter("source"):
        text = (node.text or "").strip()
        if text:
            sources.append(Source(root=text))
    return tuple(sources)


def _parse_lines(cls_node: ET.Element, filename: str) -> tuple[Line, ...]:
    lines: list[Line] = []
    for node in cls_node.findall("./lines/line"):
        attrs = extract_attributes(node, ("number", "hits"))
        number = parse_int(attrs["number"])
        hits = parse_int(attrs["hits"])
        if number is None or hits is None:
            logger.debug("report_line_skipped", filename=filename, **attrs)
            continue
        lines.append(Line(number=number, hit_count=hits))
    return tuple(lines)


def _parse_class(cls_node: ET.Element) -> CoverageClass | None:
    attrs = extract_attributes(cls_node, ("name", "filename"))
    if not attrs["filename"]:
        logger.debug("report_class_skipped", name=attrs["name"], reason="missing filename")
        return None
    return CoverageClass(
        name=attrs["name"],
        relative_filename=attrs["filename"],
        lines=_parse_lines(cls_node, attrs["filename"]),
    )


def _parse_packages(root: ET.Element) -> tuple[Package, ...]:
    packages: list[Package] = []
    for pkg_node in root.iter("package"):
        classes = [
            parsed
            for cls_node in pkg_node.iter("class")
            if (parsed := _parse_class(cls_node)) is not None
        ]
        name = extract_attributes(pkg_node, ("name",))["name"]
        packages.append(Package(name=name, classes=tuple(classes)))
    return tuple(packages)


def parse_report(data: bytes, *, location: str = "<bytes>") -> Coverage:
    """Build a Coverage model from raw report bytes.

    Args:
        data: Report content exactly as read from disk.
        location: Where the bytes came from, used in error messages only.

    Returns:
        Coverage with sources, packages, classes and lines in document order.

    Raises:
        ReportParseError: If the bytes are not well-formed XML.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise ReportParseError.parse_error(location, str(e)) from e

    _strip_namespaces(root)

    coverage = Coverage(sources=_parse_sources(root), packages=_parse_packages(root))
    logger.debug(
        "report_parsed",
        location=location,
        sources=len(coverage.sources),
        packages=len(coverage.packages),
        classes=len(coverage.iter_classes()),
    )
    return coverage


class CoberturaParser:
    """Parser for Cobertura XML reports."""

    @property
    def format_id(self) -> str:
        return "cobertura"

    def can_parse(self, path: Path) -> bool:
        """Check if a file looks like Cobertura XML."""
        if not path.is_file():
            return False

        # Content sniff: <coverage> root with line-rate attribute
        try:
            with path.open("rb") as f:
                header = f.read(_SNIFF_BYTES).decode("utf-8", errors="ignore")
        except OSError:
            return False
        return "<coverage" in header and "line-rate=" in header

    def parse(self, data: bytes, *, location: str = "<bytes>") -> Coverage:
        """Parse report bytes. See parse_report."""
        return parse_report(data, location=location)
