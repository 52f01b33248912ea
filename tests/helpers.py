"""Shared builders for report fixtures."""

from __future__ import annotations

from collections.abc import Sequence


def cobertura_xml(
    sources: Sequence[str],
    classes: Sequence[tuple[str, Sequence[tuple[int, int]]]],
    *,
    package: str = "pkg",
) -> bytes:
    """Build a minimal Cobertura report.

    classes: (filename, [(number, hits), ...]) per class.
    """
    source_xml = "".join(f"<source>{s}</source>" for s in sources)
    class_xml = ""
    for index, (filename, lines) in enumerate(classes):
        line_xml = "".join(f'<line number="{n}" hits="{h}"/>' for n, h in lines)
        class_xml += (
            f'<class name="c{index}" filename="{filename}" line-rate="0" '
            f'branch-rate="0" complexity="0"><methods/><lines>{line_xml}</lines></class>'
        )
    return (
        '<?xml version="1.0" ?>'
        '<coverage line-rate="0.5" branch-rate="0" version="1">'
        f"<sources>{source_xml}</sources>"
        f'<packages><package name="{package}"><classes>{class_xml}</classes></package></packages>'
        "</coverage>"
    ).encode()
