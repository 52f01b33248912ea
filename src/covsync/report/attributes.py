"""Permissive attribute access over parsed XML nodes.

Every requested name gets a value: the attribute text when present, an empty
string otherwise. Namespaced attributes (``{uri}name``) match on their local
name. Callers decide per attribute what an empty value means, so one bad
attribute never costs more than its own record.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable

# ASCII digits with an optional leading minus
_DECIMAL_RE = re.compile(r"-?[0-9]+")


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from a tag or attribute key."""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def extract_attributes(node: ET.Element, names: Iterable[str]) -> dict[str, str]:
    """Map each requested attribute name to its value, or "" when absent."""
    by_local = {local_name(key): value for key, value in node.attrib.items()}
    return {name: by_local.get(name, "").strip() for name in names}


def parse_int(value: str) -> int | None:
    """Parse a decimal integer attribute, returning None when it is not one."""
    if _DECIMAL_RE.fullmatch(value) is None:
        return None
    return int(value)
