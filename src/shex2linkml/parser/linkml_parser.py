"""Load LinkML YAML into a generic document tree."""
from __future__ import annotations

from typing import Any

import yaml


def parse_linkml(source: str) -> Any:
    """Parse a LinkML YAML string or file path.

    Args:
        source: YAML text or file path.

    Returns:
        The loaded document: normally a dict with ``classes``, ``slots`` and
        ``prefixes`` keys, in file order. Structure is not checked here.
    """
    # open() raises ValueError for text with an embedded NUL
    try:
        f = open(source, "r", encoding="utf-8")
    except (OSError, ValueError):
        return yaml.safe_load(source)
    with f:
        return yaml.safe_load(f)


def parse_linkml_file(filepath: str) -> Any:
    """Parse a LinkML YAML file from a file path."""
    return parse_linkml(filepath)
