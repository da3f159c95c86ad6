"""Convert a LinkML schema document back to ShExC compact syntax.

Best-effort and lossy. It works straight from the ``classes``/``slots``/
``prefixes`` sections, not from the intermediate model.

Known limitations:
- Only the first prefix label is used, for every predicate. Its IRI is
  never written out.
- Only an ``integer`` range produces a datatype (``xsd:integer``). Other
  ranges, referenced classes included, produce no constraint.
- Class and slot names are written unescaped.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from shex2linkml.parser.linkml_parser import parse_linkml

logger = logging.getLogger(__name__)

DEFAULT_PREDICATE_BASE = "http://example.org/"


class LinkMLStructureError(Exception):
    pass


def _first_prefix(document: Mapping) -> Optional[str]:
    prefixes = document.get("prefixes")
    if not isinstance(prefixes, Mapping):
        return None
    for name, iri in prefixes.items():
        if isinstance(name, str) and isinstance(iri, str):
            return name
    return None


def _predicate_builder(document: Mapping) -> Callable[[str], str]:
    prefix = _first_prefix(document)
    if prefix is not None:
        return lambda slot_name: f"{prefix}:{slot_name}"
    return lambda slot_name: f"{DEFAULT_PREDICATE_BASE}{slot_name}"


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _slot_facets(slot_def: Any) -> tuple[str, int, int]:
    """(range, min_count, max_count) with defaults ("string", 0, 1)."""
    if not isinstance(slot_def, Mapping):
        return "string", 0, 1
    rng = slot_def.get("range")
    return (
        rng if isinstance(rng, str) else "string",
        _int_or(slot_def.get("min_count"), 0),
        _int_or(slot_def.get("max_count"), 1),
    )


def cardinality_marker(min_count: int, max_count: int) -> str:
    """ShExC marker for a min/max pair.

    ``*`` for {0,>1}, ``+`` for {1,>1}, nothing for {1,1}, ``?`` for
    everything else (including {0,0}).
    """
    if min_count == 0 and max_count > 1:
        return "*"
    if min_count == 1 and max_count > 1:
        return "+"
    if min_count == 1 and max_count == 1:
        return ""
    return "?"


def range_constraint(rng: str) -> str:
    if rng == "integer":
        return " xsd:integer"
    return ""


def convert_linkml_to_shex(document: Any) -> str:
    """Render a LinkML document tree as ShExC.

    Args:
        document: Loaded LinkML document (dict-like).

    Returns:
        ShExC text: one ``<Class> IRI`` block per class.

    Raises:
        LinkMLStructureError: If the document has no ``classes`` mapping.
    """
    if not isinstance(document, Mapping) or not isinstance(document.get("classes"), Mapping):
        raise LinkMLStructureError("LinkML document missing `classes` mapping")

    classes = document["classes"]
    slots = document.get("slots")
    if not isinstance(slots, Mapping):
        logger.debug("No `slots` mapping; every slot gets default facets")
        slots = {}

    predicate_for = _predicate_builder(document)
    lines: list[str] = []

    for class_name, class_entry in classes.items():
        if not isinstance(class_name, str):
            continue
        lines.append(f"<{class_name}> IRI\n")

        slot_names = class_entry.get("slots") if isinstance(class_entry, Mapping) else None
        if not isinstance(slot_names, list):
            continue

        lines.append("{\n")
        for slot_name in slot_names:
            if not isinstance(slot_name, str):
                continue
            rng, min_count, max_count = _slot_facets(slots.get(slot_name))
            lines.append(
                f"  {predicate_for(slot_name)} "
                f"{range_constraint(rng)}{cardinality_marker(min_count, max_count)} ;\n"
            )
        lines.append("}\n\n")

    return "".join(lines)


def linkml_yaml_to_shex(source: str) -> str:
    """Load LinkML YAML (text or file path) and convert it to ShExC."""
    return convert_linkml_to_shex(parse_linkml(source))
