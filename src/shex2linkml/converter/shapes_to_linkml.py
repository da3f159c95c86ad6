"""Convert the intermediate shape model to a LinkML schema document.

Each shape becomes a class listing its slot names; each property becomes a
top-level slot with its range and, when known, min_count/max_count. Slots
are keyed by property name only, so a later shape redefining a slot name
replaces the earlier definition.
"""
from __future__ import annotations

from typing import Optional, Sequence

from shex2linkml.schema.model import ModelProperty, ModelShape

DEFAULT_SCHEMA_ID = "schema"
DEFAULT_PREFIXES = {"ex": "http://example.org/"}


def _slot_definition(prop: ModelProperty) -> dict:
    slot: dict = {"range": prop.range}
    if prop.min is not None:
        slot["min_count"] = prop.min
    if prop.max is not None:
        slot["max_count"] = prop.max
    return slot


def convert_shapes_to_linkml(
    shapes: Sequence[ModelShape], schema_id: Optional[str] = None
) -> dict:
    """Build a LinkML document tree from shapes.

    Args:
        shapes: Intermediate model, in the order the classes should appear.
        schema_id: Schema ``id`` (typically the input file stem); falls back
            to ``"schema"``.

    Returns:
        Dict with ``id``, ``prefixes``, ``classes`` and ``slots`` in that order.
    """
    classes: dict = {}
    slots: dict = {}

    for shape in shapes:
        classes[shape.name] = {"slots": [p.name for p in shape.properties]}
        for prop in shape.properties:
            slots[prop.name] = _slot_definition(prop)

    return {
        "id": schema_id or DEFAULT_SCHEMA_ID,
        "prefixes": dict(DEFAULT_PREFIXES),
        "classes": classes,
        "slots": slots,
    }
