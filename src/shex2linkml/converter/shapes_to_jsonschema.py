"""Convert the intermediate shape model to a draft-07 JSON Schema."""
from __future__ import annotations

from typing import Sequence

from shex2linkml.schema.model import ModelShape

JSON_SCHEMA_DIALECT = "http://json-schema.org/draft-07/schema#"
JSON_SCHEMA_ID = "http://example.org/generated-schema"

# Anything else, including references to other shapes, is a plain string.
JSON_TYPES = {
    "integer": "integer",
    "number": "number",
    "boolean": "boolean",
}


def _shape_definition(shape: ModelShape) -> dict:
    properties = {
        p.name: {"type": JSON_TYPES.get(p.range, "string")}
        for p in shape.properties
    }
    required = [
        p.name for p in shape.properties
        if p.min is not None and p.min > 0
    ]

    d: dict = {"type": "object", "properties": properties}
    if required:
        d["required"] = required
    return d


def convert_shapes_to_jsonschema(shapes: Sequence[ModelShape]) -> dict:
    """Build a JSON Schema with one ``definitions`` entry per shape."""
    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "$id": JSON_SCHEMA_ID,
        "definitions": {s.name: _shape_definition(s) for s in shapes},
    }
