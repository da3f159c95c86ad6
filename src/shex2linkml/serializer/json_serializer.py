"""Serialize a JSON Schema document tree to a JSON string."""
from __future__ import annotations

import json


def serialize_json(document: dict) -> str:
    """Pretty-print a document tree, keeping key insertion order."""
    return json.dumps(document, indent=2, ensure_ascii=False)
