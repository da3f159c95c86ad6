"""Serialize a LinkML document tree to YAML."""
from __future__ import annotations

import yaml


def serialize_linkml(document: dict) -> str:
    """Serialize a LinkML document to a YAML string.

    Key order is kept as built (no sorting), so the same document always
    gives the same text.
    """
    return yaml.safe_dump(
        document,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
