"""Intermediate shape model shared by the LinkML and JSON Schema emitters.

Language-neutral, read-only dataclasses. A model is a plain ``list`` of
``ModelShape`` in extraction order; duplicate labels are kept as separate
entries.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ModelProperty:
    name: str
    predicate: str
    range: str  # "integer" | "number" | "boolean" | "string" | shape label | datatype IRI
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass(frozen=True)
class ModelShape:
    id: str
    name: str
    properties: tuple[ModelProperty, ...] = field(default_factory=tuple)
