"""Shared value types for the ShEx AST."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NodeKind(Enum):
    IRI = "iri"
    BLANK_NODE = "bnode"
    LITERAL = "literal"
    NON_LITERAL = "nonliteral"


UNBOUNDED = -1  # Sentinel for unbounded max cardinality


@dataclass
class Cardinality:
    min: Optional[int] = None   # None = not specified (ShEx default 1)
    max: Optional[int] = None   # None = not specified, UNBOUNDED = unlimited


@dataclass(frozen=True)
class IRI:
    value: str

    def __repr__(self):
        return f"IRI({self.value!r})"


@dataclass
class Prefix:
    name: str
    iri: str


@dataclass
class IriStem:
    """An IRI stem for ShEx value sets, e.g. <http://example.org/~>"""
    stem: str


@dataclass(frozen=True)
class Literal:
    value: str
    datatype: Optional[IRI] = None
    language: Optional[str] = None
