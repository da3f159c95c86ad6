"""ShEx abstract syntax tree (Shape, TripleConstraint, NodeConstraint, etc.)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from shex2linkml.schema.common import IRI, Cardinality, IriStem, Literal, NodeKind, Prefix


@dataclass
class NodeConstraint:
    datatype: Optional[IRI] = None
    node_kind: Optional[NodeKind] = None
    values: Optional[list[Union[IRI, Literal, IriStem]]] = None  # [v1 v2 ...]


@dataclass
class ShapeRef:
    """Reference to another shape: @<ShapeName>"""
    name: IRI


@dataclass
class TripleConstraint:
    predicate: IRI
    constraint: Optional[Union[NodeConstraint, ShapeRef]] = None
    cardinality: Cardinality = field(default_factory=Cardinality)


@dataclass
class EachOf:
    """Conjunction of triple expressions (;-separated in ShExC)."""
    expressions: list[Union[TripleConstraint, EachOf, OneOf]] = field(
        default_factory=list
    )


@dataclass
class OneOf:
    """Disjunction of triple expressions (|-separated in ShExC)."""
    expressions: list[Union[TripleConstraint, EachOf, OneOf]] = field(
        default_factory=list
    )


TripleExpr = Union[TripleConstraint, EachOf, OneOf]


@dataclass
class Shape:
    name: IRI
    expression: Optional[TripleExpr] = None
    closed: bool = False
    extra: list[IRI] = field(default_factory=list)  # EXTRA predicates


@dataclass
class ShExSchema:
    shapes: list[Shape] = field(default_factory=list)
    prefixes: list[Prefix] = field(default_factory=list)
    base: Optional[str] = None
    start: Optional[IRI] = None  # start = @<Shape>
