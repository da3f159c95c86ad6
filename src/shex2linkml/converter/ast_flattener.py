"""Flatten a parsed ShEx AST into a generic dict/list/scalar tree.

The output loosely follows ShExJ naming (``type``, ``predicate``,
``datatype``, ``nodeKind``, ``valueClass``, ``min``/``max`` with -1 for
unbounded) so that the shape extractor can search it without knowing the
AST classes. Shapes are keyed by label under ``shapes``, and each shape
also lists its triple constraints directly under ``tripleConstraints``.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from shex2linkml.schema.common import IRI, Cardinality, IriStem, Literal, Prefix
from shex2linkml.schema.shex import (
    EachOf,
    NodeConstraint,
    OneOf,
    Shape,
    ShapeRef,
    ShExSchema,
    TripleConstraint,
    TripleExpr,
)

GenericNode = Union[dict, list, str, int, float, bool, None]


def _flatten_value(val: Union[IRI, Literal, IriStem]) -> GenericNode:
    if isinstance(val, IRI):
        return val.value
    if isinstance(val, IriStem):
        return {"type": "IriStem", "stem": val.stem}
    d: dict = {"value": val.value}
    if val.datatype:
        d["type"] = val.datatype.value
    if val.language:
        d["language"] = val.language
    return d


def _flatten_cardinality(card: Cardinality, d: dict) -> None:
    if card.min is not None:
        d["min"] = card.min
    if card.max is not None:
        d["max"] = card.max


def _flatten_triple_constraint(tc: TripleConstraint) -> dict:
    d: dict = {"type": "TripleConstraint", "predicate": tc.predicate.value}

    c = tc.constraint
    if isinstance(c, ShapeRef):
        d["valueClass"] = {"type": "ShapeRef", "reference": c.name.value}
    elif isinstance(c, NodeConstraint):
        if c.datatype is not None:
            d["datatype"] = c.datatype.value
        elif c.node_kind is not None:
            d["nodeKind"] = c.node_kind.value
        elif c.values is not None:
            d["values"] = [_flatten_value(v) for v in c.values]

    _flatten_cardinality(tc.cardinality, d)
    return d


def _flatten_expression(expr: TripleExpr) -> dict:
    if isinstance(expr, TripleConstraint):
        return _flatten_triple_constraint(expr)
    kind = "EachOf" if isinstance(expr, EachOf) else "OneOf"
    return {
        "type": kind,
        "expressions": [_flatten_expression(e) for e in expr.expressions],
    }


def _collect_triple_constraints(expr) -> list[TripleConstraint]:
    """Triple constraints reachable through EachOf nesting, in source order."""
    if isinstance(expr, TripleConstraint):
        return [expr]
    if isinstance(expr, EachOf):
        tcs: list[TripleConstraint] = []
        for e in expr.expressions:
            tcs.extend(_collect_triple_constraints(e))
        return tcs
    return []


def _flatten_shape(shape: Shape) -> dict:
    d: dict = {
        "type": "Shape",
        "closed": shape.closed,
        "extra": [iri.value for iri in shape.extra],
    }
    if shape.expression is not None:
        d["expression"] = _flatten_expression(shape.expression)
    d["tripleConstraints"] = [
        _flatten_triple_constraint(tc)
        for tc in _collect_triple_constraints(shape.expression)
    ]
    return d


def _flatten_schema(schema: ShExSchema) -> dict:
    d: dict = {
        "type": "Schema",
        "shapes": {s.name.value: _flatten_shape(s) for s in schema.shapes},
        "prefixes": {p.name: p.iri for p in schema.prefixes},
    }
    if schema.start is not None:
        d["start"] = schema.start.value
    if schema.base is not None:
        d["base"] = schema.base
    return d


def flatten_ast(node: Any) -> GenericNode:
    """Convert an AST (or any nested Python value) into a generic tree.

    ShEx AST classes get their ShExJ-like form. Mappings, sequences,
    dataclasses and enums are converted structurally; mapping keys become
    strings. Anything else degrades to ``str(node)``. Never raises.
    """
    if node is None or isinstance(node, (str, bool, int, float)):
        return node
    if isinstance(node, ShExSchema):
        return _flatten_schema(node)
    if isinstance(node, Shape):
        return _flatten_shape(node)
    if isinstance(node, (EachOf, OneOf, TripleConstraint)):
        return _flatten_expression(node)
    if isinstance(node, (IRI, Literal, IriStem)):
        return _flatten_value(node)
    if isinstance(node, Prefix):
        return {node.name: node.iri}
    if isinstance(node, Enum):
        return flatten_ast(node.value)
    if isinstance(node, Mapping):
        return {str(k): flatten_ast(v) for k, v in node.items()}
    if isinstance(node, (list, tuple)):
        return [flatten_ast(v) for v in node]
    if dataclasses.is_dataclass(node) and not isinstance(node, type):
        return {
            f.name: flatten_ast(getattr(node, f.name))
            for f in dataclasses.fields(node)
        }
    return str(node)
