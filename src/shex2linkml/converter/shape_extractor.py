"""Extract the intermediate shape model from a flattened ShEx AST.

Extraction is heuristic and best-effort:
- Shape containers are found by key name only (``shapeExprs``, ``shapes``,
  ``shapeDecls``), anywhere in the tree.
- Triple constraints are looked up in a fixed chain of locations; the first
  location that yields anything wins.
- Every miss degrades to a default (``"<unknown>"`` predicate, ``"string"``
  range, no shape) instead of raising.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional

from rdflib.namespace import XSD

from shex2linkml.converter.ast_flattener import flatten_ast
from shex2linkml.schema.model import ModelProperty, ModelShape

logger = logging.getLogger(__name__)

SHAPE_CONTAINER_KEYS = ("shapeExprs", "shapes", "shapeDecls")
UNKNOWN_PREDICATE = "<unknown>"

XSD_NS = str(XSD)
DATATYPE_RANGES = {
    str(XSD.integer): "integer",
    str(XSD.decimal): "number",
    str(XSD.boolean): "boolean",
}

_NAME_SEPARATORS = re.compile(r"[/#:]")


def _lookup(mapping: Any, *keys: str) -> Any:
    """Value of the first key present in ``mapping``, or None."""
    if not isinstance(mapping, Mapping):
        return None
    for key in keys:
        if key in mapping:
            return mapping[key]
    return None


def _as_count(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


# ── Range inference ───────────────────────────────────────────────


def _range_from_datatype(datatype: str) -> str:
    if datatype in DATATYPE_RANGES:
        return DATATYPE_RANGES[datatype]
    if datatype.startswith(XSD_NS):
        return "string"
    return datatype


def _range_from_value_class(value_class: Any) -> str:
    if isinstance(value_class, str):
        return value_class
    reference = _lookup(value_class, "reference")
    if isinstance(reference, str):
        return reference
    return "string"


def infer_range(constraint: Mapping) -> str:
    """Infer a slot range from a triple constraint.

    ``datatype`` beats ``nodeKind`` beats ``valueClass``; each must have
    the right type to count as present. XSD integer/decimal/boolean map to
    ``integer``/``number``/``boolean``, other XSD types to ``string``, and
    non-XSD datatypes pass through as opaque type names. Node kinds carry
    no type information and give ``string``.
    """
    datatype = constraint.get("datatype")
    if isinstance(datatype, str):
        return _range_from_datatype(datatype)
    if isinstance(constraint.get("nodeKind"), str):
        return "string"
    if "valueClass" in constraint:
        return _range_from_value_class(constraint["valueClass"])
    return "string"


# ── Single constraint ─────────────────────────────────────────────


def property_name(predicate: str) -> str:
    """Local name of a predicate: text after the last '/', '#' or ':'."""
    return _NAME_SEPARATORS.split(predicate)[-1]


def build_property(constraint: Mapping) -> ModelProperty:
    """Build a ModelProperty from one triple-constraint mapping."""
    predicate = constraint.get("predicate")
    if not isinstance(predicate, str):
        predicate = UNKNOWN_PREDICATE

    return ModelProperty(
        name=property_name(predicate),
        predicate=predicate,
        range=infer_range(constraint),
        min=_as_count(constraint.get("min")),
        max=_as_count(constraint.get("max")),
    )


# ── Property sources (first non-empty wins) ───────────────────────

PropertySource = Callable[[Mapping], Optional[list[ModelProperty]]]


def _properties_from_array(
    array: Any, require_predicate: bool = False
) -> Optional[list[ModelProperty]]:
    if not isinstance(array, list):
        return None
    props = [
        build_property(item) for item in array
        if isinstance(item, Mapping)
        and (not require_predicate or "predicate" in item)
    ]
    return props or None


def _nested_expression(body: Mapping) -> Any:
    return _lookup(body, "expression", "shapeExpr")


def from_nested_triple_constraints(body: Mapping) -> Optional[list[ModelProperty]]:
    """``expression.tripleConstraints`` (or the shapeExpr/snake_case spellings)."""
    expr = _nested_expression(body)
    return _properties_from_array(
        _lookup(expr, "tripleConstraints", "triple_constraints")
    )


def from_nested_items(body: Mapping) -> Optional[list[ModelProperty]]:
    """``expression.items`` / ``expression.expressions`` entries with a predicate."""
    expr = _nested_expression(body)
    return _properties_from_array(
        _lookup(expr, "items", "expressions"), require_predicate=True
    )


def from_direct_triple_constraints(body: Mapping) -> Optional[list[ModelProperty]]:
    """``tripleConstraints`` directly on the shape body."""
    return _properties_from_array(
        _lookup(body, "tripleConstraints", "triple_constraints")
    )


PROPERTY_SOURCES: tuple[PropertySource, ...] = (
    from_nested_triple_constraints,
    from_nested_items,
    from_direct_triple_constraints,
)


def properties_of(body: Any) -> list[ModelProperty]:
    """Properties of a candidate shape body, from the first source that has any."""
    if not isinstance(body, Mapping):
        return []
    for source in PROPERTY_SOURCES:
        props = source(body)
        if props:
            return props
    return []


# ── Shape search ──────────────────────────────────────────────────


def _take_container(node: Mapping, out: list[ModelShape]) -> bool:
    """Process ``node`` as a shape container if it has a container key.

    Only the first mapping-valued entry of the node is read, as
    ``{label: body}``. Returns True when such an entry was found, which
    tells the caller not to descend into the node. A container key whose
    entries are all non-mappings (ShExJ's ``shapes`` array) returns False,
    so the search continues below it.
    """
    if not any(key in node for key in SHAPE_CONTAINER_KEYS):
        return False

    for key, value in node.items():
        if not isinstance(value, Mapping):
            continue
        logger.debug("Reading shapes from container entry %r", key)
        for label, body in value.items():
            props = properties_of(body)
            if not props:
                logger.debug("Skipping %r: no triple constraints found", label)
                continue
            out.append(ModelShape(id=str(label), name=str(label), properties=tuple(props)))
        return True
    return False


def _walk(ast: Any, out: list[ModelShape]) -> None:
    """Depth-first, pre-order search for shape containers.

    Uses an explicit stack, so tree depth is not limited by the recursion
    limit. At most one container is processed per mapping node: once a
    node is taken as a container its children are not searched. Other
    mappings and sequences are searched child by child, in order.
    """
    pending = [ast]
    while pending:
        node = pending.pop()
        if isinstance(node, Mapping):
            if _take_container(node, out):
                continue
            pending.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            pending.extend(reversed(node))


def extract_shapes(ast: Any) -> list[ModelShape]:
    """Extract shapes from a flattened AST.

    Args:
        ast: Generic tree, normally the output of ``flatten_ast``.

    Returns:
        Shapes with at least one property, in search order. Duplicate labels
        from different containers are kept. An unrecognised tree gives [].
    """
    shapes: list[ModelShape] = []
    _walk(ast, shapes)
    return shapes


def convert_shex_to_shapes(shex: Any) -> list[ModelShape]:
    """Flatten a parsed ShEx AST and extract its shapes."""
    return extract_shapes(flatten_ast(shex))
