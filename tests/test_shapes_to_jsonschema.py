"""Tests for intermediate model -> JSON Schema."""
import json

from shex2linkml.converter.shapes_to_jsonschema import convert_shapes_to_jsonschema
from shex2linkml.schema.model import ModelProperty, ModelShape
from shex2linkml.serializer.json_serializer import serialize_json


def _shape(name, *props) -> ModelShape:
    return ModelShape(id=name, name=name, properties=tuple(props))


def _prop(name, rng="string", mn=None, mx=None) -> ModelProperty:
    return ModelProperty(name=name, predicate=f"http://example.org/{name}", range=rng, min=mn, max=mx)


PERSON = _shape("Person", _prop("name"), _prop("age", "integer", 0, 1))


def test_envelope():
    doc = convert_shapes_to_jsonschema([])
    assert doc == {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "http://example.org/generated-schema",
        "definitions": {},
    }


def test_person_definition():
    person = convert_shapes_to_jsonschema([PERSON])["definitions"]["Person"]
    assert person == {
        "type": "object",
        "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
    }
    assert "required" not in person


def test_type_mapping():
    shape = _shape(
        "T",
        _prop("i", "integer"), _prop("n", "number"), _prop("b", "boolean"),
        _prop("s", "string"), _prop("ref", "Person"),
        _prop("dt", "http://example.org/types/GeoPoint"),
    )
    props = convert_shapes_to_jsonschema([shape])["definitions"]["T"]["properties"]
    assert {k: v["type"] for k, v in props.items()} == {
        "i": "integer", "n": "number", "b": "boolean",
        "s": "string", "ref": "string", "dt": "string",
    }


def test_required_lists_positive_min_in_order():
    shape = _shape(
        "R",
        _prop("c", mn=2), _prop("a", mn=0), _prop("b", mn=1), _prop("d"),
    )
    assert convert_shapes_to_jsonschema([shape])["definitions"]["R"]["required"] == ["c", "b"]


def test_definitions_follow_shape_order():
    doc = convert_shapes_to_jsonschema([_shape("B", _prop("x")), PERSON, _shape("A", _prop("y"))])
    assert list(doc["definitions"]) == ["B", "Person", "A"]


def test_serialized_output_is_stable():
    first = serialize_json(convert_shapes_to_jsonschema([PERSON]))
    second = serialize_json(convert_shapes_to_jsonschema([PERSON]))
    assert first == second
    assert json.loads(first)["definitions"]["Person"]["properties"]["age"] == {"type": "integer"}
    assert first.index('"$schema"') < first.index('"$id"') < first.index('"definitions"')
