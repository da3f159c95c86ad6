"""Tests for the ShExC parser."""
import os

import pytest

from shex2linkml.parser.shex_parser import ShExParseError, parse_shex, parse_shex_file
from shex2linkml.schema.common import UNBOUNDED, IriStem, Literal, NodeKind
from shex2linkml.schema.shex import EachOf, NodeConstraint, ShapeRef, TripleConstraint


SHEX_DIR = os.path.join(os.path.dirname(__file__), "..", "dataset", "shex")
SCHEMA = "http://schema.org/"
XSD = "http://www.w3.org/2001/XMLSchema#"


def test_parse_person_prefixed_label():
    schema = parse_shex_file(os.path.join(SHEX_DIR, "Person.shex"))
    assert [p.name for p in schema.prefixes] == ["ex", "xsd"]
    assert len(schema.shapes) == 1
    shape = schema.shapes[0]
    assert shape.name.value == "http://example.org/ns/2#Person"
    assert isinstance(shape.expression, EachOf)
    name_tc, age_tc = shape.expression.expressions
    assert name_tc.predicate.value == "http://example.org/ns/2#name"
    assert name_tc.constraint.datatype.value == XSD + "string"
    assert name_tc.cardinality.min is None
    assert age_tc.cardinality.min == 0
    assert age_tc.cardinality.max == 1


def test_parse_event_start_and_extra():
    schema = parse_shex_file(os.path.join(SHEX_DIR, "Event.shex"))
    assert schema.start.value == "Event"
    assert [s.name.value for s in schema.shapes] == ["Event", "Organizer", "Place"]
    event = schema.shapes[0]
    assert [iri.value for iri in event.extra] == [
        "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"
    ]
    assert schema.shapes[2].closed is True


def test_parse_event_constraints():
    schema = parse_shex_file(os.path.join(SHEX_DIR, "Event.shex"))
    tcs = schema.shapes[0].expression.expressions
    assert len(tcs) == 10

    # `a` is rdf:type with a one-value set
    assert tcs[0].predicate.value == "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"
    assert [v.value for v in tcs[0].constraint.values] == [SCHEMA + "Event"]

    by_pred = {tc.predicate.value: tc for tc in tcs}
    organizer = by_pred[SCHEMA + "organizer"]
    assert isinstance(organizer.constraint, ShapeRef)
    assert organizer.constraint.name.value == "Organizer"
    assert organizer.cardinality.min == 0
    assert organizer.cardinality.max == UNBOUNDED

    location = by_pred[SCHEMA + "location"]
    assert (location.cardinality.min, location.cardinality.max) == (1, 3)

    count = by_pred[SCHEMA + "attendeeCount"]
    assert (count.cardinality.min, count.cardinality.max) == (1, 1)

    assert by_pred[SCHEMA + "url"].constraint.node_kind == NodeKind.IRI
    assert by_pred[SCHEMA + "keywords"].constraint.node_kind == NodeKind.LITERAL


def test_single_constraint_shape_is_not_wrapped():
    schema = parse_shex_file(os.path.join(SHEX_DIR, "Event.shex"))
    organizer = schema.shapes[1]
    assert isinstance(organizer.expression, TripleConstraint)


def test_base_directive_resolves_relative_iris():
    schema = parse_shex_file(os.path.join(SHEX_DIR, "Book.shex"))
    assert schema.base == "http://example.org/books/"
    names = [s.name.value for s in schema.shapes]
    assert names == [
        "http://example.org/books/Book",
        "http://example.org/books/Author",
        "http://example.org/books/Empty",
    ]
    author_tc = schema.shapes[0].expression.expressions[2]
    assert author_tc.constraint.name.value == "http://example.org/books/Author"
    assert schema.shapes[2].expression is None


def test_base_argument():
    schema = parse_shex("<S> { <p> . }", base="http://example.org/x/")
    shape = schema.shapes[0]
    assert shape.name.value == "http://example.org/x/S"
    assert shape.expression.predicate.value == "http://example.org/x/p"
    assert shape.expression.constraint == NodeConstraint()


def test_relative_iris_kept_without_base():
    schema = parse_shex("<S> { <p> . }")
    assert schema.shapes[0].name.value == "S"


def test_value_set_literals_and_stems():
    text = """
    PREFIX ex: <http://example.org/>
    <S> {
      ex:status [ "open" "closed"@en ] ;
      ex:home [ <http://example.org/people/>~ ] ;
    }
    """
    tcs = parse_shex(text).shapes[0].expression.expressions
    assert tcs[0].constraint.values == [
        Literal(value="open"),
        Literal(value="closed", language="en"),
    ]
    assert tcs[1].constraint.values == [IriStem(stem="http://example.org/people/")]


def test_open_ended_cardinality():
    schema = parse_shex("PREFIX ex: <http://example.org/>\n<S> { ex:p . {2,} ; ex:q . {0,*} }")
    p, q = schema.shapes[0].expression.expressions
    assert (p.cardinality.min, p.cardinality.max) == (2, UNBOUNDED)
    assert (q.cardinality.min, q.cardinality.max) == (0, UNBOUNDED)


def test_unknown_prefix_raises():
    with pytest.raises(ShExParseError, match="Unknown prefix"):
        parse_shex("<S> { foo:bar . }")


def test_unexpected_token_raises():
    with pytest.raises(ShExParseError):
        parse_shex("PREFIX ex: <http://example.org/>\n42")


def test_text_with_nul_is_parsed_as_text():
    with pytest.raises(ShExParseError, match="Unexpected token"):
        parse_shex("PREFIX ex: <http://example.org/>\n\x00")
