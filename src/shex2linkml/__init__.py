"""shex2linkml: translate ShEx schemas to LinkML and JSON Schema, and LinkML back to ShEx."""
__version__ = "0.1.0"

from shex2linkml.schema.shex import Shape, ShExSchema, TripleConstraint
from shex2linkml.schema.model import ModelProperty, ModelShape

from shex2linkml.parser.shex_parser import ShExParseError, parse_shex, parse_shex_file
from shex2linkml.parser.linkml_parser import parse_linkml, parse_linkml_file

from shex2linkml.converter.ast_flattener import flatten_ast
from shex2linkml.converter.shape_extractor import (
    build_property,
    convert_shex_to_shapes,
    extract_shapes,
    properties_of,
)
from shex2linkml.converter.shapes_to_linkml import convert_shapes_to_linkml
from shex2linkml.converter.shapes_to_jsonschema import convert_shapes_to_jsonschema
from shex2linkml.converter.linkml_to_shex import (
    LinkMLStructureError,
    convert_linkml_to_shex,
    linkml_yaml_to_shex,
)

from shex2linkml.serializer.yaml_serializer import serialize_linkml
from shex2linkml.serializer.json_serializer import serialize_json

__all__ = [
    # Schema
    "Shape", "ShExSchema", "TripleConstraint",
    "ModelShape", "ModelProperty",
    # Parsers
    "ShExParseError", "parse_shex", "parse_shex_file",
    "parse_linkml", "parse_linkml_file",
    # Converters
    "flatten_ast", "extract_shapes", "properties_of", "build_property",
    "convert_shex_to_shapes",
    "convert_shapes_to_linkml", "convert_shapes_to_jsonschema",
    "LinkMLStructureError", "convert_linkml_to_shex", "linkml_yaml_to_shex",
    # Serializers
    "serialize_linkml", "serialize_json",
]
