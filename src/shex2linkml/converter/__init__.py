"""Converters between the ShEx AST, the intermediate model, LinkML and JSON Schema."""
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
