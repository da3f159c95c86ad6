"""Schema models: the ShEx AST and the intermediate shape model."""
from shex2linkml.schema.common import IRI, UNBOUNDED, Cardinality, NodeKind, Prefix
from shex2linkml.schema.shex import Shape, ShExSchema, TripleConstraint
from shex2linkml.schema.model import ModelProperty, ModelShape
