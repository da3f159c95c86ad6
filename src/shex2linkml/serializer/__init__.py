"""Serializers for LinkML (YAML) and JSON Schema (JSON) documents."""
from shex2linkml.serializer.yaml_serializer import serialize_linkml
from shex2linkml.serializer.json_serializer import serialize_json
