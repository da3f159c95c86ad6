"""Parsers for ShExC compact syntax and LinkML YAML."""
from shex2linkml.parser.shex_parser import ShExParseError, parse_shex, parse_shex_file
from shex2linkml.parser.linkml_parser import parse_linkml, parse_linkml_file
