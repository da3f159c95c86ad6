"""ShEx -> LinkML / JSON Schema translator: command line.

Usage:
    shex2linkml INPUT.shex [--linkml FILE] [--jsonschema FILE] [--base IRI]
    shex2linkml --input-dir DIR --output-dir DIR
    shex2linkml --back-to-shex SCHEMA.yaml [--output FILE]
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from shex2linkml.converter.linkml_to_shex import linkml_yaml_to_shex
from shex2linkml.converter.shape_extractor import convert_shex_to_shapes
from shex2linkml.converter.shapes_to_jsonschema import convert_shapes_to_jsonschema
from shex2linkml.converter.shapes_to_linkml import convert_shapes_to_linkml
from shex2linkml.parser.shex_parser import parse_shex_file
from shex2linkml.serializer.json_serializer import serialize_json
from shex2linkml.serializer.yaml_serializer import serialize_linkml


def _stem(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _write(path: str, text: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def convert_file(
    input_path: str,
    linkml_path: Optional[str] = None,
    jsonschema_path: Optional[str] = None,
    base: Optional[str] = None,
) -> tuple[str, str]:
    """Convert one ShExC file to LinkML YAML and JSON Schema.

    Args:
        input_path: Path to the ShExC file.
        linkml_path: LinkML output path (default ``<stem>-linkml.yaml``
            next to the input).
        jsonschema_path: JSON Schema output path (default
            ``<stem>-jsonschema.json`` next to the input).
        base: Base IRI for relative IRIs in the input.

    Returns:
        (linkml_path, jsonschema_path) actually written.
    """
    stem = _stem(input_path)
    folder = os.path.dirname(input_path)
    linkml_path = linkml_path or os.path.join(folder, f"{stem}-linkml.yaml")
    jsonschema_path = jsonschema_path or os.path.join(folder, f"{stem}-jsonschema.json")

    shapes = convert_shex_to_shapes(parse_shex_file(input_path, base=base))

    _write(linkml_path, serialize_linkml(convert_shapes_to_linkml(shapes, schema_id=stem)))
    _write(jsonschema_path, serialize_json(convert_shapes_to_jsonschema(shapes)))
    return linkml_path, jsonschema_path


def convert_back(linkml_path: str, output_path: Optional[str] = None) -> str:
    """Convert a LinkML YAML file to ShExC; returns the written path."""
    output_path = output_path or os.path.splitext(linkml_path)[0] + ".shex"
    _write(output_path, linkml_yaml_to_shex(linkml_path))
    return output_path


def convert_batch(input_dir: str, output_dir: str, base: Optional[str] = None) -> tuple[int, int]:
    """Convert every .shex file in a directory.

    Returns:
        (success_count, failure_count)
    """
    os.makedirs(output_dir, exist_ok=True)
    ok = 0
    fail = 0

    for filename in sorted(os.listdir(input_dir)):
        if not filename.endswith(".shex"):
            continue
        stem = _stem(filename)
        try:
            convert_file(
                os.path.join(input_dir, filename),
                os.path.join(output_dir, f"{stem}-linkml.yaml"),
                os.path.join(output_dir, f"{stem}-jsonschema.json"),
                base=base,
            )
            print(f"  OK  {filename}")
            ok += 1
        except Exception as e:
            print(f"  FAIL {filename}: {e}")
            fail += 1

    return ok, fail


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shex2linkml",
        description="Convert ShEx (compact) to LinkML and JSON Schema, and LinkML back to ShEx",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input", nargs="?", help="Input ShExC file")
    parser.add_argument("--linkml", help="LinkML output path")
    parser.add_argument("--jsonschema", help="JSON Schema output path")
    parser.add_argument("--base", help="Base IRI for relative IRIs in the input")
    parser.add_argument(
        "--back-to-shex",
        metavar="LINKML",
        help="Convert this LinkML YAML file back to ShExC",
    )
    parser.add_argument("--output", "-o", help="ShExC output path for --back-to-shex")
    parser.add_argument("--input-dir", help="Input directory for batch conversion")
    parser.add_argument("--output-dir", help="Output directory for batch conversion")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.back_to_shex:
            out = convert_back(args.back_to_shex, args.output)
            print(f"Wrote ShEx -> {out}")
            return 0

        if args.input_dir and args.output_dir:
            ok, fail = convert_batch(args.input_dir, args.output_dir, base=args.base)
            print(f"\nConverted {ok} files, {fail} failed")
            return 1 if fail else 0

        if args.input:
            linkml_path, json_path = convert_file(
                args.input, args.linkml, args.jsonschema, base=args.base
            )
            print(f"Wrote LinkML -> {linkml_path}")
            print(f"Wrote JSON Schema -> {json_path}")
            return 0
    except Exception as e:
        print(f"FAIL {args.back_to_shex or args.input}: {e}")
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
