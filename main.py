"""ShEx -> LinkML / JSON Schema translator: CLI entry point.

Usage:
    python main.py INPUT.shex [--linkml FILE] [--jsonschema FILE]
    python main.py --input-dir DIR --output-dir DIR
    python main.py --back-to-shex SCHEMA.yaml
"""
import sys

from shex2linkml.cli import main

if __name__ == "__main__":
    sys.exit(main())
