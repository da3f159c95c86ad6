"""Tests for the command-line entry point."""
import json
import os
import shutil

import yaml

from shex2linkml.cli import convert_batch, convert_file, main


SHEX_DIR = os.path.join(os.path.dirname(__file__), "..", "dataset", "shex")


def _copy(name, tmp_path):
    dest = tmp_path / name
    shutil.copy(os.path.join(SHEX_DIR, name), dest)
    return str(dest)


def test_convert_file_default_outputs(tmp_path):
    src = _copy("Person.shex", tmp_path)
    linkml_path, json_path = convert_file(src)
    assert linkml_path == str(tmp_path / "Person-linkml.yaml")
    assert json_path == str(tmp_path / "Person-jsonschema.json")

    with open(linkml_path, encoding="utf-8") as f:
        doc = yaml.safe_load(f)
    assert doc["id"] == "Person"
    assert doc["classes"]["http://example.org/ns/2#Person"]["slots"] == ["name", "age"]

    with open(json_path, encoding="utf-8") as f:
        schema = json.load(f)
    assert schema["definitions"]["http://example.org/ns/2#Person"]["properties"]["age"] == {"type": "integer"}


def test_main_forward_and_back(tmp_path, capsys):
    src = _copy("Event.shex", tmp_path)
    linkml_out = str(tmp_path / "out" / "event.yaml")
    json_out = str(tmp_path / "out" / "event.json")

    assert main([src, "--linkml", linkml_out, "--jsonschema", json_out]) == 0
    printed = capsys.readouterr().out
    assert f"Wrote LinkML -> {linkml_out}" in printed
    assert f"Wrote JSON Schema -> {json_out}" in printed

    assert main(["--back-to-shex", linkml_out]) == 0
    shex_out = tmp_path / "out" / "event.shex"
    assert f"Wrote ShEx -> {shex_out}" in capsys.readouterr().out
    assert shex_out.read_text(encoding="utf-8").startswith("<Event> IRI\n")


def test_main_base_option(tmp_path):
    src = tmp_path / "rel.shex"
    src.write_text("<S> { <p> . }", encoding="utf-8")
    assert main([str(src), "--base", "http://example.org/x/"]) == 0
    doc = yaml.safe_load((tmp_path / "rel-linkml.yaml").read_text(encoding="utf-8"))
    assert list(doc["classes"]) == ["http://example.org/x/S"]


def test_main_reports_failures(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("slots: {}\n", encoding="utf-8")
    assert main(["--back-to-shex", str(bad)]) == 1
    assert "missing `classes` mapping" in capsys.readouterr().out


def test_main_without_arguments_prints_help(capsys):
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_batch(tmp_path, capsys):
    in_dir = tmp_path / "in"
    in_dir.mkdir()
    for name in ("Person.shex", "Book.shex"):
        shutil.copy(os.path.join(SHEX_DIR, name), in_dir / name)
    (in_dir / "Broken.shex").write_text("<S> { foo:bar . }", encoding="utf-8")
    (in_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    ok, fail = convert_batch(str(in_dir), str(tmp_path / "out"))
    assert (ok, fail) == (2, 1)
    out = capsys.readouterr().out
    assert "  OK  Book.shex" in out
    assert "  FAIL Broken.shex: Unknown prefix 'foo'" in out
    assert sorted(os.listdir(tmp_path / "out")) == [
        "Book-jsonschema.json", "Book-linkml.yaml",
        "Person-jsonschema.json", "Person-linkml.yaml",
    ]
