"""Tests for the command-line interface."""

import json
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from jreflect.cli import main


def run(capsys, *argv):
    main(list(argv))
    return capsys.readouterr()


class TestGenerate:
    def test_field(self, capsys):
        out = run(capsys, "field", "--owner", "com.example.Widget", "--member", "count",
                  "--name", "access$field", "--return-type", "int",
                  "-p", "com.example.Widget:object").out
        assert out.startswith("public int access$field(com.example.Widget object) {\n")
        assert "return (int) member.get(object);" in out
        assert out.endswith("}\n")

    def test_set_field(self, capsys):
        out = run(capsys, "set-field", "--owner", "com.example.Widget", "--member", "count",
                  "--name", "update$count", "-p", "com.example.Widget:object", "-p", "int:value").out
        assert "member.set(object, value);" in out

    def test_method_as_ast(self, capsys):
        out = run(capsys, "method", "--owner", "com.example.Widget", "--member", "run",
                  "--name", "call$run", "--static", "--ast",
                  "-p", "com.example.Widget:object", "-p", "com.example.Widget$Part:part",
                  "--context", "com.example.WidgetMethodObject").out
        data = json.loads(out)
        assert data["_type"] == "MethodDeclaration"
        assert data["name"] == "call$run"
        assert data["context"] == "com.example.WidgetMethodObject"
        assert data["parameters"][1]["type"]["name"] == "com.example.Widget.Part"

    def test_constructor(self, capsys):
        out = run(capsys, "constructor", "--owner", "com.example.Widget", "--name", "newWidget",
                  "--return-type", "com.example.Widget", "-p", "int:size").out
        assert "member.newInstance(size)" in out

    def test_write_without_value(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["set-field", "--owner", "com.example.Widget", "--member", "count", "--name", "f"])
        assert info.value.code == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_bad_parameter(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["field", "--owner", "a.B", "--member", "x", "--name", "f", "-p", "int"])
        assert info.value.code == 2


class TestParse:
    def test_parse_file(self, capsys, tmp_path):
        source = tmp_path / "Accessor.java"
        source.write_text("public static int f(int x) { return x; }")
        data = json.loads(run(capsys, "parse", str(source)).out)
        assert data["name"] == "f"

    def test_parse_invalid(self, capsys, tmp_path):
        source = tmp_path / "Broken.java"
        source.write_text("public int (")
        with pytest.raises(SystemExit) as info:
            main(["parse", str(source)])
        assert info.value.code == 1
        assert "Error parsing" in capsys.readouterr().err

    def test_missing_file(self, capsys, tmp_path):
        with pytest.raises(SystemExit) as info:
            main(["parse", str(tmp_path / "Missing.java")])
        assert info.value.code == 1

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as info:
            main([])
        assert info.value.code == 1
