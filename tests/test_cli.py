"""
Tests for the kram-web command line.
"""

import io
import json

import orjson
import pytest
import yaml

from kram_web.cli import main
from kram_web.config import ConfigManager


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    """Keep ~/.kram/config.yaml out of CLI runs."""
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", tmp_path / "no-user-config.yaml")


@pytest.fixture
def workbook_file(tmp_path, workbook_factory):
    """Two-scene workbook document on disk."""
    workbook_factory.scene(
        html=["<template id='t'></template>", "<p>one</p>"],
        css="p { margin: 0 }",
        js="const a = 1",
    )
    workbook_factory.scene(svg="<circle r='1'/>", js="a += 1")
    path = tmp_path / "book.yaml"
    path.write_text(yaml.dump(workbook_factory.as_document()))
    return path


def run(tmp_path, *argv):
    return main(["--project", str(tmp_path), *argv])


class TestLanguagesCommand:

    def test_lists_languages(self, tmp_path, capsys):
        assert run(tmp_path, "languages") == 0
        out = capsys.readouterr().out
        assert out.startswith("Web (W3C Standard): ")
        for tag in ("html", "css", "svg", "js"):
            assert f"  {tag}" in out
        assert "Javascript (ES6)" in out

    def test_no_command_prints_help(self, tmp_path, capsys):
        assert run(tmp_path) == 0
        assert "usage: kram-web" in capsys.readouterr().out


class TestClassifyCommand:

    def test_classify_argument(self, tmp_path, capsys):
        assert run(tmp_path, "classify", "js", "const answer = 42") == 0
        verdict = orjson.loads(capsys.readouterr().out)
        assert verdict == {"mode": "define", "subtype": "constant", "definition_name": "answer"}

    def test_classify_stdin(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("<symbol id='s'>"))
        assert run(tmp_path, "classify", "svg", "-") == 0
        assert json.loads(capsys.readouterr().out) == {"mode": "define", "subtype": "symbol"}

    def test_unknown_language(self, tmp_path, capsys):
        assert run(tmp_path, "classify", "htm", "<p/>") == 1
        assert "Did you mean 'html'?" in capsys.readouterr().err


class TestCollateCommand:

    def test_writes_artifacts(self, tmp_path, capsys, workbook_file):
        out_dir = tmp_path / "build"
        assert run(tmp_path, "collate", str(workbook_file), "--out", str(out_dir)) == 0

        names = sorted(p.name for p in out_dir.iterdir())
        assert names == [
            "defs.svg", "module.js", "scene-2.svg", "scenes.html", "styles.css", "templates.html",
        ]
        assert (out_dir / "styles.css").read_text() == "/* Kram: CSS in Scene 1 */\np { margin: 0 }"
        assert "Wrote 6 artifact(s)" in capsys.readouterr().out

    def test_single_language_to_stdout(self, tmp_path, capsys, workbook_file):
        assert run(tmp_path, "collate", str(workbook_file), "--language", "css") == 0
        out = capsys.readouterr().out
        assert "--- styles.css (css, define)" in out
        assert "module.js" not in out

    def test_json_manifest(self, tmp_path, capsys, workbook_file):
        assert run(tmp_path, "collate", str(workbook_file), "-l", "js", "--json") == 0
        manifest = orjson.loads(capsys.readouterr().out)
        assert [entry["name"] for entry in manifest] == ["module.js"]
        assert "// module demo (ES6)" in manifest[0]["code"]

    def test_project_config_applied(self, tmp_path, capsys, workbook_file):
        config_path = tmp_path / ".kram" / "config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("output:\n  scene_element: book-scene\n")

        assert run(tmp_path, "collate", str(workbook_file), "-l", "html") == 0
        assert '<book-scene scene="1"><p>one</p></book-scene>' in capsys.readouterr().out

    def test_malformed_import_exit_code(self, tmp_path, capsys, workbook_factory):
        workbook_factory.add_import(from_="a", expose="some")
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump(workbook_factory.as_document()))

        assert run(tmp_path, "collate", str(path)) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_missing_workbook(self, tmp_path, capsys):
        assert run(tmp_path, "collate", str(tmp_path / "missing.yaml")) == 1
        assert "Error:" in capsys.readouterr().err

    def test_non_string_config_value_exit_code(self, tmp_path, capsys, workbook_file):
        """A mistyped config value is reported as an error, not a traceback."""
        config_path = tmp_path / ".kram" / "config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("output:\n  scene_element: 5\n")

        assert run(tmp_path, "collate", str(workbook_file)) == 1
        assert "Invalid scene element '5'" in capsys.readouterr().err
