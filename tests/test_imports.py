"""
Tests for rendering and validating scripting-module imports.
"""

import pytest

from kram_web.core.languages import render_import, render_imports
from kram_web.core.workbook import ImportSpec
from kram_web.errors import ConfigError, ImportSpecError


class TestRenderImport:
    """Each specification shape renders to exactly one import statement."""

    @pytest.mark.parametrize("spec,expected", [
        ({"from": "a", "expose": "*"}, "import * from 'a'"),
        ({"from": "a", "as": "d", "expose": "*"}, "import d, * from 'a'"),
        ({"from": "a", "as": "d", "expose": ["b", "c"]}, "import d, { b, c } from 'a'"),
        ({"from": "a", "expose": ["b"]}, "import { b } from 'a'"),
        ({"from": "a", "as": "d"}, "import d from 'a'"),
        ({"from": "a"}, "import 'a'"),
        ({"from": "./lib/util.js", "as": "util"}, "import util from './lib/util.js'"),
    ])
    def test_shapes(self, spec, expected):
        assert render_import(spec) == expected

    def test_accepts_parsed_spec(self):
        """An ImportSpec renders the same as its mapping."""
        spec = ImportSpec(source="a", alias="d")
        assert render_import(spec) == "import d from 'a'"

    def test_render_imports_keeps_order(self):
        """Imports render in workbook order."""
        lines = render_imports([{"from": "z"}, {"from": "a", "as": "a"}])
        assert lines == ["import 'z'", "import a from 'a'"]


class TestImportValidation:
    """Malformed specifications raise instead of producing invalid code."""

    @pytest.mark.parametrize("spec", [
        {},
        {"from": ""},
        {"from": "   "},
        {"from": 42},
        {"from": "it's"},
        {"from": "a\nb"},
        {"from": "a", "as": ""},
        {"from": "a", "as": 3},
        {"from": "a", "expose": "all"},
        {"from": "a", "expose": []},
        {"from": "a", "expose": ["b", ""]},
        {"from": "a", "expose": {"b": 1}},
        {"from": "a", "default": "d"},
        "a",
        None,
    ])
    def test_rejected(self, spec):
        with pytest.raises(ImportSpecError):
            render_import(spec)

    def test_error_carries_offending_spec(self):
        """The failing specification is attached for reporting."""
        with pytest.raises(ImportSpecError) as exc_info:
            render_import({"from": "a", "expose": "all"})
        assert exc_info.value.spec == {"from": "a", "expose": "all"}
        assert "expose" in str(exc_info.value)

    def test_is_config_error(self):
        """Import problems are configuration problems."""
        with pytest.raises(ConfigError):
            render_import({"as": "d"})

    def test_first_malformed_import_raises(self):
        """render_imports stops on the first bad entry."""
        with pytest.raises(ImportSpecError):
            render_imports([{"from": "a"}, {"from": ""}])


class TestImportSpec:
    """Normalized import model."""

    def test_parse_normalizes_expose_list(self):
        spec = ImportSpec.parse({"from": "a", "expose": ["b", "c"]})
        assert spec.expose == ("b", "c")
        assert not spec.is_namespace
        assert not spec.is_bare

    def test_bare_import(self):
        spec = ImportSpec.parse({"from": "polyfill"})
        assert spec.is_bare
