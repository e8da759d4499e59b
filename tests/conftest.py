"""
Shared pytest fixtures for the kram-web test suite.

Usage in tests:
    def test_something(workbook_factory):
        workbook_factory.scene(js="const a = 1")
        workbook = workbook_factory.build()

    def test_with_data(sample_workbook):
        # two scenes using every language
        ...
"""

import pytest

from kram_web.config import OutputConfig
from kram_web.core.languages import LanguageRegistry, build_plugins
from tests.factories import WorkbookFactory


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep KRAM_* variables from the developer's shell out of tests."""
    for key in ("KRAM_SCENE_ELEMENT", "KRAM_STORE_ROOT_KEY", "KRAM_ANNOUNCE_LOAD",
                "KRAM_SVG_NAMESPACE", "KRAM_PROJECT_PATH"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    """Default output settings."""
    return OutputConfig()


@pytest.fixture
def plugins(settings):
    """All web-standard plugins keyed by tag."""
    return build_plugins(settings)


@pytest.fixture
def registry(settings):
    """Registry with html, css, svg and js registered."""
    return LanguageRegistry.web_standard(settings)


@pytest.fixture
def workbook_factory(registry):
    """Empty WorkbookFactory classifying with the shared registry."""
    return WorkbookFactory(module_name="demo", registry=registry)


@pytest.fixture
def sample_workbook(workbook_factory):
    """
    Two-scene workbook using every language.

    Scene 1: template + markup, style, symbol + drawing, function + call
    Scene 2: markup, drawing, script
    """
    workbook_factory.add_import(from_="lodash", as_="_")
    workbook_factory.scene(
        html=['<template id="card"><div class="card"></div></template>', "<p>Scene one</p>"],
        css=".card { color: red; }",
        svg=['<symbol id="dot"><circle r="1"/></symbol>', '<use href="#dot"/>'],
        js=["function greet(name) { return 'hi ' + name }", "greet('one')"],
    )
    workbook_factory.scene(
        html="<p>Scene two</p>",
        svg='<rect width="2" height="2"/>',
        js="greet('two')",
    )
    return workbook_factory.build()
