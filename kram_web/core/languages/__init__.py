"""
Language configurations for classification and collation.

Each language has its own module defining:
- Definition patterns (what counts as a hoisted definition)
- A collator (how fragments become artifacts)

Supported languages:
- html.py: HTML markup (templates.html, scenes.html)
- css.py: CSS styling (styles.css)
- svg.py: SVG graphics (defs.svg, scene-<n>.svg)
- javascript.py: JavaScript ES6 module (module.js)
"""

from .config import LanguageConfig, DefinitionPattern
from .classifier import classify_fragment
from .html import HTML_CONFIG
from .css import CSS_CONFIG
from .svg import SVG_CONFIG
from .javascript import JAVASCRIPT_CONFIG
from .imports import render_import, render_imports
from .plugin import (
    LanguagePlugin,
    build_plugin,
    build_plugins,
    register,
    WEB_STANDARD_CONFIGS,
    PLUGIN_NAME,
    PLUGIN_DISPLAY_NAME,
    PLUGIN_DESCRIPTION,
    PLUGIN_LANGUAGES,
)
from .registry import LanguageRegistry

__all__ = [
    'LanguageConfig',
    'DefinitionPattern',
    'classify_fragment',
    'HTML_CONFIG',
    'CSS_CONFIG',
    'SVG_CONFIG',
    'JAVASCRIPT_CONFIG',
    'render_import',
    'render_imports',
    'LanguagePlugin',
    'build_plugin',
    'build_plugins',
    'register',
    'WEB_STANDARD_CONFIGS',
    'PLUGIN_NAME',
    'PLUGIN_DISPLAY_NAME',
    'PLUGIN_DESCRIPTION',
    'PLUGIN_LANGUAGES',
    'LanguageRegistry',
]
