"""
kram-web — Web-standard language backend for kram workbooks

Classifies workbook fragments (html, css, svg, js) as hoisted
definitions or scene-local evaluations, and collates them into
output artifacts:

    html -> templates.html, scenes.html
    css  -> styles.css
    svg  -> defs.svg, scene-<n>.svg
    js   -> module.js (ES module with store runtime)

Usage:
    from kram_web import LanguageRegistry, load_workbook

    registry = LanguageRegistry.web_standard()
    workbook = registry.classify_workbook(load_workbook("book.yaml"))
    for tag, artifacts in registry.collate_all(workbook).items():
        ...
"""

__version__ = "0.1.0"

# Config
from .config import Config, ConfigManager, OutputConfig, get_config

# Errors
from .errors import (
    KramError, ConfigError, ImportSpecError, WorkbookError,
    LanguageRegistrationError, UnknownLanguageError,
    StorePathError, SceneOutOfRangeError,
)

# Core layer (data)
from .core.workbook import Mode, Classification, Fragment, Scene, Workbook, ImportSpec, load_workbook
from .core.extraction import Extraction, ExtractedFragment, extract
from .core.artifacts import Artifact, manifest_json

# Languages
from .core.languages import (
    LanguagePlugin, LanguageRegistry, build_plugin, build_plugins, register,
    render_import,
)

# Runtime
from .runtime import Store, StoreNode, Capabilities, MountedProgram, mount

__all__ = [
    # Config
    'Config', 'ConfigManager', 'OutputConfig', 'get_config',
    # Errors
    'KramError', 'ConfigError', 'ImportSpecError', 'WorkbookError',
    'LanguageRegistrationError', 'UnknownLanguageError',
    'StorePathError', 'SceneOutOfRangeError',
    # Core
    'Mode', 'Classification', 'Fragment', 'Scene', 'Workbook', 'ImportSpec', 'load_workbook',
    'Extraction', 'ExtractedFragment', 'extract',
    'Artifact', 'manifest_json',
    # Languages
    'LanguagePlugin', 'LanguageRegistry', 'build_plugin', 'build_plugins', 'register',
    'render_import',
    # Runtime
    'Store', 'StoreNode', 'Capabilities', 'MountedProgram', 'mount',
]
