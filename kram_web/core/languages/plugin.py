"""
Language plugins — Classify + collate pairs for the web-standard languages.

A LanguagePlugin binds one LanguageConfig to output settings and an
extractor. Plugins are plain values: build them with build_plugin() or
build_plugins() and keep a tag -> plugin mapping (see LanguageRegistry).

Hosts that still use callback-style registration can call register()
with an object or mapping exposing provides_language(tag, plugin).

Usage:
    plugins = build_plugins()
    verdict = plugins["js"].classify("const answer = 42")
    artifacts = plugins["svg"].collate(workbook)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from ...config import OutputConfig
from ..artifacts import Artifact
from ..extraction import Extractor, extract
from ..workbook import Classification, Workbook
from .classifier import classify_fragment
from .config import LanguageConfig
from .css import CSS_CONFIG
from .html import HTML_CONFIG
from .javascript import JAVASCRIPT_CONFIG
from .svg import SVG_CONFIG


logger = logging.getLogger(__name__)


PLUGIN_NAME = "web-standard"
PLUGIN_DISPLAY_NAME = "Web (W3C Standard)"
PLUGIN_DESCRIPTION = "Standard technologies supported by nearly all browsers"

# Registration order is fixed
WEB_STANDARD_CONFIGS = (HTML_CONFIG, CSS_CONFIG, SVG_CONFIG, JAVASCRIPT_CONFIG)

PLUGIN_LANGUAGES = {config.tag: config.name for config in WEB_STANDARD_CONFIGS}


@dataclass(frozen=True)
class LanguagePlugin:
    """
    Classifier and collator for one content language.

    Both operations are pure: no state is kept between calls, so one
    plugin may serve concurrent builds.
    """
    config: LanguageConfig
    settings: OutputConfig = field(default_factory=OutputConfig)
    extractor: Extractor = extract

    @property
    def tag(self) -> str:
        return self.config.tag

    @property
    def name(self) -> str:
        return self.config.name

    def classify(self, code: Any) -> Classification:
        """Classify one fragment; never raises."""
        return classify_fragment(code, self.config)

    def collate(self, workbook: Workbook) -> List[Artifact]:
        """
        Collate every fragment of this language into artifacts.

        Raises:
            ImportSpecError: Scripting only, for a malformed workbook import
        """
        extraction = self.extractor(workbook, self.tag)
        artifacts = self.config.collator(workbook, extraction, self.settings)
        logger.debug(
            "Collated %s: %d definition(s), %d scene item(s) -> %s",
            self.tag, len(extraction.definitions), len(extraction.scenes),
            [a.name for a in artifacts],
        )
        return artifacts


def build_plugin(
    config: LanguageConfig,
    settings: Optional[OutputConfig] = None,
    extractor: Extractor = extract,
) -> LanguagePlugin:
    """Build the plugin for one language configuration."""
    return LanguagePlugin(config=config, settings=settings or OutputConfig(), extractor=extractor)


def build_plugins(
    settings: Optional[OutputConfig] = None,
    extractor: Extractor = extract,
) -> Dict[str, LanguagePlugin]:
    """Build all web-standard plugins, keyed by tag in registration order."""
    return {
        config.tag: build_plugin(config, settings, extractor)
        for config in WEB_STANDARD_CONFIGS
    }


def register(capabilities: Any, settings: Optional[OutputConfig] = None) -> List[str]:
    """
    Callback-style registration entry point.

    Calls capabilities.provides_language(tag, plugin) once per language,
    synchronously, in the fixed order html, css, svg, js. A
    default_module capability is accepted and ignored.

    Args:
        capabilities: Object or mapping exposing provides_language
        settings: Output settings for the built plugins

    Returns:
        Registered tags, in order
    """
    provides_language = _capability(capabilities, "provides_language")
    if provides_language is None:
        raise TypeError("capabilities must provide 'provides_language'")

    tags = []
    for tag, plugin in build_plugins(settings).items():
        provides_language(tag, plugin)
        tags.append(tag)
    return tags


def _capability(capabilities: Any, name: str) -> Optional[Callable]:
    if isinstance(capabilities, Mapping):
        return capabilities.get(name)
    return getattr(capabilities, name, None)
