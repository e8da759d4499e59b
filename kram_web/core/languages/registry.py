"""
Language Registry — Routes fragments and workbooks to language plugins.

Central registry mapping language tags to LanguagePlugin instances.
Hosts hold one registry per build and never register a tag twice.

Usage:
    registry = LanguageRegistry.web_standard()

    verdict = registry.classify("html", "<template id='card'>...")
    workbook = registry.classify_workbook(workbook)
    outputs = registry.collate_all(workbook)
    # {"html": [...], "css": [...], "svg": [...], "js": [...]}
"""

from typing import Any, Dict, List, Optional

from rapidfuzz import process

from ...config import OutputConfig
from ...errors import LanguageRegistrationError, UnknownLanguageError
from ..artifacts import Artifact
from ..workbook import Classification, Scene, Workbook
from .plugin import LanguagePlugin, build_plugins


# Minimum similarity (0-100) for a "did you mean" suggestion
SUGGESTION_CUTOFF = 60


class LanguageRegistry:
    """
    Registry of language plugins, in registration order.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._plugins: Dict[str, LanguagePlugin] = {}  # tag -> plugin

    @classmethod
    def web_standard(cls, settings: Optional[OutputConfig] = None) -> 'LanguageRegistry':
        """Registry holding html, css, svg and js."""
        registry = cls()
        for plugin in build_plugins(settings).values():
            registry.register(plugin)
        return registry

    def register(self, plugin: LanguagePlugin) -> None:
        """
        Register a language plugin.

        Raises:
            LanguageRegistrationError: If the tag is already registered
        """
        if plugin.tag in self._plugins:
            raise LanguageRegistrationError(plugin.tag)
        self._plugins[plugin.tag] = plugin

    def provides_language(self, tag: str, plugin: LanguagePlugin) -> None:
        """Capability callback used by plugin.register()."""
        if tag != plugin.tag:
            raise ValueError(f"Plugin for '{plugin.tag}' offered under tag '{tag}'")
        self.register(plugin)

    def unregister(self, tag: str) -> bool:
        """
        Unregister a plugin by tag.

        Returns:
            True if unregistered, False if not found
        """
        return self._plugins.pop(tag, None) is not None

    def get(self, tag: str) -> LanguagePlugin:
        """
        Get the plugin for a tag.

        Raises:
            UnknownLanguageError: With the closest known tag as suggestion
        """
        plugin = self._plugins.get(tag)
        if plugin is None:
            raise UnknownLanguageError(tag, self.supported_languages(), self.suggest(tag))
        return plugin

    def suggest(self, tag: Any) -> Optional[str]:
        """Closest registered tag, or None when nothing is similar enough."""
        if not isinstance(tag, str) or not self._plugins:
            return None
        match = process.extractOne(tag.lower(), list(self._plugins), score_cutoff=SUGGESTION_CUTOFF)
        return match[0] if match else None

    def classify(self, tag: str, code: Any) -> Classification:
        return self.get(tag).classify(code)

    def collate(self, tag: str, workbook: Workbook) -> List[Artifact]:
        return self.get(tag).collate(workbook)

    def collate_all(self, workbook: Workbook) -> Dict[str, List[Artifact]]:
        """Collate every registered language, in registration order."""
        return {tag: plugin.collate(workbook) for tag, plugin in self._plugins.items()}

    def classify_workbook(self, workbook: Workbook, overwrite: bool = False) -> Workbook:
        """
        Store a classification on every fragment of a registered language.

        Host-side step before collation. Fragments that already carry a
        classification keep it unless overwrite is set; fragments of
        unregistered languages are left untouched.

        Returns:
            New Workbook (the input is not modified)
        """
        scenes = []
        for scene in workbook.scenes:
            fragments = []
            for fragment in scene.fragments:
                plugin = self._plugins.get(fragment.language)
                if plugin is not None and (overwrite or fragment.classification is None):
                    fragment = fragment.classified(plugin.classify(fragment.code))
                fragments.append(fragment)
            scenes.append(Scene(index=scene.index, fragments=tuple(fragments)))
        return Workbook(module_name=workbook.module_name, scenes=tuple(scenes), imports=workbook.imports)

    def supported_languages(self) -> List[str]:
        """Registered tags, in registration order."""
        return list(self._plugins)

    def __len__(self) -> int:
        """Return number of registered plugins."""
        return len(self._plugins)

    def __contains__(self, tag: str) -> bool:
        """Check if a tag is registered."""
        return tag in self._plugins
