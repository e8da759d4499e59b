"""
HTML language configuration for classification and collation.

Defines HTML_CONFIG for markup fragments (tag "html").

Definitions:
- <template> fragments: reusable markup, hoisted into templates.html

Evaluations:
- Everything else: wrapped per scene in a scene container element
  (<kram-scene scene="N">) and collected into scenes.html

Either artifact is omitted when it would have no content.
"""

import re
from typing import List, TYPE_CHECKING

from ..artifacts import Artifact, TEMPLATES_HTML, SCENES_HTML
from ..extraction import group_by_scene
from ..workbook import Mode
from .config import DefinitionPattern, LanguageConfig

if TYPE_CHECKING:
    from ...config import OutputConfig
    from ..extraction import Extraction
    from ..workbook import Workbook


# =============================================================================
# Definition Patterns
# =============================================================================

# Inert definition containers; only the opening tag is inspected
HTML_DEFINITION_TAGS = ('template',)

HTML_PATTERNS = [
    DefinitionPattern.compile(
        r'^\s*<(' + '|'.join(HTML_DEFINITION_TAGS) + r')(?=[\s/>])[^>]*>',
        re.IGNORECASE,
        subtype_group=1,
    ),
]


# =============================================================================
# Collator
# =============================================================================

def wrap_scene(code: str, scene_number: int, element: str) -> str:
    """Wrap one scene's markup in its scene container."""
    return f'<{element} scene="{scene_number}">{code}</{element}>'


def collate_html(
    workbook: 'Workbook',
    extraction: 'Extraction',
    settings: 'OutputConfig',
) -> List[Artifact]:
    """
    Build templates.html and scenes.html.

    Templates keep extraction order; scenes are ordered by scene index.
    """
    artifacts = []

    if extraction.definitions:
        artifacts.append(Artifact(
            name=TEMPLATES_HTML,
            language="html",
            mode=Mode.DEFINE,
            code="\n".join(item.code for item in extraction.definitions),
        ))

    if extraction.scenes:
        scenes = group_by_scene(extraction.scenes)
        artifacts.append(Artifact(
            name=SCENES_HTML,
            language="html",
            mode=Mode.EVAL,
            code="\n".join(
                wrap_scene(code, index + 1, settings.scene_element)
                for index, code in scenes
            ),
        ))

    return artifacts


# =============================================================================
# Configuration
# =============================================================================

HTML_CONFIG = LanguageConfig(
    tag="html",
    name="Hypertext Markup Language (HTML5)",
    collator=collate_html,
    definition_patterns=HTML_PATTERNS,
    lowercase_subtype=True,
)
