"""
SVG language configuration for classification and collation.

Defines SVG_CONFIG for vector-graphics fragments (tag "svg").

Definitions:
- <defs> and <symbol> fragments, hoisted into a hidden defs.svg

Evaluations:
- One standalone scene-<n>.svg per scene, each with its own root element

defs.svg is always emitted, even when empty, so scene documents can
reference it unconditionally.
"""

import re
from typing import List, TYPE_CHECKING

from ..artifacts import Artifact, DEFS_SVG, scene_svg_name
from ..extraction import group_by_scene
from ..workbook import Mode
from .config import DefinitionPattern, LanguageConfig

if TYPE_CHECKING:
    from ...config import OutputConfig
    from ..extraction import Extraction
    from ..workbook import Workbook


SVG_DEFINITION_TAGS = ('defs', 'symbol')

SVG_PATTERNS = [
    DefinitionPattern.compile(
        r'^\s*<(' + '|'.join(SVG_DEFINITION_TAGS) + r')(?=[\s/>])[^>]*>',
        re.IGNORECASE,
        subtype_group=1,
    ),
]


def svg_root(content: str, namespace: str, hidden: bool = False) -> str:
    style = ' style="display:none;"' if hidden else ''
    return f'<svg xmlns="{namespace}"{style}>{content}</svg>'


def collate_svg(
    workbook: 'Workbook',
    extraction: 'Extraction',
    settings: 'OutputConfig',
) -> List[Artifact]:
    """Build defs.svg plus one scene-<n>.svg per scene, in scene order."""
    definitions = "\n".join(item.code for item in extraction.definitions)
    artifacts = [Artifact(
        name=DEFS_SVG,
        language="svg",
        mode=Mode.DEFINE,
        code=svg_root(f"\n<defs>{definitions}</defs>", settings.svg_namespace, hidden=True),
    )]

    for index, code in group_by_scene(extraction.scenes):
        artifacts.append(Artifact(
            name=scene_svg_name(index + 1),
            language="svg",
            mode=Mode.EVAL,
            code=svg_root(code, settings.svg_namespace),
            scene=index + 1,
        ))

    return artifacts


SVG_CONFIG = LanguageConfig(
    tag="svg",
    name="Scalable Vector Graphics",
    collator=collate_svg,
    definition_patterns=SVG_PATTERNS,
    lowercase_subtype=True,
)
