"""
CSS language configuration for classification and collation.

Defines CSS_CONFIG for styling fragments (tag "css").

Styling has no scene-local execution: every fragment is a definition
and is hoisted into a single styles.css, each block preceded by a
comment naming the scene it came from.
"""

import logging
from typing import List, TYPE_CHECKING

from ..artifacts import Artifact, STYLES_CSS
from ..workbook import Mode
from .config import LanguageConfig

if TYPE_CHECKING:
    from ...config import OutputConfig
    from ..extraction import Extraction, ExtractedFragment
    from ..workbook import Workbook


logger = logging.getLogger(__name__)


def provenance_comment(scene_number: int) -> str:
    return f"/* Kram: CSS in Scene {scene_number} */"


def build_definition(item: 'ExtractedFragment') -> str:
    return f"{provenance_comment(item.scene_number)}\n{item.code}"


def collate_css(
    workbook: 'Workbook',
    extraction: 'Extraction',
    settings: 'OutputConfig',
) -> List[Artifact]:
    """Build styles.css (always present, empty when there is no CSS)."""
    if extraction.scenes:
        # Only reachable with an external extractor that ignores stored modes
        logger.debug("Ignoring %d css scene item(s); styling is always hoisted", len(extraction.scenes))

    return [Artifact(
        name=STYLES_CSS,
        language="css",
        mode=Mode.DEFINE,
        code="\n".join(build_definition(item) for item in extraction.definitions),
    )]


CSS_CONFIG = LanguageConfig(
    tag="css",
    name="Cascading Style Sheets (CSS3)",
    collator=collate_css,
    definition_patterns=[],
    default_mode=Mode.DEFINE,
)
