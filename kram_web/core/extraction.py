"""
Extraction — Split a workbook into definitions and scene items per language

Reference implementation of the extraction collaborator. Collators only
rely on the shape of its result: two ordered tuples of items, each item
carrying its originating scene index. Fragments without a stored
classification are treated as evaluations.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .workbook import Classification, EVAL, Workbook


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedFragment:
    """
    One fragment as seen by a collator.

    Attributes:
        scene_index: 0-based index of the originating scene
        attrs: Fragment attributes (opaque to collators)
        code: Fragment text
        classification: Stored verdict (definition name/subtype for definitions)
    """
    scene_index: int
    attrs: Mapping[str, Any]
    code: str
    classification: Classification = field(default=EVAL)

    @property
    def scene_number(self) -> int:
        return self.scene_index + 1


@dataclass(frozen=True)
class Extraction:
    """Result of extracting one language from a workbook."""
    scenes: Tuple[ExtractedFragment, ...] = ()
    definitions: Tuple[ExtractedFragment, ...] = ()

    def __len__(self) -> int:
        return len(self.scenes) + len(self.definitions)


Extractor = Callable[[Workbook, str], Extraction]


def extract(workbook: Workbook, language: str) -> Extraction:
    """
    Collect every fragment of one language, split by stored mode.

    Args:
        workbook: Workbook to read
        language: Language tag (e.g., "js")

    Returns:
        Extraction with items in scene order, fragment order within a scene
    """
    scenes: List[ExtractedFragment] = []
    definitions: List[ExtractedFragment] = []
    unclassified = 0

    for scene in workbook.scenes:
        for fragment in scene.fragments_for(language):
            classification = fragment.classification
            if classification is None:
                unclassified += 1
                classification = EVAL
            item = ExtractedFragment(
                scene_index=scene.index,
                attrs=fragment.attrs,
                code=fragment.code,
                classification=classification,
            )
            if classification.is_definition:
                definitions.append(item)
            else:
                scenes.append(item)

    if unclassified:
        logger.debug("%d unclassified %s fragment(s) treated as eval", unclassified, language)

    return Extraction(scenes=tuple(scenes), definitions=tuple(definitions))


def group_by_scene(items: Tuple[ExtractedFragment, ...], separator: str = "\n") -> List[Tuple[int, str]]:
    """
    Merge scene items into one code block per scene.

    Ordered by explicit scene index, not by extraction order; fragments of
    the same scene keep their relative order.

    Returns:
        List of (scene_index, code) pairs
    """
    grouped: Dict[int, List[str]] = {}
    for item in items:
        grouped.setdefault(item.scene_index, []).append(item.code)
    return [(index, separator.join(grouped[index])) for index in sorted(grouped)]


def scene_index_range(workbook: Workbook, extraction: Optional[Extraction] = None) -> range:
    """
    Dense range of scene indices a dispatch table must cover.

    Covers every scene of the workbook, extended to any higher index an
    external extractor reports.
    """
    highest = workbook.scene_count - 1
    if extraction is not None and extraction.scenes:
        highest = max(highest, max(item.scene_index for item in extraction.scenes))
    return range(highest + 1)
