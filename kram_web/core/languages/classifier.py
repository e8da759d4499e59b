"""
Fragment classifier — Table-driven definition detection.

This is a heuristic, not a parser. Each language supplies an ordered
table of DefinitionPattern rows; the first row whose regex matches the
start of the fragment decides the verdict. Anything else, including
empty or non-text input, falls back to the language's default mode.
Multi-statement fragments are classified by their first statement only.
"""

import logging
from typing import Any

from ..workbook import Classification, Mode
from .config import LanguageConfig


logger = logging.getLogger(__name__)


def classify_fragment(code: Any, config: LanguageConfig) -> Classification:
    """
    Classify one fragment.

    Args:
        code: Raw fragment text
        config: Language configuration holding the pattern table

    Returns:
        Classification; never raises
    """
    if not isinstance(code, str):
        logger.debug("Non-text %s fragment (%s) classified as eval", config.tag, type(code).__name__)
        return Classification(mode=Mode.EVAL)

    for row in config.definition_patterns:
        match = row.pattern.match(code)
        if not match:
            continue

        subtype = row.subtype
        if subtype is None and row.subtype_group is not None:
            subtype = match.group(row.subtype_group)
            if config.lowercase_subtype:
                subtype = subtype.lower()
        name = match.group(row.name_group) if row.name_group is not None else None

        return Classification(mode=Mode.DEFINE, subtype=subtype, definition_name=name)

    return Classification(mode=config.default_mode)
