"""
Language configuration data structures.

Defines LanguageConfig and DefinitionPattern: the per-language rules
the classifier and collators are driven by.

Design principle: New languages are added via config, not code changes.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Pattern, TYPE_CHECKING

from ..workbook import Mode

if TYPE_CHECKING:
    from ...config import OutputConfig
    from ..artifacts import Artifact
    from ..extraction import Extraction
    from ..workbook import Workbook


@dataclass
class DefinitionPattern:
    """
    One row of a classifier table.

    The pattern is matched at the start of the fragment (re.match), so
    only the leading statement or opening tag is ever inspected.

    Attributes:
        pattern: Compiled regex anchored at fragment start
        subtype: Fixed definition subtype; None takes it from subtype_group
        subtype_group: Regex group holding the subtype (e.g., the tag name)
        name_group: Regex group holding the declared identifier, if any
    """
    pattern: Pattern[str]
    subtype: Optional[str] = None
    subtype_group: Optional[int] = None
    name_group: Optional[int] = None

    @classmethod
    def compile(cls, regex: str, flags: int = 0, **kwargs) -> 'DefinitionPattern':
        return cls(pattern=re.compile(regex, flags), **kwargs)


Collator = Callable[['Workbook', 'Extraction', 'OutputConfig'], List['Artifact']]


@dataclass
class LanguageConfig:
    """
    Configuration for classifying and collating one content language.

    Attributes:
        tag: Language tag used by fragments (e.g., "html")
        name: Human-readable name (e.g., "Hypertext Markup Language (HTML5)")
        definition_patterns: Ordered classifier table; first match wins
        default_mode: Mode when no pattern matches
        collator: Function building artifacts from an extraction
        lowercase_subtype: Normalize captured subtypes (tag names)
    """
    tag: str
    name: str
    collator: Collator
    definition_patterns: List[DefinitionPattern] = field(default_factory=list)
    default_mode: Mode = Mode.EVAL
    lowercase_subtype: bool = False

    @property
    def always_defines(self) -> bool:
        return self.default_mode is Mode.DEFINE and not self.definition_patterns
