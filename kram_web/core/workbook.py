"""
Workbook — Immutable input model for collation

A workbook is an ordered sequence of scenes; each scene holds tagged
fragments in different content languages. Collators never mutate a
workbook: host steps such as classification return a new instance.

Document format (YAML or JSON):

    module: demo
    imports:
      - from: lodash
        as: _
    scenes:
      - fragments:
          - language: js
            code: "const answer = 42"
          - language: html
            code: "<p>Hello</p>"
            attrs: {id: greeting}
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from ..errors import ImportSpecError, WorkbookError


class Mode(Enum):
    """How a fragment is stored and collated."""
    DEFINE = "define"   # hoisted once into a shared artifact
    EVAL = "eval"       # stays scene-scoped


@dataclass(frozen=True)
class Classification:
    """
    Classifier verdict for one fragment.

    Attributes:
        mode: DEFINE or EVAL
        subtype: Definition kind (e.g., "template", "symbol", "function")
        definition_name: Declared identifier, when the language has one
    """
    mode: Mode = Mode.EVAL
    subtype: Optional[str] = None
    definition_name: Optional[str] = None

    @property
    def is_definition(self) -> bool:
        return self.mode is Mode.DEFINE

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"mode": self.mode.value}
        if self.subtype is not None:
            data["subtype"] = self.subtype
        if self.definition_name is not None:
            data["definition_name"] = self.definition_name
        return data


EVAL = Classification()


@dataclass(frozen=True)
class Fragment:
    """One block of content-language text inside a scene."""
    language: str
    code: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    classification: Optional[Classification] = None

    def __post_init__(self):
        # Freeze attrs so a shared workbook cannot be mutated through a fragment
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    def classified(self, classification: Classification) -> 'Fragment':
        return replace(self, classification=classification)


@dataclass(frozen=True)
class Scene:
    """One ordered unit of the workbook. `index` is 0-based."""
    index: int
    fragments: Tuple[Fragment, ...] = ()

    @property
    def number(self) -> int:
        """1-based display number."""
        return self.index + 1

    def fragments_for(self, language: str) -> List[Fragment]:
        return [f for f in self.fragments if f.language == language]


# =============================================================================
# Import Specifications
# =============================================================================

_IMPORT_KEYS = frozenset({"from", "as", "expose"})


@dataclass(frozen=True)
class ImportSpec:
    """
    One module import of the generated scripting module.

    Attributes:
        source: Module specifier ("from")
        alias: Default binding ("as")
        expose: "*" for a namespace import, or a tuple of named bindings
    """
    source: str
    alias: Optional[str] = None
    expose: Union[str, Tuple[str, ...], None] = None

    @property
    def is_namespace(self) -> bool:
        return self.expose == "*"

    @property
    def is_bare(self) -> bool:
        """Side-effect only import: nothing is bound."""
        return self.alias is None and self.expose is None

    @classmethod
    def parse(cls, spec: Union['ImportSpec', Mapping[str, Any]]) -> 'ImportSpec':
        """
        Validate and normalize an import specification.

        Args:
            spec: ImportSpec (returned as-is) or mapping with from/as/expose

        Returns:
            Normalized ImportSpec

        Raises:
            ImportSpecError: If the options cannot be expressed as one import
        """
        if isinstance(spec, ImportSpec):
            return spec
        if not isinstance(spec, Mapping):
            raise ImportSpecError(f"Import specification must be a mapping, got {type(spec).__name__}", spec)

        unknown = set(spec) - _IMPORT_KEYS
        if unknown:
            raise ImportSpecError(
                f"Unknown import option(s): {', '.join(sorted(map(str, unknown)))}. "
                f"Valid: {', '.join(sorted(_IMPORT_KEYS))}",
                spec,
            )

        source = spec.get("from")
        if not isinstance(source, str) or not source.strip():
            raise ImportSpecError("Import specification requires a non-empty 'from'", spec)
        if "'" in source or "\n" in source:
            raise ImportSpecError(f"Module specifier cannot be quoted: {source!r}", spec)

        alias = spec.get("as")
        if alias is not None and (not isinstance(alias, str) or not alias.strip()):
            raise ImportSpecError("'as' must be a non-empty name", spec)

        expose = spec.get("expose")
        if expose is None:
            pass
        elif isinstance(expose, str):
            if expose != "*":
                raise ImportSpecError(
                    f"'expose' must be \"*\" or a list of names, got {expose!r}", spec
                )
        elif isinstance(expose, (list, tuple)):
            if not expose:
                raise ImportSpecError("'expose' list cannot be empty", spec)
            if not all(isinstance(name, str) and name.strip() for name in expose):
                raise ImportSpecError("'expose' names must be non-empty strings", spec)
            expose = tuple(expose)
        else:
            raise ImportSpecError(
                f"'expose' must be \"*\" or a list of names, got {type(expose).__name__}", spec
            )

        return cls(source=source, alias=alias, expose=expose)


# =============================================================================
# Workbook
# =============================================================================

@dataclass(frozen=True)
class Workbook:
    """
    The full ordered document being compiled.

    Imports are kept as given (mappings or ImportSpec) and validated by the
    scripting collator, so a malformed import surfaces at collation time.
    """
    module_name: str = "main"
    scenes: Tuple[Scene, ...] = ()
    imports: Tuple[Union[ImportSpec, Mapping[str, Any]], ...] = ()

    @property
    def scene_count(self) -> int:
        return len(self.scenes)

    def languages(self) -> List[str]:
        """Languages used by any fragment, in first-seen order."""
        seen: Dict[str, None] = {}
        for scene in self.scenes:
            for fragment in scene.fragments:
                seen.setdefault(fragment.language, None)
        return list(seen)

    @classmethod
    def build(
        cls,
        scenes: List[List[Fragment]],
        module_name: str = "main",
        imports: Optional[List[Any]] = None,
    ) -> 'Workbook':
        """Build a workbook from per-scene fragment lists, numbering scenes in order."""
        return cls(
            module_name=module_name,
            scenes=tuple(Scene(index=i, fragments=tuple(frags)) for i, frags in enumerate(scenes)),
            imports=tuple(imports or ()),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Workbook':
        """
        Create from a parsed workbook document.

        Raises:
            WorkbookError: If required structure is missing or mistyped
        """
        if not isinstance(data, Mapping):
            raise WorkbookError("Workbook document must be a mapping")

        module_name = data.get("module", data.get("module_name", "main"))
        if not isinstance(module_name, str) or not module_name:
            raise WorkbookError("'module' must be a non-empty string")

        imports = data.get("imports") or []
        if not isinstance(imports, list):
            raise WorkbookError("'imports' must be a list")

        raw_scenes = data.get("scenes") or []
        if not isinstance(raw_scenes, list):
            raise WorkbookError("'scenes' must be a list")

        scenes = []
        for index, raw_scene in enumerate(raw_scenes):
            if isinstance(raw_scene, Mapping):
                raw_fragments = raw_scene.get("fragments") or []
            else:
                raw_fragments = raw_scene
            if not isinstance(raw_fragments, list):
                raise WorkbookError(f"Scene {index + 1}: 'fragments' must be a list",
                                    context={"scene": index + 1})
            scenes.append(Scene(
                index=index,
                fragments=tuple(_fragment_from_dict(raw, index) for raw in raw_fragments),
            ))

        return cls(module_name=module_name, scenes=tuple(scenes), imports=tuple(imports))


def _fragment_from_dict(raw: Any, scene_index: int) -> Fragment:
    if not isinstance(raw, Mapping):
        raise WorkbookError(f"Scene {scene_index + 1}: fragment must be a mapping",
                            context={"scene": scene_index + 1})
    language = raw.get("language")
    code = raw.get("code", "")
    if not isinstance(language, str) or not language:
        raise WorkbookError(f"Scene {scene_index + 1}: fragment requires a 'language'",
                            context={"scene": scene_index + 1})
    if not isinstance(code, str):
        raise WorkbookError(f"Scene {scene_index + 1}: fragment 'code' must be text",
                            context={"scene": scene_index + 1, "language": language})
    attrs = raw.get("attrs") or {}
    if not isinstance(attrs, Mapping):
        raise WorkbookError(f"Scene {scene_index + 1}: fragment 'attrs' must be a mapping",
                            context={"scene": scene_index + 1, "language": language})
    return Fragment(language=language, code=code, attrs=attrs)


def load_workbook(path: Path) -> Workbook:
    """
    Load a workbook document from a YAML or JSON file.

    JSON is a subset of YAML, so one loader handles both.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise WorkbookError(f"Malformed workbook {path}: {e}", context={"path": str(path)}) from e
    return Workbook.from_dict(data or {})
