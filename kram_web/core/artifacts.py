"""
Artifacts — Named text outputs produced by collators

Artifact names are a contract with downstream consumers and must stay
bit-exact:

    html  -> templates.html, scenes.html
    css   -> styles.css
    svg   -> defs.svg, scene-<n>.svg
    js    -> module.js
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import orjson
import xxhash

from .workbook import Mode


TEMPLATES_HTML = "templates.html"
SCENES_HTML = "scenes.html"
STYLES_CSS = "styles.css"
DEFS_SVG = "defs.svg"
MODULE_JS = "module.js"


def scene_svg_name(scene_number: int) -> str:
    """Artifact name for one graphics scene (1-based)."""
    return f"scene-{scene_number}.svg"


@dataclass(frozen=True)
class Artifact:
    """
    One collated output document.

    Attributes:
        name: File name, e.g. "styles.css"
        language: Language tag that produced it
        mode: DEFINE for hoisted content, EVAL for scene-executable content
        code: Artifact text
        scene: 1-based scene number for per-scene artifacts
        module_name: Workbook module name (scripting module only)
    """
    name: str
    language: str
    mode: Mode
    code: str
    scene: Optional[int] = None
    module_name: Optional[str] = None

    @property
    def digest(self) -> str:
        """Stable fingerprint of the artifact text."""
        return xxhash.xxh64(self.code.encode("utf-8", "surrogatepass")).hexdigest()

    def to_dict(self, include_code: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "language": self.language,
            "mode": self.mode.value,
            "digest": self.digest,
        }
        if self.scene is not None:
            data["scene"] = self.scene
        if self.module_name is not None:
            data["module_name"] = self.module_name
        if include_code:
            data["code"] = self.code
        return data


def manifest_json(artifacts: Iterable[Artifact], include_code: bool = False, pretty: bool = True) -> bytes:
    """Serialize artifacts as a JSON manifest."""
    option = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps([a.to_dict(include_code=include_code) for a in artifacts], option=option)
