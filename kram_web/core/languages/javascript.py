"""
JavaScript language configuration for classification and collation.

Defines JAVASCRIPT_CONFIG for scripting fragments (tag "js").

Definitions (first statement only):
- function: function declarations
- constant: const declarations
- variable: let / var declarations

Collation produces a single ES module, module.js:

    // module <name> (ES6)
    <imports>
    console.log('Loading module "<name>"')
    export function Program ({connectStore, initializeStore}) {
      <definitions, hoisted in extraction order>
      return ({ "0": function () { <scene 1> }, ... })
    }
    export function mount (mountpoint, initial) { <store runtime> }

Program returns a dispatch table with one entry per scene of the
workbook, so later scenes see earlier definitions through ordinary
closure. mount() builds a fresh store per call and returns a
bounds-checked dispatcher taking 1-based scene numbers. The dispatcher
also carries connectStore, so hosts can read the state it runs against.
"""

import json
import logging
from string import Template
from typing import List, TYPE_CHECKING

from ..artifacts import Artifact, MODULE_JS
from ..extraction import group_by_scene, scene_index_range
from ..workbook import Mode
from .config import DefinitionPattern, LanguageConfig
from .imports import render_imports

if TYPE_CHECKING:
    from ...config import OutputConfig
    from ..extraction import Extraction
    from ..workbook import Workbook


logger = logging.getLogger(__name__)


# =============================================================================
# Definition Patterns
# =============================================================================

# keyword -> definition subtype; let and var share one category
KEYWORD_SUBTYPES = (
    ('function', 'function'),
    ('const', 'constant'),
    ('let', 'variable'),
    ('var', 'variable'),
)

JAVASCRIPT_PATTERNS = [
    DefinitionPattern.compile(
        r'^\s*' + keyword + r'\s+(\w+)',
        subtype=subtype,
        name_group=1,
    )
    for keyword, subtype in KEYWORD_SUBTYPES
]


# =============================================================================
# Store Runtime
# =============================================================================

MOUNT_TEMPLATE = Template("""\
export function mount (mountpoint, initial) {
  const Store = {
    $root_key: Object.assign({}, initial),
  };
  const connectStore = (path = [$root_key]) => {
    let root = Store;
    path.forEach((key) => {
      if (root === null || typeof root !== "object" || !Object.prototype.hasOwnProperty.call(root, key)) {
        throw new Error("Store path not found: " + path.join("/"));
      }
      root = root[key];
    });
    return ({
      root,
      get: (key) => root[key],
      set: (key, value) => root[key] = value,
      keys: () => Object.keys(root),
    });
  };
  const program = Program({connectStore});
  const sceneCount = $scene_count;
  const dispatch = (n, container) => {
    if (!Number.isInteger(n) || n < 1 || n > sceneCount) {
      throw new RangeError("scene out of range: " + n);
    }
    program[n - 1].call(container);
  };
  dispatch.connectStore = connectStore;
  return dispatch;
}""")


def _single_quoted(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def _comment_safe(text: str) -> str:
    return " ".join(text.split())


# =============================================================================
# Module Assembler
# =============================================================================

def assemble_module(
    workbook: 'Workbook',
    extraction: 'Extraction',
    settings: 'OutputConfig',
) -> str:
    """
    Build the generated module text.

    Raises:
        ImportSpecError: If any workbook import is malformed
    """
    module_name = workbook.module_name
    out: List[str] = []
    emit = out.append

    emit(f"// module {_comment_safe(module_name)} (ES6)")
    for line in render_imports(workbook.imports):
        emit(line)
    if settings.announce_load:
        announcement = 'Loading module "' + module_name + '"'
        emit(f"console.log({_single_quoted(announcement)})")

    emit("export function Program ({connectStore, initializeStore}) {")
    for item in extraction.definitions:
        emit(f"// JS Definition from scene {item.scene_number}")
        emit(item.code)

    scene_code = dict(group_by_scene(extraction.scenes))
    entries = []
    for index in scene_index_range(workbook, extraction):
        entries.append(
            f"// JS scene {index + 1}\n"
            f"{json.dumps(str(index))}: function () {{ {scene_code.get(index, '')} }}"
        )
    emit("  return ({")
    if entries:
        emit(",\n".join(entries))
    emit("  })")
    emit("}")

    emit(MOUNT_TEMPLATE.substitute(
        root_key=json.dumps(settings.store_root_key),
        scene_count=len(entries),
    ))

    return "\n".join(out) + "\n"


def collate_javascript(
    workbook: 'Workbook',
    extraction: 'Extraction',
    settings: 'OutputConfig',
) -> List[Artifact]:
    """Build module.js (always exactly one artifact)."""
    code = assemble_module(workbook, extraction, settings)
    logger.debug(
        "Assembled module %s: %d definition(s), %d scene item(s)",
        workbook.module_name, len(extraction.definitions), len(extraction.scenes),
    )
    return [Artifact(
        name=MODULE_JS,
        language="js",
        mode=Mode.EVAL,
        code=code,
        module_name=workbook.module_name,
    )]


# =============================================================================
# Configuration
# =============================================================================

JAVASCRIPT_CONFIG = LanguageConfig(
    tag="js",
    name="Javascript (ES6)",
    collator=collate_javascript,
    definition_patterns=JAVASCRIPT_PATTERNS,
)
