"""
Errors — Exception hierarchy for kram-web

Every error carries a context mapping so callers (CLI, host applications)
can report structured details instead of parsing messages.

Hierarchy:
    KramError
    ├── ConfigError (ValueError)
    │   ├── ImportSpecError
    │   └── WorkbookError
    ├── LanguageRegistrationError (ValueError)
    ├── UnknownLanguageError (KeyError)
    ├── StorePathError (KeyError)
    └── SceneOutOfRangeError (IndexError)
"""

from typing import Any, Dict, Mapping, Optional, Sequence


class KramError(Exception):
    """Base exception for kram-web."""

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context) if context is not None else {}

    def __str__(self) -> str:
        return self.message

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": self.message,
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(KramError, ValueError):
    """Raised when settings or external input data are invalid."""


class ImportSpecError(ConfigError):
    """
    Raised when an import specification cannot be rendered.

    Surfaced at collation time; the scripting collator never skips a
    malformed import.
    """

    def __init__(self, message: str, spec: Any = None):
        super().__init__(message, context={"spec": spec})
        self.spec = spec


class WorkbookError(ConfigError):
    """Raised when a workbook document is malformed."""


class LanguageRegistrationError(KramError, ValueError):
    """Raised when a language tag is registered twice."""

    def __init__(self, tag: str):
        super().__init__(
            f"Language '{tag}' is already registered",
            context={"tag": tag},
        )
        self.tag = tag


class UnknownLanguageError(KramError, KeyError):
    """Raised when no plugin is registered for a language tag."""

    def __init__(self, tag: str, known: Sequence[str] = (), suggestion: Optional[str] = None):
        message = f"Unknown language '{tag}'"
        if suggestion:
            message += f". Did you mean '{suggestion}'?"
        elif known:
            message += f". Known: {', '.join(known)}"
        super().__init__(
            message,
            context={"tag": tag, "known": list(known), "suggestion": suggestion},
        )
        self.tag = tag
        self.suggestion = suggestion


class StorePathError(KramError, KeyError):
    """Raised when a store path walks through a missing or non-mapping node."""

    def __init__(self, path: Sequence[str], segment: Any):
        super().__init__(
            f"Store path not found: {'/'.join(str(p) for p in path)} (at '{segment}')",
            context={"path": list(path), "segment": segment},
        )
        self.path = list(path)
        self.segment = segment


class SceneOutOfRangeError(KramError, IndexError):
    """Raised when a mounted program is dispatched to a scene it does not have."""

    def __init__(self, scene_number: Any, scene_count: int):
        super().__init__(
            f"scene out of range: {scene_number} (program has {scene_count} scenes)",
            context={"scene": scene_number, "scene_count": scene_count},
        )
        self.scene_number = scene_number
        self.scene_count = scene_count
