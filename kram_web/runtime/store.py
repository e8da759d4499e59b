"""
Store — Path-addressable state shared by the scenes of one mounted program.

The store is a tree of plain mappings under a single root key:

    {"root": {"count": 1, "user": {"name": "Ada"}}}

connect() walks a path from the top of the tree and returns a StoreNode
bound to the mapping it reaches. Walking is an explicit recursive
lookup: a missing segment, or a segment that lands on a non-mapping
value, raises StorePathError instead of yielding None.

Usage:
    store = Store({"count": 1})
    node = store.connect()            # ["root"]
    node.get("count")                 # 1
    node.set("user", {"name": "Ada"})
    store.connect(["root", "user"]).get("name")   # "Ada"
"""

from collections.abc import MutableMapping
from typing import Any, List, Mapping, Optional, Sequence

from ..config import DEFAULT_STORE_ROOT_KEY
from ..errors import StorePathError


class StoreNode:
    """
    Handle on one mapping inside a store.

    Reads and writes go straight to the underlying mapping; nothing is
    copied, so every handle on the same path sees the same state.
    """

    def __init__(self, path: Sequence[str], mapping: MutableMapping):
        self.path = list(path)
        self._mapping = mapping

    @property
    def root(self) -> MutableMapping:
        """The mapping this node is bound to."""
        return self._mapping

    def get(self, key: str, default: Any = None) -> Any:
        return self._mapping.get(key, default)

    def set(self, key: str, value: Any) -> Any:
        self._mapping[key] = value
        return value

    def keys(self) -> List[str]:
        return list(self._mapping.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._mapping

    def __repr__(self) -> str:
        return f"StoreNode(path={self.path!r}, keys={self.keys()!r})"


class Store:
    """
    State tree for one mounted program instance.

    Created from a shallow copy of the initial snapshot: top-level
    rebinding does not leak back to the caller's mapping, nested values
    are shared.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None, root_key: str = DEFAULT_STORE_ROOT_KEY):
        self.root_key = root_key
        self._tree = {root_key: dict(initial or {})}

    def connect(self, path: Optional[Sequence[str]] = None) -> StoreNode:
        """
        Bind a node handle to the mapping at path.

        Args:
            path: Keys from the top of the tree (default: [root_key])

        Raises:
            StorePathError: If a segment is absent or not a mapping
        """
        path = [self.root_key] if path is None else list(path)
        return StoreNode(path, _walk(self._tree, path, path))

    def snapshot(self) -> dict:
        """Shallow copy of the root mapping."""
        return dict(self._tree[self.root_key])


def _walk(node: Any, remaining: Sequence[str], full_path: Sequence[str]) -> MutableMapping:
    if not remaining:
        if not isinstance(node, MutableMapping):
            raise StorePathError(full_path, full_path[-1] if full_path else None)
        return node
    segment = remaining[0]
    if not isinstance(node, MutableMapping) or segment not in node:
        raise StorePathError(full_path, segment)
    return _walk(node[segment], remaining[1:], full_path)
