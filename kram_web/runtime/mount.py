"""
Mount — Bind a program to a fresh store and dispatch scenes by number.

Python counterpart of the mount() function embedded in module.js:

- A program factory receives Capabilities and returns the ordered scene
  callables, one per scene (index 0 is scene 1).
- mount() builds a new Store for every call, so two mounts of the same
  factory never share state.
- The returned MountedProgram is the dispatcher: program(n, context)
  runs scene n (1-based) and raises SceneOutOfRangeError for any other
  value.

Usage:
    def factory(caps):
        state = caps.connect_store()
        def scene_1(context):
            state.set("visits", state.get("visits", 0) + 1)
        return [scene_1]

    program = mount(factory, {"visits": 0})
    program(1, None)
    program.connect_store().get("visits")   # 1

Scene invocations are not synchronized; callers serialize them or keep
concurrent scenes on separate store paths.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

from ..config import DEFAULT_STORE_ROOT_KEY
from ..errors import SceneOutOfRangeError
from .store import Store, StoreNode


SceneFn = Callable[[Any], None]


@dataclass(frozen=True)
class Capabilities:
    """What a program factory may use. initialize_store is reserved."""
    connect_store: Callable[..., StoreNode]
    initialize_store: Optional[Callable[..., Any]] = None


ProgramFactory = Callable[[Capabilities], Sequence[SceneFn]]


class MountedProgram:
    """Scene dispatcher for one mounted program instance."""

    def __init__(self, scenes: Sequence[SceneFn], store: Store, mountpoint: Any = None):
        self._scenes: List[SceneFn] = list(scenes)
        self.store = store
        self.mountpoint = mountpoint

    @property
    def scene_count(self) -> int:
        return len(self._scenes)

    def connect_store(self, path: Optional[Sequence[str]] = None) -> StoreNode:
        return self.store.connect(path)

    def __call__(self, scene_number: int, context: Any = None) -> None:
        """
        Run one scene.

        Args:
            scene_number: 1-based scene number
            context: Execution context handed to the scene callable

        Raises:
            SceneOutOfRangeError: If scene_number is not in 1..scene_count
        """
        if (
            isinstance(scene_number, bool)
            or not isinstance(scene_number, int)
            or not 1 <= scene_number <= len(self._scenes)
        ):
            raise SceneOutOfRangeError(scene_number, len(self._scenes))
        self._scenes[scene_number - 1](context)


def mount(
    program: ProgramFactory,
    initial: Optional[Mapping[str, Any]] = None,
    mountpoint: Any = None,
    root_key: str = DEFAULT_STORE_ROOT_KEY,
) -> MountedProgram:
    """
    Mount a program against a fresh store seeded from initial.

    Args:
        program: Factory returning the ordered scene callables
        initial: Initial root state (shallow-copied)
        mountpoint: Host element or handle, kept for the caller
        root_key: Top-level store key

    Returns:
        MountedProgram dispatcher
    """
    store = Store(initial, root_key=root_key)
    scenes = program(Capabilities(connect_store=store.connect))
    return MountedProgram(scenes, store, mountpoint)
