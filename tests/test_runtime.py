"""
Tests for the store and scene dispatch runtime.

Tests validate:
- Path lookup raises on missing or non-mapping segments
- Fresh, independent store per mount
- Bounds-checked 1-based dispatch
"""

import pytest

from kram_web.errors import SceneOutOfRangeError, StorePathError
from kram_web.runtime import Capabilities, MountedProgram, Store, StoreNode, mount


# =============================================================================
# Store
# =============================================================================

class TestStore:
    """Path-addressable state tree."""

    def test_default_path_is_root(self):
        node = Store({"x": 1}).connect()
        assert node.path == ["root"]
        assert node.get("x") == 1

    def test_explicit_root_path(self):
        assert Store({"x": 1}).connect(["root"]).get("x") == 1

    def test_nested_path(self):
        store = Store({"user": {"name": "Ada"}})
        assert store.connect(["root", "user"]).get("name") == "Ada"

    def test_empty_path_is_whole_tree(self):
        """The top of the tree holds only the root key."""
        assert Store({"x": 1}).connect([]).keys() == ["root"]

    def test_missing_segment_raises(self):
        store = Store({"user": {}})
        with pytest.raises(StorePathError) as exc_info:
            store.connect(["root", "settings", "theme"])
        assert exc_info.value.segment == "settings"
        assert exc_info.value.path == ["root", "settings", "theme"]
        assert "Store path not found: root/settings/theme" in str(exc_info.value)

    def test_non_mapping_segment_raises(self):
        """Walking through a scalar is an error, not None."""
        store = Store({"count": 3})
        with pytest.raises(StorePathError):
            store.connect(["root", "count"])
        with pytest.raises(StorePathError):
            store.connect(["root", "count", "deeper"])

    def test_store_path_error_is_key_error(self):
        with pytest.raises(KeyError):
            Store().connect(["elsewhere"])

    def test_custom_root_key(self):
        store = Store({"x": 1}, root_key="state")
        assert store.connect().path == ["state"]
        with pytest.raises(StorePathError):
            store.connect(["root"])

    def test_initial_is_shallow_copied(self):
        """Top-level writes do not reach the caller; nested values are shared."""
        initial = {"count": 0, "items": []}
        store = Store(initial)
        node = store.connect()
        node.set("count", 5)
        node.get("items").append("a")

        assert initial["count"] == 0
        assert initial["items"] == ["a"]
        assert store.snapshot() == {"count": 5, "items": ["a"]}

    def test_snapshot_is_a_copy(self):
        store = Store({"x": 1})
        snapshot = store.snapshot()
        snapshot["x"] = 2
        assert store.connect().get("x") == 1


class TestStoreNode:
    """Node handles read and write the live mapping."""

    def test_set_returns_value(self):
        node = Store().connect()
        assert node.set("answer", 42) == 42
        assert "answer" in node

    def test_handles_share_state(self):
        store = Store()
        store.connect().set("user", {})
        store.connect(["root", "user"]).set("name", "Ada")
        assert store.connect().get("user") == {"name": "Ada"}

    def test_get_default(self):
        assert Store().connect().get("missing", "fallback") == "fallback"

    def test_keys_and_root(self):
        node = Store({"a": 1, "b": 2}).connect()
        assert node.keys() == ["a", "b"]
        assert node.root == {"a": 1, "b": 2}
        assert "StoreNode(path=['root']" in repr(node)


# =============================================================================
# Mount
# =============================================================================

def counter_program(caps: Capabilities):
    """Two-scene program sharing state through the store."""
    state = caps.connect_store()

    def scene_1(context):
        state.set("visits", state.get("visits", 0) + 1)

    def scene_2(context):
        context.append(state.get("visits"))

    return [scene_1, scene_2]


class TestMount:
    """mount() and the returned dispatcher."""

    def test_initial_state_visible(self):
        program = mount(counter_program, {"x": 1})
        assert program.connect_store(["root"]).get("x") == 1

    def test_scenes_share_state(self):
        program = mount(counter_program)
        seen = []
        program(1)
        program(1)
        program(2, seen)
        assert seen == [2]

    def test_each_mount_has_its_own_store(self):
        """Two mounts of one program never share state."""
        first = mount(counter_program, {"visits": 0})
        second = mount(counter_program, {"visits": 0})
        first(1)
        assert first.connect_store().get("visits") == 1
        assert second.connect_store().get("visits") == 0

    def test_initial_mapping_untouched(self):
        initial = {"visits": 10}
        mount(counter_program, initial)(1)
        assert initial == {"visits": 10}

    def test_capabilities(self):
        received = []

        def program(caps):
            received.append(caps)
            return []

        mount(program)
        assert isinstance(received[0], Capabilities)
        assert isinstance(received[0].connect_store(), StoreNode)
        assert received[0].initialize_store is None

    def test_mountpoint_and_root_key(self):
        program = mount(counter_program, mountpoint="#app", root_key="state")
        assert program.mountpoint == "#app"
        assert program.connect_store().path == ["state"]

    def test_context_passed_to_scene(self):
        contexts = []
        program = mount(lambda caps: [contexts.append])
        program(1, "container")
        assert contexts == ["container"]

    @pytest.mark.parametrize("scene_number", [0, 3, -1, 1.0, "1", None, True])
    def test_out_of_range(self, scene_number):
        """Anything but an integer in 1..scene_count is rejected."""
        program = mount(counter_program)
        with pytest.raises(SceneOutOfRangeError) as exc_info:
            program(scene_number, [])
        assert exc_info.value.scene_count == 2

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            mount(counter_program)(5)

    def test_empty_program(self):
        program = mount(lambda caps: [])
        assert program.scene_count == 0
        with pytest.raises(SceneOutOfRangeError):
            program(1)

    def test_mounted_program_direct(self):
        """MountedProgram can wrap prebuilt scene callables."""
        calls = []
        program = MountedProgram([lambda ctx: calls.append(ctx)], Store())
        program(1, "ctx")
        assert calls == ["ctx"]
        assert program.scene_count == 1
