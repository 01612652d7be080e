"""
Tests for folding action events into an action tree.

Critical: done nodes are never touched, unchanged trees come back by
identity, and only the last child of a pending node may be pending.
"""

import logging

from actionlog.core.events import ActionEvent
from actionlog.core.nodes import ActionNode
from actionlog.core.tree import active_node, active_path, apply_event, is_current, merge_result


def call(name, payload=None):
    return ActionEvent(run_id="r1", action_path=name, payload=payload, is_completion=False)


def done(name, result=None):
    return ActionEvent(run_id="r1", action_path=name, is_completion=True, result=result)


def pending(name, state=None):
    return ActionNode(name=name, previous_state=state)


def assert_single_active_path(node):
    """Only the last child of a pending node may be pending."""
    if node.done:
        for child in node.children:
            assert child.done
            assert_single_active_path(child)
        return
    for child in node.children[:-1]:
        assert child.done
    for child in node.children:
        assert_single_active_path(child)


def test_merge_result_targets_path_prefix():
    """Result of "a.b.c" merges into state["a"]["b"], siblings preserved."""
    untouched = {"deep": [1, 2]}
    state = {"a": {"b": {"x": 0, "y": 2, "z": untouched}, "k": 1}, "other": {"o": 1}}

    new = merge_result(state, done("a.b.c", {"x": 1}))

    assert new["a"]["b"]["x"] == 1
    assert new["a"]["b"]["y"] == 2
    assert new["a"]["b"]["z"] is untouched
    assert new["a"]["k"] == 1
    assert new["other"] is state["other"]
    assert state["a"]["b"]["x"] == 0


def test_merge_result_top_level_action_merges_root():
    state = {"count": 0, "name": "n"}

    assert merge_result(state, done("increment", {"count": 1})) == {"count": 1, "name": "n"}


def test_merge_result_without_result_returns_state():
    state = {"count": 0}

    assert merge_result(state, done("increment")) is state
    assert merge_result(state, done("increment", {})) is state
    assert merge_result(state, done("increment", 5)) is state


def test_merge_result_custom_delimiter():
    state = {"a": {"x": 0}}

    new = merge_result(state, done("a/set", {"x": 2}), delimiter="/")

    assert new == {"a": {"x": 2}}


def test_call_appends_pending_child():
    root = pending("outer", {"n": 0})

    new = apply_event(root, call("outer.inner", {"arg": 1}))

    assert new is not root
    assert len(new.children) == 1
    child = new.children[0]
    assert child.name == "outer.inner"
    assert child.done is False
    assert child.payload == {"arg": 1}
    assert child.previous_state is root.previous_state
    assert root.children == ()


def test_completion_marks_active_node_done():
    root = pending("increment", {"count": 0})

    new = apply_event(root, done("increment", {"count": 1}))

    assert new.done is True
    assert new.result == {"count": 1}
    assert new.next_state == {"count": 1}
    assert root.done is False


def test_done_node_returned_unchanged():
    node = ActionNode(name="x", done=True, next_state={})

    assert apply_event(node, call("y")) is node
    assert apply_event(node, done("x")) is node


def test_inconsistent_completion_is_dropped(caplog):
    """Completion naming a non-active action leaves the tree as is."""
    root = apply_event(pending("outer"), call("outer.inner"))

    with caplog.at_level(logging.WARNING):
        new = apply_event(root, done("outer"))

    assert new is root
    assert "inconsistent" in caplog.text


def test_recursion_rebuilds_only_active_path():
    """Done siblings are shared, only ancestors of the active node are copied."""
    root = pending("outer", {"n": 0})
    root = apply_event(root, call("first"))
    root = apply_event(root, done("first", {"n": 1}))
    first = root.children[0]
    root = apply_event(root, call("second"))
    root = apply_event(root, call("second.deep"))

    new = apply_event(root, done("second.deep", {"n": 2}))

    assert new.children[0] is first
    assert new.children[1] is not root.children[1]
    assert new.children[1].children[0].done is True
    assert new.children[1].done is False


def test_no_change_deep_returns_same_root():
    """A dropped event deep in the tree must short-circuit every ancestor."""
    root = pending("outer")
    root = apply_event(root, call("mid"))
    root = apply_event(root, call("leaf"))

    assert apply_event(root, done("mid")) is root


def test_done_nodes_never_change():
    """Every done node stays identical across later events."""
    root = pending("app", {"count": 0})
    events = [
        call("a"),
        call("a.inner"),
        done("a.inner", {"x": 1}),
        done("a", {"count": 1}),
        call("b"),
        done("b"),
        call("c"),
    ]
    seen_done = []
    for ev in events:
        root = apply_event(root, ev)
        for node in _walk(root):
            if node.done:
                seen_done.append(node)
        assert_single_active_path(root)

    final_nodes = list(_walk(root))
    for node in seen_done:
        assert any(node is n for n in final_nodes)


def test_active_path_follows_last_pending_child():
    root = pending("outer")
    root = apply_event(root, call("first"))
    root = apply_event(root, done("first"))
    root = apply_event(root, call("second"))
    root = apply_event(root, call("second.deep"))

    assert active_path(root) == (1, 0)
    assert active_node(root).name == "second.deep"
    assert is_current(active_node(root))
    assert not is_current(root)


def test_active_path_of_current_node_is_empty():
    assert active_path(pending("x")) == ()
    assert active_path(ActionNode(name="x", done=True)) == ()


def _walk(node):
    yield node
    for child in node.children:
        yield from _walk(child)
