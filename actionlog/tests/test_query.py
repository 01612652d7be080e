"""
Tests for read-only run queries.
"""

from actionlog.core.nodes import ActionNode
from actionlog.query import (
    action_at,
    active_address,
    current_state,
    group_repeating,
    iter_actions,
    node_path,
)
from actionlog.registry import RunRegistry


def build_run():
    registry = RunRegistry()
    registry.run_initialized("r1", 0, {"count": 0})
    registry.action_event("r1", "increment", {}, False)
    registry.action_event("r1", "increment.log", {}, False)
    registry.action_event("r1", "increment.log", {}, True)
    registry.action_event("r1", "increment", {}, True, {"count": 1})
    registry.action_event("r1", "decrement", {}, False)
    registry.action_event("r1", "decrement.inner", {}, False)
    return registry.get_run("r1")


def test_node_path():
    assert node_path(2) == ["actions", 2]
    assert node_path((1, 0, 3)) == ["actions", 1, "children", 0, "children", 3]
    assert node_path(()) == []


def test_action_at():
    run = build_run()

    assert action_at(run, 0).name == "Initial State"
    assert action_at(run, (1, 0)).name == "increment.log"
    assert action_at(run, (1, 5)) is None
    assert action_at(run, ()) is None


def test_iter_actions_depth_first():
    run = build_run()

    visited = [(address, node.name) for address, node in iter_actions(run)]

    assert visited == [
        ((0,), "Initial State"),
        ((1,), "increment"),
        ((1, 0), "increment.log"),
        ((2,), "decrement"),
        ((2, 0), "decrement.inner"),
    ]


def test_active_address():
    run = build_run()

    assert active_address(run) == (2, 0)


def test_active_address_none_when_all_done():
    registry = RunRegistry()
    registry.run_initialized("r1", 0, {})

    assert active_address(registry.get_run("r1")) is None


def test_current_state():
    run = build_run()

    # decrement is still pending: its previous state is the current one
    assert current_state(run) == {"count": 1}


def test_group_repeating():
    a1, a2, b, a3 = (ActionNode(name=n, done=True) for n in ["a", "a", "b", "a"])

    groups = group_repeating([a1, a2, b, a3])

    assert [(node.name, count) for node, count in groups] == [("a", 2), ("b", 1), ("a", 1)]
    assert groups[0][0] is a2
    assert group_repeating([]) == []
