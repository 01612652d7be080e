"""
Tests for the run registry: ingestion, queries and presentation state.
"""

import logging

import pytest

from actionlog.config import EngineConfig
from actionlog.core.events import RuntimeEvent
from actionlog.core.state import DevtoolsState, PaneDisplay, ValueDisplay
from actionlog.registry import RunRegistry


def counter_registry():
    registry = RunRegistry()
    registry.run_initialized("r1", 0, {"count": 0})
    return registry


def test_end_to_end_counter_scenario():
    """Nested call inside increment, then increment completes with a result."""
    registry = counter_registry()
    registry.action_event("r1", "increment", {}, False)
    registry.action_event("r1", "increment.inner", {}, False)
    registry.action_event("r1", "increment.inner", {}, True, {})
    registry.action_event("r1", "increment", {}, True, {"count": 1})

    run = registry.get_run("r1")
    assert len(run.actions) == 2
    initial, increment = run.actions
    assert initial.name == "Initial State"
    assert increment.name == "increment"
    assert increment.done is True
    assert increment.next_state == {"count": 1}
    assert len(increment.children) == 1
    assert increment.children[0].name == "increment.inner"
    assert increment.children[0].done is True
    assert registry.get_selected() is increment


def test_inner_empty_result_leaves_state_unchanged():
    registry = counter_registry()
    registry.action_event("r1", "increment", {}, False)
    registry.action_event("r1", "increment.inner", {}, False)
    registry.action_event("r1", "increment.inner", {}, True, {})

    inner = registry.get_run("r1").actions[1].children[0]
    assert inner.next_state == {"count": 0}


def test_inconsistent_event_keeps_state_identity():
    registry = counter_registry()
    registry.action_event("r1", "increment", {}, False)
    before_state = registry.state
    before_run = registry.get_run("r1")

    after = registry.action_event("r1", "decrement", {}, True, {"count": -1})

    assert after is before_state
    assert registry.get_run("r1") is before_run


def test_missing_run_is_ignored(caplog):
    registry = counter_registry()
    before = registry.state

    with caplog.at_level(logging.WARNING):
        after = registry.action_event("ghost", "increment", {}, False)

    assert after is before
    assert registry.get_run("ghost") is None
    assert "unknown run" in caplog.text


def test_prior_snapshots_stay_valid():
    """Time travel: an old snapshot is never modified by later events."""
    registry = counter_registry()
    registry.action_event("r1", "increment", {}, False)
    snapshot = registry.state
    pending_run = snapshot.get_run("r1")

    registry.action_event("r1", "increment", {}, True, {"count": 1})

    assert snapshot.get_run("r1") is pending_run
    assert pending_run.actions[1].done is False
    assert registry.state.version > snapshot.version


def test_list_runs_in_insertion_order():
    registry = RunRegistry()
    for run_id in ["b", "a", "c"]:
        registry.run_initialized(run_id, 0, {})

    assert [r.id for r in registry.list_runs()] == ["b", "a", "c"]


def test_run_initialized_overwrites_existing_run():
    registry = counter_registry()
    registry.action_event("r1", "increment", {}, False)

    registry.run_initialized("r1", 5, {"count": 10})

    run = registry.get_run("r1")
    assert run.timestamp == 5
    assert len(run.actions) == 1
    assert run.actions[0].next_state == {"count": 10}
    assert registry.get_selected() is run.actions[0]


def test_delete_then_reinitialize_is_fresh():
    registry = counter_registry()
    registry.action_event("r1", "increment", {}, False)
    registry.action_event("r1", "increment", {}, True, {"count": 1})

    registry.delete_run("r1")
    assert registry.get_run("r1") is None
    assert registry.list_runs() == []

    registry.run_initialized("r1", 1, {"count": 0})
    run = registry.get_run("r1")
    assert len(run.actions) == 1
    assert run.actions[0].next_state == {"count": 0}


def test_delete_unknown_run_is_noop():
    registry = counter_registry()
    before = registry.state

    assert registry.delete_run("nope") is before


def test_toggle_run_flips_collapsed():
    registry = counter_registry()
    run = registry.get_run("r1")

    registry.toggle_run("r1")
    assert registry.get_run("r1").collapsed is True
    assert registry.get_run("r1").actions is run.actions

    registry.toggle_run("r1")
    assert registry.get_run("r1").collapsed is False


def test_toggle_action_top_level_and_nested():
    registry = counter_registry()
    registry.action_event("r1", "increment", {}, False)
    registry.action_event("r1", "increment.inner", {}, False)
    registry.action_event("r1", "increment.inner", {}, True)
    registry.action_event("r1", "increment", {}, True, {"count": 1})
    initial = registry.get_run("r1").actions[0]

    registry.toggle_action("r1", 1)
    run = registry.get_run("r1")
    assert run.actions[1].collapsed is True
    assert run.actions[0] is initial

    registry.toggle_action("r1", (1, 0))
    run = registry.get_run("r1")
    assert run.actions[1].children[0].collapsed is True
    assert run.actions[1].collapsed is True
    assert run.actions[1].done is True
    assert run.actions[1].next_state == {"count": 1}


def test_toggle_unknown_action_is_noop():
    registry = counter_registry()
    before = registry.state
    run = registry.get_run("r1")

    assert registry.toggle_action("r1", (4, 2)) is before
    assert registry.toggle_action("r1", ()) is before
    assert registry.toggle_action("ghost", 0) is before
    assert registry.toggle_run("ghost") is before
    assert registry.get_run("r1") is run
    assert run.collapsed is False


def test_runs_mapping_is_read_only():
    """Snapshots cannot be changed by writing through their runs mapping."""
    registry = counter_registry()
    snapshot = registry.state
    run = snapshot.get_run("r1")

    with pytest.raises(TypeError):
        snapshot.runs["x"] = run

    registry.run_initialized("r2", 1, {})
    registry.delete_run("r1")

    assert list(snapshot.runs) == ["r1"]
    assert snapshot.get_run("r1") is run
    with pytest.raises(TypeError):
        registry.state.runs["r1"] = run


def test_view_settings_last_write_wins():
    registry = RunRegistry()

    registry.set_pane_shown(True)
    registry.set_pane_display("bottom")
    registry.set_value_display(ValueDisplay.RESULT)
    registry.toggle_collapse_repeating_actions()

    state = registry.state
    assert state.pane_shown is True
    assert state.pane_display is PaneDisplay.BOTTOM
    assert state.value_display is ValueDisplay.RESULT
    assert state.collapse_repeating_actions is False


def test_invalid_pane_display_rejected():
    registry = RunRegistry()

    with pytest.raises(ValueError):
        registry.set_pane_display("sideways")


def test_set_selected():
    registry = counter_registry()
    node = registry.get_run("r1").actions[0]

    registry.set_selected(None)
    assert registry.get_selected() is None

    registry.set_selected(node)
    assert registry.get_selected() is node


def test_log_keeps_runtime_events():
    registry = RunRegistry()
    ev = RuntimeEvent(type="error", payload={"message": "boom"}, timestamp=3)

    registry.log(ev)

    assert registry.state.logs == (ev,)


def test_custom_config_delimiter_and_initial_name():
    registry = RunRegistry(EngineConfig(path_delimiter="/", initial_action_name="Boot"))
    registry.run_initialized("r1", 0, {"counter": {"n": 0}})
    registry.action_event("r1", "counter/add", {}, False)
    registry.action_event("r1", "counter/add", {}, True, {"n": 1})

    run = registry.get_run("r1")
    assert run.actions[0].name == "Boot"
    assert run.actions[1].next_state == {"counter": {"n": 1}}


def test_registry_from_existing_state():
    state = DevtoolsState(pane_shown=True)

    registry = RunRegistry(state=state)

    assert registry.state is state
