"""
Reducer handlers for run reconstruction.

All handlers are pure: (DevtoolsState, event) -> DevtoolsState. A handler
that drops an event returns the input state object unchanged.
"""

from functools import partial

from .config import DEFAULT_CONFIG, EngineConfig
from .core.errors import MissingRunError
from .core.events import ActionEvent, RunInitialized
from .core.reducer import Reducer
from .core.runlog import append_event, initialize_run
from .core.state import DevtoolsState
from .logging_config import get_logger
from .metrics import record_dropped


def register_handlers(reducer: Reducer, config: EngineConfig = DEFAULT_CONFIG) -> None:
    reducer.register(RunInitialized.type, partial(on_run_initialized, config=config))
    reducer.register(ActionEvent.type, partial(on_action_event, config=config))


def on_run_initialized(
    state: DevtoolsState, ev: RunInitialized, config: EngineConfig = DEFAULT_CONFIG
) -> DevtoolsState:
    run = initialize_run(ev, config.initial_action_name)
    if ev.run_id in state.runs:
        get_logger(__name__, run_id=ev.run_id).info("Replacing existing run")
    return state.with_run(run, selected=run.last_action)


def on_action_event(
    state: DevtoolsState, ev: ActionEvent, config: EngineConfig = DEFAULT_CONFIG
) -> DevtoolsState:
    run = state.get_run(ev.run_id)
    if run is None:
        get_logger(__name__, run_id=ev.run_id).warning(
            "Ignoring action %r for unknown run", ev.action_path
        )
        record_dropped(MissingRunError.reason)
        return state

    result = append_event(run, ev, config.path_delimiter)
    if not result.changed:
        return state
    return state.with_run(result.run, selected=result.selected)
