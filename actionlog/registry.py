"""
Run registry: the devtools store.

RunRegistry owns the current DevtoolsState and swaps it for a new snapshot on
every change. Snapshots handed out earlier are never modified, so readers may
keep them for time travel or diffing.

Usage:
    registry = RunRegistry()
    registry.run_initialized("r1", 0, {"count": 0})
    registry.action_event("r1", "increment", {}, False)
    registry.action_event("r1", "increment", {}, True, {"count": 1})
    registry.get_run("r1").last_action.next_state  # {"count": 1}
"""

from typing import Any, List, Optional, Sequence, Union

from .config import EngineConfig
from .core.events import ActionEvent, Event, RunInitialized, RuntimeEvent, Timestamp
from .core.nodes import ActionNode, Run
from .core.paths import get_in, set_in
from .core.reducer import Reducer
from .core.state import DevtoolsState, PaneDisplay, ValueDisplay
from .handlers import register_handlers
from .logging_config import get_logger
from .metrics import record_event, set_runs
from .query import node_path

Address = Union[int, Sequence[int]]


class RunRegistry:
    """
    Process-local map from run id to Run, plus presentation state.

    Create one per devtools instance and pass it to whatever feeds it events;
    there is no module-level instance.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        state: Optional[DevtoolsState] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._reducer = Reducer()
        register_handlers(self._reducer, self.config)
        self._state = state or DevtoolsState()

    @property
    def state(self) -> DevtoolsState:
        """Current immutable snapshot."""
        return self._state

    def _commit(self, new_state: DevtoolsState) -> DevtoolsState:
        if new_state is not self._state:
            self._state = new_state
            set_runs(len(new_state.runs))
        return new_state

    # Ingestion

    def dispatch(self, event: Event) -> DevtoolsState:
        """
        Apply one event and store the resulting snapshot.

        Returns:
            The new snapshot (the previous one when the event was dropped)
        """
        record_event(event.type)
        return self._commit(self._reducer.apply(self._state, event))

    def run_initialized(self, run_id: str, timestamp: Timestamp, state: Any) -> DevtoolsState:
        return self.dispatch(RunInitialized(run_id=run_id, timestamp=timestamp, state=state))

    def action_event(
        self,
        run_id: str,
        action_path: str,
        payload: Any = None,
        is_completion: bool = False,
        result: Any = None,
        timestamp: Timestamp = 0,
    ) -> DevtoolsState:
        return self.dispatch(
            ActionEvent(
                run_id=run_id,
                action_path=action_path,
                payload=payload,
                is_completion=is_completion,
                result=result,
                timestamp=timestamp,
            )
        )

    def log(self, event: RuntimeEvent) -> DevtoolsState:
        """Keep a diagnostic runtime event in the devtools log."""
        return self._commit(self._state.with_log(event))

    # Queries

    def get_run(self, run_id: str) -> Optional[Run]:
        return self._state.get_run(run_id)

    def list_runs(self) -> List[Run]:
        """Runs in insertion order."""
        return list(self._state.runs.values())

    def get_selected(self) -> Optional[ActionNode]:
        return self._state.selected

    # Presentation-only changes

    def toggle_run(self, run_id: str) -> DevtoolsState:
        run = self.get_run(run_id)
        if run is None:
            get_logger(__name__, run_id=run_id).warning("Cannot toggle unknown run")
            return self._state
        return self._commit(self._state.with_run(set_in(run, ["collapsed"], not run.collapsed)))

    def toggle_action(self, run_id: str, address: Address) -> DevtoolsState:
        """
        Flip the collapsed flag of one action node.

        Args:
            run_id: Run holding the action
            address: Index of the top-level action, or a sequence of indices
                (top-level index first, then child indices)
        """
        run = self.get_run(run_id)
        node = node_path(address)
        path = node + ["collapsed"]
        collapsed = get_in(run, path) if node else None
        if collapsed is None:
            get_logger(__name__, run_id=run_id).warning("Cannot toggle unknown action %r", address)
            return self._state
        return self._commit(self._state.with_run(set_in(run, path, not collapsed)))

    def set_selected(self, node: Optional[ActionNode]) -> DevtoolsState:
        return self._commit(self._state.with_view(selected=node))

    def set_pane_shown(self, shown: bool) -> DevtoolsState:
        return self._commit(self._state.with_view(pane_shown=bool(shown)))

    def set_pane_display(self, display: Union[PaneDisplay, str]) -> DevtoolsState:
        return self._commit(self._state.with_view(pane_display=PaneDisplay(display)))

    def set_value_display(self, display: Union[ValueDisplay, str]) -> DevtoolsState:
        return self._commit(self._state.with_view(value_display=ValueDisplay(display)))

    def toggle_collapse_repeating_actions(self) -> DevtoolsState:
        return self._commit(
            self._state.with_view(
                collapse_repeating_actions=not self._state.collapse_repeating_actions
            )
        )

    def delete_run(self, run_id: str) -> DevtoolsState:
        if run_id not in self._state.runs:
            get_logger(__name__, run_id=run_id).warning("Cannot delete unknown run")
            return self._state
        return self._commit(self._state.without_run(run_id))
