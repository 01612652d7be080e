"""
Run log: per-run list of top-level actions.

initialize_run() builds a run from its RunInitialized event, append_event()
routes an action event to the last top-level action (or opens a new one).
"""

from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_INITIAL_ACTION, DEFAULT_PATH_DELIMITER
from ..logging_config import get_logger
from ..metrics import record_dropped
from .errors import InconsistentEventError
from .events import ActionEvent, RunInitialized
from .nodes import ActionNode, Run
from .tree import apply_event, new_action


@dataclass(frozen=True)
class AppendResult:
    """
    Result of appending an event to a run.

    Fields:
        run: Updated run (the input run itself when the event was dropped)
        selected: Top-level node that was opened or updated, None when dropped
    """
    run: Run
    selected: Optional[ActionNode]

    @property
    def changed(self) -> bool:
        return self.selected is not None


def initial_action(event: RunInitialized, name: str = DEFAULT_INITIAL_ACTION) -> ActionNode:
    return ActionNode(
        name=name,
        done=True,
        collapsed=False,
        children=(),
        previous_state=None,
        next_state=event.state,
    )


def initialize_run(event: RunInitialized, initial_name: str = DEFAULT_INITIAL_ACTION) -> Run:
    """Create a run holding a single done node with the initial state."""
    return Run(
        id=event.run_id,
        timestamp=event.timestamp,
        actions=(initial_action(event, initial_name),),
        collapsed=False,
    )


def append_event(
    run: Run,
    event: ActionEvent,
    delimiter: str = DEFAULT_PATH_DELIMITER,
) -> AppendResult:
    """
    Fold an action event into a run.

    Args:
        run: Current run
        event: Action event for this run
        delimiter: Separator of qualified action names

    Returns:
        AppendResult; result.run is run itself when nothing changed
    """
    last = run.last_action

    if last.done:
        if not event.is_completion:
            selected = new_action(event, last.next_state)
            return AppendResult(
                run=Run(
                    id=run.id,
                    timestamp=run.timestamp,
                    actions=run.actions + (selected,),
                    collapsed=run.collapsed,
                ),
                selected=selected,
            )

        log = get_logger(__name__, run_id=run.id)
        log.warning(
            "Dropping inconsistent event: completion of %r with no active action",
            event.action_path,
        )
        record_dropped(InconsistentEventError.reason)
        return AppendResult(run=run, selected=None)

    new_last = apply_event(last, event, delimiter)
    if new_last is last:
        return AppendResult(run=run, selected=None)

    return AppendResult(
        run=Run(
            id=run.id,
            timestamp=run.timestamp,
            actions=run.actions[:-1] + (new_last,),
            collapsed=run.collapsed,
        ),
        selected=new_last,
    )
