"""
Devtools state: the whole snapshot exposed to the presentation layer.

DevtoolsState is immutable. Use with_run()/without_run()/with_view() to get
a new snapshot; the previous one stays valid.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .events import RuntimeEvent
from .nodes import ActionNode, Run


class PaneDisplay(str, Enum):
    """Where the debug pane is docked."""

    FULLSCREEN = "fullscreen"
    RIGHT = "right"
    BOTTOM = "bottom"


class ValueDisplay(str, Enum):
    """Which value of the selected action the pane shows."""

    STATE = "state"
    RESULT = "result"
    DATA = "data"
    DEBUGGER = "debugger"


@dataclass(frozen=True)
class DevtoolsState:
    """
    Immutable devtools snapshot.

    Fields:
        version: Monotonic version number (increments with each change)
        runs: run_id -> Run, in insertion order (read-only view)
        selected: Currently focused action node
        logs: Diagnostic runtime events, oldest first
        pane_shown: Debug pane visibility
        pane_display: Debug pane docking
        value_display: Value shown for the selected action
        collapse_repeating_actions: Group consecutive same-name actions
    """
    version: int = 0
    runs: Mapping[str, Run] = field(default_factory=lambda: MappingProxyType({}))
    selected: Optional[ActionNode] = None
    logs: Tuple[RuntimeEvent, ...] = ()
    pane_shown: bool = False
    pane_display: PaneDisplay = PaneDisplay.RIGHT
    value_display: ValueDisplay = ValueDisplay.STATE
    collapse_repeating_actions: bool = True

    def get_run(self, run_id: str) -> Optional[Run]:
        return self.runs.get(run_id)

    def with_run(self, run: Run, selected: Any = dataclasses.MISSING) -> "DevtoolsState":
        """
        Create new state with run stored under run.id.

        Args:
            run: Run to store (replaces a run with the same id in place)
            selected: New selected node; left untouched when omitted
        """
        runs = dict(self.runs)
        runs[run.id] = run
        changes: Dict[str, Any] = {"runs": MappingProxyType(runs)}
        if selected is not dataclasses.MISSING:
            changes["selected"] = selected
        return self.with_view(**changes)

    def without_run(self, run_id: str) -> "DevtoolsState":
        runs = dict(self.runs)
        del runs[run_id]
        return self.with_view(runs=MappingProxyType(runs))

    def with_log(self, event: RuntimeEvent) -> "DevtoolsState":
        return self.with_view(logs=self.logs + (event,))

    def with_view(self, **changes: Any) -> "DevtoolsState":
        """Create new state with the given fields replaced and version incremented."""
        return dataclasses.replace(self, version=self.version + 1, **changes)
