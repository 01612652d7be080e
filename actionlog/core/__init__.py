"""
Core run reconstruction primitives.

This module provides the building blocks of the engine:
- Events: RunInitialized / ActionEvent records from the instrumentation shim
- Nodes: Immutable ActionNode trees and Runs
- Paths: Structural-sharing reads and writes at a key path
- Tree: Folding one action event into an action tree
- RunLog: Routing events to a run's top-level actions
- State/Reducer: The devtools snapshot and its pure transitions
"""

from .events import ActionEvent, Event, RunInitialized, RuntimeEvent
from .nodes import ActionNode, Run
from .paths import get_in, merge_in, set_in
from .tree import active_node, active_path, apply_event, is_current, merge_result
from .runlog import AppendResult, append_event, initialize_run
from .state import DevtoolsState, PaneDisplay, ValueDisplay
from .reducer import Reducer
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .errors import (
    ActionLogError,
    EventDecodeError,
    InconsistentEventError,
    MissingRunError,
    PathError,
)

__all__ = [
    "ActionEvent",
    "Event",
    "RunInitialized",
    "RuntimeEvent",
    "ActionNode",
    "Run",
    "get_in",
    "set_in",
    "merge_in",
    "apply_event",
    "merge_result",
    "is_current",
    "active_path",
    "active_node",
    "AppendResult",
    "append_event",
    "initialize_run",
    "DevtoolsState",
    "PaneDisplay",
    "ValueDisplay",
    "Reducer",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "ActionLogError",
    "EventDecodeError",
    "InconsistentEventError",
    "MissingRunError",
    "PathError",
]
