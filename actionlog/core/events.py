"""
Event model for run reconstruction.

Events are immutable records emitted by the instrumentation shim, in the exact
order the instrumented application produced them.
"""

from dataclasses import dataclass
from typing import Any, Union

# Milliseconds; fractional when the shim uses a high resolution clock
Timestamp = Union[int, float]


@dataclass(frozen=True)
class RunInitialized:
    """
    A new run started.

    Fields:
        run_id: Opaque unique run identifier
        timestamp: Wall clock time of the run start (milliseconds)
        state: Initial application state snapshot
    """
    run_id: str
    timestamp: Timestamp
    state: Any = None

    type = "RunInitialized"


@dataclass(frozen=True)
class ActionEvent:
    """
    An action called into a nested action, or completed.

    Fields:
        run_id: Run the action belongs to
        action_path: Dot-delimited qualified action name (e.g. "counter.add")
        payload: Data the action was called with
        is_completion: False for "called into a nested action", True for "finished"
        result: Partial state returned by the action (None = no result)
        timestamp: Wall clock time of the dispatch (milliseconds)
    """
    run_id: str
    action_path: str
    payload: Any = None
    is_completion: bool = False
    result: Any = None
    timestamp: Timestamp = 0

    type = "ActionEvent"


@dataclass(frozen=True)
class RuntimeEvent:
    """Free-form diagnostic record kept in the devtools log."""
    type: str
    payload: Any = None
    timestamp: Timestamp = 0


Event = Union[RunInitialized, ActionEvent]
