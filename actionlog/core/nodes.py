"""
Action tree nodes and runs.

Both are frozen: every change produces a new instance and untouched
subtrees are shared by reference between versions.
"""

from dataclasses import dataclass
from typing import Any, Tuple

from .events import Timestamp


@dataclass(frozen=True)
class ActionNode:
    """
    One action invocation.

    Fields:
        name: Qualified action path the action was dispatched with
        done: True once the action completed
        collapsed: Presentation hint, no structural meaning
        payload: Data the action was called with
        result: Value returned by the action (only meaningful when done)
        previous_state: Application state right before the action ran
        next_state: Application state right after the action (only when done)
        children: Nested action invocations in call order
    """
    name: str
    done: bool = False
    collapsed: bool = False
    payload: Any = None
    result: Any = None
    previous_state: Any = None
    next_state: Any = None
    children: Tuple["ActionNode", ...] = ()

    @property
    def last_child(self) -> "ActionNode":
        return self.children[-1]


@dataclass(frozen=True)
class Run:
    """
    One recorded execution.

    Fields:
        id: Run identifier
        timestamp: Run start time
        actions: Top-level action invocations, oldest first
        collapsed: Presentation hint
    """
    id: str
    timestamp: Timestamp
    actions: Tuple[ActionNode, ...] = ()
    collapsed: bool = False

    @property
    def last_action(self) -> ActionNode:
        return self.actions[-1]
