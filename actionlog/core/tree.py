"""
Action tree builder: fold one action event into an action tree.

apply_event() is pure. It walks the last-child chain down to the active
node and rebuilds only the ancestors on that chain; every other branch is
shared with the input tree. When an event changes nothing, the input node
itself is returned so callers can detect no-ops with `is`.
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Tuple

from ..config import DEFAULT_PATH_DELIMITER
from ..logging_config import get_logger
from ..metrics import record_dropped
from .errors import InconsistentEventError
from .events import ActionEvent
from .nodes import ActionNode
from .paths import merge_in


def merge_result(state: Any, event: ActionEvent, delimiter: str = DEFAULT_PATH_DELIMITER) -> Any:
    """
    Merge an action's result into state at the location named by its path.

    "a.b.c" with result {"x": 1} merges {"x": 1} into state["a"]["b"].
    A missing or empty result, or one that is not a mapping, leaves state
    unchanged.
    """
    if not event.result or not isinstance(event.result, Mapping):
        return state
    target = event.action_path.split(delimiter)[:-1]
    return merge_in(state, target, event.result)


def is_current(node: ActionNode) -> bool:
    """True if node is the active node of its subtree."""
    if node.done:
        return False
    return not node.children or node.last_child.done


def active_path(node: ActionNode) -> Tuple[int, ...]:
    """
    Child indices leading from node to its active node.

    Empty when node is itself active, or done.
    """
    path = []
    cur = node
    while not cur.done and cur.children and not cur.last_child.done:
        path.append(len(cur.children) - 1)
        cur = cur.last_child
    return tuple(path)


def active_node(node: ActionNode) -> ActionNode:
    cur = node
    for idx in active_path(node):
        cur = cur.children[idx]
    return cur


def new_action(event: ActionEvent, previous_state: Any) -> ActionNode:
    return ActionNode(
        name=event.action_path,
        done=False,
        collapsed=False,
        payload=event.payload,
        children=(),
        previous_state=previous_state,
    )


def apply_event(
    node: ActionNode,
    event: ActionEvent,
    delimiter: str = DEFAULT_PATH_DELIMITER,
) -> ActionNode:
    """
    Append the event to the active node of the tree rooted at node.

    Args:
        node: Root of the (sub)tree
        event: Action event to fold in
        delimiter: Separator of qualified action names

    Returns:
        New root, or node itself when nothing changed
    """
    if node.done:
        return node

    if is_current(node):
        if not event.is_completion:
            child = new_action(event, node.previous_state)
            return dataclasses.replace(node, children=node.children + (child,))

        if event.action_path == node.name:
            return dataclasses.replace(
                node,
                done=True,
                result=event.result,
                next_state=merge_result(node.previous_state, event, delimiter),
            )

        log = get_logger(__name__, run_id=event.run_id)
        log.warning(
            "Dropping inconsistent event: completion of %r while %r is active",
            event.action_path,
            node.name,
        )
        record_dropped(InconsistentEventError.reason)
        return node

    last = node.last_child
    new_last = apply_event(last, event, delimiter)
    if new_last is last:
        return node
    return dataclasses.replace(node, children=node.children[:-1] + (new_last,))
