"""
Read-only query helpers over runs and action trees.

An action address is a tuple of indices: the index of the top-level action
in run.actions, followed by child indices.
"""

from typing import Any, Hashable, Iterator, List, Optional, Sequence, Tuple, Union

from .core.nodes import ActionNode, Run
from .core.paths import get_in
from .core.tree import active_path

Address = Tuple[int, ...]


def _as_address(address: Union[int, Sequence[int]]) -> Address:
    if isinstance(address, int):
        return (address,)
    return tuple(address)


def node_path(address: Union[int, Sequence[int]]) -> List[Hashable]:
    """
    Translate an action address into a key path relative to a Run.

    (2, 0) -> ["actions", 2, "children", 0]
    """
    address = _as_address(address)
    if not address:
        return []
    path: List[Hashable] = ["actions", address[0]]
    for idx in address[1:]:
        path.extend(["children", idx])
    return path


def action_at(run: Run, address: Union[int, Sequence[int]]) -> Optional[ActionNode]:
    if not _as_address(address):
        return None
    return get_in(run, node_path(address))


def iter_actions(run: Run) -> Iterator[Tuple[Address, ActionNode]]:
    """Yield (address, node) pairs depth-first, in call order."""
    stack = [((i,), node) for i, node in enumerate(run.actions)]
    stack.reverse()
    while stack:
        address, node = stack.pop()
        yield address, node
        for i in range(len(node.children) - 1, -1, -1):
            stack.append((address + (i,), node.children[i]))


def active_address(run: Run) -> Optional[Address]:
    """Address of the node the next event applies to, or None if all actions are done."""
    last = run.last_action
    if last.done:
        return None
    return (len(run.actions) - 1,) + active_path(last)


def current_state(run: Run) -> Any:
    """Application state after the most recent completed top-level action."""
    last = run.last_action
    return last.next_state if last.done else last.previous_state


def group_repeating(nodes: Sequence[ActionNode]) -> List[Tuple[ActionNode, int]]:
    """
    Collapse consecutive siblings sharing a name.

    Returns (last node of the group, group size) pairs, in order.
    """
    groups: List[Tuple[ActionNode, int]] = []
    for node in nodes:
        if groups and groups[-1][0].name == node.name:
            groups[-1] = (node, groups[-1][1] + 1)
        else:
            groups.append((node, 1))
    return groups
