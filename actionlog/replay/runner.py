"""
Replay runner: rebuild runs from an event stream.

Events are applied strictly in order; every event is fully applied before
the next one is read.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.events import Event
from ..metrics import time_replay
from ..registry import RunRegistry


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        registry: Registry holding the rebuilt runs
        applied: Number of events consumed
        unchanged: Events that left the state untouched (dropped)
    """
    registry: RunRegistry
    applied: int
    unchanged: int


def replay(
    events: Iterable[Event],
    registry: Optional[RunRegistry] = None,
    until: Optional[int] = None,
) -> ReplayResult:
    """
    Feed events through a registry.

    Args:
        events: Events in dispatch order
        registry: Registry to feed (a new one when None)
        until: Stop after this many events (None = all)

    Returns:
        ReplayResult with the registry and counts
    """
    if registry is None:
        registry = RunRegistry()
    applied = 0
    unchanged = 0

    with time_replay():
        for ev in events:
            if until is not None and applied >= until:
                break
            before = registry.state
            if registry.dispatch(ev) is before:
                unchanged += 1
            applied += 1

    return ReplayResult(registry=registry, applied=applied, unchanged=unchanged)
