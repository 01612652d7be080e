"""
Reducer: pure devtools state transitions.

Handlers must be pure (no I/O besides diagnostics logging) and return the
input state object itself when an event changes nothing.
"""

from typing import Any, Callable, Dict

from .errors import ActionLogError
from .state import DevtoolsState

# Handler signature: (current_state, event) -> new_state
Handler = Callable[[DevtoolsState, Any], DevtoolsState]


class Reducer:
    """
    Registry of event handlers for state transitions.

    Usage:
        reducer = Reducer()
        reducer.register("RunInitialized", on_run_initialized)
        new_state = reducer.apply(state, event)
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, event_type: str, handler: Handler) -> None:
        """
        Register event handler.

        Args:
            event_type: Event type string
            handler: Pure function (current_state, event) -> new_state
        """
        self._handlers[event_type] = handler

    def apply(self, state: DevtoolsState, event: Any) -> DevtoolsState:
        """
        Apply event to state using registered handler.

        Raises:
            ActionLogError: If no handler registered for event type
        """
        handler = self._handlers.get(event.type)
        if handler is None:
            raise ActionLogError(f"No handler for event type: {event.type}")
        return handler(state, event)
