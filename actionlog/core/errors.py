"""
Exception types for the action log engine.
"""


class ActionLogError(Exception):
    """Base class for all action log errors."""
    pass


class InconsistentEventError(ActionLogError):
    """
    A completion event that does not match the active action.

    The engine never raises this: inconsistent events are logged and dropped.
    The class is used to classify log records and dropped-event metrics.
    """
    reason = "inconsistent"


class MissingRunError(ActionLogError):
    """An action event referenced a run that was never initialized (logged, not raised)."""
    reason = "missing_run"


class PathError(ActionLogError):
    """Raised when a path write goes through a value that is not a container."""
    pass


class EventDecodeError(ActionLogError):
    """Raised when an event record cannot be decoded."""
    pass
