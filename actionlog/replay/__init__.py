"""
Replay system for run reconstruction.

Replay feeds an ordered event stream through a RunRegistry.
Same events -> same runs.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
