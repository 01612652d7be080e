"""
Event stream ingestion.

This module provides:
- read_events / iter_lines: JSONL decoding of an instrumentation event stream
- parse_event / event_to_dict: single record decoding and encoding
- RunInitializedRecord / ActionEventRecord: pydantic wire models
"""

from .records import ActionEventRecord, RunInitializedRecord, event_to_dict, parse_event
from .reader import iter_lines, read_events

__all__ = [
    "ActionEventRecord",
    "RunInitializedRecord",
    "event_to_dict",
    "parse_event",
    "iter_lines",
    "read_events",
]
