"""
JSONL event stream reader.

One event per line, in dispatch order. Blank lines are skipped.
"""

import json
from typing import Iterator

from ..core.errors import EventDecodeError
from ..core.events import Event
from .records import parse_event


def iter_lines(lines) -> Iterator[Event]:
    """
    Decode events from an iterable of JSON lines.

    Raises:
        EventDecodeError: On the first malformed line (message names the line number)
    """
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise EventDecodeError(f"line {lineno}: invalid JSON: {e}") from e
        try:
            yield parse_event(record)
        except EventDecodeError as e:
            raise EventDecodeError(f"line {lineno}: {e}") from e


def read_events(path: str) -> Iterator[Event]:
    """
    Read events from a JSONL file lazily.

    Raises:
        FileNotFoundError: If path does not exist
        EventDecodeError: On a malformed line
    """
    with open(path, "r", encoding="utf-8") as f:
        yield from iter_lines(f)
