"""
Canonical JSON serialization for runs, trees and events.

All JSON output (CLI, exported events) goes through these functions so the
same snapshot always renders to the same bytes.
"""

import dataclasses
import json
from collections.abc import Mapping
from enum import Enum
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested values to canonical JSON-ready form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - dataclass instances converted to dicts of their fields
    - enums replaced by their value
    - recursive normalization
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        names = sorted(f.name for f in dataclasses.fields(obj))
        return {name: canonicalize(getattr(obj, name)) for name in names}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Mapping):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes.

    Returns:
        UTF-8 encoded JSON bytes
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any, indent: Any = None) -> str:
    """
    Deterministic JSON string (for display or export).

    With indent set, output is pretty-printed but still key-sorted.
    """
    if indent is None:
        return canonical_json_bytes(obj).decode("utf-8")
    return json.dumps(canonicalize(obj), sort_keys=True, indent=indent, ensure_ascii=False)
