"""Shared utilities for the agent dashboard.

Small helpers used by the ingest and aggregation layers: safe JSONL
decoding, timestamp parsing and JSON rendering of tool arguments.
"""

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number {text}")
    return value


def parse_jsonl_line(line: str | bytes) -> dict[str, Any] | None:
    """Safely parse a single JSONL line.

    Lines holding NaN, Infinity or numbers that overflow a float are
    treated as malformed, as are lines nested too deeply to decode.

    Args:
        line: A line from a JSONL file (string or bytes)

    Returns:
        Parsed JSON object, or None if parsing failed or the line
        does not hold a JSON object
    """
    try:
        if isinstance(line, bytes):
            line = line.decode('utf-8')
        data = json.loads(
            line.strip(),
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def parse_timestamp_ms(value: Any) -> int | None:
    """Convert a record timestamp to epoch milliseconds.

    Accepts ISO-8601 strings (with or without a trailing 'Z') and numeric
    epoch milliseconds. Naive ISO strings are taken as UTC.

    Returns:
        Epoch milliseconds, or None if the value cannot be parsed
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def to_json(value: Any, indent: int | None = None) -> str:
    """Render a value as JSON the way the dashboard displays it.

    Compact separators by default; with `indent`, a pretty-printed form.
    Non-serializable values fall back to their string form.
    """
    if indent is None:
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False, default=str)
    return json.dumps(value, indent=indent, ensure_ascii=False, default=str)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def safe_get_nested(data: dict, *keys: str, default: Any = None) -> Any:
    """Safely get a nested value from a dictionary.

    Example:
        safe_get_nested({'a': {'b': 1}}, 'a', 'b') -> 1
        safe_get_nested({'a': {}}, 'a', 'b', default=0) -> 0
    """
    result = data
    for key in keys:
        if isinstance(result, dict):
            result = result.get(key, default)
        else:
            return default
    return result
