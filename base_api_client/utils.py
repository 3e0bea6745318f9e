"""
Utilities
=========
Dotted-path access on nested dicts, name normalisation and date coercion.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Any, Dict, MutableMapping, Optional

from .config import ZULU_FORMAT

_MISSING = object()

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2}):(\d{2})$")
_ZULU_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z$")


def dotted_get(data: Any, key: Optional[str], default: Any = None) -> Any:
    """
    Read a value from nested dicts using "dot" notation.

    A key that exists verbatim (dots included) wins over path traversal.

    Args:
        data: Nested dict
        key: Path like "pagination.total" (None returns data itself)
        default: Returned when any segment is missing

    Returns:
        Value at the path or default
    """
    if key is None:
        return data
    if isinstance(data, dict) and key in data:
        return data[key]

    current = data
    for segment in key.split("."):
        if not isinstance(current, dict) or segment not in current:
            return default
        current = current[segment]
    return current


def dotted_set(data: MutableMapping, key: str, value: Any) -> MutableMapping:
    """
    Write a value into nested dicts using "dot" notation.

    Missing or non-dict intermediate segments are replaced with new dicts.

    Returns:
        The innermost dict the value was written to
    """
    segments = key.split(".")
    current = data
    for segment in segments[:-1]:
        nxt = current.get(segment, _MISSING)
        if not isinstance(nxt, dict):
            nxt = {}
            current[segment] = nxt
        current = nxt
    current[segments[-1]] = value
    return current


def snake_case(name: str) -> str:
    """
    Normalise an endpoint name: "BlogPosts", "blogPosts", "blog-posts" → "blog_posts".
    """
    name = name.strip().replace("-", "_").replace(" ", "_")
    name = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    return re.sub(r"_+", "_", name).lower()


def _parse_datetime(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if not isinstance(value, str):
        return value

    text = value.strip()
    if re.fullmatch(r"-?\d+(\.\d+)?", text):
        return datetime.fromtimestamp(float(text), tz=timezone.utc)
    if _DATE_RE.match(text):
        return datetime.strptime(text, "%Y-%m-%d")
    if _TIME_RE.match(text):
        return datetime.combine(date.today(), time.fromisoformat(text))
    if _ZULU_RE.match(text):
        return datetime.strptime(text, ZULU_FORMAT).replace(tzinfo=timezone.utc)
    return datetime.fromisoformat(text)


def as_datetime(value: Any) -> Any:
    """
    Convert a date-like value to datetime.

    Accepts datetime/date, UNIX timestamps (int/float or numeric strings),
    "YYYY-MM-DD", "HH:MM:SS" (today's date), Zulu and ISO-8601 strings.
    Values that cannot be parsed, including well-shaped but impossible dates
    ("2024-02-30") and out-of-range timestamps, are returned unchanged.
    """
    try:
        return _parse_datetime(value)
    except (ValueError, OverflowError, OSError):
        return value


def format_datetime(value: datetime) -> str:
    """Render a datetime in Zulu format (aware values are converted to UTC)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(ZULU_FORMAT)


def to_plain(value: Any) -> Any:
    """Project a stored attribute value to a JSON-compatible value."""
    # Looked up on the class: a model may store a field named "to_array"
    to_array = getattr(type(value), "to_array", None)
    if callable(to_array):
        return to_array(value)
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    return value


def merge_headers(*sources: Any) -> Dict[str, str]:
    """
    Merge header sources in order; later sources win.

    Each source is a dict or a list of "Key: value" strings.
    """
    merged: Dict[str, str] = {}
    for source in sources:
        if not source:
            continue
        if isinstance(source, dict):
            items = source.items()
        else:
            items = []
            for line in source:
                key, sep, val = str(line).partition(":")
                if sep:
                    items.append((key.strip(), val.strip()))
        for key, val in items:
            # Case-insensitive replace, keep latest spelling
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            merged[key] = str(val)
    return merged
