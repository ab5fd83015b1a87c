"""Dotted-path access into parsed CloudTrail events"""
import json
from typing import Any

MISSING = object()


def lookup_path(document: Any, path: str) -> Any:
    """Follow a dotted path through nested objects and arrays"""
    current = document
    for segment in path.split('.'):
        if isinstance(current, dict):
            current = current.get(segment, MISSING)
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else MISSING
        else:
            return MISSING
        if current is MISSING:
            return MISSING
    return current


def get_path(document: Any, path: str) -> str:
    """
    String value at `path` in `document`.

    Missing paths and nulls give an empty string. Non-string values are
    rendered as compact JSON.
    """
    value = lookup_path(document, path)
    if value is MISSING or value is None:
        return ''
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'), sort_keys=True)
