"""Response normalization.

Local AI backends disagree on what a reply looks like: a bare string, a
list of chat messages (OpenAI ``choices``), or a record carrying
``content``, ``message.content`` or ``text``. ``normalize_response`` maps
every one of them to a non-empty display string and never raises.

Each raw value is first classified into a ``ResponseShape``; every shape
has exactly one resolution rule.
"""

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel

NO_RESPONSE_TEXT = "No response received"
EMPTY_RESPONSE_TEXT = "Empty response received"


class ResponseShape(str, Enum):
    EMPTY = "empty"
    TEXT = "text"
    LIST = "list"
    RECORD = "record"
    OTHER = "other"


def classify_response(raw: Any) -> ResponseShape:
    """Tag a raw backend value with its shape."""
    if raw is None or raw == "":
        return ResponseShape.EMPTY
    if isinstance(raw, str):
        return ResponseShape.TEXT
    if isinstance(raw, (list, tuple)):
        return ResponseShape.LIST
    if isinstance(raw, (Mapping, BaseModel)):
        return ResponseShape.RECORD
    return ResponseShape.OTHER


def normalize_response(raw: Any) -> str:
    """Extract display text from any backend response.

    Args:
        raw: Whatever the generation backend returned

    Returns:
        A non-empty string
    """
    shape = classify_response(raw)

    if shape is ResponseShape.EMPTY:
        return NO_RESPONSE_TEXT
    if shape is ResponseShape.TEXT:
        return raw
    if shape is ResponseShape.LIST:
        text = _from_list(raw)
    elif shape is ResponseShape.RECORD:
        text = _from_record(_as_mapping(raw))
    else:
        text = _stringify(raw)

    return text or NO_RESPONSE_TEXT


def _from_list(items: list | tuple) -> str:
    if not items:
        return EMPTY_RESPONSE_TEXT

    first = items[0]
    if isinstance(first, str):
        return first
    if isinstance(first, (Mapping, BaseModel)):
        record = _as_mapping(first)
        found = _field(record, "content")
        if found is None:
            found = _nested_content(record)
        if found is not None:
            return _stringify(found)
    return _stringify(first)


def _from_record(record: Mapping) -> str:
    for found in (_field(record, "content"), _nested_content(record), _field(record, "text")):
        if found is not None:
            return _stringify(found)
    return _stringify(record)


def _as_mapping(value: Mapping | BaseModel) -> Mapping:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def _field(record: Mapping, name: str) -> Any:
    """Return ``record[name]`` when it is present and not None or ""."""
    value = record.get(name)
    if value is None or value == "":
        return None
    return value


def _nested_content(record: Mapping) -> Any:
    message = record.get("message")
    if isinstance(message, (Mapping, BaseModel)):
        return _field(_as_mapping(message), "content")
    return None


def _stringify(value: Any) -> str:
    """Generic conversion: strings as-is, containers as sorted JSON."""
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, sort_keys=True, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return repr(value)
    return str(value)
