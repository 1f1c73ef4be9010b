"""Parsing untrusted input (path ids and request bodies) into typed values."""

from __future__ import annotations

import re
from typing import Any

from pydantic import ValidationError

from .errors import InputError
from .schemas import EventFields, EventPayload

_ID_RE = re.compile(r"\s*[+-]?\d+\s*")

# range of the 32-bit integer primary key column
ID_MIN = -(2 ** 31)
ID_MAX = 2 ** 31 - 1


def parse_event_id(raw: str) -> int:
    """Path ids arrive as text; anything but a plain integer is rejected."""
    if not isinstance(raw, str) or not _ID_RE.fullmatch(raw):
        raise InputError("Invalid ID")
    event_id = int(raw)
    if not ID_MIN <= event_id <= ID_MAX:
        raise InputError("Invalid ID")
    return event_id


def _first_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return InputError.message
    first = errors[0]
    cause = (first.get("ctx") or {}).get("error")
    if first.get("type") == "value_error" and cause is not None:
        return str(cause)
    return InputError.message


def validate_event(raw: Any) -> EventFields:
    """
    Strict parse of the raw body, then the pure conversion step.
    Only the first failing rule is reported.
    """
    try:
        payload = EventPayload.model_validate(raw)
    except ValidationError as exc:
        raise InputError(_first_message(exc)) from exc
    return payload.to_fields()
