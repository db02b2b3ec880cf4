"""Request validation helpers.

Schemas are pydantic models; this module turns pydantic error entries into the
human-readable violation messages returned to API clients. Every field is
checked, so a single response lists all violations at once.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

# Leading location parts that describe where a value came from, not which field it is.
_SOURCE_PREFIXES = {"body", "query", "path"}


def collect_violations(schema: type[BaseModel], payload: Any) -> list[str]:
    """Validate `payload` against `schema` and return every violation message.

    An empty list means the payload is valid. The payload is never modified.
    """
    try:
        schema.model_validate(payload)
    except SchemaValidationError as exc:
        return format_violations(exc.errors())
    return []


def format_violations(errors: Iterable[Mapping[str, Any]]) -> list[str]:
    return [format_violation(error) for error in errors]


def _field_name(loc: Iterable[Any]) -> str:
    parts = list(loc)
    if parts and parts[0] in _SOURCE_PREFIXES:
        parts = parts[1:]
    return ".".join(str(part) for part in parts) or "value"


def format_violation(error: Mapping[str, Any]) -> str:
    field = _field_name(error.get("loc", ()))
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    message = str(error.get("msg", "is invalid"))

    if kind == "missing":
        return f'"{field}" is required'
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f'"{field}" is not allowed to be empty'
        return f'"{field}" length must be at least {ctx.get("min_length")} characters long'
    if kind == "string_too_long":
        return f'"{field}" length must be less than or equal to {ctx.get("max_length")} characters long'
    if kind == "string_pattern_mismatch":
        return f'"{field}" with value "{error.get("input")}" fails to match the required pattern: {ctx.get("pattern")}'
    if kind == "string_type":
        return f'"{field}" must be a string'
    if kind == "extra_forbidden":
        return f'"{field}" is not allowed'
    if kind in {"model_type", "model_attributes_type", "dict_type"}:
        return f'"{field}" must be of type object'
    if kind == "json_invalid":
        return "Request body is not valid JSON"
    if kind == "value_error" and "email" in message.lower():
        return f'"{field}" must be a valid email'
    return f'"{field}" {message[:1].lower()}{message[1:]}'
