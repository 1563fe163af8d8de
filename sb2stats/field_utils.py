"""Typed attribute access for generic project.json nodes."""

from typing import Any, Dict, List

from .errors import MalformedInputError

_MISSING = object()


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def require_object(node: Any, context: str) -> Dict[str, Any]:
    """Return node if it is a JSON object, otherwise raise."""
    if not isinstance(node, dict):
        raise MalformedInputError(
            f"Expected an object for {context}",
            f"got {_describe(node)}",
        )
    return node


def get_string_attribute(node: Dict[str, Any], key: str) -> str:
    """Read a required string attribute."""
    value = node.get(key, _MISSING)
    if value is _MISSING:
        raise MalformedInputError(f"Missing field: {key}", field=key)
    if not isinstance(value, str):
        raise MalformedInputError(
            f"Field '{key}' must be a string",
            f"got {_describe(value)}",
            field=key,
        )
    return value


def get_array_attribute(node: Dict[str, Any], key: str, required: bool = True) -> List[Any]:
    """Read an array attribute.

    When ``required`` is False an absent key reads as an empty array, which is
    how Scratch 2 stores empty script, variable and list collections. A key
    that is present but holds something other than an array always raises.
    """
    value = node.get(key, _MISSING)
    if value is _MISSING:
        if required:
            raise MalformedInputError(f"Missing field: {key}", field=key)
        return []
    if not isinstance(value, list):
        raise MalformedInputError(
            f"Field '{key}' must be an array",
            f"got {_describe(value)}",
            field=key,
        )
    return value
