"""Rendering of values and structural diffs for failure messages."""

import difflib
import json
from collections.abc import Mapping, Sequence
from typing import Any

from .equality import object_fields

CIRCULAR = "[Circular]"


def format_value(value: Any) -> str:
    """Render a value for a failure message.

    Strings are quoted, callables shown as ``[Function]``, lists and tuples
    rendered element by element and other containers as indented JSON.
    A container met again inside itself is shown as ``[Circular]``.
    """
    return _format(value, frozenset())


def _format(value: Any, active: frozenset[int]) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, (bool, int, float, bytes)):
        return repr(value)
    if callable(value):
        return "[Function]"
    if isinstance(value, (list, tuple)):
        if id(value) in active:
            return CIRCULAR
        inner = active | {id(value)}
        return "[" + ", ".join(_format(v, inner) for v in value) + "]"
    if isinstance(value, Mapping) or object_fields(value) is not None:
        return serialize(value)
    return repr(value)


def _jsonable(value: Any, active: frozenset[int] = frozenset()) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if id(value) in active:
        return CIRCULAR
    inner = active | {id(value)}
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v, inner) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v, inner) for v in value]
    if (fields := object_fields(value)) is not None:
        return {k: _jsonable(v, inner) for k, v in fields.items()}
    return repr(value)


def serialize(value: Any) -> str:
    """Serialise a value to indented JSON, falling back to ``repr`` for leaves."""
    try:
        return json.dumps(_jsonable(value), indent=2)
    except (TypeError, ValueError, RecursionError):
        return repr(value)


def _is_structured(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return (
        isinstance(value, (Mapping, Sequence)) or object_fields(value) is not None
    )


def line_diff(actual: Any, expected: Any) -> str:
    """Return a ``Diff:`` section comparing two structured values.

    Lines only in ``expected`` are prefixed with ``-``, lines only in
    ``actual`` with ``+``. Returns an empty string when either side is not a
    container or when the serialised forms are identical.
    """
    if not (_is_structured(actual) and _is_structured(expected)):
        return ""
    expected_lines = serialize(expected).splitlines()
    actual_lines = serialize(actual).splitlines()
    changes = [
        line
        for line in difflib.ndiff(expected_lines, actual_lines)
        if line.startswith(("- ", "+ "))
    ]
    if not changes:
        return ""
    return "\n\nDiff:\n" + "\n".join(changes)
