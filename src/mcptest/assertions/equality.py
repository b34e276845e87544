"""Equality helpers used by the matchers.

- `same_value`: identity for objects, value identity for primitives
  (NaN equals NaN, ``0.0`` equals ``-0.0``, bools only equal bools).
- `deep_equal`: recursive structural equality over mappings, sequences and
  plain objects.
- `matches_object`: partial structural match (extra subject keys ignored).

Cycles: `deep_equal` keeps the pairs of containers currently being compared.
Meeting the same pair again means the structures loop back in the same way,
so that branch compares equal.
"""

import dataclasses
import math
from collections.abc import Mapping, Sequence, Set
from numbers import Number
from typing import Any

_TEXT_TYPES = (str, bytes, bytearray)
PRIMITIVE_TYPES = (type(None), bool, Number, *_TEXT_TYPES)


def is_primitive(value: Any) -> bool:
    """True for None, bools, numbers, strings and bytes."""
    return isinstance(value, PRIMITIVE_TYPES)


def _is_nan(value: Any) -> bool:
    try:
        return math.isnan(value)
    except TypeError:
        return False


def same_value(a: Any, b: Any) -> bool:
    """Identity-style comparison with value semantics for primitives."""
    if a is b:
        return True
    if not (is_primitive(a) and is_primitive(b)):
        return False
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, Number) and isinstance(b, Number):
        if _is_nan(a) and _is_nan(b):
            return True
        return a == b
    if isinstance(a, str) != isinstance(b, str):
        return False
    return a == b


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def object_fields(value: Any) -> dict[str, Any] | None:
    """Return the attribute mapping of a plain object, or None if it has none."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__") and not callable(value):
        return vars(value)
    return None


def deep_equal(a: Any, b: Any) -> bool:
    """Recursive structural equality."""
    return _deep_equal(a, b, set())


def _deep_equal(a: Any, b: Any, active: set[tuple[int, int]]) -> bool:
    # pylint: disable=too-many-return-statements
    if same_value(a, b):
        return True
    if is_primitive(a) or is_primitive(b):
        return False

    pair = (id(a), id(b))
    if pair in active:
        return True
    active.add(pair)
    try:
        if isinstance(a, Mapping) and isinstance(b, Mapping):
            if len(a) != len(b):
                return False
            return all(k in b and _deep_equal(a[k], b[k], active) for k in a)
        if _is_sequence(a) and _is_sequence(b):
            if len(a) != len(b):
                return False
            return all(_deep_equal(x, y, active) for x, y in zip(a, b))
        if isinstance(a, Set) and isinstance(b, Set):
            return a == b
        if type(a) is type(b):
            fields_a, fields_b = object_fields(a), object_fields(b)
            if fields_a is not None and fields_b is not None:
                return _deep_equal(fields_a, fields_b, active)
        return bool(a == b)
    finally:
        active.discard(pair)


def get_key(subject: Any, key: str) -> tuple[bool, Any]:
    """Look ``key`` up as a mapping key or attribute; return ``(found, value)``."""
    if isinstance(subject, Mapping):
        if key in subject:
            return True, subject[key]
        return False, None
    fields = object_fields(subject)
    if fields is not None and key in fields:
        return True, fields[key]
    if hasattr(subject, key):
        return True, getattr(subject, key)
    return False, None


def matches_object(subject: Any, pattern: Mapping[str, Any]) -> bool:
    """True if every key of ``pattern`` exists in ``subject`` with a deep-equal value."""
    for key, expected in pattern.items():
        found, actual = get_key(subject, key)
        if not found or not deep_equal(actual, expected):
            return False
    return True
