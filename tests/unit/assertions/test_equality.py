"""Unit tests for the equality helpers behind the matchers."""

from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mcptest.assertions.equality import deep_equal, matches_object, same_value

# pylint: disable=missing-class-docstring

json_like = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=5), children, max_size=4),
    max_leaves=20,
)


class TestSameValue:
    """Tests for same_value."""

    @staticmethod
    def test_nan_is_nan() -> None:
        """NaN compares equal to NaN."""
        assert same_value(float("nan"), float("nan"))

    @staticmethod
    def test_signed_zeros_are_equal() -> None:
        """Positive and negative zero compare equal."""
        assert same_value(0.0, -0.0)

    @staticmethod
    def test_objects_compare_by_identity() -> None:
        """Equal but distinct containers are not the same value."""
        a = {"x": 1}
        assert same_value(a, a)
        assert not same_value(a, {"x": 1})

    @staticmethod
    @pytest.mark.parametrize(
        "a, b",
        [(True, 1), (1, "1"), (None, 0), ("a", b"a"), (False, 0.0)],
    )
    def test_different_kinds_differ(a, b) -> None:
        """Primitives of different kinds never match."""
        assert not same_value(a, b)

    @staticmethod
    def test_int_and_float_compare_numerically() -> None:
        """Numbers compare by value across int and float."""
        assert same_value(1, 1.0)


class TestDeepEqual:
    """Tests for deep_equal."""

    @staticmethod
    def test_nested_mappings() -> None:
        """Nested structures with the same content are equal."""
        assert deep_equal({"a": 1, "b": {"c": 2}}, {"a": 1, "b": {"c": 2}})

    @staticmethod
    def test_key_count_mismatch() -> None:
        """An extra key makes mappings unequal."""
        assert not deep_equal({"a": 1}, {"a": 1, "b": 2})

    @staticmethod
    def test_sequences_are_ordered() -> None:
        """Lists compare element by element, in order."""
        assert deep_equal([1, 2, 3], [1, 2, 3])
        assert not deep_equal([1, 2, 3], [3, 2, 1])
        assert not deep_equal([1, 2], [1, 2, 3])

    @staticmethod
    def test_list_and_tuple_compare_as_sequences() -> None:
        """Tuples and lists with equal items are equal."""
        assert deep_equal((1, [2]), [1, (2,)])

    @staticmethod
    def test_dataclasses_compare_fields() -> None:
        """Distinct instances of the same dataclass compare by fields."""

        @dataclass
        class Point:
            x: int
            y: int

        assert deep_equal(Point(1, 2), Point(1, 2))
        assert not deep_equal(Point(1, 2), Point(1, 3))

    @staticmethod
    def test_cycles_terminate() -> None:
        """Self-referencing structures with the same shape compare equal."""
        a: list = [1]
        a.append(a)
        b: list = [1]
        b.append(b)
        assert deep_equal(a, b)

    @staticmethod
    @given(json_like)
    def test_reflexive_on_copies(value) -> None:
        """Any JSON-like value equals a structural copy of itself."""
        import copy  # pylint: disable=import-outside-toplevel

        assert deep_equal(value, copy.deepcopy(value))


class TestMatchesObject:
    """Tests for matches_object."""

    @staticmethod
    def test_extra_keys_are_ignored() -> None:
        """Keys absent from the pattern do not matter."""
        assert matches_object({"a": 1, "b": 2}, {"a": 1})

    @staticmethod
    def test_missing_key_fails() -> None:
        """Every pattern key must exist."""
        assert not matches_object({"a": 1}, {"b": None})

    @staticmethod
    def test_attributes_of_objects() -> None:
        """Plain objects are matched on their attributes."""

        class Reply:
            def __init__(self) -> None:
                self.status = "ok"
                self.items = [1, 2]

        assert matches_object(Reply(), {"status": "ok", "items": [1, 2]})
        assert not matches_object(Reply(), {"status": "error"})
