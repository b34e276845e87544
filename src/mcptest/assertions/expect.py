"""Chained expectations.

``expect(value)`` captures a subject and exposes matchers that either return
quietly or raise `AssertionFailure`. ``not_`` flips the polarity of the
next matcher; ``resolves`` and ``rejects`` await an awaitable subject first
and return coroutines that must themselves be awaited.

Example:
    ```py
    expect(2 + 2).to_be(4)
    expect({"a": 1}).not_.to_equal({"a": 2})
    await expect(tool.execute()).rejects.to_throw("Tool failed")
    ```
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from mcptest.mocking.mock import MockFunction

from .equality import deep_equal, is_primitive, matches_object, same_value
from .errors import _MISSING, AssertionFailure, MatcherUsageError
from .formatting import format_value, line_diff

NOT_AWAITABLE_MSG = "Expected value to be a pending asynchronous value"
RESOLVED_NOT_REJECTED_MSG = "Expected promise to reject, but it resolved"

ThrowMatcher = str | re.Pattern[str] | BaseException | type[BaseException] | None


def _throw_outcome(
    thrown: BaseException | None, expected: ThrowMatcher
) -> tuple[bool, str, Any, Any]:
    """Evaluate a raised error against a ``to_throw`` argument.

    Returns:
        tuple: ``(passed, message, expected_payload, actual_payload)``.
    """
    if expected is None:
        actual = "no error" if thrown is None else type(thrown).__name__
        return thrown is not None, "Expected function to throw", "error", actual

    message = None if thrown is None else str(thrown)
    if isinstance(expected, str):
        passed = message is not None and expected in message
        return passed, f'Expected error message to include "{expected}"', expected, message
    if isinstance(expected, re.Pattern):
        passed = message is not None and expected.search(message) is not None
        return (
            passed,
            f"Expected error message to match /{expected.pattern}/",
            expected,
            message,
        )

    if isinstance(expected, type) and issubclass(expected, BaseException):
        error_type = expected
    elif isinstance(expected, BaseException):
        error_type = type(expected)
    else:
        raise MatcherUsageError(
            "to_throw",
            "a message, a compiled pattern, an exception instance or an exception class",
        )
    actual_name = None if thrown is None else type(thrown).__name__
    return (
        isinstance(thrown, error_type),
        f"Expected error to be instance of {error_type.__name__}",
        error_type.__name__,
        actual_name,
    )


def _as_mock(value: Any, matcher: str) -> MockFunction:
    if not isinstance(value, MockFunction):
        raise MatcherUsageError(matcher, "a mock function")
    return value


class Expectation:
    """Matchers over a captured subject.

    Args:
        value: The subject under test.
        negated: Invert the outcome of every matcher (see `not_`).
    """

    def __init__(self, value: Any, negated: bool = False) -> None:
        self.value = value
        self.negated = negated

    # --- modifiers ---

    @property
    def not_(self) -> Expectation:
        """An expectation with inverted polarity."""
        return Expectation(self.value, not self.negated)

    @property
    def resolves(self) -> ResolvesProjection:
        """Await the subject and apply the next matcher to its result."""
        if not inspect.isawaitable(self.value):
            raise AssertionFailure(NOT_AWAITABLE_MSG)
        return ResolvesProjection(self.value, self.negated)

    @property
    def rejects(self) -> RejectsProjection:
        """Await the subject and apply the next matcher to the error it raises."""
        if not inspect.isawaitable(self.value):
            raise AssertionFailure(NOT_AWAITABLE_MSG)
        return RejectsProjection(self.value, self.negated)

    # --- core ---

    def _assert(
        self,
        passed: bool,
        message: str,
        expected: Any = _MISSING,
        actual: Any = _MISSING,
    ) -> None:
        if self.negated:
            passed = not passed
            message = message.replace("Expected", "Expected not", 1)
        if not passed:
            raise AssertionFailure(message, expected, actual)

    # --- value matchers ---

    def to_be(self, expected: Any) -> None:
        """Identity for objects; value identity for primitives (NaN is NaN)."""
        self._assert(
            same_value(self.value, expected),
            f"Expected {format_value(self.value)} to be {format_value(expected)}",
            expected,
            self.value,
        )

    def to_equal(self, expected: Any) -> None:
        """Recursive structural equality."""
        passed = deep_equal(self.value, expected)
        diff = "" if passed else line_diff(self.value, expected)
        self._assert(
            passed,
            f"Expected {format_value(self.value)} to equal {format_value(expected)}{diff}",
            expected,
            self.value,
        )

    def to_be_none(self) -> None:
        self._assert(
            self.value is None,
            f"Expected {format_value(self.value)} to be None",
            None,
            self.value,
        )

    def to_be_undefined(self) -> None:
        """Python has a single absence marker, so this is `to_be_none`."""
        self._assert(
            self.value is None,
            f"Expected {format_value(self.value)} to be undefined",
            None,
            self.value,
        )

    def to_be_defined(self) -> None:
        self._assert(
            self.value is not None, "Expected value to be defined", "defined", self.value
        )

    def to_be_truthy(self) -> None:
        self._assert(
            bool(self.value),
            f"Expected {format_value(self.value)} to be truthy",
            "truthy",
            self.value,
        )

    def to_be_falsy(self) -> None:
        self._assert(
            not self.value,
            f"Expected {format_value(self.value)} to be falsy",
            "falsy",
            self.value,
        )

    def to_contain(self, item: Any) -> None:
        """Element membership for sequences, substring for strings."""
        if isinstance(self.value, str):
            if not isinstance(item, str):
                raise MatcherUsageError("to_contain", "a string item for a string subject")
            self._assert(
                item in self.value,
                f'Expected string to contain "{item}"',
                item,
                self.value,
            )
        elif isinstance(self.value, Sequence) and not isinstance(
            self.value, (bytes, bytearray)
        ):
            self._assert(
                any(same_value(element, item) for element in self.value),
                f"Expected array to contain {format_value(item)}",
                item,
                self.value,
            )
        else:
            raise MatcherUsageError("to_contain", "an array or string")

    def to_have_length(self, length: int) -> None:
        try:
            actual = len(self.value)
        except TypeError:
            actual = None
        self._assert(
            actual == length,
            f"Expected length {actual} to be {length}",
            length,
            actual,
        )

    def to_match_object(self, pattern: Mapping[str, Any]) -> None:
        """Partial structural match: keys absent from ``pattern`` are ignored."""
        if self.value is None or is_primitive(self.value):
            raise MatcherUsageError("to_match_object", "an object")
        if not isinstance(pattern, Mapping):
            raise MatcherUsageError("to_match_object", "a mapping pattern")
        passed = matches_object(self.value, pattern)
        diff = "" if passed else line_diff(self.value, pattern)
        self._assert(
            passed,
            f"Expected object to match {format_value(pattern)}{diff}",
            pattern,
            self.value,
        )

    # --- callable matchers ---

    def to_throw(self, expected: ThrowMatcher = None) -> None:
        """Call the subject and check what it raises.

        Args:
            expected: Optional message substring, compiled pattern, exception
                instance (matched by type) or exception class.
        """
        if not callable(self.value):
            raise MatcherUsageError("to_throw", "a function")
        thrown: BaseException | None = None
        try:
            result = self.value()
        except Exception as e:  # pylint: disable=broad-except
            thrown = e
        else:
            if inspect.iscoroutine(result):
                result.close()
                raise MatcherUsageError(
                    "to_throw", "a synchronous function; use rejects for coroutines"
                )
        self._assert(*_throw_outcome(thrown, expected))

    # --- mock matchers ---

    def to_have_been_called(self) -> None:
        mock = _as_mock(self.value, "to_have_been_called")
        self._assert(
            len(mock.calls) > 0,
            "Expected mock to have been called",
            "called",
            "called" if mock.calls else "not called",
        )

    def to_have_been_called_times(self, times: int) -> None:
        mock = _as_mock(self.value, "to_have_been_called_times")
        self._assert(
            len(mock.calls) == times,
            f"Expected mock to have been called {times} times, "
            f"but was called {len(mock.calls)} times",
            times,
            len(mock.calls),
        )

    def to_have_been_called_with(self, *args: Any, **kwargs: Any) -> None:
        """At least one call received deep-equal positional and keyword arguments."""
        mock = _as_mock(self.value, "to_have_been_called_with")
        passed = any(
            len(call.args) == len(args)
            and all(deep_equal(a, b) for a, b in zip(call.args, args))
            and deep_equal(call.kwargs, kwargs)
            for call in mock.calls
        )
        shown = format_value(list(args))
        if kwargs:
            shown += f" and keywords {format_value(kwargs)}"
        self._assert(
            passed,
            f"Expected mock to have been called with {shown}",
            list(args),
            [list(call.args) for call in mock.calls],
        )


class _Projection:
    """Base for matchers applied after awaiting the subject."""

    def __init__(self, awaitable: Awaitable[Any], negated: bool) -> None:
        self._awaitable = awaitable
        self._negated = negated

    async def _settle(self) -> Any:
        raise NotImplementedError

    def __getattr__(self, name: str) -> Callable[..., Awaitable[None]]:
        if name.startswith("_") or not callable(getattr(Expectation, name, None)):
            raise AttributeError(name)

        async def _apply(*args: Any, **kwargs: Any) -> None:
            value = await self._settle()
            getattr(Expectation(value, self._negated), name)(*args, **kwargs)

        _apply.__name__ = name
        return _apply


class ResolvesProjection(_Projection):
    """Matchers applied to the value an awaitable resolves to."""

    @property
    def not_(self) -> ResolvesProjection:
        return ResolvesProjection(self._awaitable, not self._negated)

    async def _settle(self) -> Any:
        return await self._awaitable


class RejectsProjection(_Projection):
    """Matchers applied to the error an awaitable raises."""

    @property
    def not_(self) -> RejectsProjection:
        return RejectsProjection(self._awaitable, not self._negated)

    async def _capture(self) -> BaseException | None:
        try:
            await self._awaitable
        except Exception as e:  # pylint: disable=broad-except
            return e
        return None

    async def _settle(self) -> Any:
        if (error := await self._capture()) is None:
            raise AssertionFailure(RESOLVED_NOT_REJECTED_MSG)
        return error

    async def to_throw(self, expected: ThrowMatcher = None) -> None:
        """Await the subject; it must raise, optionally matching ``expected``."""
        thrown = await self._capture()
        if thrown is None:
            # Holds regardless of polarity: only the error check is negated.
            raise AssertionFailure(RESOLVED_NOT_REJECTED_MSG)
        checker = Expectation(None, self._negated)
        checker._assert(*_throw_outcome(thrown, expected))  # pylint: disable=protected-access


def expect(value: Any) -> Expectation:
    """Start an expectation chain on ``value``."""
    return Expectation(value)
