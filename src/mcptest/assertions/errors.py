"""Errors raised by the assertion library."""

from typing import Any

_MISSING: Any = object()


class AssertionFailure(AssertionError):
    """Raised when an expectation does not hold.

    Carries the expected and actual values so reporters and diff tools can
    inspect them without parsing the message.
    """

    def __init__(
        self, message: str, expected: Any = _MISSING, actual: Any = _MISSING
    ) -> None:
        super().__init__(message)
        self.message = message
        self.expected = None if expected is _MISSING else expected
        self.actual = None if actual is _MISSING else actual
        self.has_payload = expected is not _MISSING or actual is not _MISSING


class MatcherUsageError(TypeError):
    """Raised when a matcher is applied to a subject it does not support.

    Distinct from `AssertionFailure`: this signals a mistake in the test
    itself (e.g. ``to_contain`` on an integer), not a failed expectation.
    """

    def __init__(self, matcher: str, requirement: str) -> None:
        super().__init__(f"{matcher}() requires {requirement}")
        self.matcher = matcher
