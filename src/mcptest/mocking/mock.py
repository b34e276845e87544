"""Call-recording mock functions.

A `MockFunction` stands in for an external handler (an MCP tool, resource or
prompt). Every invocation is recorded as a `CallRecord`, whether the
configured behaviour returns or raises, so call-count assertions see failing
calls too.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from mcptest.domain.errors import MockError

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class _Unset:
    """Sentinel type for options that were not given (``None`` is a valid value)."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def _as_error(error: BaseException | str) -> BaseException:
    return MockError(error) if isinstance(error, str) else error


@dataclass(frozen=True)
class MockOptions:
    """Initial behaviour of a mock.

    At most one option governs the behaviour, in this order of precedence:
    ``implementation``, ``return_value`` (an explicit ``None`` counts), then
    ``throw_error`` (a string is wrapped in `MockError`).
    """

    return_value: Any = UNSET
    implementation: Callable[..., Any] | None = None
    throw_error: BaseException | str | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> MockOptions:
        """Build options from a mapping such as a mock-server config entry.

        Raises:
            TypeError: If the mapping contains unknown keys.
        """
        unknown = set(options) - {"return_value", "implementation", "throw_error"}
        if unknown:
            raise TypeError(f"Unknown mock options: {sorted(unknown)}")
        return cls(**options)

    def build_implementation(self) -> Callable[..., Any] | None:
        """Translate the options into a behaviour callable (or None)."""
        if self.implementation is not None:
            return self.implementation
        if self.return_value is not UNSET:
            value = self.return_value
            return lambda *args, **kwargs: value
        if self.throw_error is not None:
            error = _as_error(self.throw_error)

            def _raise(*args: Any, **kwargs: Any) -> Any:
                raise error

            return _raise
        return None


@dataclass
class CallRecord:
    """One recorded invocation of a mock."""

    args: tuple[Any, ...]
    kwargs: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=lambda: time.time() * 1000)
    result: Any = None
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        """True if the behaviour raised for this call."""
        return self.error is not None


class MockFunction:
    """A stand-in callable that records its invocations.

    Args:
        name: Identifying name, used in messages and reports.
        options: Initial behaviour, as `MockOptions` or an equivalent mapping.

    Example:
        ```py
        read_file = MockFunction("read-file", MockOptions(return_value={"size": 5}))
        result = await read_file({"path": "/tmp/a.txt"})
        ```
    """

    def __init__(
        self, name: str, options: MockOptions | Mapping[str, Any] | None = None
    ) -> None:
        if isinstance(options, Mapping):
            options = MockOptions.from_mapping(options)
        self.name = name
        self.implementation: Callable[..., Any] | None = (
            options.build_implementation() if options is not None else None
        )
        self.calls: list[CallRecord] = []
        self.return_values: list[Any] = []
        self.errors: list[BaseException] = []

    def __repr__(self) -> str:
        return f"<MockFunction {self.name!r} calls={len(self.calls)}>"

    # --- invocation ---

    def _begin(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> CallRecord:
        logger.debug("Mock %s called with args=%r kwargs=%r", self.name, args, kwargs)
        return CallRecord(args=args, kwargs=kwargs)

    def _succeed(self, call: CallRecord, result: Any) -> Any:
        call.result = result
        self.calls.append(call)
        self.return_values.append(result)
        return result

    def _fail(self, call: CallRecord, error: BaseException) -> None:
        call.error = error
        self.calls.append(call)
        self.errors.append(error)
        logger.debug("Mock %s raised %r", self.name, error)

    async def execute(self, *args: Any, **kwargs: Any) -> Any:
        """Record a call and run the current behaviour, awaiting its result.

        Raises:
            Exception: Whatever the behaviour raises, after it has been recorded.
        """
        call = self._begin(args, kwargs)
        try:
            result = self.implementation(*args, **kwargs) if self.implementation else None
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            self._fail(call, e)
            raise
        return self._succeed(call, result)

    __call__ = execute

    def execute_sync(self, *args: Any, **kwargs: Any) -> Any:
        """Record a call for a synchronous caller.

        Awaitable results are recorded and returned as-is, without awaiting.
        """
        call = self._begin(args, kwargs)
        try:
            result = self.implementation(*args, **kwargs) if self.implementation else None
        except Exception as e:
            self._fail(call, e)
            raise
        return self._succeed(call, result)

    # --- inspection ---

    @property
    def call_count(self) -> int:
        """Number of recorded calls, failed ones included."""
        return len(self.calls)

    @property
    def last_call(self) -> CallRecord | None:
        """The most recent call, or None if never called."""
        return self.calls[-1] if self.calls else None

    # --- behaviour mutators ---

    def mock_return_value(self, value: Any) -> MockFunction:
        """Always return ``value`` from now on."""
        self.implementation = lambda *args, **kwargs: value
        return self

    def mock_return_value_once(self, value: Any) -> MockFunction:
        """Return ``value`` for the next call only, then fall back to the previous behaviour."""
        previous = self.implementation
        used = False

        def _once(*args: Any, **kwargs: Any) -> Any:
            nonlocal used
            if not used:
                used = True
                return value
            return previous(*args, **kwargs) if previous else None

        self.implementation = _once
        return self

    def mock_resolved_value(self, value: Any) -> MockFunction:
        """Always return an awaitable resolving to ``value``."""

        async def _resolve(*args: Any, **kwargs: Any) -> Any:
            return value

        self.implementation = _resolve
        return self

    def mock_rejected_value(self, error: BaseException | str) -> MockFunction:
        """Always return an awaitable failing with ``error`` (strings become `MockError`)."""

        async def _reject(*args: Any, **kwargs: Any) -> Any:
            raise _as_error(error)

        self.implementation = _reject
        return self

    def mock_implementation(self, fn: Callable[..., Any]) -> MockFunction:
        """Use ``fn`` as the behaviour."""
        self.implementation = fn
        return self

    def mock_clear(self) -> None:
        """Forget recorded calls, return values and errors; keep the behaviour."""
        self.calls = []
        self.return_values = []
        self.errors = []

    def mock_reset(self) -> None:
        """Clear the recorded history and remove the behaviour."""
        self.mock_clear()
        self.implementation = None


def create_mock(
    name: str, options: MockOptions | Mapping[str, Any] | None = None
) -> MockFunction:
    """Create a generic mock function."""
    return MockFunction(name, options)


def mock_tool(
    name: str, options: MockOptions | Mapping[str, Any] | None = None
) -> MockFunction:
    """Create a mock MCP tool handler."""
    return MockFunction(name, options)


def mock_resource(
    uri: str, options: MockOptions | Mapping[str, Any] | None = None
) -> MockFunction:
    """Create a mock MCP resource handler, named by its URI."""
    return MockFunction(uri, options)


def mock_prompt(
    name: str, options: MockOptions | Mapping[str, Any] | None = None
) -> MockFunction:
    """Create a mock MCP prompt handler."""
    return MockFunction(name, options)
