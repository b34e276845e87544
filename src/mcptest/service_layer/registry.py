"""Suite registration.

`SuiteRegistry` owns the root list of suites and the *current suite* slot
that declarations attach to. ``describe`` fills the slot for the duration of
its body and always restores the previous occupant, even if the body raises,
so a broken definition cannot leak declarations into the wrong suite.

The module-level primitives (`describe`, `test`, `it`, hooks) act on a
process-wide default registry. Hosts that register and run repeatedly call
`clear_suites` between cycles, or build their own `SuiteRegistry`.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Literal, TypeAlias, TypeVar

from mcptest.domain.errors import RegistrationError
from mcptest.domain.suite import Action, Suite, Test

logger = logging.getLogger(__name__)

HookKind: TypeAlias = Literal["before_each", "after_each", "before_all", "after_all"]
F = TypeVar("F", bound=Callable[..., object])


class SuiteRegistry:
    """Root suites plus the current-suite slot used while defining them."""

    def __init__(self) -> None:
        self.suites: list[Suite] = []
        self._current: Suite | None = None

    @property
    def current(self) -> Suite | None:
        """The suite whose body is being defined, if any."""
        return self._current

    @contextmanager
    def _entered(self, suite: Suite) -> Iterator[Suite]:
        previous = self._current
        self._current = suite
        try:
            yield suite
        finally:
            self._current = previous

    def _require_current(self, primitive: str) -> Suite:
        if self._current is None:
            raise RegistrationError(primitive)
        return self._current

    def describe(
        self,
        name: str,
        fn: Callable[[], object],
        *,
        skip: bool = False,
        only: bool = False,
    ) -> Suite:
        """Register a suite and run its definition body.

        Skipped suites are registered without running their body.

        Raises:
            RegistrationError: If ``fn`` is a coroutine function.
            Exception: Whatever the definition body raises.
        """
        if inspect.iscoroutinefunction(fn):
            raise RegistrationError("describe", "body must be a synchronous function")

        suite = Suite(name=name, skip=skip, only=only)
        if self._current is not None:
            self._current.suites.append(suite)
        else:
            self.suites.append(suite)
        logger.debug("Registered suite %r (skip=%s, only=%s)", name, skip, only)

        if not skip:
            with self._entered(suite):
                fn()
        return suite

    def add_test(
        self,
        name: str,
        fn: Action,
        *,
        skip: bool = False,
        only: bool = False,
        primitive: str = "test",
    ) -> Test:
        """Append a test to the current suite."""
        suite = self._require_current(primitive)
        declared = Test(name=name, fn=fn, skip=skip, only=only)
        suite.tests.append(declared)
        return declared

    def add_hook(self, kind: HookKind, fn: Action) -> None:
        """Append a hook of the given kind to the current suite."""
        suite = self._require_current(kind)
        getattr(suite, kind).append(fn)

    def clear(self) -> None:
        """Forget every registered suite and reset the current-suite slot."""
        self.suites.clear()
        self._current = None


_default_registry = SuiteRegistry()


def get_registry() -> SuiteRegistry:
    """Return the process-wide default registry."""
    return _default_registry


def clear_suites() -> None:
    """Clear the default registry."""
    _default_registry.clear()


def _declare(
    register: Callable[[str, F], object], name: str, fn: F | None
) -> F | Callable[[F], F]:
    if fn is None:

        def decorator(func: F) -> F:
            register(name, func)
            return func

        return decorator
    register(name, fn)
    return fn


class _Describe:
    """``describe(name, fn)`` or ``@describe(name)``; see `SuiteRegistry.describe`."""

    def __call__(self, name: str, fn: F | None = None) -> F | Callable[[F], F]:
        return _declare(_default_registry.describe, name, fn)

    def skip(self, name: str, fn: F | None = None) -> F | Callable[[F], F]:
        """Register a suite that is never run (its body is not executed)."""
        return _declare(
            lambda n, f: _default_registry.describe(n, f, skip=True), name, fn
        )

    def only(self, name: str, fn: F | None = None) -> F | Callable[[F], F]:
        """Register a suite that excludes its siblings lacking ``only``."""
        return _declare(
            lambda n, f: _default_registry.describe(n, f, only=True), name, fn
        )


class _Test:
    """``test(name, fn)`` or ``@test(name)``; must run inside a suite body."""

    __test__ = False  # keep pytest from collecting the primitive itself

    def __init__(self, primitive: str) -> None:
        self._primitive = primitive

    def __call__(self, name: str, fn: F | None = None) -> F | Callable[[F], F]:
        return _declare(
            lambda n, f: _default_registry.add_test(n, f, primitive=self._primitive),
            name,
            fn,
        )

    def skip(self, name: str, fn: F | None = None) -> F | Callable[[F], F]:
        """Register a test that is reported as skipped and never executed."""
        primitive = f"{self._primitive}.skip"
        return _declare(
            lambda n, f: _default_registry.add_test(
                n, f, skip=True, primitive=primitive
            ),
            name,
            fn,
        )

    def only(self, name: str, fn: F | None = None) -> F | Callable[[F], F]:
        """Register a test that excludes its siblings lacking ``only``."""
        primitive = f"{self._primitive}.only"
        return _declare(
            lambda n, f: _default_registry.add_test(
                n, f, only=True, primitive=primitive
            ),
            name,
            fn,
        )


describe = _Describe()
test = _Test("test")
it = _Test("it")


def before_each(fn: F) -> F:
    """Run ``fn`` before every test of the current suite."""
    _default_registry.add_hook("before_each", fn)
    return fn


def after_each(fn: F) -> F:
    """Run ``fn`` after every test of the current suite, even failing ones."""
    _default_registry.add_hook("after_each", fn)
    return fn


def before_all(fn: F) -> F:
    """Run ``fn`` once before the current suite's tests."""
    _default_registry.add_hook("before_all", fn)
    return fn


def after_all(fn: F) -> F:
    """Run ``fn`` once after the current suite's tests."""
    _default_registry.add_hook("after_all", fn)
    return fn
