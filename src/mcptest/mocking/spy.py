"""Spies: mock functions installed over an existing attribute.

`spy_on` swaps ``owner.attribute`` for a recording wrapper that delegates to
the original callable. The swap is reversible through `Spy.restore`, or by
using the spy as a context manager.

Single-owner contract: if other code reassigns the attribute while the spy
is installed, restoring puts the original back regardless.
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any

from .mock import MockFunction, MockOptions

logger = logging.getLogger(__name__)


def _is_slot(owner: Any, attribute: str) -> bool:
    """True if ``attribute`` is a ``__slots__`` entry of the owner's class."""
    for cls in type(owner).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        if attribute in slots:
            return True
    return False


class Spy(MockFunction):
    """A `MockFunction` bound to an ``(owner, attribute)`` pair.

    Args:
        owner: Object whose attribute is intercepted.
        attribute: Name of the callable attribute to wrap.

    Raises:
        AttributeError: If ``owner`` has no such attribute.
        TypeError: If the attribute is not callable.
    """

    def __init__(self, owner: Any, attribute: str) -> None:
        original = getattr(owner, attribute)
        if not callable(original):
            raise TypeError(f"Cannot spy on non-callable attribute {attribute!r}")
        super().__init__(attribute, MockOptions(implementation=original))
        self.owner = owner
        self.attribute = attribute
        # Keep whatever was stored on the owner itself so restore is exact
        # (e.g. not re-binding a method onto an instance).
        in_dict = attribute in getattr(owner, "__dict__", {})
        self._had_own_attribute = in_dict or _is_slot(owner, attribute)
        self._stored = owner.__dict__[attribute] if in_dict else original
        self.original: Callable[..., Any] = original
        self.restored = False

    def install(self) -> Spy:
        """Replace the attribute on the owner with the recording wrapper."""
        setattr(self.owner, self.attribute, self._wrapper())
        logger.debug("Spy installed on %r.%s", self.owner, self.attribute)
        return self

    def _wrapper(self) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(self.original):

            @functools.wraps(self.original)
            async def _async_spy(*args: Any, **kwargs: Any) -> Any:
                return await self.execute(*args, **kwargs)

            return _async_spy

        @functools.wraps(self.original)
        def _spy(*args: Any, **kwargs: Any) -> Any:
            return self.execute_sync(*args, **kwargs)

        return _spy

    def restore(self) -> None:
        """Put the original attribute back. Calling it again does nothing."""
        if self.restored:
            return
        if self._had_own_attribute:
            setattr(self.owner, self.attribute, self._stored)
        else:
            # The original came from the class; drop the instance override.
            delattr(self.owner, self.attribute)
        self.restored = True
        logger.debug("Spy restored on %r.%s", self.owner, self.attribute)

    def __enter__(self) -> Spy:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.restore()


def spy_on(owner: Any, attribute: str) -> Spy:
    """Install a spy over ``owner.attribute`` and return it.

    Example:
        ```py
        with spy_on(client, "fetch") as spy:
            client.fetch("a")
        assert spy.call_count == 1
        ```
    """
    return Spy(owner, attribute).install()


def restore_spy(spy: Spy) -> None:
    """Restore the attribute a spy was installed over."""
    spy.restore()
