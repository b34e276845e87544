"""Suite tree value objects.

A `Suite` is built while its ``describe`` body runs and is treated as
immutable afterwards. Tests are frozen from the moment they are declared.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

# pylint: disable=too-many-instance-attributes

Action = Callable[[], Awaitable[None] | None]
"""A zero-argument test body or hook; may be a plain function or ``async def``."""


@dataclass(frozen=True)
class Test:
    """One ``test()`` declaration."""

    __test__ = False  # keep pytest from collecting this class

    name: str
    fn: Action
    skip: bool = False
    only: bool = False


@dataclass
class Suite:
    """One ``describe()`` block.

    Tests, child suites and hooks keep their declaration order.
    """

    name: str
    tests: list[Test] = field(default_factory=list)
    suites: list["Suite"] = field(default_factory=list)
    before_each: list[Action] = field(default_factory=list)
    after_each: list[Action] = field(default_factory=list)
    before_all: list[Action] = field(default_factory=list)
    after_all: list[Action] = field(default_factory=list)
    skip: bool = False
    only: bool = False

    @property
    def has_only(self) -> bool:
        """True if any direct child test or suite is marked ``only``."""
        return any(t.only for t in self.tests) or any(s.only for s in self.suites)
