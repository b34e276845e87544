"""Harness-level error definitions."""

from pathlib import Path

# ============================================================================
#                           General harness errors
# ============================================================================


class HarnessError(Exception):
    """Base class for errors raised by the harness itself."""


class RegistrationError(HarnessError):
    """Raised when the registration API is misused.

    Declaring a test or a hook outside of a suite definition is a programmer
    error; it surfaces immediately while the definition is being executed.
    """

    def __init__(self, primitive: str, reason: str | None = None) -> None:
        if reason is None:
            reason = "must be called inside describe()"
        super().__init__(f"{primitive}() {reason}")
        self.primitive = primitive


class MockError(HarnessError):
    """Raised by a mock whose failure was configured with a plain message."""


# ============================================================================
#                           Run-phase errors
# ============================================================================


class SuiteHookError(HarnessError):
    """Raised when a before-all or after-all hook fails.

    These failures are fatal: they are not converted into a failing test and
    abort the remaining run. The original error is chained as ``__cause__``.
    """

    def __init__(self, suite: str, phase: str, cause: BaseException) -> None:
        super().__init__(f"{phase} hook failed in suite '{suite}': {cause}")
        self.suite = suite
        self.phase = phase


class TestFileLoadError(HarnessError):
    """Raised when a test file cannot be imported."""

    __test__ = False  # keep pytest from collecting this class

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Error loading test file {path}: {cause}")
        self.path = path
