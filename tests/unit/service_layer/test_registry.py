"""Unit tests for suite registration."""

import pytest

from mcptest.domain.errors import RegistrationError
from mcptest.service_layer import registry as registry_module
from mcptest.service_layer.registry import (
    after_all,
    after_each,
    before_all,
    before_each,
    describe,
    get_registry,
    it,
    test,
)


class TestSuiteRegistry:
    """Tests for SuiteRegistry methods."""

    @staticmethod
    def test_nested_suites_attach_to_parent(registry) -> None:
        """A describe inside a describe becomes a child suite."""

        def outer():
            registry.add_test("a", lambda: None)
            registry.describe("Inner", lambda: registry.add_test("b", lambda: None))

        suite = registry.describe("Outer", outer)

        assert registry.suites == [suite]
        assert [t.name for t in suite.tests] == ["a"]
        assert [s.name for s in suite.suites] == ["Inner"]
        assert [t.name for t in suite.suites[0].tests] == ["b"]
        assert registry.current is None

    @staticmethod
    def test_current_is_restored_after_error(registry) -> None:
        """A raising body leaves no current suite behind."""

        def broken():
            raise RuntimeError("bad body")

        with pytest.raises(RuntimeError, match="bad body"):
            registry.describe("Broken", broken)
        assert registry.current is None
        with pytest.raises(RegistrationError):
            registry.add_test("orphan", lambda: None)

    @staticmethod
    def test_add_test_outside_describe(registry) -> None:
        """Tests need an enclosing suite."""
        with pytest.raises(RegistrationError, match=r"^test\(\) must be called"):
            registry.add_test("orphan", lambda: None)

    @staticmethod
    def test_hook_outside_describe(registry) -> None:
        """Hooks need an enclosing suite."""
        with pytest.raises(RegistrationError, match=r"^before_each\(\)"):
            registry.add_hook("before_each", lambda: None)

    @staticmethod
    def test_async_body_is_rejected(registry) -> None:
        """Suite bodies must be synchronous."""

        async def body():
            return None

        with pytest.raises(RegistrationError, match="synchronous"):
            registry.describe("Async", body)
        assert not registry.suites

    @staticmethod
    def test_skipped_suite_body_is_not_run(registry) -> None:
        """A skipped suite is registered without running its body."""
        calls = []
        suite = registry.describe("Skipped", lambda: calls.append(1), skip=True)
        assert suite.skip
        assert not calls
        assert registry.suites == [suite]

    @staticmethod
    def test_clear(registry) -> None:
        """clear forgets every suite."""
        registry.describe("S", lambda: None)
        registry.clear()
        assert not registry.suites


class TestPrimitives:
    """Tests for the module-level declaration primitives."""

    @staticmethod
    def test_decorator_and_direct_forms() -> None:
        """Primitives work as decorators and as plain calls."""

        @describe("Suite")
        def suite_body():
            @test("decorated")
            def decorated():
                pass

            test("direct", lambda: None)
            it("it form", lambda: None)

        suite = get_registry().suites[0]
        assert suite.name == "Suite"
        assert [t.name for t in suite.tests] == ["decorated", "direct", "it form"]
        assert callable(suite_body)

    @staticmethod
    def test_skip_and_only_flags() -> None:
        """skip and only variants set the flags on their declarations."""

        @describe("Suite")
        def _():
            test.skip("skipped", lambda: None)
            it.only("focused", lambda: None)
            describe.only("Focused child", lambda: None)
            describe.skip("Skipped child", lambda: None)

        suite = get_registry().suites[0]
        assert suite.tests[0].skip and not suite.tests[0].only
        assert suite.tests[1].only
        assert suite.suites[0].only
        assert suite.suites[1].skip
        assert suite.has_only

    @staticmethod
    def test_primitive_name_in_error() -> None:
        """Errors name the primitive that was misused."""
        with pytest.raises(RegistrationError) as exc_info:
            it.skip("orphan", lambda: None)
        assert exc_info.value.primitive == "it.skip"

    @staticmethod
    def test_hooks_register_in_order() -> None:
        """Each hook kind keeps its declaration order."""

        def first():
            pass

        def second():
            pass

        @describe("Hooks")
        def _():
            before_each(first)
            before_each(second)
            after_each(first)
            before_all(second)
            after_all(first)

        suite = get_registry().suites[0]
        assert suite.before_each == [first, second]
        assert suite.after_each == [first]
        assert suite.before_all == [second]
        assert suite.after_all == [first]

    @staticmethod
    def test_hook_decorators_return_function() -> None:
        """Hook primitives return the function they register."""

        @describe("S")
        def _():
            @before_each
            def setup():
                pass

            assert setup.__name__ == "setup"

    @staticmethod
    def test_clear_suites_empties_default_registry() -> None:
        """clear_suites resets the process-wide registry."""
        describe("S", lambda: None)
        registry_module.clear_suites()
        assert not get_registry().suites
