"""Unit tests for the mock MCP server."""

import asyncio

import pytest

from mcptest.domain.errors import MockError
from mcptest.mocking import clear_all_mocks, create_mock_server, reset_all_mocks


@pytest.fixture(name="server_and_mocks")
def fixture_server_and_mocks():
    """A mock server with one handler of each kind."""
    return create_mock_server(
        tools={"read-file": {"return_value": {"content": "Hello"}}},
        resources={"file:///etc/motd": {"return_value": "welcome"}},
        prompts={"broken": {"throw_error": "no prompt"}},
    )


def test_handlers_are_backed_by_mocks(server_and_mocks) -> None:
    """Calling a handler records a call on its mock."""
    server, mocks = server_and_mocks

    result = asyncio.run(server.tools["read-file"]({"path": "/tmp/x"}))

    assert result == {"content": "Hello"}
    assert mocks.tools["read-file"].call_count == 1
    assert mocks.tools["read-file"].last_call.args == ({"path": "/tmp/x"},)
    assert asyncio.run(server.resources["file:///etc/motd"]()) == "welcome"


def test_failing_handler(server_and_mocks) -> None:
    """throw_error handlers raise and still count the call."""
    server, mocks = server_and_mocks
    with pytest.raises(MockError, match="no prompt"):
        asyncio.run(server.prompts["broken"]())
    assert mocks.prompts["broken"].call_count == 1


def test_registry_iterates_all_mocks(server_and_mocks) -> None:
    """The registry yields every mock of every kind."""
    _, mocks = server_and_mocks
    assert [mock.name for mock in mocks] == ["read-file", "file:///etc/motd", "broken"]


def test_clear_and_reset_all(server_and_mocks) -> None:
    """Bulk clear keeps behaviour; bulk reset drops it."""
    server, mocks = server_and_mocks
    asyncio.run(server.tools["read-file"]())

    clear_all_mocks(mocks)
    assert mocks.tools["read-file"].call_count == 0
    assert asyncio.run(server.tools["read-file"]()) == {"content": "Hello"}

    reset_all_mocks(mocks)
    assert asyncio.run(server.tools["read-file"]()) is None


def test_empty_server() -> None:
    """Without configuration the server has no handlers."""
    server, mocks = create_mock_server()
    assert not server.tools and not server.resources and not server.prompts
    assert not list(mocks)
