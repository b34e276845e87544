"""Mocks, spies and mock MCP servers."""

from .mock import (
    UNSET,
    CallRecord,
    MockFunction,
    MockOptions,
    create_mock,
    mock_prompt,
    mock_resource,
    mock_tool,
)
from .server import (
    MockRegistry,
    MockServer,
    clear_all_mocks,
    create_mock_server,
    reset_all_mocks,
)
from .spy import Spy, restore_spy, spy_on

__all__ = [
    "UNSET",
    "CallRecord",
    "MockFunction",
    "MockOptions",
    "MockRegistry",
    "MockServer",
    "Spy",
    "clear_all_mocks",
    "create_mock",
    "create_mock_server",
    "mock_prompt",
    "mock_resource",
    "mock_tool",
    "reset_all_mocks",
    "restore_spy",
    "spy_on",
]
