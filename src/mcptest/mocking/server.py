"""Mock MCP server assembly.

`create_mock_server` builds a server-shaped object whose tool, resource and
prompt handlers are backed by fresh `MockFunction` instances, so tests can
both call handlers and assert on how they were called.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from .mock import MockFunction, MockOptions, mock_prompt, mock_resource, mock_tool

Handler: TypeAlias = Callable[..., Awaitable[Any]]
MockConfig: TypeAlias = Mapping[str, MockOptions | Mapping[str, Any]]


@dataclass
class MockServer:
    """Handlers keyed by name, as exposed by an MCP server."""

    tools: dict[str, Handler] = field(default_factory=dict)
    resources: dict[str, Handler] = field(default_factory=dict)
    prompts: dict[str, Handler] = field(default_factory=dict)


@dataclass
class MockRegistry:
    """The mocks backing each handler of a `MockServer`."""

    tools: dict[str, MockFunction] = field(default_factory=dict)
    resources: dict[str, MockFunction] = field(default_factory=dict)
    prompts: dict[str, MockFunction] = field(default_factory=dict)

    def __iter__(self) -> Iterator[MockFunction]:
        yield from self.tools.values()
        yield from self.resources.values()
        yield from self.prompts.values()


def _handler_for(mock: MockFunction) -> Handler:
    async def _handler(*args: Any, **kwargs: Any) -> Any:
        return await mock.execute(*args, **kwargs)

    _handler.__name__ = f"mock_{mock.name}"
    return _handler


def create_mock_server(
    tools: MockConfig | None = None,
    resources: MockConfig | None = None,
    prompts: MockConfig | None = None,
) -> tuple[MockServer, MockRegistry]:
    """Build a mock server and the registry of mocks behind it.

    Args:
        tools: Tool name -> behaviour options (``return_value``,
            ``implementation`` or ``throw_error``).
        resources: Resource URI -> behaviour options.
        prompts: Prompt name -> behaviour options.

    Returns:
        tuple[MockServer, MockRegistry]: The server handlers and their mocks.

    Example:
        ```py
        server, mocks = create_mock_server(
            tools={"read-file": {"return_value": {"content": "hi"}}},
        )
        await server.tools["read-file"]({"path": "/tmp/x"})
        expect(mocks.tools["read-file"]).to_have_been_called_times(1)
        ```
    """
    server = MockServer()
    mocks = MockRegistry()

    sections = (
        (tools, mock_tool, server.tools, mocks.tools),
        (resources, mock_resource, server.resources, mocks.resources),
        (prompts, mock_prompt, server.prompts, mocks.prompts),
    )
    for config, factory, handlers, registry in sections:
        for name, options in (config or {}).items():
            mock = factory(name, options)
            registry[name] = mock
            handlers[name] = _handler_for(mock)

    return server, mocks


def clear_all_mocks(mocks: MockRegistry) -> None:
    """Clear the recorded history of every mock in the registry."""
    for mock in mocks:
        mock.mock_clear()


def reset_all_mocks(mocks: MockRegistry) -> None:
    """Clear every mock and remove its behaviour."""
    for mock in mocks:
        mock.mock_reset()
