"""The ``mcptest`` command-line interface."""

from .main import mcptest

__all__ = ["mcptest"]
