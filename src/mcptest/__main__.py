"""Allow ``python -m mcptest``."""

from mcptest.entrypoints.cli.main import mcptest

if __name__ == "__main__":
    mcptest()  # pylint: disable=no-value-for-parameter
