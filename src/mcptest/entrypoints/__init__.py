"""Entrypoints (inbound adapters) for mcptest.

Expose the harness to the outside world: currently the ``mcptest`` CLI.
Parse and validate inputs, call the service layer, and present results.

Dependency rule: may import `mcptest.service_layer` and `mcptest.reporting`;
the domain, assertion and mocking packages never import from here.
"""
