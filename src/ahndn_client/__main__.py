"""Allow ``python -m ahndn_client`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m ahndn_client`` behaves identically to the
``ahndn-client`` console script.
"""

from __future__ import annotations

from ahndn_client.cli.app import cli

if __name__ == "__main__":
    cli()
