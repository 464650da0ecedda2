"""Allow ``python -m vultr_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m vultr_cli`` behaves identically to the ``vultr-cli``
console script.
"""

from __future__ import annotations

from vultr_cli.cli.app import cli

if __name__ == "__main__":
    cli()
