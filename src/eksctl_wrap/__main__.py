"""Allow ``python -m eksctl_wrap`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m eksctl_wrap`` behaves identically to the ``eksctl-wrap``
console script.
"""

from __future__ import annotations

from eksctl_wrap.cli.app import cli

if __name__ == "__main__":
    cli()
