"""Shared stderr console for CLI output and log records.

Rich is imported lazily so that ``--help`` and ``--version`` keep
working without it.  One Rich console is shared by direct output and the
logging handler so progress bars and log lines do not interleave badly.
"""

from __future__ import annotations

import sys
from typing import Any

from eksctl_wrap.exceptions import EnvironmentError

_rich_console: Any | None = None


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Return the process-wide Rich console targeting stderr."""
    global _rich_console
    console_class = _load_rich_console_class()
    if _rich_console is None:
        _rich_console = console_class(stderr=True)
    return _rich_console


def rich_available() -> bool:
    try:
        _load_rich_console_class()
    except EnvironmentError:
        return False
    return True


class _ConsoleProxy:
    """``print``-compatible proxy that degrades to plain stderr."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def print_command(self, command: str) -> None:
        """Print a shell command to stdout without markup processing."""
        try:
            stdout_console = _load_rich_console_class()()
        except EnvironmentError:
            print(command)
            return
        stdout_console.print(command, markup=False, highlight=False, soft_wrap=True)


console = _ConsoleProxy()
