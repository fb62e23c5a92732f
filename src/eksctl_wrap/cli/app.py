"""CLI application entry point and command routing for eksctl-wrap.

This module is the **sole error boundary** for the application.  It
catches :class:`~eksctl_wrap.exceptions.EksctlWrapError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

The one deliberate exception is a failed dependency installation, which
the ``create`` handler turns into an immediate process exit with
:data:`~eksctl_wrap.cli.exit_codes.DEPENDENCY_ERROR`.
"""

from __future__ import annotations

import argparse
import sys

from eksctl_wrap.cli import exit_codes
from eksctl_wrap.cli.console import console
from eksctl_wrap.exceptions import EksctlWrapError
from eksctl_wrap.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``eksctl-wrap create [flags]`` — create an EKS cluster
    * ``eksctl-wrap doctor``         — environment diagnostics
    * ``eksctl-wrap --version``
    """
    from eksctl_wrap.cli.create_cluster import add_create_parser

    parser = argparse.ArgumentParser(
        prog="eksctl-wrap",
        description="Create Kubernetes clusters on AWS EKS with eksctl.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    add_create_parser(subparsers)
    subparsers.add_parser("doctor", help="Check the local environment.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_create(args: argparse.Namespace) -> int:
    from eksctl_wrap.cli.create_cluster import run_create_cluster

    return run_create_cluster(args)


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from eksctl_wrap.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the eksctl-wrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor()

    return _handle_create(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except EksctlWrapError as exc:
        console.print(f"[bold red]Error:[/bold red] {_escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {_escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {_escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)


def _escape(text: str) -> str:
    """Escape Rich markup in messages that may echo command output."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)
