"""``eksctl-wrap doctor`` — environment diagnostics command.

Collects the state of every required binary, the Python runtime, boto3
and the AWS region configuration, and renders a Rich table (plain text
when Rich is missing).  Nothing is installed or executed.
"""

from __future__ import annotations

import os
import platform
import re
import sys

from eksctl_wrap.cli import exit_codes
from eksctl_wrap.cli.console import console, rich_available
from eksctl_wrap.config import Settings
from eksctl_wrap.core.eksctl_args import resolve_zones
from eksctl_wrap.core.provision_service import ProvisionService
from eksctl_wrap.exceptions import EksctlWrapError
from eksctl_wrap.infra.aws_region import Boto3RegionResolver
from eksctl_wrap.infra.binaries import BinaryStatus, detect_binary
from eksctl_wrap.version import __version__

Check = tuple[str, str, str]

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _tool_version_check() -> Check:
    return "eksctl-wrap", __version__, _OK


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _boto3_check() -> Check:
    """boto3 is required for region resolution; missing is a failure."""
    try:
        import boto3
    except ImportError:
        return "boto3", "NOT INSTALLED", _FAIL
    return "boto3", getattr(boto3, "__version__", "unknown"), _OK


def _binary_check(status: BinaryStatus) -> Check:
    """Missing binaries are a warning — ``create`` can install them."""
    if status.found:
        return status.name, str(status.path) if status.path else "found", _OK
    return status.name, "not found", _WARN


def _region_check() -> Check:
    try:
        region = Boto3RegionResolver().resolve("", "")
    except EksctlWrapError as exc:
        return "AWS region", str(exc), _FAIL
    return "AWS region", region, _OK


def _zones_check() -> Check:
    zones = resolve_zones("", os.environ)
    return "Default zones", zones or "auto-select", _OK


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_plain_table(checks: list[Check]) -> None:
    print("\neksctl-wrap doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<24} {'Value':<30} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<24} {value:<30} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_table(checks: list[Check]) -> None:
    from rich.table import Table

    table = Table(
        title="eksctl-wrap doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()


def _emit(text: str, *, use_rich: bool) -> None:
    if use_rich:
        console.print(text)
    else:
        print(_strip_markup(text), file=sys.stderr)


def _strip_markup(text: str) -> str:
    return re.sub(r"\[/?[a-z ]+\]", "", text)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Run all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    settings = Settings.from_env()
    binaries = [
        detect_binary(name, bin_dir=settings.bin_dir)
        for name in ProvisionService.required_binaries()
    ]

    checks: list[Check] = [
        _tool_version_check(),
        _python_version_check(),
        _boto3_check(),
        *(_binary_check(status) for status in binaries),
        _region_check(),
        _zones_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    use_rich = rich_available()
    if use_rich:
        _print_rich_table(checks)
    else:
        _print_plain_table(checks)

    for status in binaries:
        if status.found or not status.install_commands:
            continue
        _emit(f"[yellow]{status.name} is not installed.[/yellow]", use_rich=use_rich)
        _emit(
            "It is installed automatically by `eksctl-wrap create`, or manually with:",
            use_rich=use_rich,
        )
        for cmd in status.install_commands:
            _emit(f"  [bold]{cmd}[/bold]", use_rich=use_rich)
        _emit("", use_rich=use_rich)

    if has_failure:
        _emit("[bold red]Some checks failed.[/bold red]", use_rich=use_rich)
        return exit_codes.GENERAL_ERROR

    _emit("[bold green]All checks passed.[/bold green]", use_rich=use_rich)
    return exit_codes.SUCCESS
