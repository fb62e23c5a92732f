"""Infrastructure: binary detection and manual install guidance.

Locates required binaries in the managed bin directory first, then on
the system PATH, and provides platform-specific installation guidance
when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from eksctl_wrap.exceptions import BinaryNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BinaryStatus:
    """Result of a binary detection probe.

    Attributes
    ----------
    name : str
        Binary that was looked up.
    found : bool
        Whether the binary was located.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the binary manually on
        the current platform.  Empty when the binary is present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def binary_search_path(
    bin_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return a PATH string with *bin_dir* ahead of the inherited PATH."""
    env = os.environ if environ is None else environ
    inherited = env.get("PATH", "")
    if bin_dir is None:
        return inherited
    if not inherited:
        return str(bin_dir)
    return os.pathsep.join((str(bin_dir), inherited))


def detect_binary(
    name: str,
    *,
    bin_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> BinaryStatus:
    """Probe for *name* in *bin_dir* and on the PATH of *environ*.

    Returns a :class:`BinaryStatus` regardless of whether the binary is
    present — the caller decides whether to install, abort or warn.
    """
    result = shutil.which(name, path=binary_search_path(bin_dir, environ))

    if result is not None:
        return BinaryStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return BinaryStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_binary(
    name: str,
    *,
    bin_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Locate *name* or raise :class:`BinaryNotFoundError`."""
    status = detect_binary(name, bin_dir=bin_dir, environ=environ)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {name} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise BinaryNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_DOCS: dict[str, str] = {
    "eksctl": "https://eksctl.io/installation/",
    "aws-iam-authenticator": "https://github.com/kubernetes-sigs/aws-iam-authenticator",
    "kubectl": "https://kubernetes.io/docs/tasks/tools/",
}

_PACKAGE_NAMES: dict[str, str] = {
    "eksctl": "eksctl",
    "aws-iam-authenticator": "aws-iam-authenticator",
    "kubectl": "kubernetes-cli",
}


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return manual install commands for *name* on the current OS."""
    system = platform.system().lower()
    commands: list[str] = []
    if system == "darwin" and name in _PACKAGE_NAMES:
        commands.append(f"brew install {_PACKAGE_NAMES[name]}")
    elif system == "windows" and name in _PACKAGE_NAMES:
        commands.append(f"choco install {_PACKAGE_NAMES[name]}")
    elif system == "linux" and name == "kubectl":
        commands.append("sudo snap install kubectl --classic")

    docs = _DOCS.get(name)
    if docs is not None:
        commands.append(f"See {docs}")
    return tuple(commands)
