"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class DependencyInstaller(Protocol):
    """Contract for detecting and installing required binaries."""

    def should_install(self, binary: str) -> bool:
        """Return ``True`` when *binary* is absent and must be installed."""
        ...  # pragma: no cover

    def install_missing_dependencies(self, binaries: Sequence[str]) -> None:
        """Install every binary in *binaries*.

        Raises
        ------
        DependencyInstallError
            When installation is refused or fails.
        """
        ...  # pragma: no cover


class RegionResolver(Protocol):
    """Contract for determining the effective AWS region."""

    def resolve(self, profile: str, region: str) -> str:
        """Return *region* when set, else the configured or default region.

        Raises
        ------
        RegionResolutionError
            When no valid region can be determined.
        """
        ...  # pragma: no cover


class CommandRunner(Protocol):
    """Contract for running external binaries to completion."""

    def run_verbose(self, binary: str, args: Sequence[str]) -> None:
        """Run *binary* streaming its output to the terminal.

        Raises
        ------
        CommandFailedError
            When the command exits with a non-zero status.
        """
        ...  # pragma: no cover

    def run_quietly(self, binary: str, args: Sequence[str]) -> str:
        """Run *binary* capturing its output, which is returned.

        Raises
        ------
        CommandFailedError
            When the command exits with a non-zero status.
        """
        ...  # pragma: no cover


class PlatformInstaller(Protocol):
    """Contract for the post-provisioning initialise-and-install step."""

    def init_and_install(self, provider: str) -> None:
        """Initialise the freshly created cluster for *provider*."""
        ...  # pragma: no cover
