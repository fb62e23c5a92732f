"""Interactive installation of missing binaries.

Presents a questionary checkbox listing every missing binary, all
pre-selected, and installs the ones the user keeps selected with a Rich
download progress bar.  In batch mode no prompt is shown and missing
binaries are an error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from eksctl_wrap.cli.progress import DownloadProgress
from eksctl_wrap.exceptions import DependencyInstallError, EnvironmentError
from eksctl_wrap.infra.installer import BinaryInstaller

logger = logging.getLogger(__name__)


def _import_questionary() -> Any:
    """Import questionary lazily for the install prompt."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def prompt_dependency_selection(binaries: Sequence[str]) -> list[str]:
    """Ask which of *binaries* to install; all are selected by default.

    Raises
    ------
    DependencyInstallError
        If the user cancels the prompt (Esc / Ctrl+C returns ``None``).
    """
    questionary = _import_questionary()
    choices = [
        questionary.Choice(title=binary, value=binary, checked=True)
        for binary in binaries
    ]
    selected: list[str] | None = questionary.checkbox(
        "Missing required dependencies, deselect to avoid auto installing:",
        choices=choices,
    ).ask()

    if selected is None:
        raise DependencyInstallError(
            "Dependency installation was cancelled.",
            hint=f"Install manually: {', '.join(binaries)}",
        )
    return selected


class InteractiveDependencyInstaller:
    """Concrete :class:`~eksctl_wrap.core.protocols.DependencyInstaller`.

    Parameters
    ----------
    installer:
        Performs detection and the actual downloads.
    batch_mode:
        When ``True`` never prompt; missing binaries raise instead.
    """

    def __init__(self, installer: BinaryInstaller, *, batch_mode: bool = False) -> None:
        self._installer = installer
        self._batch_mode = batch_mode

    def should_install(self, binary: str) -> bool:
        return self._installer.should_install(binary)

    def install_missing_dependencies(self, binaries: Sequence[str]) -> None:
        if not binaries:
            return

        if self._batch_mode:
            raise DependencyInstallError(
                "run without batch mode or manually install missing dependencies "
                f"{list(binaries)}",
            )

        selected = prompt_dependency_selection(binaries)
        skipped = [binary for binary in binaries if binary not in selected]
        if skipped:
            logger.warning("Not installing: %s", ", ".join(skipped))
        if not selected:
            return

        with DownloadProgress() as progress:
            for binary in selected:
                self._installer.install(binary, progress_callback=progress)
