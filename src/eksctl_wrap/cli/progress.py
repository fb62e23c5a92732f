"""Rich progress display driven by installer download events.

Bridges the installer's progress-callback dicts with a Rich
:class:`~rich.progress.Progress` bar.  The infra layer only emits raw
event dicts; rendering happens here.

* One task per binary, keyed by the event's ``"filename"``.
* Events received while the display is stopped are ignored.
"""

from __future__ import annotations

from typing import Any

from eksctl_wrap.cli.console import get_rich_console
from eksctl_wrap.exceptions import EnvironmentError


class DownloadProgress:
    """Callable progress adapter for :class:`~eksctl_wrap.infra.installer.BinaryInstaller`.

    Usage::

        with DownloadProgress() as progress:
            installer.install("eksctl", progress_callback=progress)
    """

    def __init__(self) -> None:
        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TimeRemainingColumn,
                TransferSpeedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=get_rich_console(),
            transient=False,
        )
        self._tasks: dict[str, Any] = {}
        self._started: bool = False

    def __enter__(self) -> DownloadProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def start(self) -> None:
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    def __call__(self, event: dict[str, Any]) -> None:
        """Installer progress callback.

        Parameters
        ----------
        event:
            Dict with ``"status"`` (``"downloading"`` or ``"finished"``),
            ``"filename"``, ``"downloaded_bytes"`` and ``"total_bytes"``.
        """
        if not self._started:
            return

        name: str = event.get("filename") or "download"
        total = event.get("total_bytes")
        downloaded: int = event.get("downloaded_bytes") or 0

        task_id = self._tasks.get(name)
        if task_id is None:
            task_id = self._progress.add_task(name, total=total)
            self._tasks[name] = task_id

        status = event.get("status", "")
        if status == "downloading":
            if total is not None:
                self._progress.update(task_id, total=total, completed=downloaded)
            else:
                self._progress.update(task_id, completed=downloaded)
        elif status == "finished":
            self._progress.update(
                task_id,
                total=total if total is not None else downloaded,
                completed=total if total is not None else downloaded,
            )
