"""Subprocess backed implementation of :class:`~eksctl_wrap.core.protocols.CommandRunner`.

Binaries are resolved through the managed bin directory first, then
PATH, and the child process inherits that same search path so tools
that shell out to each other (eksctl → aws-iam-authenticator) find the
managed copies too.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from eksctl_wrap.core.eksctl_args import render_command
from eksctl_wrap.exceptions import BinaryNotFoundError, CommandFailedError
from eksctl_wrap.infra.binaries import binary_search_path, require_binary

logger = logging.getLogger(__name__)

_OUTPUT_TAIL_LINES: int = 20


class SubprocessCommandRunner:
    """Run external binaries synchronously to completion.

    Parameters
    ----------
    bin_dir:
        Managed directory searched ahead of PATH.
    environ:
        Base environment for child processes (defaults to ``os.environ``).
    """

    def __init__(
        self,
        *,
        bin_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._bin_dir = bin_dir
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

    def _child_env(self) -> dict[str, str]:
        env = dict(self._environ)
        env["PATH"] = binary_search_path(self._bin_dir, self._environ)
        return env

    def _resolve(self, binary: str) -> str:
        return str(require_binary(binary, bin_dir=self._bin_dir, environ=self._environ))

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def run_verbose(self, binary: str, args: Sequence[str]) -> None:
        """Run *binary* with output streamed to this process's terminal."""
        command = [self._resolve(binary), *args]
        try:
            completed = subprocess.run(command, env=self._child_env(), check=False)
        except OSError as exc:
            raise BinaryNotFoundError(f"Could not start {binary}: {exc}") from exc

        if completed.returncode != 0:
            raise CommandFailedError(
                f"Command failed: {render_command(binary, args)}",
                returncode=completed.returncode,
            )

    def run_quietly(self, binary: str, args: Sequence[str]) -> str:
        """Run *binary* capturing stdout and stderr; return the output."""
        command = [self._resolve(binary), *args]
        try:
            completed = subprocess.run(
                command,
                env=self._child_env(),
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise BinaryNotFoundError(f"Could not start {binary}: {exc}") from exc

        output: str = completed.stdout or ""
        if completed.returncode != 0:
            tail = "\n".join(output.strip().splitlines()[-_OUTPUT_TAIL_LINES:])
            raise CommandFailedError(
                f"Command failed: {render_command(binary, args)}",
                returncode=completed.returncode,
                hint=tail or None,
            )
        logger.debug("%s output:\n%s", binary, output.rstrip())
        return output
