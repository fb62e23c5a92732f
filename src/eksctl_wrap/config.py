"""Environment-driven settings for eksctl-wrap.

Settings are read once per command from the process environment.  CLI
flags always take precedence over the values loaded here.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

HOME_ENV: str = "EKSCTL_WRAP_HOME"
"""Overrides the managed home directory (default ``~/.eksctl-wrap``)."""

ZONES_ENV: str = "EKS_AVAILABILITY_ZONES"
"""Availability zones used when ``--zones`` is not given; read by
:func:`eksctl_wrap.core.eksctl_args.resolve_zones`."""

INSTALL_COMMAND_ENV: str = "EKSCTL_WRAP_INSTALL_COMMAND"
"""Command run after provisioning when ``--install-command`` is not given."""

AUTHENTICATOR_VERSION_ENV: str = "EKSCTL_WRAP_AUTHENTICATOR_VERSION"
"""Pinned aws-iam-authenticator release used by the installer."""

DEFAULT_AUTHENTICATOR_VERSION: str = "0.6.14"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved runtime settings."""

    home: Path
    install_command: str
    authenticator_version: str

    @property
    def bin_dir(self) -> Path:
        """Directory holding binaries installed by eksctl-wrap."""
        return self.home / "bin"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        home_raw = env.get(HOME_ENV, "")
        home = Path(home_raw).expanduser() if home_raw else Path.home() / ".eksctl-wrap"
        return cls(
            home=home,
            install_command=env.get(INSTALL_COMMAND_ENV, ""),
            authenticator_version=(
                env.get(AUTHENTICATOR_VERSION_ENV, "") or DEFAULT_AUTHENTICATOR_VERSION
            ),
        )
