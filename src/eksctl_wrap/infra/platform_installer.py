"""Post-provisioning step run once eksctl has created the cluster.

eksctl writes the new cluster's credentials into the kubeconfig, so
initialisation consists of confirming the active context and that the
API server answers, then running the user's install command, if any.
"""

from __future__ import annotations

import logging
import shlex

from eksctl_wrap.core.protocols import CommandRunner
from eksctl_wrap.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

KUBECTL_BINARY: str = "kubectl"


class KubectlPlatformInstaller:
    """Concrete :class:`~eksctl_wrap.core.protocols.PlatformInstaller`.

    Parameters
    ----------
    runner:
        Runner used for every command.
    install_command:
        Optional shell-style command run after initialisation.  The
        ``{provider}`` placeholder is replaced with the provider name.
    """

    def __init__(self, runner: CommandRunner, *, install_command: str = "") -> None:
        self._runner = runner
        self._install_command = install_command

    def init_and_install(self, provider: str) -> None:
        context = self._runner.run_quietly(
            KUBECTL_BINARY, ["config", "current-context"],
        ).strip()
        logger.info("Using kube context %s", context or "<unnamed>")

        self._runner.run_quietly(KUBECTL_BINARY, ["cluster-info"])
        logger.info("Cluster API server is reachable")

        argv = self._install_argv(provider)
        if not argv:
            logger.debug("No install command configured; skipping installation")
            return

        logger.info("Running install command: %s", shlex.join(argv))
        self._runner.run_verbose(argv[0], argv[1:])

    def _install_argv(self, provider: str) -> list[str]:
        if not self._install_command.strip():
            return []
        try:
            return shlex.split(self._install_command.replace("{provider}", provider))
        except ValueError as exc:
            raise ConfigurationError(
                f"Cannot parse install command: {exc}",
                hint="Quote arguments the way you would in a POSIX shell.",
            ) from exc
