"""Core provisioning service — the ``create`` command pipeline.

Collaborators are injected at construction time:

* a :class:`~eksctl_wrap.core.protocols.DependencyInstaller` for the
  required binaries,
* a :class:`~eksctl_wrap.core.protocols.RegionResolver`,
* a :class:`~eksctl_wrap.core.protocols.CommandRunner` for eksctl,
* a :class:`~eksctl_wrap.core.protocols.PlatformInstaller` for the
  post-provisioning step.

Guarantees
----------
* No ``print()`` — progress is reported through ``logging`` only.
* A dependency failure always surfaces as
  :class:`~eksctl_wrap.exceptions.DependencyInstallError` before any
  subprocess is started.
* Region and execution errors propagate unchanged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from eksctl_wrap.core.eksctl_args import (
    EKSCTL_BINARY,
    build_create_cluster_args,
    render_command,
    resolve_profile,
    resolve_zones,
)
from eksctl_wrap.core.models import ClusterConfig
from eksctl_wrap.core.protocols import (
    CommandRunner,
    DependencyInstaller,
    PlatformInstaller,
    RegionResolver,
)
from eksctl_wrap.exceptions import DependencyInstallError, EksctlWrapError

logger = logging.getLogger(__name__)

PROVIDER: str = "eks"

BASE_BINARIES: tuple[str, ...] = ("kubectl",)
EKS_BINARIES: tuple[str, ...] = (EKSCTL_BINARY, "aws-iam-authenticator")

CLOUDFORMATION_CONSOLE_URL: str = "https://console.aws.amazon.com/cloudformation/"


class ProvisionService:
    """Drives dependency checks, argument construction and execution.

    Parameters
    ----------
    installer:
        Detects and installs missing binaries.
    region_resolver:
        Resolves the effective AWS region.
    runner:
        Executes the eksctl binary.
    platform_installer:
        Runs the post-provisioning initialisation.
    environ:
        Environment used for zone and profile fallback.  Defaults to
        ``os.environ``.
    """

    def __init__(
        self,
        installer: DependencyInstaller,
        region_resolver: RegionResolver,
        runner: CommandRunner,
        platform_installer: PlatformInstaller,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._installer: DependencyInstaller = installer
        self._region_resolver: RegionResolver = region_resolver
        self._runner: CommandRunner = runner
        self._platform_installer: PlatformInstaller = platform_installer
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    @staticmethod
    def required_binaries() -> tuple[str, ...]:
        """Return every binary the create command needs on the path."""
        return BASE_BINARIES + EKS_BINARIES

    def ensure_dependencies(self) -> None:
        """Install any required binary that is missing.

        Raises
        ------
        DependencyInstallError
            When detection or installation fails for any reason.
        """
        try:
            deps = [
                binary
                for binary in self.required_binaries()
                if self._installer.should_install(binary)
            ]
            logger.debug("Dependencies to be installed: %s", ", ".join(deps))
            self._installer.install_missing_dependencies(deps)
        except DependencyInstallError:
            raise
        except EksctlWrapError as exc:
            raise DependencyInstallError(str(exc), hint=exc.hint) from exc
        except Exception as exc:
            raise DependencyInstallError(
                f"Unexpected error while installing dependencies: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Argument construction
    # ------------------------------------------------------------------

    def plan(self, config: ClusterConfig) -> list[str]:
        """Resolve region and zones, then build the eksctl arguments.

        Raises
        ------
        RegionResolutionError
            Propagated unchanged from the region resolver.
        """
        zones = resolve_zones(config.zones, self._environ)
        profile = resolve_profile(config.profile, self._environ)
        region = self._region_resolver.resolve(profile, config.region)
        return build_create_cluster_args(config, region=region, zones=zones)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_cluster(self, config: ClusterConfig) -> list[str]:
        """Create the cluster described by *config* and initialise it.

        Returns
        -------
        list[str]
            The arguments eksctl was invoked with.
        """
        self.ensure_dependencies()
        args = self.plan(config)

        logger.info("Creating EKS cluster - this can take a while so please be patient...")
        logger.info(
            "You can watch progress in the CloudFormation console: %s",
            CLOUDFORMATION_CONSOLE_URL,
        )
        logger.debug("Running command: %s", render_command(EKSCTL_BINARY, args))

        if logger.isEnabledFor(logging.DEBUG):
            self._runner.run_verbose(EKSCTL_BINARY, args)
        else:
            self._runner.run_quietly(EKSCTL_BINARY, args)

        logger.info("Initialising cluster ...")
        self._platform_installer.init_and_install(PROVIDER)
        return args
