"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system, the network,
the AWS configuration and external binaries.  Every raw third-party
exception must be caught here and re-raised as an
:class:`~eksctl_wrap.exceptions.EksctlWrapError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from eksctl_wrap.infra.aws_region import DEFAULT_REGION, Boto3RegionResolver
from eksctl_wrap.infra.binaries import BinaryStatus, detect_binary, require_binary
from eksctl_wrap.infra.command_runner import SubprocessCommandRunner
from eksctl_wrap.infra.installer import BinaryInstaller
from eksctl_wrap.infra.platform_installer import KubectlPlatformInstaller

__all__: list[str] = [
    "DEFAULT_REGION",
    "BinaryInstaller",
    "BinaryStatus",
    "Boto3RegionResolver",
    "KubectlPlatformInstaller",
    "SubprocessCommandRunner",
    "detect_binary",
    "require_binary",
]
