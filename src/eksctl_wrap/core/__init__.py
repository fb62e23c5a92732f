"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem, network or subprocess I/O.
* No imports from ``cli`` or ``infra``.
"""

from eksctl_wrap.core.eksctl_args import build_create_cluster_args, resolve_zones
from eksctl_wrap.core.models import UNSET, ClusterConfig
from eksctl_wrap.core.protocols import (
    CommandRunner,
    DependencyInstaller,
    PlatformInstaller,
    RegionResolver,
)
from eksctl_wrap.core.provision_service import ProvisionService

__all__: list[str] = [
    "UNSET",
    "ClusterConfig",
    "CommandRunner",
    "DependencyInstaller",
    "PlatformInstaller",
    "ProvisionService",
    "RegionResolver",
    "build_create_cluster_args",
    "resolve_zones",
]
