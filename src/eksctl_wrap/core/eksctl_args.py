"""Translate a :class:`ClusterConfig` into ``eksctl`` arguments.

Pure functions only — the environment is passed in explicitly so that
every mapping here is deterministic and trivially testable.

The argument order and spelling mirror what ``eksctl create cluster``
expects; changing either breaks compatibility with the binary.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping, Sequence

from eksctl_wrap.config import ZONES_ENV
from eksctl_wrap.core.duration import format_duration
from eksctl_wrap.core.models import ClusterConfig, is_set

EKSCTL_BINARY: str = "eksctl"
AWS_PROFILE_ENV: str = "AWS_PROFILE"
EKS_ZONES_ENV: str = ZONES_ENV


def resolve_zones(zones: str, environ: Mapping[str, str]) -> str:
    """Return the ``--zones`` flag value, else ``$EKS_AVAILABILITY_ZONES``."""
    if zones:
        return zones
    return environ.get(EKS_ZONES_ENV, "")


def resolve_profile(profile: str, environ: Mapping[str, str]) -> str:
    """Return the ``--profile`` flag value, else ``$AWS_PROFILE``."""
    if profile:
        return profile
    return environ.get(AWS_PROFILE_ENV, "")


def build_create_cluster_args(
    config: ClusterConfig,
    *,
    region: str,
    zones: str,
) -> list[str]:
    """Build the argument list for ``eksctl create cluster``.

    *region* must already be resolved; *zones* is the effective zone
    list after environment fallback.  Options left at their sentinel
    value are omitted.
    """
    args = ["create", "cluster", "--full-ecr-access"]
    if config.cluster_name:
        args += ["--name", config.cluster_name]

    args += ["--region", region]

    if zones:
        args += ["--zones", zones]
    if config.profile:
        args += ["--profile", config.profile]
    if config.ssh_public_key:
        args += ["--ssh-public-key", config.ssh_public_key]

    args += ["--node-type", config.node_type]

    if is_set(config.node_count):
        args += ["--nodes", str(config.node_count)]
    if is_set(config.nodes_min):
        args += ["--nodes-min", str(config.nodes_min)]
    if is_set(config.nodes_max):
        args += ["--nodes-max", str(config.nodes_max)]
    if is_set(config.eksctl_log_level):
        args += ["--verbose", str(config.eksctl_log_level)]

    args += ["--aws-api-timeout", format_duration(config.aws_api_timeout)]
    return args


def render_command(binary: str, args: Sequence[str]) -> str:
    """Return a shell-quoted, copy-pasteable command line."""
    return shlex.join([binary, *args])
