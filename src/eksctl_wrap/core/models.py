"""Domain models for eksctl-wrap.

Models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependencies
on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

UNSET: int = -1
"""Sentinel for numeric options the user did not provide."""

DEFAULT_NODE_TYPE: str = "m5.large"
DEFAULT_AWS_API_TIMEOUT: timedelta = timedelta(minutes=20)


def is_set(value: int) -> bool:
    """Return whether a numeric option carries a real value."""
    return value >= 0


# ---------------------------------------------------------------------------
# Cluster configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ClusterConfig:
    """User-specified options for a single ``create`` invocation.

    String options use ``""`` and numeric options use :data:`UNSET`
    to mean "not provided".
    """

    cluster_name: str = ""
    """Name of the cluster; eksctl generates one when empty."""

    node_type: str = DEFAULT_NODE_TYPE
    """EC2 instance type for the worker nodes."""

    node_count: int = UNSET
    """Desired number of worker nodes."""

    nodes_min: int = UNSET
    """Minimum size of the node group."""

    nodes_max: int = UNSET
    """Maximum size of the node group."""

    region: str = ""
    """AWS region; resolved from the AWS configuration when empty."""

    zones: str = ""
    """Comma-separated availability zones."""

    profile: str = ""
    """AWS shared-config profile."""

    ssh_public_key: str = ""
    """Local public key path or existing EC2 key pair name."""

    eksctl_log_level: int = UNSET
    """eksctl ``--verbose`` level (0 silences, 4 debugs)."""

    aws_api_timeout: timedelta = field(default=DEFAULT_AWS_API_TIMEOUT)
    """Duration passed through as ``--aws-api-timeout``."""
