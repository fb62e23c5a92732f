"""``eksctl-wrap create`` — create an EKS cluster with eksctl.

Registers the command's flags, turns parsed arguments into a
:class:`~eksctl_wrap.core.models.ClusterConfig`, wires the concrete
infra adapters into :class:`~eksctl_wrap.core.provision_service.ProvisionService`
and runs it.

A dependency installation failure is fatal: it is logged and the
process exits immediately with :data:`exit_codes.DEPENDENCY_ERROR`.
All other errors propagate to the error boundary in :mod:`cli.app`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import timedelta

from eksctl_wrap.cli import exit_codes
from eksctl_wrap.cli.console import console
from eksctl_wrap.cli.logs import DEFAULT_LOG_LEVEL, LOG_LEVELS, configure_logging
from eksctl_wrap.config import Settings
from eksctl_wrap.core.duration import parse_duration
from eksctl_wrap.core.eksctl_args import EKSCTL_BINARY, render_command
from eksctl_wrap.core.models import DEFAULT_NODE_TYPE, UNSET, ClusterConfig
from eksctl_wrap.core.provision_service import ProvisionService
from eksctl_wrap.exceptions import DependencyInstallError

logger = logging.getLogger(__name__)

DESCRIPTION = """\
Create a new Kubernetes cluster on AWS using EKS, installing required
local dependencies, then run the post-provisioning installation.

examples:
  # create a cluster in your default zones (from $EKS_AVAILABILITY_ZONES)
  eksctl-wrap create

  # specify the zones
  eksctl-wrap create --zones us-west-2a,us-west-2b,us-west-2c
"""


def _duration(value: str) -> timedelta:
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


# ---------------------------------------------------------------------------
# Argument registration
# ---------------------------------------------------------------------------

def add_create_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    """Register the ``create`` sub-command on *subparsers*."""
    parser = subparsers.add_parser(
        "create",
        help="Create a new Kubernetes cluster on AWS using EKS.",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    cluster = parser.add_argument_group("cluster options")
    cluster.add_argument(
        "-n", "--cluster-name", default="", help="The name of this cluster.",
    )
    cluster.add_argument(
        "--node-type", default=DEFAULT_NODE_TYPE, help="Node instance type.",
    )
    cluster.add_argument(
        "-o", "--nodes", dest="node_count", type=int, default=UNSET,
        help="Number of nodes.",
    )
    cluster.add_argument(
        "--nodes-min", type=int, default=UNSET, help="Minimum number of nodes.",
    )
    cluster.add_argument(
        "--nodes-max", type=int, default=UNSET, help="Maximum number of nodes.",
    )
    cluster.add_argument(
        "--eksctl-log-level", type=int, default=UNSET,
        help=(
            "Set eksctl log level, use 0 to silence, 4 for debugging and 5 for "
            "debugging with AWS debug logging (default 3)."
        ),
    )
    cluster.add_argument(
        "--aws-api-timeout", type=_duration, default=parse_duration("20m"),
        help="Duration of AWS API timeout, e.g. 20m or 1h30m (default 20m).",
    )
    cluster.add_argument(
        "-r", "--region", default="",
        help="The region to use. Default: us-west-2.",
    )
    cluster.add_argument(
        "-z", "--zones", default="",
        help=(
            "Availability Zones. Auto-select if not specified. If provided, this "
            "overrides the $EKS_AVAILABILITY_ZONES environment variable."
        ),
    )
    cluster.add_argument(
        "-p", "--profile", default="",
        help=(
            "AWS profile to use. If provided, this overrides the AWS_PROFILE "
            "environment variable."
        ),
    )
    cluster.add_argument(
        "--ssh-public-key", default="",
        help=(
            "SSH public key to use for nodes (import from local path, or use "
            "existing EC2 key pair) (default \"~/.ssh/id_rsa.pub\")."
        ),
    )

    common = parser.add_argument_group("common options")
    common.add_argument(
        "--log-level", choices=tuple(LOG_LEVELS), default=DEFAULT_LOG_LEVEL,
        help="Logging level; debug also streams eksctl output (default info).",
    )
    common.add_argument(
        "-b", "--batch-mode", action="store_true",
        help="Never prompt; fail if dependencies are missing.",
    )
    common.add_argument(
        "--dry-run", action="store_true",
        help="Print the eksctl command without installing or running anything.",
    )
    common.add_argument(
        "--install-command", default=None,
        help=(
            "Command to run once the cluster is up; {provider} is replaced with "
            "'eks'. Defaults to $EKSCTL_WRAP_INSTALL_COMMAND."
        ),
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ClusterConfig:
    """Build a :class:`ClusterConfig` from parsed ``create`` arguments."""
    return ClusterConfig(
        cluster_name=args.cluster_name,
        node_type=args.node_type,
        node_count=args.node_count,
        nodes_min=args.nodes_min,
        nodes_max=args.nodes_max,
        region=args.region,
        zones=args.zones,
        profile=args.profile,
        ssh_public_key=args.ssh_public_key,
        eksctl_log_level=args.eksctl_log_level,
        aws_api_timeout=args.aws_api_timeout,
    )


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_service(args: argparse.Namespace, settings: Settings) -> ProvisionService:
    """Assemble the service with the concrete infra adapters."""
    from eksctl_wrap.cli.dependencies import InteractiveDependencyInstaller
    from eksctl_wrap.infra.aws_region import Boto3RegionResolver
    from eksctl_wrap.infra.command_runner import SubprocessCommandRunner
    from eksctl_wrap.infra.installer import BinaryInstaller
    from eksctl_wrap.infra.platform_installer import KubectlPlatformInstaller

    runner = SubprocessCommandRunner(bin_dir=settings.bin_dir)
    install_command = (
        args.install_command if args.install_command is not None
        else settings.install_command
    )
    return ProvisionService(
        InteractiveDependencyInstaller(
            BinaryInstaller(settings), batch_mode=args.batch_mode,
        ),
        Boto3RegionResolver(),
        runner,
        KubectlPlatformInstaller(runner, install_command=install_command),
    )


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------

def run_create_cluster(args: argparse.Namespace) -> int:
    """Run the ``create`` command and return an exit code."""
    configure_logging(args.log_level)
    config = config_from_args(args)
    settings = Settings.from_env(os.environ)
    service = build_service(args, settings)

    if args.dry_run:
        console.print_command(render_command(EKSCTL_BINARY, service.plan(config)))
        return exit_codes.SUCCESS

    try:
        service.create_cluster(config)
    except DependencyInstallError as exc:
        detail = f"{exc}\n{exc.hint}" if exc.hint else str(exc)
        logger.error("%s\nPlease fix the error or install manually then try again", detail)
        sys.exit(exit_codes.DEPENDENCY_ERROR)

    console.print("[bold green]EKS cluster created and initialised.[/bold green]")
    return exit_codes.SUCCESS
