"""Tests for the provisioning pipeline (core/provision_service.py).

All collaborators are mocks — no subprocesses, no AWS, no downloads.

Coverage:
* Dependency detection and installation requests.
* Dependency failures stop the pipeline before any subprocess runs.
* Zone / profile environment fallback and region resolution.
* Verbose vs quiet execution chosen by log level.
* Post-provisioning step runs after success only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from unittest.mock import MagicMock, call

import pytest

from eksctl_wrap.core.models import ClusterConfig
from eksctl_wrap.core.provision_service import ProvisionService
from eksctl_wrap.exceptions import (
    CommandFailedError,
    DependencyInstallError,
    EnvironmentError,
    RegionResolutionError,
)


@dataclass
class _Harness:
    service: ProvisionService
    installer: MagicMock
    resolver: MagicMock
    runner: MagicMock
    platform: MagicMock


def _harness(
    *,
    missing: tuple[str, ...] = (),
    region: str = "us-west-2",
    environ: dict[str, str] | None = None,
) -> _Harness:
    installer = MagicMock()
    installer.should_install.side_effect = lambda binary: binary in missing
    resolver = MagicMock()
    resolver.resolve.return_value = region
    runner = MagicMock()
    platform = MagicMock()
    service = ProvisionService(
        installer, resolver, runner, platform, environ=environ or {},
    )
    return _Harness(service, installer, resolver, runner, platform)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

class TestEnsureDependencies:
    def test_required_binaries(self) -> None:
        assert ProvisionService.required_binaries() == (
            "kubectl", "eksctl", "aws-iam-authenticator",
        )

    def test_checks_every_binary(self) -> None:
        h = _harness()
        h.service.ensure_dependencies()
        assert h.installer.should_install.call_args_list == [
            call("kubectl"), call("eksctl"), call("aws-iam-authenticator"),
        ]

    def test_requests_only_missing_binaries(self) -> None:
        h = _harness(missing=("eksctl",))
        h.service.ensure_dependencies()
        h.installer.install_missing_dependencies.assert_called_once_with(["eksctl"])

    def test_nothing_missing_passes_empty_list(self) -> None:
        h = _harness()
        h.service.ensure_dependencies()
        h.installer.install_missing_dependencies.assert_called_once_with([])

    def test_logs_dependency_list_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="eksctl_wrap")
        h = _harness(missing=("eksctl", "aws-iam-authenticator"))
        h.service.ensure_dependencies()
        assert "Dependencies to be installed: eksctl, aws-iam-authenticator" in caplog.text

    def test_install_error_propagates_as_is(self) -> None:
        h = _harness(missing=("eksctl",))
        original = DependencyInstallError("download failed")
        h.installer.install_missing_dependencies.side_effect = original
        with pytest.raises(DependencyInstallError) as exc_info:
            h.service.ensure_dependencies()
        assert exc_info.value is original

    def test_other_typed_errors_become_install_errors(self) -> None:
        h = _harness(missing=("eksctl",))
        h.installer.install_missing_dependencies.side_effect = EnvironmentError(
            "questionary is not installed", hint="pip install questionary",
        )
        with pytest.raises(DependencyInstallError, match="questionary") as exc_info:
            h.service.ensure_dependencies()
        assert exc_info.value.hint == "pip install questionary"

    def test_unexpected_errors_become_install_errors(self) -> None:
        h = _harness()
        h.installer.should_install.side_effect = OSError("permission denied")
        with pytest.raises(DependencyInstallError, match="permission denied"):
            h.service.ensure_dependencies()


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------

class TestPlan:
    def test_zones_flag_wins_over_environment(self) -> None:
        h = _harness(environ={"EKS_AVAILABILITY_ZONES": "us-east-1a"})
        args = h.service.plan(ClusterConfig(zones="us-west-2b"))
        assert args[args.index("--zones") + 1] == "us-west-2b"

    def test_zones_fall_back_to_environment(self) -> None:
        h = _harness(environ={"EKS_AVAILABILITY_ZONES": "us-east-1a,us-east-1b"})
        args = h.service.plan(ClusterConfig())
        assert args[args.index("--zones") + 1] == "us-east-1a,us-east-1b"

    def test_resolved_region_is_used(self) -> None:
        h = _harness(region="ap-south-1")
        args = h.service.plan(ClusterConfig())
        assert args[args.index("--region") + 1] == "ap-south-1"

    def test_resolver_receives_effective_profile_and_flag(self) -> None:
        h = _harness(environ={"AWS_PROFILE": "from-env"})
        h.service.plan(ClusterConfig(region="eu-west-1"))
        h.resolver.resolve.assert_called_once_with("from-env", "eu-west-1")

    def test_profile_from_environment_is_not_passed_to_eksctl(self) -> None:
        h = _harness(environ={"AWS_PROFILE": "from-env"})
        assert "--profile" not in h.service.plan(ClusterConfig())

    def test_region_error_propagates_unchanged(self) -> None:
        h = _harness()
        original = RegionResolutionError("Invalid AWS region: 'nowhere'")
        h.resolver.resolve.side_effect = original
        with pytest.raises(RegionResolutionError) as exc_info:
            h.service.plan(ClusterConfig(region="nowhere"))
        assert exc_info.value is original


# ---------------------------------------------------------------------------
# create_cluster
# ---------------------------------------------------------------------------

class TestCreateCluster:
    def test_info_level_runs_quietly(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="eksctl_wrap")
        h = _harness()
        args = h.service.create_cluster(ClusterConfig(cluster_name="demo"))

        h.runner.run_quietly.assert_called_once_with("eksctl", args)
        h.runner.run_verbose.assert_not_called()

    def test_debug_level_runs_verbose(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="eksctl_wrap")
        h = _harness()
        args = h.service.create_cluster(ClusterConfig(cluster_name="demo"))

        h.runner.run_verbose.assert_called_once_with("eksctl", args)
        h.runner.run_quietly.assert_not_called()
        assert "Running command: eksctl create cluster" in caplog.text

    def test_eksctl_log_level_does_not_select_mode(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.WARNING, logger="eksctl_wrap")
        h = _harness()
        h.service.create_cluster(ClusterConfig(eksctl_log_level=5))
        h.runner.run_quietly.assert_called_once()
        h.runner.run_verbose.assert_not_called()

    def test_progress_messages(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="eksctl_wrap")
        _harness().service.create_cluster(ClusterConfig())
        assert "Creating EKS cluster - this can take a while" in caplog.text
        assert "https://console.aws.amazon.com/cloudformation/" in caplog.text
        assert "Initialising cluster ..." in caplog.text

    def test_post_step_runs_after_success(self) -> None:
        h = _harness()
        order = MagicMock()
        order.attach_mock(h.runner, "runner")
        order.attach_mock(h.platform, "platform")

        h.service.create_cluster(ClusterConfig())

        h.platform.init_and_install.assert_called_once_with("eks")
        names = [c[0] for c in order.mock_calls]
        assert names.index("platform.init_and_install") > names.index("runner.run_quietly")

    def test_dependency_failure_prevents_subprocess(self) -> None:
        h = _harness(missing=("eksctl",))
        h.installer.install_missing_dependencies.side_effect = DependencyInstallError("nope")

        with pytest.raises(DependencyInstallError):
            h.service.create_cluster(ClusterConfig())

        h.runner.run_quietly.assert_not_called()
        h.runner.run_verbose.assert_not_called()
        h.resolver.resolve.assert_not_called()
        h.platform.init_and_install.assert_not_called()

    def test_execution_error_propagates_unchanged(self) -> None:
        h = _harness()
        original = CommandFailedError("Command failed: eksctl create cluster", returncode=1)
        h.runner.run_quietly.side_effect = original

        with pytest.raises(CommandFailedError) as exc_info:
            h.service.create_cluster(ClusterConfig())

        assert exc_info.value is original
        h.platform.init_and_install.assert_not_called()

    def test_region_error_stops_before_execution(self) -> None:
        h = _harness()
        h.resolver.resolve.side_effect = RegionResolutionError("bad region")
        with pytest.raises(RegionResolutionError):
            h.service.create_cluster(ClusterConfig())
        h.runner.run_quietly.assert_not_called()

    def test_returns_executed_arguments(self) -> None:
        args = _harness().service.create_cluster(ClusterConfig(node_count=2))
        assert args[:3] == ["create", "cluster", "--full-ecr-access"]
        assert args[args.index("--nodes") + 1] == "2"
