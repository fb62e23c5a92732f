"""Tests for domain models and settings (core/models.py, config.py)."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from eksctl_wrap.config import DEFAULT_AUTHENTICATOR_VERSION, Settings
from eksctl_wrap.core.models import UNSET, ClusterConfig, is_set


class TestClusterConfig:
    def test_defaults_are_unset(self) -> None:
        config = ClusterConfig()
        assert config.cluster_name == ""
        assert config.node_type == "m5.large"
        assert config.node_count == UNSET
        assert config.nodes_min == UNSET
        assert config.nodes_max == UNSET
        assert config.eksctl_log_level == UNSET
        assert config.aws_api_timeout == timedelta(minutes=20)

    def test_frozen(self) -> None:
        config = ClusterConfig()
        with pytest.raises(AttributeError):
            config.cluster_name = "other"  # type: ignore[misc]

    @pytest.mark.parametrize(("value", "expected"), [(-1, False), (-5, False), (0, True), (3, True)])
    def test_is_set(self, value: int, expected: bool) -> None:
        assert is_set(value) is expected


class TestSettings:
    def test_from_env(self, tmp_path: Path) -> None:
        settings = Settings.from_env({
            "EKSCTL_WRAP_HOME": str(tmp_path),
            "EKSCTL_WRAP_INSTALL_COMMAND": "helm install platform",
            "EKSCTL_WRAP_AUTHENTICATOR_VERSION": "0.6.20",
        })
        assert settings.home == tmp_path
        assert settings.bin_dir == tmp_path / "bin"
        assert settings.install_command == "helm install platform"
        assert settings.authenticator_version == "0.6.20"

    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings.home == Path.home() / ".eksctl-wrap"
        assert settings.install_command == ""
        assert settings.authenticator_version == DEFAULT_AUTHENTICATOR_VERSION

    def test_reads_process_environment_by_default(self, isolated_env: Path) -> None:
        assert Settings.from_env().home == isolated_env
