"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
* The ``cli()`` error boundary maps exceptions to exit codes.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from eksctl_wrap import __version__
from eksctl_wrap.cli import app as app_module
from eksctl_wrap.cli import exit_codes
from eksctl_wrap.cli.app import cli, main
from eksctl_wrap.exceptions import (
    BinaryNotFoundError,
    CommandFailedError,
    ConfigurationError,
    DependencyError,
    DependencyInstallError,
    EksctlWrapError,
    EnvironmentError,
    RegionResolutionError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            RegionResolutionError,
            DependencyError,
            DependencyInstallError,
            BinaryNotFoundError,
            CommandFailedError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[EksctlWrapError]
    ) -> None:
        assert issubclass(exc_class, EksctlWrapError)

    def test_region_error_is_configuration_error(self) -> None:
        assert issubclass(RegionResolutionError, ConfigurationError)

    def test_install_error_is_not_a_missing_binary_error(self) -> None:
        assert not issubclass(BinaryNotFoundError, DependencyInstallError)

    def test_hint_is_stored(self) -> None:
        err = EksctlWrapError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert EksctlWrapError("boom").hint is None

    def test_command_failed_carries_returncode(self) -> None:
        err = CommandFailedError("Command failed: eksctl", returncode=7)
        assert err.returncode == 7
        assert err.hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_values(self) -> None:
        assert exit_codes.SUCCESS == 0
        assert exit_codes.GENERAL_ERROR == 1
        assert exit_codes.UNEXPECTED_ERROR == 2
        assert exit_codes.DEPENDENCY_ERROR == 3
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "create" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @patch("eksctl_wrap.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_doctor: object) -> None:
        assert main(["doctor"]) == exit_codes.SUCCESS

    @patch(
        "eksctl_wrap.cli.create_cluster.run_create_cluster",
        return_value=exit_codes.SUCCESS,
    )
    def test_create_dispatches_with_parsed_args(self, mock_create: object) -> None:
        code = main(["create", "--cluster-name", "demo"])
        assert code == exit_codes.SUCCESS
        (args,), _ = mock_create.call_args  # type: ignore[attr-defined]
        assert args.cluster_name == "demo"

    def test_unknown_command_is_a_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["destroy"])
        assert exc_info.value.code == 2


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run_cli(self, monkeypatch: pytest.MonkeyPatch, effect: BaseException) -> int:
        def _raise() -> int:
            raise effect

        monkeypatch.setattr(app_module, "main", _raise)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code)  # type: ignore[arg-type]

    def test_known_error_exits_general(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(
            monkeypatch, RegionResolutionError("Invalid AWS region: 'mars-1'", hint="Use us-west-2"),
        )
        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Invalid AWS region" in err
        assert "Use us-west-2" in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run_cli(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run_cli(monkeypatch, RuntimeError("kaboom")) == exit_codes.UNEXPECTED_ERROR

    def test_dependency_exit_passes_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        code = self._run_cli(monkeypatch, SystemExit(exit_codes.DEPENDENCY_ERROR))
        assert code == exit_codes.DEPENDENCY_ERROR

    def test_success_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "main", lambda: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS
