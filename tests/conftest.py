"""Shared pytest fixtures and configuration for the eksctl-wrap test suite.

Guidelines
----------
* No internet access in any test.
* No real subprocesses other than throwaway scripts created under
  ``tmp_path``; ``subprocess.run`` is otherwise mocked at the infra boundary.
* Tests must not depend on host binaries, AWS configuration or environment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

_ISOLATED_VARS = (
    "EKS_AVAILABILITY_ZONES",
    "AWS_PROFILE",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "EKSCTL_WRAP_INSTALL_COMMAND",
    "EKSCTL_WRAP_AUTHENTICATOR_VERSION",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Point every configurable location at a temp dir and reset logging."""
    home = tmp_path / "eksctl-wrap-home"
    monkeypatch.setenv("EKSCTL_WRAP_HOME", str(home))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws-config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws-credentials"))
    for name in _ISOLATED_VARS:
        monkeypatch.delenv(name, raising=False)

    yield home

    logger = logging.getLogger("eksctl_wrap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
