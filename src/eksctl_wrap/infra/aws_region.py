"""boto3 backed implementation of :class:`~eksctl_wrap.core.protocols.RegionResolver`.

This module is the **only** place in the codebase that imports
``boto3``.  botocore exceptions are caught here and re-raised as
:class:`~eksctl_wrap.exceptions.RegionResolutionError`.
"""

from __future__ import annotations

import re
from typing import Any

from eksctl_wrap.exceptions import EnvironmentError, RegionResolutionError

DEFAULT_REGION: str = "us-west-2"

_REGION_RE = re.compile(r"^[a-z]{2,}(-[a-z]+)+-\d{1,2}$")


def is_valid_region(region: str) -> bool:
    """Return whether *region* looks like an AWS region code."""
    return bool(_REGION_RE.match(region))


def _import_boto3_session() -> Any:
    """Import ``boto3.session`` lazily."""
    try:
        import boto3.session
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "boto3 is not installed. Install with: pip install boto3",
        ) from exc
    return boto3.session


class Boto3RegionResolver:
    """Resolve the effective region from a flag, AWS config or default.

    Lookup order: explicit *region*, then the region configured for
    *profile* (or the default profile) through ``AWS_REGION``,
    ``AWS_DEFAULT_REGION`` and ``~/.aws/config``, then
    :data:`DEFAULT_REGION`.
    """

    def resolve(self, profile: str, region: str) -> str:
        """Return the effective region.

        Raises
        ------
        RegionResolutionError
            When the profile does not exist or the region is malformed.
        """
        resolved = region.strip() or self._configured_region(profile) or DEFAULT_REGION
        if not is_valid_region(resolved):
            raise RegionResolutionError(
                f"Invalid AWS region: {resolved!r}",
                hint="Use a region code such as us-west-2 or eu-central-1.",
            )
        return resolved

    @staticmethod
    def _configured_region(profile: str) -> str:
        boto3_session = _import_boto3_session()
        from botocore.exceptions import BotoCoreError

        try:
            session = boto3_session.Session(profile_name=profile or None)
            return session.region_name or ""
        except BotoCoreError as exc:
            raise RegionResolutionError(
                f"Could not load AWS configuration: {exc}",
                hint="Check the --profile flag and $AWS_PROFILE.",
            ) from exc
