"""Custom exception hierarchy for eksctl-wrap.

All exceptions that cross layer boundaries must inherit from
:class:`EksctlWrapError`.  Raw third-party exceptions (``requests``,
``botocore``, ``subprocess``) must NEVER propagate beyond the
infrastructure layer — they are caught there and re-raised as a typed
subclass defined here.

Hierarchy
---------
EksctlWrapError
├── ConfigurationError
│   └── RegionResolutionError
├── DependencyError
│   ├── DependencyInstallError
│   └── BinaryNotFoundError
├── CommandFailedError
└── EnvironmentError
"""

from __future__ import annotations


class EksctlWrapError(Exception):
    """Base exception for all eksctl-wrap errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(EksctlWrapError):
    """Raised when user-supplied options or settings cannot be used."""


class RegionResolutionError(ConfigurationError):
    """Raised when no usable AWS region can be determined."""


# --- Dependencies ----------------------------------------------------------

class DependencyError(EksctlWrapError):
    """Base class for problems with required external binaries."""


class DependencyInstallError(DependencyError):
    """Raised when missing binaries could not be installed.

    The create command treats this as fatal and terminates the process.
    """


class BinaryNotFoundError(DependencyError):
    """Raised when a binary cannot be located on the search path."""


# --- Subprocess execution --------------------------------------------------

class CommandFailedError(EksctlWrapError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode: int | None = returncode


# --- Python environment ----------------------------------------------------

class EnvironmentError(EksctlWrapError):
    """Raised when a required Python package is not installed."""
