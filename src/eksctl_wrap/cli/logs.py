"""Logging setup for the ``eksctl_wrap`` logger hierarchy.

Records are rendered through :class:`rich.logging.RichHandler` on the
shared stderr console, or a plain :class:`logging.StreamHandler` when
Rich is not installed.  The configured level also decides whether
eksctl output is streamed (``debug``) or captured.
"""

from __future__ import annotations

import logging
import sys

from eksctl_wrap.cli.console import get_rich_console
from eksctl_wrap.exceptions import ConfigurationError, EnvironmentError

LOGGER_NAME: str = "eksctl_wrap"

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

DEFAULT_LOG_LEVEL: str = "info"

_HANDLER_ATTR = "_eksctl_wrap_handler"


def parse_level(name: str) -> int:
    """Map a level name to its ``logging`` constant."""
    try:
        return LOG_LEVELS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown log level: {name!r}",
            hint=f"Choose one of: {', '.join(LOG_LEVELS)}.",
        ) from None


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=get_rich_console(),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    setattr(handler, _HANDLER_ATTR, True)
    return handler


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Configure and return the package logger.

    Safe to call repeatedly: the handler installed by a previous call is
    replaced rather than duplicated.
    """
    numeric = parse_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_ATTR, False):
            logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.setLevel(numeric)
    return logger
