# topmark:header:start
#
#   project      : KubeHello
#   file         : logging.py
#   file_relpath : src/kubehello/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging for KubeHello.

Adds a ``TRACE`` level below ``DEBUG`` (used for per-file and per-document
chatter), a logger class exposing ``logger.trace(...)``, and a formatter that
colors each record by severity with yachalk.

Records always go to STDERR: STDOUT carries nothing but greeting lines, so
``kubehello hello-kubernetes -f x.yaml | wc -l`` stays correct at any level.

The level is taken from ``KUBEHELLO_LOG_LEVEL`` (a level name such as
``DEBUG`` or a number) and defaults to ``CRITICAL``, which keeps the CLI quiet.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from kubehello.constants import ENV_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] %(name)s:%(lineno)d %(message)s"

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


class KubehelloLogger(logging.Logger):
    """Logger with an extra `trace` method."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(KubehelloLogger)


class ChalkFormatter(logging.Formatter):
    """Formatter painting the whole record in a color chosen by its level."""

    # Highest threshold first
    STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
        (logging.CRITICAL, chalk.red_bright),
        (logging.ERROR, chalk.red),
        (logging.WARNING, chalk.yellow),
        (logging.INFO, chalk.green),
        (logging.DEBUG, chalk.gray),
        (TRACE_LEVEL, chalk.blue),
    )

    def format(self, record: logging.LogRecord) -> str:
        """Return the formatted record, colored by severity."""
        message: str = super().format(record)
        for threshold, paint in self.STYLES:
            if record.levelno >= threshold:
                return paint(message)
        return chalk.dim(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``KUBEHELLO_LOG_LEVEL``, or None if unset or unknown."""
    raw: str = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    return _LEVEL_NAMES.get(raw)


def setup_logging(level: int | None = None) -> None:
    """Install a single STDERR handler on the root logger.

    Args:
        level (int | None): Level to use; when None, ``KUBEHELLO_LOG_LEVEL`` is
            consulted and ``CRITICAL`` is the fallback.
    """
    if level is None:
        level = resolve_env_log_level()
    if level is None:
        level = logging.CRITICAL

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(DEBUG_LOG_FORMAT if level < logging.INFO else LOG_FORMAT))

    root: logging.Logger = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> KubehelloLogger:
    """Return the `KubehelloLogger` for ``name`` (normally ``__name__``)."""
    return cast("KubehelloLogger", logging.getLogger(name))
