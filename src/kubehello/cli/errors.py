# topmark:header:start
#
#   project      : KubeHello
#   file         : errors.py
#   file_relpath : src/kubehello/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the KubeHello CLI.

Usage:
    Commands convert pipeline errors (`kubehello.core.errors`) with
    `to_cli_error` and raise the result; Click then prints the message and
    exits with the matching `ExitCode`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from kubehello.cli.exit_codes import ExitCode
from kubehello.cli.keys import ArgKey
from kubehello.core.errors import (
    AggregateResolutionError,
    AuthorityUnavailableError,
    ConfigError,
    EmptyResultError,
    InvalidUsageError,
    KubehelloError,
)


class KubehelloCliError(click.ClickException):
    """Base class for all KubeHello CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text, prefixed with ``error:``."""
        return f"error: {self.message}"

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get(ArgKey.CONSOLE)
            if console is not None:
                console.error(self.format_message())
                return
        click.echo(self.format_message(), file=file, err=True)


class KubehelloUsageError(KubehelloCliError):
    """Invalid combination of flags and arguments."""

    exit_code = ExitCode.USAGE_ERROR

    def format_message(self) -> str:
        """Append a hint pointing at ``--help``."""
        return f"error: {self.message}\nSee 'kubehello hello-kubernetes --help' for usage."


class KubehelloConfigError(KubehelloCliError):
    """Missing, unreadable or malformed configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class KubehelloResolutionError(KubehelloCliError):
    """Some resources could not be resolved."""

    exit_code = ExitCode.RESOLUTION_ERROR


class KubehelloEmptyResultError(KubehelloCliError):
    """No resource was emitted."""

    exit_code = ExitCode.EMPTY_RESULT


class KubehelloAuthorityError(KubehelloCliError):
    """The API server could not be consulted."""

    exit_code = ExitCode.AUTHORITY_UNAVAILABLE


_ERROR_MAP: tuple[tuple[type[KubehelloError], type[KubehelloCliError]], ...] = (
    (InvalidUsageError, KubehelloUsageError),
    (ConfigError, KubehelloConfigError),
    (EmptyResultError, KubehelloEmptyResultError),
    (AggregateResolutionError, KubehelloResolutionError),
    (AuthorityUnavailableError, KubehelloAuthorityError),
)


def to_cli_error(exc: KubehelloError) -> KubehelloCliError:
    """Return the CLI exception (and thus exit code) for a pipeline error."""
    for core_cls, cli_cls in _ERROR_MAP:
        if isinstance(exc, core_cls):
            return cli_cls(str(exc))
    return KubehelloCliError(str(exc))
