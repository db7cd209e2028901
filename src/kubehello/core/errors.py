# topmark:header:start
#
#   project      : KubeHello
#   file         : errors.py
#   file_relpath : src/kubehello/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception taxonomy for the KubeHello pipeline.

These exceptions are framework-agnostic. The CLI layer maps them onto
Click exceptions with sysexits-aligned exit codes (see `kubehello.cli.errors`).

Propagation:
    - `InvalidUsageError` is raised before any I/O takes place.
    - `ResolutionError` instances are *collected* per item; they travel inside the
      resolution outcome and are only raised in aggregate at the end of a batch.
    - `EmptyResultError` is raised when nothing could be emitted; it dominates
      any accumulated resolution errors.
    - `AuthorityUnavailableError` aborts an identifier lookup immediately.
    - `RecordingError` never leaves the visitor; it is logged and diagnosed only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class KubehelloError(Exception):
    """Base class for all KubeHello errors."""


class InvalidUsageError(KubehelloError):
    """The combination of arguments and options cannot describe a request."""


class ConfigError(KubehelloError):
    """A configuration source (TOML config, kubeconfig) is missing or malformed."""


class ResolutionError(KubehelloError):
    """A single specifier, document or identifier failed to resolve.

    Attributes:
        source (str): Where the failing item came from (path, URL, ``<stdin>``,
            or ``type/name``).
        reason (str): Human-readable reason.
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class AuthorityUnavailableError(KubehelloError):
    """The remote authority could not be consulted (no server, transport or HTTP failure)."""


class RecordingError(KubehelloError):
    """A best-effort provenance annotation could not be attached to a resource."""


def _summarize(errors: Sequence[ResolutionError]) -> str:
    return "; ".join(str(e) for e in errors)


class AggregateResolutionError(KubehelloError):
    """One or more items failed to resolve while others were emitted.

    Attributes:
        errors (tuple[ResolutionError, ...]): The per-item errors, in resolution order.
    """

    def __init__(self, errors: Sequence[ResolutionError]) -> None:
        self.errors: tuple[ResolutionError, ...] = tuple(errors)
        super().__init__(
            f"{len(self.errors)} resource(s) could not be resolved: {_summarize(self.errors)}"
        )


class EmptyResultError(KubehelloError):
    """The batch completed without emitting a single resource.

    Attributes:
        errors (tuple[ResolutionError, ...]): Resolution errors accumulated along the way
            (possibly empty).
    """

    def __init__(self, errors: Sequence[ResolutionError] = ()) -> None:
        self.errors: tuple[ResolutionError, ...] = tuple(errors)
        message = "no objects passed to print"
        if self.errors:
            message += f" ({len(self.errors)} error(s): {_summarize(self.errors)})"
        super().__init__(message)
