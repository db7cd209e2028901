# topmark:header:start
#
#   project      : KubeHello
#   file         : model.py
#   file_relpath : src/kubehello/resource/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data model shared by the specifier collector, the resolver and the visitor.

All records are immutable and scoped to a single invocation.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from kubehello.core.errors import ResolutionError


class SpecifierKind(str, Enum):
    """Which input source a `ResourceSpecifier` describes."""

    FILES = "files"
    KUSTOMIZE = "kustomize"
    IDENTIFIERS = "identifiers"


@dataclass(frozen=True)
class ResourceIdentifier:
    """A positional type token, optionally narrowed to one name.

    Attributes:
        type (str): The type token as typed by the user (e.g. ``rc``, ``pods``).
        name (str | None): Resource name, or None for "all resources of this type".
    """

    type: str
    name: str | None = None

    def __str__(self) -> str:
        return f"{self.type}/{self.name}" if self.name else self.type


@dataclass(frozen=True)
class ResourceSpecifier:
    """Validated description of what to resolve.

    Exactly one of ``filenames``, ``kustomize`` or ``identifiers`` is populated,
    as reported by ``kind``.

    Attributes:
        kind (SpecifierKind): The active input source.
        filenames (tuple[str, ...]): Paths, URLs or ``-`` (stdin), in command-line order.
        kustomize (str | None): Overlay directory.
        recursive (bool): Whether directories given with ``-f`` are traversed recursively.
        args (tuple[str, ...]): The raw positional arguments.
        identifiers (tuple[ResourceIdentifier, ...]): Parsed positional arguments.
    """

    kind: SpecifierKind
    filenames: tuple[str, ...] = ()
    kustomize: str | None = None
    recursive: bool = False
    args: tuple[str, ...] = ()
    identifiers: tuple[ResourceIdentifier, ...] = ()

    @property
    def has_args(self) -> bool:
        """Return True if positional arguments were given."""
        return bool(self.args)


@dataclass(frozen=True)
class RawDocument:
    """A parsed but not yet validated document.

    Attributes:
        data (Any): Whatever the JSON/YAML parser produced.
        source (str): Path, URL or ``<stdin>`` the document was read from.
    """

    data: Any
    source: str


@dataclass(frozen=True)
class ResolvedResource:
    """A normalized resource record.

    Attributes:
        kind (str): Resource kind, e.g. ``ReplicationController``. Never empty.
        name (str): Resource name. Never empty.
        namespace (str | None): Namespace, if the resource is namespaced.
        creation_timestamp (str | None): ``metadata.creationTimestamp`` as reported by
            the remote authority. Only set on the identifier path.
        payload (Mapping[str, Any]): The original structured document.
        source (str): Where the record came from (path, URL, ``<stdin>``, ``type/name``).
    """

    kind: str
    name: str
    namespace: str | None = None
    creation_timestamp: str | None = None
    payload: Mapping[str, Any] = field(default_factory=lambda: {})
    source: str = ""

    def __post_init__(self) -> None:
        if not self.kind or not self.name:
            raise ValueError(f"resource from {self.source!r} must have a kind and a name")


@dataclass(frozen=True)
class ResolutionItem:
    """One entry of a resolution outcome: either a resource or an error."""

    resource: ResolvedResource | None = None
    error: ResolutionError | None = None

    @classmethod
    def ok(cls, resource: ResolvedResource) -> ResolutionItem:
        """Wrap a resolved resource."""
        return cls(resource=resource)

    @classmethod
    def failed(cls, error: ResolutionError) -> ResolutionItem:
        """Wrap a per-item resolution error."""
        return cls(error=error)

    @property
    def is_error(self) -> bool:
        """Return True if this item carries an error."""
        return self.error is not None


@dataclass(frozen=True)
class ResolutionOutcome:
    """Ordered, materialized result of resolving one specifier."""

    items: tuple[ResolutionItem, ...] = ()

    @property
    def resources(self) -> list[ResolvedResource]:
        """Return the successfully resolved resources, in order."""
        return [i.resource for i in self.items if i.resource is not None]

    @property
    def errors(self) -> list[ResolutionError]:
        """Return the accumulated per-item errors, in order."""
        return [i.error for i in self.items if i.error is not None]

    def __iter__(self) -> Iterator[ResolutionItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
