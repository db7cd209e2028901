# topmark:header:start
#
#   project      : KubeHello
#   file         : resolver.py
#   file_relpath : src/kubehello/resource/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve a `ResourceSpecifier` into an ordered stream of resolution items.

Two paths exist:

- **documents** (``-f``/``-k``): the loader parses every input; each document
  becomes a `ResolvedResource` or a per-item `ResolutionError`. The remote
  authority is never contacted.
- **identifiers** (``TYPE[/NAME]``): each identifier is looked up at the
  `ResourceAuthority`. Unknown types and unmatched names become per-item errors;
  an unavailable authority aborts the whole resolution.

Results always keep input order. Errors never stop the batch.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from kubehello.config.logging import get_logger
from kubehello.core.errors import ResolutionError
from kubehello.resource.authority import UnconfiguredAuthority
from kubehello.resource.documents import DocumentLoader
from kubehello.resource.kinds import DEFAULT_REGISTRY
from kubehello.resource.model import (
    RawDocument,
    ResolutionItem,
    ResolutionOutcome,
    ResolvedResource,
    SpecifierKind,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from kubehello.config.logging import KubehelloLogger
    from kubehello.config.namespace import NamespaceContext
    from kubehello.resource.authority import ResourceAuthority
    from kubehello.resource.kinds import KindRegistry, ResourceKind
    from kubehello.resource.model import ResourceIdentifier, ResourceSpecifier

logger: KubehelloLogger = get_logger(__name__)


def _failed(source: str, reason: str) -> ResolutionItem:
    error = ResolutionError(source, reason)
    logger.warning("%s", error)
    return ResolutionItem.failed(error)


def _string(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def document_to_item(
    doc: RawDocument,
    namespace: NamespaceContext,
    registry: KindRegistry = DEFAULT_REGISTRY,
) -> ResolutionItem:
    """Validate one parsed document and normalize it into a resource.

    Args:
        doc (RawDocument): The parsed document.
        namespace (NamespaceContext): The effective namespace for this invocation.
        registry (KindRegistry): Kind registry used to detect cluster-scoped kinds.

    Returns:
        ResolutionItem: The resolved resource, or a per-item error.
    """
    data: Any = doc.data
    if not isinstance(data, Mapping):
        return _failed(doc.source, f"document is not an object: {type(data).__name__}")
    kind: str | None = _string(data.get("kind"))
    if kind is None:
        return _failed(doc.source, "Object 'Kind' is missing")
    metadata: Any = data.get("metadata")
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, Mapping):
        return _failed(doc.source, f"metadata of {kind} is not an object")
    name: str | None = _string(metadata.get("name"))
    if name is None:
        return _failed(doc.source, f"resource name may not be empty ({kind})")

    known: ResourceKind | None = registry.lookup(kind)
    payload: Mapping[str, Any] = data
    effective: str | None = None
    if known is None or known.namespaced:
        declared: str | None = _string(metadata.get("namespace"))
        if declared and namespace.enforced and declared != namespace.namespace:
            return _failed(
                doc.source,
                f'the namespace from the provided object "{declared}" does not match '
                f'the namespace "{namespace.namespace}". '
                f"You must pass '--namespace={declared}' to perform this operation.",
            )
        effective = declared or namespace.namespace
        if not declared:
            defaulted: dict[str, Any] = copy.deepcopy(dict(data))
            defaulted["metadata"] = {**dict(metadata), "namespace": effective}
            payload = defaulted

    return ResolutionItem.ok(
        ResolvedResource(
            kind=kind,
            name=name,
            namespace=effective,
            payload=payload,
            source=doc.source,
        )
    )


def _resolve_documents(
    specifier: ResourceSpecifier,
    namespace: NamespaceContext,
    loader: DocumentLoader,
    registry: KindRegistry,
) -> Iterator[ResolutionItem]:
    for doc in loader.load(specifier):
        if isinstance(doc, ResolutionError):
            logger.warning("%s", doc)
            yield ResolutionItem.failed(doc)
        else:
            yield document_to_item(doc, namespace, registry)


def _remote_to_item(document: Mapping[str, Any], kind: ResourceKind, source: str) -> ResolutionItem:
    metadata: Any = document.get("metadata")
    if not isinstance(metadata, Mapping):
        metadata = {}
    name: str | None = _string(metadata.get("name"))
    if name is None:
        return _failed(source, "the server returned a resource without a name")
    return ResolutionItem.ok(
        ResolvedResource(
            kind=_string(document.get("kind")) or kind.kind,
            name=name,
            namespace=_string(metadata.get("namespace")),
            creation_timestamp=_string(metadata.get("creationTimestamp")),
            payload=document,
            source=f"{kind.plural}/{name}",
        )
    )


def _resolve_identifier(
    ident: ResourceIdentifier,
    namespace: NamespaceContext,
    authority: ResourceAuthority,
    registry: KindRegistry,
) -> Iterator[ResolutionItem]:
    kind: ResourceKind | None = registry.lookup(ident.type)
    if kind is None:
        yield _failed(str(ident), f'the server doesn\'t have a resource type "{ident.type}"')
        return

    scope: str | None = namespace.namespace if kind.namespaced else None
    # AuthorityUnavailableError propagates: it aborts the whole lookup
    documents: list[Mapping[str, Any]] = authority.lookup(kind, ident.name, scope)
    if not documents and ident.name:
        yield _failed(f"{kind.plural}/{ident.name}", f'{kind.plural} "{ident.name}" not found')
        return
    for document in documents:
        yield _remote_to_item(document, kind, str(ident))


def iter_resolution(
    specifier: ResourceSpecifier,
    *,
    namespace: NamespaceContext,
    loader: DocumentLoader | None = None,
    authority: ResourceAuthority | None = None,
    registry: KindRegistry = DEFAULT_REGISTRY,
) -> Iterator[ResolutionItem]:
    """Lazily resolve ``specifier``, one item at a time.

    Args:
        specifier (ResourceSpecifier): What to resolve.
        namespace (NamespaceContext): The effective namespace, resolved once by the caller.
        loader (DocumentLoader | None): Document loader for the files/overlay path.
        authority (ResourceAuthority | None): Remote authority for the identifier path.
        registry (KindRegistry): Kind registry.

    Yields:
        ResolutionItem: Resources and per-item errors in resolution order.

    Raises:
        AuthorityUnavailableError: If the authority cannot be consulted.
    """
    if specifier.kind is SpecifierKind.IDENTIFIERS:
        remote: ResourceAuthority = authority if authority is not None else UnconfiguredAuthority()
        for ident in specifier.identifiers:
            yield from _resolve_identifier(ident, namespace, remote, registry)
    else:
        yield from _resolve_documents(
            specifier, namespace, loader if loader is not None else DocumentLoader(), registry
        )


def resolve(
    specifier: ResourceSpecifier,
    *,
    namespace: NamespaceContext,
    loader: DocumentLoader | None = None,
    authority: ResourceAuthority | None = None,
    registry: KindRegistry = DEFAULT_REGISTRY,
) -> ResolutionOutcome:
    """Resolve ``specifier`` completely and return the materialized outcome."""
    return ResolutionOutcome(
        tuple(
            iter_resolution(
                specifier,
                namespace=namespace,
                loader=loader,
                authority=authority,
                registry=registry,
            )
        )
    )
