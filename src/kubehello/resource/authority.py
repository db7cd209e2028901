# topmark:header:start
#
#   project      : KubeHello
#   file         : authority.py
#   file_relpath : src/kubehello/resource/authority.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Remote lookup of live resources by kind and optional name.

`ResourceAuthority` is the narrow interface the resolver depends on.
`RestAuthority` implements it against a Kubernetes-style REST API:

    GET {server}/api/v1[/namespaces/{ns}]/{plural}[/{name}]          (core group)
    GET {server}/apis/{group}/{version}[/namespaces/{ns}]/{plural}[/{name}]

A 404 means "nothing matched" and yields an empty list. Any other HTTP
error, or a transport failure, raises `AuthorityUnavailableError`: a single
round trip has no partial result worth keeping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import quote

import httpx

from kubehello.config.logging import get_logger
from kubehello.constants import DEFAULT_TIMEOUT
from kubehello.core.errors import AuthorityUnavailableError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kubehello.config.logging import KubehelloLogger
    from kubehello.resource.kinds import ResourceKind

logger: KubehelloLogger = get_logger(__name__)


class ResourceAuthority(Protocol):
    """Source of live resource documents."""

    def lookup(
        self, kind: ResourceKind, name: str | None, namespace: str | None
    ) -> list[Mapping[str, Any]]:
        """Return the documents matching ``kind`` and ``name`` in server order.

        Args:
            kind (ResourceKind): The canonical kind to look up.
            name (str | None): A single name, or None for every resource of the kind.
            namespace (str | None): Scope of the lookup; ignored for cluster-scoped kinds.

        Returns:
            list[Mapping[str, Any]]: Matching documents; empty when nothing matched.

        Raises:
            AuthorityUnavailableError: If the authority cannot be consulted.
        """
        ...


class UnconfiguredAuthority:
    """Authority used when no API server is known; every lookup fails."""

    def lookup(
        self, kind: ResourceKind, name: str | None, namespace: str | None
    ) -> list[Mapping[str, Any]]:
        """Raise `AuthorityUnavailableError`."""
        raise AuthorityUnavailableError(
            "no server configured: pass --server, set 'server' in kubehello.toml "
            "or select a kubeconfig context"
        )


def build_resource_path(kind: ResourceKind, name: str | None, namespace: str | None) -> str:
    """Return the REST path (without server) for a lookup.

    ``name`` and ``namespace`` are percent-encoded as single path segments.
    """
    base: str = f"/apis/{kind.group}/{kind.version}" if kind.group else f"/api/{kind.version}"
    if kind.namespaced and namespace:
        base += f"/namespaces/{quote(namespace, safe='')}"
    base += f"/{kind.plural}"
    if name:
        base += f"/{quote(name, safe='')}"
    return base


class RestAuthority:
    """`ResourceAuthority` backed by an HTTP API server.

    Args:
        server (str): Base URL of the API server.
        token (str | None): Bearer token, if the server requires one.
        timeout (float): Request timeout in seconds.
        transport (httpx.BaseTransport | None): Custom transport (tests use
            `httpx.MockTransport`).
    """

    def __init__(
        self,
        server: str,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._server = server.rstrip("/")
        headers: dict[str, str] = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=self._server,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @property
    def server(self) -> str:
        """Return the API server base URL."""
        return self._server

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> RestAuthority:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def lookup(
        self, kind: ResourceKind, name: str | None, namespace: str | None
    ) -> list[Mapping[str, Any]]:
        """Fetch one resource or a list of resources from the API server."""
        path: str = build_resource_path(kind, name, namespace)
        logger.debug("GET %s%s", self._server, path)
        try:
            response: httpx.Response = self._client.get(path)
        except httpx.HTTPError as e:
            raise AuthorityUnavailableError(f"unable to connect to the server: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("No match for %s", path)
            return []
        if response.is_error:
            raise AuthorityUnavailableError(
                f"the server returned {response.status_code} {response.reason_phrase} "
                f"for {kind.plural}{'/' + name if name else ''}"
            )

        try:
            body: Any = response.json()
        except ValueError as e:
            raise AuthorityUnavailableError(f"the server returned invalid JSON: {e}") from e
        if not isinstance(body, dict):
            raise AuthorityUnavailableError("the server returned an unexpected response")

        if name is not None:
            body.setdefault("kind", kind.kind)
            return [body]
        items: Any = body.get("items")
        if not isinstance(items, list):
            return []
        documents: list[Mapping[str, Any]] = []
        for item in items:
            if isinstance(item, dict):
                # List items usually omit kind/apiVersion
                item.setdefault("kind", kind.kind)
                item.setdefault("apiVersion", kind.api_version)
                documents.append(item)
        return documents
