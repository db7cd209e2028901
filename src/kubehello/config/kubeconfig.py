# topmark:header:start
#
#   project      : KubeHello
#   file         : kubeconfig.py
#   file_relpath : src/kubehello/config/kubeconfig.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read the current context from a kubeconfig file.

Only the handful of fields KubeHello needs are extracted: the namespace of the
current context, plus the server URL and bearer token of the cluster and user
that context points to.

Discovery order:
    1. An explicit path (``--kubeconfig`` or the ``kubeconfig`` config key).
    2. The first entry of ``$KUBECONFIG``.
    3. ``~/.kube/config``.

A missing implicit kubeconfig is not an error. An explicit one that is missing,
or any kubeconfig that is not valid YAML, raises `ConfigError`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from kubehello.config.logging import get_logger
from kubehello.constants import ENV_KUBECONFIG
from kubehello.core.errors import ConfigError

if TYPE_CHECKING:
    from kubehello.config.logging import KubehelloLogger

logger: KubehelloLogger = get_logger(__name__)


@dataclass(frozen=True)
class KubeContext:
    """Fields taken from the kubeconfig's current context.

    Attributes:
        name (str | None): Name of the current context.
        namespace (str | None): Namespace bound to the context.
        server (str | None): API server URL of the context's cluster.
        token (str | None): Bearer token of the context's user.
        path (Path | None): The kubeconfig file that was read.
    """

    name: str | None = None
    namespace: str | None = None
    server: str | None = None
    token: str | None = None
    path: Path | None = None


EMPTY_CONTEXT = KubeContext()


def discover_kubeconfig(explicit: str | None = None) -> tuple[Path | None, bool]:
    """Return the kubeconfig path to read and whether it was explicitly requested."""
    if explicit:
        return Path(explicit).expanduser(), True
    env_value: str | None = os.environ.get(ENV_KUBECONFIG)
    if env_value:
        first: str = next((p for p in env_value.split(os.pathsep) if p), "")
        if first:
            return Path(first).expanduser(), False
    default: Path = Path.home() / ".kube" / "config"
    return default, False


def _named_entry(entries: Any, name: str | None, key: str) -> dict[str, Any]:
    """Find ``name`` in a kubeconfig list (``clusters``, ``users``, ``contexts``)."""
    if not name or not isinstance(entries, list):
        return {}
    for entry in entries:
        if isinstance(entry, dict) and entry.get("name") == name:
            body = entry.get(key)
            return body if isinstance(body, dict) else {}
    return {}


def load_kube_context(explicit: str | None = None) -> KubeContext:
    """Load the current context from the discovered kubeconfig.

    Args:
        explicit (str | None): Explicit kubeconfig path, if any.

    Returns:
        KubeContext: The current context, or an empty context when no kubeconfig
            exists or it has no current context.

    Raises:
        ConfigError: If an explicit kubeconfig is missing, or a kubeconfig cannot
            be read or parsed.
    """
    path, is_explicit = discover_kubeconfig(explicit)
    if path is None or not path.is_file():
        if is_explicit:
            raise ConfigError(f"kubeconfig not found: {path}")
        logger.debug("No kubeconfig at %s", path)
        return EMPTY_CONTEXT

    try:
        with path.open("r", encoding="utf-8") as fh:
            data: Any = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigError(f"cannot read kubeconfig {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"malformed kubeconfig {path}: {e}") from e

    if not isinstance(data, dict):
        logger.debug("Kubeconfig %s is empty or not a mapping", path)
        return KubeContext(path=path)

    current: Any = data.get("current-context")
    context_name: str | None = current if isinstance(current, str) and current else None
    context: dict[str, Any] = _named_entry(data.get("contexts"), context_name, "context")
    cluster: dict[str, Any] = _named_entry(data.get("clusters"), context.get("cluster"), "cluster")
    user: dict[str, Any] = _named_entry(data.get("users"), context.get("user"), "user")

    def _str_or_none(value: Any) -> str | None:
        return value if isinstance(value, str) and value else None

    kube_context = KubeContext(
        name=context_name,
        namespace=_str_or_none(context.get("namespace")),
        server=_str_or_none(cluster.get("server")),
        token=_str_or_none(user.get("token")),
        path=path,
    )
    logger.debug("Kubeconfig context: %s", kube_context)
    return kube_context
