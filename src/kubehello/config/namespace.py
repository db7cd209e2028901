# topmark:header:start
#
#   project      : KubeHello
#   file         : namespace.py
#   file_relpath : src/kubehello/config/namespace.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Effective namespace for one invocation.

The namespace is resolved once, before resolution starts, and the resulting
`NamespaceContext` is handed to every consumer. Precedence:

1. ``--namespace/-n`` on the command line (enforced);
2. ``namespace`` in a KubeHello config file;
3. the namespace of the kubeconfig's current context;
4. ``"default"``.

Only an explicit command-line namespace is *enforced*: documents declaring a
different namespace are then rejected instead of silently kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from kubehello.config.logging import get_logger
from kubehello.constants import DEFAULT_NAMESPACE

if TYPE_CHECKING:
    from kubehello.config.kubeconfig import KubeContext
    from kubehello.config.logging import KubehelloLogger
    from kubehello.config.model import Config

logger: KubehelloLogger = get_logger(__name__)


@dataclass(frozen=True)
class NamespaceContext:
    """The effective namespace and whether it was explicitly requested."""

    namespace: str
    enforced: bool = False


def resolve_namespace(config: Config, kube_context: KubeContext | None = None) -> NamespaceContext:
    """Compute the effective namespace.

    Args:
        config (Config): The frozen runtime configuration.
        kube_context (KubeContext | None): The kubeconfig's current context, if loaded.

    Returns:
        NamespaceContext: The namespace to apply and its enforcement flag.
    """
    if config.namespace_override:
        ns = NamespaceContext(config.namespace_override, enforced=True)
    elif config.namespace:
        ns = NamespaceContext(config.namespace)
    elif kube_context is not None and kube_context.namespace:
        ns = NamespaceContext(kube_context.namespace)
    else:
        ns = NamespaceContext(DEFAULT_NAMESPACE)
    logger.debug("Effective namespace: %s (enforced=%s)", ns.namespace, ns.enforced)
    return ns
