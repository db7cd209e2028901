# topmark:header:start
#
#   project      : KubeHello
#   file         : kinds.py
#   file_relpath : src/kubehello/resource/kinds.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of well-known resource kinds.

Type tokens typed on the command line (``rc``, ``replicationcontroller``,
``ReplicationControllers``, ...) are mapped to a canonical `ResourceKind`
that carries everything needed to build a REST path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final


@dataclass(frozen=True)
class ResourceKind:
    """Canonical description of a resource type.

    Attributes:
        kind (str): CamelCase kind as it appears in documents (``Service``).
        group (str): API group; empty for the core group.
        version (str): API version within the group.
        plural (str): Lower-case plural used in REST paths (``services``).
        namespaced (bool): Whether resources of this kind live in a namespace.
        short_names (tuple[str, ...]): Abbreviations accepted on the command line.
    """

    kind: str
    group: str
    version: str
    plural: str
    namespaced: bool = True
    short_names: tuple[str, ...] = field(default=())

    @property
    def api_version(self) -> str:
        """Return the ``apiVersion`` string (``v1`` or ``group/version``)."""
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def aliases(self) -> tuple[str, ...]:
        """Return every lower-cased token that names this kind."""
        return (self.kind.lower(), self.plural, *self.short_names)


BUILTIN_KINDS: Final[tuple[ResourceKind, ...]] = (
    ResourceKind("Pod", "", "v1", "pods", short_names=("po",)),
    ResourceKind("Service", "", "v1", "services", short_names=("svc",)),
    ResourceKind("ReplicationController", "", "v1", "replicationcontrollers", short_names=("rc",)),
    ResourceKind("ConfigMap", "", "v1", "configmaps", short_names=("cm",)),
    ResourceKind("Secret", "", "v1", "secrets"),
    ResourceKind("ServiceAccount", "", "v1", "serviceaccounts", short_names=("sa",)),
    ResourceKind("Endpoints", "", "v1", "endpoints", short_names=("ep",)),
    ResourceKind(
        "PersistentVolumeClaim", "", "v1", "persistentvolumeclaims", short_names=("pvc",)
    ),
    ResourceKind(
        "PersistentVolume", "", "v1", "persistentvolumes", namespaced=False, short_names=("pv",)
    ),
    ResourceKind("Namespace", "", "v1", "namespaces", namespaced=False, short_names=("ns",)),
    ResourceKind("Node", "", "v1", "nodes", namespaced=False, short_names=("no",)),
    ResourceKind("Deployment", "apps", "v1", "deployments", short_names=("deploy",)),
    ResourceKind("ReplicaSet", "apps", "v1", "replicasets", short_names=("rs",)),
    ResourceKind("StatefulSet", "apps", "v1", "statefulsets", short_names=("sts",)),
    ResourceKind("DaemonSet", "apps", "v1", "daemonsets", short_names=("ds",)),
    ResourceKind("Job", "batch", "v1", "jobs"),
    ResourceKind("CronJob", "batch", "v1", "cronjobs", short_names=("cj",)),
    ResourceKind("Ingress", "networking.k8s.io", "v1", "ingresses", short_names=("ing",)),
)


class KindRegistry:
    """Case-insensitive lookup of `ResourceKind` by any of its aliases."""

    def __init__(self, kinds: tuple[ResourceKind, ...] = BUILTIN_KINDS) -> None:
        self._by_alias: dict[str, ResourceKind] = {}
        for k in kinds:
            for alias in k.aliases:
                self._by_alias[alias] = k

    def lookup(self, token: str) -> ResourceKind | None:
        """Return the kind named by ``token``, or None if unknown.

        A trailing ``.group`` suffix (``deployments.apps``) is accepted when it
        matches the kind's group.
        """
        key: str = token.strip().lower()
        found: ResourceKind | None = self._by_alias.get(key)
        if found is not None:
            return found
        name, _, group = key.partition(".")
        if group:
            candidate: ResourceKind | None = self._by_alias.get(name)
            if candidate is not None and candidate.group == group:
                return candidate
        return None

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.lookup(token) is not None


DEFAULT_REGISTRY: Final[KindRegistry] = KindRegistry()
