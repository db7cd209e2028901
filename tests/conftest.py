# topmark:header:start
#
#   project      : KubeHello
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared fixtures and helpers for the KubeHello tests.

Every test runs with ``HOME``, ``XDG_CONFIG_HOME`` and ``KUBECONFIG`` pointed
away from the developer's machine, and with logging at TRACE so that every
log call is formatted at least once.

Sample manifests live in ``tests/data``; identifier lookups are served by
`InMemoryAuthority` instead of a real API server.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from kubehello.config import MutableConfig, logging
from kubehello.constants import ENV_KUBECONFIG, ENV_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from kubehello.config import Config
    from kubehello.resource.kinds import ResourceKind

F = TypeVar("F", bound="Callable[..., object]")

DATA_DIR: Path = Path(__file__).parent / "data"


def _typed(mark: Any) -> Callable[[F], F]:
    # pytest marks are untyped; keep the decorated function's signature
    return cast("Callable[[F], F]", mark)


mark_cli = _typed(pytest.mark.cli)
mark_pipeline = _typed(pytest.mark.pipeline)


def parametrize(argnames: str, argvalues: Any, **kwargs: Any) -> Callable[[F], F]:
    """`pytest.mark.parametrize`, typed."""
    return _typed(pytest.mark.parametrize(argnames, argvalues, **kwargs))


def pytest_configure(config: pytest.Config) -> None:
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Hide user config, kubeconfig and log level settings from the tests."""
    home: Path = tmp_path / "home"
    home.mkdir(exist_ok=True)
    for name in (ENV_LOG_LEVEL, ENV_KUBECONFIG):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Chdir into an empty project directory and return it."""
    project: Path = tmp_path / "proj"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


def data_path(*parts: str) -> str:
    """Return ``tests/data/<parts>`` as a string, ready for ``-f``."""
    return str(DATA_DIR.joinpath(*parts))


def make_document(
    kind: str,
    name: str,
    *,
    namespace: str | None = None,
    creation_timestamp: str | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace is not None:
        metadata["namespace"] = namespace
    if creation_timestamp is not None:
        metadata["creationTimestamp"] = creation_timestamp
    return {"apiVersion": "v1", "kind": kind, "metadata": metadata}


@dataclass
class InMemoryAuthority:
    """A `ResourceAuthority` answering from ``documents``.

    Each lookup is appended to ``calls`` as ``(kind, name, namespace)``.
    Documents are deep-copied on the way out, like a fresh API response.
    """

    documents: list[dict[str, Any]] = field(default_factory=list)
    calls: list[tuple[str, str | None, str | None]] = field(default_factory=list)

    def _matches(self, doc: dict[str, Any], kind: ResourceKind, name: str | None, namespace: str | None) -> bool:
        meta: dict[str, Any] = doc.get("metadata", {})
        if doc.get("kind") != kind.kind:
            return False
        if name is not None and meta.get("name") != name:
            return False
        return not (kind.namespaced and namespace and meta.get("namespace", namespace) != namespace)

    def lookup(self, kind: ResourceKind, name: str | None, namespace: str | None) -> list[Mapping[str, Any]]:
        self.calls.append((kind.kind, name, namespace))
        return [copy.deepcopy(d) for d in self.documents if self._matches(d, kind, name, namespace)]


@pytest.fixture
def authority() -> InMemoryAuthority:
    """Two replication controllers and a service in ``default``."""
    return InMemoryAuthority(
        documents=[
            make_document(kind, name, namespace="default", creation_timestamp=ts)
            for kind, name, ts in (
                ("ReplicationController", "redis-master", "2016-03-01T10:00:00Z"),
                ("ReplicationController", "redis-slave", "2016-03-01T10:05:00Z"),
                ("Service", "frontend", "2016-03-02T08:00:00Z"),
            )
        ]
    )


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return `MutableConfig.from_defaults()` with ``overrides`` set as attributes."""
    draft: MutableConfig = MutableConfig.from_defaults()
    for key, value in overrides.items():
        setattr(draft, key, value)
    return draft


def make_config(**overrides: Any) -> Config:
    return make_mutable_config(**overrides).freeze()
