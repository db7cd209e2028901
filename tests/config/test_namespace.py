# topmark:header:start
#
#   project      : KubeHello
#   file         : test_namespace.py
#   file_relpath : tests/config/test_namespace.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for effective namespace precedence."""

from __future__ import annotations

from kubehello.config.kubeconfig import KubeContext
from kubehello.config.namespace import NamespaceContext, resolve_namespace
from tests.conftest import make_config


def test_default() -> None:
    assert resolve_namespace(make_config()) == NamespaceContext("default")


def test_kubeconfig_namespace() -> None:
    ns: NamespaceContext = resolve_namespace(make_config(), KubeContext(namespace="kube"))

    assert ns == NamespaceContext("kube")


def test_config_beats_kubeconfig() -> None:
    ns: NamespaceContext = resolve_namespace(
        make_config(namespace="cfg"), KubeContext(namespace="kube")
    )

    assert ns == NamespaceContext("cfg")


def test_cli_override_is_enforced() -> None:
    ns: NamespaceContext = resolve_namespace(
        make_config(namespace="cfg", namespace_override="cli"), KubeContext(namespace="kube")
    )

    assert ns == NamespaceContext("cli", enforced=True)
