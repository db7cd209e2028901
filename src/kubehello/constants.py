# topmark:header:start
#
#   project      : KubeHello
#   file         : constants.py
#   file_relpath : src/kubehello/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KubeHello Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

KUBEHELLO_VERSION: str = get_version("kubehello")

# Config discovery
CONFIG_FILE_NAME: Final[str] = "kubehello.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "kubehello"

# Environment
ENV_LOG_LEVEL: Final[str] = "KUBEHELLO_LOG_LEVEL"
ENV_KUBECONFIG: Final[str] = "KUBECONFIG"

# Namespace used when neither flag, config nor kubeconfig context provides one
DEFAULT_NAMESPACE: Final[str] = "default"

# Default HTTP timeout (seconds) for the API server and remote manifests
DEFAULT_TIMEOUT: Final[float] = 30.0

# Directory expansion for -f DIR
MANIFEST_EXTENSIONS: Final[tuple[str, ...]] = (".json", ".yaml", ".yml")

# Overlay files recognized in a -k DIR, in lookup order
KUSTOMIZATION_FILE_NAMES: Final[tuple[str, ...]] = (
    "kustomization.yaml",
    "kustomization.yml",
    "Kustomization",
)

# Annotation written by the active recorder
CHANGE_CAUSE_ANNOTATION: Final[str] = "kubernetes.io/change-cause"

# Source label for documents read from STDIN
STDIN_SOURCE: Final[str] = "<stdin>"
