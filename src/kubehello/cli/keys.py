# topmark:header:start
#
#   project      : KubeHello
#   file         : keys.py
#   file_relpath : src/kubehello/cli/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Names shared by the Click declarations, ``ctx.obj`` and the tests."""

from __future__ import annotations

from enum import StrEnum


class CliCmd(StrEnum):
    """Subcommand names."""

    HELLO_KUBERNETES = "hello-kubernetes"
    HELLO_WORLD = "hello-world"


class CliOpt(StrEnum):
    """Long option spellings."""

    FILENAME = "--filename"
    KUSTOMIZE = "--kustomize"
    RECURSIVE = "--recursive"
    OUTPUT = "--output"
    RECORD = "--record"
    NAMESPACE = "--namespace"
    SERVER = "--server"
    TOKEN = "--token"
    KUBECONFIG = "--kubeconfig"
    CONFIG_PATHS = "--config"
    NO_CONFIG = "--no-config"
    VERBOSE = "--verbose"
    QUIET = "--quiet"


class ArgKey(StrEnum):
    """Click parameter names, plus the keys the group stores in ``ctx.obj``."""

    FILENAMES = "filenames"
    KUSTOMIZE = "kustomize"
    RECURSIVE = "recursive"
    OUTPUT_FORMAT = "output_format"
    RECORD = "record"
    NAMESPACE = "namespace"
    SERVER = "server"
    TOKEN = "token"
    KUBECONFIG = "kubeconfig"
    CONFIG_PATHS = "config_paths"
    NO_CONFIG = "no_config"
    VERBOSE = "verbose"
    QUIET = "quiet"

    # ctx.obj only
    VERBOSITY_LEVEL = "verbosity_level"
    LOG_LEVEL = "log_level"
    CONSOLE = "console"
    DIAGNOSTICS = "diagnostics"
    AUTHORITY = "authority"
