# topmark:header:start
#
#   project      : KubeHello
#   file         : config_resolver.py
#   file_relpath : src/kubehello/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve KubeHello configuration from Click parameters.

Bridges CLI parsing and the config layer: builds an `ArgsNamespace`, layers
the discovered and explicit config files, then applies the CLI overrides.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kubehello.cli.cli_types import build_args_namespace
from kubehello.config import MutableConfig
from kubehello.config.logging import get_logger

if TYPE_CHECKING:
    from kubehello.cli.cli_types import ArgsNamespace
    from kubehello.config.logging import KubehelloLogger

logger: KubehelloLogger = get_logger(__name__)


def resolve_config_from_click(
    *,
    verbosity_level: int | None,
    namespace: str | None,
    server: str | None,
    token: str | None,
    kubeconfig: str | None,
    record: bool,
    no_config: bool,
    config_paths: list[str],
) -> MutableConfig:
    """Build a configuration draft from Click parameters.

    Resolution order (lowest → highest precedence):
      1. Built-in defaults.
      2. User config, unless ``--no-config``.
      3. Project config in the working directory, unless ``--no-config``.
      4. Explicit ``--config`` files, in order.
      5. CLI overrides.

    Args:
        verbosity_level (int | None): Program-output verbosity.
        namespace (str | None): ``--namespace`` value.
        server (str | None): ``--server`` value.
        token (str | None): ``--token`` value.
        kubeconfig (str | None): ``--kubeconfig`` value.
        record (bool): Whether ``--record`` was passed.
        no_config (bool): Skip user and project config discovery.
        config_paths (list[str]): Extra config files to merge.

    Returns:
        MutableConfig: The merged draft. Call `.freeze()` for the runtime `Config`.

    Raises:
        ConfigError: If an explicit config file is missing or malformed.
    """
    args: ArgsNamespace = build_args_namespace(
        verbosity_level=verbosity_level,
        namespace=namespace,
        server=server,
        token=token,
        kubeconfig=kubeconfig,
        record=record,
        no_config=no_config,
        config_files=config_paths,
    )
    logger.trace("ArgsNamespace: %s", args)

    draft: MutableConfig = MutableConfig.load_merged(
        no_config=bool(args.get("no_config")),
        config_paths=args.get("config_files") or [],
    )
    draft.apply_cli_args(args)
    logger.debug("Config sources: %s", draft.config_files)
    return draft
