# topmark:header:start
#
#   project      : KubeHello
#   file         : options.py
#   file_relpath : src/kubehello/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Option bundles shared by the KubeHello commands.

Each bundle is a decorator applying a fixed list of `click.option` calls, so
``@cluster_options`` on a command adds ``-n``, ``--server``, ``--token`` and
``--kubeconfig`` in one line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import click

from kubehello.cli.cli_types import EnumChoiceParam, OutputFormat
from kubehello.cli.errors import KubehelloUsageError
from kubehello.cli.keys import ArgKey, CliOpt

if TYPE_CHECKING:
    from collections.abc import Callable

F = TypeVar("F", bound="Callable[..., Any]")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Fold ``-v``/``-q`` counts into a signed verbosity level.

    Raises:
        KubehelloUsageError: If both flags are given.
    """
    if verbose_count and quiet_count:
        raise KubehelloUsageError(f"{CliOpt.VERBOSE} and {CliOpt.QUIET} cannot be combined.")
    return verbose_count - quiet_count


def _bundle(*options: Callable[[F], F]) -> Callable[[F], F]:
    # Options are listed in --help order
    def decorate(f: F) -> F:
        for option in reversed(options):
            f = option(f)
        return f

    return decorate


common_verbose_options = _bundle(
    click.option("-v", CliOpt.VERBOSE, ArgKey.VERBOSE, count=True, help="Report diagnostics after the run."),
    click.option("-q", CliOpt.QUIET, ArgKey.QUIET, count=True, help="Print nothing but the greeting lines."),
)

resource_selection_options = _bundle(
    click.option(
        "-f",
        CliOpt.FILENAME,
        ArgKey.FILENAMES,
        multiple=True,
        metavar="PATH|URL|-",
        help="Manifest file, directory or URL to read; '-' reads STDIN. Repeatable.",
    ),
    click.option(
        "-k",
        CliOpt.KUSTOMIZE,
        ArgKey.KUSTOMIZE,
        metavar="DIR",
        help="Overlay directory to render. Excludes -f.",
    ),
    click.option(
        "-R",
        CliOpt.RECURSIVE,
        ArgKey.RECURSIVE,
        is_flag=True,
        help="Descend into subdirectories of -f directories.",
    ),
    click.option(
        "-o",
        CliOpt.OUTPUT,
        ArgKey.OUTPUT_FORMAT,
        type=EnumChoiceParam(OutputFormat),
        help="Accepted for compatibility; greetings are always printed the same way.",
    ),
    click.option(
        CliOpt.RECORD,
        ArgKey.RECORD,
        is_flag=True,
        help="Store this command line in the kubernetes.io/change-cause annotation.",
    ),
)

cluster_options = _bundle(
    click.option("-n", CliOpt.NAMESPACE, ArgKey.NAMESPACE, help="Namespace to enforce."),
    click.option(CliOpt.SERVER, ArgKey.SERVER, metavar="URL", help="API server address."),
    click.option(CliOpt.TOKEN, ArgKey.TOKEN, help="Bearer token for the API server."),
    click.option(CliOpt.KUBECONFIG, ArgKey.KUBECONFIG, metavar="PATH", help="Kubeconfig file to read."),
)

config_options = _bundle(
    click.option(
        CliOpt.CONFIG_PATHS,
        ArgKey.CONFIG_PATHS,
        multiple=True,
        metavar="FILE",
        help="Extra TOML config file, applied after discovered ones. Repeatable.",
    ),
    click.option(CliOpt.NO_CONFIG, ArgKey.NO_CONFIG, is_flag=True, help="Skip config file discovery."),
)
