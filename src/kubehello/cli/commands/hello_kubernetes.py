# topmark:header:start
#
#   project      : KubeHello
#   file         : hello_kubernetes.py
#   file_relpath : src/kubehello/cli/commands/hello_kubernetes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KubeHello `hello-kubernetes` command.

Resolves resources from manifests (``-f``), an overlay directory (``-k``) or
``TYPE[/NAME]`` identifiers looked up on the API server, and prints one
greeting line per resource:

    Hello <name> <kind>                       (manifests, overlays, STDIN)
    Hello <name> <kind> <creationTimestamp>   (TYPE[/NAME] identifiers)

Examples:
    kubehello hello-kubernetes -f ./pod.json
    cat pod.json | kubehello hello-kubernetes -f -
    kubehello hello-kubernetes -k ./overlays/dev
    kubehello hello-kubernetes pods/nginx --server https://127.0.0.1:6443
"""

from __future__ import annotations

import os
import shlex
import sys
from typing import TYPE_CHECKING

import click

from kubehello.cli.config_resolver import resolve_config_from_click
from kubehello.cli.console import get_console
from kubehello.cli.errors import to_cli_error
from kubehello.cli.keys import ArgKey, CliCmd
from kubehello.cli.options import cluster_options, config_options, resource_selection_options
from kubehello.config.kubeconfig import load_kube_context
from kubehello.config.logging import get_logger
from kubehello.config.namespace import resolve_namespace
from kubehello.core.diagnostics import DiagnosticLog
from kubehello.core.errors import KubehelloError
from kubehello.output.recorder import select_recorder
from kubehello.pipeline import runner
from kubehello.resource.authority import RestAuthority
from kubehello.resource.documents import DocumentLoader
from kubehello.resource.model import SpecifierKind
from kubehello.resource.specifier import collect_specifier

if TYPE_CHECKING:
    from kubehello.cli.cli_types import OutputFormat
    from kubehello.cli.console import ConsoleLike
    from kubehello.config.kubeconfig import KubeContext
    from kubehello.config.logging import KubehelloLogger
    from kubehello.config.model import Config
    from kubehello.config.namespace import NamespaceContext
    from kubehello.output.recorder import Recorder
    from kubehello.resource.authority import ResourceAuthority
    from kubehello.resource.model import ResourceSpecifier


logger: KubehelloLogger = get_logger(__name__)


def current_command_line() -> str:
    """Return the invoking command line, as recorded by ``--record``."""
    return shlex.join([os.path.basename(sys.argv[0]), *sys.argv[1:]])


def build_authority(config: Config, kube_context: KubeContext) -> RestAuthority | None:
    """Return a REST authority for the configured server, or None without one."""
    server: str | None = config.server or kube_context.server
    if not server:
        return None
    token: str | None = config.token or kube_context.token
    logger.info("Using API server %s", server)
    return RestAuthority(server, token=token, timeout=config.timeout)


def report_diagnostics(console: ConsoleLike, diagnostics: DiagnosticLog, verbosity: int) -> None:
    """Print collected diagnostics to stderr when running verbosely."""
    if verbosity <= 0 or not len(diagnostics):
        return
    for diag in diagnostics:
        console.warn(diag.render(color=console.enable_color))


@click.command(
    name=CliCmd.HELLO_KUBERNETES,
    help="Print a greeting for every resource read from files, an overlay, or the API server.",
    epilog=(
        "Resources from -f/-k are greeted as 'Hello NAME KIND'; "
        "TYPE[/NAME] arguments add the creation timestamp."
    ),
)
@resource_selection_options
@cluster_options
@config_options
@click.argument("args", nargs=-1, type=str, metavar="[TYPE[/NAME] | TYPE NAME ...]")
@click.pass_context
def hello_kubernetes_command(
    ctx: click.Context,
    *,
    args: tuple[str, ...],
    filenames: tuple[str, ...],
    kustomize: str | None,
    recursive: bool,
    output_format: OutputFormat | None,
    record: bool,
    namespace: str | None,
    server: str | None,
    token: str | None,
    kubeconfig: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Greet every resolved resource.

    Args:
        ctx (click.Context): Click context (console, verbosity, test overrides).
        args (tuple[str, ...]): Positional ``TYPE[/NAME]`` arguments.
        filenames (tuple[str, ...]): ``-f`` values.
        kustomize (str | None): ``-k`` directory.
        recursive (bool): Traverse ``-f`` directories recursively.
        output_format (OutputFormat | None): Accepted for compatibility; not used.
        record (bool): Attach the change-cause annotation.
        namespace (str | None): Enforced namespace.
        server (str | None): API server address.
        token (str | None): API server bearer token.
        kubeconfig (str | None): Kubeconfig path.
        config_paths (tuple[str, ...]): Extra config files.
        no_config (bool): Skip config discovery.
    """
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)
    verbosity: int = int(ctx.obj.get(ArgKey.VERBOSITY_LEVEL, 0))
    diagnostics = DiagnosticLog()
    if output_format is not None:
        logger.debug("Ignoring --output=%s", output_format.value)
        diagnostics.add_info(f"--output={output_format.value} does not change the greeting lines")
    ctx.obj[ArgKey.DIAGNOSTICS] = diagnostics
    authority: ResourceAuthority | None = None
    owned_authority: RestAuthority | None = None
    try:
        # Validation happens before any I/O
        specifier: ResourceSpecifier = collect_specifier(
            args, filenames=filenames, kustomize=kustomize, recursive=recursive
        )

        config: Config = resolve_config_from_click(
            verbosity_level=verbosity,
            namespace=namespace,
            server=server,
            token=token,
            kubeconfig=kubeconfig,
            record=record,
            no_config=no_config,
            config_paths=list(config_paths),
        ).freeze()
        kube_context: KubeContext = load_kube_context(config.kubeconfig)
        namespace_ctx: NamespaceContext = resolve_namespace(config, kube_context)
        recorder: Recorder = select_recorder(config.record, current_command_line())

        if specifier.kind is SpecifierKind.IDENTIFIERS:
            authority = ctx.obj.get(ArgKey.AUTHORITY)
            if authority is None:
                owned_authority = build_authority(config, kube_context)
                authority = owned_authority

        run_ctx = runner.RunContext(
            specifier=specifier,
            namespace=namespace_ctx,
            recorder=recorder,
            out=click.get_text_stream("stdout"),
            loader=DocumentLoader(stdin=click.get_text_stream("stdin"), timeout=config.timeout),
            authority=authority,
            diagnostics=diagnostics,
        )
        runner.run(run_ctx)
    except KubehelloError as e:
        raise to_cli_error(e) from e
    finally:
        if owned_authority is not None:
            owned_authority.close()
        report_diagnostics(console, diagnostics, verbosity)
