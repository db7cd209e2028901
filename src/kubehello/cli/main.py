# topmark:header:start
#
#   project      : KubeHello
#   file         : main.py
#   file_relpath : src/kubehello/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KubeHello Click group.

Group-level options are initialized once and placed into ``ctx.obj``:

- ``verbosity_level``: program-output verbosity from ``-v``/``-q``;
- ``log_level``: internal logging level from ``KUBEHELLO_LOG_LEVEL``;
- ``console``: the `ClickConsole` used for user-facing messages.

Tests may pre-populate ``ctx.obj`` (``CliRunner.invoke(..., obj={...})``)
with overrides such as an in-memory authority.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kubehello.cli.commands.hello_kubernetes import hello_kubernetes_command
from kubehello.cli.commands.hello_world import hello_world_command
from kubehello.cli.console import ClickConsole
from kubehello.cli.keys import ArgKey
from kubehello.cli.options import common_verbose_options, resolve_verbosity
from kubehello.config.logging import get_logger, resolve_env_log_level, setup_logging
from kubehello.constants import KUBEHELLO_VERSION

if TYPE_CHECKING:
    from kubehello.cli.console import ConsoleLike

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int) -> None:
    """Initialize shared state (verbosity, logging, console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj[ArgKey.VERBOSITY_LEVEL] = resolve_verbosity(verbose, quiet)

    level_env: int | None = resolve_env_log_level()
    ctx.obj[ArgKey.LOG_LEVEL] = level_env
    setup_logging(level=level_env)

    stdout = click.get_text_stream("stdout")
    ctx.obj[ArgKey.CONSOLE] = ClickConsole(enable_color=stdout.isatty())


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="KubeHello CLI",
)
@click.version_option(KUBEHELLO_VERSION, "--version", prog_name="kubehello")
@common_verbose_options
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int) -> None:
    """Entry point for the KubeHello CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet)
    console: ConsoleLike = ctx.obj[ArgKey.CONSOLE]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'kubehello hello-kubernetes -f FILE' to greet resources.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(hello_kubernetes_command)

cli.add_command(hello_world_command)

if __name__ == "__main__":
    cli()
