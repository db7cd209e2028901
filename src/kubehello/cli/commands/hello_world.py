# topmark:header:start
#
#   project      : KubeHello
#   file         : hello_world.py
#   file_relpath : src/kubehello/cli/commands/hello_world.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KubeHello `hello-world` command.

Prints a fixed greeting. It takes no resource options and always succeeds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kubehello.cli.console import get_console
from kubehello.cli.keys import CliCmd

if TYPE_CHECKING:
    from kubehello.cli.console import ConsoleLike


@click.command(
    name=CliCmd.HELLO_WORLD,
    help="Print 'Hello world'.",
)
@click.pass_context
def hello_world_command(ctx: click.Context) -> None:
    """Print the fixed greeting."""
    console: ConsoleLike = get_console(ctx)
    console.print("Hello world")
