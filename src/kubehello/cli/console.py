# topmark:header:start
#
#   project      : KubeHello
#   file         : console.py
#   file_relpath : src/kubehello/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""User-facing console for hints, help, diagnostics and error messages.

The greeting lines themselves bypass the console: the visitor writes them
straight to the output stream, one write per resource. Everything else a user
should read goes through a `ConsoleLike` stored under ``ctx.obj["console"]``:

- `ConsoleLike.print` for STDOUT (``hello-world``, the group hint and help);
- `ConsoleLike.warn` and `ConsoleLike.error` for STDERR.

Internal tracing uses `logging` instead (see `kubehello.config.logging`).
"""

from __future__ import annotations

from typing import Any, Protocol, TextIO

import click

from kubehello.cli.keys import ArgKey


class ConsoleLike(Protocol):
    """What commands need from a console."""

    enable_color: bool

    @property
    def out(self) -> TextIO: ...

    @property
    def err(self) -> TextIO: ...

    def print(self, text: str = "", *, nl: bool = True) -> None: ...

    def warn(self, text: str, *, nl: bool = True) -> None: ...

    def error(self, text: str, *, nl: bool = True) -> None: ...

    def styled(self, text: str, **style_kwargs: Any) -> str: ...


class ClickConsole:
    """`ConsoleLike` writing through `click.echo`.

    Streams are looked up lazily so that a console created inside a
    `click.testing.CliRunner` invocation writes to the captured streams.

    Args:
        enable_color (bool): Keep ANSI styling; when False, styles are stripped.
        out (TextIO | None): STDOUT replacement.
        err (TextIO | None): STDERR replacement.
    """

    def __init__(
        self,
        *,
        enable_color: bool = False,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out or click.get_text_stream("stdout")

    @property
    def err(self) -> TextIO:
        return self._err or click.get_text_stream("stderr")

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to STDOUT."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write ``text`` to STDERR."""
        click.echo(text, nl=nl, file=self.err, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write ``text`` to STDERR, in red when colors are on."""
        click.echo(self.styled(text, fg="bright_red"), nl=nl, file=self.err, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged without colors."""
        return click.style(text, **style_kwargs) if self.enable_color else text


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the context's console, installing a colorless one if none is set."""
    ctx.ensure_object(dict)
    console: ConsoleLike | None = ctx.obj.get(ArgKey.CONSOLE)
    if console is None:
        console = ClickConsole()
        ctx.obj[ArgKey.CONSOLE] = console
    return console
