# topmark:header:start
#
#   project      : KubeHello
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for driving the ``kubehello`` Click group in-process.

Click >= 8.2 keeps the streams apart: ``result.stdout`` carries the greeting
lines only, ``result.stderr`` the errors and diagnostics.
"""

from __future__ import annotations

import contextlib
from typing import IO, TYPE_CHECKING, Any

from click.testing import CliRunner, Result

from kubehello.cli.exit_codes import ExitCode
from kubehello.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

Stdin = str | bytes | IO[Any] | None


def run_cli(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    input_text: Stdin = None,
    obj: dict[str, Any] | None = None,
) -> Result:
    """Invoke ``kubehello argv``.

    Args:
        argv (Sequence[str]): Arguments after the program name.
        cwd (Path | None): Working directory for the call, for relative paths
            and project config discovery.
        input_text (Stdin): Data served on STDIN.
        obj (dict[str, Any] | None): Initial ``ctx.obj``, for instance
            ``{ArgKey.AUTHORITY: authority}``.
    """
    chdir = contextlib.chdir(cwd) if cwd is not None else contextlib.nullcontext()
    with chdir:
        return CliRunner().invoke(cli, list(argv), input=input_text, obj=dict(obj or {}))


def run_cli_in(cwd: Path, argv: Sequence[str], **kwargs: Any) -> Result:
    """`run_cli` from inside ``cwd``."""
    return run_cli(argv, cwd=cwd, **kwargs)


def _expect(code: ExitCode) -> Callable[[Result], None]:
    def check(result: Result) -> None:
        assert result.exit_code == code, (
            f"exit {result.exit_code}, wanted {code.name} ({int(code)})\n"
            f"stdout:\n{result.stdout}\nstderr:\n{result.stderr}"
        )

    check.__name__ = f"assert_{code.name}"
    return check


assert_SUCCESS = _expect(ExitCode.SUCCESS)
assert_USAGE_ERROR = _expect(ExitCode.USAGE_ERROR)
assert_RESOLUTION_ERROR = _expect(ExitCode.RESOLUTION_ERROR)
assert_EMPTY_RESULT = _expect(ExitCode.EMPTY_RESULT)
assert_AUTHORITY_UNAVAILABLE = _expect(ExitCode.AUTHORITY_UNAVAILABLE)
assert_CONFIG_ERROR = _expect(ExitCode.CONFIG_ERROR)
