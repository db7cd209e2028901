# topmark:header:start
#
#   project      : KubeHello
#   file         : diagnostics.py
#   file_relpath : src/kubehello/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Side channel for non-fatal problems of a single invocation.

A failed ``--record`` annotation must neither change the exit code nor touch
the greeting stream. The visitor files such problems in a `DiagnosticLog`
instead; the command prints them to STDERR after the run when ``-v`` is given,
and tests inspect the log directly.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from yachalk import chalk


class DiagnosticLevel(Enum):
    """Severity of a diagnostic."""

    INFO = "info"
    WARNING = "warning"

    def paint(self, text: str) -> str:
        """Return ``text`` colored for this severity."""
        if self is DiagnosticLevel.WARNING:
            return chalk.yellow(text)
        return chalk.blue(text)


@dataclass(frozen=True)
class Diagnostic:
    """One reported problem."""

    level: DiagnosticLevel
    message: str

    def render(self, *, color: bool = False) -> str:
        """Return the ``[level] message`` line, optionally colored."""
        line: str = f"[{self.level.value}] {self.message}"
        return self.level.paint(line) if color else line


@dataclass
class DiagnosticLog:
    """Diagnostics collected during one run, in the order they were reported."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def add_info(self, message: str) -> None:
        self.items.append(Diagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        self.items.append(Diagnostic(DiagnosticLevel.WARNING, message))

    @property
    def warnings(self) -> list[Diagnostic]:
        """Return the WARNING entries."""
        return [d for d in self.items if d.level is DiagnosticLevel.WARNING]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
