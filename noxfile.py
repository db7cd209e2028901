# topmark:header:start
#
#   project      : KubeHello
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Nox sessions for KubeHello.

``nox`` alone runs the lint checks; ``nox -s tests`` runs pytest on every
Python version listed in the pyproject classifiers, and ``nox -s slow`` adds
the hypothesis properties marked ``hypothesis_slow``.
"""

from __future__ import annotations

import re
import tomllib
from pathlib import Path

import nox

ROOT: Path = Path(__file__).parent
CLASSIFIER_RE: re.Pattern[str] = re.compile(r"^Programming Language :: Python :: (\d+\.\d+)$")


def supported_pythons() -> list[str]:
    """Return the X.Y versions declared in pyproject.toml, oldest first."""
    with (ROOT / "pyproject.toml").open("rb") as fh:
        classifiers: list[str] = tomllib.load(fh)["project"].get("classifiers", [])
    found: set[str] = {m.group(1) for c in classifiers if (m := CLASSIFIER_RE.match(c))}
    return sorted(found, key=lambda v: tuple(map(int, v.split("."))))


nox.options.sessions = ["lint"]


@nox.session(python=supported_pythons())
def tests(session: nox.Session) -> None:
    """Run pytest, skipping the slow properties."""
    session.install("-e", ".[test]")
    session.run("pytest", "-m", "not hypothesis_slow", *session.posargs)


@nox.session
def slow(session: nox.Session) -> None:
    """Run the whole suite, hypothesis properties included."""
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    """Ruff lint and format checks."""
    session.install("ruff")
    session.run("ruff", "check", "src", "tests", "noxfile.py")
    session.run("ruff", "format", "--check", "src", "tests", "noxfile.py")
