# topmark:header:start
#
#   project      : KubeHello
#   file         : __init__.py
#   file_relpath : src/kubehello/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across KubeHello.

Included modules:

- ``errors``
  The exception taxonomy raised by the resolution and output pipeline.

- ``diagnostics``
  Internal diagnostic types and the `DiagnosticLog` sink used to report
  non-fatal problems (e.g. best-effort recording failures) without touching
  the primary error path.

Keep this package free of Click and other UI dependencies.
"""

from __future__ import annotations
