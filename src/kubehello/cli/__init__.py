# topmark:header:start
#
#   project      : KubeHello
#   file         : __init__.py
#   file_relpath : src/kubehello/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for KubeHello.

The entry point is `kubehello.cli.main.cli`. Pipeline errors are mapped to
sysexits-aligned exit codes by `kubehello.cli.errors`.
"""

from __future__ import annotations
