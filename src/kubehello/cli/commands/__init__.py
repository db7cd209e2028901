# topmark:header:start
#
#   project      : KubeHello
#   file         : __init__.py
#   file_relpath : src/kubehello/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the KubeHello CLI."""

from __future__ import annotations
