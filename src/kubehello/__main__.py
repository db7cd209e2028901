# topmark:header:start
#
#   project      : KubeHello
#   file         : __main__.py
#   file_relpath : src/kubehello/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running KubeHello via ``python -m kubehello``.

Delegates to :func:`kubehello.cli.main.cli`, the same Click group used by the
``kubehello`` console script.

Examples:
    Greet every resource declared in a manifest::

        python -m kubehello hello-kubernetes -f pod.yaml
"""

from __future__ import annotations

from kubehello.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
