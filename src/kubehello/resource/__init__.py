# topmark:header:start
#
#   project      : KubeHello
#   file         : __init__.py
#   file_relpath : src/kubehello/resource/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resource specifiers and their resolution into normalized records.

Modules:
    - ``model``: specifier, resolved record and outcome types.
    - ``specifier``: validation of command-line values into a specifier.
    - ``documents``: JSON/YAML loading from files, directories, URLs and stdin.
    - ``kustomize``: overlay rendering.
    - ``kinds``: registry of well-known resource kinds.
    - ``authority``: remote lookup by kind and name.
    - ``resolver``: the two resolution paths.
"""

from __future__ import annotations
