# topmark:header:start
#
#   project      : KubeHello
#   file         : __init__.py
#   file_relpath : src/kubehello/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KubeHello package.

KubeHello resolves Kubernetes-style resource descriptions (manifest files,
STDIN, overlay directories, or ``TYPE/NAME`` identifiers looked up on an API
server) and prints one templated greeting line per resolved resource.
"""

from __future__ import annotations
