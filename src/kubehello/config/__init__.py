# topmark:header:start
#
#   project      : KubeHello
#   file         : __init__.py
#   file_relpath : src/kubehello/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for KubeHello.

Re-exports the configuration model so callers can write
``from kubehello.config import Config, MutableConfig``.
"""

from __future__ import annotations

from kubehello.config.model import ArgsLike, Config, MutableConfig

__all__ = ["ArgsLike", "Config", "MutableConfig"]
