# topmark:header:start
#
#   project      : KubeHello
#   file         : io.py
#   file_relpath : src/kubehello/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML reading for configuration files.

Files are parsed with `tomlkit` and unwrapped into plain Python values. The
``get_*`` helpers pick one key out of a table; a value of the wrong type is
logged and treated as unset rather than failing the run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError

from kubehello.config.logging import get_logger
from kubehello.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from kubehello.config.logging import KubehelloLogger

TomlTable = dict[str, Any]

logger: KubehelloLogger = get_logger(__name__)


def load_toml_dict(path: Path, *, strict: bool = False) -> TomlTable:
    """Read ``path`` as a TOML table.

    Unreadable or malformed files yield an empty table, unless ``strict`` is
    set (files named with ``--config``), in which case `ConfigError` is raised.

    Args:
        path (Path): ``kubehello.toml`` or ``pyproject.toml`` to read.
        strict (bool): Raise instead of returning ``{}`` on failure.

    Returns:
        TomlTable: The document as plain dicts, lists and scalars.
    """
    problem: str
    try:
        data: object = tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()
    except OSError as e:
        problem = f"cannot read config file {path}: {e}"
    except ParseError as e:
        problem = f"malformed config file {path}: {e}"
    else:
        return data if isinstance(data, dict) else {}

    if strict:
        raise ConfigError(problem)
    logger.warning("%s (ignored)", problem)
    return {}


def _typed(table: TomlTable, key: str, *types: type) -> Any:
    value: Any = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; only accept it when asked for explicitly
    if isinstance(value, types) and (bool in types or not isinstance(value, bool)):
        return value
    logger.debug("ignoring %s = %r: expected %s", key, value, "/".join(t.__name__ for t in types))
    return None


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key``, or ``{}``."""
    return _typed(table, key, dict) or {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Return ``key`` as a string; numbers are converted, other types give None."""
    value: str | int | float | None = _typed(table, key, str, int, float)
    return None if value is None else str(value)


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    return _typed(table, key, bool)


def get_float_value_or_none(table: TomlTable, key: str) -> float | None:
    value: int | float | None = _typed(table, key, int, float)
    return None if value is None else float(value)
