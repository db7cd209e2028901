# topmark:header:start
#
#   project      : KubeHello
#   file         : model.py
#   file_relpath : src/kubehello/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Settings for one KubeHello run and the files they come from.

`MutableConfig` is a draft in which every field may still be ``None`` ("this
source says nothing"). Drafts are layered with `MutableConfig.merge_with`,
later sources winning, and the result is frozen into a `Config`:

| layer | source |
|-------|--------|
| 1 | built-in defaults |
| 2 | ``$XDG_CONFIG_HOME/kubehello/kubehello.toml``, else ``~/.kubehello.toml`` |
| 3 | ``[tool.kubehello]`` in ``./pyproject.toml`` |
| 4 | ``./kubehello.toml`` |
| 5 | each ``--config FILE``, in order |
| 6 | command-line flags (`MutableConfig.apply_cli_args`) |

Layers 2 to 4 are skipped with ``--no-config``. Keys understood in any file:
``namespace``, ``server``, ``token``, ``kubeconfig``, ``record``, ``timeout``.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from kubehello.config.io import (
    get_bool_value_or_none,
    get_float_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_toml_dict,
)
from kubehello.config.logging import get_logger
from kubehello.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_TIMEOUT,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
)
from kubehello.core.errors import ConfigError

if TYPE_CHECKING:
    from kubehello.config.io import TomlTable
    from kubehello.config.logging import KubehelloLogger

ArgsLike = Mapping[str, Any]

KNOWN_KEYS: frozenset[str] = frozenset(
    {"namespace", "server", "token", "kubeconfig", "record", "timeout"}
)

# Pseudo source names shown in `config_files`
DEFAULTS_SOURCE = "<defaults>"
CLI_OVERRIDE_STR = "<CLI overrides>"

logger: KubehelloLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Config:
    """Frozen settings handed to the pipeline.

    Attributes:
        verbosity_level (int | None): Signed ``-v``/``-q`` level.
        namespace (str | None): Default namespace from config files; never enforced.
        namespace_override (str | None): ``--namespace``; enforced on manifests.
        server (str | None): API server URL, without a trailing slash.
        token (str | None): Bearer token.
        kubeconfig (str | None): Kubeconfig path given by flag or config file.
        record (bool): Attach the change-cause annotation.
        timeout (float): HTTP timeout in seconds.
        config_files (tuple[Path | str, ...]): Contributing sources, lowest first.
    """

    verbosity_level: int | None
    namespace: str | None
    namespace_override: str | None
    server: str | None
    token: str | None
    kubeconfig: str | None
    record: bool
    timeout: float
    config_files: tuple[Path | str, ...]


def user_config_file() -> Path | None:
    """Return the first existing per-user config file, if any."""
    xdg_home: str = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    candidates: tuple[Path, ...] = (
        Path(xdg_home) / "kubehello" / CONFIG_FILE_NAME,
        Path.home() / f".{CONFIG_FILE_NAME}",
    )
    return next((p for p in candidates if p.is_file()), None)


def project_config_files(directory: Path) -> list[Path]:
    """Return ``pyproject.toml`` and ``kubehello.toml`` in ``directory``, in merge order."""
    return [p for p in (directory / PYPROJECT_FILE_NAME, directory / CONFIG_FILE_NAME) if p.is_file()]


@dataclass
class MutableConfig:
    """Draft settings; ``None`` means "not set by this source"."""

    verbosity_level: int | None = None
    namespace: str | None = None
    namespace_override: str | None = None
    server: str | None = None
    token: str | None = None
    kubeconfig: str | None = None
    record: bool | None = None
    timeout: float | None = None
    config_files: list[Path | str] = field(default_factory=list)

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        return cls(record=False, timeout=DEFAULT_TIMEOUT, config_files=[DEFAULTS_SOURCE])

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableConfig:
        """Read the known keys of ``data``; others are reported and dropped."""
        for key in sorted(set(data) - KNOWN_KEYS):
            logger.warning("Ignoring unknown config key: %s", key)
        kubeconfig: str | None = get_string_value_or_none(data, "kubeconfig")
        return cls(
            namespace=get_string_value_or_none(data, "namespace"),
            server=get_string_value_or_none(data, "server"),
            token=get_string_value_or_none(data, "token"),
            kubeconfig=os.path.expanduser(kubeconfig) if kubeconfig else None,
            record=get_bool_value_or_none(data, "record"),
            timeout=get_float_value_or_none(data, "timeout"),
        )

    @classmethod
    def from_toml_file(cls, path: Path, *, strict: bool = False) -> MutableConfig | None:
        """Read one config file.

        For ``pyproject.toml`` only the ``[tool.kubehello]`` table is used.

        Args:
            path (Path): ``kubehello.toml``-style file or a ``pyproject.toml``.
            strict (bool): Raise `ConfigError` when the file cannot be read or parsed.

        Returns:
            MutableConfig | None: The draft, or None for a ``pyproject.toml``
                without a ``[tool.kubehello]`` table.
        """
        data: TomlTable = load_toml_dict(path, strict=strict)
        if path.name == PYPROJECT_FILE_NAME:
            data = get_table_value(get_table_value(data, "tool"), PYPROJECT_TOOL_SECTION)
            if not data:
                logger.debug("%s has no [tool.%s] table", path, PYPROJECT_TOOL_SECTION)
                return None
        draft: MutableConfig = cls.from_toml_dict(data)
        draft.config_files = [path]
        logger.debug("Read config from %s", path)
        return draft

    @classmethod
    def _discovered(cls, directory: Path) -> Iterator[MutableConfig]:
        user: Path | None = user_config_file()
        paths: list[Path] = ([user] if user else []) + project_config_files(directory)
        for path in paths:
            logger.info("Loading config: %s", path)
            draft: MutableConfig | None = cls.from_toml_file(path)
            if draft is not None:
                yield draft

    @classmethod
    def _explicit(cls, entries: list[str]) -> Iterator[MutableConfig]:
        for entry in entries:
            path = Path(entry).expanduser()
            if not path.is_file():
                raise ConfigError(f"config file not found: {path}")
            logger.info("Loading explicit config: %s", path)
            draft: MutableConfig | None = cls.from_toml_file(path, strict=True)
            if draft is None:
                raise ConfigError(f"[tool.{PYPROJECT_TOOL_SECTION}] section missing in {path}")
            yield draft

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        no_config: bool = False,
        config_paths: list[str] | None = None,
    ) -> MutableConfig:
        """Merge defaults, discovered files and ``config_paths``, without CLI flags.

        Args:
            anchor (Path | None): Project directory to search; defaults to the CWD.
            no_config (bool): Skip the user and project files.
            config_paths (list[str] | None): ``--config`` files.

        Raises:
            ConfigError: If a ``--config`` file is missing, unreadable or malformed.
        """
        draft: MutableConfig = cls.from_defaults()
        if not no_config:
            for found in cls._discovered((anchor or Path.cwd()).resolve()):
                draft = draft.merge_with(found)
        for extra in cls._explicit(config_paths or []):
            draft = draft.merge_with(extra)
        return draft

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft: ``other``'s set fields over this one's, sources concatenated."""
        values: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            if f.name == "config_files":
                continue
            theirs: Any = getattr(other, f.name)
            values[f.name] = getattr(self, f.name) if theirs is None else theirs
        return MutableConfig(**values, config_files=[*self.config_files, *other.config_files])

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply command-line values in place and return ``self``.

        ``--namespace`` lands in `namespace_override`, the enforced slot. A false
        ``record`` leaves a ``record = true`` from a file untouched.
        """
        logger.debug("Applying CLI arguments: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)
        if args.get("verbosity_level") is not None:
            self.verbosity_level = args["verbosity_level"]
        if args.get("namespace"):
            self.namespace_override = args["namespace"]
        for key in ("server", "token", "kubeconfig"):
            if args.get(key):
                setattr(self, key, args[key])
        if args.get("record"):
            self.record = True
        return self

    def freeze(self) -> Config:
        """Return the `Config` for this draft, filling unset fields with defaults."""
        return Config(
            verbosity_level=self.verbosity_level,
            namespace=self.namespace or None,
            namespace_override=self.namespace_override or None,
            server=self.server.rstrip("/") if self.server else None,
            token=self.token or None,
            kubeconfig=self.kubeconfig or None,
            record=bool(self.record),
            timeout=DEFAULT_TIMEOUT if self.timeout is None else self.timeout,
            config_files=tuple(self.config_files),
        )
