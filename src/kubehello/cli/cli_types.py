# topmark:header:start
#
#   project      : KubeHello
#   file         : cli_types.py
#   file_relpath : src/kubehello/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click parameter types and the typed hand-off from parsing to configuration.

`ArgsNamespace` carries the parsed flags that matter to `MutableConfig`;
`EnumChoiceParam` maps an option string onto an Enum member, ignoring case.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, TypedDict, TypeVar

import click

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem

E = TypeVar("E", bound=Enum)


class OutputFormat(str, Enum):
    """Values accepted by ``--output``.

    Accepted for kubectl compatibility. Greeting lines do not depend on it.
    """

    JSON = "json"
    YAML = "yaml"
    NAME = "name"
    WIDE = "wide"
    GO_TEMPLATE = "go-template"
    JSONPATH = "jsonpath"


class ArgsNamespace(TypedDict, total=False):
    """Flags forwarded to `MutableConfig.apply_cli_args`.

    Keys are only present when the flag carried a value.
    """

    verbosity_level: int
    namespace: str
    server: str
    token: str
    kubeconfig: str
    record: bool
    no_config: bool
    config_files: list[str]


def build_args_namespace(**values: object) -> ArgsNamespace:
    """Return an `ArgsNamespace` holding the given flags, ``None`` values left out.

    Raises:
        TypeError: If a keyword is not an `ArgsNamespace` key.
    """
    unknown: set[str] = set(values) - set(ArgsNamespace.__annotations__)
    if unknown:
        raise TypeError(f"unexpected argument(s): {', '.join(sorted(unknown))}")
    return ArgsNamespace(**{k: v for k, v in values.items() if v is not None})  # type: ignore[typeddict-item]


class EnumChoiceParam(click.ParamType, Generic[E]):
    """Case-insensitive choice among the values of an Enum.

    Example:
        ``type=EnumChoiceParam(OutputFormat)`` turns ``-o JSON`` into
        ``OutputFormat.JSON``.
    """

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls: type[E] = enum_cls
        self.name: str = enum_cls.__name__.lower()
        self._by_value: dict[str, E] = {str(member.value).lower(): member for member in enum_cls}

    @property
    def choices(self) -> list[str]:
        return [str(member.value) for member in self.enum_cls]

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        return "[" + "|".join(self.choices) + "]"

    def convert(
        self,
        value: object,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E:
        if isinstance(value, self.enum_cls):
            return value
        member: E | None = self._by_value.get(str(value).lower())
        if member is None:
            self.fail(f"'{value}' is not one of {', '.join(self.choices)}", param, ctx)
        return member

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[CompletionItem]:
        """Complete enum values starting with ``incomplete``."""
        from click.shell_completion import CompletionItem

        return [CompletionItem(c) for c in self.choices if c.startswith(incomplete.lower())]

    def __repr__(self) -> str:
        return f"EnumChoiceParam({self.enum_cls.__name__})"
