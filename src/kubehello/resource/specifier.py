# topmark:header:start
#
#   project      : KubeHello
#   file         : specifier.py
#   file_relpath : src/kubehello/resource/specifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Turn bound command-line values into a validated `ResourceSpecifier`.

This is the only up-front gate of the pipeline. It performs no I/O: paths are
not checked for existence and type tokens are not looked up here.

Accepted positional forms:
    - ``TYPE``: every resource of that type;
    - ``TYPE1,TYPE2``: every resource of each type, in the given order;
    - ``TYPE NAME1 NAME2``: named resources of one (or each comma-separated) type;
    - ``TYPE/NAME [TYPE/NAME ...]``: named resources, possibly of different types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kubehello.config.logging import get_logger
from kubehello.core.errors import InvalidUsageError
from kubehello.resource.model import ResourceIdentifier, ResourceSpecifier, SpecifierKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kubehello.config.logging import KubehelloLogger

logger: KubehelloLogger = get_logger(__name__)

MISSING_SPECIFIER_MESSAGE = "must specify one of -f and -k or type/name as arg"


def parse_identifiers(args: Sequence[str]) -> tuple[ResourceIdentifier, ...]:
    """Parse positional arguments into resource identifiers.

    Args:
        args (Sequence[str]): Non-empty positional arguments.

    Returns:
        tuple[ResourceIdentifier, ...]: Identifiers in command-line order.

    Raises:
        InvalidUsageError: If the forms are mixed or a type or name is empty.
    """
    if any("/" in a for a in args):
        if not all("/" in a for a in args):
            raise InvalidUsageError(
                "there is no need to specify a resource type as a separate argument "
                "when passing arguments in resource/name form"
            )
        identifiers: list[ResourceIdentifier] = []
        for arg in args:
            type_token, _, name = arg.partition("/")
            if not type_token or not name or "/" in name:
                raise InvalidUsageError(
                    f"arguments in resource/name form must have a single resource and name: {arg!r}"
                )
            identifiers.append(ResourceIdentifier(type_token, name))
        return tuple(identifiers)

    types: list[str] = args[0].split(",")
    if any(not t for t in types):
        raise InvalidUsageError(f"empty resource type in {args[0]!r}")
    names: Sequence[str] = args[1:]
    if not names:
        return tuple(ResourceIdentifier(t) for t in types)
    return tuple(ResourceIdentifier(t, n) for t in types for n in names)


def collect_specifier(
    args: Sequence[str],
    *,
    filenames: Sequence[str] = (),
    kustomize: str | None = None,
    recursive: bool = False,
) -> ResourceSpecifier:
    """Build and validate the specifier for one invocation.

    Args:
        args (Sequence[str]): Positional ``TYPE[/NAME]`` arguments.
        filenames (Sequence[str]): Values of ``-f/--filename``.
        kustomize (str | None): Value of ``-k/--kustomize``.
        recursive (bool): Value of ``-R/--recursive``.

    Returns:
        ResourceSpecifier: The validated specifier.

    Raises:
        InvalidUsageError: If no source is given or sources conflict.
    """
    if not args and not filenames and not kustomize:
        raise InvalidUsageError(MISSING_SPECIFIER_MESSAGE)
    if filenames and kustomize:
        raise InvalidUsageError("only one of -f or -k can be specified")
    if args and (filenames or kustomize):
        raise InvalidUsageError(
            "when paths, URLs, or stdin is provided as input, "
            "you may not specify resource arguments as well"
        )

    spec: ResourceSpecifier
    if kustomize:
        spec = ResourceSpecifier(kind=SpecifierKind.KUSTOMIZE, kustomize=kustomize)
    elif filenames:
        spec = ResourceSpecifier(
            kind=SpecifierKind.FILES,
            filenames=tuple(filenames),
            recursive=recursive,
        )
    else:
        spec = ResourceSpecifier(
            kind=SpecifierKind.IDENTIFIERS,
            args=tuple(args),
            identifiers=parse_identifiers(args),
        )
    logger.debug("Collected specifier: %s", spec)
    return spec
