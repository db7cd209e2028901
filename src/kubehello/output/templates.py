# topmark:header:start
#
#   project      : KubeHello
#   file         : templates.py
#   file_relpath : src/kubehello/output/templates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The two fixed output templates and how one is chosen.

The template is picked once per invocation from the shape of the request:
positional ``TYPE[/NAME]`` arguments carry a creation timestamp worth showing,
file and overlay inputs do not.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubehello.resource.model import ResolvedResource

RenderFunc = Callable[["ResolvedResource"], str]

_PLACEHOLDER = re.compile(r"\{(name|kind|creationTimestamp)\}")


class RenderTemplate(str, Enum):
    """Output line templates."""

    SPECIFIER = "Hello {name} {kind}\n"
    IDENTIFIER = "Hello {name} {kind} {creationTimestamp}\n"


def select_template(has_args: bool) -> RenderTemplate:
    """Return the template for a request with or without positional arguments."""
    return RenderTemplate.IDENTIFIER if has_args else RenderTemplate.SPECIFIER


def render(template: RenderTemplate, resource: ResolvedResource) -> str:
    """Substitute the resource's fields into ``template``.

    Substitution is a single pass: braces inside the substituted values are
    copied verbatim. An unset creation timestamp renders as an empty string.
    """
    values: dict[str, str] = {
        "name": resource.name,
        "kind": resource.kind,
        "creationTimestamp": resource.creation_timestamp or "",
    }
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template.value)


def make_renderer(template: RenderTemplate) -> RenderFunc:
    """Bind ``template`` into a render function for the emitter."""
    return functools.partial(render, template)
