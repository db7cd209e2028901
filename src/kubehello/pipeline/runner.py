# topmark:header:start
#
#   project      : KubeHello
#   file         : runner.py
#   file_relpath : src/kubehello/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run the resolve-and-emit pipeline for one invocation.

Phases:

    Collecting → Resolving → Emitting → Done
                     └──────────┴──────→ Failed

The specifier is collected and validated by the caller before any I/O takes
place; `run` then selects the template, resolves and emits. Resolution is
streamed into the visitor, so a failure while pulling items (e.g. an
unavailable authority) happens during Emitting.

The run is single-pass: no retries, no cancellation.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from kubehello.config.logging import get_logger
from kubehello.core.diagnostics import DiagnosticLog
from kubehello.core.errors import KubehelloError
from kubehello.output.templates import make_renderer, select_template
from kubehello.output.visitor import ResourceVisitor
from kubehello.resource.resolver import iter_resolution

if TYPE_CHECKING:
    from kubehello.config.logging import KubehelloLogger
    from kubehello.config.namespace import NamespaceContext
    from kubehello.output.recorder import Recorder
    from kubehello.output.templates import RenderFunc, RenderTemplate
    from kubehello.resource.authority import ResourceAuthority
    from kubehello.resource.documents import DocumentLoader
    from kubehello.resource.model import ResolutionItem, ResourceSpecifier

logger: KubehelloLogger = get_logger(__name__)


class Phase(str, Enum):
    """Lifecycle of one invocation."""

    COLLECTING = "collecting"
    RESOLVING = "resolving"
    EMITTING = "emitting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunContext:
    """Inputs and state of one pipeline run.

    Attributes:
        specifier (ResourceSpecifier): The validated specifier.
        namespace (NamespaceContext): The effective namespace, resolved once.
        recorder (Recorder): Provenance recorder passed to the visitor.
        out (TextIO): Stream the rendered lines are written to.
        loader (DocumentLoader | None): Loader for the files/overlay path.
        authority (ResourceAuthority | None): Authority for the identifier path.
        diagnostics (DiagnosticLog): Sink for non-fatal problems.
        phase (Phase): Current phase.
        template (RenderTemplate | None): Template chosen for this run.
        emitted (int): Number of lines written.
        error (KubehelloError | None): The error that failed the run, if any.
    """

    specifier: ResourceSpecifier
    namespace: NamespaceContext
    recorder: Recorder
    out: TextIO
    loader: DocumentLoader | None = None
    authority: ResourceAuthority | None = None
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    phase: Phase = Phase.COLLECTING
    template: RenderTemplate | None = None
    emitted: int = 0
    error: KubehelloError | None = None

    def enter(self, phase: Phase) -> None:
        """Move to ``phase``."""
        logger.info("Phase: %s -> %s", self.phase.value, phase.value)
        self.phase = phase


def _emitting(ctx: RunContext, items: Iterator[ResolutionItem]) -> Iterator[ResolutionItem]:
    """Switch to Emitting once the visitor starts pulling items."""
    ctx.enter(Phase.EMITTING)
    yield from items


def run(ctx: RunContext) -> RunContext:
    """Execute the pipeline.

    Args:
        ctx (RunContext): The run context; updated in place.

    Returns:
        RunContext: The same context, in phase DONE.

    Raises:
        KubehelloError: Any pipeline error; ``ctx`` is left in phase FAILED with
            ``ctx.error`` set.
    """
    template: RenderTemplate = select_template(ctx.specifier.has_args)
    ctx.template = template
    render: RenderFunc = make_renderer(template)
    logger.debug("Selected template: %s", template.name)

    visitor = ResourceVisitor(render, ctx.recorder, ctx.out, ctx.diagnostics)
    try:
        ctx.enter(Phase.RESOLVING)
        items: Iterator[ResolutionItem] = iter_resolution(
            ctx.specifier,
            namespace=ctx.namespace,
            loader=ctx.loader,
            authority=ctx.authority,
        )
        ctx.emitted = visitor.visit(_emitting(ctx, items))
    except KubehelloError as e:
        ctx.emitted = visitor.emitted
        ctx.error = e
        ctx.enter(Phase.FAILED)
        raise

    ctx.enter(Phase.DONE)
    logger.info("Emitted %d resource(s)", ctx.emitted)
    return ctx
