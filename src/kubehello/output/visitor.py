# topmark:header:start
#
#   project      : KubeHello
#   file         : visitor.py
#   file_relpath : src/kubehello/output/visitor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Visit resolution items: record, render and emit one line per resource.

For each resolved resource, in order:

1. record it (best-effort, failures go to the diagnostic log);
2. render it with the pre-computed render function;
3. write the line with a single ``write`` call;
4. count it.

After the loop, an empty result raises `EmptyResultError` (which wins over
any per-item errors); otherwise accumulated errors raise
`AggregateResolutionError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from kubehello.config.logging import get_logger
from kubehello.core.errors import AggregateResolutionError, EmptyResultError, RecordingError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kubehello.config.logging import KubehelloLogger
    from kubehello.core.diagnostics import DiagnosticLog
    from kubehello.core.errors import ResolutionError
    from kubehello.output.recorder import Recorder
    from kubehello.output.templates import RenderFunc
    from kubehello.resource.model import ResolutionItem, ResolvedResource

logger: KubehelloLogger = get_logger(__name__)


class ResourceVisitor:
    """Drive recording and emission over a stream of resolution items.

    Args:
        render (RenderFunc): Render function chosen once for the invocation.
        recorder (Recorder): Provenance recorder.
        out (TextIO): Output stream for rendered lines.
        diagnostics (DiagnosticLog): Sink for non-fatal problems.
    """

    def __init__(
        self,
        render: RenderFunc,
        recorder: Recorder,
        out: TextIO,
        diagnostics: DiagnosticLog,
    ) -> None:
        self.render = render
        self.recorder = recorder
        self.out = out
        self.diagnostics = diagnostics
        self.errors: list[ResolutionError] = []
        self.emitted = 0

    def visit(self, items: Iterable[ResolutionItem]) -> int:
        """Emit every resolved resource in ``items``.

        Args:
            items (Iterable[ResolutionItem]): Items in resolution order; may be lazy.

        Returns:
            int: Number of lines emitted.

        Raises:
            EmptyResultError: If nothing was emitted.
            AggregateResolutionError: If some items failed to resolve.
        """
        for item in items:
            if item.error is not None:
                self.errors.append(item.error)
                continue
            if item.resource is None:
                continue
            resource: ResolvedResource = self._record(item.resource)
            self.out.write(self.render(resource))
            self.emitted += 1

        if self.emitted == 0:
            raise EmptyResultError(self.errors)
        if self.errors:
            raise AggregateResolutionError(self.errors)
        return self.emitted

    def _record(self, resource: ResolvedResource) -> ResolvedResource:
        try:
            return self.recorder.record(resource)
        except RecordingError as e:
            logger.debug("error recording current command: %s", e)
            self.diagnostics.add_warning(f"error recording current command: {e}")
            return resource
