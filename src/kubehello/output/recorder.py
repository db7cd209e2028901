# topmark:header:start
#
#   project      : KubeHello
#   file         : recorder.py
#   file_relpath : src/kubehello/output/recorder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Best-effort provenance recording.

A recorder receives every resolved resource before it is rendered and may
return an annotated copy. Failures raise `RecordingError`, which the visitor
reports on the diagnostic channel without affecting output or exit status.

The recorder is chosen explicitly (``--record``) and handed to the visitor;
there is no process-wide default.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from kubehello.constants import CHANGE_CAUSE_ANNOTATION
from kubehello.core.errors import RecordingError

if TYPE_CHECKING:
    from kubehello.resource.model import ResolvedResource


class Recorder(Protocol):
    """Attach provenance information to a resolved resource."""

    def record(self, resource: ResolvedResource) -> ResolvedResource:
        """Return the (possibly annotated) resource.

        Raises:
            RecordingError: If the annotation cannot be attached.
        """
        ...


class NoopRecorder:
    """Recorder that leaves resources untouched."""

    def record(self, resource: ResolvedResource) -> ResolvedResource:
        """Return ``resource`` unchanged."""
        return resource


class ActiveRecorder:
    """Recorder that stores the invoking command line in a change-cause annotation.

    Args:
        change_cause (str): The command line to record.
        annotation (str): Annotation key to write.
    """

    def __init__(self, change_cause: str, annotation: str = CHANGE_CAUSE_ANNOTATION) -> None:
        self.change_cause = change_cause
        self.annotation = annotation

    def record(self, resource: ResolvedResource) -> ResolvedResource:
        """Return a copy of ``resource`` whose payload carries the annotation."""
        payload: dict[str, Any] = copy.deepcopy(dict(resource.payload))
        metadata: Any = payload.setdefault("metadata", {})
        if not isinstance(metadata, Mapping):
            raise RecordingError(f"{resource.source}: metadata is not an object")
        metadata = dict(metadata)
        annotations: Any = metadata.get("annotations")
        if annotations is None:
            annotations = {}
        if not isinstance(annotations, Mapping):
            raise RecordingError(f"{resource.source}: metadata.annotations is not an object")
        metadata["annotations"] = {**dict(annotations), self.annotation: self.change_cause}
        payload["metadata"] = metadata
        return dataclasses.replace(resource, payload=payload)


def select_recorder(record: bool, change_cause: str) -> Recorder:
    """Return an `ActiveRecorder` when ``record`` is set, else a `NoopRecorder`."""
    return ActiveRecorder(change_cause) if record else NoopRecorder()
