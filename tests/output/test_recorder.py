# topmark:header:start
#
#   project      : KubeHello
#   file         : test_recorder.py
#   file_relpath : tests/output/test_recorder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the change-cause recorder."""

from __future__ import annotations

from typing import Any

import pytest

from kubehello.constants import CHANGE_CAUSE_ANNOTATION
from kubehello.core.errors import RecordingError
from kubehello.output.recorder import ActiveRecorder, NoopRecorder, select_recorder
from kubehello.resource.model import ResolvedResource


def _resource(metadata: Any) -> ResolvedResource:
    return ResolvedResource(
        kind="Pod",
        name="web",
        payload={"kind": "Pod", "metadata": metadata},
        source="pod.yaml",
    )


def test_select_recorder() -> None:
    assert isinstance(select_recorder(False, "cmd"), NoopRecorder)
    assert isinstance(select_recorder(True, "cmd"), ActiveRecorder)


def test_noop_returns_same_object() -> None:
    resource: ResolvedResource = _resource({"name": "web"})

    assert NoopRecorder().record(resource) is resource


def test_annotation_is_added_to_a_copy() -> None:
    """The original payload is left untouched."""
    metadata: dict[str, Any] = {"name": "web", "annotations": {"team": "a"}}
    resource: ResolvedResource = _resource(metadata)

    recorded: ResolvedResource = ActiveRecorder("kubehello hello-kubernetes -f pod.yaml").record(
        resource
    )

    assert recorded.payload["metadata"]["annotations"] == {
        "team": "a",
        CHANGE_CAUSE_ANNOTATION: "kubehello hello-kubernetes -f pod.yaml",
    }
    assert metadata["annotations"] == {"team": "a"}
    assert (recorded.kind, recorded.name, recorded.source) == ("Pod", "web", "pod.yaml")


def test_missing_metadata_is_created() -> None:
    resource = ResolvedResource(kind="Pod", name="web", payload={"kind": "Pod"})

    recorded: ResolvedResource = ActiveRecorder("cmd").record(resource)

    assert recorded.payload["metadata"]["annotations"][CHANGE_CAUSE_ANNOTATION] == "cmd"


def test_custom_annotation_key() -> None:
    recorded: ResolvedResource = ActiveRecorder("cmd", annotation="example.com/cause").record(
        _resource({"name": "web"})
    )

    assert recorded.payload["metadata"]["annotations"] == {"example.com/cause": "cmd"}


def test_non_mapping_annotations_raise() -> None:
    with pytest.raises(RecordingError, match="annotations is not an object"):
        ActiveRecorder("cmd").record(_resource({"name": "web", "annotations": ["x"]}))


def test_non_mapping_metadata_raises() -> None:
    with pytest.raises(RecordingError, match="metadata is not an object"):
        ActiveRecorder("cmd").record(_resource("web"))
