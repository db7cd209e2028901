# topmark:header:start
#
#   project      : KubeHello
#   file         : test_visitor.py
#   file_relpath : tests/output/test_visitor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `ResourceVisitor`: emission order and final outcome."""

from __future__ import annotations

import io

import pytest

from kubehello.core.diagnostics import DiagnosticLevel, DiagnosticLog
from kubehello.core.errors import (
    AggregateResolutionError,
    EmptyResultError,
    RecordingError,
    ResolutionError,
)
from kubehello.output.recorder import ActiveRecorder, NoopRecorder
from kubehello.output.templates import RenderTemplate, make_renderer
from kubehello.output.visitor import ResourceVisitor
from kubehello.resource.model import ResolutionItem, ResolvedResource


class _FailingRecorder:
    def record(self, resource: ResolvedResource) -> ResolvedResource:
        raise RecordingError(f"{resource.source}: cannot record")


def _visitor(out: io.StringIO, diagnostics: DiagnosticLog | None = None) -> ResourceVisitor:
    return ResourceVisitor(
        make_renderer(RenderTemplate.SPECIFIER),
        NoopRecorder(),
        out,
        diagnostics if diagnostics is not None else DiagnosticLog(),
    )


def _ok(name: str, kind: str = "Pod") -> ResolutionItem:
    return ResolutionItem.ok(ResolvedResource(kind=kind, name=name, source=f"{name}.yaml"))


def _err(source: str) -> ResolutionItem:
    return ResolutionItem.failed(ResolutionError(source, "boom"))


def test_emits_in_order() -> None:
    out = io.StringIO()

    count: int = _visitor(out).visit([_ok("a"), _ok("b", "Service")])

    assert count == 2
    assert out.getvalue() == "Hello a Pod\nHello b Service\n"


def test_partial_failure_after_emitting() -> None:
    """Good items are written before the aggregate error is raised."""
    out = io.StringIO()
    visitor: ResourceVisitor = _visitor(out)

    with pytest.raises(AggregateResolutionError) as excinfo:
        visitor.visit([_ok("a"), _err("x.yaml"), _ok("b"), _err("y.yaml")])

    assert out.getvalue() == "Hello a Pod\nHello b Pod\n"
    assert visitor.emitted == 2
    assert [e.source for e in excinfo.value.errors] == ["x.yaml", "y.yaml"]
    assert str(excinfo.value).startswith("2 resource(s) could not be resolved")


def test_empty_result_wins_over_errors() -> None:
    out = io.StringIO()

    with pytest.raises(EmptyResultError) as excinfo:
        _visitor(out).visit([_err("x.yaml")])

    assert out.getvalue() == ""
    assert len(excinfo.value.errors) == 1


def test_no_items_is_empty_result() -> None:
    with pytest.raises(EmptyResultError, match="no objects passed to print"):
        _visitor(io.StringIO()).visit([])


def test_recording_failure_is_a_diagnostic() -> None:
    """A failed recording is reported but the resource is still emitted."""
    out = io.StringIO()
    diagnostics = DiagnosticLog()
    visitor = ResourceVisitor(
        make_renderer(RenderTemplate.SPECIFIER), _FailingRecorder(), out, diagnostics
    )

    assert visitor.visit([_ok("a")]) == 1
    assert out.getvalue() == "Hello a Pod\n"
    assert len(diagnostics) == 1
    assert diagnostics.items[0].level is DiagnosticLevel.WARNING
    assert "error recording current command" in diagnostics.items[0].message


def test_recording_does_not_change_the_line() -> None:
    out = io.StringIO()
    visitor = ResourceVisitor(
        make_renderer(RenderTemplate.SPECIFIER), ActiveRecorder("cmd"), out, DiagnosticLog()
    )

    visitor.visit([_ok("a")])

    assert out.getvalue() == "Hello a Pod\n"
