# topmark:header:start
#
#   project      : KubeHello
#   file         : test_hello_kubernetes.py
#   file_relpath : tests/cli/test_hello_kubernetes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for `kubehello hello-kubernetes`.

Covers the greeting templates, input ordering, the usage gate, and the
empty-result and partial-failure exit codes.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from click.testing import Result

from kubehello.cli.commands.hello_kubernetes import report_diagnostics
from kubehello.cli.console import ClickConsole
from kubehello.cli.keys import ArgKey, CliCmd
from kubehello.core.diagnostics import DiagnosticLog
from tests.cli.conftest import (
    assert_AUTHORITY_UNAVAILABLE,
    assert_EMPTY_RESULT,
    assert_RESOLUTION_ERROR,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli,
    run_cli_in,
)
from tests.conftest import data_path, mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import InMemoryAuthority

HK: str = CliCmd.HELLO_KUBERNETES


@mark_cli
def test_single_file() -> None:
    """A single-document file yields one line without a timestamp."""
    result: Result = run_cli([HK, "-f", data_path("redis-master-controller.yaml")])

    assert_SUCCESS(result)
    assert result.stdout == "Hello redis-master ReplicationController\n"


@mark_cli
def test_two_files_keep_command_line_order() -> None:
    """Lines follow the order of the -f flags."""
    result: Result = run_cli(
        [
            HK,
            "-f",
            data_path("redis-master-controller.yaml"),
            "-f",
            data_path("frontend-service.yaml"),
        ]
    )

    assert_SUCCESS(result)
    assert result.stdout == "Hello redis-master ReplicationController\nHello frontend Service\n"


@mark_cli
def test_directory_is_expanded_in_sorted_order() -> None:
    """A directory yields its manifests in sorted file order."""
    result: Result = run_cli([HK, "-f", data_path("legacy")])

    assert_SUCCESS(result)
    assert result.stdout == (
        "Hello frontend ReplicationController\n"
        "Hello redis-master ReplicationController\n"
        "Hello redis-slave ReplicationController\n"
    )


@mark_cli
def test_no_arguments_is_a_usage_error() -> None:
    """Without arguments, -f or -k the command fails before printing anything."""
    result: Result = run_cli([HK])

    assert_USAGE_ERROR(result)
    assert result.stdout == ""
    assert "must specify one of -f and -k or type/name as arg" in result.stderr


@mark_cli
def test_unmatched_identifier_is_an_empty_result(authority: InMemoryAuthority) -> None:
    """A TYPE/NAME with no match at the authority fails with no output."""
    result: Result = run_cli([HK, "rc/does-not-exist"], obj={ArgKey.AUTHORITY: authority})

    assert_EMPTY_RESULT(result)
    assert result.stdout == ""
    assert "no objects passed to print" in result.stderr
    assert authority.calls == [("ReplicationController", "does-not-exist", "default")]


@mark_cli
def test_identifier_lines_carry_the_creation_timestamp(authority: InMemoryAuthority) -> None:
    """Positional identifiers select the template with the timestamp."""
    result: Result = run_cli(
        [HK, "rc/redis-master", "svc/frontend"], obj={ArgKey.AUTHORITY: authority}
    )

    assert_SUCCESS(result)
    assert result.stdout == (
        "Hello redis-master ReplicationController 2016-03-01T10:00:00Z\n"
        "Hello frontend Service 2016-03-02T08:00:00Z\n"
    )


@mark_cli
def test_type_only_lists_in_authority_order(authority: InMemoryAuthority) -> None:
    """A bare TYPE returns every resource of that type, in authority order."""
    result: Result = run_cli([HK, "replicationcontrollers"], obj={ArgKey.AUTHORITY: authority})

    assert_SUCCESS(result)
    assert result.stdout.splitlines() == [
        "Hello redis-master ReplicationController 2016-03-01T10:00:00Z",
        "Hello redis-slave ReplicationController 2016-03-01T10:05:00Z",
    ]


@mark_cli
def test_missing_timestamp_renders_empty(authority: InMemoryAuthority) -> None:
    """An identifier resource without a timestamp still uses the timestamp template."""
    authority.documents.append(
        {"kind": "Pod", "metadata": {"name": "nginx", "namespace": "default"}}
    )
    result: Result = run_cli([HK, "po/nginx"], obj={ArgKey.AUTHORITY: authority})

    assert_SUCCESS(result)
    assert result.stdout == "Hello nginx Pod \n"


@mark_cli
def test_partial_failure_emits_then_fails(authority: InMemoryAuthority) -> None:
    """Resolved resources are printed even when another identifier fails."""
    result: Result = run_cli(
        [HK, "rc/redis-master", "rc/missing"], obj={ArgKey.AUTHORITY: authority}
    )

    assert_RESOLUTION_ERROR(result)
    assert result.stdout == "Hello redis-master ReplicationController 2016-03-01T10:00:00Z\n"
    assert "1 resource(s) could not be resolved" in result.stderr
    assert 'replicationcontrollers "missing" not found' in result.stderr


@mark_cli
def test_unknown_type_is_reported(authority: InMemoryAuthority) -> None:
    """An unknown type token is a per-item error."""
    result: Result = run_cli([HK, "gizmos"], obj={ArgKey.AUTHORITY: authority})

    assert_EMPTY_RESULT(result)
    assert "the server doesn't have a resource type \"gizmos\"" in result.stderr


@mark_cli
def test_missing_file_with_a_valid_one(tmp_path: Path) -> None:
    """A missing path does not stop the other inputs."""
    result: Result = run_cli_in(
        tmp_path,
        [HK, "-f", "nope.yaml", "-f", data_path("frontend-service.yaml")],
    )

    assert_RESOLUTION_ERROR(result)
    assert result.stdout == "Hello frontend Service\n"
    assert 'the path "nope.yaml" does not exist' in result.stderr


@mark_cli
def test_only_missing_files_is_an_empty_result(tmp_path: Path) -> None:
    """When nothing resolves, the empty result wins and mentions the error count."""
    result: Result = run_cli_in(tmp_path, [HK, "-f", "nope.yaml"])

    assert_EMPTY_RESULT(result)
    assert result.stdout == ""
    assert "no objects passed to print (1 error(s)" in result.stderr


@mark_cli
def test_stdin(tmp_path: Path) -> None:
    """``-f -`` reads documents from standard input."""
    manifest: str = (
        "kind: Pod\nmetadata:\n  name: a\n---\nkind: Pod\nmetadata:\n  name: b\n"
    )
    result: Result = run_cli_in(tmp_path, [HK, "-f", "-"], input_text=manifest)

    assert_SUCCESS(result)
    assert result.stdout == "Hello a Pod\nHello b Pod\n"


@mark_cli
def test_stdin_json_stream(tmp_path: Path) -> None:
    """``-f -`` accepts JSON objects written one after another."""
    manifest: str = (
        '{"kind": "Pod", "metadata": {"name": "a"}}\n'
        '{"kind": "Pod", "metadata": {"name": "b"}}\n'
    )
    result: Result = run_cli_in(tmp_path, [HK, "-f", "-"], input_text=manifest)

    assert_SUCCESS(result)
    assert result.stdout == "Hello a Pod\nHello b Pod\n"


@mark_cli
def test_kustomize_overlay() -> None:
    """``-k`` renders the overlay with its name prefix."""
    result: Result = run_cli([HK, "-k", data_path("overlay")])

    assert_SUCCESS(result)
    assert result.stdout == (
        "Hello dev-redis-master ReplicationController\nHello dev-frontend Service\n"
    )


@mark_cli
def test_list_documents_are_flattened() -> None:
    """``*List`` documents are expanded into their items, recursively."""
    result: Result = run_cli([HK, "-f", data_path("redis-list.yaml")])

    assert_SUCCESS(result)
    assert result.stdout == (
        "Hello redis-master ReplicationController\n"
        "Hello redis-slave ReplicationController\n"
        "Hello redis-master Service\n"
    )


@mark_cli
def test_output_flag_does_not_change_the_lines() -> None:
    """``-o`` is accepted but the greeting stays the same."""
    result: Result = run_cli(
        [HK, "-o", "json", "-f", data_path("redis-master-controller.yaml")]
    )

    assert_SUCCESS(result)
    assert result.stdout == "Hello redis-master ReplicationController\n"
    assert result.stderr == ""


@mark_cli
def test_verbose_notes_ignored_output_flag() -> None:
    """With -v, an ignored ``-o`` is reported as an info diagnostic."""
    result: Result = run_cli(
        ["-v", HK, "-o", "yaml", "-f", data_path("redis-master-controller.yaml")]
    )

    assert_SUCCESS(result)
    assert result.stdout == "Hello redis-master ReplicationController\n"
    assert "[info] --output=yaml does not change the greeting lines" in result.stderr


@mark_cli
def test_invalid_output_value_is_rejected() -> None:
    """Unknown ``-o`` values are rejected by Click."""
    result: Result = run_cli([HK, "-o", "xml", "-f", data_path("frontend-service.yaml")])

    assert result.exit_code != 0
    assert result.stdout == ""
    assert "'xml' is not one of json, yaml" in result.stderr


@mark_cli
def test_filename_and_kustomize_conflict() -> None:
    """-f and -k cannot be combined."""
    result: Result = run_cli(
        [HK, "-f", data_path("frontend-service.yaml"), "-k", data_path("overlay")]
    )

    assert_USAGE_ERROR(result)
    assert result.stdout == ""


@mark_cli
def test_enforced_namespace_mismatch(tmp_path: Path) -> None:
    """With --namespace, a manifest declaring another namespace is rejected."""
    (tmp_path / "pod.yaml").write_text(
        "kind: Pod\nmetadata:\n  name: web\n  namespace: prod\n", encoding="utf-8"
    )
    result: Result = run_cli_in(tmp_path, [HK, "-n", "dev", "-f", "pod.yaml"])

    assert_EMPTY_RESULT(result)
    assert 'the namespace from the provided object "prod" does not match' in result.stderr


@mark_cli
def test_identifier_without_server_is_unavailable(isolation: Path) -> None:
    """Identifiers need an API server."""
    result: Result = run_cli_in(isolation, [HK, "rc/redis-master"])

    assert_AUTHORITY_UNAVAILABLE(result)
    assert "no server configured" in result.stderr


@mark_cli
def test_identifier_uses_namespace_flag(authority: InMemoryAuthority) -> None:
    """The --namespace flag scopes the authority lookup."""
    result: Result = run_cli(
        [HK, "-n", "other", "rc/redis-master"], obj={ArgKey.AUTHORITY: authority}
    )

    assert_EMPTY_RESULT(result)
    assert authority.calls == [("ReplicationController", "redis-master", "other")]


@mark_cli
def test_repeated_runs_are_identical() -> None:
    """Resolving the same static input twice yields identical output."""
    argv: list[str] = [HK, "-f", data_path("legacy")]

    first: Result = run_cli(argv)
    second: Result = run_cli(argv)

    assert_SUCCESS(first)
    assert first.stdout == second.stdout


@mark_cli
def test_record_flag_keeps_output(tmp_path: Path) -> None:
    """--record does not alter the greeting lines."""
    result: Result = run_cli_in(
        tmp_path, [HK, "--record", "-f", data_path("redis-master-controller.yaml")]
    )

    assert_SUCCESS(result)
    assert result.stdout == "Hello redis-master ReplicationController\n"


@mark_cli
def test_verbose_reports_recording_diagnostics(tmp_path: Path) -> None:
    """With -v, recording failures are reported on stderr but do not fail the run."""
    (tmp_path / "pod.yaml").write_text(
        "kind: Pod\nmetadata:\n  name: web\n  annotations: [not, a, map]\n", encoding="utf-8"
    )
    result: Result = run_cli_in(tmp_path, ["-v", HK, "--record", "-f", "pod.yaml"])

    assert_SUCCESS(result)
    assert result.stdout == "Hello web Pod\n"
    assert "error recording current command" in result.stderr


@parametrize("enable_color", [True, False])
def test_diagnostics_follow_console_color(enable_color: bool) -> None:
    """Diagnostics are colored exactly when the console has colors enabled."""
    err = io.StringIO()
    console = ClickConsole(enable_color=enable_color, err=err)
    log = DiagnosticLog()
    log.add_warning("error recording current command")

    report_diagnostics(console, log, verbosity=1)

    assert err.getvalue() == log.items[0].render(color=enable_color) + "\n"
    assert "[warning] error recording current command" in err.getvalue()


def test_diagnostics_hidden_without_verbose() -> None:
    err = io.StringIO()
    log = DiagnosticLog()
    log.add_warning("ignored")

    report_diagnostics(ClickConsole(err=err), log, verbosity=0)

    assert err.getvalue() == ""
