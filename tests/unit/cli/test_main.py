"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

import pytest

from cli.main import main
from tests.fixture_paths import CONDITIONS_FILE, MALFORMED_SOURCE, USERS_SOURCE


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("NDQUERY_MODE", "NDQUERY_MEMORY_CEILING", "NDQUERY_SOURCE_PATH"):
        monkeypatch.delenv(name, raising=False)


def test_cli_get_prints_record(capsys) -> None:
    """CLI get should print the keyed record as JSON."""
    exit_code = main(["get", "user3", "--source", str(USERS_SOURCE), "--key-field", "username"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and json.loads(output)["fullname"] == "James Smith"


def test_cli_get_returns_one_for_missing_key(capsys) -> None:
    """CLI get should exit 1 when the key is absent."""
    exit_code = main(["get", "nobody", "--source", str(USERS_SOURCE), "--key-field", "username"])

    assert exit_code == 1 and "nobody" in capsys.readouterr().err


@pytest.mark.parametrize("mode", ["in_memory", "split"])
def test_cli_filter_with_where_tuples(capsys, mode: str) -> None:
    """CLI filter should AND every --where tuple in both modes."""
    args = [
        "--mode",
        mode,
        "filter",
        "--source",
        str(USERS_SOURCE),
        "--key-field",
        "username",
        "--where",
        "age",
        "int",
        ">",
        "30",
        "--where",
        "fullname",
        "string",
        "contains",
        "James",
    ]

    exit_code = main(args)
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert sorted(json.loads(line)["username"] for line in lines) == ["user2", "user3"]


def test_cli_filter_reads_conditions_file(capsys) -> None:
    """CLI filter should accept a JSON conditions file."""
    args = ["--mode", "split", "filter", "--source", str(USERS_SOURCE)]

    exit_code = main(args + ["--conditions-file", str(CONDITIONS_FILE)])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and len(lines) == 2


def test_cli_reports_domain_errors(capsys) -> None:
    """Domain failures should print to stderr and exit 2."""
    exit_code = main(["--mode", "split", "filter", "--source", str(MALFORMED_SOURCE)])

    assert exit_code == 2 and "malformed.jsonl:2" in capsys.readouterr().err


def test_cli_requires_source(capsys) -> None:
    """Commands without a configured source should fail cleanly."""
    exit_code = main(["filter"])

    assert exit_code == 2 and "NDQUERY_SOURCE_PATH" in capsys.readouterr().err


def test_cli_watch_runs_requested_iterations(capsys) -> None:
    """CLI watch should reload the requested number of times."""
    args = [
        "watch",
        "--source",
        str(USERS_SOURCE),
        "--key-field",
        "username",
        "--interval",
        "0.01",
        "--iterations",
        "2",
    ]

    exit_code = main(args)
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert len(lines) >= 2 and lines[0].startswith("ok\trecords=3")


def test_cli_watch_applies_conditions_in_split_mode(capsys) -> None:
    """CLI watch should filter each split-mode reload by its conditions."""
    args = [
        "--mode",
        "split",
        "watch",
        "--source",
        str(USERS_SOURCE),
        "--where",
        "age",
        "int",
        ">",
        "30",
        "--conditions-file",
        str(CONDITIONS_FILE),
        "--interval",
        "0.01",
        "--iterations",
        "1",
    ]

    exit_code = main(args)
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and lines[0] == "ok\tmatched=2"
