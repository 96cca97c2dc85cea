from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs main() in-process with --use-defaults so the persisted user
configuration never leaks into the assertions.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from foldertree.domain.errors import TransientIOError
from foldertree.infra.logging import shutdown_logging
from foldertree.interface.cli.app import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK, EXIT_USAGE, main

pytestmark = pytest.mark.usefixtures("reset_logging")


def run(argv, capsys):
    code = main(["--use-defaults"] + argv)
    shutdown_logging()
    out, err = capsys.readouterr()
    return code, out, err


def test_scan_renders_tree(disk_project: Path, capsys) -> None:
    code, out, _ = run(["scan", str(disk_project)], capsys)

    assert code == EXIT_OK
    lines = out.splitlines()
    assert lines[0] == "proj/"
    assert any(line.endswith("src/ [not scanned]") for line in lines)
    assert any(line.endswith("README.md") for line in lines)


def test_scan_json_output(disk_project: Path, capsys) -> None:
    code, out, _ = run(["scan", str(disk_project), "--deep", "--json"], capsys)

    assert code == EXIT_OK
    data = json.loads(out)
    assert data["type"] == "folder"
    assert data["exists"] is True
    assert {c["name"] for c in data["contents"]} == {"README", "src", "archive.tar", "docs"}


def test_scan_files_view(disk_project: Path, capsys) -> None:
    code, out, _ = run(["scan", str(disk_project), "--deep", "--files"], capsys)

    assert code == EXIT_OK
    assert sorted(p.rsplit("/", 1)[-1] for p in out.splitlines()) == [
        "README.md", "archive.tar.gz", "main.py", "util.py",
    ]


def test_scan_missing_directory(tmp_path: Path, capsys) -> None:
    code, out, err = run(["scan", str(tmp_path / "gone")], capsys)

    assert code == EXIT_USAGE
    assert out == ""
    assert "Directory does not exist" in err


def test_create_from_json_text(tmp_path: Path, capsys) -> None:
    code, out, _ = run(["create", '{"app":{"api":{}},"config":{}}', str(tmp_path), "--json"], capsys)

    assert code == EXIT_OK
    assert (tmp_path / "app" / "api").is_dir()
    data = json.loads(out)
    assert data["app"]["path"] == f"{tmp_path.as_posix()}/app"
    assert data["app"]["api"]["path"] == f"{tmp_path.as_posix()}/app/api"


def test_create_from_spec_file_dry_run(tmp_path: Path, capsys) -> None:
    spec_file = tmp_path / "layout.json"
    spec_file.write_text('{"src": {"main": {}}}', encoding="utf-8")
    root = tmp_path / "out"

    code, out, _ = run(["create", str(spec_file), str(root), "--dry-run"], capsys)

    assert code == EXIT_OK
    assert not root.exists()
    assert out.splitlines() == [f"{root} (dry run)", "└── src/", "    └── main/"]


def test_invalid_spec_fails(tmp_path: Path, capsys) -> None:
    code, _, err = run(["create", '{"a": 1}', str(tmp_path)], capsys)

    assert code == EXIT_FAILURE
    assert "ERROR:" in err
    assert list(tmp_path.iterdir()) == []


def test_domain_error_maps_to_failure(disk_project: Path, capsys) -> None:
    with patch("foldertree.interface.cli.app.Scanner.scan", side_effect=TransientIOError("/x", "gone")):
        code, _, err = run(["scan", str(disk_project)], capsys)
    assert code == EXIT_FAILURE
    assert "ERROR:" in err


def test_interrupt_exit_code(disk_project: Path, capsys) -> None:
    with patch("foldertree.interface.cli.app.Scanner.scan", side_effect=KeyboardInterrupt):
        code, _, err = run(["scan", str(disk_project)], capsys)
    assert code == EXIT_INTERRUPTED
    assert "Interrupted." in err


def test_no_command_prints_help(capsys) -> None:
    code, _, err = run([], capsys)
    assert code == EXIT_USAGE
    assert "usage: foldertree" in err


def test_dump_config(capsys) -> None:
    code, out, _ = run(["--debug", "--dump-config"], capsys)
    assert code == EXIT_OK
    conf = json.loads(out)
    assert conf["log_level"] == "DEBUG"
    assert conf["output_format"] == "tree"
