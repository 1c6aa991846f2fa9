from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

from kettle import cli


def test_cli_set_and_get(capsys) -> None:
    assert cli.main(["set", "myapp", "color", "blue"]) == 0
    capsys.readouterr()
    assert cli.main(["get", "myapp", "color"]) == 0
    assert capsys.readouterr().out.strip() == "blue"


def test_cli_get_missing() -> None:
    assert cli.main(["get", "myapp", "missing"]) == 1


def test_cli_sections_and_files(capsys) -> None:
    assert cli.main(["set", "myapp", "view", "horizontal", "--section", "admin"]) == 0
    assert cli.main(["set", "myapp", "view", "--file", "profiles"]) == 0
    capsys.readouterr()

    assert cli.main(["get", "myapp", "view", "--section", "admin"]) == 0
    assert capsys.readouterr().out.strip() == "horizontal"
    assert cli.main(["get", "myapp", "view"]) == 1
    assert cli.main(["get", "myapp", "view", "--file", "profiles"]) == 0
    assert capsys.readouterr().out == "\n"


def test_cli_unset(capsys) -> None:
    cli.main(["set", "myapp", "a", "1"])
    assert cli.main(["unset", "myapp", "a"]) == 0
    assert cli.main(["unset", "myapp", "a"]) == 1


def test_cli_show(capsys) -> None:
    cli.main(["set", "myapp", "a", "1"])
    cli.main(["set", "myapp", "flag"])
    cli.main(["set", "myapp", "b", "", "--section", "s"])
    capsys.readouterr()

    assert cli.main(["show", "myapp"]) == 0
    assert capsys.readouterr().out == "a=1\nflag\n\n[s]\nb=\n"

    assert cli.main(["show", "myapp", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {"": {"a": "1", "flag": None}, "s": {"b": ""}}


def test_cli_paths_json(capsys, kettle_home: Path) -> None:
    assert cli.main(["paths", "myapp", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["config"] == str(kettle_home.resolve() / "config" / "myapp")
    assert data["config_file"].endswith("config.ini")


def test_cli_reports_library_errors(capsys) -> None:
    assert cli.main(["get", "bad/app", "k"]) == 2
    assert "error:" in capsys.readouterr().err
    assert cli.main(["set", "myapp", "bad=key", "v"]) == 2


def test_module_entry_point_help() -> None:
    proc = subprocess.run(
        [sys.executable, "-m", "kettle", "--help"],
        capture_output=True,
        text=True,
        cwd=Path(__file__).resolve().parents[1] / "src",
    )
    assert proc.returncode == 0
    assert "usage: kettle" in proc.stdout
