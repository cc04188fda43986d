import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from normie import __version__
from normie.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_documented_example(runner: CliRunner, tmp_path: Path) -> None:
    first = tmp_path / "B)E(T%T@E*R T*H*I&S W@A*Y#"
    second = tmp_path / "G)O(O%@D N*A*M&E@**#"
    first.touch()
    second.touch()

    result = runner.invoke(main, ["-lra", ".tgz", str(first), str(second)])

    assert result.exit_code == 0, result.output
    assert sorted(os.listdir(tmp_path)) == ["better_this_way.tgz", "good_name.tgz"]


def test_insert_and_uppercase(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "case").touch()

    result = runner.invoke(main, ["-u", "-i", "upper-", str(tmp_path / "case")])

    assert result.exit_code == 0, result.output
    assert os.listdir(tmp_path) == ["UPPER-CASE"]


def test_verbose(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "Old Name").touch()

    result = runner.invoke(main, ["-v", str(tmp_path / "Old Name")])

    assert result.exit_code == 0
    assert "Renamed" in result.output
    assert "Old_Name" in result.output
    assert "Renamed 1, 0 unchanged" in result.output


def test_dry_run(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "Old Name").touch()

    result = runner.invoke(main, ["-n", str(tmp_path / "Old Name")])

    assert result.exit_code == 0
    assert "Would rename" in result.output
    assert os.listdir(tmp_path) == ["Old Name"]


def test_interactive(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "A One").touch()
    (tmp_path / "B Two").touch()

    result = runner.invoke(main, ["-t", str(tmp_path / "A One"), str(tmp_path / "B Two")], input="n\ny\n")

    assert result.exit_code == 0
    assert "rename" in result.output
    assert sorted(os.listdir(tmp_path)) == ["A One", "B_Two"]


def test_missing_path(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "Real File").touch()

    result = runner.invoke(main, [str(tmp_path / "nope"), str(tmp_path / "Real File")])

    assert result.exit_code == 1
    assert "not a valid directory or file" in result.output
    assert "some actions could not be performed" in result.output
    assert os.listdir(tmp_path) == ["Real_File"]


def test_conflict_does_not_fail(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "A!.txt").touch()
    (tmp_path / "A.txt").touch()

    result = runner.invoke(main, ["-r", str(tmp_path / "A!.txt"), str(tmp_path / "A.txt")])

    assert result.exit_code == 0
    assert "already in use" in result.output
    assert sorted(os.listdir(tmp_path)) == ["A!.txt", "A.txt"]


def test_lowercase_and_uppercase_rejected(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "Name").touch()

    result = runner.invoke(main, ["-lu", str(tmp_path / "Name")])

    assert result.exit_code == 2
    assert "-l and -u" in result.output
    assert os.listdir(tmp_path) == ["Name"]


def test_empty_text_rejected(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(main, ["-a", "", str(tmp_path)])

    assert result.exit_code == 2
    assert "must not be empty" in result.output


def test_missing_paths(runner: CliRunner) -> None:
    result = runner.invoke(main, ["-l"])

    assert result.exit_code == 2
    assert "Missing argument" in result.output


def test_help(runner: CliRunner) -> None:
    result = runner.invoke(main, ["-h"])

    assert result.exit_code == 0
    assert "Append the specified text" in result.output
    assert "Remove these characters" in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_paths_inside_a_given_directory(runner: CliRunner, tmp_path: Path) -> None:
    directory = tmp_path / "dir"
    directory.mkdir()
    (directory / "A File").touch()

    result = runner.invoke(main, [str(directory), str(directory / "A File")])

    assert result.exit_code == 0, result.output
    assert "not a valid directory or file" not in result.output
    assert os.listdir(directory) == ["A_File"]
