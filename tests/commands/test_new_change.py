"""Tests for openspec new change."""

from pathlib import Path

import yaml
from click.testing import CliRunner

from openspec.cli.cli import cli
from openspec.core.project import create_directory_structure
from openspec.core.testing import context_for_test


def test_new_change_creates_directory(tmp_path: Path) -> None:
    create_directory_structure(tmp_path)
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["new", "change", "add-dark-mode"], obj=ctx)

    assert result.exit_code == 0, result.output
    change_dir = tmp_path / "openspec" / "changes" / "add-dark-mode"
    assert change_dir.is_dir()
    metadata = yaml.safe_load((change_dir / ".openspec.yaml").read_text(encoding="utf-8"))
    assert metadata["schema"] == "spec-driven"
    assert (
        "Created change 'add-dark-mode' at openspec/changes/add-dark-mode/ (schema: spec-driven)"
        in result.output
    )


def test_new_change_with_description(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(
        cli, ["new", "change", "add-dark-mode", "--description", "Theme toggle"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    readme = tmp_path / "openspec" / "changes" / "add-dark-mode" / "README.md"
    assert "Theme toggle" in readme.read_text(encoding="utf-8")


def test_new_change_invalid_name(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["new", "change", "Add_Dark"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Change name must be lowercase (use kebab-case)" in result.output
    assert not (tmp_path / "openspec").exists()


def test_new_change_already_exists(tmp_path: Path) -> None:
    (tmp_path / "openspec" / "changes" / "add-dark-mode").mkdir(parents=True)
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["new", "change", "add-dark-mode"], obj=ctx)

    assert result.exit_code == 1
    assert "Change 'add-dark-mode' already exists" in result.output


def test_new_change_unknown_schema(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["new", "change", "tidy", "--schema", "waterfall"], obj=ctx)

    assert result.exit_code == 1
    assert "Unknown schema 'waterfall'. Available: spec-driven" in result.output
