"""Tests for openspec init."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from openspec.artifacts.legacy import MARKER_END, MARKER_START
from openspec.artifacts.markers import read_generated_by
from openspec.cli.cli import cli
from openspec.core.global_config import GlobalConfig
from openspec.core.project import ProjectConfigResult
from openspec.core.testing import context_for_test
from openspec.gateway.config_store import FakeConfigStore
from openspec.gateway.console import FakeConsole


def _interactive(
    *, confirm: list[bool] | None = None, prompt: list[str] | None = None
) -> FakeConsole:
    return FakeConsole(is_interactive=True, confirm_responses=confirm, prompt_responses=prompt)


def test_init_with_tools_flag(tmp_path: Path) -> None:
    """Non-interactive init with --tools creates structure and artifacts."""
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "claude"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert (tmp_path / "openspec" / "changes" / "archive").is_dir()
    skill = tmp_path / ".claude/skills/openspec-propose/SKILL.md"
    assert read_generated_by(skill) == "1.0.0"
    assert (tmp_path / ".claude/commands/opsx/apply.md").is_file()
    assert "OpenSpec Setup Complete" in result.output
    assert "Created: Claude Code" in result.output
    assert "4 skills and 4 commands in .claude/" in result.output
    assert "Config: skipped (non-interactive mode)" in result.output
    assert not (tmp_path / "openspec" / "config.yaml").exists()


def test_init_tools_none_creates_structure_only(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "none"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert (tmp_path / "openspec" / "specs").is_dir()
    assert not (tmp_path / ".claude").exists()


def test_init_invalid_tool_fails_before_any_change(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "claude,vim"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Invalid tool(s): vim" in result.output
    assert not (tmp_path / "openspec").exists()


def test_init_rejects_reserved_value_mixed_with_ids(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "all,claude"], obj=ctx)

    assert result.exit_code == 1
    assert "Cannot combine reserved values" in result.output


def test_init_invalid_profile_fails_before_any_change(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "claude", "--profile", "full"], obj=ctx)

    assert result.exit_code == 1
    assert 'Invalid profile "full"' in result.output
    assert not (tmp_path / "openspec").exists()


def test_init_path_is_a_file(tmp_path: Path) -> None:
    (tmp_path / "project").write_text("x", encoding="utf-8")
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "project", "--tools", "claude"], obj=ctx)

    assert result.exit_code == 1
    assert "Path is not a directory" in result.output


def test_init_non_interactive_without_tools_or_detection_fails(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert result.exit_code == 1
    assert "No tools detected and no --tools flag provided" in result.output
    assert not (tmp_path / "openspec").exists()


def test_init_non_interactive_uses_detected_tools(tmp_path: Path) -> None:
    (tmp_path / ".cursor").mkdir()
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert (tmp_path / ".cursor/commands/opsx-propose.md").is_file()
    assert not (tmp_path / ".claude").exists()


def test_init_interactive_prompts_for_tools_and_creates_config(tmp_path: Path) -> None:
    runner = CliRunner()
    console = _interactive(prompt=["claude, windsurf"])
    ctx = context_for_test(cwd=tmp_path, console=console)

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert (tmp_path / ".claude/skills/openspec-apply-change/SKILL.md").is_file()
    assert (tmp_path / ".windsurf/workflows/opsx-apply.md").is_file()
    assert (tmp_path / "openspec" / "config.yaml").is_file()
    assert "Config: openspec/config.yaml (schema: spec-driven)" in result.output
    assert len(console.questions) == 1


def test_init_interactive_empty_selection_fails(tmp_path: Path) -> None:
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path, console=_interactive(prompt=[""]))

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert result.exit_code == 1
    assert "At least one tool must be selected" in result.output


def test_init_profile_override_is_not_persisted(tmp_path: Path) -> None:
    store = FakeConfigStore(
        config=GlobalConfig(profile="core", delivery="both", workflows=("verify",))
    )
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path, config_store=store)

    result = runner.invoke(cli, ["init", "--tools", "claude", "--profile", "custom"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert _skill_names(tmp_path) == ["openspec-verify-change"]
    assert store.saved_configs == []


def test_init_respects_skills_delivery(tmp_path: Path) -> None:
    store = FakeConfigStore(config=GlobalConfig(profile="core", delivery="skills", workflows=None))
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path, config_store=store)

    result = runner.invoke(cli, ["init", "--tools", "claude"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert len(_skill_names(tmp_path)) == 4
    assert not (tmp_path / ".claude" / "commands").exists()
    assert "4 skills in .claude/" in result.output


def test_init_legacy_non_interactive_without_force_exits(tmp_path: Path) -> None:
    claude_md = tmp_path / "CLAUDE.md"
    content = f"Mine\n{MARKER_START}\nold\n{MARKER_END}\n"
    claude_md.write_text(content, encoding="utf-8")
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "claude"], obj=ctx)

    assert result.exit_code == 1
    assert "Legacy files detected in non-interactive mode." in result.output
    assert claude_md.read_text(encoding="utf-8") == content
    assert not (tmp_path / "openspec").exists()


def test_init_legacy_force_cleans_up(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md").write_text(
        f"Mine\n{MARKER_START}\nold\n{MARKER_END}\n", encoding="utf-8"
    )
    (tmp_path / ".claude" / "commands" / "openspec").mkdir(parents=True)
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "claude", "--force"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert (tmp_path / "CLAUDE.md").read_text(encoding="utf-8") == "Mine\n"
    assert not (tmp_path / ".claude" / "commands" / "openspec").exists()
    assert "Legacy files cleaned up" in result.output
    # --force also allows creating the project config
    assert (tmp_path / "openspec" / "config.yaml").is_file()


def test_init_legacy_declined_cancels(tmp_path: Path) -> None:
    (tmp_path / "openspec").mkdir()
    legacy = tmp_path / "openspec" / "AGENTS.md"
    legacy.write_text("old", encoding="utf-8")
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path, console=_interactive(confirm=[False]))

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert result.exit_code == 0
    assert "Initialization cancelled." in result.output
    assert legacy.exists()
    assert not (tmp_path / ".claude").exists()


def test_init_extend_mode_migrates_existing_install(tmp_path: Path) -> None:
    """Re-running init on an install without a profile keeps its workflows."""
    (tmp_path / "openspec").mkdir()
    skill = tmp_path / ".claude/skills/openspec-verify-change/SKILL.md"
    skill.parent.mkdir(parents=True)
    skill.write_text("---\nmetadata:\n  generatedBy: 0.1.0\n---\n", encoding="utf-8")
    store = FakeConfigStore(config=None)
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path, config_store=store)

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Migrated: custom profile with 1 workflows" in result.output
    assert store.current_config == GlobalConfig(
        profile="custom", delivery="both", workflows=("verify",)
    )
    assert _skill_names(tmp_path) == ["openspec-verify-change"]
    assert read_generated_by(skill) == "1.0.0"
    assert "Refreshed: Claude Code" in result.output


def test_init_tools_flag_still_prompts_for_legacy_cleanup(tmp_path: Path) -> None:
    """--tools only picks tools; an interactive terminal still confirms legacy cleanup."""
    claude_md = tmp_path / "CLAUDE.md"
    claude_md.write_text(f"Mine\n{MARKER_START}\nold\n{MARKER_END}\n", encoding="utf-8")
    console = _interactive(confirm=[True])
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path, console=console)

    result = runner.invoke(cli, ["init", "--tools", "claude"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert console.questions == ["Upgrade and clean up legacy files?"]
    assert claude_md.read_text(encoding="utf-8") == "Mine\n"
    assert (tmp_path / "openspec" / "config.yaml").is_file()


def test_init_reports_config_write_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "openspec.cli.commands.init.create_project_config",
        lambda project_dir, *, allowed: ProjectConfigResult(
            status="failed", error="Permission denied"
        ),
    )
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path)

    result = runner.invoke(cli, ["init", "--tools", "claude", "--force"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Config: could not write openspec/config.yaml (Permission denied)" in result.output
    assert "non-interactive mode" not in result.output


def test_init_reads_global_config_once(tmp_path: Path) -> None:
    (tmp_path / "openspec").mkdir()
    store = FakeConfigStore(config=GlobalConfig(profile="core", delivery="both", workflows=None))
    runner = CliRunner()
    ctx = context_for_test(cwd=tmp_path, config_store=store)

    result = runner.invoke(cli, ["init", "--tools", "claude"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert store.read_count == 1


def _skill_names(project: Path) -> list[str]:
    root = project / ".claude" / "skills"
    return sorted(p.name for p in root.iterdir()) if root.is_dir() else []
