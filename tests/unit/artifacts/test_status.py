"""Tests for the read-only artifact status check."""

from pathlib import Path

from openspec.artifacts.status import (
    get_configured_tools,
    get_tool_version_status,
    list_managed_files,
    scan_installed_workflows,
)


def _write_skill(project: Path, base: str, dir_name: str, version: str | None) -> Path:
    path = project / base / "skills" / dir_name / "SKILL.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    header = "name: x\n"
    if version is not None:
        header += f"metadata:\n  generatedBy: {version}\n"
    path.write_text(f"---\n{header}---\n\nBody\n", encoding="utf-8")
    return path


def _write_command(project: Path, rel: str, version: str) -> Path:
    path = project / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\ndescription: d\ngeneratedBy: {version}\n---\n\nBody\n", encoding="utf-8")
    return path


def test_unconfigured_tool(tmp_path: Path) -> None:
    """A tool with no managed files is unconfigured and needs update."""
    status = get_tool_version_status(tmp_path, "claude", "1.0.0")

    assert status.configured is False
    assert status.generated_by_version is None
    assert status.needs_update is True


def test_missing_project_dir_is_not_an_error(tmp_path: Path) -> None:
    status = get_tool_version_status(tmp_path / "nope", "cursor", "1.0.0")
    assert status.configured is False


def test_current_tool(tmp_path: Path) -> None:
    _write_skill(tmp_path, ".claude", "openspec-propose", "1.0.0")

    status = get_tool_version_status(tmp_path, "claude", "1.0.0")

    assert status.configured is True
    assert status.generated_by_version == "1.0.0"
    assert status.needs_update is False


def test_stale_tool(tmp_path: Path) -> None:
    _write_skill(tmp_path, ".claude", "openspec-propose", "0.1.0")

    status = get_tool_version_status(tmp_path, "claude", "1.0.0")

    assert status.generated_by_version == "0.1.0"
    assert status.needs_update is True


def test_missing_marker_needs_update(tmp_path: Path) -> None:
    _write_skill(tmp_path, ".claude", "openspec-apply-change", None)

    status = get_tool_version_status(tmp_path, "claude", "1.0.0")

    assert status.configured is True
    assert status.generated_by_version is None
    assert status.needs_update is True


def test_marker_read_from_skills_before_commands(tmp_path: Path) -> None:
    _write_command(tmp_path, ".claude/commands/opsx/apply.md", "0.5.0")
    _write_skill(tmp_path, ".claude", "openspec-verify-change", "0.7.0")

    status = get_tool_version_status(tmp_path, "claude", "1.0.0")

    assert status.generated_by_version == "0.7.0"


def test_commands_only_tool_is_configured(tmp_path: Path) -> None:
    """After switching delivery to commands, a tool still counts as configured."""
    _write_command(tmp_path, ".cursor/commands/opsx-apply.md", "1.0.0")

    assert get_configured_tools(tmp_path) == ["cursor"]
    assert get_tool_version_status(tmp_path, "cursor", "1.0.0").configured is True


def test_unmanaged_files_are_ignored(tmp_path: Path) -> None:
    (tmp_path / ".claude" / "skills" / "my-own-skill").mkdir(parents=True)
    (tmp_path / ".claude" / "skills" / "my-own-skill" / "SKILL.md").write_text(
        "---\nname: mine\n---\n", encoding="utf-8"
    )

    assert get_configured_tools(tmp_path) == []
    assert list_managed_files(tmp_path, "claude") == []


def test_scan_installed_workflows_unions_kinds_and_tools(tmp_path: Path) -> None:
    _write_skill(tmp_path, ".claude", "openspec-verify-change", "0.1.0")
    _write_command(tmp_path, ".cursor/commands/opsx-new.md", "0.1.0")
    _write_skill(tmp_path, ".cursor", "openspec-propose", "0.1.0")

    installed = scan_installed_workflows(tmp_path, ["claude", "cursor"])

    assert installed == ["propose", "new", "verify"]
