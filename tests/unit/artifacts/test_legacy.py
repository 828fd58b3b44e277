"""Tests for legacy artifact detection and cleanup."""

from pathlib import Path

from openspec.artifacts.legacy import (
    MARKER_END,
    MARKER_START,
    CleanupSummary,
    cleanup_legacy_artifacts,
    detect_legacy_artifacts,
    format_cleanup_summary,
    format_detection_summary,
    get_tools_from_legacy_artifacts,
    remove_marker_blocks,
)


def test_remove_marker_blocks_keeps_surrounding_bytes() -> None:
    content = f"# Mine\n\nKeep me\n{MARKER_START}\nold stuff\n{MARKER_END}\nAfter\n"
    assert remove_marker_blocks(content) == "# Mine\n\nKeep me\nAfter\n"


def test_remove_marker_blocks_handles_multiple_blocks() -> None:
    content = f"a\n{MARKER_START}\nx\n{MARKER_END}\nb\n{MARKER_START}\ny\n{MARKER_END}\nc"
    assert remove_marker_blocks(content) == "a\nb\nc"


def test_remove_marker_blocks_block_at_end_without_newline() -> None:
    content = f"top\n{MARKER_START}\nx\n{MARKER_END}"
    assert remove_marker_blocks(content) == "top\n"


def test_remove_marker_blocks_leaves_unterminated_marker() -> None:
    content = f"a\n{MARKER_START}\nno end\n"
    assert remove_marker_blocks(content) == content


def test_detect_nothing_in_clean_project(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md").write_text("# Project notes\n", encoding="utf-8")

    detection = detect_legacy_artifacts(tmp_path)

    assert not detection.has_legacy_artifacts


def test_detect_every_legacy_shape(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md").write_text(f"{MARKER_START}\nx\n{MARKER_END}\n", encoding="utf-8")
    (tmp_path / "AGENTS.md").write_text(f"{MARKER_START}\nno end\n", encoding="utf-8")
    (tmp_path / ".claude" / "commands" / "openspec").mkdir(parents=True)
    (tmp_path / ".cursor" / "commands").mkdir(parents=True)
    (tmp_path / ".cursor" / "commands" / "openspec-apply.md").write_text("x", encoding="utf-8")
    (tmp_path / ".cursor" / "commands" / "mine.md").write_text("x", encoding="utf-8")
    (tmp_path / "openspec").mkdir()
    (tmp_path / "openspec" / "AGENTS.md").write_text("x", encoding="utf-8")

    detection = detect_legacy_artifacts(tmp_path)

    markers = {m.path: m.terminated for m in detection.marker_files}
    assert markers == {Path("CLAUDE.md"): True, Path("AGENTS.md"): False}
    assert [d.path for d in detection.command_dirs] == [Path(".claude/commands/openspec")]
    assert [f.path for f in detection.command_files] == [
        Path(".cursor/commands/openspec-apply.md")
    ]
    assert detection.project_files == (Path("openspec/AGENTS.md"),)
    assert get_tools_from_legacy_artifacts(detection) == ["claude", "cursor", "agents"]


def test_cleanup_preserves_user_content_and_crlf(tmp_path: Path) -> None:
    """Only the marker block goes; CRLF line endings outside it are untouched."""
    original = f"# Notes\r\nMine\r\n{MARKER_START}\r\nold\r\n{MARKER_END}\r\nTail\r\n"
    claude_md = tmp_path / "CLAUDE.md"
    claude_md.write_bytes(original.encode("utf-8"))

    summary = cleanup_legacy_artifacts(tmp_path, detect_legacy_artifacts(tmp_path))

    assert claude_md.read_bytes() == b"# Notes\r\nMine\r\nTail\r\n"
    assert summary.removed == ["Removed OpenSpec markers from CLAUDE.md"]
    assert summary.errors == []


def test_cleanup_skips_unterminated_markers(tmp_path: Path) -> None:
    content = f"Keep\n{MARKER_START}\nno end\n"
    agents_md = tmp_path / "AGENTS.md"
    agents_md.write_text(content, encoding="utf-8")

    summary = cleanup_legacy_artifacts(tmp_path, detect_legacy_artifacts(tmp_path))

    assert agents_md.read_text(encoding="utf-8") == content
    assert len(summary.skipped) == 1
    assert summary.removed == []


def test_cleanup_removes_directories_and_files(tmp_path: Path) -> None:
    legacy_dir = tmp_path / ".claude" / "commands" / "openspec"
    legacy_dir.mkdir(parents=True)
    (legacy_dir / "proposal.md").write_text("x", encoding="utf-8")
    prompts = tmp_path / ".github" / "prompts"
    prompts.mkdir(parents=True)
    (prompts / "openspec-apply.prompt.md").write_text("x", encoding="utf-8")
    (prompts / "mine.prompt.md").write_text("x", encoding="utf-8")

    summary = cleanup_legacy_artifacts(tmp_path, detect_legacy_artifacts(tmp_path))

    assert not legacy_dir.exists()
    assert (tmp_path / ".claude" / "commands").is_dir()
    assert not (prompts / "openspec-apply.prompt.md").exists()
    assert (prompts / "mine.prompt.md").exists()
    assert summary.removed == [
        "Removed .claude/commands/openspec/",
        "Removed .github/prompts/openspec-apply.prompt.md",
    ]


def test_cleanup_twice_is_a_no_op(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md").write_text(f"a\n{MARKER_START}\nx\n{MARKER_END}\n", encoding="utf-8")
    cleanup_legacy_artifacts(tmp_path, detect_legacy_artifacts(tmp_path))

    assert not detect_legacy_artifacts(tmp_path).has_legacy_artifacts


def test_cleanup_records_errors_and_continues(tmp_path: Path) -> None:
    """A failure on one item does not stop the rest."""
    (tmp_path / "openspec").mkdir()
    (tmp_path / "openspec" / "AGENTS.md").write_text("x", encoding="utf-8")
    claude_md = tmp_path / "CLAUDE.md"
    claude_md.write_text(f"{MARKER_START}\nx\n{MARKER_END}\n", encoding="utf-8")
    detection = detect_legacy_artifacts(tmp_path)
    # Replace the marker file with a directory so rewriting it fails
    claude_md.unlink()
    claude_md.mkdir()

    summary = cleanup_legacy_artifacts(tmp_path, detection)

    assert len(summary.errors) == 1
    assert "CLAUDE.md" in summary.errors[0]
    assert not (tmp_path / "openspec" / "AGENTS.md").exists()
    assert summary.removed == ["Removed openspec/AGENTS.md"]


def test_format_detection_summary_sections(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md").write_text(f"{MARKER_START}\nx\n{MARKER_END}\n", encoding="utf-8")
    (tmp_path / "GEMINI.md").write_text(f"{MARKER_START}\n", encoding="utf-8")
    (tmp_path / ".gemini" / "commands" / "openspec").mkdir(parents=True)

    text = format_detection_summary(detect_legacy_artifacts(tmp_path))

    assert "Files to remove" in text
    assert ".gemini/commands/openspec/" in text
    assert "Files to update" in text
    assert "CLAUDE.md" in text
    assert "Needs manual review" in text
    assert "GEMINI.md" in text


def test_format_cleanup_summary() -> None:
    summary = CleanupSummary(removed=["Removed a"], skipped=["Left b"], errors=["Failed c"])
    assert format_cleanup_summary(summary) == "  ✓ Removed a\n  ⚠ Left b\n  ✗ Failed c"
    assert format_cleanup_summary(CleanupSummary()) == ""
