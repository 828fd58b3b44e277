"""Version marker parsing for managed artifacts.

Every generated file carries a generatedBy marker in its header: nested
under metadata in SKILL.md, at the top level of command front matter, or
as a top-level key in TOML command files.
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

import frontmatter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrontmatterParseResult:
    """Result of parsing frontmatter from markdown content.

    Attributes:
        metadata: Parsed frontmatter dict, or None if parsing failed.
        body: Content after the frontmatter (always present).
        error: Error message if parsing failed, None otherwise.
    """

    metadata: dict[str, object] | None
    body: str
    error: str | None


def parse_markdown_frontmatter(content: str) -> FrontmatterParseResult:
    """Parse YAML frontmatter from markdown content.

    Missing, malformed or non-mapping frontmatter is reported through the
    error field rather than raised.
    """
    try:
        post = frontmatter.loads(content)
    except Exception as e:
        return FrontmatterParseResult(metadata=None, body=content, error=f"Invalid YAML: {e}")

    if not isinstance(post.metadata, dict) or not post.metadata:
        error = "No frontmatter found"
        if content.startswith("---"):
            error = "Frontmatter is not a valid YAML mapping"
        return FrontmatterParseResult(metadata=None, body=post.content, error=error)

    return FrontmatterParseResult(metadata=dict(post.metadata), body=post.content, error=None)


def _marker_value(value: object) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def extract_generated_by(content: str, *, is_toml: bool) -> str | None:
    """Extract the generatedBy version from file text.

    Args:
        content: Raw file text
        is_toml: Parse as a TOML command file instead of markdown

    Returns:
        The marker string, or None if absent or unparsable
    """
    if is_toml:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError:
            return None
        return _marker_value(data.get("generatedBy"))

    result = parse_markdown_frontmatter(content)
    if result.metadata is None:
        return None

    nested = result.metadata.get("metadata")
    if isinstance(nested, dict):
        version = _marker_value(nested.get("generatedBy"))
        if version is not None:
            return version
    return _marker_value(result.metadata.get("generatedBy"))


def read_generated_by(path: Path) -> str | None:
    """Read a managed file and extract its marker.

    Unreadable or undecodable files are treated as having no marker.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read marker from %s: %s", path, e)
        return None
    return extract_generated_by(content, is_toml=path.suffix == ".toml")
