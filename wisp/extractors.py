"""Front matter handling for Wisp.

Content bodies may start with a metadata block: YAML delimited by ``---``
lines, or TOML delimited by ``+++`` lines. The content loader reads that
block to populate Page and Post records; the Markdown transformer strips it
before conversion.

Key functions:
- extract_frontmatter: Parse the leading metadata block into a dict.
- strip_frontmatter: Remove the leading block, returning the body only.
- parse_timestamp: Coerce a front matter value into a datetime.
- normalize_tags: Coerce a front matter value into an ordered tuple of tags.
"""

from __future__ import annotations

import re
import tomllib
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import yaml

FRONTMATTER_RE = re.compile(r"^\ufeff?---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", re.DOTALL)
TOML_FRONTMATTER_RE = re.compile(
    r"^\ufeff?\+\+\+[ \t]*\r?\n(.*?)\r?\n\+\+\+[ \t]*(?:\r?\n|$)", re.DOTALL
)

_PARSE_ERRORS = (yaml.YAMLError, tomllib.TOMLDecodeError)


def _match_frontmatter(text: str) -> tuple[re.Match[str], Callable[[str], Any]] | None:
    for pattern, parse in (
        (FRONTMATTER_RE, yaml.safe_load),
        (TOML_FRONTMATTER_RE, tomllib.loads),
    ):
        match = pattern.match(text)
        if match:
            return match, parse
    return None


def strip_frontmatter(text: str) -> str:
    """Remove a leading front matter block, if present.

    Args:
        text: Raw file content.

    Returns:
        Content without the metadata block.

    Examples:
        >>> strip_frontmatter("---\\ntitle: Hi\\n---\\nBody")
        'Body'
        >>> strip_frontmatter('+++\\ntitle = "Hi"\\n+++\\nBody')
        'Body'
    """
    found = _match_frontmatter(text)
    if found is None:
        return text
    return text[found[0].end() :]


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML or TOML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content). Malformed or
        non-mapping front matter yields an empty dict and the body unchanged.
    """
    found = _match_frontmatter(text)
    if found is None:
        return {}, text
    match, parse = found
    try:
        data = parse(match.group(1)) or {}
        if not isinstance(data, dict):
            return {}, text
        return data, text[match.end() :]
    except _PARSE_ERRORS:
        return {}, text


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a front matter value into a datetime.

    PyYAML and tomllib already turn unquoted timestamps into datetime or date
    objects; quoted strings are parsed with ``datetime.fromisoformat``.

    Args:
        value: Raw front matter value.

    Returns:
        A datetime, or None if the value is empty or unparseable.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def normalize_tags(value: Any) -> tuple[str, ...]:
    """Coerce a front matter value into an ordered tuple of unique tags.

    Accepts a YAML list or a comma-separated string.

    Examples:
        >>> normalize_tags("python, web, python")
        ('python', 'web')
    """
    if value is None:
        return ()
    if isinstance(value, str):
        raw = value.split(",")
    elif isinstance(value, (list, tuple)):
        raw = [str(v) for v in value if v is not None]
    else:
        raw = [str(value)]
    seen: list[str] = []
    for tag in raw:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return tuple(seen)
