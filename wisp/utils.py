"""Utility functions for Wisp.

This module contains small helpers shared by the content loader and the
site builder: slug generation, URL path joining and output directory handling.

Key functions:
    slugify: Convert directory or file names to URL slugs.
    titleize: Convert names to human-readable titles.
    url_join: Join URL path segments into a root-relative path.
    output_file: Map a URL path to the index.html file that serves it.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path


def slugify(name: str) -> str:
    """Convert a name to a slug.

    Args:
        name: Directory name or filename stem.

    Returns:
        URL-friendly slug.
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def titleize(name: str) -> str:
    """Convert a slug or filename to a human-readable title.

    Args:
        name: Name with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("getting-started")
        'Getting Started'
    """
    base = Path(name).stem
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def url_join(*segments: str) -> str:
    """Join URL path segments into a single root-relative path.

    Empty segments are skipped and duplicate slashes collapsed.

    Examples:
        >>> url_join("/category", "news")
        '/category/news'

        >>> url_join("/", "tag", "")
        '/tag'
    """
    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    return "/" + "/".join(parts)


def output_file(output_dir: Path, url: str) -> Path:
    """Return the file that serves a URL path inside the output directory.

    Args:
        output_dir: Base output directory.
        url: Root-relative URL path such as ``/post/hello``.

    Returns:
        ``<output_dir>/<url>/index.html``.
    """
    url_path = url.strip("/")
    target_dir = output_dir / url_path if url_path else output_dir
    return target_dir / "index.html"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)
