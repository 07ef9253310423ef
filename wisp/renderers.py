"""Markdown rendering for Wisp.

This module turns the body of a page or post into HTML. The leading front
matter block is stripped, the remainder is converted with mistune and fenced
code blocks are highlighted with Pygments.

Key classes:
- MarkdownRenderer: Converts Markdown text or files to safe HTML.
"""

from __future__ import annotations

import re
from pathlib import Path

import mistune
from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .extractors import strip_frontmatter

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]

_TAG_RE = re.compile(r"<[^>]+>")


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The rendered heading text, possibly containing inline HTML.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = _TAG_RE.sub("", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-") or "section"


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer with heading anchors and syntax highlighting."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an auto-generated, document-unique ID."""
        base_id = _generate_heading_id(text)

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Info string of the fence; its first word is the language.

        Returns:
            Highlighted HTML, or an escaped ``<pre><code>`` block when the
            language is missing or unknown.
        """
        lang = info.split()[0] if info and info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    The result is wrapped in Markup: it is trusted HTML and is embedded
    into templates verbatim.
    """

    def render(self, content: str) -> Markup:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source, optionally starting with front matter.

        Returns:
            Rendered HTML.
        """
        body = strip_frontmatter(content)
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(), plugins=MARKDOWN_PLUGINS
        )
        return Markup(markdown(body))

    def transform_file(self, path: Path) -> Markup:
        """Read a body file and render it.

        Args:
            path: Path to the Markdown file.

        Returns:
            Rendered HTML.

        Raises:
            OSError: If the file cannot be read.
        """
        return self.render(path.read_text(encoding="utf-8"))

