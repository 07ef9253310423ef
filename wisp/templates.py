"""Template execution for Wisp.

This module renders a resolved template set against a view model and writes
the result to a byte sink, optionally minifying it first.

Key classes:
- TemplateHelpers: Registry of the helper functions templates may call.
- OutputPipeline: Executes templates, minifies and writes output.

Helpers are registered per pipeline instance and installed into every
environment the pipeline creates; nothing is shared at module level.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import minify
from jinja2 import DictLoader, Environment, select_autoescape

from .protocols import ByteSink
from .themes import TemplateSet
from .viewmodels import as_context

DEFAULT_TIME_FORMAT = "%d %B %Y"

MINIFY_PROFILE = {
    "html-keep-default-attr-vals": True,
    "html-keep-whitespace": True,
    "html-keep-end-tags": True,
    "html-keep-document-tags": True,
}


def add(a: int, b: int) -> int:
    """Return a + b; used for page arithmetic in templates."""
    return a + b


def format_time(value: datetime | str | None, fmt: str = DEFAULT_TIME_FORMAT) -> str:
    """Format a timestamp for display.

    Args:
        value: A datetime or an ISO-8601 string.
        fmt: strftime format.

    Returns:
        The formatted timestamp, or an empty string for empty values.
        Strings that are not ISO-8601 are returned unchanged.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime(fmt)


def limit_sentence(text: str | None, max_words: int) -> str:
    """Truncate text to at most max_words words.

    Examples:
        >>> limit_sentence("one two three four", 2)
        'one two...'
        >>> limit_sentence("one two", 5)
        'one two'
    """
    words = (text or "").split()
    if len(words) <= max_words:
        return " ".join(words)
    return " ".join(words[:max_words]) + "..."


class TemplateHelpers:
    """Registry of helper functions exposed to templates.

    Each helper is installed both as a global function and as a filter, so
    ``{{ add(current_page, 1) }}`` and ``{{ created_at | format_time }}`` both
    work.
    """

    def __init__(self):
        """Initialize the registry with the default helpers."""
        self._helpers: dict[str, Callable[..., Any]] = {}
        self.register("add", add)
        self.register("format_time", format_time)
        self.register("limit_sentence", limit_sentence)

    def register(self, name: str, func: Callable[..., Any]) -> None:
        """Register a helper under name, replacing any existing one."""
        self._helpers[name] = func

    def names(self) -> list[str]:
        return sorted(self._helpers)

    def install(self, env: Environment) -> None:
        """Make every helper available in a Jinja environment."""
        env.globals.update(self._helpers)
        env.filters.update(self._helpers)


class OutputPipeline:
    """Executes templates and writes the rendered document.

    Attributes:
        helpers: Helper registry installed into each environment.
        minify: Whether output is minified before writing.
    """

    def __init__(self, helpers: TemplateHelpers | None = None, minify: bool = False):
        self.helpers = helpers or TemplateHelpers()
        self.minify = minify

    def create_environment(self, templates: TemplateSet) -> Environment:
        """Create a Jinja environment that can load exactly the given templates.

        Templates are addressed by filename, so a kind template can
        ``{% extends "_base.html" %}`` or ``{% include "_header.html" %}``.

        Raises:
            OSError: If a template file cannot be read.
        """
        sources = {
            path.name: path.read_text(encoding="utf-8") for path in templates.sources
        }
        env = Environment(
            loader=DictLoader(sources),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
            enable_async=False,
        )
        self.helpers.install(env)
        return env

    def render(self, templates: TemplateSet, view: Any) -> bytes:
        """Render the named template against a view model.

        Args:
            templates: Resolved template set.
            view: View model dataclass.

        Returns:
            UTF-8 encoded HTML, minified when enabled.

        Raises:
            jinja2.TemplateError: If the template fails to parse or render.
        """
        env = self.create_environment(templates)
        template = env.get_template(templates.name)
        buffer = template.render(**as_context(view)).encode("utf-8")
        if not self.minify:
            return buffer
        return minify_document(buffer)

    def execute(self, templates: TemplateSet, view: Any, dst: ByteSink) -> None:
        """Render a view model and write it to dst.

        Output is fully rendered before anything is written, so a failing
        template leaves dst untouched.
        """
        dst.write(self.render(templates, view))


def minify_document(html: bytes) -> bytes:
    """Minify an HTML document with a conservative profile.

    End tags, the ``<html>``/``<head>``/``<body>`` tags and default
    attribute values are kept. Whitespace runs are collapsed to a single
    character rather than removed, and comments are dropped.
    """
    minify.config(MINIFY_PROFILE)
    return minify.string("text/html", html.decode("utf-8")).encode("utf-8")
