"""Theme resolution for Wisp.

A theme is a directory under ``<root>/theme/`` holding Jinja2 templates:

- partials, whose names start with ``_`` (``_header.html``, ``_base.html``),
  available to every render;
- up to four kind templates: ``frontpage.html``, ``list.html``,
  ``page.html`` and ``post.html``.

Key classes:
- TemplateKind: The four kinds of rendered document.
- TemplateSet: The resolved templates for one render call.
- ThemeResolver: Locates a theme and resolves the templates for a kind.
- TemplateMissingError: Raised when a required template is absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import ConfigError

PARTIAL_PREFIX = "_"
TEMPLATE_SUFFIX = ".html"


class TemplateKind(Enum):
    """Kind of document being rendered, with its template filename."""

    FRONTPAGE = "frontpage.html"
    LIST = "list.html"
    PAGE = "page.html"
    POST = "post.html"


class TemplateMissingError(Exception):
    """Error raised when the template required for a render is missing.

    Attributes:
        kind: The kind of document that was requested.
        searched: Template paths that were looked for.
    """

    def __init__(self, kind: TemplateKind, searched: list[Path]):
        self.kind = kind
        self.searched = searched
        names = " or ".join(p.name for p in searched)
        super().__init__(
            f"Template for {kind.name.lower()} does not exist (looked for {names})"
        )


@dataclass(frozen=True)
class TemplateSet:
    """Templates resolved for one render call.

    Attributes:
        sources: Template files, partials first and the kind template last.
        name: Filename of the template to execute.
    """

    sources: tuple[Path, ...]
    name: str


class ThemeResolver:
    """Resolves theme templates.

    Attributes:
        root_dir: Project root containing the ``theme/`` directory.
        theme: Name of the theme.
    """

    def __init__(self, root_dir: Path, theme: str):
        self.root_dir = root_dir
        self.theme = theme

    @property
    def theme_dir(self) -> Path:
        """Directory of the configured theme.

        Raises:
            ConfigError: If no theme name is configured.
        """
        if not self.theme:
            raise ConfigError("No theme specified in configuration file", key="theme")
        return self.root_dir / "theme" / self.theme

    def partials(self) -> list[Path]:
        """Return the partial templates of the theme, sorted by name.

        Raises:
            OSError: If the theme directory cannot be listed.
        """
        theme_dir = self.theme_dir
        return sorted(
            (
                item
                for item in theme_dir.iterdir()
                if item.is_file()
                and item.name.startswith(PARTIAL_PREFIX)
                and item.name.endswith(TEMPLATE_SUFFIX)
            ),
            key=lambda p: p.name,
        )

    def resolve(self, kind: TemplateKind) -> TemplateSet:
        """Resolve the templates needed to render a kind of document.

        The front page uses ``frontpage.html`` when the theme has one and
        falls back to ``list.html``; every other kind requires its own
        template.

        Args:
            kind: Kind of document.

        Returns:
            TemplateSet with the partials and the kind template.

        Raises:
            ConfigError: If no theme name is configured.
            TemplateMissingError: If no suitable template exists.
            OSError: If the theme directory cannot be listed.
        """
        theme_dir = self.theme_dir
        candidates = [kind]
        if kind is TemplateKind.FRONTPAGE:
            candidates.append(TemplateKind.LIST)

        searched = [theme_dir / candidate.value for candidate in candidates]
        active = next((path for path in searched if path.is_file()), None)
        if active is None:
            raise TemplateMissingError(kind, searched)

        return TemplateSet(sources=(*self.partials(), active), name=active.name)
