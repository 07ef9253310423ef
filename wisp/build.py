"""Site building functionality for Wisp.

This module drives the renderer over every document of a site and writes
the results into the output directory.

Key functions:
- build_site: Main function to build the entire site.

Output layout:
- ``/index.html``: front page.
- ``/posts/``, ``/category/<name>/``, ``/tag/<name>/``: first list page,
  further pages under ``<list>/page/<n>/``.
- ``/<slug>/``: standalone pages.
- ``/post/<slug>/``: posts.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from jinja2 import TemplateSyntaxError

from .collections import PostCollection
from .config import ConfigError, SiteConfig, load_config, validate_config
from .content import UNCATEGORIZED, ContentLoader, Page, Post
from .pagination import ListKind, list_path
from .site import SiteRenderer
from .themes import TemplateMissingError
from .utils import ensure_clean_dir, output_file, url_join


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        config: Configuration the site was built with.
        pages: Pages of the site.
        posts: Posts of the site, newest first.
        output_dir: Directory where the site was built.
        outputs: Every file written, in write order.
    """

    config: SiteConfig
    pages: list[Page]
    posts: list[Post]
    output_dir: Path
    outputs: list[Path] = field(default_factory=list)


def page_path(base: str, page_number: int) -> str:
    """Return the URL path of a list page.

    Examples:
        >>> page_path("/posts", 1)
        '/posts'
        >>> page_path("/tag/python", 3)
        '/tag/python/page/3'
    """
    if page_number <= 1:
        return base
    return url_join(base, "page", str(page_number))


def build_site(
    project_root: Path,
    minify: bool | None = None,
    clean_output: bool = True,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        minify: Whether to minify HTML; defaults to the ``minify`` setting.
        clean_output: Whether to wipe the output directory before building.
        output_dir_override: Optional path to write the build output instead of config output_dir.

    Returns:
        BuildResult describing what was written.

    Raises:
        BuildError: If the configuration is invalid, a document fails to render,
            or two documents would be written to the same output path.
    """
    config_path = project_root / "wisp.yaml"
    try:
        config = load_config(project_root)
        validate_config(config)
    except ConfigError as exc:
        raise BuildError(config_path, str(exc), exc) from exc

    output_dir = output_dir_override or (project_root / config.output_dir)
    if clean_output:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)

    loader = ContentLoader(project_root)
    pages = loader.load_pages()
    posts = PostCollection(loader.load_posts())
    for post in posts:
        # The uncategorized list only ever shows posts without a category
        if post.category == UNCATEGORIZED:
            raise BuildError(
                post.path,
                f'Category "{UNCATEGORIZED}" is reserved for posts without a category',
            )

    renderer = SiteRenderer(
        config,
        pages=pages,
        posts=posts,
        minify=config.minify if minify is None else minify,
        root_dir=project_root,
    )
    result = BuildResult(
        config=config, pages=pages, posts=list(posts), output_dir=output_dir
    )
    theme_dir = renderer.resolver.theme_dir
    claimed: dict[str, Path] = {}

    def emit(
        source: Path,
        url: str,
        render: Callable[[io.BytesIO], object],
        optional: bool = False,
    ) -> object:
        if url in claimed:
            raise BuildError(
                source,
                f"Output path {url} is already produced by {claimed[url]}",
            )
        buffer = io.BytesIO()
        try:
            outcome = render(buffer)
        except TemplateSyntaxError as exc:
            raise BuildError(
                source,
                f"Template syntax error in {exc.name} on line {exc.lineno}: {exc.message}",
                exc,
            ) from exc
        except Exception as exc:
            raise BuildError(source, _format_error_message(exc), exc) from exc
        if not (optional and outcome is None):
            claimed[url] = source
            result.outputs.append(_write_output(output_dir, url, buffer.getvalue()))
        return outcome

    emit(theme_dir, "/", renderer.render_front_page)

    lists = [(ListKind.DEFAULT, "")]
    lists += [(ListKind.CATEGORY, name or UNCATEGORIZED) for name in posts.category_names()]
    lists += [(ListKind.TAG, name) for name in posts.tag_names()]
    for kind, name in lists:
        base = list_path(kind, name)
        number = 1
        while True:
            outcome = emit(
                theme_dir,
                page_path(base, number),
                partial(renderer.render_list, kind, name, number),
                optional=True,
            )
            if outcome is None:
                break
            number += 1

    for page in pages:
        emit(page.path, page.url, partial(renderer.render_page, page))

    for index, post in enumerate(posts):
        older, newer = posts.neighbors(index)
        emit(
            post.path,
            post.url,
            partial(renderer.render_post, post, older, newer),
        )

    return result


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if isinstance(exc, TemplateMissingError):
        return error_msg
    if isinstance(exc, OSError):
        return f"Could not read file: {error_msg}"

    return f"{error_type}: {error_msg}"


def _write_output(output_dir: Path, url: str, data: bytes) -> Path:
    """Write a rendered document to the output directory.

    Args:
        output_dir: Base output directory.
        url: URL path the document is served at.
        data: Rendered HTML.

    Returns:
        Path of the written file.
    """
    target = output_file(output_dir, url)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target
