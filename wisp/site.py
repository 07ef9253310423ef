"""Site rendering for Wisp.

SiteRenderer exposes one entry point per kind of document: the front page,
post lists, standalone pages and single posts. Each call resolves the theme
templates, builds the view model and writes the rendered document to a byte
sink. Calls hold no state between them; the renderer only reads the
configuration and content it was constructed with.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .collections import PostCollection
from .config import SiteConfig, validate_config
from .content import Group, Page, Post
from .pagination import (
    ListKind,
    clamp_page,
    filter_posts,
    list_path,
    max_page,
    page_window,
)
from .protocols import BodyTransformer, ByteSink
from .renderers import MarkdownRenderer
from .templates import OutputPipeline, TemplateHelpers
from .themes import TemplateKind, ThemeResolver
from .viewmodels import build_layout, list_view, page_view, post_author, post_view


class SiteRenderer:
    """Renders the documents of a site.

    Attributes:
        config: Site configuration.
        pages: Every page, used for navigation.
        posts: Every post, newest first.
        tags: Tag groups shown on lists.
        categories: Category groups shown on lists.
        resolver: Theme template resolver.
        pipeline: Template execution and output pipeline.
        transformer: Converts page and post bodies to HTML.
    """

    def __init__(
        self,
        config: SiteConfig,
        pages: Sequence[Page] = (),
        posts: Sequence[Post] = (),
        tags: Sequence[Group] | None = None,
        categories: Sequence[Group] | None = None,
        minify: bool = False,
        root_dir: Path | None = None,
        transformer: BodyTransformer | None = None,
        helpers: TemplateHelpers | None = None,
    ):
        """Initialize the renderer.

        Args:
            config: Site configuration.
            pages: Every page of the site.
            posts: Every post, newest first.
            tags: Tag groups; derived from posts when omitted.
            categories: Category groups; derived from posts when omitted.
            minify: Whether to minify rendered HTML.
            root_dir: Project root containing ``theme/``; defaults to cwd.
            transformer: Optional custom body transformer.
            helpers: Optional custom template helper registry.
        """
        self.config = config
        self.pages = tuple(pages)
        self.posts = tuple(posts)
        collection = PostCollection(self.posts)
        self.tags = tuple(collection.tags() if tags is None else tags)
        self.categories = tuple(
            collection.categories() if categories is None else categories
        )
        self.resolver = ThemeResolver(root_dir or Path.cwd(), config.theme)
        self.pipeline = OutputPipeline(helpers, minify=minify)
        self.transformer = transformer or MarkdownRenderer()

    def render_front_page(self, dst: ByteSink) -> None:
        """Render the front page.

        Uses the theme's frontpage template when it has one, otherwise the
        list template, with the first page of all posts.

        Raises:
            ConfigError: If no theme is configured.
            TemplateMissingError: If the theme has neither template.
        """
        validate_config(self.config)
        templates = self.resolver.resolve(TemplateKind.FRONTPAGE)

        size = self.config.pagination
        layout = build_layout(
            self.config,
            self.pages,
            title=self.config.title,
            description=self.config.description,
            author=self.config.owner,
        )
        view = list_view(
            layout,
            kind=ListKind.DEFAULT,
            path=list_path(ListKind.DEFAULT, ""),
            current_page=1,
            max_page=max_page(len(self.posts), size),
            posts=page_window(self.posts, 1, size),
            tags=self.tags,
            categories=self.categories,
        )
        self.pipeline.execute(templates, view, dst)

    def render_list(
        self,
        kind: ListKind,
        group_name: str,
        page_number: int,
        dst: ByteSink,
    ) -> int | None:
        """Render one page of a post list.

        Args:
            kind: Kind of list.
            group_name: Category or tag name; ignored for default lists.
            page_number: 1-based page number; values below 1 mean page 1.
            dst: Output sink.

        Returns:
            The number of posts in the filtered list, or None when
            page_number is beyond the last page. Nothing is written in that
            case.

        Raises:
            ConfigError: If no theme is configured.
            TemplateMissingError: If the theme has no list template.
        """
        validate_config(self.config)
        templates = self.resolver.resolve(TemplateKind.LIST)

        posts = filter_posts(self.posts, kind, group_name)
        size = self.config.pagination
        page_number = clamp_page(page_number)
        last_page = max_page(len(posts), size)
        if page_number > last_page:
            return None

        title = self.config.title if kind is ListKind.DEFAULT else group_name
        layout = build_layout(
            self.config,
            self.pages,
            title=title,
            description=self.config.description,
            author=self.config.owner,
        )
        view = list_view(
            layout,
            kind=kind,
            path=list_path(kind, group_name),
            current_page=page_number,
            max_page=last_page,
            posts=page_window(posts, page_number, size),
            tags=self.tags,
            categories=self.categories,
        )
        self.pipeline.execute(templates, view, dst)
        return len(posts)

    def render_page(self, page: Page, dst: ByteSink) -> None:
        """Render a standalone page.

        Raises:
            ConfigError: If no theme is configured.
            TemplateMissingError: If the theme has no page template.
            OSError: If the page body cannot be read.
        """
        validate_config(self.config)
        templates = self.resolver.resolve(TemplateKind.PAGE)

        html = self.transformer.transform_file(page.path)
        layout = build_layout(
            self.config,
            self.pages,
            title=page.title,
            description=page.excerpt,
            author=self.config.owner,
        )
        self.pipeline.execute(templates, page_view(layout, page, html), dst)

    def render_post(
        self,
        post: Post,
        older: Post | None,
        newer: Post | None,
        dst: ByteSink,
    ) -> None:
        """Render a single post.

        Args:
            post: The post to render.
            older: The chronologically previous post, if any.
            newer: The chronologically next post, if any.
            dst: Output sink.

        Raises:
            ConfigError: If no theme is configured.
            TemplateMissingError: If the theme has no post template.
            OSError: If the post body cannot be read.
        """
        validate_config(self.config)
        templates = self.resolver.resolve(TemplateKind.POST)

        html = self.transformer.transform_file(post.path)
        layout = build_layout(
            self.config,
            self.pages,
            title=post.title,
            description=post.excerpt,
            author=post_author(post, self.config),
        )
        view = post_view(layout, post, html, older=older, newer=newer)
        self.pipeline.execute(templates, view, dst)
