"""View models handed to Wisp templates.

Every rendered document receives one view model. All of them carry the
fields of the base Layout (site title and owner, content title, description
and author, and every page for navigation); each concrete model holds its
own copy of those fields, produced by the merge functions below.

Key classes:
- Layout: Fields common to every document.
- ListView: A page of posts (front page, post lists, category/tag lists).
- PageView: A standalone page.
- PostView: A single post with its neighbours.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields
from datetime import datetime

from markupsafe import Markup

from .config import SiteConfig
from .content import Group, Page, Post, category_group, tag_group
from .pagination import ListKind


@dataclass(frozen=True)
class Layout:
    website_title: str
    website_owner: str
    content_title: str
    content_desc: str
    content_author: str
    pages: tuple[Page, ...]


@dataclass(frozen=True)
class ListView:
    website_title: str
    website_owner: str
    content_title: str
    content_desc: str
    content_author: str
    pages: tuple[Page, ...]
    kind: ListKind
    path: str
    current_page: int
    max_page: int
    posts: tuple[Post, ...]
    tags: tuple[Group, ...] = ()
    categories: tuple[Group, ...] = ()


@dataclass(frozen=True)
class PageView:
    website_title: str
    website_owner: str
    content_title: str
    content_desc: str
    content_author: str
    pages: tuple[Page, ...]
    thumbnail: str
    html: Markup


@dataclass(frozen=True)
class PostView:
    website_title: str
    website_owner: str
    content_title: str
    content_desc: str
    content_author: str
    pages: tuple[Page, ...]
    created_at: datetime | None
    updated_at: datetime | None
    category: Group
    thumbnail: str
    html: Markup
    tags: tuple[Group, ...] = ()
    older: Post | None = None
    newer: Post | None = None


def build_layout(
    config: SiteConfig,
    pages: Sequence[Page],
    title: str,
    description: str,
    author: str = "",
) -> Layout:
    """Build the base layout for a document.

    Args:
        config: Site configuration; provides site title and owner.
        pages: Every page of the site.
        title: Content title.
        description: Content description.
        author: Content author.
    """
    return Layout(
        website_title=config.title,
        website_owner=config.owner,
        content_title=title,
        content_desc=description,
        content_author=author,
        pages=tuple(pages),
    )


def _layout_fields(layout: Layout) -> dict:
    # Shallow copy; the Page records are shared, not duplicated
    return {f.name: getattr(layout, f.name) for f in fields(layout)}


def list_view(
    layout: Layout,
    kind: ListKind,
    path: str,
    current_page: int,
    max_page: int,
    posts: Sequence[Post],
    tags: Sequence[Group] = (),
    categories: Sequence[Group] = (),
) -> ListView:
    """Merge a layout with list fields."""
    return ListView(
        **_layout_fields(layout),
        kind=kind,
        path=path,
        current_page=current_page,
        max_page=max_page,
        posts=tuple(posts),
        tags=tuple(tags),
        categories=tuple(categories),
    )


def page_view(layout: Layout, page: Page, html: Markup) -> PageView:
    """Merge a layout with page fields."""
    return PageView(**_layout_fields(layout), thumbnail=page.thumbnail, html=html)


def post_author(post: Post, config: SiteConfig) -> str:
    """Return the post's author, or the site owner when it has none."""
    return post.author or config.owner


def post_tags(post: Post) -> tuple[Group, ...]:
    """Return the post's tag groups sorted by name."""
    return tuple(sorted((tag_group(t) for t in post.tags), key=lambda g: g.name))


def post_view(
    layout: Layout,
    post: Post,
    html: Markup,
    older: Post | None = None,
    newer: Post | None = None,
) -> PostView:
    """Merge a layout with post fields.

    The category and tag strings of the post become Groups; tag groups are
    sorted by name.
    """
    return PostView(
        **_layout_fields(layout),
        created_at=post.created_at,
        updated_at=post.updated_at,
        category=category_group(post.category),
        tags=post_tags(post),
        thumbnail=post.thumbnail,
        html=html,
        older=older,
        newer=newer,
    )


def as_context(view: Layout | ListView | PageView | PostView) -> dict:
    """Expose a view model's fields as template variables.

    Templates can refer to fields either directly (``{{ content_title }}``)
    or through ``view`` (``{{ view.content_title }}``).
    """
    context = {f.name: getattr(view, f.name) for f in fields(view)}
    context["view"] = view
    return context

