"""Post filtering and pagination for Wisp.

Lists show a fixed number of posts per page. This module selects the posts a
list shows (all of them, one category, or one tag) and computes which slice
of them belongs to a given page.

Key items:
- ListKind: The three kinds of list.
- filter_posts: Select the posts for a list kind and group name.
- max_page: Number of pages needed for a post count.
- clamp_page: Normalize a requested page number.
- page_window: The posts shown on one page.
- list_path: Canonical URL path of a list.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

from .collections import PostCollection
from .content import UNCATEGORIZED, Post
from .utils import url_join


class ListKind(Enum):
    """Kind of list being rendered."""

    DEFAULT = "default"
    CATEGORY = "category"
    TAG = "tag"


def filter_posts(posts: Sequence[Post], kind: ListKind, group_name: str) -> list[Post]:
    """Select the posts that belong to a list.

    Category lists match the category exactly; the group name
    ``uncategorized`` matches posts without a category. Tag lists match
    posts whose tags contain the group name. Default lists keep every post.

    Args:
        posts: All posts, in display order.
        kind: Kind of list.
        group_name: Category or tag name; ignored for default lists.

    Returns:
        Matching posts, order preserved.
    """
    collection = PostCollection(posts)
    if kind is ListKind.CATEGORY:
        category = "" if group_name == UNCATEGORIZED else group_name
        return list(collection.in_category(category))
    if kind is ListKind.TAG:
        return list(collection.with_tag(group_name))
    return list(collection)


def max_page(total: int, page_size: int) -> int:
    """Return the number of pages needed to show total posts.

    Examples:
        >>> max_page(3, 2)
        2
        >>> max_page(0, 2)
        0
    """
    if page_size < 1:
        raise ValueError(f"page size must be positive, got {page_size}")
    return math.ceil(total / page_size)


def clamp_page(page_number: int) -> int:
    """Treat page numbers below 1 as the first page."""
    return max(page_number, 1)


def page_window(posts: Sequence[Post], page_number: int, page_size: int) -> list[Post]:
    """Return the posts shown on a page.

    Args:
        posts: Filtered posts.
        page_number: 1-based page number, already validated against max_page.
        page_size: Posts per page.

    Returns:
        ``posts[(page_number - 1) * page_size : page_number * page_size]``.
    """
    if page_size < 1:
        raise ValueError(f"page size must be positive, got {page_size}")
    start = (page_number - 1) * page_size
    return list(posts[start : start + page_size])


def list_path(kind: ListKind, group_name: str) -> str:
    """Return the canonical URL path of a list.

    Examples:
        >>> list_path(ListKind.DEFAULT, "")
        '/posts'
        >>> list_path(ListKind.CATEGORY, "")
        '/category/uncategorized'
    """
    if kind is ListKind.CATEGORY:
        return url_join("category", group_name or UNCATEGORIZED)
    if kind is ListKind.TAG:
        return url_join("tag", group_name)
    return "/posts"
