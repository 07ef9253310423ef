"""Content model for Wisp.

This module defines the records the renderer consumes and the loader that
discovers them on disk.

Key classes:
- Page: A standalone page (about, contact, ...).
- Post: A timestamped entry with an author, a category and tags.
- Group: A display-ready (name, path) pair for a category or tag.
- ContentLoader: Reads ``page/<slug>/index.md`` and ``post/<slug>/index.md``.

The records are frozen: rendering derives values from them and never
modifies them in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .extractors import extract_frontmatter, normalize_tags, parse_timestamp
from .utils import slugify, titleize, url_join

INDEX_FILENAME = "index.md"
UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class Page:
    """A standalone page.

    Attributes:
        path: Path to the Markdown body file.
        title: Page title.
        excerpt: Short summary, used as the content description.
        thumbnail: Thumbnail image reference.
        slug: URL slug.
    """

    path: Path
    title: str
    excerpt: str = ""
    thumbnail: str = ""
    slug: str = ""

    @property
    def url(self) -> str:
        return url_join(self.slug)


@dataclass(frozen=True)
class Post(Page):
    """A timestamped post.

    Attributes:
        author: Author name; empty means the site owner.
        category: Category name; empty means uncategorized.
        tags: Ordered tag names.
        created_at: Creation time.
        updated_at: Last update time.
    """

    author: str = ""
    category: str = ""
    tags: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def url(self) -> str:
        return url_join("post", self.slug)


@dataclass(frozen=True)
class Group:
    """A category or tag ready for display.

    Attributes:
        name: Display name; empty for the uncategorized category.
        path: URL path of the group's list.
    """

    name: str
    path: str


def category_group(name: str) -> Group:
    """Build the Group for a category name.

    Examples:
        >>> category_group("")
        Group(name='', path='/category/uncategorized')
    """
    return Group(name=name, path=url_join("category", name or UNCATEGORIZED))


def tag_group(name: str) -> Group:
    """Build the Group for a tag name."""
    return Group(name=name, path=url_join("tag", name))


class ContentLoader:
    """Loads pages and posts from a project directory.

    Each entry is a directory containing an ``index.md`` file whose YAML
    front matter holds the entry's metadata.

    Attributes:
        project_root: Root directory of the project.
    """

    def __init__(self, project_root: Path):
        """Initialize the content loader.

        Args:
            project_root: Project root containing ``page/`` and ``post/``.
        """
        self.project_root = project_root
        self.page_dir = project_root / "page"
        self.post_dir = project_root / "post"

    def iter_entries(self, base: Path) -> list[Path]:
        """Return the index files of every entry directory under base.

        Args:
            base: ``page/`` or ``post/`` directory.

        Returns:
            Sorted list of index file paths.
        """
        if not base.is_dir():
            return []
        entries: list[Path] = []
        for child in sorted(base.iterdir()):
            if not child.is_dir() or child.name.startswith(("_", ".")):
                continue
            index = child / INDEX_FILENAME
            if index.is_file():
                entries.append(index)
        return entries

    def load_pages(self) -> list[Page]:
        """Load all pages, ordered by slug."""
        pages: list[Page] = []
        for index in self.iter_entries(self.page_dir):
            meta = self._read_meta(index)
            pages.append(
                Page(
                    path=index,
                    title=str(meta.get("title") or titleize(index.parent.name)),
                    excerpt=str(meta.get("excerpt") or ""),
                    thumbnail=str(meta.get("thumbnail") or ""),
                    slug=slugify(index.parent.name),
                )
            )
        return pages

    def load_posts(self) -> list[Post]:
        """Load all posts, newest first.

        The creation time falls back to the index file's modification time,
        and the update time falls back to the creation time.
        """
        posts: list[Post] = []
        for index in self.iter_entries(self.post_dir):
            meta = self._read_meta(index)
            created = parse_timestamp(meta.get("created_at"))
            if created is None:
                created = datetime.fromtimestamp(index.stat().st_mtime)
            updated = parse_timestamp(meta.get("updated_at")) or created
            posts.append(
                Post(
                    path=index,
                    title=str(meta.get("title") or titleize(index.parent.name)),
                    excerpt=str(meta.get("excerpt") or ""),
                    thumbnail=str(meta.get("thumbnail") or ""),
                    slug=slugify(index.parent.name),
                    author=str(meta.get("author") or ""),
                    category=str(meta.get("category") or ""),
                    tags=normalize_tags(meta.get("tags")),
                    created_at=created,
                    updated_at=updated,
                )
            )
        return sorted(posts, key=_post_sort_key, reverse=True)

    def _read_meta(self, index: Path) -> dict:
        frontmatter, _ = extract_frontmatter(index.read_text(encoding="utf-8"))
        return frontmatter


def _post_sort_key(post: Post):
    created = post.created_at
    # Mixed naive/aware timestamps compare by their wall-clock value
    stamp = created.replace(tzinfo=None) if created else datetime.min
    return (stamp, post.slug)
