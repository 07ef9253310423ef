from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .content import Group, Post, category_group, tag_group


class PostCollection(Sequence[Post]):
    """Lightweight helper for working with ordered lists of Posts."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def in_category(self, name: str) -> PostCollection:
        return PostCollection(p for p in self._posts if p.category == name)

    def with_tag(self, tag: str) -> PostCollection:
        return PostCollection(p for p in self._posts if tag in p.tags)

    def neighbors(self, index: int) -> tuple[Post | None, Post | None]:
        """Return the (older, newer) posts around the post at index.

        The collection is expected to be ordered newest first, so the older
        post follows and the newer post precedes.
        """
        older = self._posts[index + 1] if index + 1 < len(self._posts) else None
        newer = self._posts[index - 1] if index > 0 else None
        return older, newer

    def category_names(self) -> list[str]:
        return sorted({p.category for p in self._posts})

    def tag_names(self) -> list[str]:
        return sorted({t for p in self._posts for t in p.tags})

    def categories(self) -> list[Group]:
        return [category_group(name) for name in self.category_names()]

    def tags(self) -> list[Group]:
        return [tag_group(name) for name in self.tag_names()]

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"
