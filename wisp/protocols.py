"""Protocol definitions for Wisp.

This module defines the small interfaces the renderer depends on, so that
callers can supply their own implementations (an in-memory buffer as the
output sink, an alternative body transformer in tests, ...).
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol, runtime_checkable

from markupsafe import Markup


@runtime_checkable
class ByteSink(Protocol):
    """Destination of a rendered document.

    Any binary file object or ``io.BytesIO`` satisfies this protocol.
    """

    @abstractmethod
    def write(self, data: bytes, /) -> int | None:
        """Write rendered bytes."""
        ...


@runtime_checkable
class BodyTransformer(Protocol):
    """Protocol for turning a content body file into HTML."""

    @abstractmethod
    def transform_file(self, path: Path) -> Markup:
        """Read a body file and convert it to trusted HTML.

        Args:
            path: Path to the body file.

        Returns:
            Rendered HTML.
        """
        ...
