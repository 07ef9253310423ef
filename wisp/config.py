"""Site configuration for Wisp.

This module defines the read-only SiteConfig consumed by the renderer and
loads it from ``wisp.yaml`` at the project root.

Key items:
- SiteConfig: Frozen dataclass with the site-wide settings.
- ConfigError: Raised when configuration is missing or invalid.
- load_config: Loads wisp.yaml, applying defaults.
- validate_config: Checks the invariants every render call relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "wisp.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "theme": "",
    "title": "",
    "owner": "",
    "description": "",
    "pagination": 10,
    "minify": False,
    "output_dir": "public",
}


class ConfigError(Exception):
    """Error raised when the site configuration is missing or invalid.

    Attributes:
        key: The configuration key at fault, if known.
    """

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide settings shared by every render call.

    Attributes:
        theme: Name of the theme directory under ``theme/``.
        title: Website title.
        owner: Website owner, used as the default author.
        description: Website description.
        pagination: Number of posts per list page.
        minify: Whether the builder minifies rendered HTML.
        output_dir: Output directory, relative to the project root.
    """

    theme: str = ""
    title: str = ""
    owner: str = ""
    description: str = ""
    pagination: int = 10
    minify: bool = False
    output_dir: str = "public"


def validate_config(config: SiteConfig) -> None:
    """Verify that the configuration can be used for rendering.

    Args:
        config: Configuration to check.

    Raises:
        ConfigError: If no theme is specified.
    """
    if not config.theme:
        raise ConfigError("No theme specified in configuration file", key="theme")


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from wisp.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with defaults applied for missing keys.

    Raises:
        ConfigError: If the file is malformed or a value has the wrong type.
    """
    config_path = project_root / CONFIG_FILENAME
    values = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"Expected a mapping in {config_path}")
        values.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})

    pagination = values["pagination"]
    if isinstance(pagination, bool) or not isinstance(pagination, int) or pagination < 1:
        raise ConfigError(
            f"pagination must be a positive integer, got {pagination!r}",
            key="pagination",
        )

    return SiteConfig(
        theme=str(values["theme"] or ""),
        title=str(values["title"] or ""),
        owner=str(values["owner"] or ""),
        description=str(values["description"] or ""),
        pagination=pagination,
        minify=bool(values["minify"]),
        output_dir=str(values["output_dir"] or "public"),
    )
