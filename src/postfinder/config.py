"""Application configuration defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from postfinder.index.suggest import DEFAULT_LIMIT

LOGGER = logging.getLogger(__name__)

DEFAULT_BLOG_NAME = "PostFinder Blog"
DEFAULT_INTRODUCTION = "Notes on data engineering and software."
DEFAULT_PORT = 8080


@dataclass(slots=True)
class SiteConfig:
    blog_name: str = DEFAULT_BLOG_NAME
    introduction: str = DEFAULT_INTRODUCTION


def load_site_config(path: Path) -> SiteConfig:
    """Read ``config.yaml``; any problem falls back to defaults with a warning."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Could not read %s, using defaults: %s", path, exc)
        return SiteConfig()

    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        LOGGER.warning("Could not parse %s, using defaults: %s", path, exc)
        return SiteConfig()

    if not isinstance(data, dict):
        LOGGER.warning("Could not parse %s, using defaults: not a mapping", path)
        return SiteConfig()

    return SiteConfig(
        blog_name=str(data.get("blog_name") or DEFAULT_BLOG_NAME),
        introduction=str(data.get("introduction") or DEFAULT_INTRODUCTION),
    )


def default_port() -> int:
    value = os.environ.get("PORT", "")
    try:
        return int(value) if value else DEFAULT_PORT
    except ValueError:
        LOGGER.warning("Ignoring invalid PORT %r", value)
        return DEFAULT_PORT


@dataclass(slots=True)
class AppConfig:
    content_dir: Path = Path("blog")
    dist_dir: Path = Path("dist")
    site_config_path: Path = Path("config.yaml")
    suggestion_limit: int = DEFAULT_LIMIT
    workers: int = 4

    def resolve_content_dir(self, base_dir: Path | None = None) -> Path:
        if Path(self.content_dir).is_absolute() or base_dir is None:
            return Path(self.content_dir)
        return base_dir / self.content_dir

    def resolve_dist_dir(self, base_dir: Path | None = None) -> Path:
        if Path(self.dist_dir).is_absolute() or base_dir is None:
            return Path(self.dist_dir)
        return base_dir / self.dist_dir

    def site(self, base_dir: Path | None = None) -> SiteConfig:
        path = Path(self.site_config_path)
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        return load_site_config(path)
