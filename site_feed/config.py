"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ContentConfig: Where content lives and which files count as posts
- ListingConfig: Listing fragment settings
- BibliographyConfig: Location of the reference file
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class ContentConfig:
    """Configuration for content discovery.

    Attributes:
        site_root: Root directory of the site; slugs are relative to it
        content_dir: Directory (relative to site_root) holding the posts
        extensions: File suffixes that mark a file as content
        index_name: Name of the listing page itself, excluded from listings
        date_format: strptime format of declared ``published`` dates
    """

    site_root: str = "."
    content_dir: str = "blog"
    extensions: list[str] = field(default_factory=lambda: [".md"])
    index_name: str = "index.md"
    date_format: str = "%d %B %Y"

    @property
    def root_path(self) -> Path:
        return Path(self.site_root)

    @property
    def content_path(self) -> Path:
        return Path(self.site_root) / self.content_dir


@dataclass
class ListingConfig:
    """Configuration for listing fragments.

    Attributes:
        list_class: CSS class of the enclosing ``<ul>``
        undated_display: What to show for posts without a declared date,
            "today" (placeholder) or "effective" (the date used for sorting)
    """

    list_class: str = "blog-posts"
    undated_display: str = "today"


@dataclass
class BibliographyConfig:
    """Configuration for the bibliography.

    Attributes:
        path: Reference file, relative to the site root
    """

    path: str = "_assets/bibex.bib"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "site_feed.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    content: ContentConfig = field(default_factory=ContentConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)
    bibliography: BibliographyConfig = field(default_factory=BibliographyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "content": {
            "site_root": cfg.content.site_root,
            "content_dir": cfg.content.content_dir,
            "extensions": list(cfg.content.extensions),
            "index_name": cfg.content.index_name,
            "date_format": cfg.content.date_format,
        },
        "listing": {
            "list_class": cfg.listing.list_class,
            "undated_display": cfg.listing.undated_display,
        },
        "bibliography": {
            "path": cfg.bibliography.path,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        content=ContentConfig(**data["content"]),
        listing=ListingConfig(**data["listing"]),
        bibliography=BibliographyConfig(**data["bibliography"]),
        logging=LoggingConfig(**data["logging"]),
    )
