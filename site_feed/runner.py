"""
Page helpers called by the site's page templates.

Each helper runs one complete request:
1. Load page declarations (unless a resolver is supplied)
2. Discover or filter content items
3. Render the HTML fragment

Nothing is cached between calls; every call re-reads the content tree or the
bibliography file.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from .bibliography.parser import load_bibliography
from .config import AppConfig
from .core.metadata import MetadataResolver, load_metadata_store
from .core.types import TaggedSet
from .listing.discovery import list_by_tag, list_posts
from .logging_utils import log_render
from .output.renderer import render_citations, render_listing

logger = logging.getLogger(__name__)


def build_resolver(cfg: AppConfig) -> MetadataResolver:
    """Resolver backed by the declarations of every page under the content dir."""
    store = load_metadata_store(
        cfg.content.root_path,
        cfg.content.content_path,
        cfg.content.extensions,
    )
    return MetadataResolver(store)


def blog_posts(
    cfg: AppConfig,
    resolver: MetadataResolver | None = None,
    today: date | None = None,
) -> str:
    """Listing of every post under the content directory, newest first."""
    resolver = resolver or build_resolver(cfg)
    items = list_posts(
        cfg.content.content_path,
        resolver,
        cfg.content,
        site_root=cfg.content.root_path,
    )
    log_render(logger, "blog listing", count=len(items))
    return render_listing(
        items,
        list_class=cfg.listing.list_class,
        undated_display=cfg.listing.undated_display,
        today=today,
    )


def tag_list(
    tagged: TaggedSet,
    tag: str,
    cfg: AppConfig,
    resolver: MetadataResolver | None = None,
    today: date | None = None,
) -> str:
    """Listing of the posts carrying ``tag``, newest first."""
    resolver = resolver or build_resolver(cfg)
    items = list_by_tag(tagged, tag, resolver, cfg.content, site_root=cfg.content.root_path)
    log_render(logger, "tag listing", tag=tag, count=len(items))
    return render_listing(
        items,
        list_class=cfg.listing.list_class,
        undated_display=cfg.listing.undated_display,
        today=today,
    )


def show_refs(keys: Sequence[str], cfg: AppConfig) -> str:
    """Citation list for ``keys`` from the configured bibliography file.

    A missing or unreadable bibliography file renders an empty list.
    """
    path = cfg.content.root_path / cfg.bibliography.path
    try:
        bibliography = load_bibliography(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read bibliography %s: %s", path, exc)
        bibliography = {}

    found = [key for key in keys if key in bibliography]
    log_render(logger, "citations", requested=len(keys), count=len(found))
    return render_citations(bibliography, keys)
