"""
Post discovery and tag filtering.

Both entry points return content items ordered by effective date, most
recent first. The effective date is the declared ``published`` date when a
page has one, otherwise the creation date of its backing file. "Today" is
never used for ordering.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, timezone
from pathlib import Path

from ..config import ContentConfig
from ..core.errors import MalformedDateError, MissingTimestampError
from ..core.metadata import MetadataResolver
from ..core.paths import find_backing_file, iter_content_files, relative_path, slug_for
from ..core.types import ContentItem, PageMeta, TaggedSet

logger = logging.getLogger(__name__)


def list_posts(
    root_dir: Path,
    resolver: MetadataResolver,
    cfg: ContentConfig | None = None,
    site_root: Path | None = None,
) -> list[ContentItem]:
    """List content items under ``root_dir``, newest first.

    Args:
        root_dir: Directory to scan recursively
        resolver: Lookup for declared page attributes
        cfg: Content settings (extensions, index file, date format)
        site_root: Directory slugs are relative to; defaults to the parent
            of ``root_dir`` so ``blog/post.md`` becomes ``blog/post``

    Raises:
        MalformedDateError: A page declares a date in the wrong format
        MissingTimestampError: An undated page's file cannot be stat'ed
    """
    cfg = cfg or ContentConfig()
    root_dir = Path(root_dir)
    site_root = Path(site_root) if site_root is not None else root_dir.parent

    items = []
    for path in iter_content_files(root_dir, cfg.extensions, cfg.index_name):
        rel = relative_path(path, site_root)
        slug = slug_for(rel)
        meta = resolver.resolve(slug)
        items.append(
            ContentItem(
                path=rel,
                slug=slug,
                meta=meta,
                effective_date=effective_date(slug, meta, path, cfg.date_format),
            )
        )

    logger.debug("Discovered %d posts under %s", len(items), root_dir)
    return sort_by_date(items)


def list_by_tag(
    tagged: TaggedSet,
    tag: str,
    resolver: MetadataResolver,
    cfg: ContentConfig | None = None,
    site_root: Path | None = None,
) -> list[ContentItem]:
    """List the items carrying ``tag``, newest first.

    An unknown tag gives an empty list. Identifiers are slugs relative to
    ``site_root`` (defaults to ``cfg.site_root``).
    """
    cfg = cfg or ContentConfig()
    site_root = Path(site_root) if site_root is not None else cfg.root_path

    identifiers = tagged.get(tag)
    if not identifiers:
        logger.debug("No items tagged %r", tag)
        return []

    items = []
    for identifier in identifiers:
        slug = identifier.strip("/")
        meta = resolver.resolve(slug)
        backing = find_backing_file(site_root, slug, cfg.extensions)
        rel = relative_path(backing, site_root) if backing is not None else slug
        items.append(
            ContentItem(
                path=rel,
                slug=slug,
                meta=meta,
                effective_date=effective_date(slug, meta, backing, cfg.date_format),
            )
        )
    return sort_by_date(items)


def sort_by_date(items: list[ContentItem]) -> list[ContentItem]:
    # sorted() is stable with reverse=True: ties keep enumeration order
    return sorted(items, key=lambda item: item.effective_date, reverse=True)


def effective_date(
    identifier: str,
    meta: PageMeta,
    backing_file: Path | None,
    date_format: str = "%d %B %Y",
) -> date:
    """Compute the date an item is ordered by."""
    if meta.published is not None:
        return parse_published(identifier, meta.published, date_format)
    if backing_file is None:
        raise MissingTimestampError(identifier)
    return creation_date(identifier, backing_file)


def parse_published(identifier: str, value: str, date_format: str = "%d %B %Y") -> date:
    """Parse a declared date such as ``"6 February 2026"``."""
    try:
        return datetime.strptime(value.strip(), date_format).date()
    except ValueError as exc:
        raise MalformedDateError(identifier, value, date_format) from exc


def creation_date(identifier: str, path: Path) -> date:
    """Creation date of ``path`` as a UTC calendar date.

    Uses the birth time where the platform records one, otherwise
    ``st_ctime``.
    """
    try:
        stat = os.stat(path)
    except OSError as exc:
        raise MissingTimestampError(identifier, str(path)) from exc
    timestamp = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date()
