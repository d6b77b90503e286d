"""
Per-page metadata store and resolver.

Each content page declares its own attributes, either as YAML front matter::

    ---
    title: Motif discovery
    published: 6 February 2026
    tags: [devops]
    ---

or as Franklin-style page variables anywhere in the file::

    @def title = "Motif discovery"
    @def published = "6 February 2026"
    @def tags = ["devops"]

``load_metadata_store`` reads those declarations into a plain mapping keyed
by slug, and ``MetadataResolver`` answers lookups against it.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Iterable, Mapping

import frontmatter
import yaml

from .paths import iter_content_files, relative_path, slug_for
from .types import PageMeta

logger = logging.getLogger(__name__)

DEF_RE = re.compile(r"^@def\s+([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.+?)\s*$")

MetadataStore = Mapping[str, Mapping[str, Any]]


class MetadataResolver:
    """Resolve declared attributes of content items by slug.

    Absence is never an error: unknown slugs and undeclared fields come back
    as an empty title and a ``None`` publish date.
    """

    def __init__(self, store: MetadataStore):
        self._store = store

    def resolve(self, identifier: str) -> PageMeta:
        declared = self._store.get(identifier.strip("/"), {})
        title = declared.get("title")
        published = declared.get("published")
        return PageMeta(
            title="" if title is None else str(title),
            published=None if published is None else str(published),
            tags=_as_tags(declared.get("tags")),
        )


def parse_declarations(text: str) -> dict[str, Any]:
    """Extract page declarations from the raw text of a content file."""
    if text.startswith("---"):
        try:
            parsed = frontmatter.loads(text)
        except (yaml.YAMLError, ValueError) as exc:
            logger.warning("Failed to parse front matter: %s", exc)
            return {}
        metadata = parsed.metadata or {}
        return dict(metadata) if isinstance(metadata, dict) else {}

    declarations: dict[str, Any] = {}
    for line in text.splitlines():
        match = DEF_RE.match(line)
        if not match:
            continue
        name, raw_value = match.group(1), match.group(2)
        declarations[name] = _parse_def_value(raw_value)
    return declarations


def load_metadata_store(
    site_root: Path,
    content_dir: Path,
    extensions: Iterable[str] = (".md",),
) -> dict[str, dict[str, Any]]:
    """Read declarations of every content file under ``content_dir``.

    Keys are slugs relative to ``site_root``; index pages are included so
    their own variables can be looked up too.
    """
    store: dict[str, dict[str, Any]] = {}
    if not content_dir.is_dir():
        logger.warning("Content directory not found: %s", content_dir)
        return store

    for path in iter_content_files(content_dir, extensions):
        with path.open("r", encoding="utf-8") as handle:
            text = handle.read()
        store[slug_for(relative_path(path, site_root))] = parse_declarations(text)

    logger.debug("Loaded declarations for %d pages from %s", len(store), content_dir)
    return store


def collect_tags(store: MetadataStore) -> dict[str, list[str]]:
    """Build a tag -> slugs mapping from ``tags`` declarations."""
    tagged: dict[str, list[str]] = {}
    for slug in sorted(store):
        for tag in _as_tags(store[slug].get("tags")):
            tagged.setdefault(tag, []).append(slug)
    return tagged


def _parse_def_value(raw: str) -> Any:
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw.strip('"')


def _as_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(tag.strip() for tag in value.split(",") if tag.strip())
    if isinstance(value, (list, tuple)):
        return tuple(str(tag).strip() for tag in value if str(tag).strip())
    return (str(value),)
