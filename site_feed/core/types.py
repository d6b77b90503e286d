"""
Core data types for site-feed.

This module defines the fundamental data structures shared by discovery,
rendering and the bibliography:
- PageMeta: Declared attributes of one content page
- ContentItem: A discovered page with its effective (sort) date
- CitationRecord: One accepted bibliography entry
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Sequence


# tag name -> item identifiers (slugs), owned by the caller
TaggedSet = Mapping[str, Sequence[str]]


@dataclass(frozen=True)
class PageMeta:
    """Declared attributes of a content page.

    Attributes:
        title: Declared title, empty string when the page declares none
        published: Declared publish date text ("6 February 2026"), or None
        tags: Declared tags, in declaration order
    """

    title: str = ""
    published: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ContentItem:
    """A discovered content page.

    Attributes:
        path: Backing file path relative to the site root (POSIX separators)
        slug: ``path`` without extension, with surrounding ``/`` trimmed
        meta: Resolved declarations for ``slug``
        effective_date: Date used for ordering
    """

    path: str
    slug: str
    meta: PageMeta
    effective_date: date

    @property
    def url(self) -> str:
        return f"/{self.slug}/"

    @property
    def declared_date(self) -> bool:
        return self.meta.published is not None


@dataclass(frozen=True)
class CitationRecord:
    """An accepted bibliography entry.

    ``author`` always holds exactly one comma ("Last, First"); the parser
    rejects anything else.
    """

    key: str
    author: str
    title: str
    year: str
    entry_type: str = "misc"

    @property
    def last_name(self) -> str:
        return self.author.split(",", 1)[0].strip()

    @property
    def first_name(self) -> str:
        return self.author.split(",", 1)[1].strip()
