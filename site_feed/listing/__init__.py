"""Post discovery and tag listings."""

from .discovery import (
    creation_date,
    effective_date,
    list_by_tag,
    list_posts,
    parse_published,
    sort_by_date,
)

__all__ = [
    "list_posts",
    "list_by_tag",
    "effective_date",
    "parse_published",
    "creation_date",
    "sort_by_date",
]
