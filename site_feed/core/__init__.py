"""
Core domain models and page metadata.

This package contains data types, errors and metadata lookup that are
shared by discovery, rendering and the bibliography.
"""

from .errors import MalformedDateError, MissingTimestampError, SiteFeedError
from .metadata import MetadataResolver, collect_tags, load_metadata_store, parse_declarations
from .types import CitationRecord, ContentItem, PageMeta, TaggedSet

__all__ = [
    "CitationRecord",
    "ContentItem",
    "PageMeta",
    "TaggedSet",
    "SiteFeedError",
    "MalformedDateError",
    "MissingTimestampError",
    "MetadataResolver",
    "collect_tags",
    "load_metadata_store",
    "parse_declarations",
]
