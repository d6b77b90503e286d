"""
site-feed - content aggregation for a static site.

This package discovers blog posts, orders them by publish date, renders
listing fragments (all posts, or the posts carrying one tag) and renders
citation lists from a BibTeX-style reference file.

Page templates call the helpers in ``site_feed.runner``; the same fragments
can be printed with the CLI.

Example:
    $ site-feed posts --root site/
    $ site-feed refs stormo2020 --root site/
"""

__all__ = [
    "__version__",
    "MetadataResolver",
    "list_posts",
    "list_by_tag",
    "render_listing",
    "parse_bibliography",
    "render_citations",
]
__version__ = "0.1.0"

from .bibliography.parser import parse_bibliography
from .core.metadata import MetadataResolver
from .listing.discovery import list_by_tag, list_posts
from .output.renderer import render_citations, render_listing
