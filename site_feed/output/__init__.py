"""HTML fragment rendering helpers."""

from .renderer import render_citation, render_citations, render_listing

__all__ = [
    "render_citation",
    "render_citations",
    "render_listing",
]
