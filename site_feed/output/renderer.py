"""HTML fragment rendering for listings and citations."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.types import CitationRecord, ContentItem

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
UNDATED_DISPLAY_MODES = ("today", "effective")


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
    )


def render_listing(
    items: Iterable[ContentItem],
    *,
    list_class: str = "blog-posts",
    undated_display: str = "today",
    today: date | None = None,
) -> str:
    """Render items, in the given order, as one ``<ul>`` fragment.

    Undated items show today's date when ``undated_display`` is "today" and
    their effective (sort) date when it is "effective". The order is never
    changed here.
    """
    if undated_display not in UNDATED_DISPLAY_MODES:
        raise ValueError(
            f"Unsupported undated_display: {undated_display}. "
            f"Supported: {', '.join(UNDATED_DISPLAY_MODES)}"
        )
    today = today or date.today()

    entries = []
    for item in items:
        if item.declared_date or undated_display == "effective":
            shown = item.effective_date
        else:
            shown = today
        entries.append({"date": shown.isoformat(), "url": item.url, "title": item.meta.title})

    template = _environment().get_template("listing.html")
    return template.render(list_class=list_class, entries=entries)


def render_citation(record: CitationRecord) -> str:
    """Render one record as ``<li>First Last, <i>Title</i>, Year.</li>``."""
    return _environment().get_template("citation.html").render(record=record)


def render_citations(
    bibliography: Mapping[str, CitationRecord],
    ordered_keys: Sequence[str],
) -> str:
    """Render the requested keys, in request order; unknown keys are skipped."""
    records = []
    for key in ordered_keys:
        record = bibliography.get(key)
        if record is None:
            logger.debug("Citation key not found: %s", key)
            continue
        records.append(record)
    return _environment().get_template("citations.html").render(records=records)
