"""
Parser for BibTeX-style reference files.

The format handled here is the subset used for a personal bibliography::

    @article{stormo2020,
      author = {Stormo, Gary},
      title  = {Motif {Discovery}},
      year   = 2020,
    }

Field values may be braced (nested braces allowed), double-quoted or bare.
``@comment``, ``@string`` and ``@preamble`` blocks and any text between
entries are ignored. Parsing is resilient per entry: an entry that is
unterminated, lacks a required field or has an author that is not exactly
"Last, First" is dropped and the rest of the file is still parsed.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..core.types import CitationRecord

logger = logging.getLogger(__name__)

ENTRY_START_RE = re.compile(r"@\s*([A-Za-z]+)\s*([{(])")
NEXT_ENTRY_RE = re.compile(r"\n[ \t]*@")
FIELD_NAME_RE = re.compile(r"\s*([A-Za-z][\w\-:.]*)\s*=\s*")
REQUIRED_FIELDS = ("author", "title", "year")
IGNORED_ENTRY_TYPES = frozenset({"comment", "string", "preamble"})
_CLOSERS = {"{": "}", "(": ")"}


def parse_bibliography(text: str) -> dict[str, CitationRecord]:
    """Parse reference text into a mapping from citation key to record.

    Duplicate keys overwrite earlier ones.
    """
    bibliography: dict[str, CitationRecord] = {}
    pos = 0
    while True:
        match = ENTRY_START_RE.search(text, pos)
        if match is None:
            break
        entry_type = match.group(1).lower()
        body_start = match.end()
        body_end = _find_closing(text, body_start, match.group(2))
        # an entry starting a line always begins a new record
        next_entry = NEXT_ENTRY_RE.search(text, body_start)
        if body_end is None or (next_entry is not None and next_entry.start() < body_end):
            logger.debug("Dropping unterminated @%s entry at offset %d", entry_type, match.start())
            if next_entry is None:
                break
            pos = next_entry.start() + 1
            continue
        pos = body_end + 1

        if entry_type in IGNORED_ENTRY_TYPES:
            continue

        record = _build_record(entry_type, text[body_start:body_end])
        if record is not None:
            bibliography[record.key] = record

    return bibliography


def load_bibliography(path: Path) -> dict[str, CitationRecord]:
    """Read and parse the reference file at ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    bibliography = parse_bibliography(text)
    logger.debug("Parsed %d citations from %s", len(bibliography), path)
    return bibliography


def _build_record(entry_type: str, body: str) -> CitationRecord | None:
    key, sep, rest = body.partition(",")
    key = key.strip()
    if not key or not sep:
        logger.debug("Dropping @%s entry without key or fields", entry_type)
        return None

    fields = _parse_fields(rest)
    missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        logger.debug("Dropping %s: missing %s", key, ", ".join(missing))
        return None

    author = fields["author"]
    last, comma, first = author.partition(",")
    if not comma or "," in first or not last.strip() or not first.strip():
        logger.debug("Dropping %s: author %r is not 'Last, First'", key, author)
        return None

    return CitationRecord(
        key=key,
        author=author,
        title=fields["title"],
        year=fields["year"],
        entry_type=entry_type,
    )


def _parse_fields(text: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    pos = 0
    length = len(text)
    while pos < length:
        if text[pos] in ", \t\r\n":
            pos += 1
            continue
        match = FIELD_NAME_RE.match(text, pos)
        if match is None:
            # not "name =": skip to the next top-level comma
            pos = _skip_to_comma(text, pos)
            continue
        value, pos = _read_value(text, match.end())
        fields[match.group(1).lower()] = _clean(value)
    return fields


def _read_value(text: str, pos: int) -> tuple[str, int]:
    if pos >= len(text):
        return "", pos
    opener = text[pos]
    if opener == "{":
        end = _find_closing(text, pos + 1, "{")
        if end is None:
            return text[pos + 1 :], len(text)
        return text[pos + 1 : end], end + 1
    if opener == '"':
        depth = 0
        index = pos + 1
        while index < len(text):
            char = text[index]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
            elif char == '"' and depth == 0 and text[index - 1] != "\\":
                return text[pos + 1 : index], index + 1
            index += 1
        return text[pos + 1 :], len(text)
    end = _skip_to_comma(text, pos)
    return text[pos:end], end


def _find_closing(text: str, start: int, opener: str) -> int | None:
    """Index of the delimiter closing ``opener``, whose body begins at ``start``."""
    closer = _CLOSERS[opener]
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
        elif char == closer and depth == 0:
            return index
    return None


def _skip_to_comma(text: str, pos: int) -> int:
    depth = 0
    for index in range(pos, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "," and depth <= 0:
            return index
    return len(text)


def _clean(value: str) -> str:
    return " ".join(value.replace("{", "").replace("}", "").split())
