"""Errors raised while building listings."""

from __future__ import annotations


class SiteFeedError(Exception):
    """Base class for site-feed errors."""


class MalformedDateError(SiteFeedError, ValueError):
    """A declared ``published`` value does not match the date format."""

    def __init__(self, identifier: str, value: str, date_format: str):
        self.identifier = identifier
        self.value = value
        self.date_format = date_format
        super().__init__(
            f"{identifier}: published date {value!r} does not match {date_format!r}"
        )


class MissingTimestampError(SiteFeedError):
    """An undated item has no backing file to take a creation date from."""

    def __init__(self, identifier: str, path: str | None = None):
        self.identifier = identifier
        self.path = path
        where = f" ({path})" if path else ""
        super().__init__(f"{identifier}: no backing file to read a creation date from{where}")
