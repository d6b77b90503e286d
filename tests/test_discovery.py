"""Tests for post discovery and tag filtering."""

from datetime import date
from pathlib import Path

import pytest

from site_feed.config import ContentConfig
from site_feed.core.errors import MalformedDateError, MissingTimestampError
from site_feed.core.metadata import MetadataResolver, load_metadata_store
from site_feed.listing.discovery import (
    creation_date,
    list_by_tag,
    list_posts,
    parse_published,
)


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_list_posts_orders_newest_first(site: Path):
    """Posts should be sorted by declared publish date, descending"""
    resolver = MetadataResolver(load_metadata_store(site, site / "blog"))

    items = list_posts(site / "blog", resolver)

    assert [item.slug for item in items] == [
        "blog/kubernetes",
        "blog/2025/ci",
        "blog/2025/terraform",
    ]
    assert [item.effective_date for item in items] == [
        date(2026, 2, 6),
        date(2025, 11, 25),
        date(2025, 11, 15),
    ]
    assert items[1].path == "blog/2025/ci.md"
    assert items[1].url == "/blog/2025/ci/"


def test_list_posts_excludes_index_pages_at_every_depth(tmp_path: Path):
    """Index pages list their folder and are never entries themselves"""
    _write(tmp_path / "blog" / "index.md")
    _write(tmp_path / "blog" / "series" / "index.md")
    _write(tmp_path / "blog" / "series" / "part1.md")
    _write(tmp_path / "blog" / "notes.txt")
    store = {
        "blog/series/index": {"published": "1 March 2024"},
        "blog/series/part1": {"published": "2 March 2024"},
    }

    items = list_posts(tmp_path / "blog", MetadataResolver(store))

    assert [item.slug for item in items] == ["blog/series/part1"]


def test_list_posts_is_deterministic_with_ties(tmp_path: Path):
    """Equal dates keep enumeration order across repeated calls"""
    for name in ("c", "a", "b"):
        _write(tmp_path / "blog" / f"{name}.md")
    store = {f"blog/{name}": {"published": "1 May 2025"} for name in ("a", "b", "c")}
    resolver = MetadataResolver(store)

    first = list_posts(tmp_path / "blog", resolver)
    second = list_posts(tmp_path / "blog", resolver)

    assert [item.slug for item in first] == ["blog/a", "blog/b", "blog/c"]
    assert first == second


def test_undated_post_uses_file_creation_date(tmp_path: Path):
    """Without a declared date the file's creation date is the sort key"""
    post = _write(tmp_path / "blog" / "undated.md")
    _write(tmp_path / "blog" / "old.md")
    _write(tmp_path / "blog" / "future.md")
    store = {
        "blog/old": {"published": "1 January 2000"},
        "blog/future": {"published": "1 January 2100"},
    }

    items = list_posts(tmp_path / "blog", MetadataResolver(store))

    assert [item.slug for item in items] == ["blog/future", "blog/undated", "blog/old"]
    assert items[1].effective_date == creation_date("blog/undated", post)
    assert not items[1].declared_date


def test_unrelated_metadata_does_not_change_creation_date(tmp_path: Path):
    """Titles and tags have no influence on the inferred date"""
    _write(tmp_path / "blog" / "post.md")
    bare = list_posts(tmp_path / "blog", MetadataResolver({}))
    decorated = list_posts(
        tmp_path / "blog",
        MetadataResolver({"blog/post": {"title": "Renamed", "tags": ["x"]}}),
    )

    assert bare[0].effective_date == decorated[0].effective_date


def test_malformed_published_date_is_fatal(tmp_path: Path):
    """A declared date in the wrong format must be surfaced"""
    _write(tmp_path / "blog" / "bad.md")
    resolver = MetadataResolver({"blog/bad": {"published": "2026-02-06"}})

    with pytest.raises(MalformedDateError) as excinfo:
        list_posts(tmp_path / "blog", resolver)

    assert excinfo.value.identifier == "blog/bad"
    assert excinfo.value.value == "2026-02-06"


def test_parse_published_accepts_unpadded_day():
    """Dates are authored as 'day MonthName year'"""
    assert parse_published("x", "6 February 2026") == date(2026, 2, 6)
    assert parse_published("x", "25 November 2025") == date(2025, 11, 25)


def test_custom_extensions_and_index(tmp_path: Path):
    """Content suffixes and the index name come from configuration"""
    _write(tmp_path / "posts" / "home.html")
    _write(tmp_path / "posts" / "a.html")
    _write(tmp_path / "posts" / "b.md")
    cfg = ContentConfig(extensions=[".html"], index_name="home.html")
    resolver = MetadataResolver({"posts/a": {"published": "2 June 2024"}})

    items = list_posts(tmp_path / "posts", resolver, cfg)

    assert [item.slug for item in items] == ["posts/a"]


def test_list_by_tag_orders_by_date():
    """Tagged items are returned newest first"""
    store = {
        "blog/a": {"published": "6 February 2026"},
        "blog/b": {"published": "15 November 2025"},
        "blog/c": {"published": "25 November 2025"},
    }
    tagged = {"devops": ["blog/a", "blog/b", "blog/c"]}

    items = list_by_tag(tagged, "devops", MetadataResolver(store))

    assert [item.effective_date for item in items] == [
        date(2026, 2, 6),
        date(2025, 11, 25),
        date(2025, 11, 15),
    ]


def test_list_by_tag_leaves_tagged_set_untouched():
    """The caller's tag mapping is read, never reordered"""
    store = {
        "blog/old": {"published": "1 January 2020"},
        "blog/new": {"published": "1 January 2026"},
        "blog/mid": {"published": "1 January 2023"},
    }
    identifiers = ["blog/old", "blog/new", "blog/mid"]
    tagged = {"devops": identifiers}

    items = list_by_tag(tagged, "devops", MetadataResolver(store))

    assert [item.slug for item in items] == ["blog/new", "blog/mid", "blog/old"]
    assert identifiers == ["blog/old", "blog/new", "blog/mid"]
    assert tagged == {"devops": ["blog/old", "blog/new", "blog/mid"]}


def test_list_by_tag_unknown_tag_is_empty():
    """A tag nobody carries yields an empty listing"""
    assert list_by_tag({"devops": ["blog/a"]}, "rust", MetadataResolver({})) == []


def test_list_by_tag_uses_backing_file_for_undated(tmp_path: Path):
    """Undated tagged items fall back to their file's creation date"""
    post = _write(tmp_path / "blog" / "post.md")

    items = list_by_tag(
        {"misc": ["blog/post"]}, "misc", MetadataResolver({}), site_root=tmp_path
    )

    assert items[0].path == "blog/post.md"
    assert items[0].effective_date == creation_date("blog/post", post)


def test_list_by_tag_missing_file_without_date_is_fatal(tmp_path: Path):
    """No declared date and no backing file leaves nothing to sort by"""
    with pytest.raises(MissingTimestampError):
        list_by_tag({"misc": ["blog/gone"]}, "misc", MetadataResolver({}), site_root=tmp_path)
