"""
Command-line interface for site-feed.

Uses Typer to print the HTML fragments the page helpers produce, which is
handy for previewing a listing or for calling from shell glue.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from .config import AppConfig, load_config
from .core.errors import SiteFeedError
from .core.metadata import MetadataResolver, collect_tags, load_metadata_store
from .logging_utils import setup_logging
from .runner import blog_posts, show_refs, tag_list

app = typer.Typer(add_completion=False)
console = Console()
logger = logging.getLogger(__name__)


def _prepare(config: Path | None, root: Path | None, log_level: str | None) -> AppConfig:
    cfg = load_config(str(config) if config else None)
    if root is not None:
        cfg.content.site_root = str(root)
    if log_level:
        cfg.logging.level = log_level
    setup_logging(cfg.logging, cfg.content.root_path)
    return cfg


def _load_tagged(
    cfg: AppConfig, tags_file: Path | None
) -> tuple[dict[str, list[str]], MetadataResolver]:
    """Tag mapping plus a resolver, both from one read of the content tree."""
    store = load_metadata_store(
        cfg.content.root_path, cfg.content.content_path, cfg.content.extensions
    )
    if tags_file is None:
        return collect_tags(store), MetadataResolver(store)

    with open(tags_file, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{tags_file}: expected a mapping of tag -> page slugs")
    tagged = {}
    for tag_name, items in raw.items():
        if items is None:
            items = []
        elif isinstance(items, str):
            items = [items]
        if not isinstance(items, list):
            raise ValueError(f"{tags_file}: tag {tag_name!r} must list page slugs")
        tagged[str(tag_name)] = [str(item) for item in items]
    return tagged, MetadataResolver(store)


@app.command()
def posts(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    root: Path | None = typer.Option(None, "--root", "-r", help="Site root directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Print the blog listing fragment, newest post first."""
    cfg = _prepare(config, root, log_level)
    try:
        html = blog_posts(cfg)
    except SiteFeedError as exc:
        logger.debug("Listing failed", exc_info=True)
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    typer.echo(html)


@app.command()
def tag(
    name: str = typer.Argument(..., help="Tag to list."),
    tags_file: Path | None = typer.Option(
        None,
        "--tags-file",
        "-t",
        exists=True,
        help="YAML mapping of tag -> page slugs. Derived from page declarations if omitted.",
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    root: Path | None = typer.Option(None, "--root", "-r", help="Site root directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Print the listing fragment of the posts carrying a tag."""
    cfg = _prepare(config, root, log_level)
    try:
        tagged, resolver = _load_tagged(cfg, tags_file)
        html = tag_list(tagged, name, cfg, resolver=resolver)
    except (SiteFeedError, ValueError, yaml.YAMLError) as exc:
        logger.debug("Listing failed", exc_info=True)
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    typer.echo(html)


@app.command()
def tags(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    root: Path | None = typer.Option(None, "--root", "-r", help="Site root directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Show the tags declared by pages and how many pages carry each."""
    cfg = _prepare(config, root, log_level)
    store = load_metadata_store(
        cfg.content.root_path, cfg.content.content_path, cfg.content.extensions
    )
    resolver = MetadataResolver(store)
    table = Table(title="Tags")
    table.add_column("Tag")
    table.add_column("Pages", justify="right")
    table.add_column("Titles")
    for tag_name, slugs in sorted(collect_tags(store).items()):
        titles = ", ".join(resolver.resolve(slug).title or slug for slug in slugs)
        table.add_row(tag_name, str(len(slugs)), titles)
    console.print(table)


@app.command()
def refs(
    keys: list[str] = typer.Argument(..., help="Citation keys, in display order."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    root: Path | None = typer.Option(None, "--root", "-r", help="Site root directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Print the citation list fragment for the given keys."""
    cfg = _prepare(config, root, log_level)
    typer.echo(show_refs(keys, cfg))


if __name__ == "__main__":
    app()
