"""Content tree walking and slug helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator


def iter_content_files(
    root_dir: Path,
    extensions: Iterable[str],
    index_name: str | None = None,
) -> Iterator[Path]:
    """Yield content files under ``root_dir`` in a stable order.

    Directories and files are visited in sorted name order so repeated walks
    of an unchanged tree yield the same sequence. ``index_name`` is the
    listing page of its directory and is skipped at every depth.
    """
    suffixes = tuple(ext.lower() for ext in extensions)
    for current, dirs, files in os.walk(root_dir):
        dirs.sort()
        for name in sorted(files):
            if not name.lower().endswith(suffixes):
                continue
            if index_name is not None and name == index_name:
                continue
            yield Path(current) / name


def relative_path(path: Path, site_root: Path) -> str:
    return Path(os.path.relpath(path, site_root)).as_posix()


def slug_for(rel_path: str) -> str:
    """``blog/2026/post.md`` -> ``blog/2026/post``."""
    stem, _ = os.path.splitext(rel_path)
    return stem.replace(os.sep, "/").strip("/")


def find_backing_file(site_root: Path, slug: str, extensions: Iterable[str]) -> Path | None:
    """Return the first existing ``{slug}{ext}`` under ``site_root``."""
    for ext in extensions:
        candidate = site_root / f"{slug.strip('/')}{ext}"
        if candidate.is_file():
            return candidate
    return None
