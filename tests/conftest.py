"""Shared fixtures: a small site tree on disk."""

from pathlib import Path

import pytest


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Site root with a blog folder, an index page and a bibliography."""
    write(tmp_path / "blog" / "index.md", '@def title = "Blog"\n\n{{blogposts}}\n')
    write(
        tmp_path / "blog" / "kubernetes.md",
        '@def title = "Kubernetes at home"\n'
        '@def published = "6 February 2026"\n'
        '@def tags = ["devops", "homelab"]\n\n'
        "# Kubernetes at home\n",
    )
    write(
        tmp_path / "blog" / "2025" / "ci.md",
        "---\n"
        "title: CI pipelines\n"
        "published: 25 November 2025\n"
        "tags: [devops]\n"
        "---\n\n"
        "Body\n",
    )
    write(
        tmp_path / "blog" / "2025" / "terraform.md",
        '@def title = "Terraform & friends"\n'
        '@def published = "15 November 2025"\n'
        '@def tags = ["devops"]\n',
    )
    write(
        tmp_path / "_assets" / "bibex.bib",
        "% references\n"
        "@article{stormo2020,\n"
        "  author = {Stormo, Gary},\n"
        "  title = {Motif Discovery},\n"
        "  year = {2020},\n"
        "}\n"
        "@book{knuth1984,\n"
        '  author = "Knuth, Donald",\n'
        "  title = {The {TeX}book},\n"
        "  year = 1984\n"
        "}\n",
    )
    return tmp_path
