"""Pytest configuration for docindex tests."""

import os
from pathlib import Path

import pytest

# 2020-01-01T00:00:00Z
OLD_MTIME = 1577836800


@pytest.fixture
def content_root(tmp_path) -> Path:
    root = tmp_path / "content"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def make_doc(content_root):
    """Write a markdown file (with optional front-matter) under the content root."""

    def _make(rel_path: str, front_matter: str = "", body: str = "Body text.\n", mtime: float | None = None) -> Path:
        path = content_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        text = f"---\n{front_matter.strip()}\n---\n{body}" if front_matter else body
        path.write_text(text, encoding="utf-8")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def blog(make_doc, content_root):
    """Three blog posts: dated 2024-06-01, a 2023-01-01 draft, and an undated post."""
    make_doc(
        "blog/welcome.md",
        "title: Welcome\ndate: 2024-06-01\ncategory: news\ntags: intro, news",
    )
    make_doc(
        "blog/older-post.md",
        "title: Older Post\ndate: 2023-01-01\ndraft: true\ntags:\n  - archive\n  - news",
    )
    make_doc(
        "blog/undated.md",
        "title: Undated\nupdatedAt: false",
        mtime=OLD_MTIME,
    )
    return content_root
