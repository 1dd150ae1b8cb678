"""Resolve a slug to a concrete file inside the content root."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from docindex.content.crawler import crawl_for_files, is_private, resolve_search_dir
from docindex.utils import generate_slug

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def _direct_guess(slug: str, search_dir: Path, root: Path) -> Path | None:
    if is_private(slug) or "/" in slug or "\\" in slug:
        return None
    guess = search_dir / f"{slug}{MARKDOWN_SUFFIX}"
    if guess.is_file() and guess.resolve().is_relative_to(root):
        return guess
    return None


def locate_file_path(
    slug: str,
    base_path: str | os.PathLike | None = "",
    content_root: str | os.PathLike = "content",
) -> Path | None:
    """Locate a file by its slug.

    Tries ``<base_path>/<slug>.md`` first, then crawls ``base_path`` and
    returns the first file whose derived slug matches. With duplicate slugs
    the first file in crawl order wins.

    Args:
        slug: Slug of the document to find
        base_path: Directory inside the content root to search
        content_root: Base content directory

    Returns:
        Path of the located file, or None if nothing matches
    """
    if not slug or not isinstance(slug, str):
        return None

    search_dir = resolve_search_dir(base_path, content_root)
    if search_dir is None:
        return None

    root = Path(content_root).resolve()
    guess = _direct_guess(slug, search_dir, root)
    if guess is not None:
        return guess

    files = crawl_for_files(search_dir, content_root) or []
    for file_path in files:
        if generate_slug(file_path) == slug:
            return file_path

    logger.debug("No file found for slug %r under %s", slug, search_dir)
    return None
