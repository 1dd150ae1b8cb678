"""Recursive discovery of content files under the content root."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

PRIVATE_PREFIX = "_"


def is_private(name: str) -> bool:
    """Names starting with ``_`` (includes, draft templates) are never published."""
    return name.startswith(PRIVATE_PREFIX)


def resolve_search_dir(dir_name: str | os.PathLike | None, content_root: str | os.PathLike) -> Path | None:
    """Anchor ``dir_name`` inside the content root.

    Relative names are joined onto the root; absolute names are kept only
    when they already live under it, otherwise they are re-rooted there.

    Returns:
        The resolved directory, or None when it would escape the root
    """
    root = Path(content_root).resolve()
    name = os.fspath(dir_name) if dir_name else ""

    candidate = Path(name)
    if candidate.is_absolute():
        resolved = candidate.resolve()
        if not resolved.is_relative_to(root):
            resolved = (root / candidate.relative_to(candidate.anchor)).resolve()
    else:
        resolved = (root / candidate).resolve()

    if not resolved.is_relative_to(root):
        logger.warning("Refusing to search outside the content root: %s", name)
        return None
    return resolved


def _walk(directory: Path, root: Path, files: list[Path], visited: set[str]) -> None:
    real = os.path.realpath(directory)
    if real in visited:
        logger.debug("Skipping already visited directory: %s", directory)
        return
    visited.add(real)

    try:
        with os.scandir(directory) as listing:
            entries = sorted(listing, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning("Unable to list directory %s: %s", directory, exc)
        return

    for entry in entries:
        if is_private(entry.name):
            continue

        pointer = Path(entry.path)
        if not Path(os.path.realpath(pointer)).is_relative_to(root):
            logger.warning("Skipping link outside the content root: %s", pointer)
            continue

        try:
            if entry.is_dir():
                _walk(pointer, root, files, visited)
            elif entry.is_file():
                files.append(pointer)
        except OSError as exc:
            logger.warning("Unable to inspect %s: %s", pointer, exc)


def crawl_for_files(
    dir_name: str | os.PathLike | None = "",
    content_root: str | os.PathLike = "content",
) -> list[Path] | None:
    """Crawl a directory for every publishable file beneath it.

    No extension filtering happens here; callers that only want markdown
    must filter the result. Symlinks are followed only while their target
    stays inside the content root, and each real directory is visited once
    so cyclic trees terminate.

    Args:
        dir_name: Directory to crawl, relative to the content root
        content_root: Base content directory every search is confined to

    Returns:
        File paths in directory order, or None if the directory is missing
        or outside the content root
    """
    directory = resolve_search_dir(dir_name, content_root)
    if directory is None:
        return None

    if not directory.is_dir():
        logger.debug("Search directory not found: %s", directory)
        return None

    files: list[Path] = []
    _walk(directory, Path(content_root).resolve(), files, set())
    return files
