from __future__ import annotations

import os
import re
import unicodedata
from collections.abc import Mapping


_slug_re = re.compile(r"[^a-z0-9\s._~-]")
_space_re = re.compile(r"\s+")
_dash_re = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Lowercase ASCII slug; dots survive so a file extension can be stripped."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = normalized.strip().lower()
    normalized = _slug_re.sub("", normalized)
    normalized = _space_re.sub("-", normalized)
    normalized = _dash_re.sub("-", normalized)
    return normalized.strip("-")


def _slug_source(item: object) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, os.PathLike):
        return os.fspath(item)
    if isinstance(item, Mapping):
        path = item.get("path")
    else:
        path = getattr(item, "path", None)
    if isinstance(path, (str, os.PathLike)):
        return os.fspath(path)
    return ""


def generate_slug(item: object) -> str:
    """Derive the canonical slug for a file path, string, or document.

    Only the final path segment is used, and only the last extension is
    removed, so ``notes.md.bak`` becomes ``notes.md``.

    Returns:
        The slug, or an empty string when nothing usable was given.
    """
    source = _slug_source(item)
    if not source:
        return ""

    segment = re.split(r"[\\/]", source)[-1]
    slug = slugify(segment)

    if "." in slug:
        slug = slug[: slug.rindex(".")] or slug
    return slug.strip("-.")
