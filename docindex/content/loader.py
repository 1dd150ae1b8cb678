"""Load markdown files into normalized Document records."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from docindex.content.dates import file_timestamps, to_iso
from docindex.domain.document import Document
from docindex.exceptions import ParseFailure
from docindex.utils import generate_slug

logger = logging.getLogger(__name__)

TAG_DELIMITER = ","


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    """Result of loading one file in a batch.

    Exactly one of ``document`` and ``error`` is set.
    """

    path: Path
    document: Document | None = None
    error: ParseFailure | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into (metadata, body).

    Raises:
        ParseFailure: If the front-matter block is malformed or not a mapping
    """
    try:
        post = frontmatter.loads(text)
    except (yaml.YAMLError, ValueError) as exc:
        raise ParseFailure(f"malformed front-matter ({exc})") from exc

    if not isinstance(post.metadata, Mapping):
        raise ParseFailure("front-matter is not a mapping")
    return dict(post.metadata), post.content


def normalize_tags(value: Any) -> list[str] | None:
    """Turn a tag list or comma-separated string into trimmed tokens."""
    if value is None or value is False:
        return None
    if isinstance(value, (list, tuple)):
        tokens = [str(item).strip() for item in value if item is not None]
    else:
        tokens = [token.strip() for token in str(value).split(TAG_DELIMITER)]
    tokens = [token for token in tokens if token]
    return tokens or None


def normalize_meta(meta: dict[str, Any], stats: os.stat_result) -> dict[str, Any]:
    """Normalize the date and tag fields of raw front-matter in place."""
    created, modified = file_timestamps(stats)

    # Front-matter never overrides createdAt.
    meta["createdAt"] = created.isoformat()

    if meta.get("date"):
        normalized = to_iso(meta["date"])
        if normalized is None:
            raise ParseFailure(f"invalid date {meta['date']!r}")
        meta["date"] = normalized

    # updatedAt: false suppresses the override and falls back to the mtime.
    updated = meta.get("updatedAt")
    normalized_updated = None
    if updated is not False and updated not in (None, ""):
        normalized_updated = to_iso(updated)
    meta["updatedAt"] = normalized_updated or modified.isoformat()

    if "tags" in meta:
        tags = normalize_tags(meta["tags"])
        if tags:
            meta["tags"] = tags
        else:
            del meta["tags"]

    return meta


def _relative_route_path(path: str | os.PathLike, content_root: str | os.PathLike | None) -> str:
    file_path = Path(path)
    if content_root is not None:
        try:
            return file_path.resolve().relative_to(Path(content_root).resolve()).as_posix()
        except ValueError:
            pass
    return file_path.as_posix().lstrip("/")


def _base_route_path(base_path: str | os.PathLike | None, content_root: str | os.PathLike | None) -> str:
    if not base_path:
        return ""
    base = Path(base_path)
    if base.is_absolute() and content_root is not None:
        try:
            base = base.resolve().relative_to(Path(content_root).resolve())
        except ValueError:
            pass
    posix = base.as_posix().strip("/")
    return "" if posix == "." else posix


def compute_href_for_doc(
    doc: Document,
    base_path: str | os.PathLike | None = "",
    content_root: str | os.PathLike | None = None,
) -> str:
    """Compute the absolute href of a document.

    The route keeps the file path from the base path onward, cut where the
    slug first appears, so ``blog/2024/welcome.md`` found under ``blog``
    becomes ``/blog/2024/welcome``. A slug that also occurs in an ancestor
    directory name cuts the route early.

    Args:
        doc: Loaded document (needs ``path`` and ``slug``)
        base_path: Base path used to locate the document
        content_root: Content root the path is made relative to

    Returns:
        The href, always starting with ``/``
    """
    href = _relative_route_path(doc.path, content_root)

    base = _base_route_path(base_path, content_root)
    start = href.find(base) if base else 0
    if start >= 0:
        href = href[start:]

    cut = href.find(doc.slug)
    prefix = href[:cut] if cut >= 0 else ""
    return f"/{prefix}{doc.slug}"


def parse_doc(
    file_path: str | os.PathLike,
    meta_only: bool = False,
    base_path: str | os.PathLike | None = "",
    content_root: str | os.PathLike | None = None,
) -> Document:
    """Load and parse a file, raising on failure.

    Raises:
        ParseFailure: If the file cannot be read or parsed
    """
    path = Path(file_path)
    try:
        stats = path.stat()
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseFailure(f"unable to read file ({exc})", item=path) from exc

    try:
        meta, body = split_front_matter(text)
        meta = normalize_meta(meta, stats)
    except ParseFailure as exc:
        exc.item = path
        raise

    slug = generate_slug(path)
    if not slug:
        raise ParseFailure("unable to derive a slug", item=path)
    meta["slug"] = slug

    doc = Document(
        path=str(path),
        slug=slug,
        meta=meta,
        content=None if meta_only else body,
    )
    return replace(doc, href=compute_href_for_doc(doc, base_path, content_root))


def try_load_doc(
    file_path: str | os.PathLike,
    meta_only: bool = False,
    base_path: str | os.PathLike | None = "",
    content_root: str | os.PathLike | None = None,
) -> LoadOutcome:
    """Load a file into a LoadOutcome, never raising ParseFailure."""
    path = Path(file_path)
    try:
        return LoadOutcome(path=path, document=parse_doc(path, meta_only, base_path, content_root))
    except ParseFailure as exc:
        return LoadOutcome(path=path, error=exc)


def load_and_parse_doc(
    file_path: str | os.PathLike,
    meta_only: bool = False,
    base_path: str | os.PathLike | None = "",
    content_root: str | os.PathLike | None = None,
) -> Document | None:
    """Load and parse a markdown file, ready for the build step.

    Args:
        file_path: Path to the file to load
        meta_only: Skip the body and only keep the metadata
        base_path: Base path used for the href
        content_root: Content root the href is relative to

    Returns:
        Document, or None if the file could not be read or parsed
    """
    outcome = try_load_doc(file_path, meta_only, base_path, content_root)
    if outcome.error is not None:
        logger.warning("Unable to parse file: %s", outcome.error)
    return outcome.document
