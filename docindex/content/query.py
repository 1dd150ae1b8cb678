"""Query a content directory: crawl, load, hide drafts, sort and filter."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from docindex.content.crawler import crawl_for_files
from docindex.content.dates import date_to_unix_timestamp, get_date_by_priority
from docindex.content.loader import LoadOutcome, load_and_parse_doc, try_load_doc
from docindex.content.locator import locate_file_path
from docindex.domain.document import Document
from docindex.domain.filters import FieldFilter, apply_filters, compile_filters
from docindex.exceptions import ConfigurationError, DocIndexError, NotFoundError, ValidationFailure

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")

_slug_suffix_re = re.compile(r"\.(md|mdx|html?)$", re.IGNORECASE)

# Keys accepted from JSON/YAML option mappings, mirroring front-end naming.
_OPTION_ALIASES = {
    "hideDrafts": "hide_drafts",
    "metaOnly": "meta_only",
}


@dataclass(frozen=True)
class QueryOptions:
    """Options for a collection query.

    Attributes:
        hide_drafts: Exclude ``draft: true`` documents (only in production)
        production: Whether this is a production build
        filters: Filter predicate mapping, or None for no filtering
        meta_only: Skip loading body content
        order: "desc" (newest first) or "asc"
        limit: Maximum number of documents to return (0 for no limit)
    """

    hide_drafts: bool = False
    production: bool = False
    filters: Mapping[str, Any] | None = None
    meta_only: bool = True
    order: str = "desc"
    limit: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, **overrides: Any) -> "QueryOptions":
        """Build options from a plain mapping (camelCase keys accepted).

        Unknown keys are logged and ignored.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                logger.warning("Ignoring unknown query option: %s", key)
                continue
            values[name] = value
        values.update(overrides)
        if values.get("filters") is False:
            values["filters"] = None
        return cls(**values)


@dataclass
class DocBatch:
    """Outcome of a collection query.

    ``error`` is set when the query itself failed (missing search path,
    invalid filter), which is distinct from a query that matched nothing.
    """

    docs: list[Document] = field(default_factory=list)
    skipped: list[LoadOutcome] = field(default_factory=list)
    error: DocIndexError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _priority_key(doc: Document) -> tuple[bool, int]:
    timestamp = date_to_unix_timestamp(get_date_by_priority(doc.meta))
    # Documents without any valid date sort as the oldest.
    return (timestamp is not None, timestamp or 0)


def sort_by_priority_date(docs: Iterable[Document], order: str = "desc") -> list[Document]:
    """Stable sort by priority date, newest first for "desc" and oldest first for "asc".

    Raises:
        ConfigurationError: If ``order`` is not one of SORT_ORDERS
    """
    if order not in SORT_ORDERS:
        raise ConfigurationError(f"order must be one of {SORT_ORDERS}", item=order)
    return sorted(docs, key=_priority_key, reverse=order == "desc")


def is_visible(doc: Document, hide_drafts: bool = False, production: bool = False) -> bool:
    """Drafts are only hidden when both hiding is requested and this is production."""
    return not (doc.is_draft and hide_drafts and production)


def collect_docs(
    search_path: str | os.PathLike | None = "",
    options: QueryOptions | None = None,
    content_root: str | os.PathLike = "content",
) -> DocBatch:
    """Crawl ``search_path`` and return its documents, sorted and filtered.

    Every file is loaded independently; files that fail to load are
    recorded in ``skipped`` and never abort the batch.

    Args:
        search_path: Directory inside the content root to list
        options: Query options (defaults to QueryOptions())
        content_root: Base content directory

    Returns:
        DocBatch with the ordered documents
    """
    options = options or QueryOptions()
    if options.order not in SORT_ORDERS:
        return DocBatch(error=ConfigurationError(f"order must be one of {SORT_ORDERS}", item=options.order))

    compiled: list[FieldFilter] = []
    if options.filters:
        try:
            compiled = compile_filters(options.filters)
        except ValidationFailure as exc:
            return DocBatch(error=exc)

    files = crawl_for_files(search_path, content_root)
    if files is None:
        return DocBatch(error=NotFoundError("search path not found", item=search_path))

    batch = DocBatch()
    for file_path in files:
        outcome = try_load_doc(file_path, options.meta_only, search_path, content_root)
        if outcome.error is not None:
            logger.warning("Unable to parse doc: %s", outcome.error)
            batch.skipped.append(outcome)
            continue
        if is_visible(outcome.document, options.hide_drafts, options.production):
            batch.docs.append(outcome.document)

    batch.docs = sort_by_priority_date(batch.docs, options.order)
    if compiled or options.limit:
        batch.docs = apply_filters(batch.docs, compiled, options.limit)
    return batch


def get_docs_by_path(
    search_path: str | os.PathLike | None = "",
    options: QueryOptions | Mapping[str, Any] | None = None,
    content_root: str | os.PathLike = "content",
) -> list[Document]:
    """Retrieve the documents under ``search_path``, newest first.

    Returns:
        The documents; an empty list when nothing matched or the query failed
    """
    if options is not None and not isinstance(options, (QueryOptions, Mapping)):
        logger.warning("Query options must be a mapping: %r", options)
        return []
    if not isinstance(options, QueryOptions):
        options = QueryOptions.from_mapping(options)

    batch = collect_docs(search_path, options, content_root)
    if batch.error is not None:
        logger.warning("Unable to query documents: %s", batch.error)
    return batch.docs


def get_doc_by_slug(
    slug: str,
    base_path: str | os.PathLike | None = "",
    production: bool = False,
    content_root: str | os.PathLike = "content",
) -> Document | None:
    """Retrieve a single document, with its content, by slug.

    Args:
        slug: Slug (or file name) of the document; a trailing .md, .mdx or
            .html is ignored
        base_path: Directory inside the content root to search
        production: Whether this is a production build (drafts are hidden)
        content_root: Base content directory

    Returns:
        Document, or None when it cannot be found or loaded, or is a draft
        in a production build
    """
    if not slug or not isinstance(slug, str):
        logger.warning("Slug is not a string: %r", slug)
        return None

    slug = _slug_suffix_re.sub("", slug)
    if not slug:
        logger.warning("No slug provided")
        return None

    file_path = locate_file_path(slug, base_path, content_root)
    if file_path is None:
        logger.warning("Unable to locate document: %s", slug)
        return None

    doc = load_and_parse_doc(file_path, False, base_path, content_root)
    if doc is None:
        return None
    if doc.is_draft and production:
        logger.debug("Hiding draft document in production: %s", slug)
        return None
    return doc


def get_doc_meta_by_slug(
    slug: str,
    base_path: str | os.PathLike | None = "",
    production: bool = False,
    content_root: str | os.PathLike = "content",
) -> Document | None:
    """Like get_doc_by_slug, with the body content cleared."""
    doc = get_doc_by_slug(slug, base_path, production, content_root)
    if doc is None:
        return None
    return replace(doc, content="")
