"""docindex - content-directory indexer for static site generators.

Crawls a directory of markdown files, parses their front-matter, derives
slugs and hrefs, and sorts/filters the resulting documents for a static
site build step.

Usage:
    from docindex import get_docs_by_path, get_doc_by_slug, compute_pagination

    posts = get_docs_by_path("blog", {"hideDrafts": True}, content_root="content")
    post = get_doc_by_slug("welcome", "blog", content_root="content")
    pagination = compute_pagination(len(posts), page=2)
"""

from docindex.content import (
    DocBatch,
    QueryOptions,
    collect_docs,
    compute_href_for_doc,
    crawl_for_files,
    get_date_by_priority,
    get_doc_by_slug,
    get_doc_meta_by_slug,
    get_docs_by_path,
    load_and_parse_doc,
    locate_file_path,
    sort_by_priority_date,
)
from docindex.domain import Document, Pagination, compute_pagination, filter_docs, paginate
from docindex.utils import generate_slug

__all__ = [
    "DocBatch",
    "Document",
    "Pagination",
    "QueryOptions",
    "collect_docs",
    "compute_href_for_doc",
    "compute_pagination",
    "crawl_for_files",
    "filter_docs",
    "generate_slug",
    "get_date_by_priority",
    "get_doc_by_slug",
    "get_doc_meta_by_slug",
    "get_docs_by_path",
    "load_and_parse_doc",
    "locate_file_path",
    "paginate",
    "sort_by_priority_date",
]

__version__ = "1.0.0"
