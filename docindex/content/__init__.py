"""Content tree access: crawl, locate, load and query markdown documents."""

from docindex.content.crawler import crawl_for_files
from docindex.content.dates import date_to_unix_timestamp, get_date_by_priority, to_iso
from docindex.content.loader import LoadOutcome, compute_href_for_doc, load_and_parse_doc, try_load_doc
from docindex.content.locator import locate_file_path
from docindex.content.query import (
    DocBatch,
    QueryOptions,
    collect_docs,
    get_doc_by_slug,
    get_doc_meta_by_slug,
    get_docs_by_path,
    sort_by_priority_date,
)

__all__ = [
    # Discovery
    "crawl_for_files",
    "locate_file_path",
    # Loading
    "LoadOutcome",
    "compute_href_for_doc",
    "load_and_parse_doc",
    "try_load_doc",
    # Dates
    "date_to_unix_timestamp",
    "get_date_by_priority",
    "to_iso",
    # Queries
    "DocBatch",
    "QueryOptions",
    "collect_docs",
    "get_doc_by_slug",
    "get_doc_meta_by_slug",
    "get_docs_by_path",
    "sort_by_priority_date",
]
