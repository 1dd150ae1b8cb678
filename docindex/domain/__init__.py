"""Domain entities for the content indexer.

Documents, filter predicates and pagination descriptors. Everything here is
pure: no filesystem access.
"""

from docindex.domain.document import Document
from docindex.domain.filters import Exact, FieldFilter, Operator, compile_filters, filter_docs
from docindex.domain.pagination import Pagination, compute_pagination, paginate

__all__ = [
    "Document",
    "Exact",
    "FieldFilter",
    "Operator",
    "Pagination",
    "compile_filters",
    "compute_pagination",
    "filter_docs",
    "paginate",
]
