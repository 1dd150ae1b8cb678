"""Filter predicate sets over document metadata.

A filter maps a metadata field to a comparison spec::

    {"draft": True}                         # exact match
    {"category": "guides"}                  # exact match
    {"date": {"gte": "2024-01-01"}}         # operator
    {"tags": {"contains": "python"}}        # operator, works on lists too

Specs are compiled once into ``Exact`` / ``Operator`` variants before any
document is inspected. List-valued specs are rejected outright; the whole
filter then yields no documents instead of a partial result.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from docindex.domain.document import Document
from docindex.exceptions import ValidationFailure

logger = logging.getLogger(__name__)

OPERATORS: tuple[str, ...] = (
    "eq",
    "neq",
    "gt",
    "gte",
    "lt",
    "lte",
    "startsWith",
    "endsWith",
    "contains",
)

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Exact:
    value: bool | str


@dataclass(frozen=True, slots=True)
class Operator:
    kind: str | None
    value: Any = None


Predicate = Union[Exact, Operator]


@dataclass(frozen=True, slots=True)
class FieldFilter:
    field: str
    predicate: Predicate

    def matches(self, doc: Document) -> bool:
        actual = doc.meta.get(self.field, _MISSING)
        if isinstance(self.predicate, Exact):
            return _strict_equal(actual, self.predicate.value)
        return _apply_operator(self.predicate, actual)


def _strict_equal(left: Any, right: Any) -> bool:
    if left is _MISSING:
        return False
    # True == 1 in Python; metadata equality must not conflate them.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        if actual is _MISSING or actual is None:
            return False
        if isinstance(actual, bool) or isinstance(expected, bool):
            return False
        try:
            return bool(compare(actual, expected))
        except TypeError:
            return False

    return check


def _starts_with(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and actual.startswith(str(expected))


def _ends_with(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and actual.endswith(str(expected))


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, (str, list, tuple)):
        return str(expected) in actual
    return False


_CHECKS: dict[str, Callable[[Any, Any], bool]] = {
    "eq": _strict_equal,
    "neq": lambda actual, expected: not _strict_equal(actual, expected),
    "gt": _ordered(operator.gt),
    "gte": _ordered(operator.ge),
    "lt": _ordered(operator.lt),
    "lte": _ordered(operator.le),
    "startsWith": _starts_with,
    "endsWith": _ends_with,
    "contains": _contains,
}


def _apply_operator(predicate: Operator, actual: Any) -> bool:
    if predicate.kind is None:
        return False
    return _CHECKS[predicate.kind](actual, predicate.value)


def _compile_spec(field: str, spec: Any) -> Predicate:
    if isinstance(spec, (bool, str)):
        return Exact(spec)
    if isinstance(spec, Mapping):
        for kind in OPERATORS:
            if spec.get(kind) is not None:
                return Operator(kind, spec[kind])
        # No recognized operator: the field can never match.
        return Operator(None)
    if isinstance(spec, (list, tuple, set)):
        raise ValidationFailure(f"array comparison for '{field}' is not supported", item=spec)
    raise ValidationFailure(f"unsupported comparison for '{field}'", item=spec)


def compile_filters(filters: Mapping[str, Any]) -> list[FieldFilter]:
    """Compile a filter mapping into field filters.

    Raises:
        ValidationFailure: If the mapping or any comparison spec has an
            unsupported shape
    """
    if not isinstance(filters, Mapping):
        raise ValidationFailure("filters must be a mapping", item=filters)
    return [FieldFilter(str(field), _compile_spec(str(field), spec)) for field, spec in filters.items()]


def apply_filters(docs: Iterable[Document], compiled: Sequence[FieldFilter], limit: int = 0) -> list[Document]:
    """Narrow ``docs`` by every compiled field filter (logical AND)."""
    result = list(docs)
    for field_filter in compiled:
        result = [doc for doc in result if field_filter.matches(doc)]
    return result[:limit] if limit else result


def filter_docs(docs: Iterable[Document], filters: Mapping[str, Any], limit: int = 0) -> list[Document]:
    """Filter documents by their metadata.

    Args:
        docs: Documents to filter, already in the desired order
        filters: Mapping of metadata field to comparison spec
        limit: Maximum number of documents to return (0 for no limit)

    Returns:
        Matching documents in their original order; an empty list when
        nothing matches or the filter is invalid
    """
    try:
        compiled = compile_filters(filters)
    except ValidationFailure as exc:
        logger.warning("Unable to filter documents: %s", exc)
        return []
    return apply_filters(docs, compiled, limit)
