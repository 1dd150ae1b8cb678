"""Error taxonomy for the content indexer.

These are raised inside the crawl/load/filter steps and converted into
return values (``None`` or ``[]``) at the public functions, so no failure
escapes to the host build process.
"""

from __future__ import annotations


class DocIndexError(Exception):
    """Base error carrying the offending item for logging."""

    code: str = "docindex_error"

    def __init__(self, message: str, *, item: object = None) -> None:
        super().__init__(message)
        self.message = message
        self.item = item

    def __str__(self) -> str:
        if self.item is None:
            return f"[{self.code}] {self.message}"
        return f"[{self.code}] {self.message}: {self.item}"


class NotFoundError(DocIndexError):
    """A slug or path does not resolve to any file."""

    code = "not_found"


class ParseFailure(DocIndexError):
    """A file is unreadable or its front-matter is malformed."""

    code = "parse_failure"


class ValidationFailure(DocIndexError):
    """A filter spec uses an unsupported shape."""

    code = "validation_failure"


class ConfigurationError(DocIndexError):
    """Invalid pagination or configuration parameters."""

    code = "configuration_error"
