"""Document entity for the content indexer."""

from dataclasses import dataclass, asdict, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable document entity.

    Represents a single markdown file from the content tree, built fresh on
    every load. Nothing is cached between loads.

    Attributes:
        path: Absolute file path (e.g., "/site/content/blog/welcome.md")
        slug: Canonical identifier derived from the file name (e.g., "welcome")
        href: Absolute route for the document (e.g., "/blog/welcome")
        meta: Normalized front-matter (date, updatedAt, createdAt, draft, tags, slug)
        content: Body text (None when loaded in metadata-only mode)
    """

    path: str
    slug: str
    href: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)
    content: str | None = None

    @property
    def is_draft(self) -> bool:
        return self.meta.get("draft") is True

    def to_dict(self) -> dict:
        """Convert document to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        """Create document from dictionary (JSON output format).

        Args:
            data: Dictionary with document fields

        Returns:
            Document instance
        """
        return cls(
            path=data["path"],
            slug=data["slug"],
            href=data.get("href"),
            meta=dict(data.get("meta") or {}),
            content=data.get("content"),
        )
