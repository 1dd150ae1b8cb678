"""Tests for document collection queries."""

import pytest

from docindex.content.query import (
    QueryOptions,
    collect_docs,
    get_doc_by_slug,
    get_doc_meta_by_slug,
    get_docs_by_path,
    sort_by_priority_date,
)
from docindex.domain.document import Document
from docindex.exceptions import ConfigurationError, NotFoundError, ValidationFailure


def _slugs(docs):
    return [doc.slug for doc in docs]


def _doc(slug, **meta):
    return Document(path=f"/content/{slug}.md", slug=slug, meta=meta)


class TestSortByPriorityDate:
    """Test priority-date ordering."""

    def test_descending_with_undated_last(self):
        docs = [_doc("old", date="2023-01-01"), _doc("none"), _doc("new", date="2024-06-01")]

        assert _slugs(sort_by_priority_date(docs)) == ["new", "old", "none"]

    def test_ascending_with_undated_first(self):
        docs = [_doc("old", date="2023-01-01"), _doc("none"), _doc("new", date="2024-06-01")]

        assert _slugs(sort_by_priority_date(docs, "asc")) == ["none", "old", "new"]

    def test_invalid_date_counts_as_undated(self):
        docs = [_doc("bad", date="garbage"), _doc("good", date="2020-01-01")]

        assert _slugs(sort_by_priority_date(docs)) == ["good", "bad"]

    def test_falls_back_to_updated_and_created(self):
        docs = [
            _doc("created", createdAt="2024-03-01"),
            _doc("updated", updatedAt="2024-02-01", createdAt="2025-01-01"),
        ]

        assert _slugs(sort_by_priority_date(docs)) == ["created", "updated"]

    def test_sort_is_stable(self):
        docs = [_doc("first", date="2024-01-01"), _doc("second", date="2024-01-01"), _doc("third", date="2024-01-01")]

        assert _slugs(sort_by_priority_date(docs)) == ["first", "second", "third"]
        assert _slugs(sort_by_priority_date(docs, "asc")) == ["first", "second", "third"]

    def test_input_is_not_mutated(self):
        docs = [_doc("old", date="2023-01-01"), _doc("new", date="2024-06-01")]

        sort_by_priority_date(docs)

        assert _slugs(docs) == ["old", "new"]

    def test_unknown_order_is_rejected(self):
        with pytest.raises(ConfigurationError):
            sort_by_priority_date([_doc("old", date="2023-01-01")], "newest")


class TestCollectDocs:
    """Test crawling, loading and ordering a content directory."""

    def test_newest_first_by_default(self, blog):
        batch = collect_docs("blog", content_root=blog)

        assert batch.ok
        assert _slugs(batch.docs) == ["welcome", "older-post", "undated"]

    def test_ascending_order(self, blog):
        batch = collect_docs("blog", QueryOptions(order="asc"), blog)

        assert _slugs(batch.docs) == ["undated", "older-post", "welcome"]

    def test_meta_only_by_default(self, blog):
        batch = collect_docs("blog", content_root=blog)

        assert all(doc.content is None for doc in batch.docs)

    def test_full_load(self, blog):
        batch = collect_docs("blog", QueryOptions(meta_only=False), blog)

        assert all("Body text." in doc.content for doc in batch.docs)

    def test_hrefs_use_search_path(self, blog):
        batch = collect_docs("blog", content_root=blog)

        assert [doc.href for doc in batch.docs] == ["/blog/welcome", "/blog/older-post", "/blog/undated"]

    def test_drafts_hidden_only_in_production(self, blog):
        both = collect_docs("blog", QueryOptions(hide_drafts=True, production=True), blog)
        hide_only = collect_docs("blog", QueryOptions(hide_drafts=True), blog)
        production_only = collect_docs("blog", QueryOptions(production=True), blog)

        assert _slugs(both.docs) == ["welcome", "undated"]
        assert "older-post" in _slugs(hide_only.docs)
        assert "older-post" in _slugs(production_only.docs)

    def test_filters_applied_after_sort(self, blog):
        batch = collect_docs("blog", QueryOptions(filters={"tags": {"contains": "news"}}), blog)

        assert _slugs(batch.docs) == ["welcome", "older-post"]

    def test_draft_filter_returns_exact_subset(self, blog):
        batch = collect_docs("blog", QueryOptions(filters={"draft": True}), blog)

        assert _slugs(batch.docs) == ["older-post"]
        assert all(doc.meta["draft"] is True for doc in batch.docs)

    def test_no_matches_is_empty_and_ok(self, blog):
        batch = collect_docs("blog", QueryOptions(filters={"category": "missing"}), blog)

        assert batch.ok
        assert batch.docs == []

    def test_array_filter_is_a_query_error(self, blog):
        batch = collect_docs("blog", QueryOptions(filters={"tags": ["a", "b"]}), blog)

        assert batch.docs == []
        assert isinstance(batch.error, ValidationFailure)

    def test_missing_search_path_is_a_query_error(self, content_root):
        batch = collect_docs("nowhere", content_root=content_root)

        assert batch.docs == []
        assert isinstance(batch.error, NotFoundError)

    def test_unknown_order_is_a_query_error(self, blog):
        batch = collect_docs("blog", QueryOptions(order="oldest"), blog)

        assert batch.docs == []
        assert isinstance(batch.error, ConfigurationError)

    def test_limit(self, blog):
        batch = collect_docs("blog", QueryOptions(limit=2), blog)

        assert _slugs(batch.docs) == ["welcome", "older-post"]

    def test_broken_file_is_skipped(self, blog, make_doc):
        broken = make_doc("blog/broken.md", "title: [unclosed")

        batch = collect_docs("blog", content_root=blog)

        assert batch.ok
        assert _slugs(batch.docs) == ["welcome", "older-post", "undated"]
        assert [outcome.path.resolve() for outcome in batch.skipped] == [broken.resolve()]

    def test_private_files_are_excluded(self, blog, make_doc):
        make_doc("blog/_drafts/post.md", "title: Hidden\ndate: 2030-01-01")

        batch = collect_docs("blog", content_root=blog)

        assert "post" not in _slugs(batch.docs)


class TestGetDocsByPath:
    """Test the list-returning convenience wrapper."""

    def test_accepts_camel_case_mapping(self, blog):
        docs = get_docs_by_path("blog", {"hideDrafts": True, "production": True, "metaOnly": False}, blog)

        assert _slugs(docs) == ["welcome", "undated"]
        assert docs[0].content is not None

    def test_filters_false_means_no_filtering(self, blog):
        docs = get_docs_by_path("blog", {"filters": False}, blog)

        assert len(docs) == 3

    def test_errors_become_empty_list(self, content_root):
        assert get_docs_by_path("nowhere", None, content_root) == []

    def test_unknown_option_keys_are_ignored(self, blog):
        docs = get_docs_by_path("blog", {"hideDrafts": True, "production": True, "draftsInProd": False}, blog)

        assert _slugs(docs) == ["welcome", "undated"]

    def test_unknown_order_becomes_empty_list(self, blog):
        assert get_docs_by_path("blog", {"order": "sideways"}, blog) == []

    def test_non_mapping_options_become_empty_list(self, blog):
        assert get_docs_by_path("blog", ["hideDrafts"], blog) == []


class TestGetDocBySlug:
    """Test single-document lookups."""

    def test_found_with_content(self, blog):
        doc = get_doc_by_slug("welcome", "blog", content_root=blog)

        assert doc.slug == "welcome"
        assert doc.href == "/blog/welcome"
        assert doc.meta["title"] == "Welcome"
        assert "Body text." in doc.content

    def test_extension_is_ignored(self, blog):
        assert get_doc_by_slug("welcome.md", "blog", content_root=blog).slug == "welcome"

    def test_missing_returns_none(self, blog):
        assert get_doc_by_slug("missing", "blog", content_root=blog) is None

    def test_non_string_returns_none(self, blog):
        assert get_doc_by_slug(None, "blog", content_root=blog) is None
        assert get_doc_by_slug(".md", "blog", content_root=blog) is None

    def test_draft_hidden_in_production(self, blog):
        assert get_doc_by_slug("older-post", "blog", production=True, content_root=blog) is None
        assert get_doc_by_slug("older-post", "blog", production=False, content_root=blog) is not None

    def test_broken_file_returns_none(self, blog, make_doc):
        make_doc("blog/broken.md", "title: [unclosed")

        assert get_doc_by_slug("broken", "blog", content_root=blog) is None

    def test_meta_lookup_clears_content(self, blog):
        doc = get_doc_meta_by_slug("welcome", "blog", content_root=blog)

        assert doc.content == ""
        assert doc.meta["title"] == "Welcome"

    def test_meta_lookup_missing(self, blog):
        assert get_doc_meta_by_slug("missing", "blog", content_root=blog) is None
