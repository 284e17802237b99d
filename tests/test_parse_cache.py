"""Tests for the memoized document parser."""

import pytest
from graphql import DocumentNode

from gqlexplorer.exceptions import DocumentParseError
from gqlexplorer.parse_cache import (
    ParseMemo,
    ParseStats,
    empty_document,
    get_parse_memo,
    memoize_parse_query,
    parse_document,
)


class TestParseDocument:
    def test_valid(self):
        document = parse_document("{ user { id } }")
        assert isinstance(document, DocumentNode)
        assert document.loc is None

    def test_invalid_raises(self):
        with pytest.raises(DocumentParseError) as exc_info:
            parse_document("{ user { id ")
        assert "Syntax Error" in exc_info.value.reason


class TestParseMemo:
    """Test the last-good-document memo."""

    def test_same_text_is_a_hit(self):
        memo = ParseMemo()
        first = memo.resolve("{ user { id } }")
        second = memo.resolve("{ user { id } }")
        assert first is second
        assert memo.stats.hits == 1
        assert memo.stats.misses == 1

    def test_empty_text(self):
        memo = ParseMemo()
        assert memo.resolve("").definitions == ()
        assert memo.resolve("   \n").definitions == ()
        assert memo.stats.failures == 0

    def test_invalid_text_keeps_last_good(self):
        memo = ParseMemo()
        good = memo.resolve("{ user { id } }")
        assert memo.resolve("{ user { id ") is good
        assert memo.stats.failures == 1
        # The memo still belongs to the last good text
        assert memo.last_text == "{ user { id } }"

    def test_invalid_text_without_history(self):
        memo = ParseMemo()
        assert memo.resolve("{ broken").definitions == ()
        assert memo.last_text is None

    def test_new_text_replaces_memo(self):
        memo = ParseMemo()
        memo.resolve("{ a }")
        document = memo.resolve("{ b }")
        assert memo.last_text == "{ b }"
        assert document.definitions[0].selection_set.selections[0].name.value == "b"

    def test_clear(self):
        memo = ParseMemo()
        memo.resolve("{ a }")
        memo.clear()
        assert memo.last_text is None
        assert memo.stats.misses == 0


class TestParseStats:
    def test_hit_rate(self):
        assert ParseStats().hit_rate == 0.0
        stats = ParseStats(hits=3, misses=1)
        assert stats.hit_rate == 0.75
        assert stats.to_dict()["hits"] == 3


class TestProcessMemo:
    def test_singleton(self):
        assert get_parse_memo() is get_parse_memo()

    def test_memoize_parse_query(self):
        document = memoize_parse_query("{ memoized }")
        assert memoize_parse_query("{ memoized }") is document

    def test_empty_document(self):
        assert empty_document().definitions == ()
