"""
Memoized document parsing.

Keeps the last successful ``(text, document)`` pair so that text which is
briefly invalid while being typed does not blank the explorer tree.

Usage:
    from gqlexplorer.parse_cache import ParseMemo, memoize_parse_query

    memo = ParseMemo()
    document = memo.resolve("{ user { id } }")
    document = memo.resolve("{ user { id")   # invalid: last good document

    # Process-wide memo
    document = memoize_parse_query(text)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from graphql import DocumentNode, GraphQLError, parse

from gqlexplorer.exceptions import DocumentParseError

logger = logging.getLogger(__name__)


def empty_document() -> DocumentNode:
    """A document with zero definitions."""
    return DocumentNode(definitions=())


@dataclass
class ParseStats:
    """Counters for a parse memo."""

    hits: int = 0
    misses: int = 0
    failures: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "failures": self.failures,
            "hit_rate": self.hit_rate,
        }


def parse_document(text: str) -> DocumentNode:
    """Parse document text without location info.

    Raises:
        DocumentParseError: if the text is not a valid GraphQL document
    """
    try:
        return parse(text, no_location=True)
    except GraphQLError as e:
        raise DocumentParseError(e.message) from e


class ParseMemo:
    """Single-slot memo of the last successfully parsed document."""

    def __init__(self) -> None:
        self._last: tuple[str, DocumentNode] | None = None
        self._stats = ParseStats()

    def resolve(self, text: str) -> DocumentNode:
        """Return the document for ``text``; never raises.

        Empty text gives an empty document. Unparseable text gives the last
        good document, or an empty one when nothing parsed yet.
        """
        if self._last is not None and self._last[0] == text:
            self._stats.hits += 1
            return self._last[1]

        self._stats.misses += 1
        if not text.strip():
            return empty_document()

        try:
            document = parse_document(text)
        except DocumentParseError as e:
            self._stats.failures += 1
            logger.debug("Keeping last good document: %s", e)
            if self._last is not None:
                return self._last[1]
            return empty_document()

        self._last = (text, document)
        return document

    @property
    def last_text(self) -> str | None:
        return self._last[0] if self._last is not None else None

    @property
    def stats(self) -> ParseStats:
        return self._stats

    def clear(self) -> None:
        self._last = None
        self._stats = ParseStats()


_default_memo: ParseMemo | None = None
_memo_lock = threading.Lock()


def get_parse_memo() -> ParseMemo:
    """Get the process-wide parse memo."""
    global _default_memo
    with _memo_lock:
        if _default_memo is None:
            _default_memo = ParseMemo()
        return _default_memo


def memoize_parse_query(text: str) -> DocumentNode:
    """Resolve ``text`` through the process-wide memo."""
    return get_parse_memo().resolve(text)


__all__ = [
    "ParseMemo",
    "ParseStats",
    "empty_document",
    "parse_document",
    "get_parse_memo",
    "memoize_parse_query",
]
