"""
Serialization of edited documents and hand-off to the text owner.

The caller owns the text. Every accepted edit is printed in graphql-core's
canonical form and passed to the caller's ``on_edit`` callback; the caller
feeds it back as the new source text.
"""

from __future__ import annotations

import logging

from graphql import DocumentNode, print_ast

from gqlexplorer.logging_config import log_function
from gqlexplorer.types import EditCallback

logger = logging.getLogger(__name__)


@log_function(level="DEBUG")
def print_document(document: DocumentNode) -> str:
    """Canonical pretty-printed text of ``document``."""
    return print_ast(document)


class DocumentEmitter:
    """Delivers re-serialized document text to an edit callback."""

    def __init__(self, on_edit: EditCallback | None = None):
        self._on_edit = on_edit
        self._emitted = 0
        self._last_text: str | None = None

    def emit(self, text: str) -> str:
        """Send ``text`` to the callback (if any) and return it."""
        self._emitted += 1
        self._last_text = text
        logger.debug("Emitting edit #%d (%d chars)", self._emitted, len(text))
        if self._on_edit is not None:
            self._on_edit(text)
        return text

    @property
    def emitted(self) -> int:
        return self._emitted

    @property
    def last_text(self) -> str | None:
        return self._last_text
