"""
Session-scoped undo slots for removed document nodes.

Each schema entity, identified by its EntityKey, owns a single slot holding
the node most recently removed for it. The slot is overwritten on every
remove and read (without clearing) on the next add, so a quick
toggle-off/toggle-on restores the node verbatim, hand-edited children
included. It is one level of undo, not a history.

Usage:
    from gqlexplorer.undo import UndoStore

    store = UndoStore()
    store.remember(key, field_node)
    store.recall(key)                 # -> field_node
    store.evict_descendants(key)      # parent removed: children slots go
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from graphql import Node

from gqlexplorer.types import EntityKey, format_key

logger = logging.getLogger(__name__)


class UndoStore:
    """Mapping from entity key to the last node removed for that entity."""

    def __init__(self) -> None:
        self._slots: dict[EntityKey, Node] = {}

    def remember(self, key: EntityKey, node: Node) -> None:
        """Overwrite the slot for ``key`` with ``node``."""
        self._slots[key] = node
        logger.debug("Remembered removed node for %s", format_key(key))

    def recall(self, key: EntityKey) -> Node | None:
        """Return the cached node for ``key`` without clearing it."""
        return self._slots.get(key)

    def evict(self, key: EntityKey) -> bool:
        """Drop the slot for ``key``.

        Returns:
            True if a node was cached
        """
        return self._slots.pop(key, None) is not None

    def evict_descendants(self, key: EntityKey) -> int:
        """Drop every slot strictly below ``key``.

        Returns:
            Number of slots dropped
        """
        depth = len(key)
        doomed = [k for k in self._slots if len(k) > depth and k[:depth] == key]
        for k in doomed:
            del self._slots[k]
        if doomed:
            logger.debug("Evicted %d undo slots below %s", len(doomed), format_key(key))
        return len(doomed)

    def retain(self, keys: Iterable[EntityKey]) -> int:
        """Drop every slot whose key is not in ``keys``.

        Returns:
            Number of slots dropped
        """
        live = set(keys)
        doomed = [k for k in self._slots if k not in live]
        for k in doomed:
            del self._slots[k]
        return len(doomed)

    def clear(self) -> int:
        """Drop all slots. Returns the number dropped."""
        count = len(self._slots)
        self._slots.clear()
        return count

    def keys(self) -> list[EntityKey]:
        return list(self._slots)

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def stats(self) -> dict[str, Any]:
        return {"size": len(self._slots)}
