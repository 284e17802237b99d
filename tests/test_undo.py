"""Tests for per-entity undo slots."""

from graphql import FieldNode, NameNode

from gqlexplorer.types import child_key, operation_key
from gqlexplorer.undo import UndoStore


def _field(name: str) -> FieldNode:
    return FieldNode(name=NameNode(value=name), arguments=(), directives=())


QUERY = operation_key("query")
USER = child_key(QUERY, "field", "user")
USER_ID = child_key(USER, "argument", "id")
USER_NAME = child_key(USER, "field", "name")
POSTS = child_key(QUERY, "field", "posts")


class TestUndoStore:
    """Test slot semantics: overwrite on remember, non-destructive recall."""

    def test_recall_empty(self):
        assert UndoStore().recall(USER) is None

    def test_remember_and_recall(self):
        store = UndoStore()
        node = _field("user")
        store.remember(USER, node)
        assert store.recall(USER) is node
        # Recall does not clear the slot
        assert store.recall(USER) is node
        assert USER in store

    def test_single_slot_overwritten(self):
        store = UndoStore()
        first, second = _field("user"), _field("user")
        store.remember(USER, first)
        store.remember(USER, second)
        assert store.recall(USER) is second
        assert len(store) == 1

    def test_evict(self):
        store = UndoStore()
        store.remember(USER, _field("user"))
        assert store.evict(USER) is True
        assert store.evict(USER) is False
        assert store.recall(USER) is None

    def test_evict_descendants_is_strict(self):
        store = UndoStore()
        store.remember(USER, _field("user"))
        store.remember(USER_ID, _field("id"))
        store.remember(USER_NAME, _field("name"))
        store.remember(POSTS, _field("posts"))

        assert store.evict_descendants(USER) == 2
        assert USER in store
        assert POSTS in store
        assert USER_ID not in store
        assert USER_NAME not in store

    def test_retain(self):
        store = UndoStore()
        store.remember(USER, _field("user"))
        store.remember(POSTS, _field("posts"))
        assert store.retain([USER]) == 1
        assert store.keys() == [USER]

    def test_clear_and_stats(self):
        store = UndoStore()
        store.remember(USER, _field("user"))
        assert store.stats == {"size": 1}
        assert store.clear() == 1
        assert len(store) == 0
