"""
Shared pytest fixtures for the gqlexplorer test suite.

Provides a small but representative schema (interfaces, unions, enums,
input objects, custom scalars, all three root types) and an explorer
session wired so that every emitted document is fed back as the new text.
"""

from typing import Any

import pytest
from graphql import build_schema

from gqlexplorer.explorer import Explorer
from gqlexplorer.parse_cache import ParseMemo
from gqlexplorer.undo import UndoStore


SCHEMA_SDL = """
scalar Date

enum Color {
  RED
  GREEN
  BLUE
}

enum Role {
  ADMIN
  USER
}

interface Node {
  id: ID!
}

interface Character {
  id: ID!
  name: String
}

type User implements Node {
  id: ID!
  name: String
  email: String
  age: Int
  friends(first: Int): [User]
  posts(limit: Int!, order: String!): [Post]
}

type Post implements Node {
  id: ID!
  title: String
  author: User
}

type Human implements Character {
  id: ID!
  name: String
  height: Float
}

type Droid implements Character {
  id: ID!
  name: String
  primaryFunction: String
}

type Edge {
  cursor: String
  node: User
}

type Connection {
  edges: [Edge]
  pageInfo: String
  totalCount: Int
}

type Misc {
  alpha: String
  beta: Int
  gamma: Boolean
}

union SearchResult = User | Post

input RangeInput {
  from: Int!
  to: Int!
  label: String
}

input UserFilter {
  role: Role!
  name: String
  range: RangeInput
  tags: [String!]!
}

type Query {
  user(id: ID!): User
  node(id: ID!): Node
  hero: Character
  search(text: String!): [SearchResult]
  colors(color: Color!): [String]
  flags(enabled: Boolean, ratio: Float, count: Int): String
  posts(a: Int!, b: String!, c: Boolean = false): [Post]
  users(filter: UserFilter): [User]
  events(on: Date): [String]
  connection: Connection
  misc: Misc
  ids(list: [ID!]!): [String]
}

type Mutation {
  addPost(title: String!): Post
}

type Subscription {
  postAdded: Post
}
"""


@pytest.fixture
def schema():
    """Schema with every root type, abstract types and input objects."""
    return build_schema(SCHEMA_SDL)


@pytest.fixture
def query_only_schema():
    return build_schema("type Query { ping: String }")


@pytest.fixture
def memo():
    """Isolated parse memo so tests never share the process-wide one."""
    return ParseMemo()


@pytest.fixture
def undo():
    return UndoStore()


class EditRecorder:
    """Collects emitted documents and feeds them back into the explorer."""

    def __init__(self) -> None:
        self.texts: list[str] = []
        self.explorer: Explorer | None = None

    def __call__(self, text: str) -> None:
        self.texts.append(text)
        if self.explorer is not None:
            self.explorer.update_query(text)

    @property
    def last(self) -> str | None:
        return self.texts[-1] if self.texts else None


@pytest.fixture
def make_explorer(schema, memo, undo):
    """Factory for explorers whose edits round-trip through ``update_query``."""

    def factory(query: str = "", **kwargs: Any) -> tuple[Explorer, EditRecorder]:
        recorder = EditRecorder()
        kwargs.setdefault("schema", schema)
        kwargs.setdefault("memo", memo)
        kwargs.setdefault("undo", undo)
        explorer = Explorer(query=query, on_edit=recorder, **kwargs)
        recorder.explorer = explorer
        return explorer, recorder

    return factory


def pytest_configure(config):
    """Register custom pytest markers.

    - smoke: quick sanity checks of the editing engine
    """
    config.addinivalue_line("markers", "smoke: quick sanity checks of the editing engine")
