"""
Shared type definitions for gqlexplorer.

This module provides type aliases for common patterns across the codebase,
improving type safety and IDE support.

Usage:
    from gqlexplorer.types import EntityKey, OperationKind, Selections

    def key_for(kind: OperationKind) -> EntityKey:
        ...
"""

from __future__ import annotations

from typing import Callable, Literal, Sequence, TypeAlias

from graphql import ArgumentNode, ObjectFieldNode, SelectionNode

# === Operation kinds ===

OperationKind = Literal["query", "mutation", "subscription"]
"""Kind of operation definition managed by the explorer."""

OPERATION_KINDS: tuple[OperationKind, ...] = ("query", "mutation", "subscription")
"""Operation kinds in display order."""

# === Entity keys ===

EntityTag = Literal["operation", "field", "fragment", "argument", "input_field"]
"""Tag identifying what kind of schema entity a key segment refers to."""

KeySegment: TypeAlias = tuple[str, str]
"""One (tag, name) step of an entity key."""

EntityKey: TypeAlias = tuple[KeySegment, ...]
"""Stable identity of a schema entity within its parent selection path.

Example: (("operation", "query"), ("field", "user"), ("argument", "id"))
"""

# === Sibling lists ===

Selections: TypeAlias = tuple[SelectionNode, ...]
"""Ordered sibling selections inside a selection set."""

Arguments: TypeAlias = tuple[ArgumentNode, ...]
"""Ordered sibling arguments of a field."""

ObjectFields: TypeAlias = tuple[ObjectFieldNode, ...]
"""Ordered sibling fields of an object value."""

# === Paths ===

SelectionPath: TypeAlias = Sequence[str]
"""Path of selection segments: field names or "... on TypeName"."""

ArgumentPath: TypeAlias = Sequence[str]
"""Argument name followed by nested input-field names."""

FRAGMENT_PREFIX = "... on "
"""Prefix marking an inline fragment segment in a selection path."""

# === Callback types ===

EditCallback: TypeAlias = Callable[[str], None]
"""Receives the fully re-serialized document text after an accepted edit."""

ChangeCallback: TypeAlias = Callable[[str], object]
"""Receives the raw text typed into an input control."""


def fragment_segment(type_name: str) -> str:
    """Build the selection-path segment for an inline fragment on ``type_name``."""
    return f"{FRAGMENT_PREFIX}{type_name}"


def child_key(key: EntityKey, tag: EntityTag, name: str) -> EntityKey:
    """Extend an entity key with one more (tag, name) step."""
    return key + ((tag, name),)


def operation_key(kind: OperationKind) -> EntityKey:
    """Root entity key of an operation definition."""
    return (("operation", kind),)


def format_key(key: EntityKey) -> str:
    """Render an entity key for logs, e.g. ``query.user(id)``."""
    parts: list[str] = []
    for tag, name in key:
        if tag == "argument" and parts:
            parts[-1] += f"({name})"
        elif tag == "fragment":
            parts.append(f"<{name}>")
        else:
            parts.append(name)
    return ".".join(parts)
