"""
Custom exception types for gqlexplorer.

Errors are raised inside the synchronization engine and absorbed at the
Explorer boundary, where they become logged diagnostics and the edit is
skipped. Using specific exception types enables:
- Targeted handling (e.g. invariant violations re-raise in debug mode)
- Structured diagnostic records with a stable error kind
"""

from __future__ import annotations

from typing import Any


class ExplorerError(Exception):
    """Base exception for all gqlexplorer errors.

    All custom exceptions in gqlexplorer inherit from this class so the
    Explorer can absorb every engine failure with a single handler.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class DocumentParseError(ExplorerError):
    """Raised when document text cannot be parsed."""

    def __init__(self, reason: str):
        super().__init__(f"Unable to parse document: {reason}", {"reason": reason})
        self.reason = reason


class SchemaMismatchError(ExplorerError):
    """Raised when a document node disagrees with its schema declaration.

    The offending node is left untouched; malformed documents coming from
    external edits are preserved rather than coerced.
    """

    def __init__(self, entity: str, expected: str, actual: str):
        super().__init__(
            f"Mismatch for {entity}: expected {expected}, found {actual}",
            {"entity": entity, "expected": expected, "actual": actual},
        )
        self.entity = entity
        self.expected = expected
        self.actual = actual


class UnconstructibleDefaultError(ExplorerError):
    """Raised when no default node can be built for an input type."""

    def __init__(self, entity: str, type_name: str):
        super().__init__(
            f"Unable to construct a default value for {entity} of type {type_name}",
            {"entity": entity, "type": type_name},
        )
        self.entity = entity
        self.type_name = type_name


class EntityNotFoundError(ExplorerError):
    """Raised when an edit targets an entity absent from its sibling list."""

    def __init__(self, entity: str):
        super().__init__(f"Missing selection for {entity}", {"entity": entity})
        self.entity = entity


class PathResolutionError(ExplorerError):
    """Raised when an edit path does not resolve against the schema or document."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot resolve '{path}': {reason}", {"path": path, "reason": reason})
        self.path = path
        self.reason = reason


class InvariantViolationError(ExplorerError):
    """Raised on internal inconsistencies, e.g. a node changing kind while bubbling."""

    pass


class PluginError(ExplorerError):
    """An input-control plugin failed.

    The plugin manager logs this and moves on to the next plugin or the
    plain text control; it never reaches the caller.
    """

    def __init__(self, plugin_name: str, reason: str):
        super().__init__(
            f"Input plugin '{plugin_name}' failed: {reason}",
            {"plugin_name": plugin_name, "reason": reason},
        )
        self.plugin_name = plugin_name
        self.reason = reason


__all__ = [
    "ExplorerError",
    "DocumentParseError",
    "SchemaMismatchError",
    "UnconstructibleDefaultError",
    "EntityNotFoundError",
    "PathResolutionError",
    "InvariantViolationError",
    "PluginError",
]
