"""
Operation definition resolution.

The explorer manages at most one operation definition per kind (query,
mutation, subscription); every other definition passes through untouched.
An operation left with no selections is dropped from the document instead
of being printed empty, and remembered so that re-adding its first field
brings back its previous shape (name, variables, directives).
"""

from __future__ import annotations

import logging
from typing import Sequence

from graphql import (
    DocumentNode,
    OperationDefinitionNode,
    OperationType,
    SelectionNode,
    SelectionSetNode,
)

from gqlexplorer.emitter import print_document
from gqlexplorer.exceptions import InvariantViolationError
from gqlexplorer.sync import replace_node
from gqlexplorer.types import EntityKey, OperationKind, format_key
from gqlexplorer.undo import UndoStore

logger = logging.getLogger(__name__)


def synthesize_operation(kind: OperationKind) -> OperationDefinitionNode:
    """An empty, unnamed operation definition of ``kind``."""
    return OperationDefinitionNode(
        operation=OperationType(kind),
        name=None,
        variable_definitions=(),
        directives=(),
        selection_set=SelectionSetNode(selections=()),
    )


def locate_operation(document: DocumentNode, kind: OperationKind) -> OperationDefinitionNode:
    """First operation definition of ``kind``, or a synthesized empty one.

    A synthesized definition is not inserted into the document.
    """
    operation_type = OperationType(kind)
    for definition in document.definitions:
        if isinstance(definition, OperationDefinitionNode) and definition.operation == operation_type:
            return definition
    return synthesize_operation(kind)


def operation_selections(operation: OperationDefinitionNode) -> tuple[SelectionNode, ...]:
    if operation.selection_set is None:
        return ()
    return tuple(operation.selection_set.selections)


def commit_operation(
    document: DocumentNode,
    kind: OperationKind,
    selections: Sequence[SelectionNode],
    undo: UndoStore,
    key: EntityKey,
) -> str:
    """Write ``selections`` into the operation of ``kind`` and print the document.

    Args:
        document: Freshly parsed document the edit is based on
        kind: Operation kind being edited
        selections: New top-level selections of that operation
        undo: Store holding the previously dropped definition
        key: Undo key of the operation

    Returns:
        The re-serialized document text
    """
    operation = locate_operation(document, kind)
    previous = undo.recall(key)
    if not operation_selections(operation) and previous is not None:
        if not isinstance(previous, OperationDefinitionNode):
            raise InvariantViolationError(
                f"Undo slot for {format_key(key)} holds a {previous.kind} node",
                {"entity": format_key(key)},
            )
        operation = previous

    definitions = tuple(document.definitions)
    if not selections:
        undo.remember(key, operation)
        logger.debug("Dropping empty %s operation", kind)
        new_definitions = tuple(d for d in definitions if d is not operation)
    else:
        selection_set = operation.selection_set or SelectionSetNode(selections=())
        new_operation = replace_node(
            operation,
            selection_set=replace_node(selection_set, selections=tuple(selections)),
        )
        if any(d is operation for d in definitions):
            new_definitions = tuple(new_operation if d is operation else d for d in definitions)
        else:
            new_definitions = (new_operation,) + definitions

    return print_document(replace_node(document, definitions=new_definitions))


__all__ = [
    "synthesize_operation",
    "locate_operation",
    "operation_selections",
    "commit_operation",
]
