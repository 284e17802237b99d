"""
AST node synchronizers.

One synchronizer stands for one schema entity (a field, an implementing
type, an argument or an input-object field) inside one enclosing sibling
list. Every operation takes the current siblings as an immutable tuple and
returns the replacement tuple; the caller splices that into its own parent
and keeps bubbling up. Nothing is mutated in place:

- untouched siblings are passed through as the very same objects
- a changed node is rebuilt with the same class, carrying every other
  attribute over by reference
- removal filters by identity, since graphql-core nodes compare by value

Usage:
    from gqlexplorer.sync import FieldSync

    sync = FieldSync("user", query_type.fields["user"], key, undo)
    selections = sync.add(selections)
    selections = sync.remove(selections)   # node kept in the undo slot
    selections = sync.add(selections)      # same node restored
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Sequence

from graphql import (
    ArgumentNode,
    EnumValueNode,
    FieldNode,
    GraphQLArgument,
    GraphQLField,
    GraphQLInputField,
    GraphQLObjectType,
    InlineFragmentNode,
    ListValueNode,
    NamedTypeNode,
    NameNode,
    Node,
    NullValueNode,
    ObjectFieldNode,
    ObjectValueNode,
    SelectionSetNode,
    VariableNode,
    is_enum_type,
    is_input_object_type,
    is_leaf_type,
)

from gqlexplorer.defaults import default_required_arguments, default_value_for, encode_value
from gqlexplorer.exceptions import (
    EntityNotFoundError,
    InvariantViolationError,
    SchemaMismatchError,
)
from gqlexplorer.schema_utils import unwrap_type
from gqlexplorer.selection_policy import SelectionPolicy
from gqlexplorer.types import EntityKey, ObjectFields, Selections, format_key
from gqlexplorer.undo import UndoStore

logger = logging.getLogger(__name__)


def replace_node(node: Node, **changes: Any) -> Node:
    """Shallow rebuild of ``node`` with some attributes replaced."""
    attrs = {key: getattr(node, key, None) for key in node.keys}
    attrs.update(changes)
    return node.__class__(**attrs)


def child_selections(node: FieldNode | InlineFragmentNode | None) -> Selections:
    """Nested selections of a node, empty when it has no selection set."""
    if node is None or node.selection_set is None:
        return ()
    return tuple(node.selection_set.selections)


def with_selections(node: Node, selections: Sequence[Node]) -> Node:
    """Rebuild ``node`` with its selection set replaced wholesale."""
    if node.selection_set is None:
        selection_set = SelectionSetNode(selections=tuple(selections))
    else:
        selection_set = replace_node(node.selection_set, selections=tuple(selections))
    return replace_node(node, selection_set=selection_set)


class NodeSync(ABC):
    """Shared find/add/remove logic over one sibling list."""

    node_class: ClassVar[type]

    def __init__(self, name: str, key: EntityKey, undo: UndoStore):
        self.name = name
        self.key = key
        self.undo = undo

    @property
    def label(self) -> str:
        return format_key(self.key)

    @abstractmethod
    def matches(self, node: Node) -> bool:
        """Identity rule: does ``node`` belong to this entity?"""

    @abstractmethod
    def build(self) -> Node:
        """Construct a fresh node for this entity."""

    def find(self, siblings: Sequence[Node]) -> Node | None:
        for node in siblings:
            if self.matches(node):
                return node
        return None

    def is_present(self, siblings: Sequence[Node]) -> bool:
        return self.find(siblings) is not None

    def add(self, siblings: Sequence[Node]) -> tuple:
        """Append the undo-cached node, or a fresh one, to ``siblings``."""
        node = self.undo.recall(self.key)
        if node is None:
            node = self.build()
        elif not isinstance(node, self.node_class):
            raise InvariantViolationError(
                f"Undo slot for {self.label} holds a {node.kind} node",
                {"entity": self.label, "kind": node.kind},
            )
        else:
            logger.debug("Restoring %s from its undo slot", self.label)
        return tuple(siblings) + (node,)

    def remove(self, siblings: Sequence[Node]) -> tuple:
        """Drop this entity's node from ``siblings``, caching it for undo."""
        found = self._require(siblings)
        self.undo.remember(self.key, found)
        return tuple(node for node in siblings if node is not found)

    def _require(self, siblings: Sequence[Node]) -> Node:
        found = self.find(siblings)
        if found is None:
            raise EntityNotFoundError(self.label)
        return found

    def _replace_found(self, siblings: Sequence[Node], rebuild: Callable[[Node], Node]) -> tuple:
        found = self._require(siblings)
        replacement = rebuild(found)
        if replacement.__class__ is not found.__class__:
            raise InvariantViolationError(
                f"Selection for {self.label} changed kind from {found.kind} to {replacement.kind}",
                {"entity": self.label},
            )
        return tuple(replacement if node is found else node for node in siblings)


class FieldSync(NodeSync):
    """Synchronizes one schema field against a list of sibling selections."""

    node_class = FieldNode

    def __init__(self, name: str, field: GraphQLField, key: EntityKey, undo: UndoStore):
        super().__init__(name, key, undo)
        self.field = field

    def matches(self, node: Node) -> bool:
        # Aliases are ignored: a field is identified by its schema name
        return isinstance(node, FieldNode) and node.name.value == self.name

    def build(self) -> FieldNode:
        return FieldNode(
            alias=None,
            name=NameNode(value=self.name),
            arguments=default_required_arguments(self.field),
            directives=(),
            selection_set=None,
        )

    def set_arguments(self, siblings: Selections, arguments: Sequence[ArgumentNode]) -> Selections:
        return self._replace_found(
            siblings, lambda node: replace_node(node, arguments=tuple(arguments))
        )

    def modify_selections(self, siblings: Selections, selections: Selections) -> Selections:
        return self._replace_found(siblings, lambda node: with_selections(node, selections))


class FragmentSync(NodeSync):
    """Synchronizes the inline fragment for one implementing type."""

    node_class = InlineFragmentNode

    def __init__(
        self,
        implementing_type: GraphQLObjectType,
        key: EntityKey,
        undo: UndoStore,
        policy: SelectionPolicy,
    ):
        super().__init__(implementing_type.name, key, undo)
        self.implementing_type = implementing_type
        self.policy = policy

    def matches(self, node: Node) -> bool:
        return (
            isinstance(node, InlineFragmentNode)
            and node.type_condition is not None
            and node.type_condition.name.value == self.name
        )

    def build(self) -> InlineFragmentNode:
        fields = self.implementing_type.fields
        selections = tuple(
            FieldNode(
                alias=None,
                name=NameNode(value=field_name),
                arguments=default_required_arguments(fields[field_name]),
                directives=(),
                selection_set=None,
            )
            for field_name in self.policy.default_field_names(self.implementing_type)
            if field_name in fields
        )
        return InlineFragmentNode(
            type_condition=NamedTypeNode(name=NameNode(value=self.name)),
            directives=(),
            selection_set=SelectionSetNode(selections=selections),
        )

    def modify_selections(self, siblings: Selections, selections: Selections) -> Selections:
        return self._replace_found(siblings, lambda node: with_selections(node, selections))


class InputSync(NodeSync):
    """Shared logic for arguments and input-object fields."""

    def __init__(
        self,
        name: str,
        entity: GraphQLArgument | GraphQLInputField,
        key: EntityKey,
        undo: UndoStore,
    ):
        super().__init__(name, key, undo)
        self.entity = entity
        self.named_type = unwrap_type(entity.type)

    def matches(self, node: Node) -> bool:
        return isinstance(node, self.node_class) and node.name.value == self.name

    def build(self) -> Node:
        return self.node_class(
            name=NameNode(value=self.name),
            value=default_value_for(self.label, self.entity.type),
        )

    def set_value(self, siblings: Sequence[Node], raw: str) -> tuple:
        """Re-encode ``raw`` as a typed literal for a leaf-typed entity."""
        if not is_leaf_type(self.named_type):
            raise SchemaMismatchError(self.label, "leaf type", str(self.entity.type))
        leaf_type = self.named_type

        def rebuild(node: Node) -> Node:
            self._check_literal(node.value)
            return replace_node(node, value=encode_value(leaf_type, raw))

        return self._replace_found(siblings, rebuild)

    def set_child_fields(self, siblings: Sequence[Node], fields: ObjectFields) -> tuple:
        """Replace the nested object value's fields wholesale."""
        if not is_input_object_type(self.named_type):
            raise SchemaMismatchError(self.label, "input object type", str(self.entity.type))

        def rebuild(node: Node) -> Node:
            value = self.object_value(node)
            return replace_node(node, value=replace_node(value, fields=tuple(fields)))

        return self._replace_found(siblings, rebuild)

    def object_value(self, node: Node) -> ObjectValueNode:
        """The node's value, which must be an object literal."""
        if not isinstance(node.value, ObjectValueNode):
            raise SchemaMismatchError(self.label, "object value", node.value.kind)
        return node.value

    def _check_literal(self, value: Node) -> None:
        # Variables are never owned by the explorer; object/list values need the composite path
        if isinstance(value, (VariableNode, ObjectValueNode, ListValueNode)):
            raise SchemaMismatchError(self.label, f"{self.named_type.name} literal", value.kind)
        if is_enum_type(self.named_type) and not isinstance(value, (EnumValueNode, NullValueNode)):
            raise SchemaMismatchError(self.label, "enum value", value.kind)


class ArgumentSync(InputSync):
    """Synchronizes one field argument against the field's argument list."""

    node_class = ArgumentNode


class InputFieldSync(InputSync):
    """Synchronizes one input-object field against an object value's fields."""

    node_class = ObjectFieldNode


__all__ = [
    "replace_node",
    "child_selections",
    "with_selections",
    "NodeSync",
    "FieldSync",
    "FragmentSync",
    "InputSync",
    "ArgumentSync",
    "InputFieldSync",
]
