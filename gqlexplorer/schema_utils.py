"""
Schema helpers shared by the synchronizers, default generators and views.

Thin wrappers over graphql-core's type predicates.
"""

from __future__ import annotations

from typing import Union

from graphql import (
    GraphQLArgument,
    GraphQLEnumType,
    GraphQLInputField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLType,
    get_named_type,
    is_interface_type,
    is_leaf_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_union_type,
)
from graphql.pyutils import Undefined

from gqlexplorer.types import FRAGMENT_PREFIX, OperationKind

InputEntity = Union[GraphQLArgument, GraphQLInputField]
LeafType = Union[GraphQLScalarType, GraphQLEnumType]


def unwrap_type(type_: GraphQLType) -> GraphQLNamedType:
    """Strip every List/NonNull wrapper to reach the named type."""
    return get_named_type(type_)


def is_list_input(type_: GraphQLType) -> bool:
    """True when the type, ignoring an outer NonNull, is a list."""
    if is_non_null_type(type_):
        type_ = type_.of_type
    return is_list_type(type_)


def is_required_input(entity: InputEntity) -> bool:
    """Required iff non-null wrapped and no declared default."""
    return is_non_null_type(entity.type) and entity.default_value is Undefined


def is_leaf_field_type(type_: GraphQLType) -> bool:
    return is_leaf_type(get_named_type(type_))


def is_expandable(type_: GraphQLType) -> bool:
    """Object, interface and union types carry a nested selection set."""
    named = get_named_type(type_)
    return is_object_type(named) or is_interface_type(named) or is_union_type(named)


def selectable_fields(type_: GraphQLNamedType) -> dict:
    """Fields that can be selected directly on a type (none for unions)."""
    if is_object_type(type_) or is_interface_type(type_):
        return type_.fields
    return {}


def root_type_for(schema: GraphQLSchema, kind: OperationKind) -> GraphQLObjectType | None:
    """Root object type of the schema for an operation kind, if declared."""
    if kind == "query":
        return schema.query_type
    if kind == "mutation":
        return schema.mutation_type
    if kind == "subscription":
        return schema.subscription_type
    return None


def possible_types(schema: GraphQLSchema, type_: GraphQLNamedType) -> list[GraphQLObjectType]:
    """Implementing object types of an interface or union, in schema order."""
    if is_interface_type(type_) or is_union_type(type_):
        return list(schema.get_possible_types(type_))
    return []


def parse_fragment_segment(segment: str) -> str | None:
    """Return the type name of a ``... on Type`` segment, or None for a field."""
    if segment.startswith(FRAGMENT_PREFIX):
        return segment[len(FRAGMENT_PREFIX):].strip() or None
    return None
