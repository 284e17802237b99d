"""
Default-value generation for arguments and input-object fields.

Turns raw control input into typed GraphQL literals and seeds freshly added
arguments with canonical values. Fallbacks never raise to the caller:

- Int/Float text that the scalar rejects becomes a String literal.
- Boolean text other than ``true``/``false`` becomes ``false``.
- Unknown enum names fall back to the enum's first declared value.

Usage:
    from gqlexplorer.defaults import encode_value, default_required_arguments

    node = encode_value(GraphQLInt, "42")          # IntValueNode(value="42")
    args = default_required_arguments(field)       # required args only
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Callable

from graphql import (
    ArgumentNode,
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    GraphQLEnumType,
    GraphQLField,
    GraphQLInputObjectType,
    GraphQLInputType,
    IntValueNode,
    NameNode,
    ObjectFieldNode,
    ObjectValueNode,
    StringValueNode,
    ValueNode,
    is_enum_type,
    is_input_object_type,
    is_leaf_type,
    parse_value,
)

from gqlexplorer.exceptions import UnconstructibleDefaultError
from gqlexplorer.schema_utils import LeafType, is_required_input, unwrap_type


class EnumFallback(str, Enum):
    """Policy applied when raw input names no declared enum value."""

    FIRST_DECLARED = "first_declared"


def first_declared_enum_value(enum_type: GraphQLEnumType) -> EnumValueNode:
    """Enum literal of the first value in declaration order."""
    first = next(iter(enum_type.values))
    return EnumValueNode(value=first)


EnumFallbackFn = Callable[[GraphQLEnumType], EnumValueNode]

ENUM_FALLBACKS: dict[EnumFallback, EnumFallbackFn] = {
    EnumFallback.FIRST_DECLARED: first_declared_enum_value,
}


def _encode_number(scalar: LeafType, raw: str) -> ValueNode:
    # Read the raw text as a GraphQL literal and let the scalar accept or reject it
    parsed = scalar.parse_literal(parse_value(raw))
    if scalar.name == "Int":
        return IntValueNode(value=str(parsed))
    return FloatValueNode(value=str(parsed))


def _encode_boolean(raw: str) -> BooleanValueNode:
    try:
        parsed = json.loads(raw)
    except ValueError:
        return BooleanValueNode(value=False)
    return BooleanValueNode(value=parsed if isinstance(parsed, bool) else False)


def _encode_enum(enum_type: GraphQLEnumType, raw: str, fallback: EnumFallbackFn) -> EnumValueNode:
    try:
        enum_type.parse_value(raw)
    except Exception:
        # Custom enum parse hooks may raise anything
        return fallback(enum_type)
    if not raw:
        return fallback(enum_type)
    return EnumValueNode(value=raw)


def encode_value(
    leaf_type: LeafType,
    raw: str,
    enum_fallback: EnumFallback = EnumFallback.FIRST_DECLARED,
) -> ValueNode:
    """Encode raw control text as a literal of the given leaf type.

    Args:
        leaf_type: Scalar or enum type the literal must satisfy
        raw: Text as typed by the user
        enum_fallback: Named policy for unrecognized enum input

    Returns:
        A value node; never raises for bad input
    """
    if is_enum_type(leaf_type):
        return _encode_enum(leaf_type, raw, ENUM_FALLBACKS[enum_fallback])

    name = leaf_type.name
    if name == "Boolean":
        return _encode_boolean(raw)
    try:
        if name in ("Int", "Float"):
            return _encode_number(leaf_type, raw)
        return StringValueNode(value=str(leaf_type.parse_value(raw)))
    except Exception:
        # Custom scalars raise whatever their parser raises
        return StringValueNode(value=raw)


def default_literal(leaf_type: LeafType) -> ValueNode:
    """Canonical seed literal for a leaf type with no prior user input."""
    if is_enum_type(leaf_type):
        return first_declared_enum_value(leaf_type)
    name = leaf_type.name
    if name == "Float":
        return FloatValueNode(value="1.5")
    if name == "Int":
        return IntValueNode(value="10")
    if name == "Boolean":
        return BooleanValueNode(value=False)
    return StringValueNode(value="")


def default_value_for(entity_name: str, input_type: GraphQLInputType) -> ValueNode:
    """Default value node for an argument or input field of ``input_type``.

    List types are seeded with a single element default, which GraphQL input
    coercion accepts in place of a one-item list.

    Raises:
        UnconstructibleDefaultError: for non-input named types
    """
    named = unwrap_type(input_type)
    if is_input_object_type(named):
        return ObjectValueNode(fields=default_required_input_fields(named))
    if is_leaf_type(named):
        return default_literal(named)
    raise UnconstructibleDefaultError(entity_name, str(input_type))


def _required_defaults(entities: dict, build: Callable[[str, ValueNode], object]) -> tuple:
    return tuple(
        build(name, default_value_for(name, entity.type))
        for name, entity in entities.items()
        if is_required_input(entity)
    )


def default_required_arguments(field: GraphQLField) -> tuple[ArgumentNode, ...]:
    """One argument node per required argument of ``field``, in declared order."""
    return _required_defaults(
        field.args,
        lambda name, value: ArgumentNode(name=NameNode(value=name), value=value),
    )


def default_required_input_fields(
    input_type: GraphQLInputObjectType,
) -> tuple[ObjectFieldNode, ...]:
    """One object field per required field of ``input_type``, recursively defaulted."""
    return _required_defaults(
        input_type.fields,
        lambda name, value: ObjectFieldNode(name=NameNode(value=name), value=value),
    )


__all__ = [
    "EnumFallback",
    "ENUM_FALLBACKS",
    "first_declared_enum_value",
    "encode_value",
    "default_literal",
    "default_value_for",
    "default_required_arguments",
    "default_required_input_fields",
]
