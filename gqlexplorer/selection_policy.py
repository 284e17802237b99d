"""
Default-selection policies.

Decide which fields of an object type are selected automatically when an
inline fragment on that type is first added. The policy runs once per
expansion; an already expanded node is never re-seeded.

Usage:
    from gqlexplorer.selection_policy import HeuristicSelectionPolicy, as_selection_policy

    policy = HeuristicSelectionPolicy()
    policy.default_field_names(user_type)   # ["id", "email"]

    # Plain functions are accepted too
    policy = as_selection_policy(lambda type_: ["id"])
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from graphql import GraphQLObjectType

from gqlexplorer.schema_utils import is_leaf_field_type

DefaultFieldNamesFn = Callable[[GraphQLObjectType], list[str]]

# Connection-style fields that stand in for the whole type when present
CONNECTION_FIELDS = ("edges", "node", "nodes")
MAX_LEAF_FIELDS = 2


@runtime_checkable
class SelectionPolicy(Protocol):
    """Protocol for pluggable default-selection policies."""

    def default_field_names(self, object_type: GraphQLObjectType) -> list[str]:
        """Names of the fields to select when ``object_type`` is first expanded."""
        ...


class HeuristicSelectionPolicy:
    """Built-in policy; the first matching rule wins.

    1. ``id``, plus ``email`` if present, else ``name`` if present
    2. ``edges``, else ``node``, else ``nodes`` alone
    3. The first two leaf-typed fields in declared order
    """

    def default_field_names(self, object_type: GraphQLObjectType) -> list[str]:
        fields = object_type.fields

        if "id" in fields:
            names = ["id"]
            if "email" in fields:
                names.append("email")
            elif "name" in fields:
                names.append("name")
            return names

        for connection_field in CONNECTION_FIELDS:
            if connection_field in fields:
                return [connection_field]

        leaf_names = [name for name, field in fields.items() if is_leaf_field_type(field.type)]
        return leaf_names[:MAX_LEAF_FIELDS]


class CallableSelectionPolicy:
    """Adapts a plain ``type -> [field name]`` function to SelectionPolicy."""

    def __init__(self, func: DefaultFieldNamesFn):
        self._func = func

    def default_field_names(self, object_type: GraphQLObjectType) -> list[str]:
        return list(self._func(object_type))

    def __repr__(self) -> str:
        return f"CallableSelectionPolicy({getattr(self._func, '__name__', self._func)!r})"


def as_selection_policy(
    policy: SelectionPolicy | DefaultFieldNamesFn | None,
) -> SelectionPolicy:
    """Coerce a policy object, plain function or None into a SelectionPolicy."""
    if policy is None:
        return HeuristicSelectionPolicy()
    if isinstance(policy, SelectionPolicy):
        return policy
    if callable(policy):
        return CallableSelectionPolicy(policy)
    raise TypeError(f"Not a selection policy: {policy!r}")


__all__ = [
    "SelectionPolicy",
    "HeuristicSelectionPolicy",
    "CallableSelectionPolicy",
    "as_selection_policy",
    "DefaultFieldNamesFn",
]
