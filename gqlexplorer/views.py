"""
View model of the explorer tree.

A renderer-agnostic description of what the explorer shows: which
entities exist, which are checked, and which input control each selected
argument gets. Built fresh from the parsed document on every render; no
styling or layout lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gqlexplorer.types import ChangeCallback, EntityKey, OperationKind, format_key


@dataclass
class InputControl:
    """Control for editing one argument value.

    kind is one of: variable, select, text, date, or a plugin-defined kind.
    """

    kind: str
    value: Any = None
    options: list[str] = field(default_factory=list)
    quoted: bool = False
    plugin: str | None = None
    on_change: ChangeCallback | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": self.kind, "value": self.value}
        if self.options:
            result["options"] = list(self.options)
        if self.quoted:
            result["quoted"] = True
        if self.plugin:
            result["plugin"] = self.plugin
        return result


@dataclass
class ArgumentView:
    """An argument or input-object field checkbox with its control."""

    name: str
    key: EntityKey
    type_name: str
    required: bool
    checked: bool
    description: str | None = None
    control: InputControl | None = None
    fields: list[ArgumentView] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.name}{'*' if self.required else ''}:"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "key": format_key(self.key),
            "type": self.type_name,
            "required": self.required,
            "checked": self.checked,
            "control": self.control.to_dict() if self.control else None,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class FragmentView:
    """Checkbox for an inline fragment on one implementing type."""

    type_name: str
    key: EntityKey
    checked: bool
    fields: list[FieldView] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "key": format_key(self.key),
            "checked": self.checked,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class FieldView:
    """Checkbox for one field, with arguments and children when selected."""

    name: str
    key: EntityKey
    type_name: str
    checked: bool
    description: str | None = None
    alias: str | None = None
    arguments: list[ArgumentView] = field(default_factory=list)
    fields: list[FieldView] = field(default_factory=list)
    fragments: list[FragmentView] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "key": format_key(self.key),
            "type": self.type_name,
            "checked": self.checked,
            "alias": self.alias,
            "arguments": [a.to_dict() for a in self.arguments],
            "fields": [f.to_dict() for f in self.fields],
            "fragments": [f.to_dict() for f in self.fragments],
        }


@dataclass
class OperationView:
    """Root fields of one operation kind."""

    kind: OperationKind
    fields: list[FieldView] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "fields": [f.to_dict() for f in self.fields]}


@dataclass
class ExplorerView:
    """The whole explorer: one section per root operation type."""

    operations: list[OperationView] = field(default_factory=list)
    message: str | None = None

    def operation(self, kind: OperationKind) -> OperationView | None:
        for view in self.operations:
            if view.kind == kind:
                return view
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "operations": [o.to_dict() for o in self.operations],
            "message": self.message,
        }


def find_field(fields: list[FieldView], name: str) -> FieldView | None:
    """Field view by name in a list of field views."""
    for view in fields:
        if view.name == name:
            return view
    return None
