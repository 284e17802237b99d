"""
Bundled date input plugin.

Renders a date picker for arguments whose named type is the ``Date``
scalar. The value is kept as the ISO ``YYYY-MM-DD`` string.
"""

from __future__ import annotations

from typing import Any, Mapping

from graphql import StringValueNode, is_scalar_type

from gqlexplorer.plugins.registry import ArgumentContext, ScalarInputPlugin
from gqlexplorer.types import ChangeCallback
from gqlexplorer.views import InputControl

DATE_SCALAR_NAME = "Date"


class DateInputPlugin:
    """Date picker for ``Date`` scalar arguments."""

    name = "date-input"

    def can_process(self, context: ArgumentContext) -> bool:
        return is_scalar_type(context.type) and context.type.name == DATE_SCALAR_NAME

    def render(
        self,
        context: ArgumentContext,
        style: Mapping[str, Any],
        on_change: ChangeCallback,
    ) -> InputControl:
        value = context.value.value if isinstance(context.value, StringValueNode) else ""
        return InputControl(kind="date", value=value, on_change=on_change)


def bundled_plugins() -> list[ScalarInputPlugin]:
    """Plugins appended after caller plugins when bundled plugins are enabled."""
    return [DateInputPlugin()]
