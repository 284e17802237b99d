"""
Input-control plugins for scalar argument editing.

Plugins are checked in order and the first one that can process an
argument renders its control. Caller-supplied plugins always come before
the bundled ones, which are only appended on request.

Usage:
    from gqlexplorer.plugins import ScalarInputPluginManager

    manager = ScalarInputPluginManager([MyColorPlugin()], enable_bundled_plugins=True)
    control = manager.process(context, style, on_change)   # None: no plugin matched
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from graphql import GraphQLArgument, GraphQLInputField, GraphQLNamedType, ValueNode

from gqlexplorer.exceptions import PluginError
from gqlexplorer.types import ChangeCallback
from gqlexplorer.views import InputControl

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArgumentContext:
    """What a plugin gets to decide on and render an argument."""

    name: str
    definition: GraphQLArgument | GraphQLInputField
    type: GraphQLNamedType
    value: ValueNode | None = None

    @property
    def type_name(self) -> str:
        return self.type.name


@runtime_checkable
class ScalarInputPlugin(Protocol):
    """Protocol for input-control plugins."""

    name: str

    def can_process(self, context: ArgumentContext) -> bool:
        """Whether this plugin renders the control for ``context``."""
        ...

    def render(
        self,
        context: ArgumentContext,
        style: Mapping[str, Any],
        on_change: ChangeCallback,
    ) -> InputControl:
        """Describe the control for ``context``."""
        ...


class ScalarInputPluginManager:
    """Ordered, first-match-wins collection of input-control plugins."""

    def __init__(
        self,
        plugins: Sequence[ScalarInputPlugin] | None = None,
        enable_bundled_plugins: bool = False,
    ):
        # Copy so the caller's list is never extended in place
        enabled = list(plugins or [])
        if enable_bundled_plugins:
            from gqlexplorer.plugins.date_input import bundled_plugins

            enabled.extend(bundled_plugins())
        self._plugins = enabled

    @property
    def plugins(self) -> list[ScalarInputPlugin]:
        return list(self._plugins)

    def find(self, context: ArgumentContext) -> ScalarInputPlugin | None:
        """First plugin able to process ``context``."""
        for plugin in self._plugins:
            try:
                if plugin.can_process(context):
                    return plugin
            except Exception as e:
                logger.warning("%s", PluginError(_plugin_name(plugin), str(e)))
        return None

    def process(
        self,
        context: ArgumentContext,
        style: Mapping[str, Any] | None,
        on_change: ChangeCallback,
    ) -> InputControl | None:
        """Control from the first capable plugin, or None if none matches."""
        plugin = self.find(context)
        if plugin is None:
            return None
        try:
            control = plugin.render(context, style or {}, on_change)
        except Exception as e:
            logger.warning("%s", PluginError(_plugin_name(plugin), str(e)))
            return None
        if control.plugin is None:
            control.plugin = _plugin_name(plugin)
        return control

    def __len__(self) -> int:
        return len(self._plugins)


def _plugin_name(plugin: object) -> str:
    return getattr(plugin, "name", None) or type(plugin).__name__
