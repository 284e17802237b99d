"""Input-control plugins for scalar argument editing."""

from gqlexplorer.plugins.date_input import DateInputPlugin, bundled_plugins
from gqlexplorer.plugins.registry import (
    ArgumentContext,
    ScalarInputPlugin,
    ScalarInputPluginManager,
)

__all__ = [
    "ArgumentContext",
    "ScalarInputPlugin",
    "ScalarInputPluginManager",
    "DateInputPlugin",
    "bundled_plugins",
]
