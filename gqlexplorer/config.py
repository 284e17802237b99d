"""
Explorer configuration.

Bundles the pluggable pieces (default-selection policy, input-control
plugins) with a few switches, with support for environment variable
overrides.

Usage:
    from gqlexplorer.config import ExplorerConfig

    config = ExplorerConfig(selection_policy=lambda type_: ["id"])
    debug_config = config.with_overrides(debug=True)
    env_config = ExplorerConfig.from_env()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from gqlexplorer.plugins import ScalarInputPlugin, ScalarInputPluginManager
from gqlexplorer.selection_policy import DefaultFieldNamesFn, SelectionPolicy, as_selection_policy

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ExplorerConfig:
    """Configuration for an Explorer session.

    Attributes:
        selection_policy: Policy (or plain function) choosing the fields
            selected when a fragment is first added; None uses the heuristic.
        plugins: Input-control plugins, checked in order.
        enable_bundled_plugins: Append the bundled plugins after ``plugins``.
        debug: Re-raise invariant violations instead of absorbing them.
        style: Opaque style settings handed to input-control plugins.
    """

    selection_policy: SelectionPolicy | DefaultFieldNamesFn | None = None
    plugins: tuple[ScalarInputPlugin, ...] = ()
    enable_bundled_plugins: bool = False
    debug: bool = False
    style: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.plugins, tuple):
            object.__setattr__(self, "plugins", tuple(self.plugins))

    def resolved_policy(self) -> SelectionPolicy:
        return as_selection_policy(self.selection_policy)

    def plugin_manager(self) -> ScalarInputPluginManager:
        return ScalarInputPluginManager(list(self.plugins), self.enable_bundled_plugins)

    def with_overrides(
        self,
        selection_policy: SelectionPolicy | DefaultFieldNamesFn | None = None,
        plugins: Optional[Sequence[ScalarInputPlugin]] = None,
        enable_bundled_plugins: Optional[bool] = None,
        debug: Optional[bool] = None,
        style: Optional[Mapping[str, Any]] = None,
    ) -> ExplorerConfig:
        """Create a new config with specified overrides."""
        return ExplorerConfig(
            selection_policy=(
                selection_policy if selection_policy is not None else self.selection_policy
            ),
            plugins=tuple(plugins) if plugins is not None else self.plugins,
            enable_bundled_plugins=(
                enable_bundled_plugins
                if enable_bundled_plugins is not None
                else self.enable_bundled_plugins
            ),
            debug=debug if debug is not None else self.debug,
            style=style if style is not None else self.style,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> ExplorerConfig:
        """Build a config, reading switches not given in ``kwargs`` from the environment.

        Environment variables:
            GQLEXPLORER_DEBUG: re-raise invariant violations
            GQLEXPLORER_BUNDLED_PLUGINS: enable the bundled input plugins
        """
        kwargs.setdefault("debug", _env_flag("GQLEXPLORER_DEBUG", False))
        kwargs.setdefault(
            "enable_bundled_plugins", _env_flag("GQLEXPLORER_BUNDLED_PLUGINS", False)
        )
        return cls(**kwargs)


DEFAULT_CONFIG = ExplorerConfig()
