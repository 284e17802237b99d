"""Tests for explorer configuration."""

import dataclasses

import pytest

from gqlexplorer.config import DEFAULT_CONFIG, ExplorerConfig
from gqlexplorer.plugins import DateInputPlugin
from gqlexplorer.selection_policy import CallableSelectionPolicy, HeuristicSelectionPolicy


class TestExplorerConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.selection_policy is None
        assert DEFAULT_CONFIG.plugins == ()
        assert DEFAULT_CONFIG.enable_bundled_plugins is False
        assert DEFAULT_CONFIG.debug is False

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.debug = True

    def test_plugins_coerced_to_tuple(self):
        config = ExplorerConfig(plugins=[DateInputPlugin()])
        assert isinstance(config.plugins, tuple)

    def test_resolved_policy(self):
        assert isinstance(ExplorerConfig().resolved_policy(), HeuristicSelectionPolicy)
        config = ExplorerConfig(selection_policy=lambda type_: ["id"])
        assert isinstance(config.resolved_policy(), CallableSelectionPolicy)

    def test_plugin_manager(self):
        config = ExplorerConfig(enable_bundled_plugins=True)
        assert [p.name for p in config.plugin_manager().plugins] == ["date-input"]

    def test_with_overrides(self):
        base = ExplorerConfig(style={"color": "blue"})
        override = base.with_overrides(debug=True)
        assert override.debug is True
        assert override.style == {"color": "blue"}
        assert base.debug is False


class TestFromEnv:
    def test_reads_flags(self, monkeypatch):
        monkeypatch.setenv("GQLEXPLORER_DEBUG", "true")
        monkeypatch.setenv("GQLEXPLORER_BUNDLED_PLUGINS", "1")
        config = ExplorerConfig.from_env()
        assert config.debug is True
        assert config.enable_bundled_plugins is True

    def test_unset_is_false(self, monkeypatch):
        monkeypatch.delenv("GQLEXPLORER_DEBUG", raising=False)
        monkeypatch.delenv("GQLEXPLORER_BUNDLED_PLUGINS", raising=False)
        config = ExplorerConfig.from_env()
        assert config.debug is False
        assert config.enable_bundled_plugins is False

    def test_explicit_kwargs_win(self, monkeypatch):
        monkeypatch.setenv("GQLEXPLORER_DEBUG", "yes")
        assert ExplorerConfig.from_env(debug=False).debug is False
