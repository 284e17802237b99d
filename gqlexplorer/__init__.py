"""
gqlexplorer: checkbox-style editing of GraphQL documents against a schema

The document text is the single source of truth. Selecting a field,
an inline fragment or an argument rewrites only the affected part of the
parsed document and hands the re-printed text back to the caller.

=== CORE FEATURES (v0.3.0) ===

EDITING:
- Toggle fields and inline fragments anywhere in a selection tree
- Toggle arguments and nested input-object fields
- Typed re-encoding of argument values (Int, Float, Boolean, enums, strings)
- Required arguments and input fields filled with schema-derived defaults
- One-level undo per entity: toggling back restores the removed node verbatim
- Empty operations dropped and restored with their name and variables

RENDERING:
- Renderer-agnostic view model of checked entities and input controls
- Pluggable input controls for custom scalars (bundled Date picker)
- Pluggable default-field policy for new inline fragments

ROBUSTNESS:
- Parse memo keeps the last good document while text is being typed
- Edits never raise; failures become logged diagnostics
"""

from __future__ import annotations

import importlib
from typing import Any

from gqlexplorer.__version__ import __version__

_EXPORT_MAP = {
    'Explorer': ('gqlexplorer.explorer', 'Explorer'),
    'Diagnostic': ('gqlexplorer.explorer', 'Diagnostic'),
    'ExplorerConfig': ('gqlexplorer.config', 'ExplorerConfig'),
    'DEFAULT_CONFIG': ('gqlexplorer.config', 'DEFAULT_CONFIG'),
    'ParseMemo': ('gqlexplorer.parse_cache', 'ParseMemo'),
    'memoize_parse_query': ('gqlexplorer.parse_cache', 'memoize_parse_query'),
    'UndoStore': ('gqlexplorer.undo', 'UndoStore'),
    'SelectionPolicy': ('gqlexplorer.selection_policy', 'SelectionPolicy'),
    'HeuristicSelectionPolicy': ('gqlexplorer.selection_policy', 'HeuristicSelectionPolicy'),
    'ScalarInputPlugin': ('gqlexplorer.plugins', 'ScalarInputPlugin'),
    'ScalarInputPluginManager': ('gqlexplorer.plugins', 'ScalarInputPluginManager'),
    'ArgumentContext': ('gqlexplorer.plugins', 'ArgumentContext'),
    'ExplorerView': ('gqlexplorer.views', 'ExplorerView'),
    'FieldView': ('gqlexplorer.views', 'FieldView'),
    'FragmentView': ('gqlexplorer.views', 'FragmentView'),
    'ArgumentView': ('gqlexplorer.views', 'ArgumentView'),
    'InputControl': ('gqlexplorer.views', 'InputControl'),
    'ExplorerError': ('gqlexplorer.exceptions', 'ExplorerError'),
    'configure_logging': ('gqlexplorer.logging_config', 'configure_logging'),
}

def __getattr__(name: str) -> Any:
    """Lazily import public symbols to avoid heavy import side effects."""
    try:
        module_name, attr_name = _EXPORT_MAP[name]
    except KeyError as exc:
        raise AttributeError(f"module 'gqlexplorer' has no attribute {name!r}") from exc
    module = importlib.import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value

def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))

__all__ = [
    # Session
    "Explorer",
    "Diagnostic",
    "ExplorerConfig",
    "DEFAULT_CONFIG",
    # Engine
    "ParseMemo",
    "memoize_parse_query",
    "UndoStore",
    # Extension points
    "SelectionPolicy",
    "HeuristicSelectionPolicy",
    "ScalarInputPlugin",
    "ScalarInputPluginManager",
    "ArgumentContext",
    # Views
    "ExplorerView",
    "FieldView",
    "FragmentView",
    "ArgumentView",
    "InputControl",
    # Errors and logging
    "ExplorerError",
    "configure_logging",
]
