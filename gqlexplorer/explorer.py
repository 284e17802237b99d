"""
Explorer session: toggling schema entities in a GraphQL document.

The document text is the single source of truth. Each edit parses the
current text (memoized), rewrites the innermost sibling list through a
synchronizer, splices the result back up through every ancestor, resolves
the operation definition and emits the re-printed text to ``on_edit``. The
caller feeds that text back with ``update_query``; nothing is carried over
between edits except the text, the parse memo and the undo slots.

Usage:
    from gqlexplorer import Explorer

    explorer = Explorer(schema, on_edit=print)
    explorer.toggle_selection("query", ["user"])
    explorer.toggle_selection("query", ["user", "... on Admin"])
    explorer.toggle_argument("query", ["user"], ["id"])
    explorer.set_argument_value("query", ["user"], ["id"], "42")
    view = explorer.render()

Edits never raise: failures are logged and recorded in
``explorer.diagnostics`` and the edit becomes a no-op. Diagnostics found by
``render()`` are replaced on every render. With
``ExplorerConfig(debug=True)`` invariant violations are re-raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from graphql import (
    BooleanValueNode,
    DocumentNode,
    EnumValueNode,
    GraphQLArgument,
    GraphQLField,
    GraphQLInputField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    ListValueNode,
    Node,
    ObjectValueNode,
    VariableNode,
    is_enum_type,
    is_input_object_type,
    is_scalar_type,
)

from gqlexplorer.config import DEFAULT_CONFIG, ExplorerConfig
from gqlexplorer.emitter import DocumentEmitter
from gqlexplorer.exceptions import (
    EntityNotFoundError,
    ExplorerError,
    InvariantViolationError,
    PathResolutionError,
    SchemaMismatchError,
)
from gqlexplorer.logging_config import LogContext, get_logger
from gqlexplorer.operations import commit_operation, locate_operation, operation_selections
from gqlexplorer.parse_cache import ParseMemo, get_parse_memo
from gqlexplorer.plugins import ArgumentContext
from gqlexplorer.schema_utils import (
    is_expandable,
    is_list_input,
    is_required_input,
    parse_fragment_segment,
    possible_types,
    root_type_for,
    selectable_fields,
    unwrap_type,
)
from gqlexplorer.sync import (
    ArgumentSync,
    FieldSync,
    FragmentSync,
    InputFieldSync,
    InputSync,
    NodeSync,
    child_selections,
)
from gqlexplorer.types import (
    OPERATION_KINDS,
    ArgumentPath,
    EditCallback,
    EntityKey,
    OperationKind,
    SelectionPath,
    Selections,
    child_key,
    fragment_segment,
    operation_key,
)
from gqlexplorer.undo import UndoStore
from gqlexplorer.views import (
    ArgumentView,
    ExplorerView,
    FieldView,
    FragmentView,
    InputControl,
    OperationView,
)

logger = get_logger(__name__)

NO_SCHEMA_MESSAGE = "No Schema Available"
MISSING_ROOT_MESSAGE = "Missing query type"

Apply = Callable[[NodeSync, tuple], Optional[tuple]]


@dataclass
class Diagnostic:
    """A skipped edit or a document/schema mismatch found while rendering."""

    error: str
    message: str
    operation: Optional[str] = None
    entity: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "operation": self.operation,
            "entity": self.entity,
            "details": self.details,
        }


def _path_label(kind: str, path: Sequence[str]) -> str:
    return ".".join([kind, *path])


class Explorer:
    """Checkbox-style editing session over one document text."""

    def __init__(
        self,
        schema: GraphQLSchema | None,
        query: str = "",
        on_edit: EditCallback | None = None,
        config: ExplorerConfig | None = None,
        memo: ParseMemo | None = None,
        undo: UndoStore | None = None,
    ):
        self.schema = schema
        self.query = query
        self.config = config or DEFAULT_CONFIG
        self.edit_diagnostics: list[Diagnostic] = []
        self.render_diagnostics: list[Diagnostic] = []
        self._policy = self.config.resolved_policy()
        self._plugins = self.config.plugin_manager()
        self._memo = memo if memo is not None else get_parse_memo()
        self._undo = undo if undo is not None else UndoStore()
        self._emitter = DocumentEmitter(on_edit)

    # ------------------------------------------------------------------
    # Text ownership
    # ------------------------------------------------------------------

    def update_query(self, text: str) -> None:
        """Feed back the current document text (e.g. from ``on_edit``)."""
        self.query = text

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Failed edits in order, followed by what the last render found."""
        return self.edit_diagnostics + self.render_diagnostics

    @property
    def document(self) -> DocumentNode:
        return self._memo.resolve(self.query)

    @property
    def undo(self) -> UndoStore:
        return self._undo

    # ------------------------------------------------------------------
    # Selections (fields and inline fragments)
    # ------------------------------------------------------------------

    def toggle_selection(self, kind: OperationKind, path: SelectionPath) -> str | None:
        """Flip the presence of the field or fragment at ``path``."""
        return self._edit_selection(kind, path, self._presence(None))

    def set_selected(self, kind: OperationKind, path: SelectionPath, selected: bool) -> str | None:
        """Make the field or fragment at ``path`` present or absent; no-op if it already is."""
        return self._edit_selection(kind, path, self._presence(selected))

    def is_selected(self, kind: OperationKind, path: SelectionPath) -> bool:
        if kind not in OPERATION_KINDS:
            return False
        document = self.document
        siblings = operation_selections(locate_operation(document, kind))
        parent_type: GraphQLNamedType | None = root_type_for(self.schema, kind) if self.schema else None
        key = operation_key(kind)
        try:
            for segment in path:
                if parent_type is None:
                    return False
                sync, parent_type = self._selection_sync(kind, path, parent_type, segment, key)
                node = sync.find(siblings)
                if node is None:
                    return False
                siblings, key = child_selections(node), sync.key
        except ExplorerError:
            return False
        return bool(path)

    # ------------------------------------------------------------------
    # Arguments and input-object fields
    # ------------------------------------------------------------------

    def toggle_argument(
        self, kind: OperationKind, field_path: SelectionPath, arg_path: ArgumentPath
    ) -> str | None:
        """Flip the presence of an argument (or nested input field) of a selected field."""
        return self._edit_argument(kind, field_path, arg_path, self._presence(None))

    def set_argument_selected(
        self,
        kind: OperationKind,
        field_path: SelectionPath,
        arg_path: ArgumentPath,
        selected: bool,
    ) -> str | None:
        return self._edit_argument(kind, field_path, arg_path, self._presence(selected))

    def set_argument_value(
        self,
        kind: OperationKind,
        field_path: SelectionPath,
        arg_path: ArgumentPath,
        raw: str,
    ) -> str | None:
        """Re-encode ``raw`` as the literal of a present leaf-typed argument."""

        def apply(sync: NodeSync, siblings: tuple) -> tuple:
            if not isinstance(sync, InputSync):
                raise PathResolutionError(sync.label, "values belong to arguments and input fields")
            return sync.set_value(siblings, raw)

        return self._edit_argument(kind, field_path, arg_path, apply)

    # ------------------------------------------------------------------
    # Edit plumbing
    # ------------------------------------------------------------------

    def _presence(self, selected: bool | None) -> Apply:
        def apply(sync: NodeSync, siblings: tuple) -> tuple | None:
            present = sync.is_present(siblings)
            target = (not present) if selected is None else selected
            if target == present:
                return None
            if target:
                return sync.add(siblings)
            # Children of a removed entity lose their undo slots
            self._undo.evict_descendants(sync.key)
            return sync.remove(siblings)

        return apply

    def _run(self, kind: OperationKind, label: str, edit: Callable[[], str | None]) -> str | None:
        with LogContext(operation=kind, entity=label):
            try:
                return edit()
            except InvariantViolationError as e:
                self._record(self.edit_diagnostics, e, kind, label, "Edit aborted")
                if self.config.debug:
                    raise
                return None
            except ExplorerError as e:
                self._record(self.edit_diagnostics, e, kind, label, "Edit skipped")
                return None

    def _record(
        self,
        target: list[Diagnostic],
        error: ExplorerError,
        kind: str,
        label: str,
        event: str,
    ) -> None:
        diagnostic = Diagnostic(
            error=type(error).__name__,
            message=error.message,
            operation=kind,
            entity=label,
            details=dict(error.details),
        )
        target.append(diagnostic)
        logger.warning(event, error=diagnostic.error, reason=diagnostic.message)

    def _edit_selection(self, kind: OperationKind, path: SelectionPath, apply: Apply) -> str | None:
        path = tuple(path)
        return self._run(
            kind,
            _path_label(kind, path),
            lambda: self._commit(kind, path, apply),
        )

    def _edit_argument(
        self,
        kind: OperationKind,
        field_path: SelectionPath,
        arg_path: ArgumentPath,
        apply: Apply,
    ) -> str | None:
        field_path, arg_path = tuple(field_path), tuple(arg_path)
        label = f"{_path_label(kind, field_path)}({'.'.join(arg_path)})"

        def edit_field(sync: NodeSync, siblings: tuple) -> tuple | None:
            if not isinstance(sync, FieldSync):
                raise PathResolutionError(label, "arguments belong to fields, not fragments")
            node = sync.find(siblings)
            if node is None:
                raise EntityNotFoundError(sync.label)
            arguments = self._edit_inputs(
                label, sync.field.args, tuple(node.arguments or ()), arg_path, sync.key, "argument", apply
            )
            if arguments is None:
                return None
            return sync.set_arguments(siblings, arguments)

        return self._run(kind, label, lambda: self._commit(kind, field_path, edit_field))

    def _commit(self, kind: OperationKind, path: tuple[str, ...], apply: Apply) -> str | None:
        if self.schema is None:
            raise PathResolutionError(_path_label(kind, path), NO_SCHEMA_MESSAGE)
        root = root_type_for(self.schema, kind)
        if root is None:
            raise PathResolutionError(_path_label(kind, path), f"schema has no {kind} type")
        if not path:
            raise PathResolutionError(kind, "empty selection path")

        document = self._memo.resolve(self.query)
        key = operation_key(kind)
        siblings = operation_selections(locate_operation(document, kind))
        selections = self._edit_selections(kind, path, root, siblings, path, key, apply)
        if selections is None:
            return None
        text = commit_operation(document, kind, selections, self._undo, key)
        return self._emitter.emit(text)

    def _edit_selections(
        self,
        kind: OperationKind,
        full_path: tuple[str, ...],
        parent_type: GraphQLNamedType,
        siblings: Selections,
        path: tuple[str, ...],
        key: EntityKey,
        apply: Apply,
    ) -> Selections | None:
        segment, rest = path[0], path[1:]
        sync, child_type = self._selection_sync(kind, full_path, parent_type, segment, key)
        if not rest:
            return apply(sync, siblings)

        node = sync.find(siblings)
        if node is None:
            raise PathResolutionError(_path_label(kind, full_path), f"'{segment}' is not selected")
        children = self._edit_selections(
            kind, full_path, child_type, child_selections(node), rest, sync.key, apply
        )
        if children is None:
            return None
        return sync.modify_selections(siblings, children)

    def _selection_sync(
        self,
        kind: OperationKind,
        full_path: Sequence[str],
        parent_type: GraphQLNamedType,
        segment: str,
        key: EntityKey,
    ) -> tuple[FieldSync | FragmentSync, GraphQLNamedType]:
        type_name = parse_fragment_segment(segment)
        if type_name is not None:
            for implementing in possible_types(self.schema, parent_type):
                if implementing.name == type_name:
                    sync = FragmentSync(
                        implementing,
                        child_key(key, "fragment", type_name),
                        self._undo,
                        self._policy,
                    )
                    return sync, implementing
            raise PathResolutionError(
                _path_label(kind, full_path),
                f"{type_name} does not implement {parent_type.name}",
            )

        schema_field = selectable_fields(parent_type).get(segment)
        if schema_field is None:
            raise PathResolutionError(
                _path_label(kind, full_path),
                f"{parent_type.name} has no field '{segment}'",
            )
        sync = FieldSync(segment, schema_field, child_key(key, "field", segment), self._undo)
        return sync, unwrap_type(schema_field.type)

    def _edit_inputs(
        self,
        label: str,
        entities: dict,
        siblings: tuple,
        path: tuple[str, ...],
        key: EntityKey,
        tag: str,
        apply: Apply,
    ) -> tuple | None:
        if not path:
            raise PathResolutionError(label, "empty argument path")
        name, rest = path[0], path[1:]
        entity = entities.get(name)
        if entity is None:
            raise PathResolutionError(label, f"no {tag.replace('_', ' ')} '{name}'")
        sync = self._input_sync(name, entity, key, tag)
        if not rest:
            return apply(sync, siblings)

        node = sync.find(siblings)
        if node is None:
            raise PathResolutionError(label, f"'{name}' is not set")
        if not is_input_object_type(sync.named_type):
            raise PathResolutionError(label, f"'{name}' is not an input object")
        value = sync.object_value(node)
        fields = self._edit_inputs(
            label, sync.named_type.fields, tuple(value.fields), rest, sync.key, "input_field", apply
        )
        if fields is None:
            return None
        return sync.set_child_fields(siblings, fields)

    def _input_sync(
        self,
        name: str,
        entity: GraphQLArgument | GraphQLInputField,
        parent_key: EntityKey,
        tag: str,
    ) -> InputSync:
        if tag == "argument":
            return ArgumentSync(name, entity, child_key(parent_key, "argument", name), self._undo)
        return InputFieldSync(name, entity, child_key(parent_key, "input_field", name), self._undo)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> ExplorerView:
        """Build the view model from a fresh parse of the current text.

        Undo slots of entities that are no longer visible (their parent
        was deselected, possibly by a text edit) are dropped.
        """
        self.render_diagnostics = []
        if self.schema is None:
            return ExplorerView(message=NO_SCHEMA_MESSAGE)
        roots = [(kind, root_type_for(self.schema, kind)) for kind in OPERATION_KINDS]
        if all(root is None for _, root in roots):
            return ExplorerView(message=MISSING_ROOT_MESSAGE)

        document = self._memo.resolve(self.query)
        live: set[EntityKey] = set()
        view = ExplorerView()
        for kind, root in roots:
            if root is None:
                continue
            key = operation_key(kind)
            live.add(key)
            selections = operation_selections(locate_operation(document, kind))
            operation_view = OperationView(kind=kind)
            # Root fields keep declared order; nested fields are sorted
            for name, schema_field in root.fields.items():
                operation_view.fields.append(
                    self._field_view(kind, name, schema_field, selections, key, (), live)
                )
            view.operations.append(operation_view)

        self._undo.retain(live)
        return view

    def _field_view(
        self,
        kind: OperationKind,
        name: str,
        schema_field: GraphQLField,
        siblings: Selections,
        parent_key: EntityKey,
        parent_path: tuple[str, ...],
        live: set[EntityKey],
    ) -> FieldView:
        sync = FieldSync(name, schema_field, child_key(parent_key, "field", name), self._undo)
        live.add(sync.key)
        node = sync.find(siblings)
        view = FieldView(
            name=name,
            key=sync.key,
            type_name=str(schema_field.type),
            checked=node is not None,
            description=schema_field.description,
        )
        if node is None:
            return view

        view.alias = node.alias.value if node.alias is not None else None
        path = parent_path + (name,)
        arguments = tuple(node.arguments or ())
        for arg_name, argument in schema_field.args.items():
            view.arguments.append(
                self._argument_view(
                    kind, path, (arg_name,), argument, arguments, sync.key, "argument", live
                )
            )

        named = unwrap_type(schema_field.type)
        if is_expandable(named):
            children = child_selections(node)
            view.fields = self._child_field_views(kind, named, children, sync.key, path, live)
            view.fragments = [
                self._fragment_view(kind, implementing, children, sync.key, path, live)
                for implementing in possible_types(self.schema, named)
            ]
        return view

    def _child_field_views(
        self,
        kind: OperationKind,
        parent_type: GraphQLNamedType,
        siblings: Selections,
        parent_key: EntityKey,
        path: tuple[str, ...],
        live: set[EntityKey],
    ) -> list[FieldView]:
        fields = selectable_fields(parent_type)
        return [
            self._field_view(kind, name, fields[name], siblings, parent_key, path, live)
            for name in sorted(fields)
        ]

    def _fragment_view(
        self,
        kind: OperationKind,
        implementing: GraphQLObjectType,
        siblings: Selections,
        parent_key: EntityKey,
        parent_path: tuple[str, ...],
        live: set[EntityKey],
    ) -> FragmentView:
        sync = FragmentSync(
            implementing, child_key(parent_key, "fragment", implementing.name), self._undo, self._policy
        )
        live.add(sync.key)
        node = sync.find(siblings)
        view = FragmentView(type_name=implementing.name, key=sync.key, checked=node is not None)
        if node is not None:
            path = parent_path + (fragment_segment(implementing.name),)
            view.fields = self._child_field_views(
                kind, implementing, child_selections(node), sync.key, path, live
            )
        return view

    def _argument_view(
        self,
        kind: OperationKind,
        field_path: tuple[str, ...],
        arg_path: tuple[str, ...],
        entity: GraphQLArgument | GraphQLInputField,
        siblings: tuple,
        parent_key: EntityKey,
        tag: str,
        live: set[EntityKey],
    ) -> ArgumentView:
        sync = self._input_sync(arg_path[-1], entity, parent_key, tag)
        live.add(sync.key)
        node = sync.find(siblings)
        view = ArgumentView(
            name=sync.name,
            key=sync.key,
            type_name=str(entity.type),
            required=is_required_input(entity),
            checked=node is not None,
            description=entity.description,
        )
        if node is None:
            return view

        value = node.value
        named = sync.named_type
        if isinstance(value, VariableNode):
            view.control = InputControl(kind="variable", value=value.name.value)
        elif is_list_input(entity.type) and isinstance(value, ListValueNode):
            logger.debug("List arguments are not editable", entity=sync.label)
        elif is_scalar_type(named):
            view.control = self._scalar_control(kind, field_path, arg_path, sync, entity, value)
        elif is_enum_type(named):
            if isinstance(value, EnumValueNode):
                view.control = InputControl(
                    kind="select",
                    value=value.value,
                    options=list(named.values),
                    on_change=self._on_change(kind, field_path, arg_path),
                )
            else:
                self._mismatch(kind, sync, "enum value", value)
        elif is_input_object_type(named):
            if isinstance(value, ObjectValueNode):
                view.fields = [
                    self._argument_view(
                        kind,
                        field_path,
                        arg_path + (field_name,),
                        input_field,
                        tuple(value.fields),
                        sync.key,
                        "input_field",
                        live,
                    )
                    for field_name, input_field in named.fields.items()
                ]
            else:
                self._mismatch(kind, sync, "object value", value)
        return view

    def _scalar_control(
        self,
        kind: OperationKind,
        field_path: tuple[str, ...],
        arg_path: tuple[str, ...],
        sync: InputSync,
        entity: GraphQLArgument | GraphQLInputField,
        value: Node,
    ) -> InputControl:
        on_change = self._on_change(kind, field_path, arg_path)
        context = ArgumentContext(name=sync.name, definition=entity, type=sync.named_type, value=value)
        control = self._plugins.process(context, self.config.style, on_change)
        if control is not None:
            return control
        if sync.named_type.name == "Boolean":
            selected = str(value.value).lower() if isinstance(value, BooleanValueNode) else None
            return InputControl(
                kind="select", value=selected, options=["true", "false"], on_change=on_change
            )
        raw = getattr(value, "value", None)
        return InputControl(
            kind="text",
            value=raw if isinstance(raw, str) else "",
            quoted=sync.named_type.name == "String",
            on_change=on_change,
        )

    def _on_change(
        self, kind: OperationKind, field_path: tuple[str, ...], arg_path: tuple[str, ...]
    ) -> Callable[[str], str | None]:
        def on_change(raw: str) -> str | None:
            return self.set_argument_value(kind, field_path, arg_path, raw)

        return on_change

    def _mismatch(self, kind: OperationKind, sync: InputSync, expected: str, value: Node) -> None:
        error = SchemaMismatchError(sync.label, expected, value.kind)
        with LogContext(operation=kind, entity=sync.label):
            self._record(self.render_diagnostics, error, kind, sync.label, "Argument mismatch")


__all__ = ["Explorer", "Diagnostic", "NO_SCHEMA_MESSAGE", "MISSING_ROOT_MESSAGE"]
