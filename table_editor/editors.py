"""
Tabular editors for JSON objects and arrays of JSON objects.

Both editors are recursive entry points: nested object/array fields open
further editors of the same two kinds. Nothing is mutated in place; every
edit builds a new value and hands it to the caller's callbacks.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, MutableMapping, Optional

from .elements import Blank, Button, Row, Scrim, Table
from .exceptions import EditorConfigurationError, MissingPropError
from .records import Collection, Record
from .rows import compose_row
from .schema import Schema, column_headers, parse_schema

logger = logging.getLogger(__name__)


def _noop(*_args: Any) -> None:
    return None


@dataclass
class EditorContext:
    """
    Capabilities shared by every editor in one tree.

    Attributes:
        state: Local UI state (toggle flags, pending-add buffers) keyed by tree path
        scrim: Overlay capability, called as ``scrim(content, on_dismiss)``
    """
    state: MutableMapping[str, Any] = field(default_factory=dict)
    scrim: Callable[[Table, Callable[[], None]], Any] = Scrim


def _check_props(component: str, props: Dict[str, Any], callbacks: List[str]) -> None:
    for name, value in props.items():
        if value is None:
            raise MissingPropError(component, name)
    for name in callbacks:
        if not callable(props[name]):
            raise EditorConfigurationError(
                f"{component} '{name}' must be callable",
                context={'component': component, 'prop_name': name}
            )


class ObjectEditor:
    """A tabular editor for a single JSON object."""

    def __init__(
        self,
        schema: Schema,
        record: Optional[Record],
        on_update_element: Callable[[Record], Any],
        *,
        icon: Optional[Callable[[], Any]] = None,
        class_name: str = "",
        context: Optional[EditorContext] = None,
        key: str = "editor",
        source: Optional[Callable[[], Optional[Record]]] = None
    ):
        _check_props('ObjectEditor', {
            'schema': schema,
            'on_update_element': on_update_element
        }, ['on_update_element'])

        # Plain field mappings are parsed here so bad kinds fail at construction
        self.schema = parse_schema(schema)
        self.record = record
        self.on_update_element = on_update_element
        self.icon = icon
        self.class_name = class_name
        self.context = context or EditorContext()
        self.key = key
        self.source = source

    def current_record(self) -> Optional[Record]:
        return self.source() if self.source else self.record

    def render(self) -> Table:
        # A single object has nothing to remove, so no trash button
        row = compose_row(
            self.schema,
            self.record,
            self.on_update_element,
            _noop,
            key=f"{self.key}/row",
            context=self.context,
            icon=self.icon,
            trash=Blank,
            current=self.current_record
        )
        return Table(
            key=self.key,
            headers=column_headers(self.schema),
            rows=[row],
            class_names=_class_names('editor--object', self.class_name)
        )


class ArrayEditor:
    """
    A tabular editor for an array of JSON objects.

    Elements are identified by position only. Removing an element shifts the
    index of every element after it, including the paths of their local state.
    """

    def __init__(
        self,
        schema: Schema,
        collection: Optional[Collection],
        on_update_element: Callable[[Record, int], Any],
        on_remove_element: Callable[[Record, int], Any],
        on_add_element: Callable[[Record], Any],
        *,
        icon: Optional[Callable[[], Any]] = None,
        class_name: str = "",
        context: Optional[EditorContext] = None,
        key: str = "editor",
        source: Optional[Callable[[], Optional[Collection]]] = None
    ):
        _check_props('ArrayEditor', {
            'schema': schema,
            'on_update_element': on_update_element,
            'on_remove_element': on_remove_element,
            'on_add_element': on_add_element
        }, ['on_update_element', 'on_remove_element', 'on_add_element'])

        self.schema = parse_schema(schema)
        self.collection = collection
        self.on_update_element = on_update_element
        self.on_remove_element = on_remove_element
        self.on_add_element = on_add_element
        self.icon = icon
        self.class_name = class_name
        self.context = context or EditorContext()
        self.key = key
        self.source = source

    def current_collection(self) -> Optional[Collection]:
        return self.source() if self.source else self.collection

    def render(self) -> Table:
        rows = [self._element_row(idx, element) for idx, element in enumerate(self.collection or [])]
        rows.append(self.add_row().render())

        return Table(
            key=self.key,
            headers=column_headers(self.schema),
            rows=rows,
            class_names=_class_names('editor--array', self.class_name)
        )

    def add_row(self) -> "AddObjectRow":
        return AddObjectRow(self.schema, self.on_add_element, key=f"{self.key}/add", context=self.context)

    def _element_row(self, idx: int, element: Record) -> Row:
        return compose_row(
            self.schema,
            element,
            lambda updated: self.on_update_element(updated, idx),
            lambda: self.on_remove_element(element, idx),
            key=f"{self.key}/row{idx}",
            context=self.context,
            icon=self.icon,
            current=lambda: self._current_element(idx, element)
        )

    def _current_element(self, idx: int, element: Record) -> Optional[Record]:
        collection = self.current_collection()
        if collection is not None and idx < len(collection):
            return collection[idx]
        return element


class AddObjectRow:
    """
    A table row for building a new array element before it is added.

    The pending record lives in the context state. On commit it is handed to
    ``on_add_element``; if that returns anything truthy the row is cleared,
    otherwise the partial input is kept for correction.
    """

    def __init__(self, schema: Schema, on_add_element: Callable[[Record], Any], *,
                 key: str, context: EditorContext):
        self.schema = schema
        self.on_add_element = on_add_element
        self.key = key
        self.context = context
        self.buffer_key = f"{key}/buffer"

    @property
    def buffer(self) -> Record:
        return self.context.state.get(self.buffer_key, {})

    def update_buffer(self, updated: Record) -> None:
        self.context.state[self.buffer_key] = updated

    def commit(self) -> bool:
        """Handler for the "Add" button."""
        pending = self.buffer
        accepted = bool(self.on_add_element(pending))

        if accepted:
            logger.debug(f"[AddObjectRow] {self.key}: element accepted, clearing row")
            self.context.state[self.buffer_key] = {}
        else:
            logger.debug(f"[AddObjectRow] {self.key}: element rejected, keeping input")

        return accepted

    def render(self) -> Row:
        return compose_row(
            self.schema,
            self.buffer,
            self.update_buffer,
            _noop,
            key=self.key,
            context=self.context,
            icon=Blank,
            trash=lambda: Button("Add", self.commit, key=f"{self.key}/commit"),
            class_name='editor__add-object',
            current=lambda: self.buffer
        )


def _class_names(variant: str, extra: str) -> List[str]:
    return [name for name in ('editor', variant, extra) if name]
