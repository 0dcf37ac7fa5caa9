"""
Open/closed toggle for nested object and array fields.

While open, the toggle builds a recursive editor scoped to the field value and
wraps it in the scrim capability from the EditorContext. Edits made in the
nested editor flow back through the owning row's ``on_change``.
"""

import logging
from typing import Any, Callable, Optional

from .elements import Button, NestedCell, Table
from .records import append_element, remove_element, replace_element
from .schema import FieldKind, FieldSpec

logger = logging.getLogger(__name__)


class NestedEditorToggle:
    """Launcher cell for one nested field. State lives in ``context.state``."""

    def __init__(self, field_spec: FieldSpec, value: Any, on_change: Callable[[Any], Any], *,
                 key: str, context: Any, current: Optional[Callable[[], Any]] = None):
        self.field_spec = field_spec
        self.value = value
        self.on_change = on_change
        self.key = key
        self.context = context
        self.current = current
        self.state_key = f"{key}/open"

    @property
    def is_open(self) -> bool:
        return bool(self.context.state.get(self.state_key, False))

    def open(self) -> None:
        """Edit activation. No-op when already open."""
        if not self.is_open:
            logger.debug(f"[NestedEditorToggle] Opening {self.key}")
            self.context.state[self.state_key] = True

    def close(self) -> None:
        """Dismissal. No-op when already closed."""
        if self.is_open:
            logger.debug(f"[NestedEditorToggle] Closing {self.key}")
            self.context.state.pop(self.state_key, None)

    def current_value(self) -> Any:
        """Field value at edit time; the rendered value when no source is wired."""
        return self.current() if self.current else self.value

    def is_array_shaped(self) -> bool:
        if isinstance(self.value, list):
            return True
        return self.value is None and self.field_spec.kind == FieldKind.ARRAY

    def render(self) -> NestedCell:
        cell = NestedCell(
            key=self.key,
            field_spec=self.field_spec,
            value=self.value,
            edit_button=Button("Edit", self.open, key=f"{self.key}/edit"),
            is_open=self.is_open
        )
        if cell.is_open:
            cell.overlay = self.context.scrim(self.render_editor(), self.close)
        return cell

    def render_editor(self) -> Table:
        """Build the nested editor table for the current value."""
        from .editors import ArrayEditor, ObjectEditor

        if self.is_array_shaped():
            return ArrayEditor(
                self.field_spec.fields,
                self.value,
                self.update_element,
                self.remove_element,
                self.add_element,
                class_name='editor--inside',
                context=self.context,
                key=f"{self.key}/editor",
                source=self.current_value
            ).render()

        return ObjectEditor(
            self.field_spec.fields,
            self.value,
            self.on_change,
            class_name='editor--inside',
            context=self.context,
            key=f"{self.key}/editor",
            source=self.current_value
        ).render()

    def update_element(self, updated: Any, index: int) -> None:
        self.on_change(replace_element(self.current_value(), index, updated))

    def remove_element(self, removed: Any, index: int) -> None:
        self.on_change(remove_element(self.current_value(), index))

    def add_element(self, element: Any) -> bool:
        self.on_change(append_element(self.current_value(), element))
        return True
