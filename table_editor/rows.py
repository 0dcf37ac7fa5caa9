"""
Row composition: one row per record, one cell per schema field.

The row owns the merge of a single-field edit into a new whole record. It
keeps no state of its own.
"""

import logging
from typing import Any, Callable, Optional

from .cells import dispatch_cell
from .elements import Button, Icon, Row
from .records import Record, merge_field
from .schema import Schema

logger = logging.getLogger(__name__)


def default_icon() -> Icon:
    return Icon()


def trash_button(on_remove: Callable[[], Any], key: str) -> Button:
    return Button("Trash", on_remove, key=key)


def compose_row(
    schema: Schema,
    record: Optional[Record],
    on_change: Callable[[Record], Any],
    on_remove: Callable[[], Any],
    *,
    key: str,
    context: Any,
    icon: Optional[Callable[[], Any]] = None,
    trash: Optional[Callable[[], Any]] = None,
    class_name: str = "",
    current: Optional[Callable[[], Optional[Record]]] = None
) -> Row:
    """
    Render ``record`` as a table row.

    Args:
        schema: Field specs; iteration order is column order
        record: Record shown in the row, or None when it does not exist yet
        on_change: Receives the whole updated record after any field edit
        on_remove: Called by the default trash button
        key: Tree path of the row
        context: EditorContext shared by the editor tree
        icon: Leading-slot factory; a default icon is used when omitted
        trash: Trailing-slot factory; a trash button is used when omitted
        class_name: Cosmetic row class
        current: Returns the record as it is when an edit arrives. Edits merge
            into it instead of ``record`` so that every edit handled before the
            next render is kept.

    Returns:
        Row view model
    """
    def latest() -> Optional[Record]:
        return current() if current else record

    def change_handler(field_name: str) -> Callable[[Any], Any]:
        def handle(new_value: Any) -> Any:
            logger.debug(f"[compose_row] {key}: field '{field_name}' changed")
            return on_change(merge_field(latest(), field_name, new_value))
        return handle

    def field_source(field_name: str) -> Callable[[], Any]:
        return lambda: _field_value(latest(), field_name)

    cells = [
        dispatch_cell(
            field_spec,
            _field_value(record, field_name),
            change_handler(field_name),
            key=f"{key}/{field_name}",
            context=context,
            current=field_source(field_name)
        )
        for field_name, field_spec in schema.items()
    ]

    return Row(
        key=key,
        leading=icon() if icon else default_icon(),
        cells=cells,
        trailing=trash() if trash else trash_button(on_remove, key=f"{key}/trash"),
        class_name=class_name
    )


def _field_value(record: Optional[Record], field_name: str) -> Any:
    return record.get(field_name) if record is not None else None
