"""
Cell dispatch for schema fields.

Scalar kinds get a text input; object and array kinds get a launcher that
opens a nested editor.
"""

import logging
from typing import Any, Callable, Optional

from .exceptions import UnknownFieldKindError
from .elements import ScalarCell
from .nested import NestedEditorToggle
from .schema import FieldKind, FieldSpec

logger = logging.getLogger(__name__)

# The primitive kinds edited with a text input.
# Object and array kinds get a nested editor.
SCALAR_KINDS = frozenset({FieldKind.STRING, FieldKind.BOOLEAN, FieldKind.NUMBER, FieldKind.DATE})
NESTED_KINDS = frozenset({FieldKind.OBJECT, FieldKind.ARRAY})


def is_scalar_kind(kind: Any) -> bool:
    try:
        return FieldKind(kind) in SCALAR_KINDS
    except ValueError:
        return False


def is_nested_kind(kind: Any) -> bool:
    try:
        return FieldKind(kind) in NESTED_KINDS
    except ValueError:
        return False


def display_string(value: Any) -> str:
    """Text shown in a scalar input for ``value``."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def dispatch_cell(field_spec: FieldSpec, value: Any, on_change: Callable[[Any], Any], *,
                  key: str, context: Any, current: Optional[Callable[[], Any]] = None) -> Any:
    """
    Build the cell for one field of a row.

    Args:
        field_spec: Schema entry of the field
        value: Current field value (None when absent)
        on_change: Called with the new raw value on every edit
        key: Tree path of the cell, used to address its local state
        context: EditorContext shared by the editor tree
        current: Returns the field value at edit time; nested editors merge
            into it so several edits handled in one rerun all survive

    Returns:
        ScalarCell or NestedCell

    Raises:
        UnknownFieldKindError: the field kind is neither scalar nor nested
    """
    if is_scalar_kind(field_spec.kind):
        # Raw input is forwarded as typed; no coercion here
        return ScalarCell(
            key=key,
            field_spec=field_spec,
            display_value=display_string(value),
            on_change=on_change
        )

    if is_nested_kind(field_spec.kind):
        return NestedEditorToggle(
            field_spec, value, on_change, key=key, context=context, current=current
        ).render()

    logger.error(f"[dispatch_cell] Unsupported field kind '{field_spec.kind}' at {key}")
    raise UnknownFieldKindError(key.rsplit('/', 1)[-1], field_spec.kind)
