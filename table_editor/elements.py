"""
View model produced by the editors.

The editors never draw anything themselves. They build these plain objects,
with the edit callbacks already wired in, and a renderer draws them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .schema import FieldSpec

DEFAULT_ICON_TEXT = "📄"


@dataclass(frozen=True)
class Icon:
    """Leading-slot glyph."""
    text: str = DEFAULT_ICON_TEXT


@dataclass(frozen=True)
class Blank:
    """Empty slot."""


@dataclass(frozen=True)
class Button:
    """Clickable control. ``key`` identifies it across reruns."""
    label: str
    on_click: Callable[[], Any]
    key: str = ""


@dataclass
class Scrim:
    """Dismissible overlay wrapping an open nested editor."""
    content: "Table"
    on_dismiss: Callable[[], None]


@dataclass
class ScalarCell:
    """Text input bound to a scalar field."""
    key: str
    field_spec: FieldSpec
    display_value: str
    on_change: Callable[[Any], None]

    @property
    def required(self) -> bool:
        return self.field_spec.required


@dataclass
class NestedCell:
    """Launcher for a nested object/array editor."""
    key: str
    field_spec: FieldSpec
    value: Any
    edit_button: Button
    is_open: bool = False
    # Set only while open
    overlay: Optional[Any] = None


@dataclass
class Row:
    key: str
    leading: Any
    cells: List[Any]
    trailing: Any
    class_name: str = ""

    def cell(self, field_name: str) -> Any:
        """Find a cell by the field it edits."""
        suffix = f"/{field_name}"
        for cell in self.cells:
            if cell.key.endswith(suffix):
                return cell
        raise KeyError(field_name)

    def open_overlays(self) -> List[Any]:
        """Overlays of the row's open nested cells, in column order."""
        return [
            cell.overlay
            for cell in self.cells
            if isinstance(cell, NestedCell) and cell.overlay is not None
        ]


@dataclass
class Table:
    key: str
    headers: List[str]
    rows: List[Row]
    class_names: List[str] = field(default_factory=list)
