"""
Streamlit renderer for editor tables.

Draws a Table view model as a grid of ``st.columns``: the icon column, one
column per schema field, then the action column. Open nested editors are drawn
below their row inside a bordered container with a Close button.
"""

import hashlib
import logging
from typing import Any, Callable, List

import streamlit as st

from .elements import Blank, Button, Icon, NestedCell, Row, ScalarCell, Scrim, Table

logger = logging.getLogger(__name__)

SLOT_WIDTH = 1
FIELD_WIDTH = 3


def _widget_key(cell: ScalarCell) -> str:
    """
    Key for a scalar input.

    The displayed value is part of the key so the widget always shows the
    record value, even after the add row clears or an element is removed.
    """
    digest = hashlib.md5(cell.display_value.encode('utf-8')).hexdigest()[:8]
    return f"{cell.key}#{digest}"


def _forward_input(widget_key: str, on_change: Callable[[Any], Any]) -> None:
    on_change(st.session_state[widget_key])


class TableRenderer:
    """Draws editor tables with Streamlit widgets."""

    def render(self, table: Table) -> None:
        widths = self._column_widths(table)
        self._render_header(table, widths)

        for row in table.rows:
            self._render_row(row, widths)
            for overlay in row.open_overlays():
                self.render_scrim(overlay)

    def render_scrim(self, scrim: Any) -> None:
        """Draw an open nested editor with its dismiss control."""
        if not isinstance(scrim, Scrim):
            # Produced by a caller-supplied scrim capability
            st.write(scrim)
            return

        with st.container(border=True):
            col1, col2 = st.columns([6, 1])
            with col1:
                st.caption(" / ".join(part for part in scrim.content.key.split('/') if part != 'editor'))
            with col2:
                st.button("Close", key=f"{scrim.content.key}/close", on_click=scrim.on_dismiss)

            self.render(scrim.content)

    @staticmethod
    def _column_widths(table: Table) -> List[int]:
        return [SLOT_WIDTH] + [FIELD_WIDTH] * len(table.headers) + [SLOT_WIDTH]

    def _render_header(self, table: Table, widths: List[int]) -> None:
        columns = st.columns(widths)
        # First and last columns are the icon and action columns
        for column, header in zip(columns[1:-1], table.headers):
            with column:
                st.markdown(f"**{header}**")

    def _render_row(self, row: Row, widths: List[int]) -> None:
        columns = st.columns(widths)

        with columns[0]:
            self._render_slot(row.leading)

        for column, cell in zip(columns[1:-1], row.cells):
            with column:
                self._render_cell(cell)

        with columns[-1]:
            self._render_slot(row.trailing)

    def _render_cell(self, cell: Any) -> None:
        if isinstance(cell, ScalarCell):
            widget_key = _widget_key(cell)
            st.text_input(
                cell.key,
                value=cell.display_value,
                key=widget_key,
                placeholder="required" if cell.required else "",
                label_visibility="collapsed",
                on_change=_forward_input,
                args=(widget_key, cell.on_change)
            )
        elif isinstance(cell, NestedCell):
            button = cell.edit_button
            st.button(button.label, key=button.key, on_click=button.on_click, disabled=cell.is_open)
        else:
            logger.warning(f"[TableRenderer] Unknown cell type {type(cell).__name__}")

    @staticmethod
    def _render_slot(slot: Any) -> None:
        if slot is None or isinstance(slot, Blank):
            return
        if isinstance(slot, Icon):
            st.markdown(slot.text)
        elif isinstance(slot, Button):
            st.button(slot.label, key=slot.key or None, on_click=slot.on_click)
        else:
            st.write(slot)
