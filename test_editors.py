"""
Tests for the object editor, array editor and add row.
"""

from unittest.mock import MagicMock

import pytest

from table_editor.editors import AddObjectRow, ArrayEditor, EditorContext, ObjectEditor
from table_editor.elements import Blank, Button, Icon
from table_editor.exceptions import EditorConfigurationError, MissingPropError, UnknownFieldKindError
from table_editor.records import append_element, remove_element, replace_element
from table_editor.schema import parse_schema

SCHEMA = parse_schema({
    "a": {"type": "number"},
    "name": {"type": "string"},
})

NESTED_SCHEMA = parse_schema({
    "po_number": {"type": "string"},
    "line_items": {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {
                "description": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "object", "properties": {"tag": {"type": "string"}}}},
            },
        },
    },
})


class TestObjectEditor:
    """Single-object editor."""

    def test_renders_exactly_one_row(self):
        table = ObjectEditor(SCHEMA, {"a": 1}, MagicMock()).render()

        assert len(table.rows) == 1
        assert table.headers == ["a", "name"]
        assert table.class_names == ["editor", "editor--object"]

    def test_absent_object_still_renders_one_row(self):
        on_update = MagicMock()
        table = ObjectEditor(SCHEMA, None, on_update).render()

        table.rows[0].cell("name").on_change("x")

        on_update.assert_called_once_with({"name": "x"})

    def test_no_remove_affordance(self):
        row = ObjectEditor(SCHEMA, {"a": 1}, MagicMock()).render().rows[0]

        assert row.trailing == Blank()
        assert row.leading == Icon()

    def test_custom_icon_and_class_name(self):
        table = ObjectEditor(SCHEMA, {}, MagicMock(), icon=lambda: Icon("#"), class_name="wide").render()

        assert table.rows[0].leading == Icon("#")
        assert table.class_names == ["editor", "editor--object", "wide"]

    def test_update_passes_whole_object(self):
        on_update = MagicMock()
        record = {"a": 1, "name": "A"}

        ObjectEditor(SCHEMA, record, on_update).render().rows[0].cell("a").on_change("2")

        on_update.assert_called_once_with({"a": "2", "name": "A"})
        assert record == {"a": 1, "name": "A"}

    def test_missing_schema_is_configuration_error(self):
        with pytest.raises(MissingPropError) as exc_info:
            ObjectEditor(None, {}, MagicMock())

        assert exc_info.value.prop_name == "schema"

    def test_missing_update_callback_is_configuration_error(self):
        with pytest.raises(MissingPropError):
            ObjectEditor(SCHEMA, {}, None)

    def test_non_callable_callback_is_configuration_error(self):
        with pytest.raises(EditorConfigurationError):
            ObjectEditor(SCHEMA, {}, "not callable")


class TestArrayEditor:
    """Array-of-objects editor."""

    def setup_method(self):
        self.on_update = MagicMock()
        self.on_remove = MagicMock()
        self.on_add = MagicMock(return_value=True)
        self.context = EditorContext()

    def _editor(self, collection, schema=SCHEMA):
        return ArrayEditor(
            schema, collection, self.on_update, self.on_remove, self.on_add, context=self.context
        )

    def test_one_row_per_element_plus_add_row(self):
        table = self._editor([{"a": 1}, {"a": 2}]).render()

        assert len(table.rows) == 3
        assert [row.key for row in table.rows] == ["editor/row0", "editor/row1", "editor/add"]
        assert table.class_names == ["editor", "editor--array"]

    def test_absent_collection_renders_only_add_row(self):
        table = self._editor(None).render()

        assert len(table.rows) == 1
        assert table.rows[0].class_name == "editor__add-object"

    def test_update_scenario(self):
        collection = [{"a": 1}, {"a": 2}]
        table = self._editor(collection).render()

        table.rows[1].cell("a").on_change(9)

        self.on_update.assert_called_once_with({"a": 9}, 1)
        updated, index = self.on_update.call_args[0]
        new_collection = replace_element(collection, index, updated)
        assert new_collection == [{"a": 1}, {"a": 9}]
        assert new_collection[0] is collection[0]

    def test_remove_scenario(self):
        a, b, c = {"name": "A"}, {"name": "B"}, {"name": "C"}
        collection = [a, b, c]
        table = self._editor(collection).render()

        table.rows[1].trailing.on_click()

        self.on_remove.assert_called_once_with(b, 1)
        removed, index = self.on_remove.call_args[0]
        assert removed is b
        assert remove_element(collection, index) == [a, c]
        assert collection == [a, b, c]

    def test_rows_have_trash_buttons(self):
        table = self._editor([{"a": 1}]).render()

        trailing = table.rows[0].trailing
        assert isinstance(trailing, Button)
        assert trailing.label == "Trash"

    def test_column_order_identical_across_rows(self):
        table = self._editor([{"name": "x", "a": 1}, {"a": 2}, {}]).render()

        suffixes = [[cell.key.rsplit("/", 1)[-1] for cell in row.cells] for row in table.rows]
        assert all(s == ["a", "name"] for s in suffixes)

    def test_missing_callbacks_fail_at_construction(self):
        with pytest.raises(MissingPropError) as exc_info:
            ArrayEditor(SCHEMA, [], self.on_update, None, self.on_add)

        assert exc_info.value.prop_name == "on_remove_element"

    def test_nested_cascade_reaches_root(self):
        collection = [{
            "po_number": "PO-1",
            "line_items": [{"description": "x", "tags": [{"tag": "old"}]}],
        }]
        editor = self._editor(collection, schema=NESTED_SCHEMA)

        # Open line_items of row 0, then tags of its first element
        editor.render().rows[0].cell("line_items").edit_button.on_click()
        line_items_table = editor.render().rows[0].cell("line_items").overlay.content
        line_items_table.rows[0].cell("tags").edit_button.on_click()

        line_items_table = editor.render().rows[0].cell("line_items").overlay.content
        tags_table = line_items_table.rows[0].cell("tags").overlay.content
        tags_table.rows[0].cell("tag").on_change("new")

        self.on_update.assert_called_once_with(
            {"po_number": "PO-1", "line_items": [{"description": "x", "tags": [{"tag": "new"}]}]},
            0,
        )
        assert collection[0]["line_items"][0]["tags"][0] == {"tag": "old"}

    def test_toggle_state_lives_outside_the_data(self):
        collection = [{"po_number": "PO-1", "line_items": []}]
        editor = self._editor(collection, schema=NESTED_SCHEMA)

        editor.render().rows[0].cell("line_items").edit_button.on_click()

        assert collection == [{"po_number": "PO-1", "line_items": []}]
        assert self.context.state == {"editor/row0/line_items/open": True}


class TestAddObjectRow:
    """Pending-add buffer."""

    def setup_method(self):
        self.context = EditorContext()

    def _add_row(self, on_add):
        return AddObjectRow(SCHEMA, on_add, key="editor/add", context=self.context)

    def test_buffer_starts_empty(self):
        assert self._add_row(MagicMock()).buffer == {}

    def test_edits_accumulate_in_buffer(self):
        add_row = self._add_row(MagicMock())

        add_row.render().cell("name").on_change("X")
        assert add_row.buffer == {"name": "X"}

        add_row.render().cell("a").on_change("1")
        assert add_row.buffer == {"name": "X", "a": "1"}

    def test_accepted_commit_resets_buffer(self):
        on_add = MagicMock(return_value=True)
        add_row = self._add_row(on_add)
        add_row.render().cell("name").on_change("X")

        assert add_row.commit() is True

        on_add.assert_called_once_with({"name": "X"})
        assert add_row.buffer == {}

    def test_rejected_commit_keeps_buffer(self):
        on_add = MagicMock(return_value=False)
        add_row = self._add_row(on_add)
        add_row.render().cell("name").on_change("X")

        assert add_row.commit() is False

        on_add.assert_called_once_with({"name": "X"})
        assert add_row.buffer == {"name": "X"}

    @pytest.mark.parametrize("result", [None, 0, ""])
    def test_falsy_results_count_as_rejection(self, result):
        add_row = self._add_row(MagicMock(return_value=result))
        add_row.render().cell("name").on_change("X")

        add_row.commit()

        assert add_row.buffer == {"name": "X"}

    def test_buffer_edits_do_not_reach_collection_owner(self):
        on_add = MagicMock(return_value=True)
        add_row = self._add_row(on_add)

        add_row.render().cell("name").on_change("X")

        on_add.assert_not_called()

    def test_slots(self):
        row = self._add_row(MagicMock()).render()

        assert row.leading == Blank()
        assert isinstance(row.trailing, Button)
        assert row.trailing.label == "Add"
        assert row.trailing.key == "editor/add/commit"

    def test_add_button_commits(self):
        on_add = MagicMock(return_value=True)
        add_row = self._add_row(on_add)
        add_row.render().cell("name").on_change("X")

        add_row.render().trailing.on_click()

        on_add.assert_called_once_with({"name": "X"})
        assert add_row.buffer == {}

    def test_array_editor_add_row_shares_state(self):
        on_add = MagicMock(return_value=False)
        editor = ArrayEditor(SCHEMA, [], MagicMock(), MagicMock(), on_add, context=self.context)

        editor.render().rows[-1].cell("name").on_change("X")
        editor.render().rows[-1].trailing.on_click()

        on_add.assert_called_once_with({"name": "X"})
        assert editor.add_row().buffer == {"name": "X"}


class TestPlainMappingSchema:
    """Editors accept an unparsed field mapping."""

    def test_object_editor_parses_mapping(self):
        table = ObjectEditor({"name": {"type": "string"}}, {"name": "A"}, MagicMock()).render()

        assert table.rows[0].cell("name").display_value == "A"

    def test_object_editor_rejects_unknown_kind_at_construction(self):
        with pytest.raises(UnknownFieldKindError) as exc_info:
            ObjectEditor({"name": {"type": "string"}, "bad": {"type": "matrix"}}, {}, MagicMock())

        assert exc_info.value.field_name == "bad"

    def test_array_editor_rejects_unknown_kind_at_construction(self):
        with pytest.raises(UnknownFieldKindError):
            ArrayEditor({"bad": {"type": "matrix"}}, [], MagicMock(), MagicMock(), MagicMock())

    def test_malformed_entry_is_configuration_error(self):
        with pytest.raises(EditorConfigurationError):
            ObjectEditor({"name": "string"}, {}, MagicMock())


class TestEditsBeforeNextRender:
    """Several edits handled from one rendered table are all kept."""

    def setup_method(self):
        self.document = {"doc": None}
        self.context = EditorContext()

    def _array_editor(self, schema=SCHEMA):
        def on_update(updated, index):
            self.document["doc"] = replace_element(self.document["doc"], index, updated)

        def on_remove(removed, index):
            self.document["doc"] = remove_element(self.document["doc"], index)

        def on_add(element):
            self.document["doc"] = append_element(self.document["doc"], element)
            return True

        return ArrayEditor(
            schema, self.document["doc"], on_update, on_remove, on_add,
            context=self.context, source=lambda: self.document["doc"]
        )

    def test_two_fields_of_one_element(self):
        self.document["doc"] = [{"a": 1, "name": "A"}, {"a": 2, "name": "B"}]
        row = self._array_editor().render().rows[0]

        row.cell("name").on_change("X")
        row.cell("a").on_change("9")

        assert self.document["doc"] == [{"a": "9", "name": "X"}, {"a": 2, "name": "B"}]

    def test_two_fields_of_one_object(self):
        document = {"doc": {"a": 1, "name": "A"}}

        def on_update(updated):
            document["doc"] = updated

        row = ObjectEditor(SCHEMA, document["doc"], on_update, source=lambda: document["doc"]).render().rows[0]
        row.cell("name").on_change("X")
        row.cell("a").on_change("9")

        assert document["doc"] == {"a": "9", "name": "X"}

    def test_nested_edit_and_root_edit_from_one_render(self):
        self.document["doc"] = [{"po_number": "PO-1", "line_items": [{"description": "x"}]}]
        self._array_editor(NESTED_SCHEMA).render().rows[0].cell("line_items").edit_button.on_click()
        row = self._array_editor(NESTED_SCHEMA).render().rows[0]

        row.cell("line_items").overlay.content.rows[0].cell("description").on_change("y")
        row.cell("po_number").on_change("PO-2")

        assert self.document["doc"] == [{"po_number": "PO-2", "line_items": [{"description": "y"}]}]

    def test_nested_add_after_nested_edit_from_one_render(self):
        self.document["doc"] = [{"po_number": "PO-1", "line_items": [{"description": "x"}]}]
        self._array_editor(NESTED_SCHEMA).render().rows[0].cell("line_items").edit_button.on_click()
        nested = self._array_editor(NESTED_SCHEMA).render().rows[0].cell("line_items").overlay.content

        nested.rows[0].cell("description").on_change("y")
        nested.rows[-1].cell("description").on_change("new")
        nested.rows[-1].trailing.on_click()

        assert self.document["doc"][0]["line_items"] == [{"description": "y"}, {"description": "new"}]

    def test_two_add_row_fields(self):
        self.document["doc"] = []
        add_row = self._array_editor().render().rows[-1]

        add_row.cell("name").on_change("X")
        add_row.cell("a").on_change("1")
        add_row.trailing.on_click()

        assert self.document["doc"] == [{"name": "X", "a": "1"}]
