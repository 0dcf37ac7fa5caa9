"""
Main Streamlit application for the JSON table editor.
Loads a schema and a JSON document, then edits the document in a nested table.
"""

import json
import logging
from pathlib import Path
from typing import Any

import streamlit as st

from table_editor.config_loader import load_config, get_config_value
from table_editor.diff_utils import calculate_diff, format_diff_for_display, has_changes
from table_editor.editors import ArrayEditor, EditorContext, ObjectEditor
from table_editor.elements import Icon
from table_editor.error_handler import ErrorHandler, ErrorType
from table_editor.exceptions import EditorConfigurationError
from table_editor.schema import Schema, load_schema
from table_editor.session_manager import SessionManager
from table_editor.streamlit_renderer import TableRenderer


def get_logging_level(level_str):
    """Map string logging level to logging constant."""
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


def configure_logging():
    """Configure root logging from the ``logging`` config section."""
    log_level_str = get_config_value('logging', 'level', 'INFO')
    log_format = get_config_value('logging', 'format', None)
    if log_format:
        logging.basicConfig(level=get_logging_level(log_level_str), format=log_format)
    else:
        logging.basicConfig(level=get_logging_level(log_level_str))
    logging.getLogger(__name__).info(f"Logging configured to level: {log_level_str}")


logger = logging.getLogger(__name__)


def load_document(data_path: str) -> Any:
    """Load the JSON document to edit; a missing file yields an empty document."""
    path = Path(data_path)
    if not path.exists():
        logger.warning(f"Data file {path} not found, starting with an empty document")
        return None

    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def check_document_shape(document: Any, mode: str) -> None:
    """
    Make sure the loaded document matches the editor mode.

    Raises:
        EditorConfigurationError: ``object`` mode without a JSON object, or
            ``array`` mode without a JSON array
    """
    expected, expected_type = ('object', dict) if mode == 'object' else ('array', list)
    if document is None or isinstance(document, expected_type):
        return

    raise EditorConfigurationError(
        f"Editor mode '{mode}' needs a JSON {expected}, but the document is a {type(document).__name__}",
        context={'mode': mode, 'document_type': type(document).__name__},
        recovery_suggestions=[
            "Set editor.mode in config.yaml to match the data file",
            f"Point editor.data at a file holding a JSON {expected}"
        ]
    )


def build_editor(schema: Schema, mode: str):
    """Create the root editor wired to the session's owner callbacks."""
    document = SessionManager.get_document()
    check_document_shape(document, mode)

    icon_text = get_config_value('ui', 'icon', None)
    icon = (lambda: Icon(icon_text)) if icon_text else None
    context = EditorContext(state=SessionManager.get_editor_state())
    class_name = get_config_value('ui', 'class_name', '')

    if mode == 'object':
        return ObjectEditor(
            schema,
            document,
            SessionManager.update_object,
            icon=icon,
            class_name=class_name,
            context=context,
            source=SessionManager.get_document
        )

    return ArrayEditor(
        schema,
        document,
        SessionManager.update_element,
        SessionManager.remove_element,
        SessionManager.add_element,
        icon=icon,
        class_name=class_name,
        context=context,
        source=SessionManager.get_document
    )


def render_sidebar():
    info = SessionManager.get_session_info()
    with st.sidebar:
        st.header(get_config_value('app', 'name', 'JSON Table Editor'))
        st.caption(f"Version {get_config_value('app', 'version', 'Unknown')}")
        st.metric("Items", info['document_size'] if info['document_size'] is not None else 0)
        st.metric("Open nested editors", info['open_editors'])

        if st.button("Reset", disabled=not info['unsaved_changes']):
            SessionManager.reset_document()
            st.rerun()


def render_changes():
    st.subheader("Pending changes")
    diff = calculate_diff(SessionManager.get_original(), SessionManager.get_document())

    if not has_changes(diff):
        st.info("No changes yet.")
        return

    for line in format_diff_for_display(diff):
        st.markdown(f"- {line}")


def main():
    """Main application entry point."""
    config = load_config()
    st.set_page_config(page_title=config['ui']['page_title'], page_icon="📋", layout="wide")

    editor_config = config['editor']

    try:
        schema = load_schema(editor_config['schema'])
    except Exception as e:
        ErrorHandler.handle_error(e, "schema loading", ErrorType.SCHEMA)
        st.stop()

    try:
        document = load_document(editor_config['data'])
    except (OSError, json.JSONDecodeError) as e:
        ErrorHandler.handle_error(e, "document loading", ErrorType.DATA)
        st.stop()

    SessionManager.initialize(document)
    render_sidebar()

    st.title(config['ui']['page_title'])

    try:
        table = build_editor(schema, editor_config.get('mode', 'array')).render()
    except Exception as e:
        ErrorHandler.handle_error(e, "editor construction", ErrorType.CONFIGURATION)
        st.stop()

    TableRenderer().render(table)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Current JSON")
        st.json(SessionManager.get_document())
    with col2:
        ErrorHandler.with_error_handling(render_changes, "change summary", ErrorType.DATA)


if __name__ == "__main__":
    configure_logging()
    main()
