"""
Session state management for the table editor app.

The session is the data owner: it holds the document being edited and turns
the editors' update callbacks into new top-level documents.
"""

import copy
import logging
from datetime import datetime
from typing import Dict, Any, MutableMapping, Optional

import streamlit as st

from .records import Record, append_element, remove_element, replace_element

logger = logging.getLogger(__name__)

DOCUMENT_KEY = 'document'
ORIGINAL_KEY = 'original_document'
EDITOR_STATE_KEY = 'editor_state'


class SessionManager:
    """Manages Streamlit session state for the table editor."""

    @staticmethod
    def initialize(document: Any):
        """
        Initialize session keys; existing keys are left untouched.

        Args:
            document: Value loaded for editing (record, collection or None)
        """
        defaults = {
            ORIGINAL_KEY: copy.deepcopy(document),
            DOCUMENT_KEY: copy.deepcopy(document),
            EDITOR_STATE_KEY: {},
            'unsaved_changes': False,
            'last_activity': datetime.now(),
        }

        for key, default_value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = default_value

    @staticmethod
    def get_document() -> Any:
        """Get the current document."""
        return st.session_state.get(DOCUMENT_KEY)

    @staticmethod
    def get_original() -> Any:
        """Get the document as it was loaded."""
        return st.session_state.get(ORIGINAL_KEY)

    @staticmethod
    def set_document(document: Any):
        """Replace the current document and track unsaved changes."""
        st.session_state[DOCUMENT_KEY] = document
        st.session_state['unsaved_changes'] = document != SessionManager.get_original()
        st.session_state['last_activity'] = datetime.now()

    @staticmethod
    def get_editor_state() -> MutableMapping[str, Any]:
        """Local UI state of the editor tree (toggles and pending rows)."""
        if EDITOR_STATE_KEY not in st.session_state:
            st.session_state[EDITOR_STATE_KEY] = {}
        return st.session_state[EDITOR_STATE_KEY]

    @staticmethod
    def has_unsaved_changes() -> bool:
        return st.session_state.get('unsaved_changes', False)

    @staticmethod
    def reset_document():
        """Discard edits and close every nested editor."""
        logger.info("Resetting document to the loaded version")
        SessionManager.set_document(copy.deepcopy(SessionManager.get_original()))
        st.session_state[EDITOR_STATE_KEY] = {}

    # Owner callbacks wired into the root editor

    @staticmethod
    def update_object(updated: Record):
        """Root ObjectEditor update."""
        SessionManager.set_document(updated)

    @staticmethod
    def update_element(updated: Record, index: int):
        """Root ArrayEditor element update."""
        SessionManager.set_document(replace_element(SessionManager.get_document(), index, updated))

    @staticmethod
    def remove_element(removed: Record, index: int):
        """Root ArrayEditor element removal."""
        logger.info(f"Removing element {index}")
        SessionManager.set_document(remove_element(SessionManager.get_document(), index))

    @staticmethod
    def add_element(new_element: Record) -> bool:
        """
        Root ArrayEditor add. Empty rows are rejected so the add row keeps focus.

        Returns:
            True if the element was appended
        """
        if not new_element or all(value in (None, '') for value in new_element.values()):
            logger.warning("Rejected empty element")
            return False

        SessionManager.set_document(append_element(SessionManager.get_document(), new_element))
        logger.info(f"Added element; collection now has {len(SessionManager.get_document())} items")
        return True

    @staticmethod
    def get_session_info() -> Dict[str, Any]:
        """Summary shown in the sidebar."""
        document = SessionManager.get_document()
        size: Optional[int] = len(document) if isinstance(document, (list, dict)) else None
        return {
            'unsaved_changes': SessionManager.has_unsaved_changes(),
            'document_size': size,
            'open_editors': sum(1 for key in SessionManager.get_editor_state() if key.endswith('/open')),
            'last_activity': st.session_state.get('last_activity'),
        }
