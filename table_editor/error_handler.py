"""
Error handling utilities for the table editor app.
Logs errors and shows user-friendly messages with recovery suggestions.
"""

import json
import logging
import traceback
from typing import Any, Callable, Optional

import streamlit as st
import yaml

from .exceptions import EditorConfigurationError, SchemaLoadError, UnknownFieldKindError

logger = logging.getLogger(__name__)


class ErrorType:
    """Error type constants."""
    SCHEMA = "schema"
    CONFIGURATION = "configuration"
    FILE_SYSTEM = "file_system"
    DATA = "data"
    SYSTEM = "system"


class ErrorHandler:
    """Error reporting for the table editor app."""

    @staticmethod
    def handle_error(
        error: Exception,
        context: str,
        error_type: str = ErrorType.SYSTEM,
        user_message: Optional[str] = None,
        show_details: bool = False
    ) -> None:
        """
        Handle errors with user-friendly messages and recovery suggestions.

        Args:
            error: The exception that occurred
            context: Context where the error occurred
            error_type: Type of error (from ErrorType constants)
            user_message: Custom user-friendly message
            show_details: Whether to expand technical details
        """
        logger.error(f"Error in {context}: {str(error)}", exc_info=True)

        if not user_message:
            user_message = ErrorHandler.get_user_friendly_message(error, error_type)

        st.error(user_message)

        if isinstance(error, EditorConfigurationError) and error.recovery_suggestions:
            st.info("💡 **Suggested Actions:**\n" + "\n".join(f"- {s}" for s in error.recovery_suggestions))

        with st.expander("🔍 Technical Details", expanded=show_details):
            st.write(f"**Error Type:** {type(error).__name__}")
            st.write(f"**Context:** {context}")
            st.write(f"**Error Message:** {str(error)}")
            if isinstance(error, EditorConfigurationError):
                st.json(error.get_full_details())
            st.code(traceback.format_exc())

    @staticmethod
    def get_user_friendly_message(error: Exception, error_type: str) -> str:
        """Generate user-friendly error messages based on error type."""
        error_messages = {
            ErrorType.SCHEMA: {
                UnknownFieldKindError: "📋 Schema uses a field type the editor does not support.",
                SchemaLoadError: "📋 Schema file could not be loaded. Please check the schema path and syntax.",
                yaml.YAMLError: "📋 Schema file contains invalid YAML.",
                "default": "📋 Schema error occurred. Please check your schema file."
            },

            ErrorType.CONFIGURATION: {
                EditorConfigurationError: "⚙️ Editor is misconfigured. Please check config.yaml and the schema.",
                "default": "⚙️ Configuration error occurred."
            },

            ErrorType.FILE_SYSTEM: {
                FileNotFoundError: "📁 The requested file could not be found.",
                PermissionError: "🔒 Permission denied. Please check file permissions.",
                "default": "📁 A file system error occurred. Please try again."
            },

            ErrorType.DATA: {
                json.JSONDecodeError: "🔧 Data file contains invalid JSON.",
                "default": "🔧 Data error occurred. Please check the document being edited."
            },

            ErrorType.SYSTEM: {
                "default": "💻 System error occurred. Please try again."
            }
        }

        error_type_messages = error_messages.get(error_type, error_messages[ErrorType.SYSTEM])

        for exception_type, message in error_type_messages.items():
            if exception_type != "default" and isinstance(error, exception_type):
                return message

        return error_type_messages.get("default", "An unexpected error occurred.")

    @staticmethod
    def with_error_handling(
        func: Callable,
        context: str,
        error_type: str = ErrorType.SYSTEM,
        default_return: Any = None
    ) -> Any:
        """
        Run ``func``, reporting any exception instead of raising it.

        Returns:
            Function result or default_return on error
        """
        try:
            return func()
        except Exception as e:
            ErrorHandler.handle_error(e, context, error_type)
            return default_return
