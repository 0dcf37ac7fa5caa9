"""
Custom exception classes for editor configuration errors.

Every error here signals a programming mistake by the integrating caller
(malformed schema, missing callback, unreadable schema file) and is
raised immediately, at construction or load time.
"""

from typing import Optional, Dict, Any, List
from pathlib import Path


class EditorConfigurationError(Exception):
    """
    Base exception for editor configuration errors.

    Attributes:
        message: Error message
        context: Additional context information
        recovery_suggestions: List of suggested recovery actions
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 recovery_suggestions: Optional[List[str]] = None):
        self.message = message
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def get_full_details(self) -> Dict[str, Any]:
        """Get complete error details including context and suggestions."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions
        }


class UnknownFieldKindError(EditorConfigurationError):
    """Raised when a schema field declares a kind the editor cannot render."""

    def __init__(self, field_name: str, kind: Any, message: Optional[str] = None):
        self.field_name = field_name
        self.kind = kind

        if message is None:
            message = f"Field '{field_name}' has unsupported type '{kind}'"

        context = {
            'field_name': field_name,
            'kind': str(kind)
        }

        recovery_suggestions = [
            "Use one of: string, boolean, number, date, object, array",
            f"Check the schema entry for '{field_name}' for typos"
        ]

        super().__init__(message, context, recovery_suggestions)


class MissingPropError(EditorConfigurationError):
    """Raised when an editor is constructed without a required argument."""

    def __init__(self, component: str, prop_name: str, message: Optional[str] = None):
        self.component = component
        self.prop_name = prop_name

        if message is None:
            message = f"{component} requires '{prop_name}'"

        context = {
            'component': component,
            'prop_name': prop_name
        }

        super().__init__(message, context, [f"Pass '{prop_name}' when creating {component}"])


class SchemaLoadError(EditorConfigurationError):
    """
    Raised when a schema file cannot be read or parsed.

    This includes missing files, unsupported suffixes, YAML/JSON syntax errors
    and documents whose shape is not a field mapping.
    """

    def __init__(self, schema_path: Path, original_error: Optional[Exception] = None,
                 message: Optional[str] = None):
        self.schema_path = schema_path
        self.original_error = original_error

        if message is None:
            message = f"Failed to load schema from {schema_path}: {original_error}"

        context = {'schema_path': str(schema_path)}
        if original_error is not None:
            context['original_error_type'] = type(original_error).__name__
            context['original_error_message'] = str(original_error)

        recovery_suggestions = [
            "Check that the schema file exists and is readable",
            "Verify YAML/JSON syntax is correct",
            "Schema files must end in .yaml, .yml or .json"
        ]

        super().__init__(message, context, recovery_suggestions)
