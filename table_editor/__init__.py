"""Schema-driven tabular editor for JSON objects and arrays of objects."""

from .editors import AddObjectRow, ArrayEditor, EditorContext, ObjectEditor
from .exceptions import EditorConfigurationError, MissingPropError, SchemaLoadError, UnknownFieldKindError
from .records import merge_field
from .schema import FieldKind, FieldSpec, Schema, load_schema, parse_schema

__all__ = [
    'AddObjectRow',
    'ArrayEditor',
    'EditorConfigurationError',
    'EditorContext',
    'FieldKind',
    'FieldSpec',
    'MissingPropError',
    'ObjectEditor',
    'Schema',
    'SchemaLoadError',
    'UnknownFieldKindError',
    'load_schema',
    'merge_field',
    'parse_schema',
]
