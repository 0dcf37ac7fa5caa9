"""
Schema model and loader for the table editor.

A schema is an ordered mapping of field name to FieldSpec. Key order is the
column order of every table rendered from it. Schema files use a
JSON-Schema-like vocabulary: ``type``/``required``/``label`` per field,
``properties`` for nested objects and ``items.properties`` for arrays of
objects.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import EditorConfigurationError, SchemaLoadError, UnknownFieldKindError

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Kinds a schema field can declare."""
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    OBJECT = "object"
    ARRAY = "array"


SUPPORTED_FIELD_TYPES = {kind.value for kind in FieldKind}


class FieldSpec(BaseModel):
    """Descriptor for one schema field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: FieldKind = Field(alias="type")
    required: bool = False
    label: Optional[str] = None
    # Nested shape: the object's own fields, or the element schema of an array
    fields: Dict[str, "FieldSpec"] = Field(default_factory=dict)


FieldSpec.model_rebuild()

Schema = Dict[str, FieldSpec]


def parse_schema(definition: Dict[str, Any], path: str = "") -> Schema:
    """
    Build a Schema from a plain field mapping.

    Args:
        definition: Mapping of field name to field entry
        path: Dotted location of ``definition`` inside the root schema (for messages)

    Returns:
        Ordered mapping of field name to FieldSpec

    Raises:
        UnknownFieldKindError: a field declares an unsupported ``type``
        EditorConfigurationError: any other malformed entry
    """
    if not isinstance(definition, dict):
        raise EditorConfigurationError(
            f"Schema at '{path or '<root>'}' must be a mapping of field names",
            context={'path': path, 'found': type(definition).__name__}
        )

    schema: Schema = {}
    for field_name, entry in definition.items():
        field_path = f"{path}.{field_name}" if path else str(field_name)
        schema[field_name] = _parse_field(field_path, entry)

    return schema


def _parse_field(field_path: str, entry: Any) -> FieldSpec:
    if isinstance(entry, FieldSpec):
        return entry

    if not isinstance(entry, dict):
        raise EditorConfigurationError(
            f"Field '{field_path}' must be a mapping with a 'type' key",
            context={'field': field_path, 'found': type(entry).__name__}
        )

    kind = entry.get('type')
    if kind not in SUPPORTED_FIELD_TYPES:
        raise UnknownFieldKindError(field_path, kind)

    nested: Schema = {}
    if kind in (FieldKind.OBJECT.value, FieldKind.ARRAY.value):
        nested = parse_schema(_nested_definition(entry), field_path)

    try:
        return FieldSpec(
            kind=kind,
            required=entry.get('required', False),
            label=entry.get('label'),
            fields=nested
        )
    except ValidationError as e:
        raise EditorConfigurationError(
            f"Field '{field_path}' is malformed: {e}",
            context={'field': field_path}
        ) from e


def _nested_definition(entry: Dict[str, Any]) -> Dict[str, Any]:
    """Find the nested field mapping of an object or array entry."""
    if 'fields' in entry:
        return entry['fields'] or {}
    if 'properties' in entry:
        return entry['properties'] or {}

    items = entry.get('items')
    if isinstance(items, dict):
        return items.get('properties') or items.get('fields') or {}

    return {}


def column_headers(schema: Schema) -> List[str]:
    """Header text for each column, in schema order."""
    return [spec.label or name for name, spec in schema.items()]


def load_schema(schema_path: Union[str, Path]) -> Schema:
    """
    Load a schema from a YAML or JSON file.

    The document may wrap the field mapping in a top-level ``fields`` key
    or be the field mapping itself.

    Args:
        schema_path: Path to the schema file

    Returns:
        Parsed Schema

    Raises:
        SchemaLoadError: the file is missing, unreadable or not YAML/JSON
        EditorConfigurationError: the document is not a valid schema
    """
    full_path = Path(schema_path)

    if not full_path.exists():
        raise SchemaLoadError(full_path, message=f"Schema file not found: {full_path}")

    suffix = full_path.suffix.lower()
    if suffix not in ('.yaml', '.yml', '.json'):
        raise SchemaLoadError(full_path, message=f"Unsupported schema file format: {full_path.suffix}")

    try:
        with open(full_path, 'r', encoding='utf-8') as f:
            if suffix == '.json':
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError, OSError) as e:
        logger.error(f"Error reading schema {full_path}: {e}")
        raise SchemaLoadError(full_path, e) from e

    if not isinstance(document, dict):
        raise SchemaLoadError(full_path, message=f"Schema document in {full_path} must be a mapping")

    definition = document
    wrapped = document.get('fields')
    if isinstance(wrapped, dict) and not isinstance(wrapped.get('type'), str):
        definition = wrapped

    schema = parse_schema(definition)
    logger.info(f"Successfully loaded schema: {full_path} ({len(schema)} fields)")
    return schema
