"""
Immutable update helpers for records and collections.

None of these functions mutate their inputs. Every result is a new container
that shares the untouched values of the original by reference.
"""

import logging
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Collection = List[Record]


def merge_field(record: Optional[Record], key: str, value: Any) -> Record:
    """
    Return a copy of ``record`` with ``key`` set to ``value``.

    An absent record is not an error: the result is the single-field record
    ``{key: value}``.

    Args:
        record: Record being edited, or None if it has not been created yet
        key: Field to replace
        value: New value for the field

    Returns:
        New record
    """
    if record is None:
        logger.debug(f"[merge_field] Creating record from absent value with field '{key}'")
        return {key: value}

    updated = dict(record)
    updated[key] = value
    return updated


def replace_element(collection: Optional[Collection], index: int, element: Any) -> List[Any]:
    """Return a copy of ``collection`` with the element at ``index`` replaced."""
    updated = list(collection or [])
    updated[index] = element
    return updated


def remove_element(collection: Optional[Collection], index: int) -> List[Any]:
    """Return a copy of ``collection`` without the element at ``index``."""
    return [el for idx, el in enumerate(collection or []) if idx != index]


def append_element(collection: Optional[Collection], element: Any) -> List[Any]:
    """Return a copy of ``collection`` with ``element`` appended."""
    return [*(collection or []), element]
