"""
Diff utilities for the table editor.
Summarizes the changes between the loaded document and the edited one using
DeepDiff, for the pending-changes panel.
"""

import json
import logging
import re
from typing import Dict, Any, List

from deepdiff import DeepDiff

logger = logging.getLogger(__name__)

CHANGE_TYPES = [
    'values_changed',
    'type_changes',
    'dictionary_item_added',
    'dictionary_item_removed',
    'iterable_item_added',
    'iterable_item_removed',
]

_PATH_TOKEN_PATTERN = re.compile(r"\['((?:[^'\\]|\\.)*)'\]|\[(\d+)\]")


def calculate_diff(original: Any, modified: Any) -> Dict[str, Any]:
    """
    Calculate differences between the original and edited documents.

    Args:
        original: Document as loaded
        modified: Document after edits

    Returns:
        Dict keyed by DeepDiff change type, each mapping a DeepDiff path to
        its details (old/new values for changes, the value for additions and
        removals)
    """
    diff = DeepDiff(original, modified, verbose_level=2)

    result: Dict[str, Any] = {}
    for change_type in CHANGE_TYPES:
        section = diff.get(change_type)
        if not section:
            continue
        if isinstance(section, dict):
            result[change_type] = dict(section)
        else:
            result[change_type] = {str(path): None for path in section}

    logger.debug(f"[calculate_diff] {sum(len(v) for v in result.values())} changes")
    return result


def has_changes(diff: Dict[str, Any]) -> bool:
    """
    Check if there are any changes in the diff.

    Args:
        diff: Diff dictionary from calculate_diff

    Returns:
        True if there are changes, False otherwise
    """
    if not diff:
        return False

    return any(diff.get(change_type) for change_type in CHANGE_TYPES)


def format_diff_for_display(diff: Dict[str, Any]) -> List[str]:
    """
    Format a diff as one readable line per change.

    Args:
        diff: Diff dictionary from calculate_diff

    Returns:
        Lines such as ``Changed items[1].name: a -> b``
    """
    lines: List[str] = []

    for change_type in CHANGE_TYPES:
        for path, details in diff.get(change_type, {}).items():
            field = _clean_path(path)

            if change_type in ('values_changed', 'type_changes'):
                old_value = details.get('old_value') if isinstance(details, dict) else None
                new_value = details.get('new_value') if isinstance(details, dict) else None
                lines.append(f"Changed {field}: {_format_value(old_value)} -> {_format_value(new_value)}")
            elif change_type.endswith('_added'):
                lines.append(f"Added {field}: {_format_value(details)}")
            else:
                lines.append(f"Removed {field}: {_format_value(details)}")

    return lines


def _clean_path(path: Any) -> str:
    """
    Clean up DeepDiff path for display.

    ``root['items'][1]['name']`` becomes ``items[1].name``.
    """
    display = ""
    for key, index in _PATH_TOKEN_PATTERN.findall(str(path)):
        if index:
            display += f"[{index}]"
        else:
            display += f".{key}" if display else key

    return display or "root"


def _format_value(value: Any, max_length: int = 60) -> str:
    """
    Format a value for display, truncating if necessary.

    Args:
        value: Value to format
        max_length: Maximum length for display

    Returns:
        Formatted string
    """
    if value is None:
        return "None"

    if isinstance(value, (dict, list)):
        text = json.dumps(value, ensure_ascii=False)
    else:
        text = str(value)

    if len(text) > max_length:
        return f"{text[:max_length-3]}..."
    return text
