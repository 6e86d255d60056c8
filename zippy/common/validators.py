"""Required-field checks for directory operations.

URL syntax and credential strength are validated by the caller; these
helpers only check presence and basic shape.
"""

from typing import Any, List, Tuple


def missing_fields(**fields: Any) -> List[str]:
    """Return the names of fields whose value is None."""
    return [name for name, value in fields.items() if value is None]


def check_required(**fields: Any) -> Tuple[bool, str]:
    """Check that every given field has a value.

    Returns:
        Tuple of (is_valid, error_message)
    """
    missing = missing_fields(**fields)
    if missing:
        return False, f"Missing required field(s): {', '.join(missing)}"
    return True, ""


def check_non_empty_string(name: str, value: Any) -> Tuple[bool, str]:
    """Check that a value is a non-blank string.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"'{name}' must be a string"
    if not value.strip():
        return False, f"'{name}' must not be empty"
    return True, ""


def is_string_list(value: Any) -> bool:
    """True for a list or tuple whose items are all strings."""
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)
