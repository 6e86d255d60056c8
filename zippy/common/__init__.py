"""Common utilities for Zippy."""

from .validators import check_required, check_non_empty_string, is_string_list
from .logging_config import setup_logging, get_logger

__all__ = [
    "check_required",
    "check_non_empty_string",
    "is_string_list",
    "setup_logging",
    "get_logger",
]
