"""Utility modules for feedcomposer."""

from feedcomposer.utils.formatting import format_number, format_relative_time, truncate_text
from feedcomposer.utils.logging import get_logger, setup_logging

__all__ = [
    "format_number",
    "format_relative_time",
    "truncate_text",
    "get_logger",
    "setup_logging",
]
