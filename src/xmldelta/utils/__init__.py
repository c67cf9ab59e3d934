"""Utility modules for xmldelta.

Provides:
- logger: get_logger for logging
- text: XML escaping and case-aware string comparison
"""

from xmldelta.utils.logger import get_logger
from xmldelta.utils.text import escape_attribute, escape_text, text_equals

__all__ = [
    "escape_attribute",
    "escape_text",
    "get_logger",
    "text_equals",
]
