"""Utility modules for rzd-trains."""

from .text import matches_word_prefix, normalize_message, normalize_query
from .timeformat import (
    format_upstream_date,
    format_upstream_time,
    parse_upstream_value,
)

__all__ = [
    "format_upstream_date",
    "format_upstream_time",
    "matches_word_prefix",
    "normalize_message",
    "normalize_query",
    "parse_upstream_value",
]
