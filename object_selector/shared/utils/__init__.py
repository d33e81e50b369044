"""Shared utilities: datetime and HTML entity helpers."""

from object_selector.shared.utils.datetime import ensure_utc, format_gmt, utc_now
from object_selector.shared.utils.html import decode_entities, decode_special_chars, decode_title

__all__ = [
    "decode_entities",
    "decode_special_chars",
    "decode_title",
    "ensure_utc",
    "format_gmt",
    "utc_now",
]
