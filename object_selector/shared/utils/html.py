"""HTML entity decoding for stored titles.

Titles are stored entity-encoded (e.g. ``Q&amp;A&#8217;s``). Display text is
produced in two passes: full entity decoding, then one more pass over the
escaped special characters, so doubly-escaped quotes and ampersands
(``&amp;quot;``) also come out as literal text.

Only terminated references (``&name;``, ``&#NNN;``, ``&#xHH;``) are decoded.
Legacy references without the semicolon, which ``html.unescape`` would
accept (``&copy2``), are left as written.
"""

import html
import re

_ENTITY_RE = re.compile(r"&(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);")

_SPECIAL_CHARS: dict[str, str] = {
    "&amp;": "&",
    "&quot;": '"',
    "&#039;": "'",
    "&#39;": "'",
    "&#x27;": "'",
    "&lt;": "<",
    "&gt;": ">",
}
_SPECIAL_CHARS_RE = re.compile("|".join(re.escape(entity) for entity in _SPECIAL_CHARS))


def decode_entities(value: str) -> str:
    """Decode every semicolon-terminated character reference, single pass."""
    return _ENTITY_RE.sub(lambda m: html.unescape(m.group(0)), value)


def decode_special_chars(value: str) -> str:
    """Decode only the escaped special characters (& " ' < >), single pass."""
    return _SPECIAL_CHARS_RE.sub(lambda m: _SPECIAL_CHARS[m.group(0)], value)


def decode_title(raw: str | None) -> str:
    """Return plain display text for a stored title."""
    if not raw:
        return ""
    return decode_special_chars(decode_entities(raw))
