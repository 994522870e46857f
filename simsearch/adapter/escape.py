# simsearch/adapter/escape.py
"""
Wire conventions for text that travels through single-line host form fields.

Two layers are handled here:

1. Payload markers. The host passes the "values" JSON through a single-line
   text field, so embedded newlines and double quotes inside string fields
   are replaced by textual markers. decode_markers() restores them and
   encode_markers() produces them; decode_markers(encode_markers(s)) == s.

2. Escape sequences. Multi-line text shown in the host UI is stored with
   literal backslash sequences ("\\n", "\\t", "\\r"). normalize_escapes()
   turns them back into real control characters before text is returned.
"""

from __future__ import annotations

NEWLINE_MARKER = "FLOWISENEWLINE"
DOUBLE_QUOTE_MARKER = "FLOWISEDOUBLEQUOTE"

_ESCAPE_SEQUENCES = (
    ("\\n", "\n"),
    ("\\t", "\t"),
    ("\\r", "\r"),
)


def encode_markers(text: str) -> str:
    """Replace newlines and double quotes with their wire markers."""
    return text.replace("\n", NEWLINE_MARKER).replace('"', DOUBLE_QUOTE_MARKER)


def decode_markers(text: str) -> str:
    """Restore newlines and double quotes from their wire markers."""
    return text.replace(NEWLINE_MARKER, "\n").replace(DOUBLE_QUOTE_MARKER, '"')


def normalize_escapes(text: str) -> str:
    """Turn literal backslash sequences written by the host UI into control characters."""
    for escaped, raw in _ESCAPE_SEQUENCES:
        text = text.replace(escaped, raw)
    return text


__all__ = [
    "NEWLINE_MARKER",
    "DOUBLE_QUOTE_MARKER",
    "encode_markers",
    "decode_markers",
    "normalize_escapes",
]
