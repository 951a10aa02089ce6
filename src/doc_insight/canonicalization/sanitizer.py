"""
Content sanitization for uploaded documents and provider responses.

Removes ASCII control characters and their escaped \\uXXXX forms, decodes other
escaped code points, collapses whitespace and trims. Every function here is
total: malformed input yields a (possibly empty) string, never an exception.
"""

import re

# 0x00-0x08, 0x0B, 0x0C, 0x0E-0x1F, 0x7F. Tab, LF and CR are kept.
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

UNICODE_ESCAPE_PATTERN = re.compile(r"\\u([0-9A-Fa-f]{4})")

WHITESPACE_PATTERN = re.compile(r"\s+")

MAX_TITLE_LENGTH = 255
UNTITLED_DOCUMENT = "Untitled Document"


def _is_control_code_point(code_point: int) -> bool:
    return code_point <= 31 or code_point == 127


def _replace_escape(match: re.Match) -> str:
    code_point = int(match.group(1), 16)
    if _is_control_code_point(code_point):
        return ""
    # Lone surrogates cannot be encoded as UTF-8; leave them escaped
    if 0xD800 <= code_point <= 0xDFFF:
        return match.group(0)
    return chr(code_point)


def strip_control_characters(text: str) -> str:
    """
    Remove control characters and \\uXXXX escapes, keeping line structure.

    Removal can splice fragments into a new escape sequence ("\\u00" + "\\x01" +
    "01"), so passes repeat until the text stops changing.

    Args:
        text: Raw text

    Returns:
        Text without control characters; newlines and tabs are preserved
    """
    if not text:
        return ""

    previous = None
    while text != previous:
        previous = text
        text = CONTROL_CHARS_PATTERN.sub("", text)
        text = UNICODE_ESCAPE_PATTERN.sub(_replace_escape, text)
    return text


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def sanitize(text: str) -> str:
    """
    Sanitize document or response text.

    Idempotent: sanitize(sanitize(x)) == sanitize(x).

    Examples:
        >>> sanitize("Hello\\x00   world\\n\\n")
        'Hello world'
        >>> sanitize("caf\\\\u00e9 \\\\u0007ok")
        'café ok'
    """
    return normalize_whitespace(strip_control_characters(text))


def sanitize_title(title: str) -> str:
    """Sanitize a title and bound it for storage, with a fixed fallback."""
    cleaned = sanitize(title)[:MAX_TITLE_LENGTH].strip()
    return cleaned or UNTITLED_DOCUMENT


def count_words(text: str) -> int:
    """Number of whitespace-separated tokens (0 for empty text)."""
    return len(text.split()) if text else 0
