# Text sanitization and format preprocessing

from .sanitizer import (
    UNTITLED_DOCUMENT,
    count_words,
    normalize_whitespace,
    sanitize,
    sanitize_title,
    strip_control_characters,
)
from .decoding import decode_document_bytes
from .preprocessing import (
    clean_markdown,
    clean_pdf_text,
    preprocess_document,
    summarize_csv,
)

__all__ = [
    "UNTITLED_DOCUMENT",
    "count_words",
    "normalize_whitespace",
    "sanitize",
    "sanitize_title",
    "strip_control_characters",
    "decode_document_bytes",
    "clean_markdown",
    "clean_pdf_text",
    "preprocess_document",
    "summarize_csv",
]
