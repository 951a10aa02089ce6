"""
Format-specific preprocessing applied before the shared pipeline.

Runs on control-stripped text that still has its newlines, so line-oriented
formats (CSV rows, markdown headers) keep their structure; whitespace is
collapsed afterwards by the sanitizer.
"""

import re
from typing import Union

import structlog

from ..models.document import FileType

logger = structlog.get_logger(__name__)

CSV_SAMPLE_ROWS = 5

# Pattern definitions applied in order: (pattern, replacement, description)
MARKDOWN_PATTERNS = [
    (re.compile(r"```[\s\S]*?```"), "", "Fenced code blocks"),
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), "", "Header markers"),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1", "Bold"),
    (re.compile(r"\*(.*?)\*"), r"\1", "Italic"),
    (re.compile(r"`(.*?)`"), r"\1", "Inline code"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1", "Links (keep text)"),
]


def clean_pdf_text(text: str) -> str:
    """Turn form feeds into newlines and split words glued by extraction (aB -> a B)."""
    text = text.replace("\f", "\n")
    return re.sub(r"([a-z])([A-Z])", r"\1 \2", text)


def clean_markdown(text: str) -> str:
    """Strip markdown syntax, keeping the readable text."""
    for pattern, replacement, _description in MARKDOWN_PATTERNS:
        text = pattern.sub(replacement, text)
    return text.strip()


def summarize_csv(text: str) -> str:
    """
    Convert CSV content into a short prose summary.

    Lists the header columns (trimmed), the row count (blank lines dropped)
    and the first rows as samples.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return ""

    headers = [h.strip() for h in lines[0].split(",")]
    rows = lines[1:]

    parts = [
        "Data Analysis Summary:",
        f"Headers: {', '.join(headers)}",
        f"Total rows: {len(rows)}",
    ]
    if rows:
        parts.append("")
        parts.append("Sample data:")
        for index, row in enumerate(rows[:CSV_SAMPLE_ROWS], 1):
            parts.append(f"Row {index}: {row}")

    return "\n".join(parts)


def preprocess_document(text: str, file_type: Union[FileType, str]) -> str:
    """
    Apply the preprocessing step for the document's file type.

    Args:
        text: Control-stripped document text
        file_type: Document file type

    Returns:
        Preprocessed text (unchanged for txt, docx and json)
    """
    file_type = FileType(file_type)

    if file_type == FileType.PDF:
        processed = clean_pdf_text(text)
    elif file_type == FileType.MD:
        processed = clean_markdown(text)
    elif file_type == FileType.CSV:
        processed = summarize_csv(text)
    else:
        processed = text

    logger.debug(
        "document_preprocessed",
        file_type=file_type.value,
        input_length=len(text),
        output_length=len(processed),
    )
    return processed
