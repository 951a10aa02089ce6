"""
Document metadata model.

Built by the caller at upload time and enriched by the analyzer after
sanitization (word count, detected language, encoding).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FileType(str, Enum):
    """Supported upload formats."""
    PDF = "pdf"
    TXT = "txt"
    MD = "md"
    DOCX = "docx"
    CSV = "csv"
    JSON = "json"

    @classmethod
    def from_filename(cls, filename: str) -> "FileType":
        """Map a file extension to a FileType, defaulting to TXT."""
        suffix = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if suffix == "markdown":
            return cls.MD
        try:
            return cls(suffix)
        except ValueError:
            return cls.TXT


class DocumentMetadata(BaseModel):
    """Metadata describing the analyzed document."""

    title: str = "Untitled Document"
    file_type: FileType = FileType.TXT
    file_size: int = Field(default=0, ge=0, description="Size in bytes")
    word_count: int = Field(default=0, ge=0)
    page_count: Optional[int] = None
    language: Optional[str] = None
    encoding: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_modified: Optional[datetime] = None
