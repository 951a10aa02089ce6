"""
Unit tests for Pydantic models and the exception hierarchy.
"""

import pytest
from pydantic import ValidationError

from doc_insight.errors import (
    AnalysisError,
    DocInsightError,
    EmptyDocumentError,
    ProviderError,
    TemplateNotFoundError,
)
from doc_insight.models.analysis import Section, SentimentDistribution
from doc_insight.models.document import DocumentMetadata, FileType


class TestSection:
    """Tests for the Section model."""

    @pytest.mark.unit
    def test_word_count_must_match_content(self):
        with pytest.raises(ValidationError):
            Section(title="Summary", content="three words here", confidence=0.85, word_count=2)

    @pytest.mark.unit
    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            Section(title="Summary", content="ok", confidence=1.5, word_count=1)

    @pytest.mark.unit
    def test_valid_section(self):
        section = Section(title="Summary", content="three words here", confidence=0.85, word_count=3)
        assert section.key_points == []
        assert section.citations is None


class TestSentimentDistribution:
    """Tests for SentimentDistribution."""

    @pytest.mark.unit
    def test_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            SentimentDistribution(positive=0.5, negative=0.4, neutral=0.0)

    @pytest.mark.unit
    def test_valid(self):
        dist = SentimentDistribution(positive=0.75, negative=0.25, neutral=0.0)
        assert dist.positive == 0.75


class TestFileType:
    """Tests for FileType.from_filename()."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("report.PDF", FileType.PDF),
            ("notes.markdown", FileType.MD),
            ("notes.md", FileType.MD),
            ("data.csv", FileType.CSV),
            ("README", FileType.TXT),
            ("binary.exe", FileType.TXT),
        ],
    )
    def test_from_filename(self, filename, expected):
        assert FileType.from_filename(filename) == expected

    @pytest.mark.unit
    def test_metadata_defaults(self):
        metadata = DocumentMetadata()
        assert metadata.title == "Untitled Document"
        assert metadata.file_type == FileType.TXT
        assert metadata.created_at.tzinfo is not None


class TestErrors:
    """Tests for the exception hierarchy."""

    @pytest.mark.unit
    def test_provider_error_message(self):
        error = ProviderError("deepseek", "Unauthorized", status_code=401)
        assert error.message == "DeepSeek API error: Unauthorized"
        assert str(error) == error.message
        assert error.status_code == 401
        assert error.to_dict() == {
            "error_type": "ProviderError",
            "message": "DeepSeek API error: Unauthorized",
            "context": {"provider": "deepseek", "status_code": 401},
        }

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "status_code,retryable",
        [(None, True), (429, True), (500, True), (503, True), (400, False), (401, False)],
    )
    def test_provider_error_retryable(self, status_code, retryable):
        assert ProviderError("gemini", "x", status_code=status_code).retryable is retryable

    @pytest.mark.unit
    def test_hierarchy(self):
        for error in (
            EmptyDocumentError(),
            TemplateNotFoundError("missing"),
            ProviderError("gemini", "boom"),
            AnalysisError("Analysis failed: boom"),
        ):
            assert isinstance(error, DocInsightError)

    @pytest.mark.unit
    def test_empty_document_message(self):
        assert EmptyDocumentError().message == (
            "Document content is empty or contains only invalid characters"
        )
        assert TemplateNotFoundError("x").context == {"template_id": "x"}
