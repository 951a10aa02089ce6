"""
Unit tests for format-specific preprocessing (preprocessing.py).
"""

import pytest

from doc_insight.canonicalization.preprocessing import (
    clean_markdown,
    clean_pdf_text,
    preprocess_document,
    summarize_csv,
)
from doc_insight.models.document import FileType


class TestCleanPdfText:
    """Tests for clean_pdf_text()."""

    @pytest.mark.unit
    def test_form_feed_becomes_newline(self):
        assert clean_pdf_text("page one\fpage two") == "page one\npage two"

    @pytest.mark.unit
    def test_splits_glued_words(self):
        assert clean_pdf_text("endOf sentence") == "end Of sentence"


class TestCleanMarkdown:
    """Tests for clean_markdown()."""

    @pytest.mark.unit
    def test_strips_syntax_and_keeps_text(self):
        text = (
            "# Title\n"
            "**bold** and *italic* `code` [link](http://example.com)\n"
            "```\nprint('hidden')\n```"
        )
        assert clean_markdown(text) == "Title\nbold and italic code link"

    @pytest.mark.unit
    def test_only_leading_hashes_are_headers(self):
        assert clean_markdown("### Results\nIssue #42") == "Results\nIssue #42"


class TestSummarizeCsv:
    """Tests for summarize_csv()."""

    @pytest.mark.unit
    def test_summary_layout(self):
        result = summarize_csv("name, value\nalpha,1\n\nbeta,2\n")
        assert result == (
            "Data Analysis Summary:\n"
            "Headers: name, value\n"
            "Total rows: 2\n"
            "\n"
            "Sample data:\n"
            "Row 1: alpha,1\n"
            "Row 2: beta,2"
        )

    @pytest.mark.unit
    def test_at_most_five_sample_rows(self):
        csv = "id\n" + "\n".join(str(i) for i in range(1, 9))
        result = summarize_csv(csv)
        assert "Total rows: 8" in result
        assert "Row 5: 5" in result
        assert "Row 6" not in result

    @pytest.mark.unit
    def test_header_only(self):
        assert summarize_csv("a,b") == "Data Analysis Summary:\nHeaders: a, b\nTotal rows: 0"

    @pytest.mark.unit
    def test_empty_csv(self):
        assert summarize_csv("") == ""


class TestPreprocessDocument:
    """Tests for preprocess_document() dispatch."""

    @pytest.mark.unit
    @pytest.mark.parametrize("file_type", [FileType.TXT, FileType.DOCX, FileType.JSON])
    def test_passthrough_types(self, file_type):
        text = "**kept** as is\fhere"
        assert preprocess_document(text, file_type) == text

    @pytest.mark.unit
    def test_accepts_string_file_type(self):
        assert preprocess_document("a,b\n1,2", "csv").startswith("Data Analysis Summary:")

    @pytest.mark.unit
    def test_markdown_dispatch(self):
        assert preprocess_document("## Heading", FileType.MD) == "Heading"

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            preprocess_document("text", "exe")
