"""
Unit tests for provider response normalization (normalizer.py).

Tests cover:
- JSON and free-text parse variants
- Section content selection and placeholders
- Key point extraction
- Full report fallbacks
"""

import pytest

from doc_insight.analysis.normalizer import (
    FreeTextResponse,
    StructuredResponse,
    extract_field,
    extract_key_points,
    format_section_title,
    normalize,
    normalize_full_report,
    parse_provider_response,
)


class TestParseProviderResponse:
    """Tests for parse_provider_response()."""

    @pytest.mark.unit
    def test_json_object(self):
        parsed = parse_provider_response('{"summary": "All good", "score": 3}')
        assert isinstance(parsed, StructuredResponse)
        assert parsed.get("summary") == "All good"
        assert parsed.get("score") == "3"

    @pytest.mark.unit
    def test_json_in_code_fence(self):
        parsed = parse_provider_response('```json\n{"insights": "Margins expanded."}\n```')
        assert isinstance(parsed, StructuredResponse)
        assert parsed.get("insights") == "Margins expanded."

    @pytest.mark.unit
    def test_json_array_is_free_text(self):
        assert isinstance(parse_provider_response("[1, 2, 3]"), FreeTextResponse)

    @pytest.mark.unit
    def test_free_text_with_recovered_fields(self):
        parsed = parse_provider_response(
            'Sure! "summary": "Short recap", trailing junk {', keys=["summary", "technical"]
        )
        assert isinstance(parsed, FreeTextResponse)
        assert parsed.fields == {"summary": "Short recap"}
        assert parsed.get("technical") is None

    @pytest.mark.unit
    def test_empty_text(self):
        parsed = parse_provider_response("")
        assert isinstance(parsed, FreeTextResponse)
        assert parsed.raw_text == ""


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.unit
    def test_free_text_becomes_content(self):
        text = "Revenue grew steadily this quarter. Costs were kept under control overall."
        section = normalize(text, "summary")

        assert section.title == "Summary"
        assert section.content == text
        assert section.confidence == 0.85
        assert section.word_count == len(text.split())
        assert section.key_points == [
            "Revenue grew steadily this quarter",
            "Costs were kept under control overall",
        ]

    @pytest.mark.unit
    def test_json_field_for_section(self):
        section = normalize('{"summary": "Revenue grew.", "insights": "Other"}', "summary")
        assert section.content == "Revenue grew."

    @pytest.mark.unit
    def test_json_without_section_key_uses_whole_text(self):
        section = normalize('{"foo": "bar"}', "insights")
        assert section.content == '{"foo": "bar"}'

    @pytest.mark.unit
    def test_regex_recovered_field(self):
        section = normalize('Here you go: "technical": "Uses a REST API" and more', "technical")
        assert section.content == "Uses a REST API"

    @pytest.mark.unit
    def test_content_is_sanitized(self):
        section = normalize('{"summary": "Line one\\u0000   and\\n\\ntwo"}', "summary")
        assert section.content == "Line one and two"

    @pytest.mark.unit
    def test_list_values_joined(self):
        section = normalize('{"insights": ["First point", "Second point"]}', "insights")
        assert section.content == "First point Second point"

    @pytest.mark.unit
    def test_empty_response_placeholder(self):
        section = normalize("  \x00 ", "executive_summary")
        assert section.title == "Executive Summary"
        assert section.content == "No executive summary available"
        assert section.word_count == 4

    @pytest.mark.unit
    def test_custom_confidence(self):
        assert normalize("text", "summary", confidence=0.5).confidence == 0.5


class TestHelpers:
    """Tests for title, field and key point helpers."""

    @pytest.mark.unit
    def test_format_section_title(self):
        assert format_section_title("summary") == "Summary"
        assert format_section_title("custom_1") == "Custom 1"
        assert format_section_title("executive_summary") == "Executive Summary"

    @pytest.mark.unit
    def test_extract_field_case_insensitive_key(self):
        assert extract_field('"Summary" : "Done"', "summary") == "Done"
        assert extract_field("no fields", "summary") is None

    @pytest.mark.unit
    def test_key_points_length_filter_and_limit(self):
        content = "Too short. " + " ".join(
            f"Sentence number {i} is certainly long enough." for i in range(7)
        )
        points = extract_key_points(content)

        assert len(points) == 5
        assert points[0] == "Sentence number 0 is certainly long enough"
        assert "Too short" not in points

    @pytest.mark.unit
    def test_twenty_characters_is_not_enough(self):
        assert extract_key_points("x" * 20 + ". " + "y" * 21 + ".") == ["y" * 21]


class TestNormalizeFullReport:
    """Tests for normalize_full_report()."""

    @pytest.mark.unit
    def test_json_with_missing_fields(self):
        raw = '{"summary": "S", "insights": "I"}'
        report = normalize_full_report(raw)

        assert report.summary == "S"
        assert report.insights == "I"
        assert report.recommendations == "No recommendations available"
        assert report.technical == "No technical details available"
        assert report.full_report == raw

    @pytest.mark.unit
    def test_json_full_report_field(self):
        report = normalize_full_report('{"summary": "S", "fullReport": "# Report"}')
        assert report.full_report == "# Report"

    @pytest.mark.unit
    def test_free_text_placeholders(self):
        raw = "z" * 600
        report = normalize_full_report(raw)

        assert report.summary == "Analysis completed successfully"
        assert report.insights == "z" * 500
        assert report.recommendations == "See full report for recommendations"
        assert report.technical == "Technical analysis included in full report"
        assert report.full_report == raw

    @pytest.mark.unit
    def test_free_text_recovered_fields(self):
        raw = 'Broken JSON {"summary": "Recovered summary", "insights": "Recovered"'
        report = normalize_full_report(raw)

        assert report.summary == "Recovered summary"
        assert report.insights == "Recovered"
        assert report.full_report == raw
