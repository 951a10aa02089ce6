"""
Normalization of provider responses into report sections.

Provider text is parsed into one of two explicit variants:
1. StructuredResponse - the whole response is a JSON object (optionally inside
   a markdown code fence)
2. FreeTextResponse - anything else, with "key": "value" fields recovered by
   regex where possible

Normalization never raises: missing data degrades to placeholder text.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

import structlog

from ..canonicalization.sanitizer import count_words, sanitize
from ..models.analysis import FullReport, Section


logger = structlog.get_logger(__name__)

DEFAULT_SECTION_CONFIDENCE = 0.85

KEY_POINT_MIN_LENGTH = 20
MAX_KEY_POINTS = 5

SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
CODE_FENCE_PATTERN = re.compile(r"^\s*```(?:json)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL | re.IGNORECASE)

FULL_REPORT_KEYS = ("summary", "insights", "recommendations", "technical", "fullReport")
FREE_TEXT_INSIGHTS_LENGTH = 500


# ============================================================================
# PARSE RESULTS
# ============================================================================

@dataclass
class StructuredResponse:
    """Provider returned a JSON object."""
    fields: Dict[str, str]
    raw_text: str

    def get(self, key: str) -> Optional[str]:
        value = self.fields.get(key)
        return value or None


@dataclass
class FreeTextResponse:
    """Provider returned free text; fields holds regex-recovered values."""
    raw_text: str
    fields: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        value = self.fields.get(key)
        return value or None


ParsedResponse = Union[StructuredResponse, FreeTextResponse]


def _strip_code_fence(text: str) -> str:
    match = CODE_FENCE_PATTERN.match(text)
    return match.group(1) if match else text


def _stringify(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "\n".join(_stringify(item) for item in value)
    return json.dumps(value, ensure_ascii=False)


def extract_field(text: str, key: str) -> Optional[str]:
    """
    Best-effort "key": "value" extraction from non-JSON text.

    Examples:
        >>> extract_field('junk "summary": "All good" junk', "summary")
        'All good'
    """
    pattern = re.compile(rf'"{re.escape(key)}"\s*:\s*"([^"]*)"', re.IGNORECASE)
    match = pattern.search(text)
    return match.group(1) if match else None


def parse_provider_response(raw_text: str, keys: Iterable[str] = ()) -> ParsedResponse:
    """
    Parse provider text into a structured or free-text variant.

    Args:
        raw_text: Text returned by the provider
        keys: Field names to recover by regex when the text is not JSON

    Returns:
        StructuredResponse when the text is a JSON object, else FreeTextResponse
    """
    raw_text = raw_text or ""
    candidate = _strip_code_fence(raw_text.strip())

    try:
        parsed = json.loads(candidate)
    except (ValueError, TypeError):
        parsed = None

    if isinstance(parsed, dict):
        return StructuredResponse(
            fields={str(k): _stringify(v) for k, v in parsed.items()},
            raw_text=raw_text,
        )

    recovered = {}
    for key in keys:
        value = extract_field(raw_text, key)
        if value:
            recovered[key] = value

    logger.debug(
        "provider_response_free_text",
        response_length=len(raw_text),
        recovered_fields=list(recovered),
    )
    return FreeTextResponse(raw_text=raw_text, fields=recovered)


# ============================================================================
# SECTIONS
# ============================================================================

def format_section_title(key: str) -> str:
    """
    Human title for a section key.

    Examples:
        >>> format_section_title("executive_summary")
        'Executive Summary'
    """
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def extract_key_points(content: str) -> List[str]:
    """First five sentences longer than 20 characters, trimmed."""
    sentences = (s.strip() for s in SENTENCE_SPLIT_PATTERN.split(content))
    return [s for s in sentences if len(s) > KEY_POINT_MIN_LENGTH][:MAX_KEY_POINTS]


def build_section(key: str, content: str, confidence: float = DEFAULT_SECTION_CONFIDENCE) -> Section:
    """Section from already-sanitized content."""
    return Section(
        title=format_section_title(key),
        content=content,
        confidence=confidence,
        word_count=count_words(content),
        key_points=extract_key_points(content),
    )


def normalize(
    raw_text: str,
    section_key: str,
    confidence: float = DEFAULT_SECTION_CONFIDENCE,
) -> Section:
    """
    Turn one provider response into the Section for `section_key`.

    Content comes from the JSON field named after the key, else a
    regex-recovered field, else the whole response. Empty content becomes
    a "No <title> available" placeholder.

    Args:
        raw_text: Provider text for this section
        section_key: Template prompt field (summary, insights, ...)
        confidence: Fixed section confidence

    Returns:
        Section (never raises)
    """
    parsed = parse_provider_response(raw_text, keys=[section_key])
    content = parsed.get(section_key)

    if content is None:
        # A JSON object without the key is still the model's answer
        content = parsed.raw_text

    content = sanitize(content)
    if not content:
        content = f"No {format_section_title(section_key).lower()} available"
        logger.warning("section_content_missing", section_key=section_key)

    return build_section(section_key, content, confidence)


# ============================================================================
# FULL REPORT
# ============================================================================

def normalize_full_report(raw_text: str) -> FullReport:
    """
    Normalize a single-call response asking for all report fields at once.

    JSON responses fill missing fields with "No ... available"; free text
    falls back to regex fields, then fixed placeholders, with the first 500
    characters standing in for insights.
    """
    raw_text = raw_text or ""
    parsed = parse_provider_response(raw_text, keys=FULL_REPORT_KEYS)

    if isinstance(parsed, StructuredResponse):
        return FullReport(
            summary=parsed.get("summary") or "No summary available",
            insights=parsed.get("insights") or "No insights available",
            recommendations=parsed.get("recommendations") or "No recommendations available",
            technical=parsed.get("technical") or "No technical details available",
            full_report=parsed.get("fullReport") or raw_text,
        )

    return FullReport(
        summary=parsed.get("summary") or "Analysis completed successfully",
        insights=parsed.get("insights") or raw_text[:FREE_TEXT_INSIGHTS_LENGTH],
        recommendations=parsed.get("recommendations") or "See full report for recommendations",
        technical=parsed.get("technical") or "Technical analysis included in full report",
        full_report=raw_text,
    )
