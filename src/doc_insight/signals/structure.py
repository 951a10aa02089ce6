"""
Document structure and language heuristics.
"""

import re
from typing import List

from ..models.analysis import DocumentStructure

ENGLISH_FUNCTION_WORDS = frozenset(
    ["the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"]
)
LANGUAGE_SAMPLE_TOKENS = 100
ENGLISH_MIN_HITS = 5

PARAGRAPH_MIN_LENGTH = 50
LIST_ITEM_PATTERN = re.compile(r"^\s*[-*+]\s+", re.MULTILINE)
HEADING_PATTERN = re.compile(r"^\s*#{1,6}\s+(.+?)\s*$", re.MULTILINE)


def detect_language(text: str) -> str:
    """'en' when the opening tokens contain enough English function words, else 'unknown'."""
    tokens = text.lower().split()[:LANGUAGE_SAMPLE_TOKENS]
    hits = sum(1 for token in tokens if token in ENGLISH_FUNCTION_WORDS)
    return "en" if hits > ENGLISH_MIN_HITS else "unknown"


def analyze_structure(text: str) -> DocumentStructure:
    """
    Count paragraphs and list items and collect markdown headings.

    Paragraphs are lines longer than 50 characters. Headings double as section
    names.
    """
    lines = text.split("\n")
    headings: List[str] = HEADING_PATTERN.findall(text)
    return DocumentStructure(
        paragraphs=sum(1 for line in lines if len(line.strip()) > PARAGRAPH_MIN_LENGTH),
        lists=len(LIST_ITEM_PATTERN.findall(text)),
        headings=headings,
        sections=list(headings),
    )
