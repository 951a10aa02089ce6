"""
Local signal extractors.

Stateless passes over sanitized document text that run independently of the
AI provider calls.

Public API:
    - extract_entities: RegEx dates, percentages, money
    - extract_topics: Frequency-ranked topic words
    - analyze_sentiment: Lexicon sentiment with three-way distribution
    - calculate_readability: Approximate Flesch Reading Ease
    - detect_language / analyze_structure: Metadata heuristics
"""

from .entities import extract_entities
from .readability import calculate_readability
from .sentiment import analyze_sentiment
from .structure import analyze_structure, detect_language
from .topics import extract_topics

__all__ = [
    "extract_entities",
    "extract_topics",
    "analyze_sentiment",
    "calculate_readability",
    "analyze_structure",
    "detect_language",
]
