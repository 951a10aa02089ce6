"""
Frequency-based topic extraction.
"""

import re
from collections import Counter
from typing import List

from ..models.analysis import TopicResult

WORD_PATTERN = re.compile(r"\b\w+\b")

MIN_TOPIC_LENGTH = 4  # tokens of length <= 3 are ignored
DEFAULT_TOPIC_LIMIT = 10


def tokenize_words(text: str) -> List[str]:
    """Lowercased word tokens."""
    return WORD_PATTERN.findall(text.lower())


def extract_topics(text: str, limit: int = DEFAULT_TOPIC_LIMIT) -> List[TopicResult]:
    """
    Most frequent words of the document as topics.

    Counts only tokens longer than 3 characters, ranks by frequency (ties keep
    first-seen order) and keeps the top `limit`. Relevance is the count divided
    by the total number of tokens, short ones included.

    Examples:
        >>> [(t.topic, t.frequency) for t in extract_topics("bird cat cat bird tiger")]
        [('bird', 2), ('tiger', 1)]
    """
    tokens = tokenize_words(text)
    if not tokens:
        return []

    # Counter preserves insertion order; sorted() is stable
    counts = Counter(token for token in tokens if len(token) >= MIN_TOPIC_LENGTH)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]

    total = len(tokens)
    return [
        TopicResult(
            topic=word,
            relevance=frequency / total,
            keywords=[word],
            frequency=frequency,
        )
        for word, frequency in ranked
    ]
