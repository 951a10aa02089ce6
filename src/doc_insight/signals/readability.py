"""
Approximate Flesch Reading Ease.

score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
"""

import re

SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
WORD_PATTERN = re.compile(r"\b\w+\b")
VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]+")


def count_sentences(text: str) -> int:
    """Non-empty fragments between sentence-ending punctuation."""
    return sum(1 for fragment in SENTENCE_SPLIT_PATTERN.split(text) if fragment.strip())


def count_syllables(text: str) -> int:
    """Vowel-group runs per word token, at least one per token."""
    return sum(
        max(1, len(VOWEL_GROUP_PATTERN.findall(word)))
        for word in WORD_PATTERN.findall(text.lower())
    )


def calculate_readability(text: str) -> float:
    """
    Reading ease clamped to [0, 100]; 0 when there are no words or sentences.

    Examples:
        >>> calculate_readability("")
        0.0
    """
    sentences = count_sentences(text)
    words = len(text.split())
    if sentences == 0 or words == 0:
        return 0.0

    syllables = count_syllables(text)
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    return max(0.0, min(100.0, score))
