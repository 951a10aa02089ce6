"""
Lexicon-based sentiment scoring.

A token counts as positive (or negative) when it contains any lexicon word.
Substring matching is the default, so "risky" and "risks" count as "risk" but
"goodwill" also counts as "good"; "word" mode compares whole tokens with
surrounding punctuation stripped.
"""

from typing import Iterable, Literal

from ..models.analysis import SentimentDistribution, SentimentLabel, SentimentResult

MatchMode = Literal["substring", "word"]

POSITIVE_WORDS = ("good", "great", "excellent", "positive", "success", "benefit", "advantage")
NEGATIVE_WORDS = ("bad", "poor", "negative", "problem", "issue", "risk", "disadvantage")

LABEL_THRESHOLD = 0.6
MIXED_THRESHOLD = 0.3

EMOTIONAL_TONES = {
    SentimentLabel.POSITIVE: ["optimistic"],
    SentimentLabel.NEGATIVE: ["concerned"],
}

_PUNCTUATION = ".,;:!?\"'()[]{}<>"


def _matches(token: str, lexicon: Iterable[str], match_mode: MatchMode) -> bool:
    if match_mode == "word":
        return token.strip(_PUNCTUATION) in lexicon
    return any(word in token for word in lexicon)


def analyze_sentiment(text: str, match_mode: MatchMode = "substring") -> SentimentResult:
    """
    Score document sentiment from lexicon hits.

    Ratios are taken over positive + negative hits only (0.5/0.5 when there
    are none), and neutral is the remainder. Labels: a ratio above 0.6 wins
    outright, both above 0.3 is mixed, anything else is neutral.

    Note that a token can count as both positive and negative
    ("disadvantage" contains "advantage").

    Args:
        text: Sanitized document text
        match_mode: "substring" or "word"

    Returns:
        SentimentResult whose distribution sums to 1
    """
    if match_mode not in ("substring", "word"):
        raise ValueError(f"Unknown sentiment match mode: {match_mode}")

    positive_count = 0
    negative_count = 0
    for token in text.lower().split():
        if _matches(token, POSITIVE_WORDS, match_mode):
            positive_count += 1
        if _matches(token, NEGATIVE_WORDS, match_mode):
            negative_count += 1

    total = positive_count + negative_count
    positive_ratio = positive_count / total if total else 0.5
    negative_ratio = negative_count / total if total else 0.5
    neutral_ratio = max(0.0, 1.0 - positive_ratio - negative_ratio)

    if positive_ratio > LABEL_THRESHOLD:
        label = SentimentLabel.POSITIVE
    elif negative_ratio > LABEL_THRESHOLD:
        label = SentimentLabel.NEGATIVE
    elif positive_ratio > MIXED_THRESHOLD and negative_ratio > MIXED_THRESHOLD:
        label = SentimentLabel.MIXED
    else:
        label = SentimentLabel.NEUTRAL

    return SentimentResult(
        overall_sentiment=label,
        confidence=max(positive_ratio, negative_ratio, neutral_ratio),
        emotional_tone=list(EMOTIONAL_TONES.get(label, ["neutral"])),
        sentiment_distribution=SentimentDistribution(
            positive=positive_ratio,
            negative=negative_ratio,
            neutral=neutral_ratio,
        ),
    )
