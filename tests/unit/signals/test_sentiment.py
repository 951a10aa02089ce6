"""
Unit tests for lexicon sentiment scoring (sentiment.py).
"""

import pytest

from doc_insight.models.analysis import SentimentLabel
from doc_insight.signals.sentiment import analyze_sentiment


GOLDEN_TEXT = (
    "The project was a great success with excellent results. "
    "However, there were some risks."
)


def distribution_total(result):
    dist = result.sentiment_distribution
    return dist.positive + dist.negative + dist.neutral


class TestAnalyzeSentiment:
    """Tests for analyze_sentiment()."""

    @pytest.mark.unit
    def test_golden_case(self):
        """great, success, excellent vs risks: 3 positive, 1 negative."""
        result = analyze_sentiment(GOLDEN_TEXT)

        assert result.overall_sentiment == SentimentLabel.POSITIVE
        assert result.sentiment_distribution.positive == pytest.approx(0.75)
        assert result.sentiment_distribution.negative == pytest.approx(0.25)
        assert result.sentiment_distribution.neutral == pytest.approx(0.0)
        assert result.confidence == pytest.approx(0.75)
        assert result.emotional_tone == ["optimistic"]

    @pytest.mark.unit
    def test_balanced_hits_are_mixed(self):
        result = analyze_sentiment("Good progress, but one problem remains.")
        assert result.overall_sentiment == SentimentLabel.MIXED
        assert result.emotional_tone == ["neutral"]

    @pytest.mark.unit
    def test_negative(self):
        result = analyze_sentiment("A bad quarter with a serious problem and good hopes.")
        assert result.overall_sentiment == SentimentLabel.NEGATIVE
        assert result.emotional_tone == ["concerned"]

    @pytest.mark.unit
    def test_no_lexicon_hits_split_evenly(self):
        result = analyze_sentiment("The meeting is on Tuesday.")
        assert result.sentiment_distribution.positive == 0.5
        assert result.sentiment_distribution.negative == 0.5
        assert result.sentiment_distribution.neutral == 0.0
        assert result.overall_sentiment == SentimentLabel.MIXED

    @pytest.mark.unit
    def test_substring_matching(self):
        """'goodwill' counts as 'good' and 'disadvantage' as both lexicons."""
        assert analyze_sentiment("goodwill and risk").overall_sentiment == SentimentLabel.MIXED
        assert analyze_sentiment("disadvantage").overall_sentiment == SentimentLabel.MIXED

    @pytest.mark.unit
    def test_word_matching(self):
        result = analyze_sentiment("goodwill and risk", match_mode="word")
        assert result.overall_sentiment == SentimentLabel.NEGATIVE

        result = analyze_sentiment("A clear disadvantage.", match_mode="word")
        assert result.overall_sentiment == SentimentLabel.NEGATIVE

    @pytest.mark.unit
    def test_unknown_match_mode(self):
        with pytest.raises(ValueError):
            analyze_sentiment("text", match_mode="fuzzy")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "",
            GOLDEN_TEXT,
            "good good bad",
            "benefit advantage risk issue poor",
            "nothing to see",
        ],
    )
    def test_distribution_sums_to_one(self, text):
        assert distribution_total(analyze_sentiment(text)) == pytest.approx(1.0)
