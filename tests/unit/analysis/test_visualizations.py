"""
Unit tests for chart payload generation (visualizations.py).
"""

import pytest

from doc_insight.analysis.visualizations import generate_visualizations
from doc_insight.models.analysis import VisualizationType
from doc_insight.signals import extract_entities, extract_topics


class TestGenerateVisualizations:
    """Tests for generate_visualizations()."""

    @pytest.mark.unit
    def test_topic_and_entity_charts(self):
        text = "Revenue grew 12.5% to $1,250.00 on 03/14/2024. Revenue margin 3% revenue"
        charts = generate_visualizations(extract_topics(text), extract_entities(text))

        assert [c.title for c in charts] == [
            "Topic Frequency Analysis",
            "Entity Type Distribution",
        ]
        assert all(c.type == VisualizationType.CHART for c in charts)

        topics_chart, entities_chart = charts
        assert topics_chart.data["labels"][0] == "revenue"
        assert topics_chart.data["datasets"][0]["label"] == "Frequency"
        assert topics_chart.data["datasets"][0]["data"][0] == 3
        assert entities_chart.data == {
            "labels": ["date", "percentage", "money"],
            "datasets": [{"label": "Count", "data": [1, 2, 1]}],
        }

    @pytest.mark.unit
    def test_empty_inputs_yield_no_charts(self):
        assert generate_visualizations([], []) == []

    @pytest.mark.unit
    def test_only_topics(self):
        charts = generate_visualizations(extract_topics("growth growth market"), [])
        assert [c.title for c in charts] == ["Topic Frequency Analysis"]
        assert charts[0].data["labels"] == ["growth", "market"]
        assert charts[0].data["datasets"][0]["data"] == [2, 1]
