"""
Unit tests for RegEx entity extraction (entities.py).
"""

import pytest

from doc_insight.models.analysis import EntityType
from doc_insight.signals.entities import extract_entities, get_context


GOLDEN_TEXT = "Revenue grew 12.5% to $1,250.00 on 03/14/2024"


class TestExtractEntities:
    """Tests for extract_entities()."""

    @pytest.mark.unit
    def test_golden_case(self):
        entities = extract_entities(GOLDEN_TEXT)

        assert [(e.type, e.text, e.confidence) for e in entities] == [
            (EntityType.DATE, "03/14/2024", 0.8),
            (EntityType.PERCENTAGE, "12.5%", 0.9),
            (EntityType.MONEY, "$1,250.00", 0.9),
        ]
        # Text shorter than the window: context is the whole text
        assert all(e.context == GOLDEN_TEXT for e in entities)

    @pytest.mark.unit
    def test_deterministic(self):
        assert extract_entities(GOLDEN_TEXT) == extract_entities(GOLDEN_TEXT)

    @pytest.mark.unit
    def test_percentage_followed_by_space(self):
        entities = extract_entities("Costs fell 15% last year")
        assert [e.text for e in entities] == ["15%"]

    @pytest.mark.unit
    def test_dash_dates_and_plain_money(self):
        entities = extract_entities("Paid $40 on 1-2-24 and $3,000,000.50 on 12/31/2023")
        dates = [e.text for e in entities if e.type == EntityType.DATE]
        money = [e.text for e in entities if e.type == EntityType.MONEY]
        assert dates == ["1-2-24", "12/31/2023"]
        assert money == ["$40", "$3,000,000.50"]

    @pytest.mark.unit
    def test_repeated_entity_gets_context_of_each_occurrence(self):
        text = "A" * 100 + " 5% " + "B" * 100 + " 5% " + "C" * 100
        first, second = extract_entities(text)
        assert "A" in first.context and "C" not in first.context
        assert "C" in second.context and "A" not in second.context

    @pytest.mark.unit
    def test_no_entities(self):
        assert extract_entities("Nothing numeric here") == []
        assert extract_entities("") == []


class TestGetContext:
    """Tests for get_context()."""

    @pytest.mark.unit
    def test_window_clipped_to_bounds(self):
        assert get_context("abc 10% def", 4, 7, window=2) == "c 10% d"
        assert get_context("10%", 0, 3) == "10%"

    @pytest.mark.unit
    def test_default_window_is_fifty(self):
        text = "x" * 200
        assert len(get_context(text, 100, 101)) == 101
