"""
RegEx-based entity extraction.

Scans sanitized document text for dates, percentages and currency amounts.
Each pattern carries a fixed confidence; every match gets a context window of
up to 50 characters either side.
"""

import re
from typing import List, Tuple

import structlog

from ..models.analysis import EntityResult, EntityType


logger = structlog.get_logger(__name__)

CONTEXT_WINDOW = 50

# (entity type, compiled pattern, confidence), scanned in this order
ENTITY_PATTERNS: List[Tuple[EntityType, "re.Pattern[str]", float]] = [
    (EntityType.DATE, re.compile(r"\b[0-9]{1,2}[/-][0-9]{1,2}[/-][0-9]{2,4}\b"), 0.8),
    (EntityType.PERCENTAGE, re.compile(r"\b[0-9]+(?:\.[0-9]+)?%"), 0.9),
    (EntityType.MONEY, re.compile(r"\$[0-9]+(?:,[0-9]{3})*(?:\.[0-9]{2})?"), 0.9),
]


def get_context(text: str, start: int, end: int, window: int = CONTEXT_WINDOW) -> str:
    """
    Substring around a span, clipped to the text bounds.

    Examples:
        >>> get_context("abc 10% def", 4, 7, window=2)
        'c 10% d'
    """
    return text[max(0, start - window):min(len(text), end + window)]


def extract_entities(text: str) -> List[EntityResult]:
    """
    Extract date, percentage and money entities.

    Results are grouped by type (dates, then percentages, then money) and
    ordered by position within each group.

    Args:
        text: Sanitized document text

    Returns:
        List of EntityResult, empty when nothing matches

    Examples:
        >>> [e.text for e in extract_entities("Revenue grew 12.5% to $1,250.00 on 03/14/2024")]
        ['03/14/2024', '12.5%', '$1,250.00']
    """
    entities: List[EntityResult] = []
    if not text:
        return entities

    for entity_type, pattern, confidence in ENTITY_PATTERNS:
        for match in pattern.finditer(text):
            entities.append(
                EntityResult(
                    text=match.group(0),
                    type=entity_type,
                    confidence=confidence,
                    context=get_context(text, match.start(), match.end()),
                )
            )

    logger.debug("entity_extraction_complete", entities_count=len(entities))
    return entities
