"""
Analysis result schemas.

Defines Pydantic models for:
- Report sections produced from provider responses
- Local signals (sentiment, entities, topics, structure)
- Visualization payloads
- The assembled AnalysisResult and the single-call FullReport
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .document import DocumentMetadata
from .template import AnalysisConfiguration


# ============================================================================
# ENUMS
# ============================================================================

class SentimentLabel(str, Enum):
    """Overall sentiment values."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    MIXED = "mixed"


class EntityType(str, Enum):
    """Entity kinds; the regex extractors only emit date, money and percentage."""
    PERSON = "person"
    ORGANIZATION = "organization"
    LOCATION = "location"
    DATE = "date"
    MONEY = "money"
    PERCENTAGE = "percentage"
    OTHER = "other"


class VisualizationType(str, Enum):
    """Visualization kinds understood by the presentation layer."""
    CHART = "chart"
    GRAPH = "graph"
    WORDCLOUD = "wordcloud"
    TIMELINE = "timeline"
    NETWORK = "network"


# ============================================================================
# SECTIONS
# ============================================================================

class Section(BaseModel):
    """One titled, scored portion of the report."""
    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    word_count: int = Field(..., ge=0)
    key_points: List[str] = Field(default_factory=list)
    citations: Optional[List[str]] = None

    @model_validator(mode="after")
    def validate_word_count(self):
        """word_count must match the whitespace tokenization of content."""
        expected = len(self.content.split())
        if self.word_count != expected:
            raise ValueError(
                f"word_count {self.word_count} does not match content ({expected} words)"
            )
        return self


# ============================================================================
# SIGNALS
# ============================================================================

class SentimentDistribution(BaseModel):
    """Three-way split, always summing to 1."""
    positive: float = Field(..., ge=0.0, le=1.0)
    negative: float = Field(..., ge=0.0, le=1.0)
    neutral: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_sum(self):
        total = self.positive + self.negative + self.neutral
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Sentiment distribution must sum to 1, got {total}")
        return self


class SentimentResult(BaseModel):
    """Lexicon-based sentiment of the whole document."""
    overall_sentiment: SentimentLabel
    confidence: float = Field(..., ge=0.0, le=1.0)
    emotional_tone: List[str] = Field(default_factory=list)
    sentiment_distribution: SentimentDistribution


class EntityResult(BaseModel):
    """Entity span found by a regex scan."""
    text: str
    type: EntityType
    confidence: float = Field(..., ge=0.0, le=1.0)
    context: str = Field(default="", description="Up to 50 chars either side")


class TopicResult(BaseModel):
    """Frequent word treated as a topic."""
    topic: str
    relevance: float = Field(..., ge=0.0, le=1.0)
    keywords: List[str] = Field(default_factory=list)
    frequency: int = Field(..., ge=1)


class DocumentStructure(BaseModel):
    """Output of the structure stage."""
    paragraphs: int = 0
    lists: int = 0
    headings: List[str] = Field(default_factory=list)
    sections: List[str] = Field(default_factory=list)


class VisualizationData(BaseModel):
    """Chart payload; data is shaped {labels: [...], datasets: [{label, data}]}."""
    type: VisualizationType
    title: str
    data: Dict[str, Any]
    description: str = ""


# ============================================================================
# RESULTS
# ============================================================================

class AnalysisResult(BaseModel):
    """
    Complete result of one analysis run.

    Created once after every stage succeeded; never mutated afterwards.
    Sections are keyed by template prompt field, in template order.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    document_id: str
    configuration: AnalysisConfiguration
    metadata: DocumentMetadata
    sections: Dict[str, Section]
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    processing_time_ms: int = Field(..., ge=0)
    word_count: int = Field(..., ge=0)
    readability_score: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    sentiment_analysis: Optional[SentimentResult] = None
    key_entities: List[EntityResult] = Field(default_factory=list)
    topics: List[TopicResult] = Field(default_factory=list)
    visualizations: List[VisualizationData] = Field(default_factory=list)
    structure: Optional[DocumentStructure] = None
    provider: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class FullReport(BaseModel):
    """Single-call report with the five fields the model is asked for."""
    summary: str
    insights: str
    recommendations: str
    technical: str
    full_report: str
