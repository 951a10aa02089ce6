# Data models for the document analysis pipeline

from .template import (
    PROMPT_KEYS,
    AnalysisConfiguration,
    AnalysisDepth,
    OutputFormat,
    Template,
    TemplateCategory,
    TemplatePrompts,
)
from .document import DocumentMetadata, FileType
from .analysis import (
    AnalysisResult,
    DocumentStructure,
    EntityResult,
    EntityType,
    FullReport,
    Section,
    SentimentDistribution,
    SentimentLabel,
    SentimentResult,
    TopicResult,
    VisualizationData,
    VisualizationType,
)

__all__ = [
    "PROMPT_KEYS",
    "AnalysisConfiguration",
    "AnalysisDepth",
    "OutputFormat",
    "Template",
    "TemplateCategory",
    "TemplatePrompts",
    "DocumentMetadata",
    "FileType",
    "AnalysisResult",
    "DocumentStructure",
    "EntityResult",
    "EntityType",
    "FullReport",
    "Section",
    "SentimentDistribution",
    "SentimentLabel",
    "SentimentResult",
    "TopicResult",
    "VisualizationData",
    "VisualizationType",
]
