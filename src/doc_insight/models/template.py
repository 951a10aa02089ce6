"""
Analysis template and per-request configuration models.

Templates are immutable catalog entries; a configuration layers the caller's
tuning (depth, focus, exclusions, language) on top of one template.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# ENUMS
# ============================================================================

class TemplateCategory(str, Enum):
    """Template categories shown to users."""
    BUSINESS = "business"
    ACADEMIC = "academic"
    LEGAL = "legal"
    TECHNICAL = "technical"
    CREATIVE = "creative"
    FINANCIAL = "financial"


class OutputFormat(str, Enum):
    """Output format hint passed to the model."""
    STRUCTURED = "structured"
    NARRATIVE = "narrative"
    BULLET_POINTS = "bullet_points"
    TABLE = "table"


class AnalysisDepth(str, Enum):
    """How deep the model should go."""
    QUICK = "quick"
    STANDARD = "standard"
    COMPREHENSIVE = "comprehensive"
    EXPERT = "expert"


# ============================================================================
# TEMPLATE
# ============================================================================

# Fixed prompt fields, in report order
PROMPT_KEYS = ("summary", "insights", "recommendations", "technical")


class TemplatePrompts(BaseModel):
    """The four fixed instructions plus optional custom ones."""
    model_config = ConfigDict(frozen=True)

    summary: str
    insights: str
    recommendations: str
    technical: str
    custom: Optional[Tuple[str, ...]] = None


class Template(BaseModel):
    """
    Named bundle of prompts selecting the kind of analysis to perform.

    Immutable once built; the registry hands out the same instances to every
    request.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable identifier, e.g. 'business-report'")
    name: str
    description: str
    category: TemplateCategory
    prompts: TemplatePrompts
    output_format: OutputFormat = OutputFormat.STRUCTURED
    estimated_time_seconds: int = Field(default=120, ge=0)

    def prompt_fields(self) -> List[Tuple[str, str]]:
        """
        Ordered (section_key, instruction) pairs.

        The four fixed keys come first in declared order, then custom prompts
        as custom_1..custom_n.
        """
        fields = [(key, getattr(self.prompts, key)) for key in PROMPT_KEYS]
        for index, prompt in enumerate(self.prompts.custom or (), 1):
            fields.append((f"custom_{index}", prompt))
        return fields


# ============================================================================
# CONFIGURATION
# ============================================================================

class AnalysisConfiguration(BaseModel):
    """Per-request tuning layered on top of a template."""

    template: Template
    depth: AnalysisDepth = AnalysisDepth.STANDARD
    focus: List[str] = Field(default_factory=list)
    exclude_topics: Optional[List[str]] = None
    output_language: str = "en"
    include_visualization: bool = True
    # Reserved: accepted and stored, never read by the pipeline
    compare_with_previous: Optional[bool] = None
