"""
API request and response models for FastAPI endpoints.

This module defines the Pydantic models used for API request/response validation.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .analysis import AnalysisResult, FullReport
from .document import FileType
from .template import AnalysisDepth, Template


class AnalyzeRequest(BaseModel):
    """Request model for the template-driven analysis endpoint."""

    content: str = Field(..., description="Raw document text")
    title: str = Field(default="Untitled Document")
    file_type: FileType = FileType.TXT
    template_id: str = Field(default="business-report")
    depth: AnalysisDepth = AnalysisDepth.STANDARD
    focus: List[str] = Field(default_factory=list)
    exclude_topics: Optional[List[str]] = None
    output_language: str = "en"
    include_visualization: bool = True
    compare_with_previous: Optional[bool] = None
    provider: Optional[str] = Field(
        default=None,
        description="AI provider: deepseek or gemini (default from settings)",
    )
    api_key: Optional[str] = Field(
        default=None, description="Provider API key (default from settings)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "content": "Revenue grew 12.5% to $1,250.00 on 03/14/2024.",
                "title": "Q1 report",
                "file_type": "txt",
                "template_id": "financial-analysis",
                "depth": "standard",
                "focus": ["revenue", "growth"],
                "provider": "deepseek",
            }
        }
    }


class AnalyzeResponse(BaseModel):
    """Response model for the analysis endpoint."""

    success: bool
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None


class ReportRequest(BaseModel):
    """Request model for the single-call full report endpoint."""

    content: str
    provider: Optional[str] = Field(default=None, description="deepseek or gemini")
    api_key: Optional[str] = None


class ReportResponse(BaseModel):
    """Response model for the full report endpoint."""

    success: bool
    report: Optional[FullReport] = None
    error: Optional[str] = None


class TemplateListResponse(BaseModel):
    """Template catalog listing."""

    count: int
    templates: List[Template]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(description="Service uptime")
    default_provider: str = Field(description="Provider used when a request names none", examples=["deepseek"])
    providers_configured: Dict[str, bool] = Field(
        default_factory=dict,
        description="Whether an API key is configured per provider",
    )
    templates_count: int = Field(default=0, description="Templates in the catalog")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str
    pipeline_version: str
    default_provider: str
    templates_count: int
