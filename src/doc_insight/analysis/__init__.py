"""
Analysis package: template-driven AI analysis of documents.

Main components:
- prompts: System/user prompt construction per template field
- llm_client: DeepSeek and Gemini provider clients
- normalizer: Provider text -> Section / FullReport
- progress: Stage enum, progress events and listeners
- visualizations: Chart payloads from topics and entities
- analyzer: Main orchestration logic
- report: Single-call full report
"""

from .analyzer import DocumentAnalyzer, analyze_document, calculate_confidence_score
from .llm_client import AIProvider, LLMClient, LLMResponse, create_llm_client, send
from .normalizer import normalize, normalize_full_report, parse_provider_response
from .progress import AnalysisStage, ProgressEvent, ProgressListener
from .report import ReportService

__all__ = [
    "DocumentAnalyzer",
    "analyze_document",
    "calculate_confidence_score",
    "AIProvider",
    "LLMClient",
    "LLMResponse",
    "create_llm_client",
    "send",
    "normalize",
    "normalize_full_report",
    "parse_provider_response",
    "AnalysisStage",
    "ProgressEvent",
    "ProgressListener",
    "ReportService",
]
