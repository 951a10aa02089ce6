"""
Single-call full report.

Asks the provider for every report field in one JSON response, as opposed to
the per-field calls made by DocumentAnalyzer.
"""

from typing import Callable, Optional, Union

import structlog

from ..canonicalization.sanitizer import sanitize
from ..config import settings
from ..errors import EmptyDocumentError, AnalysisError
from ..models.analysis import FullReport
from .llm_client import AIProvider, LLMClient, create_llm_client, resolve_provider
from .normalizer import normalize_full_report
from .progress import AnalysisStage, ListenerLike, ProgressEvent, as_listener
from .prompts import build_full_report_prompts


logger = structlog.get_logger(__name__)

ClientFactory = Callable[..., LLMClient]

PROVIDER_DISPLAY_NAMES = {
    AIProvider.DEEPSEEK: "DeepSeek AI",
    AIProvider.GEMINI: "Google Gemini",
}


class ReportService:
    """Generates a FullReport with one provider call."""

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        self.client_factory = client_factory or create_llm_client

    def generate(
        self,
        content: str,
        provider: Union[AIProvider, str, None] = None,
        api_key: Optional[str] = None,
        listener: ListenerLike = None,
    ) -> FullReport:
        """
        Generate the full report.

        Progress: 10 connecting, 30 analyzing, 70 processing, 100 complete.

        Raises:
            AnalysisError: "AI analysis failed: <cause>" on any failure
        """
        listener = as_listener(listener)
        try:
            provider = resolve_provider(provider)
            text = sanitize(content)
            if not text:
                raise EmptyDocumentError()

            listener.on_progress(
                ProgressEvent(10, "Connecting to AI service...", AnalysisStage.INIT)
            )
            client = self.client_factory(
                provider=provider,
                api_key=api_key,
                max_tokens=settings.llm_report_max_tokens,
            )

            listener.on_progress(
                ProgressEvent(
                    30,
                    f"Analyzing with {PROVIDER_DISPLAY_NAMES[provider]}...",
                    AnalysisStage.AI_ANALYSIS,
                )
            )
            system_prompt, user_prompt = build_full_report_prompts(text)
            response = client.send(system_prompt, user_prompt)

            listener.on_progress(
                ProgressEvent(70, "Processing analysis results...", AnalysisStage.COMPILATION)
            )
            report = normalize_full_report(response.text)

            listener.on_progress(
                ProgressEvent(100, "Analysis complete!", AnalysisStage.COMPLETE)
            )
            logger.info(
                "full_report_completed",
                provider=provider.value,
                latency_ms=response.latency_ms,
            )
            return report

        except Exception as e:
            logger.error("full_report_failed", error=str(e))
            raise AnalysisError(f"AI analysis failed: {e}") from e
