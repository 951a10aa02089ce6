"""
Exception hierarchy for document analysis.

Input errors surface before any network call, provider errors carry the HTTP
status of the failed call, and the analyzer rewraps every failure into a
single AnalysisError so callers never see a partial result.
"""

from typing import Any, Dict, Optional


class DocInsightError(Exception):
    """Base exception for all document analysis errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class EmptyDocumentError(DocInsightError):
    """Document content is empty after sanitization."""

    def __init__(self):
        super().__init__("Document content is empty or contains only invalid characters")


class TemplateNotFoundError(DocInsightError):
    """Requested template id is not in the registry."""

    def __init__(self, template_id: str):
        super().__init__(
            f"Template not found: {template_id}", context={"template_id": template_id}
        )
        self.template_id = template_id


class ProviderError(DocInsightError):
    """
    AI provider call failed.

    Attributes:
        provider: Provider name ("deepseek" | "gemini")
        status_code: HTTP status, None for transport failures
        detail: Message extracted from the provider response
    """

    def __init__(self, provider: str, detail: str, status_code: Optional[int] = None):
        label = PROVIDER_LABELS.get(provider, provider)
        super().__init__(
            f"{label} API error: {detail}",
            context={"provider": provider, "status_code": status_code},
        )
        self.provider = provider
        self.status_code = status_code
        self.detail = detail

    @property
    def retryable(self) -> bool:
        """Transport failures, rate limits and server errors may succeed on retry."""
        return self.status_code is None or self.status_code == 429 or self.status_code >= 500


class AnalysisError(DocInsightError):
    """Analysis run failed; the message is prefixed with the failing operation."""


PROVIDER_LABELS = {
    "deepseek": "DeepSeek",
    "gemini": "Gemini",
}
