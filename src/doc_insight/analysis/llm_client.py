"""
AI provider clients.

Two interchangeable hosted backends behind one interface:
- DeepSeek: chat-completion envelope (message array, bearer auth)
- Gemini: generateContent envelope (single text blob, API key in query)

Key features:
- Fixed temperature and per-call-site output cap
- ProviderError carrying HTTP status and best-effort provider message
- Single attempt by default; optional exponential backoff for transient failures
- Latency tracking
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

import httpx
import structlog

from ..config import settings
from ..errors import ProviderError


logger = structlog.get_logger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

class AIProvider(str, Enum):
    """Supported AI providers."""
    DEEPSEEK = "deepseek"
    GEMINI = "gemini"


@dataclass
class LLMResponse:
    """
    Unified provider response.

    Contains the generated text and metadata about the request.
    """
    text: str
    provider: str
    model: str
    latency_ms: int = 0
    status_code: int = 200
    # False when the envelope lacked the expected path and text is the raw body
    envelope_ok: bool = True


# ============================================================================
# ABSTRACT BASE CLASS
# ============================================================================

class LLMClient(ABC):
    """
    Abstract base class for provider clients.

    Subclasses build the provider request and extract text from the
    provider's response envelope; sending, error mapping and retries live
    here.
    """

    provider: AIProvider

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        timeout_seconds: float = 120,
        max_retries: int = 1,
        retry_delay: float = 1.0,
        http_client: Optional[httpx.Client] = None,
    ):
        if not api_key:
            raise ValueError(f"{self.provider.value} API key required")

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._http_client = http_client

        self.logger = logger.bind(
            llm_client=self.__class__.__name__,
            provider=self.provider.value,
            model=model,
        )

    # ------------------------------------------------------------------
    # Provider specifics
    # ------------------------------------------------------------------

    @abstractmethod
    def build_request(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """
        Build keyword arguments for httpx ``post``.

        Returns:
            Dict with url, json and optionally headers/params
        """

    @abstractmethod
    def extract_text(self, data: Dict[str, Any]) -> str:
        """
        Pull generated text out of a success envelope.

        Raises:
            KeyError, IndexError, TypeError: When the envelope has another shape
        """

    def extract_error_message(self, response: httpx.Response) -> str:
        """Message for a non-success response; defaults to the reason phrase."""
        return response.reason_phrase or f"HTTP {response.status_code}"

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """
        Send one prompt pair and return the generated text.

        Args:
            system_prompt: System instructions
            user_prompt: Instruction plus document content

        Returns:
            LLMResponse with text and metadata

        Raises:
            ProviderError: Non-2xx response or transport failure
        """
        start_time = time.time()
        response = self._retry_with_backoff(self._post, system_prompt, user_prompt)
        latency_ms = int((time.time() - start_time) * 1000)

        envelope_ok = True
        try:
            text = self.extract_text(response.json())
            if not isinstance(text, str):
                raise TypeError(f"generated text is {type(text).__name__}, not str")
        except (ValueError, KeyError, IndexError, TypeError) as e:
            # Unexpected envelope: hand the body to the normalizer as free text
            self.logger.warning(
                "provider_response_unexpected_shape",
                error=str(e),
                body_length=len(response.text),
            )
            text = response.text
            envelope_ok = False

        self.logger.info(
            "provider_call_completed",
            latency_ms=latency_ms,
            status_code=response.status_code,
            response_length=len(text),
        )

        return LLMResponse(
            text=text,
            provider=self.provider.value,
            model=self.model,
            latency_ms=latency_ms,
            status_code=response.status_code,
            envelope_ok=envelope_ok,
        )

    def _post(self, system_prompt: str, user_prompt: str) -> httpx.Response:
        request_kwargs = self.build_request(system_prompt, user_prompt)
        try:
            if self._http_client is not None:
                response = self._http_client.post(**request_kwargs)
            else:
                with httpx.Client(timeout=self.timeout_seconds) as client:
                    response = client.post(**request_kwargs)
        except httpx.HTTPError as e:
            raise ProviderError(self.provider.value, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise ProviderError(
                self.provider.value,
                self.extract_error_message(response),
                status_code=response.status_code,
            )
        return response

    def _retry_with_backoff(self, func, *args, **kwargs):
        """
        Execute function with exponential backoff retry logic.

        Only retryable ProviderErrors (transport, 429, 5xx) are retried; with
        max_retries == 1 the first failure propagates.

        Raises:
            ProviderError: Last error after all attempts
        """
        for attempt in range(self.max_retries):
            try:
                return func(*args, **kwargs)
            except ProviderError as e:
                if not e.retryable or attempt == self.max_retries - 1:
                    self.logger.error(
                        "provider_call_failed",
                        error=e.message,
                        status_code=e.status_code,
                        attempts=attempt + 1,
                    )
                    raise

                wait_time = self.retry_delay * (2 ** attempt)
                self.logger.warning(
                    "provider_call_retry",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=e.message,
                    wait_seconds=wait_time,
                )
                time.sleep(wait_time)


# ============================================================================
# DEEPSEEK CLIENT
# ============================================================================

class DeepSeekClient(LLMClient):
    """DeepSeek chat-completion API."""

    provider = AIProvider.DEEPSEEK

    def build_request(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "url": f"{self.base_url}/chat/completions",
            "headers": {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            "json": {
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
            },
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]


# ============================================================================
# GEMINI CLIENT
# ============================================================================

class GeminiClient(LLMClient):
    """Gemini generateContent API; the system prompt is prepended to the user text."""

    provider = AIProvider.GEMINI

    def build_request(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "url": f"{self.base_url}/models/{self.model}:generateContent",
            "params": {"key": self.api_key},
            "headers": {"Content-Type": "application/json"},
            "json": {
                "contents": [
                    {"parts": [{"text": f"{system_prompt}\n\n{user_prompt}"}]}
                ],
                "generationConfig": {
                    "temperature": self.temperature,
                    "maxOutputTokens": self.max_tokens,
                },
            },
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]

    def extract_error_message(self, response: httpx.Response) -> str:
        """
        Best-effort message chain.

        error.message -> message -> reason phrase -> HTTP status code.
        """
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if data.get("message"):
                return str(data["message"])
        return response.reason_phrase or f"HTTP {response.status_code}"


# ============================================================================
# CLIENT FACTORY
# ============================================================================

_CLIENT_CLASSES = {
    AIProvider.DEEPSEEK: DeepSeekClient,
    AIProvider.GEMINI: GeminiClient,
}


def resolve_api_key(provider: Union[AIProvider, str], api_key: Optional[str] = None) -> str:
    """Explicit key, else the provider key from settings."""
    provider = AIProvider(provider)
    if api_key:
        return api_key
    if provider == AIProvider.DEEPSEEK:
        return settings.deepseek_api_key
    return settings.gemini_api_key


def resolve_provider(provider: Union[AIProvider, str, None] = None) -> AIProvider:
    """
    Provider enum for a name, defaulting to settings.default_provider.

    Raises:
        ValueError: Unknown provider name
    """
    try:
        return AIProvider(provider or settings.default_provider)
    except ValueError:
        raise ValueError(
            f"Unknown AI provider: {provider}. Supported: deepseek, gemini"
        ) from None


def create_llm_client(
    provider: Union[AIProvider, str, None] = None,
    api_key: Optional[str] = None,
    **override_kwargs,
) -> LLMClient:
    """
    Factory function to create the client for a provider.

    Priority order for configuration:
    1. Explicit parameters passed to this function
    2. Settings from config

    Args:
        provider: "deepseek" or "gemini" (default: settings.default_provider)
        api_key: Provider API key (default: provider key from settings)
        **override_kwargs: Override any client parameter (model, base_url,
            max_tokens, temperature, timeout_seconds, max_retries,
            retry_delay, http_client)

    Returns:
        Configured LLMClient instance

    Raises:
        ValueError: Unknown provider or missing API key
    """
    provider = resolve_provider(provider)

    if provider == AIProvider.DEEPSEEK:
        model, base_url = settings.deepseek_model, settings.deepseek_base_url
    else:
        model, base_url = settings.gemini_model, settings.gemini_base_url

    client_params = {
        "model": override_kwargs.get("model", model),
        "base_url": override_kwargs.get("base_url", base_url),
        "temperature": override_kwargs.get("temperature", settings.llm_temperature),
        "max_tokens": override_kwargs.get("max_tokens", settings.llm_section_max_tokens),
        "timeout_seconds": override_kwargs.get("timeout_seconds", settings.llm_timeout_seconds),
        "max_retries": override_kwargs.get("max_retries", settings.llm_max_retries),
        "retry_delay": override_kwargs.get("retry_delay", settings.llm_retry_delay_seconds),
        "http_client": override_kwargs.get("http_client"),
    }

    logger.debug(
        "creating_llm_client",
        provider=provider.value,
        model=client_params["model"],
        max_tokens=client_params["max_tokens"],
    )

    return _CLIENT_CLASSES[provider](
        api_key=resolve_api_key(provider, api_key),
        **client_params,
    )


def send(
    system_prompt: str,
    user_prompt: str,
    api_key: str,
    provider: Union[AIProvider, str],
    **override_kwargs,
) -> str:
    """
    Send one prompt pair to a provider and return the raw text.

    Raises:
        ProviderError: On non-success responses
    """
    client = create_llm_client(provider=provider, api_key=api_key, **override_kwargs)
    return client.send(system_prompt, user_prompt).text
