"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- HTTP clients
- Test settings
- A scripted provider client and its factory
- Sample documents
"""

import os
from typing import AsyncGenerator, Callable, List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from doc_insight.analysis.llm_client import LLMResponse
from doc_insight.api.app import app
from doc_insight.config import Settings
from doc_insight.templates.registry import default_registry


SAMPLE_DOCUMENT = (
    "The project was a great success with excellent results. "
    "However, there were some risks."
)

DEFAULT_REPLY = (
    "Revenue grew steadily across every region this quarter. "
    "Operating margins improved thanks to lower logistics costs."
)


class FakeLLMClient:
    """
    Scripted stand-in for a provider client.

    Records every (system_prompt, user_prompt) pair and answers with `reply`
    (a string or a callable taking both prompts), or raises `error`.
    """

    def __init__(self, reply=DEFAULT_REPLY, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    def send(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        text = self.reply(system_prompt, user_prompt) if callable(self.reply) else self.reply
        return LLMResponse(text=text, provider="deepseek", model="fake-model", latency_ms=1)


class RecordingFactory:
    """Client factory returning one FakeLLMClient and recording its kwargs."""

    def __init__(self, client: FakeLLMClient):
        self.client = client
        self.calls: List[dict] = []

    def __call__(self, **kwargs) -> FakeLLMClient:
        self.calls.append(kwargs)
        return self.client


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    Yields:
        AsyncClient instance
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings with safe defaults, independent of the environment.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        default_provider="deepseek",
        deepseek_api_key="test-deepseek-key",
        gemini_api_key="test-gemini-key",
        section_confidence=0.85,
        sentiment_match_mode="substring",
        topic_limit=10,
        log_level="INFO",
        log_json=False,  # Easier to read in tests
    )


@pytest.fixture
def registry():
    """Built-in template registry."""
    return default_registry()


@pytest.fixture
def fake_client() -> FakeLLMClient:
    """Provider client answering every prompt with DEFAULT_REPLY."""
    return FakeLLMClient()


@pytest.fixture
def fake_factory(fake_client) -> RecordingFactory:
    """Client factory handing out `fake_client`."""
    return RecordingFactory(fake_client)


@pytest.fixture
def sample_document() -> str:
    """Short English document with known sentiment counts."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def make_fake_factory() -> Callable[..., RecordingFactory]:
    """Build a factory around a FakeLLMClient with custom reply or error."""

    def _make(reply=DEFAULT_REPLY, error: Optional[Exception] = None) -> RecordingFactory:
        return RecordingFactory(FakeLLMClient(reply=reply, error=error))

    return _make


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """
    Configure pytest with custom markers.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (API, end-to-end)"
    )
