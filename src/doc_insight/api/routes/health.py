"""
Liveness endpoint.

Reports uptime, the template catalog size and which AI providers have an
API key configured.
"""

import time

from fastapi import APIRouter

from ...analysis.llm_client import AIProvider, resolve_api_key
from ...config import settings
from ...models.api_models import HealthResponse
from ...templates.registry import default_registry
from ...version import API_VERSION

router = APIRouter()

_started_at = time.time()


def configured_providers() -> dict:
    """Provider name -> whether a key is available from settings."""
    return {provider.value: bool(resolve_api_key(provider)) for provider in AIProvider}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        uptime_seconds=time.time() - _started_at,
        default_provider=settings.default_provider,
        providers_configured=configured_providers(),
        templates_count=len(default_registry()),
    )
