"""
Version information endpoint.
"""

from fastapi import APIRouter

from ...config import settings
from ...models.api_models import VersionResponse
from ...templates.registry import default_registry
from ...version import API_VERSION, PIPELINE_VERSION

router = APIRouter()


@router.get("/version", response_model=VersionResponse)
async def get_version() -> VersionResponse:
    """
    Get current API and pipeline version information.

    Returns:
        Version information for audit and debugging
    """
    return VersionResponse(
        api_version=API_VERSION,
        pipeline_version=PIPELINE_VERSION,
        default_provider=settings.default_provider,
        templates_count=len(default_registry()),
    )
