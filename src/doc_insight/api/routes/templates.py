"""
Template catalog endpoints.

- GET /api/v1/templates - List templates, optionally by category
- GET /api/v1/templates/{template_id} - Single template
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...models.api_models import TemplateListResponse
from ...models.template import Template
from ...templates.registry import TemplateRegistry, default_registry


logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["templates"])


def get_registry() -> TemplateRegistry:
    """Registry dependency (overridable in tests)."""
    return default_registry()


@router.get("/templates", response_model=TemplateListResponse)
async def list_templates(
    category: Optional[str] = Query(default=None, description="Filter by category"),
    registry: TemplateRegistry = Depends(get_registry),
) -> TemplateListResponse:
    """List templates in catalog order."""
    templates = (
        registry.list_by_category(category) if category else registry.list_templates()
    )
    return TemplateListResponse(count=len(templates), templates=templates)


@router.get("/templates/{template_id}", response_model=Template)
async def get_template(
    template_id: str,
    registry: TemplateRegistry = Depends(get_registry),
) -> Template:
    """Single template by id."""
    template = registry.get_by_id(template_id)
    if template is None:
        logger.info("template_lookup_miss", template_id=template_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template not found: {template_id}",
        )
    return template
