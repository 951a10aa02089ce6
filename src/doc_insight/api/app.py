"""
HTTP service for template-driven document analysis.

Routes:
- GET  /health
- GET  /api/v1/version
- GET  /api/v1/templates, /api/v1/templates/{template_id}
- POST /api/v1/analyze, /api/v1/analyze/upload, /api/v1/report

Run with ``doc-insight-api`` or ``uvicorn doc_insight.api.app:app``.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..logging_config import setup_logging
from ..templates.registry import default_registry
from ..version import API_VERSION, PIPELINE_VERSION
from .middleware import register_error_handlers, setup_request_middleware
from .routes import analysis, health, templates, version

setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = default_registry()
    logger.info(
        "service_starting",
        api_version=API_VERSION,
        pipeline_version=PIPELINE_VERSION,
        default_provider=settings.default_provider,
        default_template_id=settings.default_template_id,
        templates_count=len(registry),
    )
    yield
    logger.info("service_stopped")


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, error handlers and routers."""
    app = FastAPI(
        title="Document Insight",
        description="Template-driven document analysis with DeepSeek and Gemini",
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    setup_request_middleware(app)
    register_error_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(templates.router)
    app.include_router(analysis.router)
    return app


app = create_app()


def main() -> None:
    """Console entry point: serve the app with uvicorn using settings."""
    import uvicorn

    uvicorn.run(
        "doc_insight.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
