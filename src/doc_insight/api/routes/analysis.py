"""
Document analysis API routes.

Provides REST endpoints for template-driven analysis:
- POST /api/v1/analyze - Analyze document text
- POST /api/v1/analyze/upload - Analyze an uploaded file
- POST /api/v1/report - Single-call full report

Endpoints are plain functions so the blocking provider calls run in the
threadpool.
"""

from functools import lru_cache
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from ...analysis.analyzer import DocumentAnalyzer
from ...analysis.report import ReportService
from ...canonicalization.decoding import decode_document_bytes
from ...config import settings
from ...errors import AnalysisError, TemplateNotFoundError
from ...models.api_models import (
    AnalyzeRequest,
    AnalyzeResponse,
    ReportRequest,
    ReportResponse,
)
from ...models.document import DocumentMetadata, FileType
from ...models.template import AnalysisConfiguration, AnalysisDepth
from ..middleware import error_status


logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["analysis"])


# ============================================================================
# DEPENDENCIES
# ============================================================================

@lru_cache()
def get_analyzer() -> DocumentAnalyzer:
    """Shared analyzer (stateless between runs)."""
    return DocumentAnalyzer()


@lru_cache()
def get_report_service() -> ReportService:
    return ReportService()


# ============================================================================
# HELPERS
# ============================================================================

def resolve_configuration(
    analyzer: DocumentAnalyzer,
    template_id: str,
    **options,
) -> AnalysisConfiguration:
    """
    Configuration for an explicit template id.

    Raises:
        TemplateNotFoundError: Unknown template id
    """
    template = analyzer.registry.get_by_id(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return AnalysisConfiguration(template=template, **options)


def run_analysis(
    analyzer: DocumentAnalyzer,
    content: str,
    metadata: DocumentMetadata,
    configuration: AnalysisConfiguration,
    provider: Optional[str],
    api_key: Optional[str],
) -> AnalyzeResponse:
    try:
        result = analyzer.analyze(
            content=content,
            metadata=metadata,
            configuration=configuration,
            api_key=api_key,
            provider=provider,
        )
    except AnalysisError as e:
        status_code = error_status(e)
        logger.error(
            "analysis_request_failed",
            template_id=configuration.template.id,
            status_code=status_code,
            error=e.message,
        )
        raise HTTPException(status_code=status_code, detail=e.message)

    logger.info(
        "analysis_request_completed",
        analysis_id=result.id,
        sections_count=len(result.sections),
        processing_time_ms=result.processing_time_ms,
    )
    return AnalyzeResponse(success=True, result=result)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/analyze", response_model=AnalyzeResponse, status_code=status.HTTP_200_OK)
def analyze_endpoint(
    request: AnalyzeRequest,
    analyzer: DocumentAnalyzer = Depends(get_analyzer),
) -> AnalyzeResponse:
    """
    Analyze document text with a template.

    Raises:
        HTTPException: 404 unknown template, 422 empty document,
            502 provider failure, 500 otherwise
    """
    logger.info(
        "analysis_request_received",
        template_id=request.template_id,
        provider=request.provider,
        content_length=len(request.content),
    )

    try:
        configuration = resolve_configuration(
            analyzer,
            request.template_id,
            depth=request.depth,
            focus=request.focus,
            exclude_topics=request.exclude_topics,
            output_language=request.output_language,
            include_visualization=request.include_visualization,
            compare_with_previous=request.compare_with_previous,
        )
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    metadata = DocumentMetadata(
        title=request.title,
        file_type=request.file_type,
        file_size=len(request.content.encode("utf-8")),
    )
    return run_analysis(
        analyzer, request.content, metadata, configuration, request.provider, request.api_key
    )


@router.post("/analyze/upload", response_model=AnalyzeResponse, status_code=status.HTTP_200_OK)
def analyze_upload_endpoint(
    file: UploadFile = File(..., description="Document file (extracted text)"),
    template_id: str = Form(default=settings.default_template_id),
    depth: AnalysisDepth = Form(default=AnalysisDepth.STANDARD),
    focus: List[str] = Form(default=[]),
    exclude_topics: Optional[List[str]] = Form(default=None),
    output_language: str = Form(default="en"),
    include_visualization: bool = Form(default=True),
    compare_with_previous: Optional[bool] = Form(default=None),
    provider: Optional[str] = Form(default=None),
    api_key: Optional[str] = Form(default=None),
    analyzer: DocumentAnalyzer = Depends(get_analyzer),
) -> AnalyzeResponse:
    """
    Analyze an uploaded document file.

    Raises:
        HTTPException: 413 if the file exceeds max_document_size_mb,
            otherwise as /analyze
    """
    data = file.file.read()
    max_bytes = settings.max_document_size_mb * 1024 * 1024
    if len(data) > max_bytes:
        logger.warning("upload_too_large", filename=file.filename, size=len(data))
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {settings.max_document_size_mb} MB limit",
        )

    filename = file.filename or "document.txt"
    content, encoding = decode_document_bytes(data)
    logger.info(
        "upload_received",
        filename=filename,
        size=len(data),
        encoding=encoding,
        template_id=template_id,
    )

    try:
        configuration = resolve_configuration(
            analyzer,
            template_id,
            depth=depth,
            focus=focus,
            exclude_topics=exclude_topics or None,
            output_language=output_language,
            include_visualization=include_visualization,
            compare_with_previous=compare_with_previous,
        )
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    metadata = DocumentMetadata(
        title=filename.rsplit(".", 1)[0] if "." in filename else filename,
        file_type=FileType.from_filename(filename),
        file_size=len(data),
        encoding=encoding,
    )
    return run_analysis(analyzer, content, metadata, configuration, provider, api_key)


@router.post("/report", response_model=ReportResponse, status_code=status.HTTP_200_OK)
def report_endpoint(
    request: ReportRequest,
    service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    """
    Generate a full report with a single provider call.

    Raises:
        HTTPException: 422 empty document, 502 provider failure, 500 otherwise
    """
    logger.info(
        "report_request_received",
        provider=request.provider,
        content_length=len(request.content),
    )

    try:
        report = service.generate(
            request.content,
            provider=request.provider,
            api_key=request.api_key,
        )
    except AnalysisError as e:
        status_code = error_status(e)
        logger.error("report_request_failed", status_code=status_code, error=e.message)
        raise HTTPException(status_code=status_code, detail=e.message)

    return ReportResponse(success=True, report=report)
