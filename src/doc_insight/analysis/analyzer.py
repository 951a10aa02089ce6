"""
Main document analyzer orchestrating the complete analysis pipeline.

Coordinates:
1. Sanitization and format preprocessing
2. Metadata enrichment and structure analysis
3. One provider call per template prompt field, normalized into sections
4. Local signals (entities, topics, sentiment, readability)
5. Visualizations and result assembly

Stages run strictly in order and report progress to a listener. Any failure
aborts the run with a single AnalysisError; no partial result is returned.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Union

import structlog

from ..canonicalization.preprocessing import preprocess_document
from ..canonicalization.sanitizer import (
    count_words,
    sanitize,
    sanitize_title,
    strip_control_characters,
)
from ..config import Settings, settings as default_settings
from ..errors import AnalysisError, EmptyDocumentError
from ..logging_config import bind_analysis_context, clear_analysis_context
from ..models.analysis import AnalysisResult, Section
from ..models.document import DocumentMetadata
from ..models.template import AnalysisConfiguration
from ..signals import (
    analyze_sentiment,
    analyze_structure,
    calculate_readability,
    detect_language,
    extract_entities,
    extract_topics,
)
from ..templates.registry import TemplateRegistry, default_registry
from .llm_client import AIProvider, LLMClient, create_llm_client, resolve_provider
from .normalizer import normalize
from .progress import (
    AnalysisStage,
    ListenerLike,
    ProgressEvent,
    ProgressListener,
    ai_stage_progress,
    as_listener,
    stage_event,
)
from .prompts import build_section_prompts
from .visualizations import generate_visualizations


logger = structlog.get_logger(__name__)

ClientFactory = Callable[..., LLMClient]


# ============================================================================
# DOCUMENT ANALYZER
# ============================================================================

class DocumentAnalyzer:
    """
    Template-driven document analyzer.

    Holds only immutable collaborators (template registry, client factory,
    settings), so one instance can serve any number of independent runs.
    """

    def __init__(
        self,
        registry: Optional[TemplateRegistry] = None,
        client_factory: Optional[ClientFactory] = None,
        config: Optional[Settings] = None,
    ):
        """
        Initialize analyzer.

        Args:
            registry: Template catalog (default: built-in registry)
            client_factory: Callable building an LLMClient from
                provider/api_key/max_tokens (default: create_llm_client)
            config: Settings (default: module settings)
        """
        self.registry = registry or default_registry()
        self.client_factory = client_factory or create_llm_client
        self.config = config or default_settings

    def build_configuration(self, template_id: Optional[str] = None, **options) -> AnalysisConfiguration:
        """
        Configuration for a template id, falling back to the first template.

        Args:
            template_id: Registry id (default: settings.default_template_id)
            **options: depth, focus, exclude_topics, output_language,
                include_visualization, compare_with_previous
        """
        template = self.registry.get_or_default(template_id or self.config.default_template_id)
        return AnalysisConfiguration(template=template, **options)

    def analyze(
        self,
        content: str,
        metadata: DocumentMetadata,
        configuration: AnalysisConfiguration,
        api_key: Optional[str] = None,
        provider: Union[AIProvider, str, None] = None,
        listener: ListenerLike = None,
    ) -> AnalysisResult:
        """
        Analyze a document.

        Args:
            content: Raw document text
            metadata: Upload-time metadata
            configuration: Template plus tuning
            api_key: Provider API key (default: from settings)
            provider: "deepseek" or "gemini" (default: settings.default_provider)
            listener: ProgressListener or callable receiving ProgressEvent

        Returns:
            Fully populated AnalysisResult

        Raises:
            AnalysisError: "Analysis failed: <cause>" on any failure
        """
        listener = as_listener(listener)
        run = _AnalysisRun(listener)
        analysis_id = uuid.uuid4().hex
        provider_name = str(getattr(provider, "value", provider) or self.config.default_provider)

        bind_analysis_context(analysis_id, configuration.template.id, provider_name)
        try:
            return self._run(
                run, analysis_id, content, metadata, configuration, api_key, provider_name
            )
        except Exception as e:
            logger.error(
                "analysis_failed",
                stage=run.stage.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            failure = AnalysisError(f"Analysis failed: {e}", context={"stage": run.stage.value})
            try:
                listener.on_progress(
                    ProgressEvent(run.progress, failure.message, AnalysisStage.ERROR)
                )
            except Exception as listener_error:
                logger.warning("progress_listener_failed", error=str(listener_error))
            raise failure from e
        finally:
            clear_analysis_context()

    def _run(
        self,
        run: "_AnalysisRun",
        analysis_id: str,
        content: str,
        metadata: DocumentMetadata,
        configuration: AnalysisConfiguration,
        api_key: Optional[str],
        provider_name: str,
    ) -> AnalysisResult:
        start_time = time.time()
        resolve_provider(provider_name)

        logger.info(
            "analysis_started",
            file_type=metadata.file_type.value,
            content_length=len(content or ""),
            depth=configuration.depth.value,
        )

        # Stage 1: sanitization and format preprocessing
        run.enter(AnalysisStage.PREPROCESSING, "Preprocessing document...")
        stripped = strip_control_characters(content)
        if not sanitize(stripped):
            raise EmptyDocumentError()
        text = sanitize(preprocess_document(stripped, metadata.file_type))
        if not text:
            raise EmptyDocumentError()

        # Stage 2: metadata
        run.enter(AnalysisStage.METADATA, "Extracting document metadata...")
        enhanced_metadata = metadata.model_copy(
            update={
                "title": sanitize_title(metadata.title),
                "word_count": count_words(text),
                "language": detect_language(text),
                "encoding": "UTF-8",
            }
        )

        # Stage 3: structure (needs line breaks, so runs on stripped input)
        run.enter(AnalysisStage.STRUCTURE, "Analyzing document structure...")
        structure = analyze_structure(stripped)

        # Stage 4: one provider call per template prompt field
        run.enter(AnalysisStage.AI_ANALYSIS, "Performing AI analysis...")
        sections = self._analyze_sections(run, text, configuration, api_key, provider_name)

        # Stage 5: entities and topics
        run.enter(AnalysisStage.ENTITIES, "Extracting entities and topics...")
        entities = extract_entities(text)
        topics = extract_topics(text, limit=self.config.topic_limit)

        # Stage 6: sentiment
        run.enter(AnalysisStage.SENTIMENT, "Analyzing sentiment...")
        sentiment = analyze_sentiment(text, match_mode=self.config.sentiment_match_mode)

        # Stage 7: visualizations
        run.enter(AnalysisStage.VISUALIZATIONS, "Generating visualizations...")
        visualizations = (
            generate_visualizations(topics, entities)
            if configuration.include_visualization
            else []
        )

        # Stage 8: compile
        run.enter(AnalysisStage.COMPILATION, "Compiling analysis results...")
        completed_at = datetime.now(timezone.utc)
        result = AnalysisResult(
            id=analysis_id,
            document_id=uuid.uuid4().hex,
            configuration=configuration,
            metadata=enhanced_metadata,
            sections=sections,
            confidence_score=calculate_confidence_score(sections),
            processing_time_ms=int((time.time() - start_time) * 1000),
            word_count=count_words(text),
            readability_score=calculate_readability(text),
            sentiment_analysis=sentiment,
            key_entities=entities,
            topics=topics,
            visualizations=visualizations,
            structure=structure,
            provider=provider_name,
            created_at=completed_at,
            updated_at=completed_at,
        )

        run.enter(AnalysisStage.COMPLETE, "Analysis complete!")
        logger.info(
            "analysis_completed",
            sections_count=len(sections),
            entities_count=len(entities),
            topics_count=len(topics),
            processing_time_ms=result.processing_time_ms,
        )
        return result

    def _analyze_sections(
        self,
        run: "_AnalysisRun",
        text: str,
        configuration: AnalysisConfiguration,
        api_key: Optional[str],
        provider_name: str,
    ) -> Dict[str, Section]:
        prompts = build_section_prompts(configuration, text)
        client = self.client_factory(
            provider=provider_name,
            api_key=api_key,
            max_tokens=self.config.llm_section_max_tokens,
        )

        sections: Dict[str, Section] = {}
        for index, prompt in enumerate(prompts):
            run.report(
                ai_stage_progress(index, len(prompts)),
                "AI analysis in progress...",
                AnalysisStage.AI_ANALYSIS,
            )
            response = client.send(prompt.system_prompt, prompt.user_prompt)
            if not response.envelope_ok:
                logger.warning(
                    "section_response_not_enveloped",
                    section_key=prompt.section_key,
                    status_code=response.status_code,
                )
            sections[prompt.section_key] = normalize(
                response.text,
                prompt.section_key,
                confidence=self.config.section_confidence,
            )
            logger.debug(
                "section_completed",
                section_key=prompt.section_key,
                word_count=sections[prompt.section_key].word_count,
                latency_ms=response.latency_ms,
            )
        return sections


class _AnalysisRun:
    """Current stage and progress of one analyze() call."""

    def __init__(self, listener: ProgressListener):
        self.listener = listener
        self.stage = AnalysisStage.INIT
        self.progress = 0.0

    def enter(self, stage: AnalysisStage, message: str) -> None:
        event = stage_event(stage, message)
        self.report(event.progress, message, stage)

    def report(self, progress: float, message: str, stage: AnalysisStage) -> None:
        self.stage = stage
        self.progress = float(progress)
        self.listener.on_progress(ProgressEvent(self.progress, message, stage))


# ============================================================================
# HELPERS
# ============================================================================

def calculate_confidence_score(sections: Dict[str, Section]) -> float:
    """Mean section confidence; 0.0 without sections."""
    if not sections:
        return 0.0
    return sum(section.confidence for section in sections.values()) / len(sections)


def analyze_document(
    content: str,
    metadata: DocumentMetadata,
    configuration: AnalysisConfiguration,
    api_key: Optional[str] = None,
    provider: Union[AIProvider, str, None] = None,
    listener: ListenerLike = None,
) -> AnalysisResult:
    """
    Analyze a document with the default registry and provider clients.

    This is the main entry point for analysis.

    Example:
        >>> registry = default_registry()
        >>> configuration = AnalysisConfiguration(
        ...     template=registry.get_or_default("financial-analysis"),
        ...     focus=["revenue"],
        ... )
        >>> result = analyze_document(text, DocumentMetadata(title="Q1"), configuration,
        ...                           api_key="sk-...", provider="deepseek")
        >>> list(result.sections)
        ['summary', 'insights', 'recommendations', 'technical']
    """
    return DocumentAnalyzer().analyze(
        content=content,
        metadata=metadata,
        configuration=configuration,
        api_key=api_key,
        provider=provider,
        listener=listener,
    )
