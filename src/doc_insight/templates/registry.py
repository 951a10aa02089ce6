"""
Read-only catalog of analysis templates.

The built-in catalog is constructed once per process by default_registry() and
injected into the analyzer and the API; nothing mutates it afterwards.
"""

from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple, Union

import structlog

from ..models.template import (
    OutputFormat,
    Template,
    TemplateCategory,
    TemplatePrompts,
)

logger = structlog.get_logger(__name__)


# ============================================================================
# BUILT-IN TEMPLATES
# ============================================================================

BUILTIN_TEMPLATES: Tuple[Template, ...] = (
    Template(
        id="business-report",
        name="Business Report Analysis",
        description="Comprehensive analysis for business documents, reports, and proposals",
        category=TemplateCategory.BUSINESS,
        prompts=TemplatePrompts(
            summary="Provide an executive summary focusing on key business metrics, objectives, and outcomes.",
            insights="Identify critical business insights, market trends, competitive advantages, and strategic implications.",
            recommendations="Suggest actionable business recommendations based on the analysis, including implementation strategies.",
            technical="Detail technical specifications, methodologies, and data analysis approaches used.",
        ),
        output_format=OutputFormat.STRUCTURED,
        estimated_time_seconds=120,
    ),
    Template(
        id="academic-research",
        name="Academic Research Analysis",
        description="In-depth analysis for academic papers, research documents, and scholarly articles",
        category=TemplateCategory.ACADEMIC,
        prompts=TemplatePrompts(
            summary="Summarize the research objectives, methodology, key findings, and conclusions.",
            insights="Analyze the research contribution, novelty, limitations, and implications for the field.",
            recommendations="Suggest areas for future research, methodology improvements, and practical applications.",
            technical="Examine the research methodology, statistical analysis, and technical approaches used.",
        ),
        output_format=OutputFormat.STRUCTURED,
        estimated_time_seconds=180,
    ),
    Template(
        id="legal-document",
        name="Legal Document Analysis",
        description="Specialized analysis for contracts, legal briefs, and regulatory documents",
        category=TemplateCategory.LEGAL,
        prompts=TemplatePrompts(
            summary="Summarize key legal provisions, obligations, rights, and terms.",
            insights="Identify potential legal risks, compliance issues, and strategic considerations.",
            recommendations="Suggest legal strategies, risk mitigation approaches, and compliance measures.",
            technical="Analyze legal precedents, regulatory requirements, and procedural aspects.",
        ),
        output_format=OutputFormat.STRUCTURED,
        estimated_time_seconds=150,
    ),
    Template(
        id="technical-specification",
        name="Technical Specification Analysis",
        description="Detailed analysis for technical documents, specifications, and engineering reports",
        category=TemplateCategory.TECHNICAL,
        prompts=TemplatePrompts(
            summary="Summarize technical requirements, specifications, and system architecture.",
            insights="Analyze technical feasibility, performance implications, and design considerations.",
            recommendations="Suggest technical improvements, optimization strategies, and implementation approaches.",
            technical="Detail technical specifications, algorithms, protocols, and implementation details.",
        ),
        output_format=OutputFormat.STRUCTURED,
        estimated_time_seconds=140,
    ),
    Template(
        id="financial-analysis",
        name="Financial Document Analysis",
        description="Comprehensive analysis for financial reports, statements, and investment documents",
        category=TemplateCategory.FINANCIAL,
        prompts=TemplatePrompts(
            summary="Summarize financial performance, key metrics, and overall financial health.",
            insights="Analyze financial trends, ratios, risks, and growth opportunities.",
            recommendations="Suggest financial strategies, investment recommendations, and risk management approaches.",
            technical="Detail financial methodologies, calculations, and analytical frameworks used.",
        ),
        output_format=OutputFormat.STRUCTURED,
        estimated_time_seconds=130,
    ),
)


# ============================================================================
# REGISTRY
# ============================================================================

class TemplateRegistry:
    """
    Immutable template catalog with lookup by id and category.

    Lookups that miss return None; callers decide the fallback.
    """

    def __init__(self, templates: Iterable[Template]):
        self._templates: Tuple[Template, ...] = tuple(templates)
        if not self._templates:
            raise ValueError("Template registry requires at least one template")

        index: Dict[str, Template] = {}
        for template in self._templates:
            if template.id in index:
                raise ValueError(f"Duplicate template id: {template.id}")
            index[template.id] = template
        self._index = index

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._index

    def list_templates(self) -> List[Template]:
        """All templates in catalog order."""
        return list(self._templates)

    def list_by_category(self, category: Union[TemplateCategory, str]) -> List[Template]:
        """Templates of one category, in catalog order. Unknown categories yield []."""
        value = category.value if isinstance(category, TemplateCategory) else str(category)
        return [t for t in self._templates if t.category.value == value]

    def get_by_id(self, template_id: str) -> Optional[Template]:
        """Template with this id, or None when absent."""
        return self._index.get(template_id)

    def get_or_default(self, template_id: Optional[str]) -> Template:
        """Template with this id, falling back to the first catalog entry."""
        template = self._index.get(template_id) if template_id else None
        if template is None:
            logger.warning(
                "template_not_found_using_default",
                template_id=template_id,
                default_template_id=self._templates[0].id,
            )
            return self._templates[0]
        return template

    @property
    def default(self) -> Template:
        return self._templates[0]


@lru_cache(maxsize=1)
def default_registry() -> TemplateRegistry:
    """Process-wide registry of the built-in templates."""
    return TemplateRegistry(BUILTIN_TEMPLATES)
