"""
Prompt construction for template-driven analysis.

Builds one (system, user) prompt pair per template prompt field. The system
prompt is derived only from the configuration, so every field of one run
shares it; the user prompt pairs the field instruction with the document body.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..models.template import AnalysisConfiguration


# ============================================================================
# FULL REPORT PROMPT
# ============================================================================

FULL_REPORT_SYSTEM_PROMPT = """You are an expert document analyst. Analyze the provided document and return a comprehensive analysis in the following JSON format:
{
  "summary": "Executive summary (2-3 paragraphs)",
  "insights": "Detailed analytical insights and findings",
  "recommendations": "Actionable recommendations based on the analysis",
  "technical": "Technical details, code examples, or implementation notes",
  "fullReport": "Complete markdown-formatted comprehensive report"
}"""

FULL_REPORT_USER_PREFIX = "Please analyze this document:"


# ============================================================================
# SECTION PROMPTS
# ============================================================================

@dataclass(frozen=True)
class SectionPrompt:
    """Prompt pair for one report section."""
    section_key: str
    system_prompt: str
    user_prompt: str


def build_system_prompt(configuration: AnalysisConfiguration) -> str:
    """
    Build the system prompt from the configuration.

    Deterministic: category, depth, focus list, output format, language and
    (when present) the exclusion clause, always in that order.
    """
    template = configuration.template
    parts = [
        f"You are an expert document analyst specializing in {template.category.value} analysis. ",
        f"Provide {configuration.depth.value} analysis with focus on: {', '.join(configuration.focus)}. ",
        f"Output format: {template.output_format.value}. ",
        f"Language: {configuration.output_language}. ",
    ]
    if configuration.exclude_topics:
        parts.append(f"Avoid discussing: {', '.join(configuration.exclude_topics)}. ")
    return "".join(parts)


def build_user_prompt(instruction: str, content: str) -> str:
    """Field instruction followed by the labeled document body."""
    return f"{instruction}\n\nDocument content:\n{content}"


def build_section_prompts(
    configuration: AnalysisConfiguration,
    content: str,
) -> List[SectionPrompt]:
    """
    Prompt pairs for every prompt field of the configured template.

    Order follows Template.prompt_fields(): summary, insights,
    recommendations, technical, then custom_1..custom_n.

    Args:
        configuration: Analysis configuration (template + tuning)
        content: Sanitized document body

    Returns:
        Ordered list of SectionPrompt
    """
    system_prompt = build_system_prompt(configuration)
    return [
        SectionPrompt(
            section_key=key,
            system_prompt=system_prompt,
            user_prompt=build_user_prompt(instruction, content),
        )
        for key, instruction in configuration.template.prompt_fields()
    ]


def build_full_report_prompts(content: str) -> Tuple[str, str]:
    """
    Prompt pair for the single-call full report.

    Returns:
        (system_prompt, user_prompt) tuple
    """
    return FULL_REPORT_SYSTEM_PROMPT, f"{FULL_REPORT_USER_PREFIX}\n\n{content}"
