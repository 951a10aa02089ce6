"""
Settings for the analysis service, CLI and provider clients.

Values come from the environment or a local .env file (pydantic-settings).
"""

from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Service, provider and pipeline settings.

    Field names map to environment variables case-insensitively, e.g.
    DEEPSEEK_API_KEY or DEFAULT_PROVIDER.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Document limits
    max_document_size_mb: int = 25
    default_template_id: str = "business-report"

    # AI providers
    default_provider: str = "deepseek"  # "deepseek" | "gemini"
    deepseek_api_key: str = ""
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    deepseek_model: str = "deepseek-chat"
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-flash"

    # Sampling
    llm_temperature: float = 0.7
    llm_section_max_tokens: int = 2000  # One call per template prompt field
    llm_report_max_tokens: int = 4000  # Single-call full report
    llm_timeout_seconds: int = 120
    llm_max_retries: int = 1  # 1 = single attempt, no retry
    llm_retry_delay_seconds: float = 1.0

    # Report sections
    section_confidence: float = Field(default=0.85, ge=0.0, le=1.0)

    # Signal extraction
    sentiment_match_mode: Literal["substring", "word"] = "substring"
    topic_limit: int = 10

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
