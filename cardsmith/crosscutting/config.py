"""
Name: Cardsmith Settings

Every tunable of the segmentation pipeline, read from the environment (and
an optional .env) through pydantic-settings. Invalid values fail at the
first get_settings() call, not mid-segmentation.

Consumers:
  - container.py: segmenter bounds, AI adapter, deck cover titles
  - infrastructure/services/retry.py: attempts and delays
  - crosscutting/logger.py: level and JSON toggle

The fallback thresholds are heuristics; tune them here rather than in code.
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        google_api_key: Google Gemini API key
        fake_llm: Use the deterministic fake splitter (tests/CI/offline)
        gemini_model_id: Model used by the primary segmentation strategy
        prompt_version: Segmentation prompt template version (v1, v2, ...)
        primary_enabled: Run the AI strategy before the fallback (default: True)
        segment_timeout_seconds: Timeout for the primary strategy (default: 30)
        max_segment_words: Fallback body bound in words (default: 80)
        max_segment_chars_cjk: Fallback body bound in chars for CJK text (default: 160)
        header_max_chars: Max length of a paragraph promoted to title (default: 40)
        cjk_density_threshold: Share of CJK chars that switches to char units (default: 0.3)
        default_section_title: Initial title context for body cards (default: "")
        cover_title: Title of the leading cover card (default: "Project Text")
        closing_title: Title of the trailing cover card (default: "The End")
        log_level: Logging level (default: INFO)
        log_json: Emit JSON logs (default: True)
    """

    # Environment
    app_env: str = "development"

    # AI provider
    google_api_key: str = ""
    fake_llm: bool = False
    gemini_model_id: str = "gemini-3-flash-preview"
    prompt_version: str = "v1"

    # Segmentation (primary strategy)
    primary_enabled: bool = True
    segment_timeout_seconds: float = 30.0

    # Segmentation (fallback strategy, defaults match the paragraph packer)
    max_segment_words: int = 80
    max_segment_chars_cjk: int = 160
    header_max_chars: int = 40
    cjk_density_threshold: float = 0.3
    default_section_title: str = ""
    cover_title: str = "Project Text"
    closing_title: str = "The End"

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    retry_max_delay_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("max_segment_words", "max_segment_chars_cjk", "header_max_chars")
    @classmethod
    def bound_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("segment bounds must be greater than 0")
        return v

    @field_validator("segment_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("segment_timeout_seconds must be greater than 0")
        return v

    @field_validator("cjk_density_threshold")
    @classmethod
    def cjk_density_threshold_valid(cls, v: float) -> float:
        if v < 0 or v > 1:
            raise ValueError("cjk_density_threshold must be between 0 and 1")
        return v

    @model_validator(mode="after")
    def validate_ai_requirements(self):
        if self.primary_enabled and not self.google_api_key and not self.fake_llm:
            raise ValueError(
                "GOOGLE_API_KEY is required unless FAKE_LLM=1 or PRIMARY_ENABLED=0"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
