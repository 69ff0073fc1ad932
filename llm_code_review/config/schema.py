"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from llm_code_review.review.invoker import DEFAULT_DIFF_COMMAND
from llm_code_review.review.tokens import CHARS_PER_TOKEN, MAX_TOKENS

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class BudgetPolicy(BaseModel):
    """Token budget for the diff payload."""
    model_config = ConfigDict(frozen=True)

    max_tokens: int = Field(default=MAX_TOKENS, gt=0)
    chars_per_token: int = Field(default=CHARS_PER_TOKEN, gt=0)
    verify_reduced: bool = False  # Reject a reduced diff that is still over budget


class ReviewSettings(BaseSettings):
    """Root configuration for llm_code_review."""
    model_config = SettingsConfigDict(
        env_prefix="LLM_CODE_REVIEW_",
        env_nested_delimiter="__",
    )

    budget: BudgetPolicy = Field(default_factory=BudgetPolicy)
    diff_command: list[str] = Field(default_factory=lambda: list(DEFAULT_DIFF_COMMAND))
    default_context_lines: int = Field(default=3, ge=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}. Available: {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("diff_command")
    @classmethod
    def _check_diff_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("diff_command must not be empty")
        return value
