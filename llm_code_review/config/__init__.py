"""Configuration for llm_code_review."""

from llm_code_review.config.loader import get_config_path, load_settings
from llm_code_review.config.schema import BudgetPolicy, ReviewSettings

__all__ = [
    "BudgetPolicy",
    "ReviewSettings",
    "get_config_path",
    "load_settings",
]
