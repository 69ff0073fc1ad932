"""Diff collection and prompt assembly."""

from llm_code_review.review.base import (
    BudgetExceededError,
    DiffCollection,
    DiffInvocationError,
    DiffRequest,
    DiffResult,
    ReductionOutcome,
    ReviewError,
    ReviewStatus,
)
from llm_code_review.review.collector import DiffCollector
from llm_code_review.review.invoker import DiffInvoker
from llm_code_review.review.prompt import OutputFormat, build_prompt

__all__ = [
    "BudgetExceededError",
    "DiffCollection",
    "DiffCollector",
    "DiffInvocationError",
    "DiffInvoker",
    "DiffRequest",
    "DiffResult",
    "OutputFormat",
    "ReductionOutcome",
    "ReviewError",
    "ReviewStatus",
    "build_prompt",
]
