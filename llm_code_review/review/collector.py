"""Collects a diff that fits the token budget."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from llm_code_review.review.base import (
    BudgetExceededError,
    DiffCollection,
    DiffRequest,
    ReductionOutcome,
    ReviewStatus,
)
from llm_code_review.review.invoker import DiffInvoker
from llm_code_review.review.reducer import minimum_context_tokens, reduce_context
from llm_code_review.review.tokens import estimate_tokens, is_over_budget

if TYPE_CHECKING:
    from llm_code_review.config.schema import BudgetPolicy

TOO_LARGE_MESSAGE = (
    "Diff is too large to process even with minimal context. "
    "Try reviewing a smaller set of changes."
)


class DiffCollector:
    """
    Runs the diff, and re-runs it once with fewer context lines when the
    output is over budget.

    There is never more than one reduction pass.
    """

    def __init__(
        self,
        policy: BudgetPolicy,
        invoker: DiffInvoker | None = None,
        force_reduced: bool = False,
    ):
        self.policy = policy
        self.invoker = invoker or DiffInvoker()
        self.force_reduced = force_reduced

    def collect(self, request: DiffRequest) -> DiffCollection:
        """
        Produce the diff text for *request*.

        Raises:
            DiffInvocationError: If either git invocation fails.
            BudgetExceededError: If the diff cannot be brought under budget.
        """
        logger.trace(f"Diff request: {list(request.args)}")
        result = self.invoker.invoke(request.args)
        if result.is_empty:
            return DiffCollection(status=ReviewStatus.NO_CHANGES, diff="", request=request)

        max_tokens = self.policy.max_tokens
        estimated = estimate_tokens(result.output, self.policy.chars_per_token)

        if not is_over_budget(estimated, max_tokens) and not self.force_reduced:
            return DiffCollection(
                status=ReviewStatus.READY,
                diff=result.output,
                request=request,
                estimated_tokens=estimated,
            )

        logger.debug(
            f"estimated_tokens > max_tokens! `{estimated} > {max_tokens}`. "
            f"Need to reduce context from {request.context_lines}!"
        )

        reduced = reduce_context(request, estimated, max_tokens)
        if reduced is None:
            return DiffCollection(
                status=ReviewStatus.READY,
                diff=result.output,
                request=request,
                estimated_tokens=estimated,
            )

        projected = minimum_context_tokens(request.context_lines, estimated)
        if is_over_budget(projected, max_tokens):
            logger.trace(
                f"Projected tokens at 1 line of context: {projected} > {max_tokens}"
            )
            raise BudgetExceededError(TOO_LARGE_MESSAGE, projected, max_tokens)

        logger.debug(f"Re-running diff with reduced args: {list(reduced.args)}")
        second = self.invoker.invoke(reduced.args)
        if second.is_empty:
            return DiffCollection(
                status=ReviewStatus.NO_CHANGES,
                diff="",
                request=request,
                outcome=ReductionOutcome.REDUCED,
                reduced_request=reduced,
                estimated_tokens=estimated,
            )

        # The reduced diff is accepted as-is unless verify_reduced is set.
        second_estimated = estimate_tokens(second.output, self.policy.chars_per_token)
        if is_over_budget(second_estimated, max_tokens):
            if self.policy.verify_reduced:
                raise BudgetExceededError(TOO_LARGE_MESSAGE, second_estimated, max_tokens)
            logger.warning(
                f"Reduced diff is still over budget ({second_estimated} > {max_tokens} tokens)"
            )

        return DiffCollection(
            status=ReviewStatus.READY,
            diff=second.output,
            request=request,
            outcome=ReductionOutcome.REDUCED,
            reduced_request=reduced,
            estimated_tokens=estimated,
        )
