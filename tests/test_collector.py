"""Tests for diff collection and the single reduction pass."""

from unittest.mock import MagicMock

import pytest

from llm_code_review.config.schema import BudgetPolicy
from llm_code_review.review.base import (
    BudgetExceededError,
    DiffInvocationError,
    DiffRequest,
    DiffResult,
    ReductionOutcome,
    ReviewStatus,
)
from llm_code_review.review.collector import DiffCollector


def _invoker(*outputs: str) -> MagicMock:
    """Fake invoker returning one DiffResult per call."""
    invoker = MagicMock()
    invoker.invoke.side_effect = [DiffResult(output=o) for o in outputs]
    return invoker


@pytest.fixture
def policy():
    return BudgetPolicy()


class TestUnderBudget:
    def test_no_reduction(self, policy):
        diff = "x" * 120_000  # 30,000 tokens
        invoker = _invoker(diff)
        collection = DiffCollector(policy, invoker).collect(DiffRequest.build(3))

        assert collection.status == ReviewStatus.READY
        assert collection.diff == diff
        assert collection.outcome == ReductionOutcome.NOT_NEEDED
        assert collection.reduced_request is None
        assert collection.estimated_tokens == 30_000
        invoker.invoke.assert_called_once_with(("-U3",))

    def test_exactly_at_budget(self, policy):
        invoker = _invoker("x" * 200_000)
        collection = DiffCollector(policy, invoker).collect(DiffRequest.build(3))

        assert collection.outcome == ReductionOutcome.NOT_NEEDED
        assert invoker.invoke.call_count == 1


class TestNoChanges:
    def test_empty_output(self, policy):
        invoker = _invoker("")
        collection = DiffCollector(policy, invoker).collect(DiffRequest.build(3, ["main"]))

        assert collection.status == ReviewStatus.NO_CHANGES
        assert not collection.has_changes
        assert collection.diff == ""
        assert invoker.invoke.call_count == 1

    def test_empty_after_reduction(self, policy):
        invoker = _invoker("x" * 400_000, "")
        collection = DiffCollector(policy, invoker).collect(DiffRequest.build(10))

        assert collection.status == ReviewStatus.NO_CHANGES


class TestReduction:
    def test_reduces_once(self, policy):
        reduced_diff = "y" * 150_000
        invoker = _invoker("x" * 400_000, reduced_diff)
        request = DiffRequest.build(10, ["main", "--", "src/"])

        collection = DiffCollector(policy, invoker).collect(request)

        assert collection.status == ReviewStatus.READY
        assert collection.diff == reduced_diff
        assert collection.outcome == ReductionOutcome.REDUCED
        assert collection.reduced_request.args == ("-U5", "main", "--", "src/")
        assert collection.request is request
        assert request.args == ("-U10", "main", "--", "src/")
        assert invoker.invoke.call_count == 2
        assert invoker.invoke.call_args_list[1].args[0] == ("-U5", "main", "--", "src/")

    def test_long_form_passthrough_also_rewritten(self, policy):
        invoker = _invoker("x" * 400_000, "y")
        request = DiffRequest(args=("--unified=10", "main"), context_lines=10)

        collection = DiffCollector(policy, invoker).collect(request)

        assert collection.reduced_request.args == ("--unified=5", "main")

    def test_too_large_even_at_one_line(self, policy):
        # 100,000 tokens at 1 line of context cannot shrink further
        invoker = _invoker("x" * 400_000)

        with pytest.raises(BudgetExceededError) as exc_info:
            DiffCollector(policy, invoker).collect(DiffRequest.build(1))

        assert exc_info.value.outcome == ReductionOutcome.UNRECOVERABLE
        assert exc_info.value.max_tokens == 50_000
        invoker.invoke.assert_called_once()

    def test_projection_over_budget_skips_second_invocation(self, policy):
        # 1,000,000 tokens / 3 lines still far over 50,000
        invoker = _invoker("x" * 4_000_000)

        with pytest.raises(BudgetExceededError):
            DiffCollector(policy, invoker).collect(DiffRequest.build(3))

        assert invoker.invoke.call_count == 1

    def test_second_result_accepted_without_recheck(self, policy):
        still_large = "y" * 300_000
        invoker = _invoker("x" * 400_000, still_large)

        collection = DiffCollector(policy, invoker).collect(DiffRequest.build(10))

        assert collection.diff == still_large
        assert invoker.invoke.call_count == 2

    def test_verify_reduced_rejects_second_result(self):
        policy = BudgetPolicy(verify_reduced=True)
        invoker = _invoker("x" * 400_000, "y" * 300_000)

        with pytest.raises(BudgetExceededError) as exc_info:
            DiffCollector(policy, invoker).collect(DiffRequest.build(10))

        assert exc_info.value.estimated_tokens == 75_000
        assert invoker.invoke.call_count == 2

    def test_verify_reduced_accepts_small_second_result(self):
        policy = BudgetPolicy(verify_reduced=True)
        invoker = _invoker("x" * 400_000, "y" * 100)

        collection = DiffCollector(policy, invoker).collect(DiffRequest.build(10))

        assert collection.diff == "y" * 100

    def test_second_invocation_failure_propagates(self, policy):
        invoker = MagicMock()
        invoker.invoke.side_effect = [
            DiffResult(output="x" * 400_000),
            DiffInvocationError("failed", stderr="boom", returncode=1),
        ]

        with pytest.raises(DiffInvocationError):
            DiffCollector(policy, invoker).collect(DiffRequest.build(10))


class TestForceReduced:
    def test_forces_reduction_under_budget(self, policy):
        invoker = _invoker("x" * 40, "y" * 20)
        request = DiffRequest(args=("--unified=10", "main"), context_lines=10)

        collection = DiffCollector(policy, invoker, force_reduced=True).collect(request)

        # 10 tokens against a 50,000 budget scales up; the rewrite still happens once
        assert collection.outcome == ReductionOutcome.REDUCED
        assert collection.reduced_request.args == ("--unified=50000", "main")
        assert collection.diff == "y" * 20
        assert invoker.invoke.call_count == 2

    def test_forces_reduction_to_two(self):
        policy = BudgetPolicy(max_tokens=20)
        invoker = _invoker("x" * 400, "y")
        request = DiffRequest(args=("--unified=10", "main"), context_lines=10)

        collection = DiffCollector(policy, invoker, force_reduced=True).collect(request)

        assert collection.reduced_request.args == ("--unified=2", "main")

    def test_zero_tokens_treated_as_under_budget(self, policy):
        invoker = _invoker("abc")  # 3 chars -> 0 tokens
        collection = DiffCollector(policy, invoker, force_reduced=True).collect(
            DiffRequest.build(3)
        )

        assert collection.outcome == ReductionOutcome.NOT_NEEDED
        assert collection.diff == "abc"
        assert invoker.invoke.call_count == 1


class TestInvocationFailure:
    def test_first_invocation_failure_propagates(self, policy):
        invoker = MagicMock()
        invoker.invoke.side_effect = DiffInvocationError("failed", stderr="fatal", returncode=128)

        with pytest.raises(DiffInvocationError) as exc_info:
            DiffCollector(policy, invoker).collect(DiffRequest.build(3, ["nope"]))

        assert exc_info.value.stderr == "fatal"
