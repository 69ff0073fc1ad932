"""Shared types and errors for diff collection."""

from dataclasses import dataclass
from enum import Enum


class ReductionOutcome(Enum):
    NOT_NEEDED = "not_needed"
    REDUCED = "reduced"
    UNRECOVERABLE = "unrecoverable"


class ReviewStatus(Enum):
    READY = "ready"
    NO_CHANGES = "no_changes"


class ReviewError(Exception):
    """Raised when a review prompt cannot be produced."""


class DiffInvocationError(ReviewError):
    """Raised when the diff command exits with a nonzero status."""

    def __init__(self, message: str, stderr: str = "", returncode: int | None = None):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class BudgetExceededError(ReviewError):
    """Raised when a diff is too large even with minimal context."""

    def __init__(self, message: str, estimated_tokens: int, max_tokens: int):
        super().__init__(message)
        self.estimated_tokens = estimated_tokens
        self.max_tokens = max_tokens
        self.outcome = ReductionOutcome.UNRECOVERABLE


@dataclass(frozen=True)
class DiffRequest:
    """Arguments for one diff invocation, kept as discrete tokens."""

    args: tuple[str, ...]
    context_lines: int

    @classmethod
    def build(cls, context_lines: int, passthrough: list[str] | tuple[str, ...] = ()) -> "DiffRequest":
        """Build a request with a leading ``-U<N>`` flag."""
        return cls(args=(f"-U{context_lines}", *passthrough), context_lines=context_lines)


@dataclass
class DiffResult:
    output: str
    returncode: int = 0
    stderr: str = ""
    args: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def is_empty(self) -> bool:
        return len(self.output) == 0


@dataclass
class DiffCollection:
    """Final result of collecting a diff for review."""

    status: ReviewStatus
    diff: str
    request: DiffRequest
    outcome: ReductionOutcome = ReductionOutcome.NOT_NEEDED
    reduced_request: DiffRequest | None = None
    estimated_tokens: int = 0

    @property
    def has_changes(self) -> bool:
        return self.status == ReviewStatus.READY
