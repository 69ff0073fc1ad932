"""Context-line reduction for oversized diffs."""

import re
from collections.abc import Sequence

from loguru import logger

from llm_code_review.review.base import DiffRequest

SHORT_CONTEXT_FLAG = re.compile(r"^-U[0-9]+$")
LONG_CONTEXT_FLAG = re.compile(r"^--unified=[0-9]+$")


def compute_reduced_context(
    current_context_lines: int, estimated_tokens: int, max_tokens: int
) -> int | None:
    """Scale the context window by how far the diff is over budget.

    Returns None when there is nothing to scale (zero estimated tokens).
    The result is never below one line.
    """
    if estimated_tokens <= 0:
        return None
    return max(1, current_context_lines * max_tokens // estimated_tokens)


def rewrite_context_args(args: Sequence[str], context_lines: int) -> tuple[str, ...]:
    """Replace every context-line flag in *args*, leaving other tokens as-is."""
    rewritten = []
    for arg in args:
        if SHORT_CONTEXT_FLAG.match(arg):
            rewritten.append(f"-U{context_lines}")
        elif LONG_CONTEXT_FLAG.match(arg):
            rewritten.append(f"--unified={context_lines}")
        else:
            rewritten.append(arg)
    return tuple(rewritten)


def minimum_context_tokens(current_context_lines: int, estimated_tokens: int) -> int:
    """Project the token count if the diff were shrunk to one context line."""
    if current_context_lines <= 1:
        return estimated_tokens
    return estimated_tokens // current_context_lines


def reduce_context(
    request: DiffRequest, estimated_tokens: int, max_tokens: int
) -> DiffRequest | None:
    """Build a new request with a reduced context-line count.

    The original request is left untouched. Returns None when no reduction
    is possible.
    """
    reduced = compute_reduced_context(request.context_lines, estimated_tokens, max_tokens)
    if reduced is None:
        return None

    logger.info(f"Reducing context to {reduced} lines to fit token limits")
    return DiffRequest(
        args=rewrite_context_args(request.args, reduced),
        context_lines=reduced,
    )
