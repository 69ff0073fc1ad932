"""Runs the diff command and captures its output."""

import subprocess
from collections.abc import Sequence

from loguru import logger

from llm_code_review.review.base import DiffInvocationError, DiffResult

DEFAULT_DIFF_COMMAND = ("git", "diff")


class DiffInvoker:
    """Invokes ``git diff`` (or a configured equivalent) synchronously."""

    def __init__(self, command: Sequence[str] = DEFAULT_DIFF_COMMAND):
        self.command = tuple(command)

    def invoke(self, args: Sequence[str]) -> DiffResult:
        """Run the diff command with *args* and return its decoded output.

        Tokens reach the command exactly as given, never joined or re-split.

        Raises:
            DiffInvocationError: If the command cannot be started or exits nonzero.
        """
        argv = [*self.command, *args]
        logger.debug(f"Running command: {argv}")

        try:
            proc = subprocess.run(argv, capture_output=True)
        except OSError as e:
            raise DiffInvocationError(
                f"Could not run {' '.join(self.command)}: {e}", stderr=str(e)
            ) from e

        result = DiffResult(
            output=proc.stdout.decode("utf-8", errors="replace"),
            returncode=proc.returncode,
            stderr=proc.stderr.decode("utf-8", errors="replace"),
            args=tuple(argv[len(self.command):]),
        )

        if not result.ok:
            raise DiffInvocationError(
                "Git diff command failed. Check your arguments.",
                stderr=result.stderr.strip(),
                returncode=result.returncode,
            )

        logger.trace(f"Diff output: {len(result.output)} chars")
        return result
