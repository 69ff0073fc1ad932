"""CLI commands for llm_code_review."""

import sys

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from llm_code_review import __logo__, __version__
from llm_code_review.config.loader import load_settings
from llm_code_review.prompts.review import DEFAULT_SYSTEM_PROMPT, REVIEW_EXAMPLES
from llm_code_review.review.base import (
    DiffInvocationError,
    DiffRequest,
    ReviewError,
)
from llm_code_review.review.collector import DiffCollector
from llm_code_review.review.invoker import DiffInvoker
from llm_code_review.review.prompt import OutputFormat, build_prompt, indent_prompt

# Keep example blocks unwrapped in --help
EPILOG = "\n\n".join(f"\b\n{block}" for block in REVIEW_EXAMPLES.split("\n\n"))

app = typer.Typer(
    name="llm-code-review",
    help=f"{__logo__} Ask an LLM to review code changes.",
    add_completion=False,
    rich_markup_mode=None,
)

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Send log records at *level* and above to stderr."""
    logger.remove()
    logger.add(sys.stderr, level=level)


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} llm-code-review v{__version__}")
        raise typer.Exit()


@app.command(
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
    epilog=EPILOG,
)
def review(
    git_args: list[str] | None = typer.Argument(
        None, metavar="[GIT_ARGS]...", help="Arguments passed through to 'git diff'"
    ),
    context: str | None = typer.Option(
        None, "--context", "-c", metavar="TEXT",
        help="Add additional context for the review, appended to the system prompt",
    ),
    system_prompt: str | None = typer.Option(
        None, "--system-prompt", "-s", metavar="TEXT", help="Override the default system prompt"
    ),
    show_system_prompt: bool = typer.Option(
        False, "--show-system-prompt", "-S", help="Print the current default system prompt and exit"
    ),
    output_format: OutputFormat | None = typer.Option(
        None, "--output-format", "-F", case_sensitive=False,
        help="Request review output be in a specific format",
    ),
    unified: int | None = typer.Option(
        None, "--unified", "-U", min=0, help="Number of lines given as context to the LLM [default: 3]"
    ),
    max_tokens: int | None = typer.Option(
        None, "--max-tokens", min=1, help="Approximate token budget for the diff"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    debug: bool = typer.Option(
        False, "--debug", "-D", help="Enable debug output (very verbose mode, implies --verbose)"
    ),
    force_reduced: bool = typer.Option(
        False, "--force-reduced", help="Force context to be reduced, for testing"
    ),
    strict_budget: bool = typer.Option(
        False, "--strict-budget", help="Fail if the reduced diff is still over budget"
    ),
    version: bool = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Ask an LLM to review code changes.

    Arguments are passed directly to 'git diff', so any git diff syntax or
    options can be used. The assembled prompt is printed to stdout.

    Options must come before revision arguments. A leading '--' is
    consumed, so put path filters after a revision (e.g. 'main -- src/').
    """
    try:
        settings = load_settings()
    except ValidationError as e:
        err_console.print(f"[red]Error: invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if debug:
        log_level = "TRACE"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = settings.log_level
    configure_logging(log_level)

    context_lines = settings.default_context_lines if unified is None else unified
    passthrough = git_args or []

    logger.trace(f"unified_context: {context_lines}")
    if passthrough:
        logger.trace(f"remaining_args: {passthrough}")
    if verbose:
        logger.info("Verbose mode enabled.")
    if debug:
        logger.trace("Debug mode enabled.")

    if show_system_prompt:
        typer.echo(f"Default System Prompt:\n\n{indent_prompt(DEFAULT_SYSTEM_PROMPT)}")
        raise typer.Exit()

    updates = {}
    if max_tokens is not None:
        updates["max_tokens"] = max_tokens
    if strict_budget:
        updates["verify_reduced"] = True
    policy = settings.budget.model_copy(update=updates)

    collector = DiffCollector(
        policy=policy,
        invoker=DiffInvoker(settings.diff_command),
        force_reduced=force_reduced,
    )
    request = DiffRequest.build(context_lines, passthrough)

    try:
        collection = collector.collect(request)
    except DiffInvocationError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if e.stderr:
            err_console.print(f"[red]Stderr: {escape(e.stderr)}[/red]")
        raise typer.Exit(1)
    except ReviewError as e:
        logger.debug(f"Original diff args: {list(request.args)}")
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not collection.has_changes:
        console.print("No changes found to review.")
        return

    typer.echo(
        build_prompt(
            collection.diff,
            system_prompt=system_prompt,
            output_format=output_format,
            context=context,
        )
    )
