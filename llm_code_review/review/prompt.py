"""Review prompt assembly."""

from enum import Enum

from llm_code_review.prompts.review import DEFAULT_SYSTEM_PROMPT


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    ASCIIDOC = "asciidoc"
    MEDIAWIKI = "mediawiki"

    @property
    def display_name(self) -> str:
        return {
            OutputFormat.MARKDOWN: "Markdown",
            OutputFormat.ASCIIDOC: "AsciiDoc",
            OutputFormat.MEDIAWIKI: "MediaWiki",
        }[self]


def build_prompt(
    diff: str,
    system_prompt: str | None = None,
    output_format: OutputFormat | None = None,
    context: str | None = None,
) -> str:
    """
    Build the full review prompt.

    Args:
        diff: Diff text to review.
        system_prompt: Replaces the default system prompt when given.
        output_format: Requested format of the review.
        context: Additional context appended after the instructions.

    Returns:
        Prompt text ready to paste into an LLM.
    """
    prompt = system_prompt or DEFAULT_SYSTEM_PROMPT

    if output_format:
        prompt += f"\nOutput the review in {output_format.display_name} format.\n"

    if context:
        prompt += f"\n## Additional Context\n{context}\n"

    return f"{prompt}\n\n# PR Code\n\n{diff}"


def indent_prompt(text: str, prefix: str = "  ") -> str:
    """Indent every line of *text*, blank lines included."""
    return "\n".join(prefix + line for line in text.split("\n"))
