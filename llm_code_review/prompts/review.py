"""Default review prompt and CLI usage examples."""

DEFAULT_SYSTEM_PROMPT = """Please review this PR as if you were a senior engineer.

## Focus Areas
- Architecture and design decisions
- Potential bugs and edge cases
- Performance considerations
- Security implications
- Code maintainability and best practices
- Test coverage

## Review Format
- Start with a brief summary of the PR purpose and changes
- List strengths of the implementation
- Identify issues and improvement opportunities (ordered by priority)
- Provide specific code examples for suggested changes where applicable

Please be specific, constructive, and actionable in your feedback. Output the review in markdown format."""

REVIEW_EXAMPLES = """Review Examples:

    Review unstaged changes
        llm-code-review

    Review with additional context
        llm-code-review --context "Focus your review on possible authentication bypasses"

    Review with context from a file
        llm-code-review --context "$(cat PR_DESCRIPTION.md)"

    Set system prompt to be something other than the default
        llm-code-review --system-prompt "$(cat .github/copilot-instructions.md)"
        llm-code-review --system-prompt "Review this code. Talk like a pirate."

    Review staged changes
        llm-code-review --cached

    Review changes between HEAD and main
        llm-code-review main

    Review changes between two branches
        llm-code-review main feature-branch
            OR
        llm-code-review main..feature-branch

    Review only changes since branch diverged from main
        llm-code-review main...feature-branch

    Review a remote branch
        llm-code-review origin/main..origin/feature-branch

    Limit review to specific files
        llm-code-review main -- src/components/

    Adjust context lines
        llm-code-review -U5 main

Dot Notation:
  - Two dots (A..B): Direct comparison between A and B
  - Three dots (A...B): Compare common ancestor of A and B with B"""
