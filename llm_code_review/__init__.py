"""llm_code_review - build LLM code review prompts from git diffs."""

__version__ = "1.0.0"
__logo__ = "🔍"
