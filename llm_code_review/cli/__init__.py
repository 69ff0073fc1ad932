"""CLI for llm_code_review."""
