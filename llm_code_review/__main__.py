"""Entry point for running llm_code_review as a module."""

from llm_code_review.cli.commands import app

if __name__ == "__main__":
    app()
