"""Approximate token estimation for diff budgeting."""

CHARS_PER_TOKEN = 4  # Simple approximation, no tokenizer
MAX_TOKENS = 50_000  # Half of a 100k model limit, leaves headroom


def estimate_tokens(text: str, chars_per_token: int = CHARS_PER_TOKEN) -> int:
    """Estimate token count from character count."""
    return len(text) // chars_per_token


def is_over_budget(token_count: int, max_tokens: int = MAX_TOKENS) -> bool:
    return token_count > max_tokens
