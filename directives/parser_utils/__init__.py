"""Shared helper utilities for directive matching."""

from .text import collapse_whitespace, drop_empty_delimiters, first_group, strip_matches, token_pattern

__all__ = [
    "collapse_whitespace",
    "drop_empty_delimiters",
    "first_group",
    "strip_matches",
    "token_pattern",
]
