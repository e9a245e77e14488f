"""Lexical token matching for boolean keywords."""

from __future__ import annotations

from functools import lru_cache
from typing import Pattern, Tuple

from directives.parser_utils import strip_matches, token_pattern
from directives.types import MatchResult, SyntaxType


@lru_cache(maxsize=None)
def _compiled(aliases: Tuple[str, ...], flag_prefix: bool) -> Pattern[str]:
    return token_pattern(list(aliases), flag_prefix=flag_prefix)


def match_keyword(aliases: Tuple[str, ...], text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[bool]:
    """Detect any alias in ``text`` and strip every occurrence of it.

    TRADITIONAL syntax expects dash flags (``-shuffle``); the other syntaxes
    match the bare word.
    """
    if not text or not aliases:
        return MatchResult.miss(text)
    pattern = _compiled(aliases, syntax == SyntaxType.TRADITIONAL)
    matches, remainder = strip_matches(pattern, text)
    if not matches:
        return MatchResult.miss(text)
    return MatchResult(matched=True, remainder=remainder, payload=True, position=matches[0].start())


__all__ = ["match_keyword"]
