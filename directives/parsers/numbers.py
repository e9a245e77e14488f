"""Standalone integer tokens."""

from __future__ import annotations

import re
from typing import List

from directives.parser_utils import strip_matches
from directives.types import MatchResult, SyntaxType

NUMBER_PATTERN = re.compile(r"(?<!\S)-?[0-9]+(?!\S)")


def match_number(text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[List[int]]:
    """Collect every whitespace-delimited integer, in order of appearance."""

    if not text:
        return MatchResult.miss(text)
    matches, remainder = strip_matches(NUMBER_PATTERN, text)
    if not matches:
        return MatchResult.miss(text)
    values = [int(match.group(0)) for match in matches]
    if syntax == SyntaxType.SLASH:
        remainder = ""
    return MatchResult(matched=True, remainder=remainder, payload=values, position=matches[0].start())


__all__ = ["NUMBER_PATTERN", "match_number"]
