"""TOP/BOTTOM range extraction."""

from __future__ import annotations

import re
from typing import Callable, Optional, Pattern

from directives.parser_utils import strip_matches
from directives.types import MatchResult, RangeArgument, SyntaxType

_RANGE_BODY = r"(?P<start>[0-9]+)(?::(?P<stop>-?[0-9]+))?"

RangeMatcher = Callable[[str, SyntaxType], MatchResult[RangeArgument]]


def _inline_pattern(token: str, flag_prefix: bool) -> Pattern[str]:
    lead = rf"(?<!\S)-{token}" if flag_prefix else rf"(?:(?<!\S)-)?\b{token}"
    # A trailing ':' means a half-written range such as "top 4:" -> no match.
    return re.compile(rf"{lead}\s+{_RANGE_BODY}\b(?!:)", re.IGNORECASE)


def _to_range(match: re.Match[str]) -> RangeArgument:
    stop: Optional[int] = None
    if match.group("stop") is not None:
        stop = int(match.group("stop"))
    return RangeArgument(start=int(match.group("start")), stop=stop)


def range_matcher(token: str) -> RangeMatcher:
    """Build a matcher for ``<token> N`` / ``<token> N:M`` range directives."""

    keyword_pattern = _inline_pattern(token, flag_prefix=False)
    traditional_pattern = _inline_pattern(token, flag_prefix=True)
    slash_pattern = re.compile(rf"\s*(?:-?{token}\s+)?{_RANGE_BODY}\s*", re.IGNORECASE)

    def match(text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[RangeArgument]:
        if not text:
            return MatchResult.miss(text)
        if syntax == SyntaxType.SLASH:
            found = slash_pattern.fullmatch(text)
            if not found:
                return MatchResult.miss(text)
            return MatchResult(matched=True, remainder="", payload=_to_range(found), position=0)

        pattern = traditional_pattern if syntax == SyntaxType.TRADITIONAL else keyword_pattern
        matches, remainder = strip_matches(pattern, text)
        if not matches:
            return MatchResult.miss(text)
        return MatchResult(matched=True, remainder=remainder, payload=_to_range(matches[0]), position=matches[0].start())

    return match


__all__ = ["RangeMatcher", "range_matcher"]
