"""Paired-delimiter directives: ``(search)``, ``[identifier]`` and ``{arg; list}``.

Each delimiter class refuses to contain the characters of the other classes, so
one matcher can never consume a span that belongs to another.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Pattern, TypeVar

from directives.parser_utils import collapse_whitespace, first_group, strip_matches
from directives.types import MatchResult, SyntaxType

T = TypeVar("T")

_BODY = r"(?P<body>[^\[\]\(\)\{\}]*[^\s\[\]\(\)\{\}])"

SEARCH_PATTERN = re.compile(rf"\(\s*{_BODY}\s*\)")
IDENTIFIER_PATTERN = re.compile(rf"\[\s*{_BODY}\s*\]")
ARG_PATTERN = re.compile(rf"\{{\s*{_BODY}\s*\}}")

_ARG_SEPARATOR = re.compile(r"\s*;\s*")


def _extract(
    pattern: Pattern[str],
    text: str,
    convert: Callable[[str], Optional[T]],
) -> MatchResult[T]:
    if not text:
        return MatchResult.miss(text)
    matches, remainder = strip_matches(pattern, text)
    if not matches:
        return MatchResult.miss(text)
    payload = convert(first_group(matches[0], "body") or "")
    if payload is None:
        return MatchResult.miss(text)
    return MatchResult(matched=True, remainder=remainder, payload=payload, position=matches[0].start())


def _unwrap(value: str, opener: str, closer: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == opener and value[-1] == closer:
        value = value[1:-1]
    return collapse_whitespace(value)


def _split_args(body: str) -> Optional[List[str]]:
    items = [collapse_whitespace(item) for item in _ARG_SEPARATOR.split(body.strip())]
    items = [item for item in items if item]
    return items or None


def _text_or_none(body: str) -> Optional[str]:
    body = collapse_whitespace(body)
    return body or None


def match_search(text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[str]:
    """Parenthesized query in KEYWORD syntax; the whole value in SLASH syntax.

    TRADITIONAL syntax has no search delimiter: the query is the residual text.
    """
    if syntax == SyntaxType.TRADITIONAL:
        return MatchResult.miss(text)
    if syntax == SyntaxType.SLASH:
        value = _text_or_none(_unwrap(text or "", "(", ")"))
        if value is None:
            return MatchResult.miss(text)
        return MatchResult(matched=True, remainder="", payload=value, position=0)
    return _extract(SEARCH_PATTERN, text, _text_or_none)


def match_identifier(text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[str]:
    if syntax == SyntaxType.SLASH:
        value = _text_or_none(_unwrap(text or "", "[", "]"))
        if value is None:
            return MatchResult.miss(text)
        return MatchResult(matched=True, remainder="", payload=value, position=0)
    return _extract(IDENTIFIER_PATTERN, text, _text_or_none)


def match_arg(text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[List[str]]:
    """Brace-delimited, ``;``-separated argument list."""

    if syntax == SyntaxType.SLASH:
        items = _split_args(_unwrap(text or "", "{", "}"))
        if items is None:
            return MatchResult.miss(text)
        return MatchResult(matched=True, remainder="", payload=items, position=0)
    return _extract(ARG_PATTERN, text, _split_args)


__all__ = [
    "ARG_PATTERN",
    "IDENTIFIER_PATTERN",
    "SEARCH_PATTERN",
    "match_arg",
    "match_identifier",
    "match_search",
]
